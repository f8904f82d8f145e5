"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import date, datetime, timezone
from functools import wraps
from typing import Any, Callable

from flask import current_app, g, jsonify, session

SESSION_USER_KEY = "user_id"


def utc_today() -> date:
    """Default provider for "today": the current UTC calendar day."""

    return datetime.now(timezone.utc).date()


def today() -> date:
    """Resolve "today" through the app's configurable provider."""

    provider: Callable[[], date] = current_app.config.get("TODAY_PROVIDER", utc_today)
    return provider()


def json_error(message: str, status: int, *, errors: list[dict] | None = None):
    payload: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        payload["errors"] = errors
    return jsonify(payload), status


def login_user(user_id: int) -> None:
    session.clear()
    session[SESSION_USER_KEY] = user_id


def logout_user() -> None:
    session.clear()


def current_user_id() -> int:
    """User id of the authenticated request; only valid inside ``login_required`` views."""

    return g.user_id


def login_required(view):
    """Reject requests without a logged-in session with 401."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        user_id = session.get(SESSION_USER_KEY)
        if user_id is None:
            return json_error("Not authorized, please log in", 401)
        g.user_id = int(user_id)
        return view(*args, **kwargs)

    return wrapped
