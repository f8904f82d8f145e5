"""Registration, login and session routes."""

from __future__ import annotations

from flask import jsonify, request
from pydantic import ValidationError

from ...extensions import get_habit_repository, get_session_factory
from ...services import auth as auth_service
from ...services.errors import DuplicateUserError
from ...services.habits import seed_default_habits
from ...web import current_user_id, json_error, login_required, login_user, logout_user
from ..forms import validation_failed
from . import bp
from .forms import LoginForm, RegisterForm


@bp.post("/register")
def register():
    """Create an account with the starter habits and log it in."""

    try:
        form = RegisterForm.from_payload(request.get_json(silent=True))
    except ValidationError as exc:
        return validation_failed(exc)

    try:
        user = auth_service.create_user(
            name=form.name,
            email=form.email,
            password=form.password,
            session_factory=get_session_factory(),
        )
    except DuplicateUserError as exc:
        return json_error(str(exc), 400)

    seed_default_habits(get_habit_repository(), user_id=user.id)
    login_user(user.id)
    return jsonify({"success": True, "user": user.to_public_dict()}), 201


@bp.post("/login")
def login():
    try:
        form = LoginForm.from_payload(request.get_json(silent=True))
    except ValidationError as exc:
        return validation_failed(exc)

    user = auth_service.authenticate(
        email=form.email,
        password=form.password,
        session_factory=get_session_factory(),
    )
    if user is None:
        return json_error("Invalid email or password", 401)

    login_user(user.id)
    return jsonify({"success": True, "user": user.to_public_dict()})


@bp.post("/logout")
def logout():
    logout_user()
    return jsonify({"success": True, "message": "Logged out successfully"})


@bp.get("/me")
@login_required
def me():
    """Return the profile of the logged-in user."""

    user = auth_service.get_user(current_user_id(), get_session_factory())
    if user is None:
        logout_user()
        return json_error("User not found", 404)
    return jsonify({"success": True, "user": user.to_public_dict()})
