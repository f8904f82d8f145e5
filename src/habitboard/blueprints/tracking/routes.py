"""Daily logging plus streak, badge and stats endpoints."""

from __future__ import annotations

from datetime import timedelta

from flask import current_app, jsonify, request
from pydantic import ValidationError

from ...extensions import get_habit_repository
from ...services import tracking
from ...services.badges import badge_progress, badges_for_habits, next_badges_for_habits
from ...services.errors import HabitNotFoundError
from ...web import current_user_id, json_error, login_required, today
from ..forms import validation_failed
from . import bp
from .forms import LogForm, LogRangeQuery

DEFAULT_LOG_RANGE_DAYS = 30


@bp.post("/log")
@login_required
def log_completion():
    """Create or overwrite the completion flag for a habit on a day."""

    try:
        form = LogForm.from_payload(request.get_json(silent=True))
    except ValidationError as exc:
        return validation_failed(exc)

    try:
        log, created = tracking.record_completion(
            get_habit_repository(),
            user_id=current_user_id(),
            habit_id=form.habit_id,
            day=form.day,
            completed=form.completed,
        )
    except HabitNotFoundError as exc:
        return json_error(str(exc), 404)

    message = "Log created successfully" if created else "Log updated successfully"
    return jsonify({"success": True, "log": log.to_dict(), "message": message}), (
        201 if created else 200
    )


@bp.get("/logs")
@login_required
def list_logs():
    """Logs in [startDate, endDate]; defaults to the last 30 days."""

    try:
        query = LogRangeQuery.from_payload(request.args.to_dict())
    except ValidationError as exc:
        return validation_failed(exc)

    end = query.end or today()
    if query.end is None and query.start and query.start > end:
        # Open-ended range starting after today covers just that day.
        end = query.start
    start = query.start or end - timedelta(days=DEFAULT_LOG_RANGE_DAYS)
    if start > end:
        return json_error("startDate must not be after endDate", 400)

    logs = get_habit_repository().logs_between(start, end, user_id=current_user_id())
    return jsonify(
        {
            "success": True,
            "count": len(logs),
            "logs": [log.to_dict() for log in logs],
        }
    )


@bp.get("/streaks")
@login_required
def streaks():
    results = tracking.streaks_for_user(
        get_habit_repository(), user_id=current_user_id(), today=today()
    )
    return jsonify(
        {
            "success": True,
            "streaks": {str(habit_id): result.current for habit_id, result in results.items()},
            "longestStreaks": {
                str(habit_id): result.longest for habit_id, result in results.items()
            },
        }
    )


@bp.get("/badges")
@login_required
def badges():
    """Earned badges, next badge and progress for every habit."""

    results = tracking.streaks_for_user(
        get_habit_repository(), user_id=current_user_id(), today=today()
    )
    earned = badges_for_habits(results)
    upcoming = next_badges_for_habits(results)
    return jsonify(
        {
            "success": True,
            "badges": {
                str(habit_id): [badge.to_dict() for badge in milestones]
                for habit_id, milestones in earned.items()
            },
            "nextBadges": {
                str(habit_id): next_up.to_dict() if next_up else None
                for habit_id, next_up in upcoming.items()
            },
            "progress": {
                str(habit_id): badge_progress(result) for habit_id, result in results.items()
            },
        }
    )


@bp.get("/progress")
@login_required
def habit_progress():
    """Per-habit dashboard cards."""

    progress = tracking.progress_for_user(
        get_habit_repository(), user_id=current_user_id(), today=today()
    )
    return jsonify({"success": True, "habits": [item.to_dict() for item in progress]})


@bp.get("/stats")
@login_required
def stats():
    summary = tracking.completion_stats(
        get_habit_repository(),
        user_id=current_user_id(),
        today=today(),
        window_days=current_app.config["STATS_WINDOW_DAYS"],
    )
    return jsonify({"success": True, "stats": summary.to_dict()})
