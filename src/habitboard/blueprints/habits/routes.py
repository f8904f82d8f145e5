"""Habit CRUD routes."""

from __future__ import annotations

from flask import jsonify, request
from pydantic import ValidationError

from ...extensions import get_habit_repository
from ...services import habits as habit_service
from ...services.errors import DuplicateHabitError, HabitNotFoundError
from ...web import current_user_id, json_error, login_required
from ..forms import validation_failed
from . import bp
from .forms import HabitForm


@bp.get("/")
@login_required
def list_habits():
    """All habits of the current user, oldest first."""

    habits = get_habit_repository().list_for_user(user_id=current_user_id())
    return jsonify(
        {
            "success": True,
            "count": len(habits),
            "habits": [habit.to_dict() for habit in habits],
        }
    )


@bp.post("/")
@login_required
def create_habit():
    try:
        form = HabitForm.from_payload(request.get_json(silent=True))
    except ValidationError as exc:
        return validation_failed(exc)

    try:
        habit = habit_service.create_habit(
            get_habit_repository(),
            user_id=current_user_id(),
            name=form.name,
            icon=form.icon,
        )
    except DuplicateHabitError as exc:
        return json_error(str(exc), 400)

    return jsonify({"success": True, "habit": habit.to_dict()}), 201


@bp.delete("/<int:habit_id>")
@login_required
def delete_habit(habit_id: int):
    """Delete a habit and all of its logs."""

    try:
        habit_service.delete_habit(
            get_habit_repository(), user_id=current_user_id(), habit_id=habit_id
        )
    except HabitNotFoundError as exc:
        return json_error(str(exc), 404)

    return jsonify(
        {"success": True, "message": "Habit and all associated logs deleted successfully"}
    )
