"""Habit form definitions."""

from __future__ import annotations

from pydantic import Field

from ..forms import FormModel


class HabitForm(FormModel):
    """Payload for creating a habit."""

    name: str = Field(min_length=1, max_length=100, description="Short label for the habit")
    icon: str = Field(min_length=1, max_length=10, description="Emoji or icon identifier")


__all__ = ["HabitForm"]
