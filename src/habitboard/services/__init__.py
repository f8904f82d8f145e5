"""Service layer: the streak/badge engine plus the workflows around it."""

from . import auth, badges, habits, streaks, tracking

__all__ = ["auth", "badges", "habits", "streaks", "tracking"]
