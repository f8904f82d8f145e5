"""Blueprint exports."""

from . import auth, habits, tracking

__all__ = ["auth", "habits", "tracking"]
