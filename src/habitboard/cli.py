"""Flask CLI commands for HabitBoard."""

from __future__ import annotations

from datetime import date

import click

from .services.streaks import to_day


def _parse_today(ctx, param, value: str | None) -> date | None:
    if value is None:
        return None
    day = to_day(value)
    if day is None:
        raise click.BadParameter("expected YYYY-MM-DD")
    return day


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitboard-init-db")
    def habitboard_init_db() -> None:
        """Create any missing database tables."""

        from .extensions import get_engine
        from .infra.database import init_database

        init_database(get_engine())
        click.echo("Database schema is up to date.")

    @app.cli.command("habitboard-streaks")
    @click.option("--email", required=True, help="Account whose habits to report")
    @click.option("--today", callback=_parse_today, default=None, help="Reference day (YYYY-MM-DD)")
    def habitboard_streaks(email: str, today: date | None) -> None:
        """Print streaks, badges and the next milestone for each habit."""

        from .extensions import get_habit_repository, get_session_factory
        from .services.auth import get_user_by_email
        from .services.tracking import progress_for_user
        from .web import utc_today

        user = get_user_by_email(email, get_session_factory())
        if user is None:
            raise click.ClickException(f"No user with email {email}")

        reference = today or utc_today()
        progress = progress_for_user(get_habit_repository(), user_id=user.id, today=reference)
        if not progress:
            click.echo("No habits yet.")
            return

        for item in progress:
            badges = ", ".join(badge.name for badge in item.badges) or "none"
            if item.next_badge:
                upcoming = (
                    f"{item.next_badge.milestone.name} in {item.next_badge.days_remaining}d "
                    f"({item.progress}%)"
                )
            else:
                upcoming = "all earned"
            click.echo(
                f"{item.icon} {item.name}: current {item.streak.current}, "
                f"longest {item.streak.longest} | badges: {badges} | next: {upcoming}"
            )
