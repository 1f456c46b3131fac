"""CLI error handling helpers."""

import asyncio
from typing import Any, Coroutine, TypeVar

import click

from mymoney.domain.entities import Profile
from mymoney.domain.errors import ApiError, DomainError

T = TypeVar("T")


def handle_error(ctx: click.Context, error: DomainError | ApiError) -> None:
    """Render a domain or API error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def run_or_exit(ctx: click.Context, coro: Coroutine[Any, Any, T]) -> T:
    """Run a service coroutine, turning its errors into CLI failures."""
    try:
        return asyncio.run(coro)
    except (DomainError, ApiError) as e:
        handle_error(ctx, e)


def require_profile(ctx: click.Context) -> Profile:
    """Establish the session before a command that needs one.

    The session controller has already printed the login prompt when this
    exits.
    """
    app = ctx.obj["app"]
    profile = run_or_exit(ctx, app.session.ensure_session())
    if profile is None:
        ctx.exit(1)
    return profile
