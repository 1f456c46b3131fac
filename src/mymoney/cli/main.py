"""Main CLI entry point."""

import logging

import click

from mymoney.api.endpoints import DEFAULT_BASE_URL, DEFAULT_UPLOAD_PRESET, DEFAULT_UPLOAD_URL
from mymoney.api.http_client import DEFAULT_TIMEOUT
from mymoney.domain.errors import login_required
from mymoney.factories import create_app

# Import and register all commands at module level
from mymoney.cli.commands import auth, category, transaction, dashboard


def prompt_login() -> None:
    """Tell the user the session is gone and how to start a new one."""
    click.echo(f"Error: {login_required()}", err=True)


@click.group()
@click.option(
    "--api-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    envvar="MYMONEY_API_URL",
    help="API root URL (overrides MYMONEY_API_URL environment variable)",
)
@click.option(
    "--store-path",
    type=click.Path(dir_okay=False),
    envvar="MYMONEY_STORE_PATH",
    help="Path to the local credential store (overrides MYMONEY_STORE_PATH)",
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    envvar="MYMONEY_TIMEOUT",
    help="Request timeout in seconds",
)
@click.option("--upload-url", default=DEFAULT_UPLOAD_URL, envvar="MYMONEY_UPLOAD_URL", help="Image upload endpoint")
@click.option("--upload-preset", default=DEFAULT_UPLOAD_PRESET, envvar="MYMONEY_UPLOAD_PRESET", help="Image upload preset")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and session changes")
@click.pass_context
def cli(
    ctx,
    api_url: str,
    store_path: str | None,
    timeout: float,
    upload_url: str,
    upload_preset: str,
    verbose: bool,
):
    """MyMoney - Personal income and expense tracker.

    Record incomes and expenses, organise them in categories and review
    totals and trends, backed by the MyMoney API.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Build the client only when actually running a command (not for --help).
    # A prebuilt app may be handed in through the context object.
    if ctx.invoked_subcommand is not None:
        app = ctx.obj.get("app")
        if app is None:
            app = create_app(
                api_url=api_url,
                store_path=store_path,
                timeout=timeout,
                upload_url=upload_url,
                upload_preset=upload_preset,
            )
            ctx.call_on_close(app.close)
            ctx.obj["app"] = app
        if app.session.on_login_required is None:
            app.session.on_login_required = prompt_login


# Register all commands
auth.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
