"""Account and session commands."""

import click

from mymoney.cli.error_handling import require_profile, run_or_exit


@click.command("status")
@click.pass_context
def status(ctx):
    """Check that the API is reachable."""
    app = ctx.obj["app"]
    message = run_or_exit(ctx, app.auth.status())
    click.echo(message or "API is up")


@click.command("activate")
@click.argument("token")
@click.pass_context
def activate(ctx, token: str):
    """Activate a new account with the token from the activation email."""
    app = ctx.obj["app"]
    click.echo(run_or_exit(ctx, app.auth.activate(token)))


@click.command("register")
@click.option("--full-name", prompt="Full name", help="Your full name")
@click.option("--email", prompt="Email address", help="Email address used to log in")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Account password",
)
@click.option(
    "--profile-image",
    type=click.Path(exists=True, dir_okay=False),
    help="Image file to upload as profile picture",
)
@click.pass_context
def register(ctx, full_name: str, email: str, password: str, profile_image: str | None):
    """Create an account.

    Examples:
        mymoney register --full-name "Jane Doe" --email jane@example.com
        mymoney register --full-name "Jane Doe" --email jane@example.com --profile-image me.png
    """
    app = ctx.obj["app"]
    profile = run_or_exit(
        ctx, app.auth.register(full_name, email, password, profile_image=profile_image)
    )
    click.echo(f"Account created for {profile.email}.")
    click.echo("Check your email to activate it, then run 'mymoney login'.")


@click.command("login")
@click.option("--email", prompt="Email address", help="Email address")
@click.option("--password", prompt=True, hide_input=True, help="Password")
@click.pass_context
def login(ctx, email: str, password: str):
    """Log in and remember the session."""
    app = ctx.obj["app"]
    profile = run_or_exit(ctx, app.auth.login(email, password))
    click.echo(f"Login successful! Welcome back, {profile.full_name or profile.email}.")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Forget the stored session."""
    app = ctx.obj["app"]
    app.session.logout()
    click.echo("Logged out.")


@click.command("profile")
@click.pass_context
def profile(ctx):
    """Show the logged-in user's profile."""
    user = require_profile(ctx)
    click.echo(f"Name:  {user.full_name}")
    click.echo(f"Email: {user.email}")
    if user.profile_image_url:
        click.echo(f"Image: {user.profile_image_url}")


def register_commands(cli):
    """Register account commands with main CLI."""
    for command in (status, activate, register, login, logout, profile):
        cli.add_command(command)
