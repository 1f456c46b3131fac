"""Dashboard command."""

import click

from mymoney.cli.error_handling import require_profile, run_or_exit
from mymoney.domain.aggregation import totals_by_category
from mymoney.domain.formatting import format_amount, format_signed_amount, format_timestamp_label


def print_category_totals(title: str, totals) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 60)
    click.echo(f"{'Category':<30} {'Count':>8} {'Total':>20}")
    click.echo("-" * 60)
    for total in totals:
        click.echo(f"{total.category_name:<30} {total.count:>8} {format_amount(total.total):>20}")


@click.command("dashboard")
@click.option("--by-category", is_flag=True, help="Also break totals down by category")
@click.pass_context
def dashboard(ctx, by_category: bool):
    """Show balance, totals and the latest transactions."""
    require_profile(ctx)
    app = ctx.obj["app"]
    overview = run_or_exit(ctx, app.dashboard.build_overview())
    summary = overview.summary

    click.echo("\nDashboard")
    click.echo("-" * 60)
    click.echo(f"{'Total Balance':<40} {format_amount(summary.total_balance):>19}")
    click.echo(f"{'Total Income':<40} {format_amount(summary.total_income):>19}")
    click.echo(f"{'Total Expense':<40} {format_amount(summary.total_expense):>19}")

    click.echo("\nRecent Transactions")
    click.echo("-" * 60)
    if not overview.recent_transactions:
        click.echo("No transactions yet.")
    for txn in overview.recent_transactions:
        when = format_timestamp_label(txn.date, txn.updated_at)
        amount_str = format_signed_amount(txn.amount, txn.type)
        click.echo(f"{txn.name[:20]:<20} {when:<26} {amount_str:>12}")

    if by_category:
        # build_overview has just refreshed both collections
        print_category_totals("Income by Category", totals_by_category(app.incomes.transactions))
        print_category_totals("Expense by Category", totals_by_category(app.expenses.transactions))


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
