"""Income and expense commands."""

import click

from mymoney.cli.date_filters import resolve_cli_date_range
from mymoney.cli.error_handling import handle_error, require_profile, run_or_exit
from mymoney.domain.entities import TransactionType
from mymoney.domain.errors import DomainError
from mymoney.domain.formatting import (
    format_amount,
    format_date_label,
    format_signed_amount,
    format_timestamp_label,
)
from mymoney.domain.transaction import SORT_FIELDS
from mymoney.utils.category_resolver import resolve_category
from mymoney.utils.date_parser import PERIODS


def print_transactions(transactions, transaction_type: TransactionType) -> None:
    """Print transactions as a table."""
    click.echo("-" * 100)
    click.echo(f"{'ID':<8} {'When':<30} {'Amount':>16}  {'Category':<20} {'Name':<22}")
    click.echo("-" * 100)
    for txn in transactions:
        when = format_timestamp_label(txn.date, txn.updated_at)
        amount_str = format_signed_amount(txn.amount, transaction_type)
        category_name = txn.category_name or ""
        click.echo(
            f"{str(txn.id):<8} {when:<30} {amount_str:>16}  {category_name[:20]:<20} "
            f"{txn.name[:22]:<22}"
        )


def _service(ctx, transaction_type: TransactionType):
    return ctx.obj["app"].transactions(transaction_type)


def build_transaction_group(transaction_type: TransactionType) -> click.Group:
    """Build the command group for one transaction collection."""
    kind = transaction_type.value
    label = transaction_type.label

    @click.group(help=f"Manage {kind}s.")
    def group():
        pass

    @group.command("list")
    @click.pass_context
    def list_transactions(ctx):
        """List all entries, newest first as the server returns them."""
        require_profile(ctx)
        transactions = run_or_exit(ctx, _service(ctx, transaction_type).list_transactions())

        if not transactions:
            click.echo(f"No {kind}s found. Use '{kind} add' to record one.")
            return

        click.echo(f"\nFound {len(transactions)} {kind}(s):")
        print_transactions(transactions, transaction_type)

    @group.command("add")
    @click.option("--name", required=True, help=f"{label} name, e.g. 'Salary'")
    @click.option("--amount", required=True, help="Amount (e.g., 1500000 or 1,500,000)")
    @click.option(
        "--date",
        "txn_date",
        default="today",
        show_default=True,
        help="Date (YYYY-MM-DD or relative like 'today', 'yesterday')",
    )
    @click.option("--category", required=True, help="Category name or ID")
    @click.option("--icon", help="Icon URL or emoji")
    @click.pass_context
    def add_transaction(ctx, name: str, amount: str, txn_date: str, category: str, icon: str | None):
        """Record a new entry.

        Examples:
            mymoney income add --name Salary --amount 15000000 --category Salary
            mymoney expense add --name Lunch --amount 45,000 --category Food --date yesterday
        """
        require_profile(ctx)
        app = ctx.obj["app"]
        service = _service(ctx, transaction_type)

        categories = run_or_exit(ctx, app.categories.list_categories_by_type(transaction_type))
        try:
            category_id = resolve_category(categories, category)
        except DomainError as e:
            handle_error(ctx, e)

        created = run_or_exit(
            ctx, service.add_transaction(name, amount, txn_date, category_id, icon=icon)
        )
        click.echo(
            f"Added {kind} '{created.name}' "
            f"{format_signed_amount(created.amount, transaction_type)} (ID: {created.id})"
        )

    @group.command("delete")
    @click.argument("transaction_id")
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete_transaction(ctx, transaction_id: str, yes: bool):
        """Delete an entry by ID."""
        require_profile(ctx)
        if not yes and not click.confirm(f"Are you sure you want to delete {kind} {transaction_id}?"):
            click.echo("Cancelled.")
            return

        run_or_exit(ctx, _service(ctx, transaction_type).delete_transaction(transaction_id))
        click.echo(f"{label} deleted successfully")

    @group.command("overview")
    @click.pass_context
    def overview(ctx):
        """Show totals per day."""
        require_profile(ctx)
        series = run_or_exit(ctx, _service(ctx, transaction_type).overview())

        if not len(series):
            click.echo(f"No {kind}s to summarize.")
            return

        click.echo(f"\n{label} overview:")
        click.echo("-" * 40)
        click.echo(f"{'Date':<20} {'Total':>19}")
        click.echo("-" * 40)
        for day_label, total in zip(series.labels, series.sums):
            click.echo(f"{day_label:<20} {format_amount(total):>19}")
        click.echo("-" * 40)
        click.echo(f"{'TOTAL':<20} {format_amount(sum(series.sums)):>19}")

    @group.command("filter")
    @click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
    @click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
    @click.option("--period", type=click.Choice(PERIODS), help="Named period instead of explicit dates")
    @click.option("--keyword", default="", help="Only entries whose name contains this text")
    @click.option(
        "--sort-field", type=click.Choice(SORT_FIELDS), default="date", show_default=True
    )
    @click.option(
        "--sort-order", type=click.Choice(["asc", "desc"]), default="asc", show_default=True
    )
    @click.pass_context
    def filter_transactions(
        ctx,
        start_date: str | None,
        end_date: str | None,
        period: str | None,
        keyword: str,
        sort_field: str,
        sort_order: str,
    ):
        """Search entries by date range and keyword.

        Examples:
            mymoney expense filter --period this-month --sort-field amount --sort-order desc
            mymoney income filter --start-date 2024-01-01 --keyword bonus
        """
        start, end = resolve_cli_date_range(
            ctx, start_date=start_date, end_date=end_date, period=period
        )
        require_profile(ctx)

        transactions = run_or_exit(
            ctx,
            _service(ctx, transaction_type).filter_transactions(
                start_date=start,
                end_date=end,
                keyword=keyword,
                sort_field=sort_field,
                sort_order=sort_order,
            ),
        )

        if not transactions:
            click.echo(f"No {kind}s match the filter.")
            return

        if start or end:
            range_label = (
                f"{format_date_label(start) if start else '...'} to "
                f"{format_date_label(end) if end else '...'}"
            )
            click.echo(f"\n{label}s from {range_label}:")
        print_transactions(transactions, transaction_type)

    @group.command("download")
    @click.option(
        "--output",
        type=click.Path(),
        help="File or directory to write the spreadsheet to (default: current directory)",
    )
    @click.pass_context
    def download(ctx, output: str | None):
        """Download all entries as an Excel spreadsheet."""
        require_profile(ctx)
        target = run_or_exit(ctx, _service(ctx, transaction_type).download_export(output))
        click.echo(f"Saved {kind} details to {target}")

    @group.command("email")
    @click.pass_context
    def email(ctx):
        """Email the Excel spreadsheet to the logged-in user."""
        profile = require_profile(ctx)
        run_or_exit(ctx, _service(ctx, transaction_type).email_export())
        click.echo(f"{label} details emailed to {profile.email}")

    return group


def register_commands(cli):
    """Register income and expense commands with main CLI."""
    for transaction_type in TransactionType:
        cli.add_command(build_transaction_group(transaction_type), name=transaction_type.value)
