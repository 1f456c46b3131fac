"""Category management commands."""

import click

from mymoney.cli.error_handling import require_profile, run_or_exit

TYPE_CHOICE = click.Choice(["income", "expense"], case_sensitive=False)


def print_categories(categories) -> None:
    """Print categories as a table."""
    click.echo(f"{'ID':<8} {'Name':<30} {'Type':<10} {'Icon':<20}")
    click.echo("-" * 70)
    for cat in categories:
        click.echo(f"{str(cat.id):<8} {cat.name:<30} {cat.type.value:<10} {cat.icon or '':<20}")


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=TYPE_CHOICE, help="Only show one type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories."""
    require_profile(ctx)
    service = ctx.obj["app"].categories

    if category_type:
        categories = run_or_exit(ctx, service.list_categories_by_type(category_type))
    else:
        categories = run_or_exit(ctx, service.list_categories())

    if not categories:
        click.echo("No categories found. Use 'category create' to add one.")
        return

    click.echo("\nCategories:")
    print_categories(categories)


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=TYPE_CHOICE, default="income", show_default=True, help="Category type")
@click.option("--icon", help="Icon URL or emoji")
@click.pass_context
def create_category(ctx, name: str, category_type: str, icon: str | None):
    """Create a new category."""
    require_profile(ctx)
    service = ctx.obj["app"].categories

    created = run_or_exit(ctx, service.create_category(name, category_type, icon=icon))
    click.echo(f"Created {created.type.value} category '{created.name}' (ID: {created.id})")


@category_group.command("update")
@click.argument("category_id")
@click.option("--name", help="New name")
@click.option("--type", "category_type", type=TYPE_CHOICE, help="New type")
@click.option("--icon", help="New icon URL or emoji")
@click.pass_context
def update_category(ctx, category_id: str, name: str | None, category_type: str | None, icon: str | None):
    """Update a category.

    Updates only the fields that are provided.

    Examples:
        mymoney category update 3 --name "Side projects"
        mymoney category update 3 --type expense
    """
    if name is None and category_type is None and icon is None:
        click.echo("Error: Nothing to update. Pass --name, --type or --icon.", err=True)
        ctx.exit(1)

    require_profile(ctx)
    service = ctx.obj["app"].categories

    updated = run_or_exit(
        ctx, service.update_category(category_id, name=name, category_type=category_type, icon=icon)
    )
    click.echo(f"Updated category {updated.id}: '{updated.name}' ({updated.type.value})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
