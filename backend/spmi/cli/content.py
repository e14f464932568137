import click
from flask.cli import AppGroup
from spmi.application.content import fix_gallery_columns
from spmi.application.content_store import CONTENT_STORES

content_cli = AppGroup("content", help="Content document maintenance.")


@content_cli.command("fix-gallery-columns")
@click.option(
    "--owner",
    "owners",
    multiple=True,
    type=click.Choice(sorted(CONTENT_STORES)),
    help="Limit the repair to these owner tables (default: all).",
)
@click.option("--dry-run", is_flag=True, help="Report documents that need fixing without saving.")
def fix_gallery_columns_command(owners, dry_run):
    """Fix galleryColumns stored as strings in content documents."""
    click.echo("Fixing gallery columns type...")

    fixed = fix_gallery_columns(owners=owners, dry_run=dry_run)

    for owner, owner_id in fixed:
        click.echo(f"{'Would fix' if dry_run else 'Fixed'} {owner} {owner_id}")

    click.echo(f"{'Found' if dry_run else 'Fixed'} {len(fixed)} document(s)")
