"""
utapi command-line interface

Manage files in an UploadThing app from the terminal. Reads
UPLOADTHING_SECRET (and the other UPLOADTHING_* settings) from the
environment or a .env file.

Usage:
    utapi list                  - List stored files
    utapi delete KEY...         - Delete files
    utapi rename KEY NEW_NAME   - Rename a file
    utapi usage                 - Show storage usage
    utapi app-info              - Show app id and ACL defaults
    utapi url KEY               - Print a presigned URL for a private file
    utapi upload PATH...        - Upload local files
"""
import logging
import sys
from datetime import datetime, timezone
from typing import NoReturn

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from utapi import __version__
from utapi.client import UTApi
from utapi.config import ACL, load_settings
from utapi.errors import UploadThingError

console = Console()


def format_bytes(size: int) -> str:
    """Render a byte count with a binary unit suffix."""
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB", "TiB"):
        if value < 1024 or unit == "TiB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def format_timestamp(millis: int) -> str:
    if not millis:
        return ""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def get_api() -> UTApi:
    """Build a client from the environment, exiting on bad configuration."""
    try:
        return UTApi.from_settings(load_settings())
    except UploadThingError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        console.print("\nAdd your UploadThing secret to .env:")
        console.print("[yellow]echo \"UPLOADTHING_SECRET=sk_live_...\" >> .env[/yellow]")
        sys.exit(1)


def fail(e: UploadThingError) -> NoReturn:
    console.print(f"[red]✗ Error: {escape(str(e))}[/red]")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="utapi")
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests")
def main(verbose: bool):
    """
    utapi - UploadThing file management CLI
    """
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command("list")
@click.option("--limit", default=100, help="Number of files to show")
@click.option("--offset", default=0, help="Number of files to skip")
def list_files(limit: int, offset: int):
    """
    List stored files.

    Example:
        utapi list --limit 10
    """
    with get_api() as api:
        try:
            page = api.list_files(limit=limit, offset=offset)
        except UploadThingError as e:
            fail(e)

    if not page.files:
        console.print("[yellow]No files found.[/yellow]")
        return

    table = Table(title=f"Files ({len(page.files)} shown)", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Status")
    table.add_column("Uploaded", style="dim")

    for f in page.files:
        table.add_row(escape(f.key), escape(f.name), format_bytes(f.size), f.status, format_timestamp(f.uploaded_at))

    console.print(table)
    if page.has_more:
        console.print(f"\n[dim]More files available: utapi list --offset {offset + len(page.files)}[/dim]")


@main.command()
@click.argument("keys", nargs=-1, required=True)
def delete(keys: tuple[str, ...]):
    """
    Delete files by key.

    Example:
        utapi delete abc123.png def456.pdf
    """
    with get_api() as api:
        try:
            result = api.delete_files(list(keys))
        except UploadThingError as e:
            fail(e)

    if result.success:
        console.print(f"[green]✓ Deleted {result.deleted_count} file(s)[/green]")
    else:
        console.print("[yellow]⚠ Delete was not successful[/yellow]")
        sys.exit(1)


@main.command()
@click.argument("key")
@click.argument("new_name")
def rename(key: str, new_name: str):
    """
    Rename a file.

    Example:
        utapi rename abc123.png holiday.png
    """
    with get_api() as api:
        try:
            result = api.rename_files([(key, new_name)])
        except UploadThingError as e:
            fail(e)

    if result.success:
        console.print(f"[green]✓ Renamed {result.renamed_count} file(s)[/green]")
    else:
        console.print("[yellow]⚠ Rename was not successful[/yellow]")
        sys.exit(1)


@main.command()
def usage():
    """Show storage usage."""
    with get_api() as api:
        try:
            info = api.get_usage_info()
        except UploadThingError as e:
            fail(e)

    table = Table(show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Files uploaded", str(info.files_uploaded))
    table.add_row("App storage", format_bytes(info.app_total_bytes))
    table.add_row("Account storage", format_bytes(info.total_bytes))
    table.add_row("Limit", format_bytes(info.limit_bytes))
    console.print(table)


@main.command("app-info")
def app_info():
    """Show app id and access-control defaults."""
    with get_api() as api:
        try:
            info = api.get_app_info()
        except UploadThingError as e:
            fail(e)

    console.print(f"App ID:             [cyan]{info.app_id}[/cyan]")
    console.print(f"Default ACL:        {info.default_acl}")
    console.print(f"ACL override:       {'allowed' if info.allow_acl_override else 'not allowed'}")


@main.command()
@click.argument("key")
@click.option("--expires-in", type=int, default=None, help="URL lifetime in seconds")
def url(key: str, expires_in: int | None):
    """
    Print a presigned URL for a private file.

    Example:
        utapi url abc123.png --expires-in 3600
    """
    with get_api() as api:
        try:
            signed = api.get_presigned_url(key, expires_in=expires_in)
        except UploadThingError as e:
            fail(e)

    click.echo(signed)


@main.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--acl",
    type=click.Choice([a.value for a in ACL]),
    default=ACL.PUBLIC_READ.value,
    help="Access control for the uploaded files",
)
def upload(paths: tuple[str, ...], acl: str):
    """
    Upload local files.

    Example:
        utapi upload report.pdf photo.png --acl private
    """
    with get_api() as api:
        try:
            uploaded = api.upload_files(list(paths), acl=acl)
        except UploadThingError as e:
            fail(e)

    for target in uploaded:
        console.print(f"[green]✓[/green] {target.file_name} → [cyan]{target.key}[/cyan]")
        if target.file_url:
            console.print(f"  [dim]{target.file_url}[/dim]")


if __name__ == "__main__":
    main()
