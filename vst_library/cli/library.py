"""Plugin library CLI commands."""
import functools

import click
from flask import current_app
from flask.cli import with_appcontext

from vst_library.errors import VstLibraryError


def _library_command(func):
    """Run inside the app context, turning library errors into a CLI failure."""

    @functools.wraps(func)
    @with_appcontext
    def wrapper(*args, **kwargs):
        try:
            return func(current_app.container, *args, **kwargs)
        except VstLibraryError as e:
            raise click.ClickException(e.message) from e

    return wrapper


def _echo_sync(result) -> None:
    click.echo(
        f"Processed {result.processed_count} plugins "
        f"({result.inserted_count} inserted, {result.updated_count} updated)."
    )


@click.group("library")
def library_cli():
    """Plugin library commands."""
    pass


@library_cli.command("init-db")
@_library_command
def init_db(container):
    """Create the plugins and settings tables."""
    database = container.database()
    database.initialize()
    click.echo(f"Database ready ({database.url}).")


@library_cli.command("list")
@_library_command
def list_plugins(container):
    """List stored plugins."""
    plugins = container.plugin_service().list()
    if not plugins:
        click.echo("No plugins stored.")
        return

    for plugin in plugins:
        vendor = plugin.vendor or "Unknown vendor"
        status = "" if plugin.is_valid else " [invalid]"
        click.echo(f"{plugin.name} - {vendor}{status}")


@library_cli.command("sync")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@_library_command
def sync_plugins(container, path):
    """Import the scan-result file (or PATH) into the database."""
    result = container.plugin_sync_service().sync_from_file(path)
    _echo_sync(result)


@library_cli.command("scan")
@click.argument("directories", nargs=-1)
@_library_command
def scan_plugins(container, directories):
    """Scan DIRECTORIES (default: the vst_paths setting) and sync the results."""
    summary = container.scan_service().scan(list(directories) or None)
    for directory in summary.scanned_directories:
        click.echo(f"Scanned {directory}")
    for directory, error in summary.failed_directories.items():
        click.echo(f"Failed {directory}: {error}", err=True)
    click.echo(f"Found {summary.total_plugins} plugins ({summary.valid_plugins} valid).")
    _echo_sync(summary.sync)


@library_cli.command("export")
@_library_command
def export_plugins(container):
    """Write the library to exported-plugins.json."""
    click.echo(container.transfer_service().export_plugins())


@library_cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@_library_command
def import_plugins(container, path):
    """Import a JSON plugin list from PATH."""
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    result = container.transfer_service().import_file(path, content)
    _echo_sync(result)
