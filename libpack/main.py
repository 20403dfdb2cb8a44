"""libpack CLI - inspect the entry points of a library and where their build output goes."""

import json
import logging
import os

import click
from rich.table import Table

from .console import console
from .console import error_console
from .discovery import LibraryPackage
from .discovery import PackageDiscoveryError
from .discovery import discover_package
from .entry_point import EntryPoint
from .logging_setup import init_json_logging
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message
from .validation import EntryPointConfigError
from .validation import check_package

logger = logging.getLogger(__name__)


def _load_checked_package(ctx: click.Context, project: str) -> LibraryPackage:
    """Discover and validate a library, exiting with status 1 on configuration errors."""
    try:
        package = discover_package(project)
        check_package(package)
    except (PackageDiscoveryError, EntryPointConfigError) as e:
        logger.error(f"Cannot resolve library at {project}: {e}")
        error_console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        ctx.exit(1)
    return package


def _side_effects_label(entry_point: EntryPoint) -> str:
    side_effects = entry_point.side_effects
    if isinstance(side_effects, list):
        return ", ".join(side_effects) or "[]"
    return str(side_effects).lower()


def _entry_point_summary(entry_point: EntryPoint) -> dict:
    return {
        "moduleId": entry_point.module_id,
        "secondary": entry_point.is_secondary_entry_point,
        "entryFile": entry_point.entry_file_path,
        "flatModuleFile": entry_point.flat_module_file,
        "umdId": entry_point.umd_id,
        "amdId": entry_point.amd_id,
        "destinationPath": entry_point.destination_path,
        "sideEffects": entry_point.side_effects,
    }


@click.group()
@click.version_option(package_name="libpack")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level of the JSONL log (default: $LIBPACK_LOG_LEVEL or INFO); needs --log-file or $LIBPACK_LOG_PATH",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write JSONL logs to this file (default: $LIBPACK_LOG_PATH, logging disabled when unset)",
)
def cli(log_level, log_file):
    """libpack - resolve entry point paths and module IDs of a library."""
    log_file = log_file or os.environ.get("LIBPACK_LOG_PATH")
    if log_file:
        init_json_logging(log_file, log_level)
    elif log_level:
        error_console.print("[yellow]Warning:[/yellow] --log-level has no effect without --log-file or LIBPACK_LOG_PATH")


@cli.command(name="entry-points")
@click.argument("project", type=click.Path(exists=True), default=".")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def entry_points_cmd(ctx: click.Context, project: str, as_json: bool):
    """List the entry points of the library at PROJECT."""
    package = _load_checked_package(ctx, project)

    if as_json:
        click.echo(json.dumps([_entry_point_summary(ep) for ep in package.entry_points], indent=2))
        return

    table = Table(title=f"Entry points of {escape_markup(package.primary.module_id)}")
    table.add_column("Module ID", style="cyan")
    table.add_column("Flat module file", style="green")
    table.add_column("UMD ID")
    table.add_column("AMD ID", style="dim")
    table.add_column("Destination")
    table.add_column("Side effects", style="dim")

    for entry_point in package.entry_points:
        table.add_row(
            escape_markup(entry_point.module_id),
            escape_markup(entry_point.flat_module_file),
            escape_markup(entry_point.umd_id),
            escape_markup(entry_point.amd_id),
            escape_markup(entry_point.destination_path),
            escape_markup(_side_effects_label(entry_point)),
        )

    console.print(table)
    console.print(f"\n[bold]Library output:[/bold] {escape_markup(package.dest)}")


@cli.command(name="files")
@click.argument("project", type=click.Path(exists=True), default=".")
@click.option("--entry", "module_id", default=None, help="Only show the entry point with this module ID")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def files_cmd(ctx: click.Context, project: str, module_id: str | None, as_json: bool):
    """Show the build artifact paths of every entry point of the library at PROJECT."""
    package = _load_checked_package(ctx, project)

    entry_points = package.entry_points
    if module_id is not None:
        entry_point = package.find(module_id)
        if entry_point is None:
            known = ", ".join(ep.module_id for ep in package.entry_points)
            error_console.print(
                f"[red]Error:[/red] No entry point '{escape_markup(module_id)}'. Known: {escape_markup(known)}"
            )
            ctx.exit(1)
        entry_points = [entry_point]

    if as_json:
        payload = {ep.module_id: ep.destination_files.to_dict() for ep in entry_points}
        click.echo(json.dumps(payload, indent=2))
        return

    for entry_point in entry_points:
        table = Table(title=escape_markup(entry_point.module_id), title_justify="left")
        table.add_column("Artifact", style="cyan")
        table.add_column("Path")
        for artifact, path in entry_point.destination_files.to_dict().items():
            table.add_row(artifact, escape_markup(path))
        console.print(table)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
