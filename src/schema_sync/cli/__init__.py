"""CLI module for schema comparison and sync.

Provides commands for profile listing, connection testing, schema diff,
and applying the generated SQL to a target profile.

Usage:
    schema-sync profiles
    schema-sync test prod
    schema-sync databases prod
    schema-sync diff prod staging --sql
    schema-sync diff prod staging --output migrations/staging.sql --exclude 3,4
    schema-sync sync prod staging --dry-run
    schema-sync sync prod staging --confirm

Commands:
    profiles   - List available profiles
    test       - Test the connection of a profile
    databases  - List databases reachable through a profile
    diff       - Compare two profiles and show the differences
    sync       - Compare two profiles and apply the SQL to the target
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from schema_sync.config.loader import load_db_config
from schema_sync.errors import SchemaSyncError
from schema_sync.factory import get_reader
from schema_sync.schema.models import DiffResult
from schema_sync.schema.sync import compare_profiles, execute_sync, save_sql_file

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _config_path(args: argparse.Namespace) -> Path | None:
    config = getattr(args, "config", None)
    return Path(config) if config else None


def _parse_ids(value: str | None) -> set[str]:
    """Parse a comma-separated id list (``"1, 3,4"`` -> ``{"1", "3", "4"}``)."""
    if not value:
        return set()
    return {part.strip() for part in value.split(",") if part.strip()}


def _print_diff_table(result: DiffResult, source: str, target: str) -> None:
    """Render diff items as a rich table."""
    table = Table(
        title=f"Schema Differences ({source} -> {target})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("", width=1)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type")
    table.add_column("Table", style="cyan")
    table.add_column("Object")
    table.add_column("Source", style="green")
    table.add_column("Target", style="yellow")

    for item in result.items:
        marker = "[bold green]x[/bold green]" if item.selected else " "
        table.add_row(
            marker,
            item.id,
            item.diff_type.value,
            item.table_name,
            item.object_name or "",
            item.source_def or "",
            item.target_def or "",
        )

    console.print(table)
    console.print(
        f"[dim]{result.source_table_count} source tables, "
        f"{result.target_table_count} target tables, "
        f"{len(result.selected_items())} of {len(result.items)} selected[/dim]"
    )


async def _async_compare(args: argparse.Namespace) -> DiffResult | None:
    """Compare ``args.source`` against ``args.target`` and apply ``--exclude``.

    Returns:
        The diff result, or ``None`` if comparison failed (already reported).
    """
    if args.source == args.target and args.source_db == args.target_db:
        console.print(
            f"[red]Error: Source and target are the same profile: {args.source}[/red]"
        )
        return None

    console.print("Comparing schemas...", style="dim")
    console.print(f"  Source: [bold]{args.source}[/bold]")
    console.print(f"  Target: [bold cyan]{args.target}[/bold cyan]")

    try:
        result = await compare_profiles(
            args.source,
            args.target,
            source_database=args.source_db,
            target_database=args.target_db,
            config_path=_config_path(args),
        )
    except (SchemaSyncError, FileNotFoundError) as e:
        console.print(f"\n[red]Error: {e}[/red]")
        return None

    excluded = _parse_ids(args.exclude)
    unknown = excluded - {item.id for item in result.items}
    if unknown:
        console.print(
            f"[yellow]Ignoring unknown ids: {', '.join(sorted(unknown))}[/yellow]"
        )
    for item in result.items:
        if item.id in excluded:
            item.selected = False

    return result


# ============================================================================
# Async command implementations
# ============================================================================


async def _async_test(args: argparse.Namespace) -> int:
    """Async implementation for test command.

    Returns:
        0 if the connection works, 1 otherwise.
    """
    try:
        reader = get_reader(
            args.profile, database=args.database, config_path=_config_path(args)
        )
    except (SchemaSyncError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(f"Testing profile: [bold cyan]{args.profile}[/bold cyan]")
    try:
        await reader.test_connection()
    except SchemaSyncError as e:
        console.print(f"[bold red]x[/bold red] Connection failed: {e}")
        return 1
    finally:
        await reader.close()

    console.print(
        f"[bold green]v[/bold green] Connected ([dim]{reader.dialect.value}[/dim])"
    )
    return 0


async def _async_databases(args: argparse.Namespace) -> int:
    """Async implementation for databases command.

    Returns:
        0 on success, 1 on failure.
    """
    try:
        reader = get_reader(args.profile, config_path=_config_path(args))
    except (SchemaSyncError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    try:
        databases = await reader.list_databases()
    except SchemaSyncError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    finally:
        await reader.close()

    table = Table(title=f"Databases ({args.profile})", show_header=True, header_style="bold")
    table.add_column("Database")
    for name in databases:
        table.add_row(name)
    console.print(table)

    return 0


async def _async_diff(args: argparse.Namespace) -> int:
    """Async implementation for diff command.

    Returns:
        0 on success (identical or not), 1 on failure.
    """
    result = await _async_compare(args)
    if result is None:
        return 1

    console.print()
    if result.is_empty:
        console.print("[bold green]v[/bold green] Schemas are identical")
        return 0

    _print_diff_table(result, args.source, args.target)

    if args.sql:
        console.print()
        console.print(result.format_sql(), markup=False, highlight=False)

    if args.output:
        path = save_sql_file(args.output, result.format_sql())
        console.print(f"\n[bold green]v[/bold green] SQL saved to [cyan]{path}[/cyan]")

    return 0


async def _async_sync(args: argparse.Namespace) -> int:
    """Async implementation for sync command.

    Compares first, then applies the selected statements to the target.

    Returns:
        0 on success, 1 on failure.
    """
    result = await _async_compare(args)
    if result is None:
        return 1

    console.print()
    if result.is_empty:
        console.print("[bold green]v[/bold green] Schemas are identical. Nothing to sync.")
        return 0

    _print_diff_table(result, args.source, args.target)
    statements = result.selected_sql()

    if not statements:
        console.print("\n[yellow]No differences selected.[/yellow]")
        return 0

    if args.dry_run:
        console.print()
        console.print(result.format_sql(), markup=False, highlight=False)
        console.print()
        console.print("[bold yellow]DRY RUN[/bold yellow] - No changes made.")
        return 0

    if not args.confirm:
        console.print()
        console.print(
            "[dim]To actually sync, add[/dim] [cyan]--confirm[/cyan] [dim]flag.[/dim]"
        )
        return 0

    console.print()
    console.print(f"Executing {len(statements)} statements...", style="dim")
    try:
        sync_result = await execute_sync(
            args.target,
            statements,
            target_database=args.target_db,
            dry_run=False,
            confirm=True,
            config_path=_config_path(args),
        )
    except (SchemaSyncError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if sync_result.success:
        console.print(
            f"[bold green]v[/bold green] Sync complete. "
            f"{sync_result.executed_count} statements executed."
        )
        return 0

    console.print(
        f"[bold red]x[/bold red] Sync stopped after "
        f"{sync_result.executed_count} of {len(statements)} statements."
    )
    for error in sync_result.errors:
        console.print(error, style="red", markup=False, highlight=False)
    return 1


# ============================================================================
# Sync command wrappers (cmd_profiles reads local files only)
# ============================================================================


def cmd_profiles(args: argparse.Namespace) -> int:
    """List available profiles from db.toml.

    Reads only local TOML config -- no database calls.

    Returns:
        0 on success, 1 if db.toml not found.
    """
    try:
        config = load_db_config(_config_path(args))
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    table = Table(title="Database Profiles", show_header=True, header_style="bold")
    table.add_column("Profile", style="bold cyan")
    table.add_column("Dialect")
    table.add_column("Description")

    for name, profile in config.profiles.items():
        try:
            dialect = profile.resolve_dialect().value
        except ValueError:
            dialect = "[red]unknown[/red]"
        table.add_row(name, dialect, profile.description or "")

    console.print(table)
    return 0


def cmd_test(args: argparse.Namespace) -> int:
    """Test the connection of a profile.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_test(args))


def cmd_databases(args: argparse.Namespace) -> int:
    """List databases reachable through a profile.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_databases(args))


def cmd_diff(args: argparse.Namespace) -> int:
    """Compare two profiles.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_diff(args))


def cmd_sync(args: argparse.Namespace) -> int:
    """Compare two profiles and apply the SQL to the target.

    Wraps the async implementation with ``asyncio.run()``.
    """
    return asyncio.run(_async_sync(args))


# ============================================================================
# Main entry point
# ============================================================================


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _add_compare_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Source profile (the desired schema)")
    parser.add_argument("target", help="Target profile (the schema to change)")
    parser.add_argument(
        "--source-db",
        default=None,
        help="Database name overriding the one in the source profile URL",
    )
    parser.add_argument(
        "--target-db",
        default=None,
        help="Database name overriding the one in the target profile URL",
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Comma-separated diff ids to leave out of the SQL (e.g., 3,4)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="schema-sync",
        description="Compare database schemas and generate sync SQL",
    )

    # Global options
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to db.toml (default: $SCHEMA_SYNC_CONFIG or ./db.toml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # profiles command
    p_profiles = subparsers.add_parser(
        "profiles",
        help="List available profiles",
    )
    p_profiles.set_defaults(func=cmd_profiles)

    # test command
    p_test = subparsers.add_parser(
        "test",
        help="Test the connection of a profile",
    )
    p_test.add_argument("profile", help="Profile name from db.toml")
    p_test.add_argument(
        "--database",
        "-d",
        default=None,
        help="Database name overriding the one in the profile URL",
    )
    p_test.set_defaults(func=cmd_test)

    # databases command
    p_databases = subparsers.add_parser(
        "databases",
        help="List databases reachable through a profile",
    )
    p_databases.add_argument("profile", help="Profile name from db.toml")
    p_databases.set_defaults(func=cmd_databases)

    # diff command
    p_diff = subparsers.add_parser(
        "diff",
        help="Compare two profiles and show the differences",
    )
    _add_compare_arguments(p_diff)
    p_diff.add_argument(
        "--sql",
        action="store_true",
        help="Print the generated SQL",
    )
    p_diff.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the generated SQL to this file",
    )
    p_diff.set_defaults(func=cmd_diff)

    # sync command
    p_sync = subparsers.add_parser(
        "sync",
        help="Compare two profiles and apply the SQL to the target",
    )
    _add_compare_arguments(p_sync)
    p_sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the SQL without executing it",
    )
    p_sync.add_argument(
        "--confirm",
        action="store_true",
        help="Actually execute the SQL (required for non-dry-run)",
    )
    p_sync.set_defaults(func=cmd_sync)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, 1 for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
