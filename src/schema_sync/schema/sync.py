"""Schema sync between database profiles (async).

Compares the schema of a source profile against a target profile and
applies the generated SQL to the target.  All operations are async.

Execution is fail-fast: statements run one at a time in list order, each
in its own transaction, and the first failure stops the run.  Earlier
statements stay applied.

Usage:
    from schema_sync.schema.sync import compare_profiles, execute_sync

    # Compare what would change on "staging" to match "prod"
    result = await compare_profiles("prod", "staging")
    print(result.format_report())

    # Apply selected statements (dry run first)
    sync = await execute_sync("staging", result.selected_sql(), dry_run=True)
    sync = await execute_sync(
        "staging", result.selected_sql(), dry_run=False, confirm=True
    )
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from schema_sync.errors import (
    DatabaseError,
    InternalError,
    SchemaSyncError,
    StatementExecutionError,
)
from schema_sync.schema.comparator import diff_schemas
from schema_sync.schema.models import DiffResult

if TYPE_CHECKING:
    from schema_sync.adapters.base import StatementExecutor

logger = logging.getLogger(__name__)


class SyncResult(BaseModel):
    """Result of a sync run.

    Attributes:
        success: Whether every statement was applied (or, for a dry run,
            whether the run was accepted).
        dry_run: True if nothing was executed.
        statements: Statements submitted, in execution order.
        executed_count: Number of statements that completed.
        failed_index: 0-based index of the statement that failed, if any.
        errors: Error messages encountered.
    """

    success: bool = False
    dry_run: bool = True
    statements: list[str] = Field(default_factory=list)
    executed_count: int = 0
    failed_index: int | None = None
    errors: list[str] = Field(default_factory=list)


async def compare_profiles(
    source_profile: str,
    target_profile: str,
    source_database: str | None = None,
    target_database: str | None = None,
    config_path: Path | None = None,
) -> DiffResult:
    """Compare the schema of two profiles.

    Reads the source snapshot, then the target snapshot, and diffs them
    with the target's SQL dialect so the generated statements apply to the
    target.

    Args:
        source_profile: Source profile name from db.toml.
        target_profile: Target profile name from db.toml.
        source_database: Optional database override for the source.
        target_database: Optional database override for the target.
        config_path: Optional path to db.toml.

    Returns:
        ``DiffResult`` with one item per discrepancy.

    Raises:
        ProfileNotFoundError: If either profile is not defined.
        DatabaseConnectionError: If a database cannot be reached.
        DatabaseError: If introspection fails.

    Example:
        >>> result = await compare_profiles("prod", "staging")
        >>> print(result.format_report())
    """
    from schema_sync.factory import get_reader

    source_reader = get_reader(
        source_profile, database=source_database, config_path=config_path
    )
    try:
        target_reader = get_reader(
            target_profile, database=target_database, config_path=config_path
        )
    except Exception:
        await source_reader.close()
        raise

    try:
        logger.info(f"Reading source schema from profile '{source_profile}'")
        source_tables = await source_reader.get_tables()

        logger.info(f"Reading target schema from profile '{target_profile}'")
        target_tables = await target_reader.get_tables()

        result = diff_schemas(source_tables, target_tables, target_reader.generator)
        logger.info(
            f"Found {len(result.items)} differences "
            f"({target_reader.dialect.value} target)"
        )
        return result
    finally:
        await source_reader.close()
        await target_reader.close()


async def execute_statements(
    executor: StatementExecutor,
    statements: list[str],
) -> SyncResult:
    """Execute statements one at a time, stopping at the first failure.

    Args:
        executor: Connection the statements are applied to.
        statements: SQL statements in execution order.

    Returns:
        ``SyncResult`` with ``success=True`` and every statement counted.

    Raises:
        StatementExecutionError: On the first failing statement, carrying
            its 0-based index, its SQL, and the driver's message.
        InternalError: If the executor fails with something other than a
            schema-sync error.  Execution stops there as well.
    """
    for index, sql in enumerate(statements):
        try:
            await executor.execute(sql)
        except DatabaseError as e:
            logger.error(f"Statement {index + 1} of {len(statements)} failed: {e}")
            raise StatementExecutionError(index, sql, str(e)) from e
        except SchemaSyncError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected failure on statement {index + 1}")
            raise InternalError(
                f"Unexpected error executing statement {index + 1}: {e}"
            ) from e
        logger.debug(f"Executed statement {index + 1} of {len(statements)}")

    return SyncResult(
        success=True,
        dry_run=False,
        statements=list(statements),
        executed_count=len(statements),
    )


async def execute_sync(
    target_profile: str,
    statements: list[str],
    target_database: str | None = None,
    dry_run: bool = True,
    confirm: bool = False,
    config_path: Path | None = None,
) -> SyncResult:
    """Apply statements to the target profile.

    Args:
        target_profile: Target profile name from db.toml.
        statements: SQL statements in execution order.
        target_database: Optional database override for the target.
        dry_run: If ``True``, only report what would be executed.
        confirm: Must be ``True`` to actually execute (safety check).
        config_path: Optional path to db.toml.

    Returns:
        ``SyncResult``.  A failing statement is reported through
        ``failed_index`` and ``errors`` rather than raised.

    Example:
        >>> result = await execute_sync(
        ...     "staging", ["DROP TABLE `legacy`;"], dry_run=False, confirm=True
        ... )
        >>> result.executed_count
        1
    """
    result = SyncResult(dry_run=dry_run, statements=list(statements))

    # Dry run executes nothing
    if dry_run:
        result.success = True
        return result

    # Safety check
    if not confirm:
        result.errors.append("Sync requires confirm=True to actually perform changes")
        return result

    if not statements:
        result.success = True
        return result

    from schema_sync.factory import get_reader

    reader = get_reader(
        target_profile, database=target_database, config_path=config_path
    )
    try:
        logger.info(
            f"Executing {len(statements)} statements on profile '{target_profile}'"
        )
        executed = await execute_statements(reader, statements)
        result.executed_count = executed.executed_count
        result.success = True
    except StatementExecutionError as e:
        result.executed_count = e.index
        result.failed_index = e.index
        result.errors.append(str(e))
    finally:
        await reader.close()

    return result


def save_sql_file(path: str | Path, content: str) -> Path:
    """Write generated SQL to *path*, creating parent directories.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if content and not content.endswith("\n"):
        content += "\n"
    path.write_text(content, encoding="utf-8")
    logger.info(f"Saved SQL to {path}")
    return path
