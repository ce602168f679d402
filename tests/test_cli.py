"""Tests for the schema-sync CLI.

Commands are invoked through ``main(argv)`` with the orchestration
functions patched, so no database or config file is needed unless a test
writes one.
"""

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from schema_sync.cli import _parse_ids, build_parser, main
from schema_sync.errors import (
    DatabaseConnectionError,
    InternalError,
    StatementExecutionError,
)
from schema_sync.factory import ProfileNotFoundError
from schema_sync.schema.models import DiffItem, DiffResult, DiffType
from schema_sync.schema.sync import SyncResult


def _diff_result() -> DiffResult:
    return DiffResult(
        items=[
            DiffItem(
                id="1",
                diff_type=DiffType.TABLE_REMOVED,
                table_name="legacy",
                target_def="3 columns",
                sql="DROP TABLE `legacy`;",
            ),
            DiffItem(
                id="2",
                diff_type=DiffType.COLUMN_ADDED,
                table_name="users",
                object_name="age",
                source_def="INT",
                sql="ALTER TABLE `users` ADD COLUMN `age` INT;",
            ),
        ],
        source_table_count=1,
        target_table_count=2,
    )


# ==================================================================
# Parser
# ==================================================================


class TestParser:
    """Argument parsing for every subcommand."""

    def test_diff_arguments(self) -> None:
        args = build_parser().parse_args(
            ["-c", "x.toml", "diff", "prod", "staging", "--sql", "--exclude", "1,2"]
        )
        assert args.config == "x.toml"
        assert (args.source, args.target) == ("prod", "staging")
        assert args.sql is True
        assert args.exclude == "1,2"
        assert args.output is None

    def test_sync_arguments(self) -> None:
        args = build_parser().parse_args(
            ["sync", "prod", "staging", "--target-db", "app2", "--confirm"]
        )
        assert args.confirm is True
        assert args.dry_run is False
        assert args.target_db == "app2"

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_parse_ids(self) -> None:
        assert _parse_ids("1, 3,,4") == {"1", "3", "4"}
        assert _parse_ids(None) == set()


# ==================================================================
# profiles
# ==================================================================


class TestProfilesCommand:
    """profiles reads only the local config."""

    def test_lists_profiles(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        config = tmp_path / "db.toml"
        config.write_text(
            textwrap.dedent("""\
                [profiles.prod]
                url = "mysql://app@db/app"
                description = "Production"
            """)
        )

        assert main(["--config", str(config), "profiles"]) == 0

        out = capsys.readouterr().out
        assert "prod" in out
        assert "mysql" in out

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main(["--config", str(tmp_path / "none.toml"), "profiles"]) == 1
        assert "Database config not found" in capsys.readouterr().out


# ==================================================================
# test / databases
# ==================================================================


class TestConnectionCommands:
    """test and databases commands."""

    def test_connection_ok(self) -> None:
        reader = MagicMock()
        reader.test_connection = AsyncMock()
        reader.close = AsyncMock()
        with patch("schema_sync.cli.get_reader", return_value=reader):
            assert main(["test", "prod"]) == 0
        reader.close.assert_awaited_once()

    def test_connection_failure(self, capsys: pytest.CaptureFixture) -> None:
        reader = MagicMock()
        reader.test_connection = AsyncMock(side_effect=DatabaseConnectionError("refused"))
        reader.close = AsyncMock()
        with patch("schema_sync.cli.get_reader", return_value=reader):
            assert main(["test", "prod"]) == 1
        assert "refused" in capsys.readouterr().out
        reader.close.assert_awaited_once()

    def test_unknown_profile(self) -> None:
        with patch(
            "schema_sync.cli.get_reader",
            side_effect=ProfileNotFoundError("Profile 'x' not found"),
        ):
            assert main(["test", "x"]) == 1

    def test_databases(self, capsys: pytest.CaptureFixture) -> None:
        reader = MagicMock()
        reader.list_databases = AsyncMock(return_value=["app", "reporting"])
        reader.close = AsyncMock()
        with patch("schema_sync.cli.get_reader", return_value=reader):
            assert main(["databases", "prod"]) == 0
        out = capsys.readouterr().out
        assert "app" in out
        assert "reporting" in out


# ==================================================================
# diff
# ==================================================================


class TestDiffCommand:
    """diff prints, saves, and deselects."""

    def test_identical(self, capsys: pytest.CaptureFixture) -> None:
        with patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=DiffResult())):
            assert main(["diff", "prod", "staging"]) == 0
        assert "Schemas are identical" in capsys.readouterr().out

    def test_same_profile_rejected(self) -> None:
        with patch("schema_sync.cli.compare_profiles", AsyncMock()) as mock_compare:
            assert main(["diff", "prod", "prod"]) == 1
        mock_compare.assert_not_awaited()

    def test_prints_sql(self, capsys: pytest.CaptureFixture) -> None:
        with patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())):
            assert main(["diff", "prod", "staging", "--sql"]) == 0
        out = capsys.readouterr().out
        assert "DROP TABLE `legacy`;" in out
        assert "ALTER TABLE `users` ADD COLUMN `age` INT;" in out

    def test_output_respects_exclude(self, tmp_path: Path) -> None:
        output = tmp_path / "sql" / "sync.sql"
        with patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())):
            code = main(
                ["diff", "prod", "staging", "--output", str(output), "--exclude", "1"]
            )

        assert code == 0
        assert output.read_text() == "ALTER TABLE `users` ADD COLUMN `age` INT;\n"

    def test_passes_database_overrides(self) -> None:
        mock_compare = AsyncMock(return_value=DiffResult())
        with patch("schema_sync.cli.compare_profiles", mock_compare):
            main(["diff", "prod", "staging", "--source-db", "a", "--target-db", "b"])

        kwargs = mock_compare.await_args.kwargs
        assert kwargs["source_database"] == "a"
        assert kwargs["target_database"] == "b"

    def test_compare_error(self, capsys: pytest.CaptureFixture) -> None:
        with patch(
            "schema_sync.cli.compare_profiles",
            AsyncMock(side_effect=DatabaseConnectionError("timeout")),
        ):
            assert main(["diff", "prod", "staging"]) == 1
        assert "timeout" in capsys.readouterr().out


# ==================================================================
# sync
# ==================================================================


class TestSyncCommand:
    """sync honours --dry-run and --confirm."""

    def test_dry_run(self, capsys: pytest.CaptureFixture) -> None:
        mock_execute = AsyncMock()
        with (
            patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())),
            patch("schema_sync.cli.execute_sync", mock_execute),
        ):
            assert main(["sync", "prod", "staging", "--dry-run"]) == 0

        assert "DRY RUN" in capsys.readouterr().out
        mock_execute.assert_not_awaited()

    def test_without_confirm_executes_nothing(self) -> None:
        mock_execute = AsyncMock()
        with (
            patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())),
            patch("schema_sync.cli.execute_sync", mock_execute),
        ):
            assert main(["sync", "prod", "staging"]) == 0

        mock_execute.assert_not_awaited()

    def test_confirm_executes_selected(self) -> None:
        mock_execute = AsyncMock(
            return_value=SyncResult(success=True, dry_run=False, executed_count=1)
        )
        with (
            patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())),
            patch("schema_sync.cli.execute_sync", mock_execute),
        ):
            assert main(["sync", "prod", "staging", "--confirm", "--exclude", "2"]) == 0

        args = mock_execute.await_args
        assert args.args == ("staging", ["DROP TABLE `legacy`;"])
        assert args.kwargs["confirm"] is True
        assert args.kwargs["dry_run"] is False

    def test_failure_exit_code(self, capsys: pytest.CaptureFixture) -> None:
        error = StatementExecutionError(0, "DROP TABLE `legacy`;", "Unknown table")
        mock_execute = AsyncMock(
            return_value=SyncResult(
                success=False,
                dry_run=False,
                executed_count=0,
                failed_index=0,
                errors=[str(error)],
            )
        )
        with (
            patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())),
            patch("schema_sync.cli.execute_sync", mock_execute),
        ):
            assert main(["sync", "prod", "staging", "--confirm"]) == 1

        out = capsys.readouterr().out
        assert "Failed to execute statement 1" in out

    def test_internal_error_exit_code(self, capsys: pytest.CaptureFixture) -> None:
        mock_execute = AsyncMock(
            side_effect=InternalError("Unexpected error executing statement 1: boom")
        )
        with (
            patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())),
            patch("schema_sync.cli.execute_sync", mock_execute),
        ):
            assert main(["sync", "prod", "staging", "--confirm"]) == 1

        assert "Unexpected error executing statement 1" in capsys.readouterr().out

    def test_everything_excluded(self, capsys: pytest.CaptureFixture) -> None:
        mock_execute = AsyncMock()
        with (
            patch("schema_sync.cli.compare_profiles", AsyncMock(return_value=_diff_result())),
            patch("schema_sync.cli.execute_sync", mock_execute),
        ):
            assert main(["sync", "prod", "staging", "--confirm", "--exclude", "1,2"]) == 0

        assert "No differences selected" in capsys.readouterr().out
        mock_execute.assert_not_awaited()
