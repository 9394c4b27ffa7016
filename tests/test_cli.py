"""Tests for homebrewme.cli."""
from unittest.mock import patch

import pytest

from homebrewme import cli
from homebrewme.commands.migrate import MigrationOptions


class TestParseArguments:

    def test_defaults(self):
        args = cli.parse_arguments([])
        assert (args.dry_run, args.order, args.verbose) == (False, False, False)

    def test_flags(self):
        args = cli.parse_arguments(["--dry-run", "--order", "--verbose"])
        assert (args.dry_run, args.order, args.verbose) == (True, True, True)

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_arguments(["--help"])
        assert exc_info.value.code == 0
        assert "--dry-run" in capsys.readouterr().out

    def test_unknown_flag_exits_one(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_arguments(["--frobnicate"])
        assert exc_info.value.code == 1
        assert "unrecognized arguments: --frobnicate" in capsys.readouterr().err


class TestMain:

    @patch("homebrewme.cli.handle_migrate_command")
    @patch("homebrewme.cli.check_tool_installed", return_value=True)
    def test_runs_migration(self, _, mock_migrate):
        assert cli.main(["--dry-run", "--verbose"]) == 0
        mock_migrate.assert_called_once_with(MigrationOptions(dry_run=True, order=False, verbose=True))

    @patch("homebrewme.cli.handle_migrate_command")
    @patch("homebrewme.cli.check_tool_installed", side_effect=lambda tool: tool != "osascript")
    def test_missing_tool_exits_before_scanning(self, _, mock_migrate, capsys):
        assert cli.main([]) == 1
        mock_migrate.assert_not_called()
        assert "osascript is required" in capsys.readouterr().err

    @patch("homebrewme.cli.handle_migrate_command")
    @patch("homebrewme.cli.check_tool_installed", return_value=True)
    def test_help_has_no_side_effects(self, mock_check, mock_migrate):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--help"])
        assert exc_info.value.code == 0
        mock_check.assert_not_called()
        mock_migrate.assert_not_called()

    @patch("homebrewme.cli.handle_migrate_command", side_effect=KeyboardInterrupt)
    @patch("homebrewme.cli.check_tool_installed", return_value=True)
    def test_interrupt(self, _, __, capsys):
        assert cli.main([]) == 130
        assert "Interrupted" in capsys.readouterr().out
