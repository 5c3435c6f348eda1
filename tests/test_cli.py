"""Tests for cli/main.py - argument handling."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from cli.main import main


class TestMain:
    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with (
            patch("cli.main.setup_logging"),
            patch("cli.main.run_setup_wizard", return_value=0) as mock_run,
        ):
            assert main([]) == 0
        project_dir = mock_run.call_args.args[0]
        assert project_dir.resolve() == tmp_path.resolve()

    def test_project_dir_and_flags(self, tmp_path: Path) -> None:
        with (
            patch("cli.main.setup_logging") as mock_logging,
            patch("cli.main.run_setup_wizard", return_value=1) as mock_run,
        ):
            code = main(["--project-dir", str(tmp_path), "--no-color", "-v"])

        assert code == 1
        settings = mock_run.call_args.kwargs["settings"]
        assert settings.no_color is True
        assert settings.verbose is True
        mock_logging.assert_called_once_with(verbose=True, log_file=None)

    def test_missing_project_dir(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with (
            patch("cli.main.setup_logging"),
            patch("cli.main.run_setup_wizard") as mock_run,
        ):
            code = main(["--project-dir", str(tmp_path / "nope")])
        assert code == 1
        mock_run.assert_not_called()
        assert "is not a directory" in capsys.readouterr().err

    def test_invalid_setting(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("CLAUDE_SETUP_PROBE_TIMEOUT", "abc")
        with patch("cli.main.run_setup_wizard") as mock_run:
            code = main(["--project-dir", str(tmp_path)])
        assert code == 1
        mock_run.assert_not_called()
        err = capsys.readouterr().err
        assert err.startswith("ERROR: invalid CLAUDE_SETUP_* setting")
        assert "probe_timeout" in err
