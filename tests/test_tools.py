"""Tests for core/tools.py - probes, git and editor helpers."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from core.tools import (
    CommandResult,
    ToolFound,
    ToolUnavailable,
    commit_all,
    git_init,
    has_commits,
    is_git_repo,
    open_in_editor,
    probe_tool,
    run_command,
)


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRunCommand:
    def test_success(self) -> None:
        with patch("core.tools.subprocess.run", return_value=_completed(stdout="ok\n")):
            result = run_command(["echo", "ok"])
        assert result.ok
        assert result.stdout == "ok\n"

    def test_non_zero_exit(self) -> None:
        with patch("core.tools.subprocess.run", return_value=_completed(1, stderr="fatal: nope\n")):
            result = run_command(["git", "status"])
        assert not result.ok
        assert result.summary == "fatal: nope"

    def test_missing_binary(self) -> None:
        with patch("core.tools.subprocess.run", side_effect=FileNotFoundError):
            result = run_command(["nosuchtool"])
        assert not result.ok
        assert "not found" in result.summary

    def test_timeout(self) -> None:
        with patch(
            "core.tools.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="node", timeout=1),
        ):
            result = run_command(["node", "--version"], timeout=1)
        assert not result.ok
        assert "timed out" in result.summary

    def test_os_error(self) -> None:
        with patch("core.tools.subprocess.run", side_effect=PermissionError("denied")):
            result = run_command(["./script"])
        assert not result.ok
        assert result.summary == "denied"


class TestProbeTool:
    """Probes return explicit outcomes instead of raising."""

    def test_not_on_path(self) -> None:
        with patch("core.tools.shutil.which", return_value=None):
            probe = probe_tool("claude")
        assert probe == ToolUnavailable(name="claude", reason="not found on PATH")

    def test_found_with_version(self) -> None:
        with (
            patch("core.tools.shutil.which", return_value="/usr/bin/node"),
            patch("core.tools.subprocess.run", return_value=_completed(stdout="v20.11.0\n")),
        ):
            probe = probe_tool("node")
        assert isinstance(probe, ToolFound)
        assert probe.version == "v20.11.0"
        assert probe.path == "/usr/bin/node"

    def test_version_query_fails(self) -> None:
        with (
            patch("core.tools.shutil.which", return_value="/usr/local/bin/claude"),
            patch("core.tools.subprocess.run", return_value=_completed(1)),
        ):
            probe = probe_tool("claude")
        assert isinstance(probe, ToolFound)
        assert probe.version == "unknown"

    def test_multiline_version_keeps_first_line(self) -> None:
        with (
            patch("core.tools.shutil.which", return_value="/usr/bin/git"),
            patch("core.tools.subprocess.run", return_value=_completed(stdout="1.2.3\nextra\n")),
        ):
            probe = probe_tool("git")
        assert isinstance(probe, ToolFound)
        assert probe.version == "1.2.3"


class TestGitHelpers:
    def test_missing_git_is_not_a_repo(self, tmp_path: Path) -> None:
        with patch("core.tools.subprocess.run", side_effect=FileNotFoundError):
            assert is_git_repo(tmp_path) is False

    def test_rev_parse_args(self, tmp_path: Path) -> None:
        with patch("core.tools.subprocess.run", return_value=_completed(stdout=".git\n")) as mock_run:
            assert is_git_repo(tmp_path) is True
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "rev-parse", "--git-dir"]
        assert kwargs["cwd"] == tmp_path

    def test_has_commits(self, tmp_path: Path) -> None:
        with patch("core.tools.subprocess.run", return_value=_completed(128)):
            assert has_commits(tmp_path) is False

    def test_commit_all_stops_when_add_fails(self, tmp_path: Path) -> None:
        with patch(
            "core.tools.subprocess.run", return_value=_completed(1, stderr="fatal: add failed"),
        ) as mock_run:
            result = commit_all(tmp_path, "Initial commit")
        assert not result.ok
        assert mock_run.call_count == 1

    def test_commit_all(self, tmp_path: Path) -> None:
        with patch(
            "core.tools.subprocess.run", side_effect=[_completed(), _completed(stdout="1 file")],
        ) as mock_run:
            result = commit_all(tmp_path, "Initial commit")
        assert result.ok
        assert mock_run.call_args_list[0].args[0] == ["git", "add", "."]
        assert mock_run.call_args_list[1].args[0] == ["git", "commit", "-m", "Initial commit"]


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRealGit:
    def test_init_then_detect(self, tmp_path: Path) -> None:
        result = git_init(tmp_path)
        assert result.ok
        assert is_git_repo(tmp_path) is True
        assert has_commits(tmp_path) is False


class TestOpenInEditor:
    def test_runs_editor_with_args(self, tmp_path: Path) -> None:
        target = tmp_path / "style.md"
        with patch("core.tools.subprocess.call", return_value=0) as mock_call:
            result = open_in_editor("code --wait", target)
        assert result == CommandResult(ok=True)
        mock_call.assert_called_once_with(["code", "--wait", str(target)])

    def test_empty_editor_falls_back(self, tmp_path: Path) -> None:
        with patch("core.tools.subprocess.call", return_value=0) as mock_call:
            open_in_editor("", tmp_path / "x.md")
        assert mock_call.call_args.args[0][0] == "nano"

    def test_missing_editor(self, tmp_path: Path) -> None:
        with patch("core.tools.subprocess.call", side_effect=FileNotFoundError):
            result = open_in_editor("nosuch-editor", tmp_path / "x.md")
        assert not result.ok
        assert "nosuch-editor" in result.summary

    def test_non_zero_exit(self, tmp_path: Path) -> None:
        with patch("core.tools.subprocess.call", return_value=1):
            result = open_in_editor("vim", tmp_path / "x.md")
        assert not result.ok
