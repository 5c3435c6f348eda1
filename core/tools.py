"""External tool probes and git helpers.

Every subprocess the wizard launches goes through here. Failures never
raise: probes return ToolFound/ToolUnavailable, commands return a
CommandResult with ok=False.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from core.config import DEFAULT_EDITOR, DEFAULT_PROBE_TIMEOUT

log = logging.getLogger("claude_setup.tools")


# ---------------------------------------------------------------------------
# Probe outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolFound:
    """Binary is on PATH. version is "unknown" when the query failed."""

    name: str
    version: str
    path: str = ""


@dataclass(frozen=True)
class ToolUnavailable:
    """Binary is missing or could not be executed."""

    name: str
    reason: str


ToolProbe = Union[ToolFound, ToolUnavailable]


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a best-effort command."""

    ok: bool
    stdout: str = ""
    stderr: str = ""

    @property
    def summary(self) -> str:
        """First non-empty line of stderr (or stdout) for warnings."""
        for text in (self.stderr, self.stdout):
            for line in text.splitlines():
                if line.strip():
                    return line.strip()
        return ""


# ---------------------------------------------------------------------------
# Running commands
# ---------------------------------------------------------------------------


def run_command(
    args: list[str],
    cwd: Path | None = None,
    timeout: float | None = DEFAULT_PROBE_TIMEOUT,
) -> CommandResult:
    """Run a command and capture its output. Never raises."""
    log.debug("run: %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            args, cwd=cwd, capture_output=True, text=True, timeout=timeout,
        )
    except FileNotFoundError:
        log.debug("%s: not found", args[0])
        return CommandResult(ok=False, stderr=f"{args[0]}: command not found")
    except subprocess.TimeoutExpired:
        log.debug("%s: timed out after %ss", args[0], timeout)
        return CommandResult(ok=False, stderr=f"{args[0]}: timed out")
    except OSError as e:
        log.debug("%s: %s", args[0], e)
        return CommandResult(ok=False, stderr=str(e))
    if result.returncode != 0:
        log.debug("%s exited %d: %s", args[0], result.returncode, result.stderr.strip())
    return CommandResult(
        ok=result.returncode == 0, stdout=result.stdout, stderr=result.stderr,
    )


def probe_tool(
    binary: str,
    version_args: tuple[str, ...] = ("--version",),
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> ToolProbe:
    """Look up a binary and query its version string."""
    path = shutil.which(binary)
    if path is None:
        return ToolUnavailable(name=binary, reason="not found on PATH")

    result = run_command([path, *version_args], timeout=timeout)
    version = result.stdout.strip().splitlines()[0] if result.ok and result.stdout.strip() else ""
    return ToolFound(name=binary, version=version or "unknown", path=path)


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------


def is_git_repo(project_dir: Path, git: str = "git") -> bool:
    """True if project_dir is inside a git work tree. Missing git -> False."""
    return run_command([git, "rev-parse", "--git-dir"], cwd=project_dir).ok


def has_commits(project_dir: Path, git: str = "git") -> bool:
    """True if the repository has at least one commit."""
    return run_command([git, "log", "-1"], cwd=project_dir).ok


def git_init(project_dir: Path, git: str = "git") -> CommandResult:
    return run_command([git, "init"], cwd=project_dir)


def commit_all(project_dir: Path, message: str, git: str = "git") -> CommandResult:
    """Stage everything and create one commit."""
    added = run_command([git, "add", "."], cwd=project_dir, timeout=120)
    if not added.ok:
        return added
    return run_command([git, "commit", "-m", message], cwd=project_dir, timeout=120)


# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------


def open_in_editor(editor: str, path: Path) -> CommandResult:
    """Run an interactive editor on path, blocking until it exits.

    The editor value may carry arguments (e.g. "code --wait").
    """
    args = (shlex.split(editor) or [DEFAULT_EDITOR]) + [str(path)]
    log.debug("editor: %s", " ".join(args))
    try:
        returncode = subprocess.call(args)
    except FileNotFoundError:
        return CommandResult(ok=False, stderr=f"{args[0]}: command not found")
    except OSError as e:
        return CommandResult(ok=False, stderr=str(e))
    return CommandResult(ok=returncode == 0)
