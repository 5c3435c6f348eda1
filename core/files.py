"""Filesystem operations behind the setup steps.

Directory creation raises OSError on failure and callers treat it as
fatal. make_executable() is best-effort and skips files it cannot chmod.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path

log = logging.getLogger("claude_setup.files")

BACKUP_SUFFIX = ".bak"


def ensure_directory(project_dir: Path, rel_dir: str) -> bool:
    """Create project_dir/rel_dir with parents. Returns True if created.

    Raises OSError if the directory cannot be created (including when a
    regular file sits at that path); callers treat that as fatal.
    """
    path = project_dir / rel_dir
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    log.debug("created %s", path)
    return True


def ensure_directories(project_dir: Path, dirs: list[str]) -> list[tuple[str, bool]]:
    """Create any missing directories. Returns (path, created) per entry."""
    return [(d, ensure_directory(project_dir, d)) for d in dirs]


def audit_files(project_dir: Path, files: list[str]) -> dict[str, bool]:
    """Map each relative path to whether it exists as a regular file."""
    return {f: (project_dir / f).is_file() for f in files}


def replace_placeholder(path: Path, placeholder: str, value: str) -> bool:
    """Replace every occurrence of placeholder in path with value.

    Works on bytes so files in any encoding keep every other byte as is.
    Returns True if the file changed. A file without the placeholder is
    left untouched (not even rewritten). Any stale backup artifact next
    to the file is removed either way.
    """
    content = path.read_bytes()
    needle = placeholder.encode("utf-8")
    changed = needle in content
    if changed:
        path.write_bytes(content.replace(needle, value.encode("utf-8")))
        log.debug("replaced %r in %s", placeholder, path)

    backup = path.with_name(path.name + BACKUP_SUFFIX)
    backup.unlink(missing_ok=True)
    return changed


def write_if_absent(path: Path, content: str) -> bool:
    """Write content to path unless it already exists. Returns True if written."""
    if path.exists():
        return False
    path.write_text(content, encoding="utf-8")
    return True


def strip_env_values(content: str) -> str:
    """Turn KEY=VALUE lines into KEY= and drop comment lines.

    A line transform, not a parser: quoting and multi-line values are not
    understood. Lines without "=" pass through unchanged.
    """
    lines = []
    for line in content.splitlines():
        if line.startswith("#"):
            continue
        key, sep, _ = line.partition("=")
        lines.append(f"{key}=" if sep else line)
    return "\n".join(lines) + "\n" if lines else ""


def derive_env_example(env_path: Path, example_path: Path) -> str | None:
    """Write example_path from env_path with values stripped.

    Bytes that are not valid UTF-8 round-trip unchanged through
    surrogateescape. Returns the written content, or None when the example
    already exists or the source is missing.
    """
    if example_path.exists() or not env_path.is_file():
        return None
    content = strip_env_values(
        env_path.read_text(encoding="utf-8", errors="surrogateescape")
    )
    example_path.write_text(content, encoding="utf-8", errors="surrogateescape")
    return content


def make_executable(directory: Path, pattern: str) -> list[str]:
    """Add execute bits to files matching pattern. Returns updated names.

    Execute is granted wherever read is already granted (like chmod +x
    under a default umask). Per-file failures are logged and skipped.
    """
    updated = []
    for script in sorted(directory.glob(pattern)):
        if not script.is_file():
            continue
        try:
            mode = script.stat().st_mode
            exec_bits = stat.S_IXUSR
            if mode & stat.S_IRGRP:
                exec_bits |= stat.S_IXGRP
            if mode & stat.S_IROTH:
                exec_bits |= stat.S_IXOTH
            script.chmod(mode | exec_bits)
        except OSError as e:
            log.debug("chmod +x %s failed: %s", script, e)
            continue
        updated.append(script.name)
    return updated
