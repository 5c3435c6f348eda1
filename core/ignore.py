"""Project .gitignore audit.

The required-entry check is a plain substring test against the file
contents. Because a substring hit does not prove git actually ignores the
path (".env.local" contains ".env"), is_ignored() compiles the file with
pathspec's gitignore rules for an effective-match check.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pathspec

log = logging.getLogger("claude_setup.ignore")


def read_gitignore(path: Path) -> str:
    """Return .gitignore contents, or "" when unreadable or missing."""
    if not path.is_file():
        return ""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.debug("cannot read %s: %s", path, e)
        return ""


def missing_entries(path: Path, required: list[str]) -> list[str]:
    """Required entries that do not appear anywhere in the file."""
    content = read_gitignore(path)
    return [entry for entry in required if entry not in content]


def append_entries(path: Path, entries: list[str]) -> None:
    """Append entries as new lines, keeping existing lines and their order.

    A missing trailing newline is added first so the first new entry does
    not merge into the last existing line.
    """
    if not entries:
        return
    existing = read_gitignore(path)
    prefix = "\n" if existing and not existing.endswith("\n") else ""
    with open(path, "a", encoding="utf-8") as f:
        f.write(prefix + "".join(f"{entry}\n" for entry in entries))


def load_ignore_spec(path: Path) -> pathspec.PathSpec:
    """Compile .gitignore into a PathSpec (comments and blanks skipped)."""
    lines = []
    for line in read_gitignore(path).splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            lines.append(stripped)
    return pathspec.PathSpec.from_lines("gitignore", lines)


def is_ignored(path: Path, rel_path: str) -> bool:
    """Check if rel_path (forward slashes) would be ignored by path."""
    return load_ignore_spec(path).match_file(rel_path)
