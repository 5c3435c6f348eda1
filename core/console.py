"""Coloured console output and prompt helpers for the setup wizard."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, TextIO

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
NC = "\033[0m"


@dataclass
class Console:
    """Output sink and input source shared by every wizard step.

    Streams default to the live sys.stdout/sys.stderr at write time so
    pytest's capsys sees the output.
    """

    color: bool = True
    out: TextIO | None = None
    err: TextIO | None = None
    input_fn: Callable[[str], str] | None = None

    # -- output -------------------------------------------------------------

    def _paint(self, color: str, text: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{NC}"

    def echo(self, msg: str = "") -> None:
        print(msg, file=self.out or sys.stdout)

    def header(self, title: str) -> None:
        self.echo()
        self.echo(self._paint(BLUE, f"=== {title} ==="))
        self.echo()

    def success(self, msg: str) -> None:
        self.echo(f"{self._paint(GREEN, '✓')} {msg}")

    def warning(self, msg: str) -> None:
        self.echo(f"{self._paint(YELLOW, '⚠')} {msg}")

    def info(self, msg: str) -> None:
        self.echo(f"{self._paint(BLUE, 'ℹ')} {msg}")

    def error(self, msg: str) -> None:
        print(f"{self._paint(RED, '✗')} {msg}", file=self.err or sys.stderr)

    def highlight(self, msg: str, color: str = GREEN) -> None:
        self.echo(self._paint(color, msg))

    # -- prompts ------------------------------------------------------------

    def _read(self, text: str) -> str:
        read = self.input_fn or input
        return read(text)

    def prompt(self, question: str) -> str:
        """Free-text prompt. Returns the stripped answer."""
        return self._read(f"{question}: ").strip()

    def prompt_yn(self, question: str, default: bool = False) -> bool:
        """Yes/no prompt. Any answer starting with y/Y counts as yes."""
        suffix = "[Y/n]" if default else "[y/N]"
        answer = self._read(f"{question} {suffix}: ").strip()
        if not answer:
            return default
        return answer[0] in ("y", "Y")
