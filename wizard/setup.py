"""claude-setup - project configuration wizard.

Walks the setup checklist in order: git repository, prerequisites,
directory tree, configuration files, CLAUDE.md customization, .env,
MCP servers, personal preferences, hooks, .gitignore, initial commit and
.env.example. Every mutation other than directory creation is confirmed
first, and every mutating step is safe to re-run.

Usage: claude-setup  (run in project root)
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import Settings, get_settings
from core.console import Console
from wizard.steps import SetupContext, Step, default_steps

log = logging.getLogger("claude_setup.wizard")


def run_steps(ctx: SetupContext, steps: list[Step]) -> None:
    """Drive each step through describe -> confirm -> apply."""
    for step in steps:
        name = type(step).__name__
        if step.title:
            ctx.console.header(step.title)
        step.describe(ctx)
        if step.confirm(ctx):
            log.debug("%s: applying", name)
            step.apply(ctx)
        else:
            log.debug("%s: skipped", name)


def run_setup_wizard(
    project_dir: Path,
    settings: Settings | None = None,
    console: Console | None = None,
    steps: list[Step] | None = None,
) -> int:
    """Run the setup wizard. Returns 0 on success, 1 on failure."""
    settings = settings or get_settings()
    console = console or Console(color=not settings.no_color)
    ctx = SetupContext(
        project_dir=project_dir.resolve(),
        console=console,
        settings=settings,
    )
    try:
        run_steps(ctx, default_steps() if steps is None else steps)
    except KeyboardInterrupt:
        console.echo()
        console.info("Setup cancelled.")
        return 1
    except EOFError:
        console.error("No terminal input available. Run claude-setup in an interactive terminal.")
        return 1
    except OSError as e:
        log.debug("aborting on filesystem error", exc_info=True)
        console.error(f"Setup failed: {e}")
        return 1
    return 0
