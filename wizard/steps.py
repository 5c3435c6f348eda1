"""Setup steps - one descriptor per checklist item.

Each step exposes three hooks the driver calls in order:

    describe(ctx)  report current state (never mutates)
    confirm(ctx)   decide whether to mutate; prompts the user if needed
    apply(ctx)     perform the mutation

A step with nothing to change returns False from confirm(). Steps that
mutate unconditionally (directory creation, hook permissions) return True
without prompting.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from core.config import (
    CHECKED_FILES,
    COMMUNICATION_STYLE_FILE,
    ENV_EXAMPLE_FILE,
    ENV_FILE,
    GITIGNORE_ENTRIES,
    GITIGNORE_FILE,
    HOOK_SCRIPT_GLOB,
    HOOKS_EXAMPLES_DIR,
    INITIAL_COMMIT_MESSAGE,
    MCP_CONFIG_FILE,
    MCP_EXAMPLE_FILE,
    PERSONAL_RULES_DIR,
    PROJECT_PLACEHOLDER,
    REQUIRED_DIRS,
    TEMPLATE_FILE,
    Settings,
)
from core.console import BLUE, GREEN, YELLOW, Console
from core.files import (
    audit_files,
    derive_env_example,
    ensure_directories,
    make_executable,
    replace_placeholder,
    write_if_absent,
)
from core.ignore import append_entries, is_ignored, missing_entries
from core.tools import (
    ToolFound,
    ToolProbe,
    commit_all,
    git_init,
    has_commits,
    is_git_repo,
    open_in_editor,
    probe_tool,
)
from wizard.content import (
    BANNER,
    ENV_TEMPLATE,
    HELPFUL_COMMANDS,
    IMPORTANT_FILES,
    INSTALL_HINTS,
    INTRO,
    MCP_SERVERS,
    NEXT_STEPS,
    PREFERENCE_FILES,
    TOOL_LABELS,
)

log = logging.getLogger("claude_setup.steps")


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@dataclass
class SetupContext:
    """State shared by all steps of one wizard run."""

    project_dir: Path
    console: Console
    settings: Settings
    in_git_repo: bool = False
    tools: dict[str, ToolProbe] = field(default_factory=dict)

    def path(self, rel_path: str) -> Path:
        return self.project_dir / rel_path

    def git_repo(self) -> bool:
        """Re-check git state (a step may have run git init)."""
        self.in_git_repo = is_git_repo(self.project_dir, self.settings.git_binary)
        return self.in_git_repo


class Step:
    """Base step. Subclasses override the hooks they need."""

    # Section header printed before describe(); empty for none
    title = ""

    def describe(self, ctx: SetupContext) -> None:
        pass

    def confirm(self, ctx: SetupContext) -> bool:
        return False

    def apply(self, ctx: SetupContext) -> None:
        pass


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


class WelcomeStep(Step):
    def describe(self, ctx: SetupContext) -> None:
        console = ctx.console
        console.highlight(BANNER, BLUE)
        console.echo(INTRO)
        console.echo()


class RepositoryCheckStep(Step):
    """Offer git init when the project is not under version control."""

    def describe(self, ctx: SetupContext) -> None:
        if not ctx.git_repo():
            ctx.console.warning("Not in a git repository")

    def confirm(self, ctx: SetupContext) -> bool:
        if ctx.in_git_repo:
            return False
        return ctx.console.prompt_yn("Initialize git repository?")

    def apply(self, ctx: SetupContext) -> None:
        result = git_init(ctx.project_dir, ctx.settings.git_binary)
        if result.ok:
            ctx.in_git_repo = True
            ctx.console.success("Git repository initialized")
        else:
            ctx.console.warning(f"git init failed: {result.summary or 'unknown error'}")


class ToolDetectionStep(Step):
    title = "Checking Prerequisites"

    def describe(self, ctx: SetupContext) -> None:
        settings = ctx.settings
        for name, binary in (("claude", settings.claude_binary), ("node", settings.node_binary)):
            probe = probe_tool(binary, timeout=settings.probe_timeout)
            ctx.tools[name] = probe
            label = TOOL_LABELS[name]
            if isinstance(probe, ToolFound):
                ctx.console.success(f"{label} installed: {probe.version}")
                continue
            log.debug("%s unavailable: %s", binary, probe.reason)
            suffix = " (required for MCP servers)" if name == "node" else ""
            ctx.console.warning(f"{label} not found{suffix}")
            ctx.console.info(INSTALL_HINTS[name])


class DirectoryStep(Step):
    """Create the configuration tree. Failures here abort the run."""

    title = "Verifying Directory Structure"

    def confirm(self, ctx: SetupContext) -> bool:
        return True

    def apply(self, ctx: SetupContext) -> None:
        for d, created in ensure_directories(ctx.project_dir, REQUIRED_DIRS):
            ctx.console.success(f"{d} created" if created else f"{d} exists")


class FileAuditStep(Step):
    title = "Checking Configuration Files"

    def describe(self, ctx: SetupContext) -> None:
        for f, present in audit_files(ctx.project_dir, CHECKED_FILES).items():
            if present:
                ctx.console.success(f"{f} exists")
            else:
                ctx.console.warning(f"{f} missing")


class TemplateStep(Step):
    """Fill the project description placeholder in CLAUDE.md."""

    title = "Project Configuration"

    def confirm(self, ctx: SetupContext) -> bool:
        if not ctx.path(TEMPLATE_FILE).is_file():
            return False
        return ctx.console.prompt_yn(f"Customize {TEMPLATE_FILE} for this project?")

    def apply(self, ctx: SetupContext) -> None:
        ctx.console.echo()
        description = ctx.console.prompt("Project description")
        if replace_placeholder(ctx.path(TEMPLATE_FILE), PROJECT_PLACEHOLDER, description):
            ctx.console.success("Updated CLAUDE.md with project information")
        else:
            log.debug("placeholder not found in %s; left unchanged", TEMPLATE_FILE)


class EnvFileStep(Step):
    title = "Environment Variables"

    def describe(self, ctx: SetupContext) -> None:
        if ctx.path(ENV_FILE).exists():
            ctx.console.success(f"{ENV_FILE} file already exists")

    def confirm(self, ctx: SetupContext) -> bool:
        if ctx.path(ENV_FILE).exists():
            return False
        return ctx.console.prompt_yn(f"Create {ENV_FILE} file?")

    def apply(self, ctx: SetupContext) -> None:
        if write_if_absent(ctx.path(ENV_FILE), ENV_TEMPLATE):
            ctx.console.success(f"Created {ENV_FILE} file template")
            ctx.console.info(f"Edit {ENV_FILE} to add your secrets")


class McpReviewStep(Step):
    title = "MCP Server Configuration"

    def describe(self, ctx: SetupContext) -> None:
        console = ctx.console
        console.info(f"Available MCP servers in {MCP_EXAMPLE_FILE}:")
        for name, desc in MCP_SERVERS:
            console.echo(f"  - {name}: {desc}")
        console.echo()
        console.info(f"Review {MCP_EXAMPLE_FILE} for complete list and configuration")
        console.echo()

        path = ctx.path(MCP_CONFIG_FILE)
        if not path.is_file():
            return
        console.success("MCP configuration exists")
        try:
            json.loads(path.read_text(encoding="utf-8", errors="replace"))
        except json.JSONDecodeError as e:
            console.warning(f"{MCP_CONFIG_FILE} is not valid JSON (line {e.lineno}: {e.msg})")

    def confirm(self, ctx: SetupContext) -> bool:
        if not ctx.path(MCP_CONFIG_FILE).is_file():
            return False
        return ctx.console.prompt_yn("Review MCP configuration?")

    def apply(self, ctx: SetupContext) -> None:
        ctx.console.echo()
        config = ctx.path(MCP_CONFIG_FILE).read_text(encoding="utf-8", errors="replace")
        ctx.console.echo(config.rstrip("\n"))
        ctx.console.echo()


class PreferencesStep(Step):
    title = "Personal Preferences"

    def confirm(self, ctx: SetupContext) -> bool:
        return ctx.console.prompt_yn("Customize personal preferences now?")

    def apply(self, ctx: SetupContext) -> None:
        console = ctx.console
        console.echo()
        console.info(f"Personal preferences are in {PERSONAL_RULES_DIR}/")
        console.info("You can customize these files:")
        for name, desc in PREFERENCE_FILES:
            console.echo(f"  - {name}: {desc}")
        console.echo()

        target = Path(COMMUNICATION_STYLE_FILE).name
        if not console.prompt_yn(f"Open {target} in editor?"):
            return
        result = open_in_editor(ctx.settings.editor, ctx.path(COMMUNICATION_STYLE_FILE))
        if result.ok:
            console.success(f"Updated {target}")
        else:
            console.warning(f"Editor failed: {result.summary or 'non-zero exit'}")


class HooksStep(Step):
    title = "Setting Up Hooks"

    def confirm(self, ctx: SetupContext) -> bool:
        return ctx.path(HOOKS_EXAMPLES_DIR).is_dir()

    def apply(self, ctx: SetupContext) -> None:
        updated = make_executable(ctx.path(HOOKS_EXAMPLES_DIR), HOOK_SCRIPT_GLOB)
        log.debug("executable hooks: %s", ", ".join(updated) or "(none)")
        ctx.console.success("Made hook scripts executable")


class GitignoreStep(Step):
    """Append required entries missing from .gitignore (git repos only)."""

    title = "Git Configuration"

    def __init__(self) -> None:
        self.missing: list[str] = []

    def describe(self, ctx: SetupContext) -> None:
        self.missing = []
        if not ctx.git_repo():
            return
        self.missing = missing_entries(ctx.path(GITIGNORE_FILE), GITIGNORE_ENTRIES)
        if self.missing:
            ctx.console.warning(f"Some entries missing from {GITIGNORE_FILE}")
        else:
            ctx.console.success(f"{GITIGNORE_FILE} properly configured")

    def confirm(self, ctx: SetupContext) -> bool:
        if not self.missing:
            return False
        return ctx.console.prompt_yn(f"Add missing entries to {GITIGNORE_FILE}?")

    def apply(self, ctx: SetupContext) -> None:
        append_entries(ctx.path(GITIGNORE_FILE), self.missing)
        ctx.console.success(f"Updated {GITIGNORE_FILE}")


class SecretsIgnoredStep(Step):
    """Warn when .env is not effectively ignored by git."""

    def describe(self, ctx: SetupContext) -> None:
        if not ctx.in_git_repo:
            return
        if not is_ignored(ctx.path(GITIGNORE_FILE), ENV_FILE):
            ctx.console.warning(
                f"{ENV_FILE} is not ignored by {GITIGNORE_FILE} - secrets could be committed"
            )


class InitialCommitStep(Step):
    def confirm(self, ctx: SetupContext) -> bool:
        if not ctx.in_git_repo or has_commits(ctx.project_dir, ctx.settings.git_binary):
            return False
        return ctx.console.prompt_yn("Create initial git commit?")

    def apply(self, ctx: SetupContext) -> None:
        result = commit_all(ctx.project_dir, INITIAL_COMMIT_MESSAGE, ctx.settings.git_binary)
        if result.ok:
            ctx.console.success("Created initial commit")
        else:
            ctx.console.warning(f"Initial commit failed: {result.summary or 'unknown error'}")


class EnvExampleStep(Step):
    """Derive .env.example from .env with values blanked."""

    def confirm(self, ctx: SetupContext) -> bool:
        if ctx.path(ENV_EXAMPLE_FILE).exists() or not ctx.path(ENV_FILE).is_file():
            return False
        return ctx.console.prompt_yn(f"Create {ENV_EXAMPLE_FILE} from {ENV_FILE}?")

    def apply(self, ctx: SetupContext) -> None:
        content = derive_env_example(ctx.path(ENV_FILE), ctx.path(ENV_EXAMPLE_FILE))
        if content is None:
            return
        # Undecodable bytes are shown as U+FFFD; the file keeps the originals
        shown = content.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
        ctx.console.echo(shown.rstrip("\n"))
        ctx.console.success(f"Created {ENV_EXAMPLE_FILE}")


class SummaryStep(Step):
    title = "Setup Complete!"

    def describe(self, ctx: SetupContext) -> None:
        console = ctx.console
        console.echo()
        console.echo("Your Claude Code configuration is ready!")
        console.echo()
        console.highlight("Next Steps:", GREEN)
        console.echo()
        for i, (heading, items) in enumerate(NEXT_STEPS, 1):
            console.echo(f"{i}. {heading}:")
            for item in items:
                console.echo(f"   - {item}")
            console.echo()
        console.highlight("Helpful Commands:", BLUE)
        for cmd, desc in HELPFUL_COMMANDS:
            console.echo(f"   {cmd:<25} # {desc}")
        console.echo()
        console.highlight("Important Files:", YELLOW)
        for path, desc in IMPORTANT_FILES:
            console.echo(f"   {path:<25} # {desc}")
        console.echo()

        if ctx.path(ENV_FILE).exists():
            console.warning(f"Remember to fill in your secrets in {ENV_FILE}")

        console.echo()
        console.highlight("Happy coding with Claude! 🚀", GREEN)
        console.echo()


class LaunchStep(Step):
    """Optionally hand the terminal over to the assistant binary."""

    def confirm(self, ctx: SetupContext) -> bool:
        if not isinstance(ctx.tools.get("claude"), ToolFound):
            return False
        return ctx.console.prompt_yn("Start Claude Code now?")

    def apply(self, ctx: SetupContext) -> None:
        ctx.console.echo()
        binary = ctx.settings.claude_binary
        log.debug("exec %s in %s", binary, ctx.project_dir)
        try:
            os.chdir(ctx.project_dir)
            os.execvp(binary, [binary])
        except OSError as e:
            ctx.console.warning(f"Could not start {binary}: {e}")


def default_steps() -> list[Step]:
    """The setup checklist, in run order."""
    return [
        WelcomeStep(),
        RepositoryCheckStep(),
        ToolDetectionStep(),
        DirectoryStep(),
        FileAuditStep(),
        TemplateStep(),
        EnvFileStep(),
        McpReviewStep(),
        PreferencesStep(),
        HooksStep(),
        GitignoreStep(),
        SecretsIgnoredStep(),
        InitialCommitStep(),
        EnvExampleStep(),
        SummaryStep(),
        LaunchStep(),
    ]
