"""
claude-setup configuration - project paths, defaults, and runtime settings.

All modules import path constants from here. Paths are relative to the
project directory the wizard runs against; they are resolved through the
setup context, never against the process working directory.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Paths - the project configuration tree
# ---------------------------------------------------------------------------

CONFIG_SUBDIR = ".claude"
TEMPLATE_FILE = f"{CONFIG_SUBDIR}/CLAUDE.md"
HOOKS_EXAMPLES_DIR = f"{CONFIG_SUBDIR}/hooks/examples"
PERSONAL_RULES_DIR = f"{CONFIG_SUBDIR}/rules/personal"
COMMUNICATION_STYLE_FILE = f"{PERSONAL_RULES_DIR}/communication-style.md"

ENV_FILE = ".env"
ENV_EXAMPLE_FILE = ".env.example"
GITIGNORE_FILE = ".gitignore"
MCP_CONFIG_FILE = ".mcp.json"
MCP_EXAMPLE_FILE = ".mcp.example.json"

# Directories that must exist after the run (created with parents)
REQUIRED_DIRS = [
    CONFIG_SUBDIR,
    f"{CONFIG_SUBDIR}/rules",
    f"{CONFIG_SUBDIR}/rules/personal",
    f"{CONFIG_SUBDIR}/rules/project",
    f"{CONFIG_SUBDIR}/rules/examples",
    f"{CONFIG_SUBDIR}/skills",
    f"{CONFIG_SUBDIR}/skills/examples",
    f"{CONFIG_SUBDIR}/hooks",
    HOOKS_EXAMPLES_DIR,
    "docs",
]

# Files reported as present/missing; never created
CHECKED_FILES = [
    TEMPLATE_FILE,
    MCP_CONFIG_FILE,
    MCP_EXAMPLE_FILE,
    GITIGNORE_FILE,
    "README.md",
    "SETUP.md",
]

# Entries every project .gitignore should carry (substring match)
GITIGNORE_ENTRIES = [
    f"{CONFIG_SUBDIR}/settings.local.json",
    "CLAUDE.local.md",
    ENV_FILE,
    ".env.local",
    ".mcp.local.json",
]

HOOK_SCRIPT_GLOB = "*.sh"
PROJECT_PLACEHOLDER = "[Describe your project here]"
INITIAL_COMMIT_MESSAGE = "Initial commit with Claude Code template"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_EDITOR = "nano"
DEFAULT_PROBE_TIMEOUT = 10.0


class Settings(BaseSettings):
    """Wizard runtime configuration, read from CLAUDE_SETUP_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLAUDE_SETUP_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Editor for personal preference files (falls back to $EDITOR)
    editor: str = Field(
        default=DEFAULT_EDITOR,
        validation_alias=AliasChoices("CLAUDE_SETUP_EDITOR", "EDITOR"),
    )
    no_color: bool = Field(
        default=False,
        validation_alias=AliasChoices("CLAUDE_SETUP_NO_COLOR", "NO_COLOR"),
    )

    # External binaries
    claude_binary: str = "claude"
    node_binary: str = "node"
    git_binary: str = "git"
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT

    # Logging
    log_file: Path | None = None
    verbose: bool = False

    @field_validator("no_color", mode="before")
    @classmethod
    def parse_no_color(cls, value: object) -> object:
        """NO_COLOR convention: any non-empty value disables colour."""
        if isinstance(value, str):
            return value.strip().lower() not in ("", "0", "false", "no")
        return value


def get_settings() -> Settings:
    """Return settings instance."""
    return Settings()
