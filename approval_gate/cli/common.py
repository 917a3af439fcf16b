"""Common utilities and global state for the CLI.

Contains project directory management, config loading, and exit codes.
This module should NOT import from command modules to avoid circular imports.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console

from approval_gate.models import ApprovalStatus

if TYPE_CHECKING:
    from approval_gate.config import ApprovalConfig

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_APPROVED = 0
EXIT_DENIED = 1
EXIT_ERROR = 2
EXIT_PENDING = 3

STATUS_EXIT_CODES: dict[ApprovalStatus, int] = {
    ApprovalStatus.APPROVED: EXIT_APPROVED,
    ApprovalStatus.DENIED: EXIT_DENIED,
    ApprovalStatus.PENDING: EXIT_PENDING,
}

# ============================================================================
# Global State
# ============================================================================

# Global project directory override (set via --project flag)
_project_dir: Optional[str] = None

# Console singleton
_console: Optional[Console] = None


def get_project_dir() -> Optional[str]:
    """Get the project directory override if set."""
    return _project_dir


def set_project_dir(path: Optional[str]) -> None:
    """Set the project directory override."""
    global _project_dir
    _project_dir = path


def get_console() -> Console:
    """Get or create the console singleton."""
    global _console
    if _console is None:
        _console = Console()
    return _console


# ============================================================================
# Config Helpers
# ============================================================================


def resolve_config_path(config_path: Optional[str]) -> str:
    """
    Resolve the config file path against the --project directory.

    Absolute paths are returned unchanged.
    """
    from approval_gate.config import DEFAULT_CONFIG_FILE

    path = Path(config_path or DEFAULT_CONFIG_FILE)
    project_dir = get_project_dir()
    if project_dir and not path.is_absolute():
        path = Path(project_dir) / path
    return str(path)


def load_cli_config(
    config_path: Optional[str] = None,
    approvers: Optional[list[str]] = None,
) -> "ApprovalConfig":
    """
    Load config for a command, applying --approver overrides.

    Raises:
        ConfigError: If the config is missing or invalid.
    """
    from approval_gate.config import load_config, parse_approvers

    config = load_config(resolve_config_path(config_path))
    if approvers:
        config.approvers = parse_approvers(approvers)
    return config
