"""
Configuration loading and validation for Approval Gate.

This module handles:
- Loading approval.yaml from the repo root
- Environment variable resolution (${VAR} syntax)
- Validation of required fields (github.repo, approvers)
- Default values for optional fields
- Resolving a relative repo_root against the config file directory
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

DEFAULT_CONFIG_FILE = "approval.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


@dataclass
class GitHubConfig:
    """GitHub repository configuration."""
    repo: str                                  # Repository in "owner/repo" format
    token_env_var: str = "GITHUB_TOKEN"        # Environment variable passed to gh as GH_TOKEN
    timeout_seconds: int = 30                  # gh command timeout in seconds

    def get_token(self) -> Optional[str]:
        """Get the GitHub token from environment, if set."""
        return os.environ.get(self.token_env_var) or None


@dataclass
class PollConfig:
    """Polling configuration for the watch command."""
    interval_seconds: int = 60                 # Delay between polls
    max_polls: int = 0                         # 0 means poll until decided


@dataclass
class ApprovalConfig:
    """
    Main configuration for Approval Gate.

    This is the top-level config loaded from approval.yaml.
    """
    # Paths
    repo_root: str = "."
    state_dir: str = ".approval"

    # Authorized approver logins, in configured order
    approvers: list[str] = field(default_factory=list)

    # Nested configurations
    github: GitHubConfig = field(default_factory=lambda: GitHubConfig(repo=""))
    poll: PollConfig = field(default_factory=PollConfig)

    def __post_init__(self) -> None:
        """Convert paths to absolute paths based on repo_root."""
        self.repo_root = str(Path(self.repo_root).absolute())

    @property
    def state_path(self) -> Path:
        """Absolute path to the state directory."""
        return Path(self.repo_root) / self.state_dir

    @property
    def logs_path(self) -> Path:
        """Absolute path to logs directory."""
        return self.state_path / "logs"


_REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _expand_env(value: Any, key: str) -> Any:
    """
    Expand ${VAR} references in every string under value.

    key is the dotted config key of value, used in error messages.
    Lists keep their shape, so "approvers: ${APPROVERS}" stays a single
    comma-separated string for parse_approvers to split.
    """
    if isinstance(value, dict):
        return {k: _expand_env(v, f"{key}.{k}" if key else str(k)) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(item, f"{key}[{i}]") for i, item in enumerate(value)]
    if not isinstance(value, str):
        return value

    def lookup(match: re.Match) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is None:
            raise ConfigError(f"{key}: environment variable ${{{match.group(1)}}} is not set")
        return env_value

    return _ENV_REF.sub(lookup, value)


def parse_approvers(value: Any) -> list[str]:
    """
    Normalize an approver list.

    Accepts a list or a comma-separated string. Entries are stripped,
    blanks dropped and duplicates removed keeping first occurrence.

    Raises:
        ConfigError: If the value has the wrong type or no approvers remain.
    """
    if value is None:
        items: list[Any] = []
    elif isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = value
    else:
        raise ConfigError("approvers must be a list or a comma-separated string")

    approvers: list[str] = []
    for item in items:
        login = str(item).strip()
        if login and login not in approvers:
            approvers.append(login)

    if not approvers:
        raise ConfigError("approvers must list at least one identity")
    return approvers


def _int_setting(data: dict[str, Any], key: str, default: int, minimum: int) -> int:
    """Read an integer setting, rejecting booleans and values below minimum."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(f"{key} must be an integer >= {minimum}, got {value!r}")
    return value


def _parse_github_config(data: dict[str, Any]) -> GitHubConfig:
    """Parse GitHub configuration from dict."""
    repo = data.get("repo")
    if not repo:
        raise ConfigError("github.repo is required")
    if not _REPO_PATTERN.match(str(repo)):
        raise ConfigError(f"github.repo must be in owner/repo format, got {repo!r}")
    return GitHubConfig(
        repo=str(repo),
        token_env_var=data.get("token_env_var", "GITHUB_TOKEN"),
        timeout_seconds=_int_setting(data, "timeout_seconds", 30, minimum=1),
    )


def _parse_poll_config(data: dict[str, Any]) -> PollConfig:
    """Parse poll configuration from dict."""
    return PollConfig(
        interval_seconds=_int_setting(data, "interval_seconds", 60, minimum=1),
        max_polls=_int_setting(data, "max_polls", 0, minimum=0),
    )


def load_config(config_path: Optional[str] = None) -> ApprovalConfig:
    """
    Load configuration from approval.yaml.

    A relative repo_root (including the default ".") is resolved against
    the directory holding the config file, not the process working
    directory.

    Args:
        config_path: Optional path to config file. If not provided,
                     looks for approval.yaml in current directory.

    Returns:
        ApprovalConfig: Loaded and validated configuration.

    Raises:
        ConfigError: If config is invalid or cannot be loaded.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE

    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(path, "r") as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")

    if not raw_data:
        raise ConfigError("Configuration file is empty")
    if not isinstance(raw_data, dict):
        raise ConfigError("Configuration file must contain a mapping")

    data = _expand_env(raw_data, "")

    # Validate required sections
    if "github" not in data:
        raise ConfigError("Missing required section: github")
    if "approvers" not in data:
        raise ConfigError("Missing required section: approvers")

    repo_root = Path(str(data.get("repo_root", ".")))
    if not repo_root.is_absolute():
        repo_root = path.absolute().parent / repo_root

    return ApprovalConfig(
        repo_root=str(repo_root),
        state_dir=data.get("state_dir", ".approval"),
        approvers=parse_approvers(data.get("approvers")),
        github=_parse_github_config(data.get("github") or {}),
        poll=_parse_poll_config(data.get("poll") or {}),
    )
