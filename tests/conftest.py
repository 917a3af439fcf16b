"""Shared fixtures for approval-gate tests."""

import pytest

from approval_gate.config import ApprovalConfig, GitHubConfig


@pytest.fixture
def config(tmp_path):
    """Config rooted in a temporary repo."""
    return ApprovalConfig(
        repo_root=str(tmp_path),
        approvers=["login1", "login2"],
        github=GitHubConfig(repo="octo/widgets"),
    )


@pytest.fixture
def config_file(tmp_path):
    """Write an approval.yaml and return its path."""
    path = tmp_path / "approval.yaml"
    path.write_text(
        f"repo_root: {tmp_path}\n"
        "approvers:\n"
        "  - login1\n"
        "  - login2\n"
        "github:\n"
        "  repo: octo/widgets\n"
        "poll:\n"
        "  interval_seconds: 5\n"
        "  max_polls: 3\n"
    )
    return path
