"""
GitHub comment source for Approval Gate.

Fetches the comment history and open/closed state of an issue or pull
request through the gh CLI. Pull requests share the issue comment API, so
one source serves both.

The source only materializes data for the aggregator; it never decides
anything itself and does not retry failed commands.
"""

from __future__ import annotations

import json
import os
import subprocess
from typing import TYPE_CHECKING, Any, Optional

from approval_gate.errors import CommentSourceError
from approval_gate.models import Comment, ItemState

if TYPE_CHECKING:
    from approval_gate.config import ApprovalConfig
    from approval_gate.logger import ApprovalLogger


def _decode_pages(output: str) -> list[Any]:
    """
    Decode `gh api --paginate` output.

    gh prints one JSON array per page back to back ("[...][...]"), so the
    pages are decoded one at a time and concatenated in order.
    """
    decoder = json.JSONDecoder()
    items: list[Any] = []
    idx = 0
    text = output.strip()

    while idx < len(text):
        page, end = decoder.raw_decode(text, idx)
        if not isinstance(page, list):
            raise ValueError(f"Expected a JSON array page, got {type(page).__name__}")
        items.extend(page)
        idx = end
        while idx < len(text) and text[idx].isspace():
            idx += 1

    return items


class IssueCommentSource:
    """
    Reads issue comments and state from GitHub via the gh CLI.

    Authentication is left to gh; when the configured token variable is
    set it is forwarded as GH_TOKEN.
    """

    def __init__(
        self,
        config: ApprovalConfig,
        logger: Optional[ApprovalLogger] = None,
    ) -> None:
        """
        Initialize the comment source.

        Args:
            config: ApprovalConfig with github.repo and repo_root.
            logger: Optional logger for recording operations.
        """
        self.config = config
        self._logger = logger
        self._gh_available: Optional[bool] = None

    def _log(
        self,
        event_type: str,
        data: Optional[dict] = None,
        level: str = "info",
    ) -> None:
        """Log an event if logger is configured."""
        if self._logger:
            log_data = {"component": "issue_comments"}
            if data:
                log_data.update(data)
            self._logger.log(event_type, log_data, level=level)

    def _env(self) -> dict[str, str]:
        env = dict(os.environ)
        token = self.config.github.get_token()
        if token:
            env["GH_TOKEN"] = token
        return env

    def _check_gh_available(self) -> bool:
        """
        Check if gh CLI is available and authenticated.

        Returns:
            True if gh CLI is available and authenticated.
        """
        if self._gh_available is not None:
            return self._gh_available

        try:
            result = subprocess.run(
                ["gh", "auth", "status"],
                capture_output=True,
                text=True,
                timeout=10,
                env=self._env(),
            )
            self._gh_available = result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            self._gh_available = False

        return self._gh_available

    def _run_gh_command(self, args: list[str]) -> str:
        """
        Run a gh CLI command and return its stdout.

        Raises:
            CommentSourceError: If gh is unavailable, times out or fails.
        """
        if not self._check_gh_available():
            raise CommentSourceError("gh CLI not available or not authenticated")

        try:
            result = subprocess.run(
                ["gh"] + args,
                cwd=str(self.config.repo_root),
                capture_output=True,
                text=True,
                timeout=self.config.github.timeout_seconds,
                env=self._env(),
            )
        except subprocess.TimeoutExpired:
            raise CommentSourceError(f"gh {' '.join(args[:2])} timed out")
        except OSError as e:
            # Missing repo_root directory or gh binary removed since the auth check
            raise CommentSourceError(f"gh {' '.join(args[:2])} could not run: {e}")

        if result.returncode != 0:
            self._log("gh_command_failed", {
                "args": args,
                "error": result.stderr[:200],
            }, level="warn")
            raise CommentSourceError(
                f"gh {' '.join(args[:2])} failed",
                stderr=result.stderr,
                returncode=result.returncode,
            )

        return result.stdout

    def _issue_endpoint(self, number: int) -> str:
        return f"repos/{self.config.github.repo}/issues/{number}"

    def fetch_comments(self, number: int) -> list[Comment]:
        """
        Fetch all comments on an issue or pull request, oldest first.

        Args:
            number: The issue or pull request number.

        Returns:
            List of Comment records in posting order.
        """
        stdout = self._run_gh_command([
            "api", f"{self._issue_endpoint(number)}/comments", "--paginate",
        ])

        try:
            payloads = _decode_pages(stdout)
        except ValueError as e:
            raise CommentSourceError(f"Invalid comment JSON from gh: {e}")

        comments = [Comment.from_github(p) for p in payloads]
        self._log("comments_fetched", {"number": number, "count": len(comments)})
        return comments

    def fetch_state(self, number: int) -> ItemState:
        """
        Fetch the open/closed state of an issue or pull request.

        Args:
            number: The issue or pull request number.

        Returns:
            ItemState of the item.
        """
        stdout = self._run_gh_command([
            "api", self._issue_endpoint(number), "-q", ".state",
        ])

        try:
            state = ItemState.parse(stdout)
        except ValueError as e:
            raise CommentSourceError(str(e))

        self._log("state_fetched", {"number": number, "state": state.value})
        return state
