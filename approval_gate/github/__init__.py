"""
GitHub integration for Approval Gate.

This module provides:
- IssueCommentSource: Fetches issue/PR comments and state via the gh CLI
"""

from approval_gate.github.issue_comments import IssueCommentSource

__all__ = ["IssueCommentSource"]
