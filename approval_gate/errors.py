"""
Error types for Approval Gate.

This module provides:
- ApprovalGateError as the common base
- ClassificationError for comment bodies the classifier cannot read
- CommentSourceError for failures talking to GitHub through the gh CLI
"""

from __future__ import annotations

from typing import Any, Optional


class ApprovalGateError(Exception):
    """Base exception for Approval Gate errors."""


class ClassificationError(ApprovalGateError):
    """
    Raised when a comment body cannot be classified.

    Aggregation stops at the first such error; callers must treat the
    decision as undetermined.
    """

    def __init__(
        self,
        message: str,
        body: Any = None,
        author: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.body = body
        self.author = author


class CommentSourceError(ApprovalGateError):
    """Raised when comments or item state cannot be fetched."""

    def __init__(
        self,
        message: str,
        stderr: str = "",
        returncode: int = -1,
    ) -> None:
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode
