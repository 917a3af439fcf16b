"""
Keyword classifier for approval comments.

A comment counts as a vote only when its whole body is one of the known
keywords, ignoring case and at most one trailing "." or "!". Questions
("approved?") and sentences that merely contain a keyword do not count.
"""

from __future__ import annotations

from typing import Any, Optional

from approval_gate.errors import ClassificationError
from approval_gate.models import ApprovalStatus

APPROVED_KEYWORDS: tuple[str, ...] = ("approved", "approve", "lgtm", "yes")
DENIED_KEYWORDS: tuple[str, ...] = ("denied", "deny", "no")

# Only one mark is stripped; "?" is never stripped.
STRIPPABLE_PUNCTUATION: tuple[str, ...] = (".", "!")


def _normalize(text: Any) -> str:
    if not isinstance(text, str):
        raise ClassificationError(
            f"Comment body must be a string, got {type(text).__name__}",
            body=text,
        )

    normalized = text.lower()
    if normalized.endswith(STRIPPABLE_PUNCTUATION):
        normalized = normalized[:-1]
    return normalized


def _matches(text: Any, keywords: tuple[str, ...]) -> bool:
    return _normalize(text) in keywords


def is_approved(text: Any) -> bool:
    """
    Check whether a comment body is an approval keyword.

    Raises:
        ClassificationError: If the body is not a string.
    """
    return _matches(text, APPROVED_KEYWORDS)


def is_denied(text: Any) -> bool:
    """
    Check whether a comment body is a denial keyword.

    Raises:
        ClassificationError: If the body is not a string.
    """
    return _matches(text, DENIED_KEYWORDS)


def classify(text: Any) -> Optional[ApprovalStatus]:
    """
    Classify a comment body.

    Returns:
        APPROVED or DENIED for keyword bodies, None for anything else.
    """
    if is_approved(text):
        return ApprovalStatus.APPROVED
    if is_denied(text):
        return ApprovalStatus.DENIED
    return None
