"""
Core data models for Approval Gate.

This module defines the structures shared by the classifier and aggregator:
- Comment records in posting order
- ItemState for the open/closed lifecycle of the reviewed item
- ApprovalStatus, used both as a per-approver signal and as the final decision
- ApprovalResult bundling the decision with the signals it was folded from
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ApprovalStatus(Enum):
    """
    Outcome of an approval evaluation.

    Doubles as the per-approver signal: every approver starts PENDING and
    moves to APPROVED or DENIED with their most recent keyword comment.
    """
    APPROVED = "approved"
    DENIED = "denied"
    PENDING = "pending"


class ItemState(Enum):
    """Lifecycle state of the reviewed item at evaluation time."""
    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def parse(cls, value: str) -> ItemState:
        """
        Parse a GitHub state string ("open" / "closed").

        Raises:
            ValueError: If the value is not a known state.
        """
        normalized = (value or "").strip().lower()
        for state in cls:
            if state.value == normalized:
                return state
        raise ValueError(f"Unknown item state: {value!r}")


@dataclass(frozen=True)
class Comment:
    """
    A single comment on the reviewed item.

    Attributes:
        author: Identity (login) of the commenter.
        body: Comment text. GitHub may report a null body.
    """
    author: str
    body: Optional[str]

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> Comment:
        """Build a Comment from a GitHub REST issue-comment object."""
        user = payload.get("user") or {}
        return cls(author=user.get("login", ""), body=payload.get("body"))


@dataclass
class ApprovalResult:
    """
    Result of evaluating an item's comment history.

    Attributes:
        status: The aggregate decision.
        signals: Latest signal per approver.
        item_state: State the decision was computed for.
    """
    status: ApprovalStatus
    signals: dict[str, ApprovalStatus] = field(default_factory=dict)
    item_state: ItemState = ItemState.OPEN

    @property
    def approved(self) -> bool:
        return self.status is ApprovalStatus.APPROVED

    @property
    def denied(self) -> bool:
        return self.status is ApprovalStatus.DENIED

    @property
    def pending(self) -> bool:
        return self.status is ApprovalStatus.PENDING

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "status": self.status.value,
            "item_state": self.item_state.value,
            "signals": {login: s.value for login, s in self.signals.items()},
        }
