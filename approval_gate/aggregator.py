"""
Approval aggregation over an item's comment history.

Walks comments in posting order, keeps the latest keyword signal per
approver, and folds the signals plus the item state into one decision:

- any DENIED signal vetoes the item
- unanimous APPROVED signals approve it
- otherwise it is PENDING, which becomes DENIED once the item is closed

An empty approver set is vacuously unanimous and yields APPROVED for an
open item. The configuration layer refuses empty approver lists, so only
direct callers of this module can reach that case.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from approval_gate.classifier import is_approved, is_denied
from approval_gate.errors import ClassificationError
from approval_gate.models import ApprovalResult, ApprovalStatus, Comment, ItemState


def latest_signals(
    comments: Sequence[Comment],
    approvers: Iterable[str],
) -> dict[str, ApprovalStatus]:
    """
    Compute the most recent signal for every approver.

    Args:
        comments: Comments in posting order (oldest first).
        approvers: Identities allowed to vote.

    Returns:
        Dict mapping each approver to APPROVED, DENIED or PENDING.

    Raises:
        ClassificationError: If an approver's comment body cannot be read.
    """
    signals: dict[str, ApprovalStatus] = {
        login: ApprovalStatus.PENDING for login in approvers
    }

    for comment in comments:
        if comment.author not in signals:
            continue

        try:
            if is_approved(comment.body):
                signals[comment.author] = ApprovalStatus.APPROVED
            elif is_denied(comment.body):
                signals[comment.author] = ApprovalStatus.DENIED
        except ClassificationError as e:
            e.author = comment.author
            raise

    return signals


def fold_signals(signals: Mapping[str, ApprovalStatus]) -> ApprovalStatus:
    """Fold per-approver signals into one open-item decision."""
    values = list(signals.values())
    if ApprovalStatus.DENIED in values:
        return ApprovalStatus.DENIED
    if all(v is ApprovalStatus.APPROVED for v in values):
        return ApprovalStatus.APPROVED
    return ApprovalStatus.PENDING


def _apply_item_state(status: ApprovalStatus, item_state: ItemState) -> ApprovalStatus:
    if item_state is ItemState.CLOSED and status is ApprovalStatus.PENDING:
        return ApprovalStatus.DENIED
    return status


def evaluate(
    comments: Sequence[Comment],
    approvers: Iterable[str],
    item_state: ItemState,
) -> ApprovalResult:
    """
    Evaluate an item and keep the per-approver signals.

    Args:
        comments: Comments in posting order (oldest first).
        approvers: Identities allowed to vote.
        item_state: Current lifecycle state of the item.

    Returns:
        ApprovalResult with the final decision and the signals behind it.
    """
    signals = latest_signals(comments, approvers)
    status = _apply_item_state(fold_signals(signals), item_state)
    return ApprovalResult(status=status, signals=signals, item_state=item_state)


def compute_approval(
    comments: Sequence[Comment],
    approvers: Iterable[str],
    item_state: ItemState,
) -> ApprovalStatus:
    """Compute the aggregate decision for an item."""
    return evaluate(comments, approvers, item_state).status
