"""
Audit log for approval checks.

Every check of an item appends JSON lines to <state_dir>/logs/<item>.jsonl:
one "approval_evaluated" record per evaluation (with the signal of each
approver), plus failures reported by the comment source. A watch run wraps
its polls in watch_start / watch_end records and tags each poll with the
watch id and attempt number, so one file replays the whole history of an
item.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from approval_gate.config import ApprovalConfig
from approval_gate.models import ApprovalResult


class ApprovalLogger:
    """
    Append-only JSONL log for one reviewed item.

    Entries carry timestamp, level, event, item and data; entries written
    during a watch also carry watch_id.
    """

    def __init__(self, item_id: str, config: ApprovalConfig) -> None:
        self.item_id = item_id
        self.path: Path = config.logs_path / f"{item_id}.jsonl"
        self._watch_id: Optional[str] = None
        self._polls = 0

    def log(
        self,
        event_type: str,
        data: Optional[dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """Append one entry."""
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "event": event_type,
            "item": self.item_id,
            "data": data or {},
        }
        if self._watch_id:
            entry["watch_id"] = self._watch_id

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a") as f:
            f.write(json.dumps(entry, default=str) + "\n")

    def record_evaluation(self, number: int, result: ApprovalResult) -> None:
        """Record a decision and the per-approver signals behind it."""
        data: dict[str, Any] = {"number": number, **result.to_dict()}
        if self._watch_id:
            self._polls += 1
            data["attempt"] = self._polls
        self.log("approval_evaluated", data)

    def record_failure(self, number: int, error: Exception) -> None:
        """Record an error that left the decision undetermined."""
        self.log("evaluation_failed", {
            "number": number,
            "error_type": type(error).__name__,
            "error": str(error),
            "author": getattr(error, "author", None),
        }, level="error")

    @contextmanager
    def watch(self, watch_id: str) -> Iterator[ApprovalLogger]:
        """
        Tag entries written inside the block with watch_id.

        The closing watch_end record holds the number of evaluations made.
        """
        self._watch_id = watch_id
        self._polls = 0
        self.log("watch_start")
        try:
            yield self
        finally:
            self.log("watch_end", {"polls": self._polls})
            self._watch_id = None
