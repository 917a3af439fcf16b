"""Display helpers and formatters for the CLI.

Contains Rich formatting for approval statuses and per-approver signals.
"""
from __future__ import annotations

from rich.table import Table
from rich.text import Text

from approval_gate.models import ApprovalResult, ApprovalStatus

# Status display names and colors
STATUS_DISPLAY: dict[ApprovalStatus, tuple[str, str]] = {
    ApprovalStatus.APPROVED: ("Approved", "green bold"),
    ApprovalStatus.DENIED: ("Denied", "red bold"),
    ApprovalStatus.PENDING: ("Pending", "yellow"),
}


def format_status(status: ApprovalStatus) -> Text:
    """Format a status enum as colored text."""
    display_name, style = STATUS_DISPLAY.get(status, (status.name, "white"))
    return Text(display_name, style=style)


def build_signal_table(result: ApprovalResult, title: str = "Approvers") -> Table:
    """Build a table of each approver's latest signal."""
    table = Table(title=title)
    table.add_column("Approver", style="cyan")
    table.add_column("Signal")

    for login, signal in result.signals.items():
        table.add_row(login, format_status(signal))

    return table
