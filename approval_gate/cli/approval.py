"""
CLI commands for evaluating approvals.

Provides:
- classify: Classify a single comment body
- check: Evaluate an issue or pull request once
- watch: Re-evaluate until a decision is reached

check and watch exit with 0 (approved), 1 (denied), 3 (pending) or
2 when the decision could not be determined.
"""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, NoReturn, Optional

import typer
from rich.console import Console

from approval_gate.aggregator import evaluate
from approval_gate.classifier import classify
from approval_gate.cli.common import (
    EXIT_ERROR,
    STATUS_EXIT_CODES,
    get_console,
    load_cli_config,
)
from approval_gate.cli.display import build_signal_table, format_status
from approval_gate.config import ApprovalConfig, ConfigError
from approval_gate.errors import ApprovalGateError
from approval_gate.logger import ApprovalLogger
from approval_gate.models import ApprovalResult

if TYPE_CHECKING:
    from approval_gate.github import IssueCommentSource

console: Console = get_console()


def _get_source(config: ApprovalConfig, logger: ApprovalLogger) -> IssueCommentSource:
    """Get comment source instance."""
    from approval_gate.github import IssueCommentSource
    return IssueCommentSource(config, logger)


def _evaluate_item(
    config: ApprovalConfig,
    number: int,
    logger: ApprovalLogger,
) -> ApprovalResult:
    """Fetch an item's state and comments and evaluate them."""
    source = _get_source(config, logger)

    try:
        # Read state before comments so a vote posted just before closing is seen
        state = source.fetch_state(number)
        comments = source.fetch_comments(number)
        result = evaluate(comments, config.approvers, state)
    except ApprovalGateError as e:
        logger.record_failure(number, e)
        raise

    logger.record_evaluation(number, result)
    return result


def _undetermined(error: Exception) -> NoReturn:
    """Report an error and exit without a decision."""
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(EXIT_ERROR)


def _report(result: ApprovalResult, number: int) -> None:
    console.print(build_signal_table(result, title=f"#{number} ({result.item_state.value})"))
    console.print("Decision: ", format_status(result.status))


def classify_command(
    text: str = typer.Argument(..., help="Comment body to classify"),
) -> None:
    """
    Classify a single comment body.

    Prints approved, denied or none.

    Examples:
        approval-gate classify "LGTM!"
    """
    status = classify(text)
    console.print(status.value if status else "none")


def check_command(
    number: int = typer.Argument(..., help="Issue or pull request number"),
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to approval.yaml",
    ),
    approver: Optional[list[str]] = typer.Option(
        None, "--approver", "-a", help="Approver login (repeatable, overrides config)",
    ),
) -> None:
    """
    Evaluate the approval state of an issue or pull request once.

    Examples:
        approval-gate check 42
        approval-gate check 42 --approver alice --approver bob
    """
    try:
        config = load_cli_config(config_path, approver)
    except ConfigError as e:
        console.print(f"[red]Config error: {e}[/red]")
        raise typer.Exit(EXIT_ERROR)

    logger = ApprovalLogger(f"item-{number}", config)

    try:
        result = _evaluate_item(config, number, logger)
    except Exception as e:
        _undetermined(e)

    _report(result, number)
    raise typer.Exit(STATUS_EXIT_CODES[result.status])


def watch_command(
    number: int = typer.Argument(..., help="Issue or pull request number"),
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to approval.yaml",
    ),
    approver: Optional[list[str]] = typer.Option(
        None, "--approver", "-a", help="Approver login (repeatable, overrides config)",
    ),
    interval: Optional[int] = typer.Option(
        None, "--interval", "-i", min=1, help="Seconds between polls (default from config)",
    ),
    max_polls: Optional[int] = typer.Option(
        None, "--max-polls", min=0, help="Stop after N polls, 0 for no limit (default from config)",
    ),
) -> None:
    """
    Poll an issue or pull request until it is approved or denied.

    Examples:
        approval-gate watch 42 --interval 30
        approval-gate watch 42 --max-polls 10
    """
    try:
        config = load_cli_config(config_path, approver)
    except ConfigError as e:
        console.print(f"[red]Config error: {e}[/red]")
        raise typer.Exit(EXIT_ERROR)

    interval_seconds = interval if interval is not None else config.poll.interval_seconds
    poll_limit = max_polls if max_polls is not None else config.poll.max_polls

    logger = ApprovalLogger(f"item-{number}", config)
    polls = 0

    try:
        with logger.watch(f"watch-{uuid.uuid4().hex[:8]}"):
            while True:
                polls += 1
                result = _evaluate_item(config, number, logger)
                if not result.pending:
                    break
                if poll_limit and polls >= poll_limit:
                    console.print(f"[yellow]Still pending after {polls} polls[/yellow]")
                    break
                console.print(f"[dim]Pending, next poll in {interval_seconds}s[/dim]")
                time.sleep(interval_seconds)
    except Exception as e:
        _undetermined(e)

    _report(result, number)
    raise typer.Exit(STATUS_EXIT_CODES[result.status])
