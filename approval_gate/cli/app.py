"""Main Typer app definition and routing.

This is the canonical entry point for the CLI. The app, callback, and
command registrations are all defined here.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from approval_gate import __version__
from approval_gate.cli.common import get_console, set_project_dir

# Create Typer app
app = typer.Typer(
    name="approval-gate",
    help="Comment-driven approval gate for GitHub issues and pull requests",
    add_completion=False,
)

# Rich console for output - use singleton from common module
console = get_console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"approval-gate version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    project: Optional[str] = typer.Option(
        None,
        "--project",
        "-p",
        help="Project directory holding approval.yaml (default: current directory)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Approval Gate - decide approval from issue and pull request comments.

    Approvers vote by commenting "approved", "lgtm", "yes" or "denied",
    "no". Use --project/-p to operate on a different project directory.
    """
    set_project_dir(None)
    if project:
        project_path = Path(project)
        if not project_path.is_dir():
            console.print(f"[red]Error: Project directory not found: {project}[/red]")
            raise typer.Exit(1)
        set_project_dir(str(project_path.absolute()))

    # If no subcommand and no --help, show help
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# =========================================================================
# Command Registration
# =========================================================================

from approval_gate.cli.approval import (  # noqa: E402
    check_command,
    classify_command,
    watch_command,
)

app.command("classify")(classify_command)
app.command("check")(check_command)
app.command("watch")(watch_command)


def cli_main() -> None:
    """Entry point for the CLI."""
    app()
