"""CLI package for approval-gate.

Modules:
    app.py      - Main Typer app, version callback, command registration
    approval.py - classify, check and watch commands
    display.py  - Rich formatting utilities (format_status, build_signal_table)
    common.py   - Shared helpers (get_console, load_cli_config, exit codes)

Usage:
    from approval_gate.cli import app, cli_main
"""
from approval_gate.cli.app import app, cli_main

__all__ = ["app", "cli_main"]
