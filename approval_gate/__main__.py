"""
Entry point for running approval_gate as a module.

Allows running as: python -m approval_gate
"""

from approval_gate.cli import cli_main

if __name__ == "__main__":
    cli_main()
