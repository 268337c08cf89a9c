"""Command-line interface for mediascan.

- app: The Typer application object used by the ``mediascan`` entry point.
- main: Console-script entry point.

All commands print through Rich (see :mod:`mediascan.cli.console`).
"""

from mediascan.cli.commands import app, main

__all__ = ["app", "main"]
