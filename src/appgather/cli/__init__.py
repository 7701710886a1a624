"""Command-line interface for appgather.

- app: The Typer application object exposing gather, config and version.
- main: Console script entry point.

All output is routed through Rich for consistent, styled UX.
"""

from appgather.cli.commands import app, main

__all__ = ["app", "main"]
