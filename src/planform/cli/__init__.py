"""Command-line interface for planform.

This module provides the CLI using Typer with rich output for
inspecting boolean operations on scene documents.

Key features:
- subtract, union and cut commands
- Verbose/quiet output modes
- JSON result documents and optional diagnostics dumps
"""

from planform.cli.app import cli, main

__all__ = ["cli", "main"]
