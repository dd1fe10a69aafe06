"""Command-line interface for compassrule.

This module provides a developer CLI using Typer with rich output for
inspecting scene snapshots.

Key features:
- Drag an entity and print the propagation batch
- Resolve where a point would snap
- Print render descriptions clipped to a viewport
"""

from compassrule.cli.app import cli, main

__all__ = ["cli", "main"]
