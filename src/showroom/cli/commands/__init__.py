"""CLI command groups for the showroom application.

This package contains subcommand groups for the showroom CLI:
- planner: Quote, render and inquiry commands for saved layouts
"""

from showroom.cli.commands.planner import planner_app

__all__ = ["planner_app"]
