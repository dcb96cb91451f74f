"""
CLI entry point using Typer.

Provides commands for the strength program and progress tracking:
- maxes / targets / week / program: the 8-week HLM schedule
- warmups / plates / 1rm: loading helpers
- log-workout / log-meal: record history, report PRs and milestones
- milestones / streak: achievements and consistency
"""

from .app import app
from .commands import program as _program  # noqa: F401  (registers commands)
from .commands import progress as _progress  # noqa: F401


if __name__ == "__main__":
    app()
