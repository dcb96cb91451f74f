"""Shared Typer app object, shared option types, and store utility."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from ..core.settings import Settings, get_default_data_path, load_settings
from ..io.history_store import HistoryStore

# Shared --data-file option type used by the history commands
DataFileOption = Annotated[
    Optional[Path],
    typer.Option("--data-file", "-f", help="Path to the JSON history file"),
]

UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="User id (defaults to settings.yaml user_id)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-coach",
    help="8-week Heavy/Light/Medium strength program with PR and milestone tracking.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Strength program planner. Run a command with --help for details.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(show_time=False, show_path=False)],
            force=True,
        )


def get_settings() -> Settings:
    return load_settings()


def get_store(data_file: Path | None, settings: Settings | None = None) -> HistoryStore:
    """Get history store from an explicit path, settings, or the default location."""
    if data_file is None:
        settings = settings or get_settings()
        data_file = settings.data_file or get_default_data_path()
    return HistoryStore(data_file)


def resolve_user(user: str | None, settings: Settings | None = None) -> str:
    if user:
        return user
    return (settings or get_settings()).user_id
