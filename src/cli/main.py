"""remdit command line.

`remdit [OPTIONS] FILE` uploads FILE to one of the configured servers,
prints the edit URL and writes back every save made in the browser until the
server closes the session or Ctrl+C is pressed.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from cli.ui_components import print_edit_url, print_error, print_version
from core.config import AppSettings, candidate_servers, load_server_config
from core.errors import RemditError
from core.log import configure_logging, get_logger
from core.services.edit_session import EditRequest, SessionHooks, run_edit_session
from core.version import VERSION

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=f"remdit {VERSION} - A collaborative text editor for remote files",
)

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)

logger = get_logger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _version_callback(value: bool) -> None:
    if value:
        print_version(_console)
        raise typer.Exit()


def _validate_target(file: Path) -> Path:
    """Check that FILE exists and is not a directory; return its absolute path."""

    if not file.exists():
        print_error(_err_console, f"File does not exist: {file}")
        raise typer.Exit(code=EXIT_FAILURE)
    if file.is_dir():
        print_error(_err_console, f"{file} is a directory, not a file")
        raise typer.Exit(code=EXIT_FAILURE)
    return file.resolve()


@app.command()
def edit(
    file: Path = typer.Argument(
        ...,
        metavar="FILE",
        help="The file to edit.",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Enable verbose output.",
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print version information.",
    ),
) -> None:
    """Edit FILE collaboratively in the browser."""

    configure_logging(verbose=verbose)
    logger.debug("Debug mode enabled")

    target = _validate_target(file)

    hooks = SessionHooks(
        edit_url=lambda file_name, url: print_edit_url(_console, file_name, url),
    )

    try:
        settings = AppSettings()
        config = load_server_config(settings)
        request = EditRequest(file_path=target, servers=candidate_servers(config, settings))
        asyncio.run(run_edit_session(request, settings=settings, hooks=hooks))
    except (RemditError, ValidationError) as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except KeyboardInterrupt:
        raise typer.Exit(code=EXIT_INTERRUPTED)


def run() -> None:
    app()
