# src/infraresize/cli/main.py
"""
Entry point of the infraresize CLI. Commands live in per-topic sub-apps.
"""

import logging

import typer
from typing_extensions import Annotated

from .. import __version__
from ..core.config import config
from . import resize

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="infraresize",
    help="Resize a managed cluster's infra nodes without downtime.",
    add_completion=False,
)
app.add_typer(resize.app, name="resize")


def configure_logging(verbose: bool = False) -> None:
    """Sets the root log level from LOG_LEVEL, or DEBUG when --verbose is given."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(logging.DEBUG if verbose else config.LOG_LEVEL.upper())


def _print_version(value: bool):
    if value:
        typer.echo(f"infraresize version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of infraresize.
    """
    _print_version(True)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every phase transition and poll.")] = False,
    show_version: Annotated[
        bool,
        typer.Option("--version", callback=_print_version, is_eager=True, help="Show the version and exit."),
    ] = False,
):
    configure_logging(verbose)
    logger.debug("log level set to %s", logging.getLevelName(logging.getLogger().level))


if __name__ == "__main__":
    app()
