"""CLI entrypoint: Typer app definition and command registration"""

import logging
import sys
from typing import Annotated

import typer

from mdpost.cli.commands import build_cmd, convert_cmd, meta_cmd


app = typer.Typer(name="mdpost", no_args_is_help=True, help="Obsidian markdown to blog-ready HTML or document trees")


def setup_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the package logger; DEBUG when verbose."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger = logging.getLogger('mdpost')
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(handler)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug output")] = False,
    ):
    if verbose:
        setup_logging(verbose)


app.command(name="convert")(convert_cmd)
app.command(name="meta")(meta_cmd)
app.command(name="build")(build_cmd)
