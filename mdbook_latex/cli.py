"""Command-line interface for mdbook-latex.

mdBook runs this command for an ``[output.latex]`` table, with the
render context as JSON on stdin and the output directory as current
directory.
"""

import logging
import sys
from importlib.metadata import version as get_version
from typing import BinaryIO

import click
from rich.console import Console
from rich.logging import RichHandler

from .domain import RenderContext
from .errors import MdbookLatexError
from .services import RenderService

# Get version from package metadata
try:
    __version__ = get_version("mdbook-latex")
except Exception:
    __version__ = "0.0.0"  # Fallback version


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.option(
    "--context",
    "-c",
    "context_file",
    type=click.File("rb"),
    default="-",
    help="Read the render context from a file (default: stdin).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="mdbook-latex")
def main(context_file: BinaryIO, verbose: bool) -> None:
    """Render an mdBook into markdown, LaTeX and PDF.

    Reads the render context mdBook writes to stdin, rewrites chapter
    image paths and copies the images next to the output.
    """
    configure_logging(verbose)

    try:
        context = RenderContext.from_json(context_file)
        RenderService().render(context)
    except (MdbookLatexError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
