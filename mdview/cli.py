"""
Displays a Markdown file as styled terminal text.
Code blocks are syntax highlighted; `--format json` prints the classified blocks instead.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import click
from .config import ConfigError, build_config
from .exceptions import EmptyDocumentError
from .filesystem import get_max_file_size, normalize_filepath
from .parser import ParseFileError, parse_file
from .renderer import render_result
from .serialization import to_json

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(package_name="mdview")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Styled text or the classified blocks as JSON",
)
@click.option("--pager/--no-pager", default=None, help="Page the rendered output")
@click.option("--highlight/--no-highlight", default=None, help="Syntax highlight code blocks")
@click.option(
    "--strip-inline/--keep-inline", default=None, help="Remove bold, italic, code and link markup"
)
@click.option("--bullet", help="Glyph used for bullet list items")
@click.option("--color/--no-color", default=None, help="Force or disable ANSI styling")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output_format: str = "text",
    pager: bool | None = None,
    highlight: bool | None = None,
    strip_inline: bool | None = None,
    bullet: str | None = None,
    color: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for viewing a Markdown file.

    Args:
        filepath: Path to the Markdown file to display.
        output_format: ``"text"`` for styled output, ``"json"`` for blocks.
        pager: Override for paging the output.
        highlight: Override for syntax highlighting of code blocks.
        strip_inline: Override for removing inline markup.
        bullet: Override for the bullet list glyph.
        color: True to force ANSI styling, False to strip it.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path is not a readable Markdown file or the
            configuration is invalid.
        click.ClickException: If the file cannot be loaded.

    Examples:
        mdview README.md --no-highlight --bullet "-"
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            path.parent,
            pager=pager,
            highlight=highlight,
            strip_inline=strip_inline,
            bullet=bullet,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = replace(config, max_file_size=get_max_file_size(default=config.max_file_size))
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        result = parse_file(path, config)
    except EmptyDocumentError as error:
        click.echo(str(error), err=True)
        return
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    logger.debug("Rendering %d block(s) as %s", len(result.blocks), output_format)

    if output_format == "json":
        click.echo(to_json(result.blocks, highlight_code=config.highlight, indent=2))
        return

    output = render_result(result, config)
    if config.pager:
        click.echo_via_pager(output, color=color)
    else:
        click.echo(output, nl=False, color=color)


if __name__ == "__main__":
    cli()
