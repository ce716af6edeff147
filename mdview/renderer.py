"""Terminal rendering of classified Markdown blocks."""

from __future__ import annotations

import textwrap

import click

from .config import ViewerConfig
from .constants import BULLET_GLYPH
from .highlighter import highlight
from .inline import strip_inline_formatting
from .models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
    ParseResult,
    Rule,
    Table,
    Token,
    TokenCategory,
)

# Terminal counterparts of the viewer's code colour scheme
TOKEN_STYLES: dict[TokenCategory, dict[str, object]] = {
    TokenCategory.KEYWORD: {"fg": "blue"},
    TokenCategory.STRING: {"fg": "green"},
    TokenCategory.COMMENT: {"fg": "bright_black", "italic": True},
    TokenCategory.NUMBER: {"fg": "yellow"},
    TokenCategory.OPERATOR: {"fg": "magenta"},
    TokenCategory.PROPERTY: {"fg": "cyan"},
}


def render_tokens(tokens: list[Token]) -> str:
    """Join tokens into a string, styling each according to its category."""
    parts = []
    for token in tokens:
        styles = TOKEN_STYLES.get(token.category)
        parts.append(click.style(token.text, **styles) if styles else token.text)
    return "".join(parts)


def _inline(text: str, config: ViewerConfig) -> str:
    return strip_inline_formatting(text) if config.strip_inline else text


def _render_heading(block: Heading, config: ViewerConfig) -> str:
    text = _inline(block.text, config)
    if block.level == 1:
        return click.style(text, bold=True, underline=True)
    if block.level == 2:
        return click.style(text, bold=True)
    return click.style(text, bold=True, dim=True)


def _render_list_item(block: ListItem, config: ViewerConfig) -> str:
    marker = config.bullet if block.marker == BULLET_GLYPH else block.marker
    return f"  {marker} {_inline(block.text, config)}"


def _render_code_block(block: CodeBlock, config: ViewerConfig) -> str:
    if config.highlight:
        body = render_tokens(highlight(block.raw_text, block.language))
    else:
        body = block.raw_text
    return textwrap.indent(body, " " * config.code_indent)


def _render_table(block: Table, config: ViewerConfig) -> str:
    rows = [tuple(_inline(cell, config) for cell in row) for row in block.body_rows]
    header = (
        tuple(_inline(cell, config) for cell in block.header_row)
        if block.header_row is not None
        else None
    )
    all_rows = ([header] if header is not None else []) + rows
    widths = [max(len(row[column]) for row in all_rows) for column in range(len(all_rows[0]))]

    def format_row(row: tuple[str, ...]) -> str:
        cells = " | ".join(cell.ljust(width) for cell, width in zip(row, widths))
        return f"| {cells} |"

    lines = []
    if header is not None:
        lines.append(click.style(format_row(header), bold=True))
        lines.append("|" + "|".join("-" * (width + 2) for width in widths) + "|")
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def render_block(block: Block, config: ViewerConfig | None = None) -> str:
    """Render one block as terminal text.

    Args:
        block: Block to render.
        config: Rendering options; defaults to a new `ViewerConfig`.

    Returns:
        str: Rendered text, possibly containing ANSI style codes.
    """
    config = config or ViewerConfig()

    if isinstance(block, Heading):
        return _render_heading(block, config)
    if isinstance(block, Paragraph):
        return _inline(block.text, config)
    if isinstance(block, ListItem):
        return _render_list_item(block, config)
    if isinstance(block, Blockquote):
        return click.style(f"│ {_inline(block.text, config)}", italic=True, dim=True)
    if isinstance(block, Rule):
        return click.style("─" * config.rule_width, dim=True)
    if isinstance(block, CodeBlock):
        return _render_code_block(block, config)
    if isinstance(block, Table):
        return _render_table(block, config)
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def render_document(blocks: list[Block], config: ViewerConfig | None = None) -> str:
    """Render a block sequence as terminal text.

    Consecutive list items stay together; every other block is separated from
    its neighbours by a blank line.

    Examples:
        print(render_document(classify("# Title\\n\\n- a\\n- b")))
    """
    config = config or ViewerConfig()
    output: list[str] = []
    previous: Block | None = None

    for block in blocks:
        if previous is not None and not (
            isinstance(block, ListItem) and isinstance(previous, ListItem)
        ):
            output.append("")
        output.append(render_block(block, config))
        previous = block

    return "\n".join(output) + "\n" if output else ""


def render_result(result: ParseResult, config: ViewerConfig | None = None) -> str:
    """Render a loaded document, prefixed with a title line naming its file."""
    title = click.style(result.path.name, fg="bright_black")
    return f"{title}\n\n{render_document(result.blocks, config)}"
