"""Markdown block classification."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ViewerConfig
from .constants import (
    BULLET_GLYPH,
    BULLET_PATTERN,
    BYTE_ORDER_MARK,
    FENCE_MARKER,
    MAX_HEADING_LEVEL,
    NUMBERED_PATTERN,
    RULE_PATTERN,
    TABLE_SEPARATOR_CELL_PATTERN,
)
from .exceptions import DocumentError, EmptyDocumentError
from .filesystem import read_document
from .models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
    ParseResult,
    ParserContext,
    ParserState,
    Rule,
    Table,
)

logger = logging.getLogger(__name__)


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE_MARKER)


def _is_table_row(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("|") and stripped.endswith("|")


def _try_open_fence(ctx: ParserContext, line: str) -> bool:
    """Detect the start of a fenced code block.

    Args:
        ctx: Parser context to update when a fence opens.
        line: Current line being scanned.

    Returns:
        bool: True when the line opens a fence and the context is updated.

    Examples:
        _try_open_fence(ParserContext(), "```python")  # True, language "python"
    """
    if ctx.state is not ParserState.NORMAL or not _is_fence(line):
        return False

    ctx.state = ParserState.IN_FENCED_CODE
    ctx.fence_language = line.strip()[len(FENCE_MARKER) :].strip()
    ctx.code_lines = []
    return True


def _try_close_fence(ctx: ParserContext, line: str) -> CodeBlock | None:
    """Close the active fence when `line` is a fence line.

    Returns:
        CodeBlock | None: The finished block, or None when the line is code
            text (it is then appended to the buffer).
    """
    if ctx.state is not ParserState.IN_FENCED_CODE:
        return None

    if not _is_fence(line):
        ctx.code_lines.append(line)
        return None

    return _finish_code_block(ctx)


def _finish_code_block(ctx: ParserContext) -> CodeBlock:
    block = CodeBlock(language=ctx.fence_language, raw_text="\n".join(ctx.code_lines))
    ctx.state = ParserState.NORMAL
    ctx.fence_language = ""
    ctx.code_lines = []
    return block


def _try_collect_table_row(ctx: ParserContext, line: str) -> bool:
    """Buffer `line` when it looks like a pipe-table row.

    Returns:
        bool: True when the line was buffered and needs no further handling.
    """
    if ctx.state is ParserState.IN_FENCED_CODE or not _is_table_row(line):
        return False

    ctx.state = ParserState.IN_TABLE
    ctx.table_lines.append(line)
    return True


def _flush_table(ctx: ParserContext) -> list[Block]:
    """Turn buffered table lines into blocks and reset the table state.

    A buffer that does not form a table falls back to line classification.
    """
    lines = ctx.table_lines
    ctx.state = ParserState.NORMAL
    ctx.table_lines = []

    table = parse_table(lines)
    if table is not None:
        return [table]

    logger.debug("Dropping table candidate of %d line(s)", len(lines))
    return [classify_line(line) for line in lines]


def split_table_row(line: str) -> list[str]:
    """Split a pipe-table line into trimmed cells.

    One leading and one trailing pipe are removed before splitting.

    Examples:
        split_table_row("| A | B |")  # ["A", "B"]
    """
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|"):
        stripped = stripped[:-1]
    return [cell.strip() for cell in stripped.split("|")]


def _is_separator_row(cells: list[str]) -> bool:
    return all(TABLE_SEPARATOR_CELL_PATTERN.fullmatch(cell) for cell in cells)


def parse_table(lines: list[str]) -> Table | None:
    """Build a table from consecutive pipe-table lines.

    Separator rows (cells made of dashes with optional alignment colons) are
    discarded. The first data row becomes the header when there is no
    separator or when the separator is the second line; otherwise every row
    is a body row. Shorter rows are padded with empty cells.

    Args:
        lines: Raw table lines in document order.

    Returns:
        Table | None: The parsed table, or None when fewer than two lines were
            given or no data rows remain.

    Examples:
        parse_table(["| A | B |", "| - | - |", "| 1 | 2 |"])
    """
    if len(lines) < 2:
        return None

    rows = [split_table_row(line) for line in lines]
    separator_index = next(
        (index for index, cells in enumerate(rows) if _is_separator_row(cells)), None
    )
    data_rows = [cells for cells in rows if not _is_separator_row(cells)]
    if not data_rows:
        return None

    column_count = max(len(cells) for cells in data_rows)
    padded = [tuple(cells + [""] * (column_count - len(cells))) for cells in data_rows]

    if separator_index is None or separator_index == 1:
        return Table(header_row=padded[0], body_rows=tuple(padded[1:]))
    return Table(header_row=None, body_rows=tuple(padded))


def classify_line(line: str) -> Block:
    """Classify a single non-fence, non-table line.

    Tries heading, list item, blockquote and horizontal rule in that order and
    falls back to a paragraph holding the untrimmed line.

    Examples:
        classify_line("## Setup")  # Heading(level=2, text="Setup")
        classify_line("3. Third")  # ListItem(marker="3.", text="Third")
    """
    stripped = line.strip()

    if stripped.startswith("#"):
        hashes = len(stripped) - len(stripped.lstrip("#"))
        return Heading(level=min(hashes, MAX_HEADING_LEVEL), text=stripped[hashes:].strip())

    bullet_match = BULLET_PATTERN.match(stripped)
    if bullet_match:
        return ListItem(marker=BULLET_GLYPH, text=stripped[bullet_match.end() :])

    numbered_match = NUMBERED_PATTERN.match(stripped)
    if numbered_match:
        return ListItem(
            marker=f"{numbered_match.group(1)}.", text=stripped[numbered_match.end() :]
        )

    if stripped.startswith(">"):
        return Blockquote(text=stripped[1:].strip())

    if RULE_PATTERN.fullmatch(stripped):
        return Rule()

    return Paragraph(text=line)


def classify(document: str) -> list[Block]:
    """Classify Markdown text into an ordered list of blocks.

    Scans the document once, line by line. Fenced code and pipe tables take
    precedence over line-level rules, blank lines only separate blocks, and an
    unterminated fence still yields its code block at end of input.

    Args:
        document: Markdown source with any mix of line endings.

    Returns:
        list[Block]: Blocks in document order.

    Examples:
        classify("# Title\\n\\nSome text")
        # [Heading(level=1, text="Title"), Paragraph(text="Some text")]
    """
    blocks: list[Block] = []
    ctx = ParserContext()
    document = normalize_newlines(document).removeprefix(BYTE_ORDER_MARK)

    for line in document.split("\n"):
        if ctx.state is ParserState.IN_FENCED_CODE:
            code_block = _try_close_fence(ctx, line)
            if code_block is not None:
                blocks.append(code_block)
            continue

        if _try_collect_table_row(ctx, line):
            continue

        if ctx.state is ParserState.IN_TABLE:
            blocks.extend(_flush_table(ctx))

        if _try_open_fence(ctx, line):
            continue

        # Blank lines separate blocks
        if not line.strip():
            continue

        blocks.append(classify_line(line))

    if ctx.state is ParserState.IN_FENCED_CODE:
        logger.debug("Unterminated code fence; closing at end of input")
        blocks.append(_finish_code_block(ctx))
    elif ctx.state is ParserState.IN_TABLE:
        blocks.extend(_flush_table(ctx))

    return blocks


class ParseFileError(Exception):
    """Raised when loading a Markdown file fails."""


def parse_file(filepath: Path, config: ViewerConfig | None = None) -> ParseResult:
    """Read a Markdown file and classify its content.

    Args:
        filepath: Path to the Markdown file.
        config: Configuration supplying the size limit; defaults to a new
            `ViewerConfig` when omitted.

    Returns:
        ParseResult: The file path, its text, and the classified blocks.

    Raises:
        EmptyDocumentError: If the file holds only whitespace.
        ParseFileError: If the file is too large, cannot be read, or is not
            valid UTF-8.

    Examples:
        result = parse_file(Path("README.md"))
    """
    config = config or ViewerConfig()

    try:
        content = read_document(filepath, config.max_file_size)
    except (DocumentError, OSError) as error:
        raise ParseFileError(str(error)) from error

    if not content.strip():
        raise EmptyDocumentError(filepath)

    blocks = classify(content)
    logger.debug("Classified %s into %d block(s)", filepath, len(blocks))
    return ParseResult(path=filepath, text=content, blocks=blocks)
