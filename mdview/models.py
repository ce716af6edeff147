"""Data models for mdview."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


@dataclass(frozen=True)
class Heading:
    """A heading line.

    Attributes:
        level: Heading level from 1 to 6.
        text: Heading text without the leading ``#`` run.
    """

    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    """A plain text line, kept untrimmed."""

    text: str


@dataclass(frozen=True)
class ListItem:
    """A bullet or numbered list item.

    Attributes:
        marker: ``"•"`` for bullet items, ``"N."`` for numbered items.
        text: Item text after the marker.
    """

    marker: str
    text: str


@dataclass(frozen=True)
class Blockquote:
    text: str


@dataclass(frozen=True)
class Rule:
    """A horizontal rule."""


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block.

    Attributes:
        language: Info string after the opening fence, or ``""`` when absent.
        raw_text: Lines between the fences joined with ``"\\n"``.
    """

    language: str
    raw_text: str


@dataclass(frozen=True)
class Table:
    """A pipe table.

    Attributes:
        header_row: Header cells, or None when the table has no header.
        body_rows: Data rows, each padded to the table's column count.
    """

    header_row: tuple[str, ...] | None
    body_rows: tuple[tuple[str, ...], ...]


Block = Heading | Paragraph | ListItem | Blockquote | Rule | CodeBlock | Table


class TokenCategory(Enum):
    """Display categories assigned to code tokens."""

    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    OPERATOR = "operator"
    PLAIN = "plain"
    WHITESPACE = "whitespace"
    LINE_BREAK = "line_break"
    # JSON property names
    PROPERTY = "property"


@dataclass(frozen=True)
class Token:
    text: str
    category: TokenCategory


@dataclass(frozen=True)
class LanguageSpec:
    """Lexical description of a language for the generic code scanner.

    Attributes:
        name: Canonical language name.
        keywords: Keywords, stored casefolded for case-insensitive lookup.
        line_comment: Marker starting a comment that runs to end of line.
        block_comment_start: Marker opening a block comment.
        block_comment_end: Marker closing a block comment.

    Empty marker strings mean the language has no such comment form.
    """

    name: str
    keywords: frozenset[str]
    line_comment: str = ""
    block_comment_start: str = ""
    block_comment_end: str = ""


class ParserState(Enum):
    """Parser states used while scanning Markdown content.

    Attributes:
        NORMAL: Default state for regular text.
        IN_FENCED_CODE: Inside a backtick fence.
        IN_TABLE: Collecting consecutive pipe-table lines.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()
    IN_TABLE = auto()


@dataclass
class ParserContext:
    """Encapsulate parser state while walking Markdown text.

    Attributes:
        state: Current parser state.
        fence_language: Info string captured from the opening fence.
        code_lines: Lines collected inside the active fence.
        table_lines: Raw table lines waiting to be flushed.
    """

    state: ParserState = ParserState.NORMAL
    fence_language: str = ""
    code_lines: list[str] = field(default_factory=list)
    table_lines: list[str] = field(default_factory=list)


class ScanState(Enum):
    """States of the generic code scanner."""

    DEFAULT = auto()
    IN_STRING = auto()
    IN_LINE_COMMENT = auto()
    IN_BLOCK_COMMENT = auto()


@dataclass
class ParseResult:
    """Structured result of loading and classifying a Markdown file.

    Attributes:
        path: File the document was read from.
        text: Decoded file content.
        blocks: Classified blocks in document order.
    """

    path: Path
    text: str
    blocks: list[Block]
