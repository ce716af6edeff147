"""
mdview: classify Markdown into blocks and highlight the code inside them.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mdview README.md

Library Usage:
    from mdview import CodeBlock, classify, highlight

    for block in classify("# Title\\n\\n```python\\nprint(1)\\n```"):
        if isinstance(block, CodeBlock):
            tokens = highlight(block.raw_text, block.language)
"""

from .exceptions import (
    DocumentDecodeError,
    DocumentError,
    DocumentTooLargeError,
    EmptyDocumentError,
)
from .highlighter import categorize, highlight, tokenize
from .inline import strip_inline_formatting, strip_markdown_links
from .languages import LANGUAGES, detect_language, resolve_language
from .models import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    LanguageSpec,
    ListItem,
    Paragraph,
    ParseResult,
    Rule,
    Table,
    Token,
    TokenCategory,
)
from .parser import classify, classify_line, parse_file, parse_table

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "classify",
    "classify_line",
    "parse_table",
    "highlight",
    "tokenize",
    "categorize",
    "detect_language",
    "resolve_language",
    "strip_inline_formatting",
    "strip_markdown_links",
    "parse_file",
    # Data models
    "Block",
    "Heading",
    "Paragraph",
    "ListItem",
    "Blockquote",
    "Rule",
    "CodeBlock",
    "Table",
    "Token",
    "TokenCategory",
    "LanguageSpec",
    "LANGUAGES",
    "ParseResult",
    # Exceptions
    "DocumentError",
    "DocumentTooLargeError",
    "DocumentDecodeError",
    "EmptyDocumentError",
    # Version
    "__version__",
]
