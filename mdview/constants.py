"""Constants used across the mdview package."""

from __future__ import annotations

import re

from .config import ViewerConfig

DEFAULT_CONFIG = ViewerConfig()

# Markdown patterns
FENCE_MARKER = "```"
BYTE_ORDER_MARK = "\ufeff"
BULLET_PATTERN = re.compile(r"^[-*+]\s+")
NUMBERED_PATTERN = re.compile(r"^([0-9]+)\.\s+")
RULE_PATTERN = re.compile(r"-{3,}|\*{3,}|_{3,}")
TABLE_SEPARATOR_CELL_PATTERN = re.compile(r":?-+:?")
MAX_HEADING_LEVEL = 6
BULLET_GLYPH = "•"

# Code scanning
QUOTE_CHARS = "\"'"
OPERATOR_CHARS = "+-*/=<>!&|(){}[];,.:"
OPERATOR_CATEGORY_CHARS = "+-*/=<>!&|"
WHITESPACE_CHARS = " \t"
NUMBER_PATTERN = re.compile(r"[0-9]+\.?[0-9]*")

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown")
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
