"""Code block tokenizing and syntax highlighting."""

from __future__ import annotations

import logging

from .constants import (
    NUMBER_PATTERN,
    OPERATOR_CATEGORY_CHARS,
    OPERATOR_CHARS,
    QUOTE_CHARS,
    WHITESPACE_CHARS,
)
from .languages import HTML, JSON, LANGUAGES, detect_language, resolve_language
from .models import LanguageSpec, ScanState, Token, TokenCategory

logger = logging.getLogger(__name__)

LINE_BREAK = Token("\n", TokenCategory.LINE_BREAK)


def categorize(text: str, spec: LanguageSpec) -> TokenCategory:
    """Assign a display category to a scanned token.

    Rules apply in priority order: keyword, quoted string, comment, number,
    single-character operator, then plain text.

    Examples:
        categorize("RETURN", LANGUAGES["python"])  # TokenCategory.KEYWORD
        categorize("3.14", LANGUAGES["python"])  # TokenCategory.NUMBER
    """
    if text.casefold() in spec.keywords:
        return TokenCategory.KEYWORD
    if len(text) >= 2 and text[0] in QUOTE_CHARS and text[-1] == text[0]:
        return TokenCategory.STRING
    if (spec.line_comment and text.startswith(spec.line_comment)) or (
        spec.block_comment_start and text.startswith(spec.block_comment_start)
    ):
        return TokenCategory.COMMENT
    if NUMBER_PATTERN.fullmatch(text):
        return TokenCategory.NUMBER
    if len(text) == 1 and text in OPERATOR_CATEGORY_CHARS:
        return TokenCategory.OPERATOR
    return TokenCategory.PLAIN


def tokenize(code: str, spec: LanguageSpec) -> list[Token]:
    """Split code into categorized tokens with the generic scanner.

    Strings run to the next unescaped matching quote, comments follow the
    language's markers, punctuation is emitted one character at a time, and
    runs of spaces or tabs collapse into a single whitespace token. Carriage
    returns are dropped; everything else is preserved, so joining the token
    texts gives back the input.

    Args:
        code: Code text with ``\\n`` line endings.
        spec: Language whose keywords and comment markers apply.

    Returns:
        list[Token]: Tokens in source order.
    """
    tokens: list[Token] = []
    pending: list[str] = []
    state = ScanState.DEFAULT
    quote = ""

    def flush() -> None:
        if pending:
            text = "".join(pending)
            tokens.append(Token(text, categorize(text, spec)))
            pending.clear()

    i = 0
    length = len(code)
    while i < length:
        character = code[i]

        if character == "\r":
            i += 1
            continue

        if state is ScanState.IN_STRING:
            pending.append(character)
            if character == quote and code[i - 1] != "\\":
                flush()
                state = ScanState.DEFAULT
            i += 1
            continue

        if state is ScanState.IN_LINE_COMMENT:
            if character == "\n":
                flush()
                tokens.append(LINE_BREAK)
                state = ScanState.DEFAULT
            else:
                pending.append(character)
            i += 1
            continue

        if state is ScanState.IN_BLOCK_COMMENT:
            if code.startswith(spec.block_comment_end, i):
                pending.append(spec.block_comment_end)
                flush()
                state = ScanState.DEFAULT
                i += len(spec.block_comment_end)
            else:
                pending.append(character)
                i += 1
            continue

        # Quotes outrank comment markers, including quote-based ones like """
        if character in QUOTE_CHARS:
            flush()
            pending.append(character)
            quote = character
            state = ScanState.IN_STRING
            i += 1
            continue

        if spec.block_comment_start and code.startswith(spec.block_comment_start, i):
            flush()
            pending.append(spec.block_comment_start)
            state = ScanState.IN_BLOCK_COMMENT
            i += len(spec.block_comment_start)
            continue

        if spec.line_comment and code.startswith(spec.line_comment, i):
            flush()
            pending.append(spec.line_comment)
            state = ScanState.IN_LINE_COMMENT
            i += len(spec.line_comment)
            continue

        if character in OPERATOR_CHARS:
            flush()
            tokens.append(Token(character, categorize(character, spec)))
            i += 1
            continue

        if character == "\n":
            flush()
            tokens.append(LINE_BREAK)
            i += 1
            continue

        if character in WHITESPACE_CHARS:
            flush()
            end = i
            while end < length and code[end] in WHITESPACE_CHARS:
                end += 1
            tokens.append(Token(code[i:end], TokenCategory.WHITESPACE))
            i = end
            continue

        pending.append(character)
        i += 1

    # Unterminated strings and comments end with the input
    flush()
    return tokens


def _highlight_markup(code: str) -> list[Token]:
    """Highlight HTML line by line: comments, tags, and plain text between them."""
    tokens: list[Token] = []
    lines = code.split("\n")

    for line_index, line in enumerate(lines):
        rest = line
        while rest:
            if rest.startswith("<!--"):
                end = rest.find("-->")
                cut = len(rest) if end == -1 else end + 3
                tokens.append(Token(rest[:cut], TokenCategory.COMMENT))
            elif rest.startswith("<"):
                end = rest.find(">")
                if end == -1:
                    cut = len(rest)
                    tokens.append(Token(rest, TokenCategory.PLAIN))
                else:
                    cut = end + 1
                    tokens.append(Token(rest[:cut], TokenCategory.KEYWORD))
            else:
                next_tag = rest.find("<")
                cut = len(rest) if next_tag == -1 else next_tag
                tokens.append(Token(rest[:cut], TokenCategory.PLAIN))
            rest = rest[cut:]

        if line_index < len(lines) - 1:
            tokens.append(LINE_BREAK)

    return tokens


def _highlight_json(code: str) -> list[Token]:
    """Highlight JSON line by line, splitting ``"key": value`` lines at the colon."""
    tokens: list[Token] = []
    lines = code.split("\n")

    for line_index, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith('"') and ":" in stripped:
            indent_length = len(line) - len(line.lstrip())
            if indent_length:
                tokens.append(Token(line[:indent_length], TokenCategory.WHITESPACE))
            body = line[indent_length:]
            colon = body.index(":")
            tokens.append(Token(body[: colon + 1], TokenCategory.PROPERTY))
            if body[colon + 1 :]:
                tokens.append(Token(body[colon + 1 :], TokenCategory.STRING))
        elif line:
            tokens.append(Token(line, TokenCategory.PLAIN))

        if line_index < len(lines) - 1:
            tokens.append(LINE_BREAK)

    return tokens


def highlight(code: str, declared_language: str | None = None) -> list[Token]:
    """Tokenize and categorize the text of a code block.

    A declared language is resolved through the alias table; without one the
    language is guessed from the code. HTML and JSON use line scanners, known
    languages use the generic scanner, and anything else comes back as a
    single plain token.

    Args:
        code: Code block text.
        declared_language: Fence info string, if any.

    Returns:
        list[Token]: Tokens whose texts concatenate to `code` with its line
            endings normalized to ``\\n``.

    Examples:
        highlight("x = 1", "python")
        highlight("<div>hi</div>")
    """
    code = code.replace("\r\n", "\n").replace("\r", "\n")
    if not code:
        return []

    if declared_language and declared_language.strip():
        language = resolve_language(declared_language)
    else:
        language = detect_language(code)

    if language == HTML:
        return _highlight_markup(code)
    if language == JSON:
        return _highlight_json(code)

    spec = LANGUAGES.get(language)
    if spec is None:
        logger.debug("No highlighting for language %r", language)
        return [Token(code, TokenCategory.PLAIN)]

    return tokenize(code, spec)
