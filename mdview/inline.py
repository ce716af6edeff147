"""Inline formatting removal for rendered text."""

from __future__ import annotations

import re

STRONG_PATTERNS = (
    re.compile(r"(?<![\\*])\*\*(?=\S)(.+?)(?<=\S)\*\*"),
    re.compile(r"(?<![\\\w])__(?=\S)(.+?)(?<=\S)__(?!\w)"),
)
EMPHASIS_PATTERNS = (
    re.compile(r"(?<![\\*])\*(?=[^\s*])(.+?)(?<=[^\s*])\*"),
    re.compile(r"(?<![\\\w])_(?=[^\s_])(.+?)(?<=[^\s_])_(?!\w)"),
)


def is_escaped(text: str, pos: int) -> bool:
    """Determine whether a character is escaped by preceding backslashes.

    An odd number of backslashes immediately before `pos` marks the character
    as escaped.

    Examples:
        is_escaped("\\\\*", 2)  # False, two backslashes
        is_escaped("\\*", 1)  # True, one backslash
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == "\\":
        backslash_count += 1
        i -= 1
    return backslash_count % 2 == 1


def find_inline_code_spans(text: str) -> list[tuple[int, int]]:
    """Locate inline code spans delimited by equal-length backtick runs.

    Args:
        text: The text to scan for inline code spans.

    Returns:
        list[tuple[int, int]]: Start (inclusive) and end (exclusive) positions
            for each inline code span.

    Examples:
        find_inline_code_spans("`code`")  # [(0, 6)]
        find_inline_code_spans("``more`` text")  # [(0, 8)]
    """
    spans = []
    # Run lengths with no closing run anywhere after the last failed opener
    unclosed_lengths: set[int] = set()
    i = 0

    while i < len(text):
        if text[i] != "`" or is_escaped(text, i):
            i += 1
            continue

        start = i
        while i < len(text) and text[i] == "`":
            i += 1
        opening_length = i - start

        # An unmatched opener is literal text; resume right after it
        if opening_length in unclosed_lengths:
            continue

        resume = i
        while i < len(text):
            if text[i] != "`":
                i += 1
                continue
            run_start = i
            while i < len(text) and text[i] == "`":
                i += 1
            if i - run_start == opening_length:
                spans.append((start, i))
                break
        else:
            unclosed_lengths.add(opening_length)
            i = resume

    return spans


def _bracket_pairs(text: str, opener: str, closer: str) -> dict[int, int]:
    """Map each balanced `opener` index to the index just past its `closer`.

    Backslash-escaped characters are skipped; unbalanced openers are absent.
    """
    pairs: dict[int, int] = {}
    open_positions: list[int] = []
    i = 0
    while i < len(text):
        character = text[i]
        if character == "\\":
            i += 2
            continue
        if character == opener:
            open_positions.append(i)
        elif character == closer and open_positions:
            pairs[open_positions.pop()] = i + 1
        i += 1
    return pairs


def strip_markdown_links(text: str) -> str:
    r"""Remove Markdown link and image syntax while preserving visible text.

    Handles inline links with nested parentheses and reference-style links.
    An escaped image marker (``\!``) keeps the whole sequence literal.

    Examples:
        strip_markdown_links("[title](https://example.com)")  # "title"
        strip_markdown_links("see ![logo](logo.png)")  # "see logo"
    """
    if "[" not in text:
        return text

    square_pairs = _bracket_pairs(text, "[", "]")
    round_pairs = _bracket_pairs(text, "(", ")")
    result: list[str] = []
    i = 0

    while i < len(text):
        if text[i] != "[" or is_escaped(text, i):
            result.append(text[i])
            i += 1
            continue

        preceded_by_bang = i > 0 and text[i - 1] == "!"
        if preceded_by_bang and is_escaped(text, i - 1):
            result.append(text[i])
            i += 1
            continue

        label_end = square_pairs.get(i, -1)
        if label_end != -1 and label_end < len(text) and text[label_end] in "([":
            targets = round_pairs if text[label_end] == "(" else square_pairs
            target_end = targets.get(label_end, -1)
            if target_end != -1:
                if preceded_by_bang and result and result[-1] == "!":
                    result.pop()
                result.append(text[i + 1 : label_end - 1])
                i = target_end
                continue

        result.append(text[i])
        i += 1

    return "".join(result)


def _strip_emphasis(text: str) -> str:
    for pattern in STRONG_PATTERNS + EMPHASIS_PATTERNS:
        text = pattern.sub(r"\1", text)
    return text


def _unwrap_code_span(span: str) -> str:
    fence_length = len(span) - len(span.lstrip("`"))
    inner = span[fence_length:-fence_length]
    if len(inner) > 2 and inner.startswith(" ") and inner.endswith(" ") and inner.strip():
        inner = inner[1:-1]
    return inner


def strip_inline_formatting(text: str) -> str:
    """Remove inline Markdown markup, keeping the visible text.

    Strips bold and italic markers, the backticks around inline code, and
    link or image syntax. Text inside inline code spans is left untouched.

    Args:
        text: Paragraph, heading, list item or quote text.

    Returns:
        str: Text as a reader would see it.

    Examples:
        strip_inline_formatting("**bold** and [a link](x)")  # "bold and a link"
        strip_inline_formatting("`**raw**`")  # "**raw**"
    """
    parts = []
    offset = 0
    for start, end in find_inline_code_spans(text):
        parts.append(_strip_emphasis(strip_markdown_links(text[offset:start])))
        parts.append(_unwrap_code_span(text[start:end]))
        offset = end
    parts.append(_strip_emphasis(strip_markdown_links(text[offset:])))
    return "".join(parts)
