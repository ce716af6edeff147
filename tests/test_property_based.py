from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from mdview.highlighter import highlight
from mdview.models import Heading, TokenCategory
from mdview.parser import classify, classify_line

markdown_alphabet = st.sampled_from(list("#-*+_>|`:0123456789. \t\nabcXYZ\"'/\\\r"))
markdown_text = st.text(alphabet=markdown_alphabet, max_size=300)
code_text = st.text(
    alphabet=st.sampled_from(list("abcdefXYZ0123456789 \t\n\"'\\/*#-<>!{}[]():;,.=+&|")),
    max_size=200,
)
languages = st.sampled_from(
    [None, "", "python", "js", "csharp", "sql", "bash", "css", "java", "c", "html", "json", "x"]
)


@given(st.text(max_size=300))
def test_classify_never_raises_on_arbitrary_text(document: str):
    assert isinstance(classify(document), list)


@given(markdown_text)
def test_classify_is_deterministic(document: str):
    assert classify(document) == classify(document)


@given(markdown_text)
def test_line_endings_do_not_change_blocks(document: str):
    unix = document.replace("\r", "")

    assert classify(unix) == classify(unix.replace("\n", "\r\n"))


@given(markdown_text)
def test_heading_levels_stay_in_range(document: str):
    for block in classify(document):
        if isinstance(block, Heading):
            assert 1 <= block.level <= 6


@given(code_text, languages)
def test_highlight_round_trips(code: str, language: str | None):
    tokens = highlight(code, language)

    assert "".join(token.text for token in tokens) == code


@given(code_text, languages)
def test_structural_tokens_keep_their_shape(code: str, language: str | None):
    for token in highlight(code, language):
        assert token.text
        if token.category is TokenCategory.LINE_BREAK:
            assert token.text == "\n"
        if token.category is TokenCategory.WHITESPACE:
            assert token.text.strip(" \t") == ""


@given(
    st.integers(min_value=1, max_value=6),
    st.text(alphabet=string.ascii_letters + string.digits + " ", min_size=1, max_size=30),
)
def test_heading_reserialization_is_idempotent(level: int, title: str):
    block = classify_line(f"{'#' * level} {title}")
    reserialized = classify_line(f"{'#' * block.level} {block.text}")

    assert reserialized == block
    assert block == Heading(level=level, text=title.strip())
