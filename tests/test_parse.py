from __future__ import annotations

import textwrap

import pytest

from mdview.models import (
    Blockquote,
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
    Rule,
    Table,
)
from mdview.parser import classify, classify_line, normalize_newlines


def _doc(content: str) -> str:
    return textwrap.dedent(content).strip("\n")


def test_classify_heading_and_paragraph():
    assert classify("# Title\n\nSome text") == [
        Heading(level=1, text="Title"),
        Paragraph(text="Some text"),
    ]


def test_classify_code_block_with_language():
    assert classify("```python\nprint(1)\n```") == [
        CodeBlock(language="python", raw_text="print(1)")
    ]


def test_classify_list_items():
    assert classify("- a\n- b\n1. c") == [
        ListItem(marker="•", text="a"),
        ListItem(marker="•", text="b"),
        ListItem(marker="1.", text="c"),
    ]


def test_classify_table():
    assert classify("| A | B |\n| - | - |\n| 1 | 2 |") == [
        Table(header_row=("A", "B"), body_rows=(("1", "2"),))
    ]


def test_classify_empty_document():
    assert classify("") == []
    assert classify("\n\n   \n\t\n") == []


@pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
def test_classify_accepts_every_line_ending(newline: str):
    document = newline.join(["# Title", "", "```", "a", "b", "```", "text"])

    assert classify(document) == [
        Heading(level=1, text="Title"),
        CodeBlock(language="", raw_text="a\nb"),
        Paragraph(text="text"),
    ]


def test_normalize_newlines():
    assert normalize_newlines("a\r\nb\rc\n") == "a\nb\nc\n"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("# One", Heading(level=1, text="One")),
        ("###### Six", Heading(level=6, text="Six")),
        ("  ## Indented  ", Heading(level=2, text="Indented")),
        ("####### Seven", Heading(level=6, text="Seven")),
        ("#", Heading(level=1, text="")),
        ("#NoSpace", Heading(level=1, text="NoSpace")),
    ],
)
def test_classify_line_headings(line: str, expected: Heading):
    assert classify_line(line) == expected


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("- dash", ListItem(marker="•", text="dash")),
        ("* star", ListItem(marker="•", text="star")),
        ("+ plus", ListItem(marker="•", text="plus")),
        ("   -\ttabbed", ListItem(marker="•", text="tabbed")),
        ("12. twelve", ListItem(marker="12.", text="twelve")),
        ("007. bond", ListItem(marker="007.", text="bond")),
        ("- **bold** item", ListItem(marker="•", text="**bold** item")),
    ],
)
def test_classify_line_list_items(line: str, expected: ListItem):
    assert classify_line(line) == expected


@pytest.mark.parametrize("line", ["-no space", "1.no space", "1) paren", "-", "1."])
def test_classify_line_rejects_malformed_list_markers(line: str):
    assert not isinstance(classify_line(line), ListItem)


def test_classify_line_blockquote():
    assert classify_line(">   quoted text ") == Blockquote(text="quoted text")
    assert classify_line(">") == Blockquote(text="")


@pytest.mark.parametrize("line", ["---", "***", "___", "----------", "  ---  "])
def test_classify_line_rules(line: str):
    assert classify_line(line) == Rule()


@pytest.mark.parametrize("line", ["--", "-*-", "--- x", "__"])
def test_classify_line_non_rules(line: str):
    assert classify_line(line) != Rule()


def test_classify_line_paragraph_keeps_untrimmed_text():
    assert classify_line("   indented words  ") == Paragraph(text="   indented words  ")


def test_classify_mixed_document():
    document = _doc(
        """
        # Guide

        Intro paragraph.
        > Note this

        ---
        1. First
        2. Second
        """
    )

    assert classify(document) == [
        Heading(level=1, text="Guide"),
        Paragraph(text="Intro paragraph."),
        Blockquote(text="Note this"),
        Rule(),
        ListItem(marker="1.", text="First"),
        ListItem(marker="2.", text="Second"),
    ]


def test_fence_contents_are_not_classified():
    document = _doc(
        """
        ```markdown
        # not a heading
        - not a list

        | not | a table |
        ```
        """
    )

    assert classify(document) == [
        CodeBlock(
            language="markdown",
            raw_text="# not a heading\n- not a list\n\n| not | a table |",
        )
    ]


def test_fence_preserves_indentation_and_blank_lines():
    document = "```\n    indented\n\n\tTabbed\n```"

    assert classify(document) == [CodeBlock(language="", raw_text="    indented\n\n\tTabbed")]


def test_indented_fence_lines_open_and_close():
    assert classify("  ```js  \nlet x\n   ```") == [CodeBlock(language="js", raw_text="let x")]


def test_closing_fence_text_is_ignored():
    assert classify("```\ncode\n``` trailing") == [CodeBlock(language="", raw_text="code")]


def test_unterminated_fence_yields_code_block():
    assert classify("Intro\n```python\ndef f():\n    pass") == [
        Paragraph(text="Intro"),
        CodeBlock(language="python", raw_text="def f():\n    pass"),
    ]


def test_unterminated_empty_fence_still_yields_code_block():
    assert classify("```rust") == [CodeBlock(language="rust", raw_text="")]


def test_empty_code_block():
    assert classify("```\n```") == [CodeBlock(language="", raw_text="")]


def test_consecutive_code_blocks():
    assert classify("```a\n1\n```\n```b\n2\n```") == [
        CodeBlock(language="a", raw_text="1"),
        CodeBlock(language="b", raw_text="2"),
    ]


def test_blank_lines_emit_nothing():
    assert classify("a\n\n\n\nb") == [Paragraph(text="a"), Paragraph(text="b")]


def test_table_followed_by_text():
    document = "| A |\n|---|\n| 1 |\nAfter"

    assert classify(document) == [
        Table(header_row=("A",), body_rows=(("1",),)),
        Paragraph(text="After"),
    ]


def test_table_flushed_before_fence():
    document = "| A |\n| 1 |\n```\ncode\n```"

    assert classify(document) == [
        Table(header_row=("A",), body_rows=(("1",),)),
        CodeBlock(language="", raw_text="code"),
    ]


def test_blank_line_splits_tables():
    document = "| A |\n| 1 |\n\n| B |\n| 2 |"

    assert classify(document) == [
        Table(header_row=("A",), body_rows=(("1",),)),
        Table(header_row=("B",), body_rows=(("2",),)),
    ]


def test_single_table_line_becomes_paragraph():
    assert classify("| lonely |\nnext") == [
        Paragraph(text="| lonely |"),
        Paragraph(text="next"),
    ]


def test_single_table_line_at_end_of_input():
    assert classify("text\n| lonely |") == [
        Paragraph(text="text"),
        Paragraph(text="| lonely |"),
    ]


def test_classify_does_not_mutate_input():
    document = "# Title\n| a |\n| b |"
    snapshot = str(document)

    classify(document)

    assert document == snapshot


def test_leading_byte_order_mark_is_ignored():
    assert classify("\ufeff# Title\r\n\r\nBody") == [
        Heading(level=1, text="Title"),
        Paragraph(text="Body"),
    ]


def test_leading_byte_order_mark_before_fence():
    assert classify("\ufeff```python\nx = 1\n```\n# After") == [
        CodeBlock(language="python", raw_text="x = 1"),
        Heading(level=1, text="After"),
    ]


def test_inner_byte_order_mark_is_kept():
    assert classify("a\n\ufeffb") == [Paragraph(text="a"), Paragraph(text="\ufeffb")]
