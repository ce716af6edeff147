from __future__ import annotations

import json

from mdview.models import CodeBlock, Heading, Rule, Table, Token, TokenCategory
from mdview.parser import classify
from mdview.serialization import block_to_dict, to_json, token_to_dict


def test_token_to_dict():
    assert token_to_dict(Token("def", TokenCategory.KEYWORD)) == {
        "text": "def",
        "category": "keyword",
    }


def test_block_to_dict_includes_type_and_fields():
    assert block_to_dict(Heading(level=3, text="Deep")) == {
        "_type": "Heading",
        "level": 3,
        "text": "Deep",
    }
    assert block_to_dict(Rule()) == {"_type": "Rule"}


def test_table_rows_become_lists():
    block = Table(header_row=None, body_rows=(("a", "b"), ("c", "")))

    assert block_to_dict(block) == {
        "_type": "Table",
        "header_row": None,
        "body_rows": [["a", "b"], ["c", ""]],
    }


def test_code_block_carries_tokens():
    block = CodeBlock(language="sql", raw_text="SELECT 1")

    payload = block_to_dict(block)

    assert payload["tokens"] == [
        {"text": "SELECT", "category": "keyword"},
        {"text": " ", "category": "whitespace"},
        {"text": "1", "category": "number"},
    ]
    assert "tokens" not in block_to_dict(block, highlight_code=False)


def test_to_json_is_deterministic_and_sorted():
    blocks = classify("# T\n\n```\nx\n```")

    first = to_json(blocks)

    assert first == to_json(blocks)
    assert first.startswith('[{"_type": "Heading", "level": 1, "text": "T"}')


def test_to_json_keeps_unicode():
    output = to_json(classify("- café"))

    assert "•" in output
    assert "café" in output
    assert json.loads(output) == [{"_type": "ListItem", "marker": "•", "text": "café"}]


def test_to_json_indent():
    assert to_json([Rule()], indent=2) == '[\n  {\n    "_type": "Rule"\n  }\n]'


def test_to_json_empty():
    assert to_json([]) == "[]"
