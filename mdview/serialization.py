"""JSON serialization of classified blocks and code tokens.

Output is deterministic (sorted keys) and carries a ``_type`` discriminator on
every block. Code blocks can include their highlighted token stream so a
consumer needs no tokenizer of its own.
"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

from .highlighter import highlight
from .models import Block, CodeBlock, Token


def token_to_dict(token: Token) -> dict[str, str]:
    return {"text": token.text, "category": token.category.value}


def _serialize_value(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    return value


def block_to_dict(block: Block, *, highlight_code: bool = True) -> dict[str, Any]:
    """Convert a block to a JSON-compatible dict.

    Args:
        block: Block to convert.
        highlight_code: When True, code blocks gain a ``tokens`` list.

    Returns:
        Dict with ``_type`` and every block field.
    """
    result: dict[str, Any] = {"_type": type(block).__name__}
    for f in fields(block):
        result[f.name] = _serialize_value(getattr(block, f.name))

    if highlight_code and isinstance(block, CodeBlock):
        result["tokens"] = [
            token_to_dict(token) for token in highlight(block.raw_text, block.language)
        ]
    return result


def to_json(
    blocks: list[Block], *, highlight_code: bool = True, indent: int | None = None
) -> str:
    """Serialize blocks to a JSON array string.

    Examples:
        to_json(classify("# Hi"))  # '[{"_type": "Heading", "level": 1, "text": "Hi"}]'
    """
    payload = [block_to_dict(block, highlight_code=highlight_code) for block in blocks]
    return json.dumps(payload, sort_keys=True, indent=indent, ensure_ascii=False)
