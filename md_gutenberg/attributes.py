"""Marker attribute parsing and block comment serialization."""

from __future__ import annotations

import json
from collections.abc import Mapping

from .constants import (
    ATTRIBUTE_PATTERN,
    ESCAPED_QUOTE_PATTERN,
    SELF_CLOSING_SUFFIX,
    TRUTHY_VALUES,
)


def parse_attributes(line: str) -> dict[str, str]:
    """Extract ``key="value"`` pairs from a hint marker line.

    Values are taken verbatim; single-quoted or unquoted values are not
    recognized. When a key repeats, the last occurrence wins.

    Args:
        line: Full text of the marker line.

    Returns:
        dict[str, str]: Attribute values keyed by attribute name.

    Examples:
        parse_attributes('<!-- @jump-links title="Top Picks" -->')  # {"title": "Top Picks"}
        parse_attributes("<!-- @protip -->")  # {}
    """
    return {key: value for key, value in ATTRIBUTE_PATTERN.findall(line)}


def is_truthy(value: str | None) -> bool:
    """Interpret a marker attribute as a boolean flag.

    Examples:
        is_truthy("true")  # True
        is_truthy("")  # False
    """
    if value is None:
        return False
    return value.strip().lower() in TRUTHY_VALUES


def serialize_block_attributes(attributes: Mapping[str, object]) -> str:
    """Serialize block attributes for a block comment delimiter.

    Produces compact JSON and escapes the sequences that could end or confuse
    the surrounding HTML comment, matching how WordPress serializes block
    attributes.

    Args:
        attributes: Attribute values to serialize.

    Returns:
        str: JSON object text safe to embed in ``<!-- wp:name {...} -->``.

    Examples:
        serialize_block_attributes({"level": 3})  # '{"level":3}'
        serialize_block_attributes({"tweet": 'a "b"'})  # '{"tweet":"a \\u0022b\\u0022"}'
    """
    encoded = json.dumps(attributes, ensure_ascii=False, separators=(",", ":"))
    encoded = encoded.replace("--", "\\u002d\\u002d")
    encoded = encoded.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")
    return ESCAPED_QUOTE_PATTERN.sub(r"\1\\u0022", encoded)


def block_opener(
    name: str, attributes: Mapping[str, object] | None = None, self_closing: bool = False
) -> str:
    """Render an opening (or self-closing) block comment.

    Args:
        name: Block name, for example ``"heading"`` or ``"generateblocks/container"``.
        attributes: Optional block attributes; omitted from the comment when empty.
        self_closing: Render ``/-->`` instead of ``-->``.

    Returns:
        str: The block comment.

    Examples:
        block_opener("heading", {"level": 3})  # '<!-- wp:heading {"level":3} -->'
        block_opener("separator", self_closing=True)  # '<!-- wp:separator /-->'
    """
    parts = [f"<!-- wp:{name}"]
    if attributes:
        parts.append(serialize_block_attributes(attributes))
    parts.append(SELF_CLOSING_SUFFIX if self_closing else "-->")
    return " ".join(parts)


def block_closer(name: str) -> str:
    return f"<!-- /wp:{name} -->"
