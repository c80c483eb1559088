from __future__ import annotations

import json

import pytest

from md_gutenberg.attributes import (
    block_closer,
    block_opener,
    is_truthy,
    parse_attributes,
    serialize_block_attributes,
)


def test_parse_attributes_reads_every_pair():
    line = '<!-- @data-lab title="Test Data" columns="Name,Score" -->'
    assert parse_attributes(line) == {"title": "Test Data", "columns": "Name,Score"}


def test_parse_attributes_without_pairs():
    assert parse_attributes("<!-- @protip -->") == {}


def test_parse_attributes_ignores_unquoted_values():
    assert parse_attributes("<!-- @cta url=https://x.com text='Buy' -->") == {}


def test_parse_attributes_last_duplicate_wins():
    assert parse_attributes('<!-- @x a="1" a="2" -->') == {"a": "2"}


def test_parse_attributes_keeps_empty_values():
    assert parse_attributes('<!-- @cta url="" -->') == {"url": ""}


@pytest.mark.parametrize("value", ["true", "TRUE", " yes ", "1", "on"])
def test_is_truthy_accepts_flags(value: str):
    assert is_truthy(value) is True


@pytest.mark.parametrize("value", [None, "", "false", "0", "no", "sponsored"])
def test_is_truthy_rejects_other_values(value):
    assert is_truthy(value) is False


def test_serialize_is_compact():
    assert serialize_block_attributes({"level": 3, "ordered": True}) == '{"level":3,"ordered":true}'


def test_serialize_escapes_comment_breaking_sequences():
    encoded = serialize_block_attributes({"text": "a -- b <c> & d"})
    assert encoded == '{"text":"a \\u002d\\u002d b \\u003cc\\u003e \\u0026 d"}'
    assert "-->" not in encoded


def test_serialize_escapes_quotes():
    assert serialize_block_attributes({"tweet": 'say "hi"'}) == '{"tweet":"say \\u0022hi\\u0022"}'


def test_serialize_keeps_non_ascii():
    assert serialize_block_attributes({"title": "Café — 5€"}) == '{"title":"Café — 5€"}'


def test_serialized_attributes_round_trip_through_json():
    attributes = {"rows": "Alice,95\nBob,87", "title": 'x "y" --> <z>'}
    assert json.loads(serialize_block_attributes(attributes)) == attributes


def test_block_opener_variants():
    assert block_opener("heading") == "<!-- wp:heading -->"
    assert block_opener("heading", {}) == "<!-- wp:heading -->"
    assert block_opener("heading", {"level": 3}) == '<!-- wp:heading {"level":3} -->'
    assert block_opener("separator", self_closing=True) == "<!-- wp:separator /-->"
    assert (
        block_opener("outliyr/data-lab", {"title": "T"}, self_closing=True)
        == '<!-- wp:outliyr/data-lab {"title":"T"} /-->'
    )


def test_block_closer():
    assert block_closer("generateblocks/container") == "<!-- /wp:generateblocks/container -->"


def test_serialize_trailing_backslash_keeps_json_valid():
    attributes = {"path": "C:\\dir\\", "quote": '\\"'}
    encoded = serialize_block_attributes(attributes)
    assert json.loads(encoded) == attributes
