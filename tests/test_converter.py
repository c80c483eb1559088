from __future__ import annotations

import textwrap

import pytest

from md_gutenberg.converter import (
    block_depth_delta,
    markdown_to_gutenberg,
    parse_table_row,
    scan_block_markup,
)


def _md(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


def test_converts_h2_heading():
    assert markdown_to_gutenberg("## Hello World") == (
        "<!-- wp:heading -->\n"
        '<h2 class="wp-block-heading">Hello World</h2>\n'
        "<!-- /wp:heading -->"
    )


def test_converts_h3_heading_with_level_attribute():
    result = markdown_to_gutenberg("### Sub Heading")
    assert result.startswith('<!-- wp:heading {"level":3} -->')
    assert '<h3 class="wp-block-heading">Sub Heading</h3>' in result


def test_heading_class_suffix_becomes_class_name():
    assert markdown_to_gutenberg("## Title {.foo}") == (
        '<!-- wp:heading {"className":"foo"} -->\n'
        '<h2 class="wp-block-heading foo">Title</h2>\n'
        "<!-- /wp:heading -->"
    )


def test_heading_with_level_and_class():
    result = markdown_to_gutenberg("#### Transcript {.podcast-transcript}")
    assert result.startswith('<!-- wp:heading {"level":4,"className":"podcast-transcript"} -->')
    assert "{.podcast-transcript}" not in result


def test_h1_lines_are_dropped():
    result = markdown_to_gutenberg("# Title\n\n## Real Heading")
    assert "<h1" not in result
    assert "Title" not in result.replace("Real Heading", "")
    assert "<h2" in result


def test_converts_paragraph_with_inline_formatting():
    assert markdown_to_gutenberg("Text with **bold** word.") == (
        "<!-- wp:paragraph -->\n<p>Text with <strong>bold</strong> word.</p>\n<!-- /wp:paragraph -->"
    )


def test_each_line_becomes_its_own_paragraph():
    result = markdown_to_gutenberg("First line.\nSecond line.")
    assert result.count("<!-- wp:paragraph -->") == 2


def test_converts_unordered_list():
    assert markdown_to_gutenberg("- Item A\n* Item B") == (
        "<!-- wp:list -->\n"
        "<ul>"
        "<!-- wp:list-item --><li>Item A</li><!-- /wp:list-item -->"
        "<!-- wp:list-item --><li>Item B</li><!-- /wp:list-item -->"
        "</ul>\n"
        "<!-- /wp:list -->"
    )


def test_converts_ordered_list():
    result = markdown_to_gutenberg("1. First\n2. Second")
    assert result.startswith('<!-- wp:list {"ordered":true} -->\n<ol>')
    assert "<li>Second</li>" in result


def test_switching_list_type_yields_two_lists():
    result = markdown_to_gutenberg("- a\n1. b")
    assert result == (
        "<!-- wp:list -->\n"
        "<ul><!-- wp:list-item --><li>a</li><!-- /wp:list-item --></ul>\n"
        "<!-- /wp:list -->\n\n"
        '<!-- wp:list {"ordered":true} -->\n'
        "<ol><!-- wp:list-item --><li>b</li><!-- /wp:list-item --></ol>\n"
        "<!-- /wp:list -->"
    )


def test_blank_line_closes_list():
    result = markdown_to_gutenberg("- a\n\n- b")
    assert result.count("<!-- wp:list -->") == 2


def test_paragraph_line_closes_list():
    result = markdown_to_gutenberg("- a\nAfter the list.")
    assert result.index("<!-- /wp:list -->") < result.index("<p>After the list.</p>")


def test_list_items_are_formatted():
    assert "<li><em>x</em></li>" in markdown_to_gutenberg("- *x*")


def test_converts_table():
    md = "| Name | Score |\n| --- | --- |\n| Alice | 95 |\n| Bob | 87 |"
    result = markdown_to_gutenberg(md)
    assert result == (
        "<!-- wp:table -->\n"
        '<figure class="wp-block-table"><table>'
        "<thead><tr><th>Name</th><th>Score</th></tr></thead>"
        "<tbody><tr><td>Alice</td><td>95</td></tr><tr><td>Bob</td><td>87</td></tr></tbody>"
        "</table></figure>\n"
        "<!-- /wp:table -->"
    )
    assert result.count("<th>Name</th>") == 1


def test_non_pipe_line_closes_table_and_is_dispatched():
    result = markdown_to_gutenberg("| A |\n| - |\n| 1 |\n## After")
    assert result.index("<!-- /wp:table -->") < result.index("<!-- wp:heading -->")


def test_converts_blockquote_lines_joined_with_breaks():
    assert markdown_to_gutenberg("> A wise quote\n> by **someone**") == (
        "<!-- wp:quote -->\n"
        '<blockquote class="wp-block-quote"><p>A wise quote<br>by <strong>someone</strong></p></blockquote>\n'
        "<!-- /wp:quote -->"
    )


def test_non_quote_line_closes_quote():
    result = markdown_to_gutenberg("> quoted\nplain")
    assert result.count("<!-- wp:quote -->") == 1
    assert "<p>plain</p>" in result


def test_converts_code_block_with_escaping():
    assert markdown_to_gutenberg("```python\nif a < b:\n    pass\n```") == (
        "<!-- wp:code -->\n"
        '<pre class="wp-block-code"><code>if a &lt; b:\n    pass</code></pre>\n'
        "<!-- /wp:code -->"
    )


def test_code_block_content_is_not_parsed():
    result = markdown_to_gutenberg("```\n## not a heading\n<!-- wp:paragraph -->\n```")
    assert "<!-- wp:heading" not in result
    assert "&lt;!-- wp:paragraph --&gt;" in result


def test_unterminated_code_block_is_flushed():
    result = markdown_to_gutenberg("```\nconst x = 1;")
    assert result.startswith("<!-- wp:code -->")
    assert "const x = 1;" in result


def test_converts_image():
    assert markdown_to_gutenberg("![alt text](https://example.com/img.jpg)") == (
        '<!-- wp:image {"sizeSlug":"large"} -->\n'
        '<figure class="wp-block-image size-large">'
        '<img src="https://example.com/img.jpg" alt="alt text"/></figure>\n'
        "<!-- /wp:image -->"
    )


def test_image_alt_is_escaped():
    assert 'alt="a &quot;quoted&quot; alt"' in markdown_to_gutenberg(
        '![a "quoted" alt](https://example.com/a.png)'
    )


def test_multiline_shortcode_is_wrapped():
    assert markdown_to_gutenberg("[otr_transcript]\nContent here\n[/otr_transcript]") == (
        "<!-- wp:shortcode -->\n"
        "[otr_transcript]\nContent here\n[/otr_transcript]\n"
        "<!-- /wp:shortcode -->"
    )


def test_single_line_shortcode_is_wrapped():
    assert markdown_to_gutenberg('[button url="x"]Go[/button]') == (
        '<!-- wp:shortcode -->\n[button url="x"]Go[/button]\n<!-- /wp:shortcode -->'
    )


def test_shortcode_content_is_not_parsed():
    result = markdown_to_gutenberg("[box]\n## Inside\n[/box]")
    assert "<!-- wp:heading" not in result
    assert "## Inside" in result


def test_unclosed_shortcode_falls_through():
    assert markdown_to_gutenberg("[gallery]") == (
        "<!-- wp:paragraph -->\n<p>[gallery]</p>\n<!-- /wp:paragraph -->"
    )


def test_raw_blocks_pass_through():
    raw = "<!-- wp:paragraph -->\n<p>Already Gutenberg</p>\n<!-- /wp:paragraph -->"
    assert markdown_to_gutenberg(raw) == raw


def test_nested_raw_blocks_with_blank_lines_pass_through():
    raw = _md(
        """
        <!-- wp:group -->
        <div class="wp-block-group">

        <!-- wp:paragraph -->
        <p>## not a heading</p>
        <!-- /wp:paragraph -->

        </div>
        <!-- /wp:group -->
        """
    )
    assert markdown_to_gutenberg(raw) == raw


def test_self_closing_block_is_emitted_alone():
    result = markdown_to_gutenberg("<!-- wp:separator /-->\n## Next")
    assert result.startswith("<!-- wp:separator /-->\n\n<!-- wp:heading -->")


def test_multiline_block_opener_passes_through():
    raw = _md(
        """
        <!-- wp:group {
        "layout":{"type":"flex"}} -->
        <div class="wp-block-group">x</div>
        <!-- /wp:group -->
        """
    )
    assert markdown_to_gutenberg(raw) == raw


def test_multiline_self_closing_block_is_emitted_alone():
    raw = '<!-- wp:image {\n"id":7,\n"sizeSlug":"large"} /-->'
    result = markdown_to_gutenberg(raw + "\n## Next")
    assert result.startswith(raw + "\n\n<!-- wp:heading -->")
    assert "<p>" not in result


def test_unterminated_raw_block_is_flushed_verbatim():
    raw = "<!-- wp:group -->\n<div>open"
    assert markdown_to_gutenberg(raw) == raw


def test_raw_block_closes_open_list():
    result = markdown_to_gutenberg("- a\n<!-- wp:separator /-->")
    assert result.endswith("<!-- /wp:list -->\n\n<!-- wp:separator /-->")


def test_empty_input_yields_empty_output():
    assert markdown_to_gutenberg("") == ""
    assert markdown_to_gutenberg("\n\n   \n") == ""


def test_conversion_is_idempotent_on_mixed_document():
    document = _md(
        """
        # Post title

        Intro with [a link](https://example.com) and `code`.

        ## Section {.highlight}

        - one
        - two
        1. first

        | A | B |
        |---|---|
        | 1 | 2 |

        > quote line

        ```
        x = 1
        ```

        ![pic](https://example.com/p.png)

        [note]
        kept as is
        [/note]
        """
    )
    once = markdown_to_gutenberg(document)
    assert markdown_to_gutenberg(once) == once


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("<!-- wp:group -->", 1),
        ('<!-- wp:heading {"level":3} -->', 1),
        ("<!-- wp:separator /-->", 0),
        ("<!-- /wp:group -->", -1),
        ("<ul><!-- wp:list-item --><li>a</li><!-- /wp:list-item --></ul>", 0),
        ("<!-- wp:a --><!-- wp:b -->", 2),
        ("plain text", 0),
    ],
)
def test_block_depth_delta(line: str, expected: int):
    assert block_depth_delta(line) == expected


def test_parse_table_row_trims_cells():
    assert parse_table_row("  | a |  b  | c|") == ["a", "b", "c"]


@pytest.mark.parametrize(
    ("line", "open_comment", "expected"),
    [
        ("<!-- wp:group {", False, (0, True)),
        ('"layout":{"type":"flex"}} -->', True, (1, False)),
        ('"id":7} /-->', True, (0, False)),
        ('"still":"open",', True, (0, True)),
        ("} --><!-- wp:columns {", True, (1, True)),
        ("<!-- wp:group -->", False, (1, False)),
        ("<!-- /wp:group -->", False, (-1, False)),
    ],
)
def test_scan_block_markup(line: str, open_comment: bool, expected: tuple[int, bool]):
    assert scan_block_markup(line, open_comment) == expected
