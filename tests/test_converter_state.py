from md_gutenberg.converter import (
    _try_blockquote,
    _try_code_fence,
    _try_continue_passthrough,
    _try_continue_shortcode,
    _try_list_item,
    _try_open_passthrough,
    _try_open_shortcode,
    _try_table_row,
    finish,
    flush,
)
from md_gutenberg.models import (
    CodeFence,
    ConverterContext,
    Idle,
    ListBuffer,
    Passthrough,
    QuoteBuffer,
    ShortcodeBuffer,
    TableBuffer,
)


def test_try_open_passthrough_enters_passthrough_mode():
    ctx = ConverterContext()

    opened = _try_open_passthrough(ctx, "<!-- wp:group -->")

    assert opened is True
    assert ctx.mode == Passthrough(depth=1, lines=["<!-- wp:group -->"])
    assert ctx.fragments == []


def test_try_open_passthrough_emits_balanced_line_immediately():
    ctx = ConverterContext()

    assert _try_open_passthrough(ctx, "<!-- wp:separator /-->") is True
    assert isinstance(ctx.mode, Idle)
    assert ctx.fragments == ["<!-- wp:separator /-->"]


def test_try_open_passthrough_waits_for_split_opener():
    ctx = ConverterContext()

    assert _try_open_passthrough(ctx, "<!-- wp:separator {") is True
    assert ctx.mode == Passthrough(depth=0, lines=["<!-- wp:separator {"], open_comment=True)

    assert _try_continue_passthrough(ctx, '"className":"is-style-wide"} /-->') is True
    assert isinstance(ctx.mode, Idle)
    assert ctx.fragments == ['<!-- wp:separator {\n"className":"is-style-wide"} /-->']


def test_try_open_passthrough_ignores_indented_marker():
    ctx = ConverterContext()

    assert _try_open_passthrough(ctx, "  <!-- wp:group -->") is False
    assert isinstance(ctx.mode, Idle)


def test_try_continue_passthrough_tracks_depth():
    ctx = ConverterContext(mode=Passthrough(depth=1, lines=["<!-- wp:group -->"]))

    assert _try_continue_passthrough(ctx, "<!-- wp:paragraph -->") is True
    assert ctx.mode.depth == 2
    assert _try_continue_passthrough(ctx, "<!-- /wp:paragraph -->") is True
    assert ctx.mode.depth == 1
    assert _try_continue_passthrough(ctx, "<!-- /wp:group -->") is True

    assert isinstance(ctx.mode, Idle)
    assert ctx.fragments == [
        "<!-- wp:group -->\n<!-- wp:paragraph -->\n<!-- /wp:paragraph -->\n<!-- /wp:group -->"
    ]


def test_try_continue_passthrough_ignored_when_idle():
    ctx = ConverterContext()

    assert _try_continue_passthrough(ctx, "<!-- /wp:group -->") is False


def test_try_code_fence_opens_and_closes():
    ctx = ConverterContext()

    assert _try_code_fence(ctx, "```js") is True
    assert ctx.mode == CodeFence()
    assert _try_code_fence(ctx, "let a = 1;") is True
    assert ctx.mode == CodeFence(lines=["let a = 1;"])
    assert _try_code_fence(ctx, "```") is True

    assert isinstance(ctx.mode, Idle)
    assert len(ctx.fragments) == 1
    assert "let a = 1;" in ctx.fragments[0]


def test_try_code_fence_flushes_open_list():
    ctx = ConverterContext(mode=ListBuffer(ordered=False, items=["a"]))

    assert _try_code_fence(ctx, "```") is True
    assert ctx.fragments[0].startswith("<!-- wp:list -->")
    assert ctx.mode == CodeFence()


def test_try_open_shortcode_requires_closing_tag():
    ctx = ConverterContext()
    lines = ["[caption]", "text"]

    assert _try_open_shortcode(ctx, lines, 0) is False
    assert isinstance(ctx.mode, Idle)


def test_try_open_shortcode_buffers_until_closing_tag():
    ctx = ConverterContext()
    lines = ["[caption id=1]", "text", "[/caption]"]

    assert _try_open_shortcode(ctx, lines, 0) is True
    assert ctx.mode == ShortcodeBuffer(tag="caption", lines=["[caption id=1]"])

    assert _try_continue_shortcode(ctx, "text") is True
    assert _try_continue_shortcode(ctx, "  [/caption]") is True
    assert isinstance(ctx.mode, Idle)
    assert ctx.fragments == [
        "<!-- wp:shortcode -->\n[caption id=1]\ntext\n  [/caption]\n<!-- /wp:shortcode -->"
    ]


def test_try_open_shortcode_only_scans_later_lines():
    ctx = ConverterContext()
    lines = ["[/note]", "[note]"]

    assert _try_open_shortcode(ctx, lines, 1) is False


def test_try_table_row_skips_separator():
    ctx = ConverterContext()

    assert _try_table_row(ctx, "| A | B |") is True
    assert _try_table_row(ctx, "|:--|--:|") is True
    assert _try_table_row(ctx, "| 1 | 2 |") is True

    assert ctx.mode == TableBuffer(header=["A", "B"], rows=[["1", "2"]])


def test_try_table_row_flushes_on_other_line():
    ctx = ConverterContext(mode=TableBuffer(header=["A"]))

    assert _try_table_row(ctx, "not a row") is False
    assert isinstance(ctx.mode, Idle)
    assert ctx.fragments[0].startswith("<!-- wp:table -->")


def test_try_blockquote_accumulates_lines():
    ctx = ConverterContext()

    assert _try_blockquote(ctx, "> one") is True
    assert _try_blockquote(ctx, ">two") is True
    assert ctx.mode == QuoteBuffer(lines=["one", "two"])


def test_try_list_item_switches_type():
    ctx = ConverterContext()

    assert _try_list_item(ctx, "- a") is True
    assert _try_list_item(ctx, "2. b") is True

    assert ctx.mode == ListBuffer(ordered=True, items=["b"])
    assert len(ctx.fragments) == 1


def test_flush_leaves_code_fence_open():
    ctx = ConverterContext(mode=CodeFence(lines=["x"]))

    flush(ctx)

    assert ctx.mode == CodeFence(lines=["x"])
    assert ctx.fragments == []


def test_flush_is_noop_when_idle():
    ctx = ConverterContext()

    flush(ctx)

    assert ctx.fragments == []


def test_finish_flushes_every_mode():
    for mode in (
        CodeFence(lines=["x"]),
        Passthrough(depth=1, lines=["<!-- wp:group -->"]),
        ShortcodeBuffer(tag="a", lines=["[a]"]),
        ListBuffer(ordered=False, items=["x"]),
        TableBuffer(header=["x"]),
        QuoteBuffer(lines=["x"]),
    ):
        ctx = ConverterContext(mode=mode)

        finish(ctx)

        assert isinstance(ctx.mode, Idle)
        assert len(ctx.fragments) == 1
