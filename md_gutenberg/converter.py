"""Markdown to Gutenberg block conversion.

Line-oriented parser: every line is dispatched against an ordered list of
constructs, and multi-line constructs are buffered in the single active mode of
a `ConverterContext` until they are flushed into a block fragment.
"""

from __future__ import annotations

import logging
from itertools import islice

from .attributes import block_closer, block_opener
from .constants import (
    BLOCK_CLOSER_PATTERN,
    BLOCK_OPEN_PREFIX,
    BLOCK_OPENER_PATTERN,
    BLOCKQUOTE_PATTERN,
    CODE_FENCE,
    COMMENT_END,
    H1_PATTERN,
    HEADING_CLASS_PATTERN,
    HEADING_PATTERN,
    IMAGE_PATTERN,
    ORDERED_ITEM_PATTERN,
    SELF_CLOSING_SUFFIX,
    SHORTCODE_OPEN_PATTERN,
    TABLE_ROW_PATTERN,
    TABLE_SEPARATOR_PATTERN,
    UNORDERED_ITEM_PATTERN,
)
from .inline import escape_html, format_inline
from .models import (
    FLUSHABLE_MODES,
    CodeFence,
    ConverterContext,
    Idle,
    ListBuffer,
    Passthrough,
    QuoteBuffer,
    ShortcodeBuffer,
    TableBuffer,
)

logger = logging.getLogger(__name__)


def block_depth_delta(line: str) -> int:
    """Count unclosed block openers on a line.

    Self-closing openers (``/-->``) do not change the depth; every
    ``<!-- /wp:`` closer lowers it by one.

    Args:
        line: Raw line of block markup.

    Returns:
        int: Openers minus closers found on the line.

    Examples:
        block_depth_delta("<!-- wp:group -->")  # 1
        block_depth_delta("<!-- wp:separator /-->")  # 0
        block_depth_delta("<li>a</li><!-- /wp:list-item --></ul>")  # -1
    """
    openers = sum(
        1 for match in BLOCK_OPENER_PATTERN.finditer(line) if not match.group("self_closing")
    )
    closers = len(BLOCK_CLOSER_PATTERN.findall(line))
    return openers - closers


def scan_block_markup(line: str, open_comment: bool = False) -> tuple[int, bool]:
    """Track block depth across lines, including openers split over lines.

    Block attributes may continue past the line that starts the opener, so an
    opener whose comment has not ended yet is carried to the next line and
    counted once its ``-->`` shows whether it is self-closing.

    Args:
        line: Raw line of block markup.
        open_comment: Whether an opener comment from a previous line is still
            open.

    Returns:
        tuple[int, bool]: Depth change for the line, and whether an opener
            comment is still open at its end.

    Examples:
        scan_block_markup("<!-- wp:group {")  # (0, True)
        scan_block_markup('"layout":{"type":"flex"}} -->', True)  # (1, False)
        scan_block_markup('"id":7} /-->', True)  # (0, False)
    """
    delta = 0
    if open_comment:
        end = line.find(COMMENT_END)
        if end == -1:
            return 0, True
        if not line[: end + len(COMMENT_END)].endswith(SELF_CLOSING_SUFFIX):
            delta = 1
        line = line[end + len(COMMENT_END) :]

    delta += block_depth_delta(line)
    start = line.rfind(BLOCK_OPEN_PREFIX)
    return delta, start != -1 and COMMENT_END not in line[start:]


def parse_table_row(line: str) -> list[str]:
    """Split ``| A | B |`` into ``["A", "B"]``."""
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def _wrap(name: str, body: str, attributes: dict[str, object] | None = None) -> str:
    return "\n".join([block_opener(name, attributes), body, block_closer(name)])


def render_list(buffer: ListBuffer) -> str:
    tag = "ol" if buffer.ordered else "ul"
    items = "".join(
        f"{block_opener('list-item')}<li>{format_inline(item)}</li>{block_closer('list-item')}"
        for item in buffer.items
    )
    attributes = {"ordered": True} if buffer.ordered else None
    return _wrap("list", f"<{tag}>{items}</{tag}>", attributes)


def render_table(buffer: TableBuffer) -> str:
    header_cells = "".join(f"<th>{format_inline(cell)}</th>" for cell in buffer.header)
    body_rows = "".join(
        "<tr>" + "".join(f"<td>{format_inline(cell)}</td>" for cell in row) + "</tr>"
        for row in buffer.rows
    )
    return _wrap(
        "table",
        '<figure class="wp-block-table"><table>'
        f"<thead><tr>{header_cells}</tr></thead><tbody>{body_rows}</tbody>"
        "</table></figure>",
    )


def render_quote(buffer: QuoteBuffer) -> str:
    text = "<br>".join(format_inline(line) for line in buffer.lines)
    return _wrap("quote", f'<blockquote class="wp-block-quote"><p>{text}</p></blockquote>')


def render_code(buffer: CodeFence) -> str:
    code = escape_html("\n".join(buffer.lines))
    return _wrap("code", f'<pre class="wp-block-code"><code>{code}</code></pre>')


def render_shortcode(lines: list[str]) -> str:
    return _wrap("shortcode", "\n".join(lines))


def render_heading(level: int, text: str) -> str:
    """Render an H2-H6 heading block.

    A trailing ``{.classname}`` suffix becomes a CSS class. ``level`` is only
    recorded as a block attribute when it differs from the default of 2, and
    ``className`` only when a class is present.

    Examples:
        render_heading(2, "Intro")
        render_heading(3, "Transcript {.podcast-transcript}")
    """
    class_name = ""
    class_match = HEADING_CLASS_PATTERN.search(text)
    if class_match:
        class_name = class_match.group(1)
        text = HEADING_CLASS_PATTERN.sub("", text).strip()

    attributes: dict[str, object] = {}
    if level > 2:
        attributes["level"] = level
    if class_name:
        attributes["className"] = class_name

    css_class = f"wp-block-heading {class_name}" if class_name else "wp-block-heading"
    return _wrap(
        "heading",
        f'<h{level} class="{css_class}">{format_inline(text)}</h{level}>',
        attributes,
    )


def render_image(alt: str, src: str) -> str:
    return _wrap(
        "image",
        '<figure class="wp-block-image size-large">'
        f'<img src="{escape_html(src)}" alt="{escape_html(alt)}"/></figure>',
        {"sizeSlug": "large"},
    )


def render_paragraph(text: str) -> str:
    return _wrap("paragraph", f"<p>{format_inline(text)}</p>")


def flush(ctx: ConverterContext) -> None:
    """Close a buffered quote, list or table and emit its fragment.

    Code fences, passthrough regions and shortcodes are left untouched; they
    only end on their own closing line or at end of input.

    Args:
        ctx: Converter context to update.
    """
    mode = ctx.mode
    if not isinstance(mode, FLUSHABLE_MODES):
        return

    if isinstance(mode, QuoteBuffer):
        ctx.fragments.append(render_quote(mode))
    elif isinstance(mode, ListBuffer):
        ctx.fragments.append(render_list(mode))
    else:
        ctx.fragments.append(render_table(mode))
    ctx.mode = Idle()


def finish(ctx: ConverterContext) -> None:
    """Flush whatever mode is still active at end of input."""
    mode = ctx.mode
    if isinstance(mode, CodeFence):
        logger.debug("Closing unterminated code fence at end of input")
        ctx.fragments.append(render_code(mode))
    elif isinstance(mode, Passthrough):
        logger.debug("Emitting unterminated block region (depth %d) verbatim", mode.depth)
        ctx.fragments.append("\n".join(mode.lines))
    elif isinstance(mode, ShortcodeBuffer):
        ctx.fragments.append(render_shortcode(mode.lines))
    else:
        flush(ctx)
        return
    ctx.mode = Idle()


def _try_continue_passthrough(ctx: ConverterContext, line: str) -> bool:
    mode = ctx.mode
    if not isinstance(mode, Passthrough):
        return False

    mode.lines.append(line)
    delta, mode.open_comment = scan_block_markup(line, mode.open_comment)
    mode.depth += delta
    if mode.depth <= 0 and not mode.open_comment:
        ctx.fragments.append("\n".join(mode.lines))
        ctx.mode = Idle()
    return True


def _try_open_passthrough(ctx: ConverterContext, line: str) -> bool:
    """Detect raw block markup and pass it through unchanged.

    A line that closes everything it opens (a self-closing block, or a whole
    block written on one line) is emitted at once; otherwise the region is
    buffered until its depth returns to zero and no opener comment is
    left open.

    Args:
        ctx: Converter context to update.
        line: Current line being scanned.

    Returns:
        bool: True when the line was consumed as block markup.
    """
    if not line.startswith(BLOCK_OPEN_PREFIX):
        return False

    flush(ctx)
    depth, open_comment = scan_block_markup(line)
    if depth <= 0 and not open_comment:
        ctx.fragments.append(line)
    else:
        ctx.mode = Passthrough(depth=depth, lines=[line], open_comment=open_comment)
    return True


def _try_code_fence(ctx: ConverterContext, line: str) -> bool:
    mode = ctx.mode
    if isinstance(mode, CodeFence):
        if line.startswith(CODE_FENCE):
            ctx.fragments.append(render_code(mode))
            ctx.mode = Idle()
        else:
            mode.lines.append(line)
        return True

    if not line.startswith(CODE_FENCE):
        return False

    flush(ctx)
    ctx.mode = CodeFence()
    return True


def _try_continue_shortcode(ctx: ConverterContext, line: str) -> bool:
    mode = ctx.mode
    if not isinstance(mode, ShortcodeBuffer):
        return False

    mode.lines.append(line)
    if line.strip().startswith(f"[/{mode.tag}]"):
        ctx.fragments.append(render_shortcode(mode.lines))
        ctx.mode = Idle()
    return True


def _try_open_shortcode(ctx: ConverterContext, lines: list[str], index: int) -> bool:
    """Detect a paired shortcode opening on the current line.

    Args:
        ctx: Converter context to update.
        lines: Every line of the document.
        index: Position of the current line; later lines are scanned for the
            closing tag.

    Returns:
        bool: True when the line opened (or fully contained) a shortcode.
    """
    line = lines[index]
    match = SHORTCODE_OPEN_PATTERN.match(line.strip())
    if not match:
        return False

    tag = match.group(1)
    closing_tag = f"[/{tag}]"
    if any(later.strip().startswith(closing_tag) for later in islice(lines, index + 1, None)):
        flush(ctx)
        ctx.mode = ShortcodeBuffer(tag=tag, lines=[line])
        return True

    if closing_tag in line:
        flush(ctx)
        ctx.fragments.append(render_shortcode([line]))
        return True

    return False


def _try_table_row(ctx: ConverterContext, line: str) -> bool:
    if not TABLE_ROW_PATTERN.match(line.strip()):
        if isinstance(ctx.mode, TableBuffer):
            flush(ctx)
        return False

    mode = ctx.mode
    if not isinstance(mode, TableBuffer):
        flush(ctx)
        ctx.mode = TableBuffer(header=parse_table_row(line))
    elif not TABLE_SEPARATOR_PATTERN.match(line.strip()):
        mode.rows.append(parse_table_row(line))
    return True


def _try_blockquote(ctx: ConverterContext, line: str) -> bool:
    match = BLOCKQUOTE_PATTERN.match(line)
    if not match:
        if isinstance(ctx.mode, QuoteBuffer):
            flush(ctx)
        return False

    if not isinstance(ctx.mode, QuoteBuffer):
        flush(ctx)
        ctx.mode = QuoteBuffer()
    ctx.mode.lines.append(match.group(1))
    return True


def _try_list_item(ctx: ConverterContext, line: str) -> bool:
    unordered = UNORDERED_ITEM_PATTERN.match(line)
    match = unordered or ORDERED_ITEM_PATTERN.match(line)
    if not match:
        return False

    ordered = unordered is None
    mode = ctx.mode
    if not isinstance(mode, ListBuffer) or mode.ordered != ordered:
        flush(ctx)
        mode = ListBuffer(ordered=ordered)
        ctx.mode = mode
    mode.items.append(match.group(1))
    return True


def _convert_line(ctx: ConverterContext, lines: list[str], index: int) -> None:
    line = lines[index]

    # Modes that own every line until their closing line come first
    if _try_continue_passthrough(ctx, line):
        return
    if isinstance(ctx.mode, CodeFence) and _try_code_fence(ctx, line):
        return
    if _try_continue_shortcode(ctx, line):
        return

    if _try_open_passthrough(ctx, line):
        return
    if _try_code_fence(ctx, line):
        return
    if _try_open_shortcode(ctx, lines, index):
        return
    if _try_table_row(ctx, line):
        return
    if _try_blockquote(ctx, line):
        return

    if not line.strip():
        flush(ctx)
        return

    # H1 is the post title, which is set separately
    if H1_PATTERN.match(line):
        flush(ctx)
        return

    heading_match = HEADING_PATTERN.match(line)
    if heading_match:
        flush(ctx)
        ctx.fragments.append(render_heading(len(heading_match.group(1)), heading_match.group(2)))
        return

    image_match = IMAGE_PATTERN.match(line)
    if image_match:
        flush(ctx)
        ctx.fragments.append(render_image(image_match.group(1), image_match.group(2)))
        return

    if _try_list_item(ctx, line):
        return

    flush(ctx)
    ctx.fragments.append(render_paragraph(line))


def markdown_to_gutenberg(text: str) -> str:
    """Convert markdown text to Gutenberg block markup.

    Supports H2-H6 headings (H1 is dropped), paragraphs, bulleted and numbered
    lists, pipe tables, blockquotes, fenced code, images, paired shortcodes and
    raw block markup, which is passed through unchanged so converting already
    converted content is a no-op.

    Args:
        text: Complete markdown document.

    Returns:
        str: Block fragments separated by blank lines, without trailing
            newlines.

    Examples:
        markdown_to_gutenberg("## Hello")
        markdown_to_gutenberg("- a\\n1. b")  # two separate list blocks
    """
    lines = text.split("\n")
    ctx = ConverterContext()

    for index in range(len(lines)):
        _convert_line(ctx, lines, index)

    finish(ctx)
    logger.debug("Converted %d lines into %d block fragments", len(lines), len(ctx.fragments))
    return "\n\n".join(ctx.fragments).rstrip("\n")
