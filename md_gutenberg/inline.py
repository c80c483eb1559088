"""Inline span formatting for text content."""

from __future__ import annotations

from html import escape as html_escape

from .constants import (
    INLINE_BOLD_PATTERN,
    INLINE_CODE_PATTERN,
    INLINE_ITALIC_PATTERN,
    INLINE_LINK_PATTERN,
)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and quotes for HTML text and attribute values."""
    return html_escape(text, quote=True)


def _format_emphasis(text: str) -> str:
    text = INLINE_BOLD_PATTERN.sub(r"<strong>\1</strong>", text)
    return INLINE_ITALIC_PATTERN.sub(r"<em>\1</em>", text)


def format_inline(text: str) -> str:
    """Convert inline markdown spans to HTML.

    Handles ``**bold**``, ``*italic*``, `` `code` `` and ``[text](url)``. Spans
    may co-occur in one line; unmatched delimiters are left as literal text.
    Code span contents are HTML-escaped and never formatted further, and link
    URLs are never scanned for emphasis. Other text is not escaped, so inline
    HTML written by the author survives.

    Args:
        text: A single line of text content.

    Returns:
        str: The text with inline spans converted to HTML.

    Examples:
        format_inline("Hello **world**")  # "Hello <strong>world</strong>"
        format_inline("Use `a<b`")  # "Use <code>a&lt;b</code>"
        format_inline("[click](https://example.com)")  # '<a href="https://example.com">click</a>'
    """
    # Finished spans are parked behind placeholders so later passes skip them
    spans: list[str] = []

    def _park(fragment: str) -> str:
        spans.append(fragment)
        return f"\x00SPAN_{len(spans) - 1}\x00"

    text = INLINE_CODE_PATTERN.sub(
        lambda match: _park(f"<code>{html_escape(match.group(1), quote=False)}</code>"), text
    )
    text = INLINE_LINK_PATTERN.sub(
        lambda match: _park(
            f'<a href="{escape_html(match.group(2))}">{_format_emphasis(match.group(1))}</a>'
        ),
        text,
    )
    text = _format_emphasis(text)

    # Later spans may wrap earlier placeholders, so restore newest first
    for index in range(len(spans) - 1, -1, -1):
        text = text.replace(f"\x00SPAN_{index}\x00", spans[index])

    return text
