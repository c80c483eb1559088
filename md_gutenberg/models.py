"""Data models for md-gutenberg.

The converter and the hint expander are both single-pass state machines. Each
state is a dataclass variant carrying its own buffer, and a context holds
exactly one active variant at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class Idle:
    """No multi-line construct is being buffered."""


@dataclass
class CodeFence:
    """Inside a fenced code block.

    Attributes:
        lines: Raw lines between the opening fence and the current line.
    """

    lines: list[str] = field(default_factory=list)


@dataclass
class ListBuffer:
    """Accumulating items of a single list.

    Attributes:
        ordered: True for a numbered list, False for a bulleted one.
        items: Item text with the list marker removed.
    """

    ordered: bool
    items: list[str] = field(default_factory=list)


@dataclass
class TableBuffer:
    """Accumulating rows of a pipe table.

    Attributes:
        header: Cells of the first row.
        rows: Cells of every following non-separator row.
    """

    header: list[str]
    rows: list[list[str]] = field(default_factory=list)


@dataclass
class QuoteBuffer:
    """Accumulating blockquote lines, with the ``>`` prefix removed."""

    lines: list[str] = field(default_factory=list)


@dataclass
class Passthrough:
    """Inside a raw block-markup region that is re-emitted verbatim.

    Attributes:
        depth: Number of block openers not yet matched by a closer.
        lines: Raw lines of the region, including the opener.
        open_comment: Whether the last opener's comment continues on the next
            line, as block attributes may span several lines.
    """

    depth: int
    lines: list[str] = field(default_factory=list)
    open_comment: bool = False


@dataclass
class ShortcodeBuffer:
    """Inside a paired ``[tag] ... [/tag]`` shortcode.

    Attributes:
        tag: Shortcode name whose closing tag ends the region.
        lines: Raw lines of the region, including the opening line.
    """

    tag: str
    lines: list[str] = field(default_factory=list)


ConverterMode = Union[Idle, CodeFence, ListBuffer, TableBuffer, QuoteBuffer, Passthrough, ShortcodeBuffer]

# Modes closed implicitly whenever another block-level construct starts.
FLUSHABLE_MODES = (QuoteBuffer, ListBuffer, TableBuffer)


@dataclass
class ConverterContext:
    """Encapsulate converter state while walking markdown lines.

    Attributes:
        mode: The single active parser mode.
        fragments: Emitted block fragments, in output order.
    """

    mode: ConverterMode = field(default_factory=Idle)
    fragments: list[str] = field(default_factory=list)


@dataclass
class OpenHint:
    """A hint marker region that has been opened but not yet closed.

    Attributes:
        kind: Hint name taken from the opening marker (for example ``"faq"``).
        attributes: ``key="value"`` pairs read from the opening marker.
        lines: Raw lines buffered since the opening marker.
    """

    kind: str
    attributes: dict[str, str] = field(default_factory=dict)
    lines: list[str] = field(default_factory=list)


@dataclass
class FaqEntry:
    """A question and its answer extracted from an FAQ hint."""

    title: str
    answer_lines: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return " ".join(self.answer_lines)


@dataclass
class RoundupParts:
    """Sub-sections collected from a product-roundup hint.

    Attributes:
        accolade: Award line shown above the product name.
        image: Image URL or markdown image reference.
        stats: Bullet lines for the stats accordion.
        cta: Attributes of the call-to-action button, if any.
        discount: Lines of the discount callout.
        summary: Loose lines outside every sub-section.
    """

    accolade: str = ""
    image: str = ""
    stats: list[str] = field(default_factory=list)
    cta: dict[str, str] | None = None
    discount: list[str] = field(default_factory=list)
    summary: list[str] = field(default_factory=list)
