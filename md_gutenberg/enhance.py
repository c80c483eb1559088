"""Expansion of ``<!-- @hint -->`` markers into custom block fragments.

Runs after commentary stripping and before markdown conversion. The fragments
it emits start with a block opener, so the converter passes them through
untouched.
"""

from __future__ import annotations

import logging

from .attributes import parse_attributes
from .blocks import HINT_GENERATORS, IdFactory, generate_unique_id, render_cta
from .constants import (
    BUFFERED_HINT_KINDS,
    CTA,
    HINT_END,
    HINT_MARKER_PATTERN,
    PRODUCT_ROUNDUP,
    PRODUCT_ROUNDUP_END,
)
from .models import OpenHint

logger = logging.getLogger(__name__)


def marker_name(line: str) -> str | None:
    """Return the name of the first hint marker on a line, if any.

    Examples:
        marker_name('<!-- @jump-links title="Picks" -->')  # "jump-links"
        marker_name("<!-- @end -->")  # "end"
        marker_name("plain text")  # None
    """
    match = HINT_MARKER_PATTERN.search(line)
    return match.group("name") if match else None


def expand_hint(hint: OpenHint, new_id: IdFactory) -> str:
    logger.debug("Expanding @%s hint from %d buffered lines", hint.kind, len(hint.lines))
    return HINT_GENERATORS[hint.kind](hint.lines, hint.attributes, new_id)


def _restore_unterminated(hint: OpenHint, output: list[str]) -> None:
    logger.warning(
        "Unterminated @%s hint; keeping its %d lines as plain text", hint.kind, len(hint.lines)
    )
    output.extend(hint.lines)


def enhance_hints(text: str, id_factory: IdFactory | None = None) -> str:
    """Replace hint marker regions with their block fragments.

    Buffered hints open with ``<!-- @kind attr="value" -->`` and close with
    ``<!-- @end -->``; ``product-roundup`` closes with ``<!-- @end-product -->``
    and captures every line in between for its own sub-section scan. A
    ``<!-- @cta ... -->`` line outside any hint is expanded on the spot.

    Malformed input degrades instead of failing: an unterminated hint (at end
    of input, or abandoned by a new opening marker) keeps its buffered lines as
    plain text without the marker, and stray close markers are dropped.

    Args:
        text: Content containing hint markers.
        id_factory: Callable returning a fresh block identifier; defaults to
            `generate_unique_id`.

    Returns:
        str: The content with every closed hint region replaced by a fragment.

    Examples:
        enhance_hints("<!-- @protip -->\\nHydrate early.\\n<!-- @end -->")
        enhance_hints('<!-- @cta url="https://example.com" text="Buy" -->')
    """
    new_id = id_factory or generate_unique_id
    output: list[str] = []
    hint: OpenHint | None = None

    for line in text.split("\n"):
        name = marker_name(line)

        # A product roundup owns every line until its own close marker
        if hint is not None and hint.kind == PRODUCT_ROUNDUP:
            if name == PRODUCT_ROUNDUP_END:
                output.append(expand_hint(hint, new_id))
                hint = None
            else:
                hint.lines.append(line)
            continue

        if name in BUFFERED_HINT_KINDS:
            if hint is not None:
                _restore_unterminated(hint, output)
            hint = OpenHint(kind=name, attributes=parse_attributes(line))
            continue

        if name == CTA and hint is None:
            output.append(render_cta(parse_attributes(line), new_id))
            continue

        if name in (HINT_END, PRODUCT_ROUNDUP_END):
            if name == HINT_END and hint is not None:
                output.append(expand_hint(hint, new_id))
                hint = None
            else:
                logger.warning("Dropping stray @%s marker with no matching open hint", name)
            continue

        if hint is not None:
            hint.lines.append(line)
        else:
            output.append(line)

    if hint is not None:
        _restore_unterminated(hint, output)

    return "\n".join(output)
