"""Removal of conversational wrapper text around generated content.

Assistants often wrap an article in filler such as "Sure, here is the
article:" or "Let me know if you'd like changes!". Only whole leading and
trailing lines are removed; the body is never rewritten.
"""

from __future__ import annotations

import logging

from .constants import (
    BLOCK_OPEN_PREFIX,
    CONTENT_HEADING_PATTERN,
    DIVIDER_LINE,
    POSTAMBLE_PREFIXES,
    PREAMBLE_PREFIXES,
)

logger = logging.getLogger(__name__)


def _is_filler(line: str, prefixes: tuple[str, ...]) -> bool:
    lowered = line.strip().lower()
    if lowered in ("", DIVIDER_LINE):
        return True
    return lowered.startswith(prefixes)


def is_content_start(line: str) -> bool:
    """Return True for a heading or a raw block opener.

    Examples:
        is_content_start("## Overview")  # True
        is_content_start("Sure, here it is:")  # False
    """
    trimmed = line.strip()
    return bool(CONTENT_HEADING_PATTERN.match(trimmed)) or trimmed.startswith(BLOCK_OPEN_PREFIX)


def strip_ai_commentary(text: str) -> str:
    """Strip preamble and postamble lines from generated content.

    From the top, blank lines, ``---`` dividers and lines opening with a
    preamble phrase are skipped until a heading, a raw block opener, or any
    other line is reached. From the bottom, blank lines, dividers and lines
    opening with a postamble phrase are skipped. Phrase matching is a
    case-insensitive prefix test.

    Args:
        text: Content as produced by the assistant.

    Returns:
        str: The remaining content with surrounding whitespace trimmed, or an
            empty string when every line is filler.

    Examples:
        strip_ai_commentary("Sure, here it is:\\n\\n## Intro\\nBody.")  # "## Intro\\nBody."
        strip_ai_commentary("## Intro\\n\\nLet me know!")  # "## Intro"
    """
    lines = text.split("\n")

    first_real = 0
    for index, line in enumerate(lines):
        if is_content_start(line):
            first_real = index
            break
        if _is_filler(line, PREAMBLE_PREFIXES):
            first_real = index + 1
            continue
        first_real = index
        break

    last_real = len(lines) - 1
    for index in range(len(lines) - 1, first_real - 1, -1):
        if _is_filler(lines[index], POSTAMBLE_PREFIXES):
            last_real = index - 1
            continue
        last_real = index
        break

    if last_real < first_real:
        logger.debug("Every line was commentary; nothing left to convert")
        return ""

    if first_real or last_real < len(lines) - 1:
        logger.debug(
            "Stripped %d leading and %d trailing commentary lines",
            first_real,
            len(lines) - 1 - last_real,
        )

    return "\n".join(lines[first_real : last_real + 1]).strip()
