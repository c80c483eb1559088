"""Conversion pipeline: strip, enhance, convert."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from .attributes import is_truthy
from .blocks import IdFactory
from .converter import markdown_to_gutenberg
from .enhance import enhance_hints
from .exceptions import MissingContentError
from .strip import strip_ai_commentary as remove_ai_commentary

logger = logging.getLogger(__name__)


def convert_content(
    content: str,
    strip_ai_commentary: bool = False,
    enhance: bool = False,
    id_factory: IdFactory | None = None,
) -> str:
    """Run the conversion pipeline over a complete document.

    Stages run in a fixed order; only the last is mandatory.

    Args:
        content: Markdown document, possibly wrapped in assistant commentary
            and containing hint markers.
        strip_ai_commentary: Remove preamble and postamble lines first.
        enhance: Expand hint markers into custom blocks before converting.
        id_factory: Identifier factory forwarded to the hint expander.

    Returns:
        str: Gutenberg block markup.

    Examples:
        convert_content("Sure!\\n\\n## Intro", strip_ai_commentary=True)
    """
    logger.debug(
        "Converting %d characters (strip_ai_commentary=%s, enhance=%s)",
        len(content),
        strip_ai_commentary,
        enhance,
    )
    if strip_ai_commentary:
        content = remove_ai_commentary(content)
    if enhance:
        content = enhance_hints(content, id_factory)
    return markdown_to_gutenberg(content)


def validate_request(params: Mapping[str, object]) -> str:
    """Return the request content, rejecting missing or empty content.

    Raises:
        MissingContentError: If ``content`` is absent, empty, or not a string.
    """
    content = params.get("content")
    if not isinstance(content, str) or not content:
        raise MissingContentError()
    return content


def _request_flag(value: object) -> bool:
    if isinstance(value, str):
        return is_truthy(value)
    return bool(value)


def handle_convert(params: Mapping[str, object]) -> str:
    """Serve a ``convert`` request from the tool layer.

    Args:
        params: Request parameters: ``content`` (required) and the optional
            boolean flags ``strip_ai_commentary`` and ``enhance``. String
            flags are read like marker attributes, so ``"false"`` is off.

    Returns:
        str: JSON text, ``{"content": ...}`` on success or
            ``{"error": "content is required"}`` when content is missing.

    Examples:
        handle_convert({"content": "## Hi", "enhance": True})
    """
    try:
        content = validate_request(params)
    except MissingContentError as error:
        return json.dumps({"error": str(error)})

    converted = convert_content(
        content,
        strip_ai_commentary=_request_flag(params.get("strip_ai_commentary")),
        enhance=_request_flag(params.get("enhance")),
    )
    return json.dumps({"content": converted}, ensure_ascii=False)
