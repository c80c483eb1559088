"""
md-gutenberg: Markdown to WordPress Gutenberg block converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-gutenberg draft.md --strip-ai-commentary --enhance

Library Usage:
    from md_gutenberg import convert_content, markdown_to_gutenberg

    blocks = markdown_to_gutenberg("## Intro\\n\\nHello **world**.")
    blocks = convert_content(draft, strip_ai_commentary=True, enhance=True)
"""

from .attributes import parse_attributes, serialize_block_attributes
from .converter import markdown_to_gutenberg
from .enhance import enhance_hints
from .exceptions import ConversionError, InputTooLargeError, MissingContentError
from .inline import format_inline
from .pipeline import convert_content, handle_convert
from .strip import strip_ai_commentary

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_content",
    "strip_ai_commentary",
    "enhance_hints",
    "markdown_to_gutenberg",
    "handle_convert",
    # Utilities
    "format_inline",
    "parse_attributes",
    "serialize_block_attributes",
    # Exceptions
    "ConversionError",
    "InputTooLargeError",
    "MissingContentError",
    # Version
    "__version__",
]
