"""Constants used across the md-gutenberg package."""

from __future__ import annotations

import re

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# Commentary stripping vocabularies (matched as lower-cased prefixes)
PREAMBLE_PREFIXES = (
    "sure",
    "here is",
    "here's",
    "here are",
    "here you go",
    "below is",
    "below are",
    "i'll",
    "certainly",
    "of course",
    "okay,",
    "okay!",
    "ok,",
    "ok!",
    "great",
    "absolutely",
    "i've",
    "i have",
    "the following",
    "as requested",
    "per your",
)
POSTAMBLE_PREFIXES = (
    "let me know",
    "would you like",
    "i hope",
    "feel free",
    "if you'd like",
    "i can also",
    "happy to",
    "shall i",
    "want me",
    "is there anything",
    "please let",
    "do you want",
    "should i",
    "i'm happy",
    "don't hesitate",
)
DIVIDER_LINE = "---"
CONTENT_HEADING_PATTERN = re.compile(r"^#{1,6}\s")

# Block markup
BLOCK_OPEN_PREFIX = "<!-- wp:"
BLOCK_OPENER_PATTERN = re.compile(r"<!-- wp:.*?(?P<self_closing>/?)-->")
BLOCK_CLOSER_PATTERN = re.compile(r"<!-- /wp:")
SELF_CLOSING_SUFFIX = "/-->"
COMMENT_END = "-->"
# A JSON-escaped quote whose backslash is not itself escaped
ESCAPED_QUOTE_PATTERN = re.compile(r'(?<!\\)((?:\\\\)*)\\"')

# Markdown patterns
CODE_FENCE = "```"
SHORTCODE_OPEN_PATTERN = re.compile(r"^\[(\w+)[\s\]]")
TABLE_ROW_PATTERN = re.compile(r"^\|.*\|")
TABLE_SEPARATOR_PATTERN = re.compile(r"^\|[\s\-:|]+\|$")
BLOCKQUOTE_PATTERN = re.compile(r"^>\s?(.*)")
H1_PATTERN = re.compile(r"^#\s+")
HEADING_PATTERN = re.compile(r"^(#{2,6})\s+(.*)")
HEADING_CLASS_PATTERN = re.compile(r"\s*\{\.([^}]+)\}\s*$")
IMAGE_PATTERN = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)")
UNORDERED_ITEM_PATTERN = re.compile(r"^[-*]\s+(.*)")
ORDERED_ITEM_PATTERN = re.compile(r"^\d+\.\s+(.*)")

# Inline spans
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
INLINE_LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)\)")
INLINE_BOLD_PATTERN = re.compile(r"\*\*(?=\S)(.+?)(?<=\S)\*\*")
INLINE_ITALIC_PATTERN = re.compile(r"(?<!\*)\*(?=[^\s*])(.+?)(?<=[^\s*])\*(?!\*)")

# Hint markers
HINT_MARKER_PATTERN = re.compile(r"<!--\s*@(?P<name>[a-z][a-z0-9-]*)(?P<attrs>.*?)-->")
ATTRIBUTE_PATTERN = re.compile(r'([A-Za-z_:][-A-Za-z0-9_:.]*)="([^"]*)"')
HINT_END = "end"
PRODUCT_ROUNDUP = "product-roundup"
PRODUCT_ROUNDUP_END = "end-product"
CTA = "cta"
BUFFERED_HINT_KINDS = frozenset(
    [
        "click-to-tweet",
        "protip",
        "discount",
        "faq",
        "key-takeaways",
        "jump-links",
        "data-lab",
        PRODUCT_ROUNDUP,
    ]
)
ROUNDUP_SECTIONS = frozenset(["accolade", "image", "stats", "discount"])

# FAQ question syntaxes
FAQ_HEADING_PATTERN = re.compile(r"^#{2,6}\s+(.*)")
FAQ_LEGACY_QUESTION_PATTERN = re.compile(r"^\*\*Q:(?:\*\*)?\s*(.+?)(?:\*\*)?$")
FAQ_LEGACY_ANSWER_PATTERN = re.compile(r"^\*\*A:(?:\*\*)?\s*(.*?)(?:\*\*)?$")

# Product roundup sub-sections written on a single line
ROUNDUP_INLINE_PATTERN = re.compile(
    r"^<!--\s*@(?P<name>[a-z]+)\s*-->(?P<content>.*?)<!--\s*@end-(?P=name)\s*-->$"
)
BOLD_MARKERS_PATTERN = re.compile(r"\*\*(.+?)\*\*")

# Jump links split the bold lead from its description on an em-dash
JUMP_LINK_PATTERN = re.compile(r"^\*\*(.+?)\*\*\s*—\s*(.*)$")
BULLET_PREFIX = "- "

DEFAULT_JUMP_LINKS_TITLE = "Quick Links"
DEFAULT_STATS_TITLE = "Key Stats"
KEY_TAKEAWAYS_TITLE = "Key Takeaways"
DEFAULT_CTA_TEXT = "Check Price"
TRUTHY_VALUES = frozenset(["true", "1", "yes", "on"])

# Key takeaways must reproduce a pinned accordion template, so its identifiers
# are fixed rather than generated.
KEY_TAKEAWAYS_IDS = {
    "accordion": "c8f1a2b3",
    "item": "d4e5f6a7",
    "toggle": "b1c2d3e4",
    "content": "e9f8a7b6",
}
KEY_TAKEAWAYS_ITEM_IDS = (
    "a1b2c3d4",
    "f5e6d7c8",
    "b9a8c7d6",
    "e3f4a5b6",
    "c7d8e9f0",
    "d1e2f3a4",
)

UNIQUE_ID_LENGTH = 8

LIGHTBULB_SVG = (
    '<svg aria-hidden="true" role="img" height="1em" width="1em" viewBox="0 0 352 512" '
    'xmlns="http://www.w3.org/2000/svg"><path fill="currentColor" d="M96.06 454.35c.01 '
    "6.29 1.87 12.45 5.36 17.69l17.09 25.69a31.99 31.99 0 0 0 26.64 14.28h61.71a31.99 "
    "31.99 0 0 0 26.64-14.28l17.09-25.69a31.989 31.989 0 0 0 5.36-17.69l.04-38.35H96.01l"
    ".05 38.35zM0 176c0 44.37 16.45 84.85 43.56 115.78 16.52 18.85 42.36 58.23 52.21 "
    "91.45.04.26.07.52.11.78h160.24c.04-.26.07-.51.11-.78 9.85-33.22 35.69-72.6 52.21-"
    "91.45C335.55 260.85 352 220.37 352 176 352 78.61 272.91-.3 175.45 0 73.44.31 0 "
    "82.97 0 176zm176-80c-44.11 0-80 35.89-80 80 0 8.84-7.16 16-16 16s-16-7.16-16-16c0"
    '-61.76 50.24-112 112-112 8.84 0 16 7.16 16 16s-7.16 16-16 16z"></path></svg>'
)
FIRE_SVG = (
    '<svg aria-hidden="true" role="img" height="1em" width="1em" viewBox="0 0 384 512" '
    'xmlns="http://www.w3.org/2000/svg"><path fill="currentColor" d="M216 23.86c0-23.8-'
    "30.65-32.77-44.15-13.04C48 191.85 224 200 224 288c0 35.63-29.11 64.46-64.85 63.99"
    "-35.17-.45-63.15-29.77-63.15-64.94v-85.51c0-21.7-26.47-32.23-41.43-16.5C27.8 "
    "213.16 0 261.33 0 320c0 105.87 86.13 192 192 192s192-86.13 192-192c0-170.29-168-"
    '193-168-296.14z"></path></svg>'
)
