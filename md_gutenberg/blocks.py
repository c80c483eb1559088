"""Block fragment generators for hint markers.

Each generator is a pure string builder: it receives the lines buffered
between a hint's opening and closing markers, the attributes of the opening
marker, and an identifier factory for the ``uniqueId`` of nested blocks.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping

from .attributes import block_closer, block_opener, is_truthy, parse_attributes
from .constants import (
    BOLD_MARKERS_PATTERN,
    BULLET_PREFIX,
    CTA,
    DEFAULT_CTA_TEXT,
    DEFAULT_JUMP_LINKS_TITLE,
    DEFAULT_STATS_TITLE,
    FAQ_HEADING_PATTERN,
    FAQ_LEGACY_ANSWER_PATTERN,
    FAQ_LEGACY_QUESTION_PATTERN,
    FIRE_SVG,
    HINT_MARKER_PATTERN,
    IMAGE_PATTERN,
    JUMP_LINK_PATTERN,
    KEY_TAKEAWAYS_IDS,
    KEY_TAKEAWAYS_ITEM_IDS,
    KEY_TAKEAWAYS_TITLE,
    LIGHTBULB_SVG,
    PRODUCT_ROUNDUP,
    ROUNDUP_INLINE_PATTERN,
    ROUNDUP_SECTIONS,
    UNIQUE_ID_LENGTH,
)
from .inline import escape_html, format_inline
from .models import FaqEntry, RoundupParts

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
HintGenerator = Callable[[list[str], Mapping[str, str], IdFactory], str]


def generate_unique_id() -> str:
    """Return a short random lower-case alphanumeric block identifier."""
    return uuid.uuid4().hex[:UNIQUE_ID_LENGTH]


def _text_lines(lines: list[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip()]


def _joined_text(lines: list[str]) -> str:
    return " ".join(_text_lines(lines))


def _bullet_items(lines: list[str]) -> list[str]:
    return [
        line[len(BULLET_PREFIX) :].strip()
        for line in _text_lines(lines)
        if line.startswith(BULLET_PREFIX)
    ]


def _list_block(items: list[str], class_name: str) -> list[str]:
    rendered = "".join(
        f"{block_opener('list-item')}<li>{item}</li>{block_closer('list-item')}"
        for item in items
    )
    return [
        block_opener("list", {"className": class_name}),
        f'<ul class="{class_name}">{rendered}</ul>',
        block_closer("list"),
    ]


def _headline_block(uid: str, text: str, class_name: str, element: str = "p") -> list[str]:
    return [
        block_opener(
            "generateblocks/headline",
            {"uniqueId": uid, "element": element, "blockVersion": 3, "className": class_name},
        ),
        f'<{element} class="gb-headline gb-headline-{uid} gb-headline-text {class_name}">'
        f"{text}</{element}>",
        block_closer("generateblocks/headline"),
    ]


def render_click_to_tweet(
    lines: list[str], attributes: Mapping[str, str], new_id: IdFactory
) -> str:
    """Render a self-closing Better Click To Tweet block from the first line of text."""
    text_lines = _text_lines(lines)
    tweet = text_lines[0] if text_lines else ""
    return block_opener("bctt/clicktotweet", {"tweet": tweet}, self_closing=True)


def render_protip(lines: list[str], attributes: Mapping[str, str], new_id: IdFactory) -> str:
    """Render a Pro Tip callout: outer container, inner container and icon headline.

    All non-blank lines are collapsed into one paragraph.
    """
    text = format_inline(_joined_text(lines))
    uid_outer = new_id()
    uid_inner = new_id()
    uid_headline = new_id()

    return "\n".join(
        [
            block_opener(
                "generateblocks/container",
                {
                    "uniqueId": uid_outer,
                    "isDynamic": True,
                    "blockVersion": 4,
                    "blockLabel": "ProTip",
                    "className": "protip-wrapper protip-outer-wrapper",
                    "globalClasses": [
                        "pro-tip-container",
                        "pro-tip-container-outline",
                        "content-enhancer",
                    ],
                },
            ),
            block_opener(
                "generateblocks/container",
                {
                    "uniqueId": uid_inner,
                    "isDynamic": True,
                    "blockVersion": 4,
                    "className": "protip-inner-wrapper",
                    "globalClasses": ["pro-tip-inner-container"],
                },
            ),
            block_opener(
                "generateblocks/headline",
                {
                    "uniqueId": uid_headline,
                    "element": "p",
                    "blockVersion": 3,
                    "hasIcon": True,
                    "iconStyles": {
                        "width": "2em",
                        "height": "2em",
                        "widthMobile": "1.5em",
                        "heightMobile": "1.5em",
                    },
                    "globalClasses": ["pro-tip-text"],
                },
            ),
            f'<p class="gb-headline gb-headline-{uid_headline} pro-tip-text">'
            f'<span class="gb-icon">{LIGHTBULB_SVG}</span>'
            f'<span class="gb-headline-text"><strong>Pro Tip:</strong> {text}</span></p>',
            block_closer("generateblocks/headline"),
            block_closer("generateblocks/container"),
            block_closer("generateblocks/container"),
        ]
    )


def render_discount(lines: list[str], attributes: Mapping[str, str], new_id: IdFactory) -> str:
    """Render a discount callout: container and fire-icon headline."""
    text = format_inline(_joined_text(lines))
    uid_container = new_id()
    uid_headline = new_id()

    return "\n".join(
        [
            block_opener(
                "generateblocks/container",
                {
                    "uniqueId": uid_container,
                    "isDynamic": True,
                    "blockVersion": 4,
                    "className": "discount-container",
                    "metadata": {"name": "Discount Container"},
                    "globalClasses": ["discount-code-container"],
                },
            ),
            block_opener(
                "generateblocks/headline",
                {
                    "uniqueId": uid_headline,
                    "element": "p",
                    "blockVersion": 3,
                    "spacing": {"marginLeftMobile": "", "paddingLeftMobile": ""},
                    "hasIcon": True,
                    "iconStyles": {
                        "height": "2em",
                        "width": "2em",
                        "widthMobile": "1.5em",
                        "heightMobile": "1.5em",
                    },
                    "metadata": {"name": "Discount Text"},
                    "globalClasses": ["discount-code-headline-text"],
                },
            ),
            f'<p class="gb-headline gb-headline-{uid_headline} discount-code-headline-text">'
            f'<span class="gb-icon">{FIRE_SVG}</span>'
            f'<span class="gb-headline-text">{text}</span></p>',
            block_closer("generateblocks/headline"),
            block_closer("generateblocks/container"),
        ]
    )


def _close_faq_entry(entry: FaqEntry | None, entries: list[FaqEntry]) -> None:
    if entry is None:
        return
    if entry.answer_lines:
        entries.append(entry)
    else:
        logger.warning("Dropping FAQ question without an answer: %s", entry.title)


def parse_faq(lines: list[str]) -> list[FaqEntry]:
    """Extract question and answer pairs from FAQ hint lines.

    Two question syntaxes are recognized line by line, in document order, and
    may be mixed within one block:

    - a ``## heading`` question followed by answer prose lines;
    - a legacy ``**Q: ...**`` question followed by an ``**A:** ...`` line.

    Every non-question line after a question extends that question's answer.
    A question that never receives an answer is dropped when the next question
    starts or when the block ends. Text before the first question is ignored.

    Args:
        lines: Lines buffered inside the FAQ hint.

    Returns:
        list[FaqEntry]: Answered questions in document order.

    Examples:
        parse_faq(["**Q: Why?**", "**A:** Because."])
        parse_faq(["## Why?", "Because.", "It is."])
    """
    entries: list[FaqEntry] = []
    current: FaqEntry | None = None

    for line in _text_lines(lines):
        question = FAQ_HEADING_PATTERN.match(line) or FAQ_LEGACY_QUESTION_PATTERN.match(line)
        if question:
            _close_faq_entry(current, entries)
            current = FaqEntry(title=question.group(1).strip())
            continue

        if current is None:
            logger.debug("Ignoring FAQ text before the first question: %s", line)
            continue

        answer = FAQ_LEGACY_ANSWER_PATTERN.match(line)
        answer_text = answer.group(1).strip() if answer else line
        if answer_text:
            current.answer_lines.append(answer_text)

    _close_faq_entry(current, entries)
    return entries


def render_faq(lines: list[str], attributes: Mapping[str, str], new_id: IdFactory) -> str:
    """Render a Rank Math FAQ block with structured questions and matching HTML."""
    questions = []
    rendered_items = []
    for entry in parse_faq(lines):
        question_id = f"faq-question-{new_id()}"
        title = format_inline(entry.title)
        content = format_inline(entry.content)
        questions.append({"id": question_id, "title": title, "content": content, "visible": True})
        rendered_items.append(
            f'<div id="{question_id}" class="rank-math-faq-item">'
            f'<h3 class="rank-math-question">{title}</h3>'
            f'<div class="rank-math-answer">{content}</div></div>'
        )

    return "\n".join(
        [
            block_opener("rank-math/faq-block", {"questions": questions}),
            f'<div class="wp-block-rank-math-faq-block">{"".join(rendered_items)}</div>',
            block_closer("rank-math/faq-block"),
        ]
    )


def render_key_takeaways(
    lines: list[str], attributes: Mapping[str, str], new_id: IdFactory
) -> str:
    """Render the Key Takeaways accordion.

    The accordion reproduces a pinned template, so every identifier comes
    from a fixed table and item identifiers cycle through a fixed pool
    instead of using `new_id`.
    """
    ids = KEY_TAKEAWAYS_IDS
    item_lines: list[str] = []
    for position, item in enumerate(_bullet_items(lines)):
        uid = KEY_TAKEAWAYS_ITEM_IDS[position % len(KEY_TAKEAWAYS_ITEM_IDS)]
        item_lines.extend(_headline_block(uid, format_inline(item), "key-takeaway-item"))

    return "\n".join(
        [
            block_opener(
                "generateblocks-pro/accordion",
                {"uniqueId": ids["accordion"], "className": "key-takeaways-accordion"},
            ),
            f'<div class="gb-accordion gb-accordion-{ids["accordion"]} key-takeaways-accordion">',
            block_opener(
                "generateblocks-pro/accordion-item",
                {"uniqueId": ids["item"], "openByDefault": True},
            ),
            f'<div class="gb-accordion__item gb-accordion__item-{ids["item"]} '
            'gb-accordion__item-open">',
            *_headline_block(
                ids["toggle"], KEY_TAKEAWAYS_TITLE, "gb-accordion__toggle", element="h2"
            ),
            block_opener(
                "generateblocks/container",
                {"uniqueId": ids["content"], "className": "gb-accordion__content"},
            ),
            f'<div class="gb-container gb-container-{ids["content"]} gb-accordion__content">',
            *item_lines,
            "</div>",
            block_closer("generateblocks/container"),
            "</div>",
            block_closer("generateblocks-pro/accordion-item"),
            "</div>",
            block_closer("generateblocks-pro/accordion"),
        ]
    )


def render_jump_link_item(item: str) -> str:
    """Render one jump-link bullet.

    Examples:
        render_jump_link_item("**Product A** — Best overall")
        # "<strong>Product A</strong> — Best overall"
        render_jump_link_item("**Product C**")  # "<strong>Product C</strong>"
    """
    match = JUMP_LINK_PATTERN.match(item)
    if match:
        lead, description = match.groups()
        return f"<strong>{format_inline(lead)}</strong> — {format_inline(description)}"
    plain = BOLD_MARKERS_PATTERN.sub(r"\1", item)
    return f"<strong>{format_inline(plain)}</strong>"


def render_jump_links(lines: list[str], attributes: Mapping[str, str], new_id: IdFactory) -> str:
    """Render the intro overview box listing the article's picks."""
    title = attributes.get("title") or DEFAULT_JUMP_LINKS_TITLE
    uid_container = new_id()
    uid_title = new_id()
    items = [render_jump_link_item(item) for item in _bullet_items(lines)]

    return "\n".join(
        [
            block_opener(
                "generateblocks/container",
                {
                    "uniqueId": uid_container,
                    "isDynamic": True,
                    "blockVersion": 4,
                    "className": "intro-box-overview",
                },
            ),
            f'<div class="gb-container gb-container-{uid_container} intro-box-overview">',
            *_headline_block(uid_title, escape_html(title), "intro-box-title"),
            *_list_block(items, "intro-box-list"),
            "</div>",
            block_closer("generateblocks/container"),
        ]
    )


def render_data_lab(lines: list[str], attributes: Mapping[str, str], new_id: IdFactory) -> str:
    """Render a self-closing data-lab block; one buffered line per data row."""
    return block_opener(
        "outliyr/data-lab",
        {
            "title": attributes.get("title", ""),
            "columns": attributes.get("columns", ""),
            "rows": "\n".join(_text_lines(lines)),
        },
        self_closing=True,
    )


def render_cta(attributes: Mapping[str, str], new_id: IdFactory) -> str:
    """Render a call-to-action button from ``url``, ``text`` and ``sponsored``.

    Args:
        attributes: Attributes of the ``@cta`` marker.
        new_id: Identifier factory for the nested blocks.

    Returns:
        str: Button container fragment.

    Examples:
        render_cta({"url": "https://example.com", "text": "Buy", "sponsored": "true"}, generate_unique_id)
    """
    url = attributes.get("url", "")
    if not url:
        logger.warning("CTA marker has no url attribute; linking to '#'")
        url = "#"
    text = attributes.get("text") or DEFAULT_CTA_TEXT
    rel = "sponsored" if is_truthy(attributes.get("sponsored")) else "noopener"
    uid_container = new_id()
    uid_button = new_id()

    return "\n".join(
        [
            block_opener(
                "generateblocks/button-container",
                {
                    "uniqueId": uid_container,
                    "alignment": "center",
                    "isDynamic": True,
                    "blockVersion": 3,
                    "className": "cta-button-container",
                },
            ),
            block_opener(
                "generateblocks/button",
                {"uniqueId": uid_button, "hasUrl": True, "blockVersion": 3, "className": "cta-button"},
            ),
            f'<a class="gb-button gb-button-{uid_button} gb-button-text cta-button" '
            f'href="{escape_html(url)}" target="_blank" rel="{rel}">{escape_html(text)}</a>',
            block_closer("generateblocks/button"),
            block_closer("generateblocks/button-container"),
        ]
    )


def _store_roundup_section(parts: RoundupParts, section: str, lines: list[str]) -> None:
    if section == "accolade":
        parts.accolade = _joined_text(lines)
    elif section == "image":
        text_lines = _text_lines(lines)
        parts.image = text_lines[0] if text_lines else ""
    elif section == "stats":
        parts.stats = [
            line[len(BULLET_PREFIX) :].strip() if line.startswith(BULLET_PREFIX) else line
            for line in _text_lines(lines)
        ]
    else:
        parts.discount = _text_lines(lines)


def parse_roundup(lines: list[str]) -> RoundupParts:
    """Collect the sub-sections of a product-roundup hint.

    Sub-sections (``accolade``, ``image``, ``stats``, ``discount``) are
    written either on one line, as ``<!-- @x -->content<!-- @end-x -->``, or
    as an opening marker, content lines and an ``<!-- @end-x -->`` marker;
    content may share a line with either marker.
    A ``<!-- @cta ... -->`` line supplies the button. Remaining non-blank
    lines are kept as a summary.

    Args:
        lines: Lines buffered inside the product-roundup hint.

    Returns:
        RoundupParts: The sub-sections found; absent ones keep empty defaults.
    """
    parts = RoundupParts()
    section: str | None = None
    section_lines: list[str] = []

    for raw_line in lines:
        line = raw_line.strip()

        if section is not None:
            marker = HINT_MARKER_PATTERN.search(line)
            if marker and marker.group("name") == f"end-{section}":
                head = line[: marker.start()].strip()
                if head:
                    section_lines.append(head)
                _store_roundup_section(parts, section, section_lines)
                section = None
            else:
                section_lines.append(line)
            continue

        inline = ROUNDUP_INLINE_PATTERN.match(line)
        if inline and inline.group("name") in ROUNDUP_SECTIONS:
            _store_roundup_section(parts, inline.group("name"), [inline.group("content")])
            continue

        marker = HINT_MARKER_PATTERN.match(line)
        if marker and marker.group("name") == CTA and marker.end() == len(line):
            parts.cta = parse_attributes(line)
            continue
        if marker and marker.group("name") in ROUNDUP_SECTIONS:
            # Content may start on the opener's line
            section = marker.group("name")
            tail = line[marker.end() :].strip()
            section_lines = [tail] if tail else []
            continue

        if line:
            parts.summary.append(line)

    if section is not None:
        logger.warning("Unterminated @%s section in product roundup; keeping its content", section)
        _store_roundup_section(parts, section, section_lines)

    return parts


def _roundup_image(parts: RoundupParts, name: str) -> list[str]:
    src, alt = parts.image, name
    image_match = IMAGE_PATTERN.match(parts.image)
    if image_match:
        alt = image_match.group(1) or name
        src = image_match.group(2)
    return [
        block_opener("image", {"sizeSlug": "large", "className": "product-roundup-image"}),
        '<figure class="wp-block-image size-large product-roundup-image">'
        f'<img src="{escape_html(src)}" alt="{escape_html(alt)}"/></figure>',
        block_closer("image"),
    ]


def _roundup_stats(parts: RoundupParts) -> list[str]:
    items = [format_inline(item) for item in parts.stats]
    return [
        block_opener("details", {"className": "product-stats-accordion"}),
        '<details class="wp-block-details product-stats-accordion">'
        f"<summary>{DEFAULT_STATS_TITLE}</summary>",
        *_list_block(items, "product-stats-list"),
        "</details>",
        block_closer("details"),
    ]


def render_product_roundup(
    lines: list[str], attributes: Mapping[str, str], new_id: IdFactory
) -> str:
    """Render one product of a roundup as a single composite container.

    The container is anchored at the ``id`` attribute and titled by ``name``.
    Its children appear in a fixed order: accolade, name, image, summary,
    stats accordion, call-to-action button, discount callout. Sub-sections
    missing from the hint are left out.
    """
    parts = parse_roundup(lines)
    product_id = attributes.get("id", "")
    name = attributes.get("name", "")
    uid_container = new_id()

    container_attributes: dict[str, object] = {
        "uniqueId": uid_container,
        "isDynamic": True,
        "blockVersion": 4,
        "className": "product-roundup-container",
    }
    if product_id:
        container_attributes["anchor"] = product_id
    if name:
        container_attributes["metadata"] = {"name": name}
    anchor = f' id="{escape_html(product_id)}"' if product_id else ""

    body: list[str] = [
        block_opener("generateblocks/container", container_attributes),
        f'<div class="gb-container gb-container-{uid_container} product-roundup-container"{anchor}>',
    ]
    if parts.accolade:
        body.extend(_headline_block(new_id(), format_inline(parts.accolade), "product-accolade"))
    if name:
        body.extend(
            [
                block_opener("heading", {"level": 3, "className": "product-roundup-title"}),
                f'<h3 class="wp-block-heading product-roundup-title">{escape_html(name)}</h3>',
                block_closer("heading"),
            ]
        )
    if parts.image:
        body.extend(_roundup_image(parts, name))
    for line in parts.summary:
        body.extend(
            [block_opener("paragraph"), f"<p>{format_inline(line)}</p>", block_closer("paragraph")]
        )
    if parts.stats:
        body.extend(_roundup_stats(parts))
    if parts.cta is not None:
        body.append(render_cta(parts.cta, new_id))
    if parts.discount:
        body.append(render_discount(parts.discount, {}, new_id))
    body.extend(["</div>", block_closer("generateblocks/container")])

    return "\n".join(body)


HINT_GENERATORS: dict[str, HintGenerator] = {
    "click-to-tweet": render_click_to_tweet,
    "protip": render_protip,
    "discount": render_discount,
    "faq": render_faq,
    "key-takeaways": render_key_takeaways,
    "jump-links": render_jump_links,
    "data-lab": render_data_lab,
    PRODUCT_ROUNDUP: render_product_roundup,
}
