"""Turn a cleaned container into an ordered sequence of content blocks."""
from __future__ import annotations

import re
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from lxml.html import HtmlElement

from . import rules
from .dom import class_id_string, descendants, is_element, matches_noise, text_of
from .models import (
    ContentBlock,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
)

_SVG_RE = re.compile(r"\.svg(?:[?#]|$)")
_DIMENSION_RE = re.compile(r"^\s*(\d+)")


def resolve_url(value: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    if not value:
        return None
    href = value.strip()
    if not href:
        return None
    if base_url and not href.lower().startswith("data:"):
        try:
            return urljoin(base_url, href)
        except ValueError:
            return href
    return href


def resolve_image_source(
    image: HtmlElement,
    base_url: Optional[str] = None,
    attributes: Tuple[str, ...] = rules.IMAGE_SOURCE_ATTRIBUTES,
) -> Optional[str]:
    for attribute in attributes:
        source = resolve_url(image.get(attribute), base_url)
        if source:
            return source
    return None


def image_source_is_relevant(source: str) -> bool:
    """URL-level checks: placeholder data URIs, denylisted fragments and SVGs."""

    lowered = source.lower()
    if lowered.startswith("data:") and len(source) < rules.MIN_DATA_URI_LENGTH:
        return False
    if any(pattern in lowered for pattern in rules.IMAGE_URL_DENYLIST):
        return False
    if _SVG_RE.search(lowered):
        return False
    return True


def _dimension(value: Optional[str]) -> int:
    if not value:
        return 0
    match = _DIMENSION_RE.match(value)
    return int(match.group(1)) if match else 0


def image_dimensions_are_relevant(image: HtmlElement) -> bool:
    width = _dimension(image.get("width"))
    height = _dimension(image.get("height"))
    if (width and width < rules.MIN_IMAGE_SIDE) or (height and height < rules.MIN_IMAGE_SIDE):
        return False
    if width and height:
        if width * height < rules.MIN_IMAGE_AREA:
            return False
        low, high = rules.IMAGE_ASPECT_RANGE
        if not low <= width / height <= high:
            return False
    return True


def image_is_relevant(image: HtmlElement, source: str) -> bool:
    """Apply every rejection stage to an ``<img>`` with an already resolved source."""

    if not image_source_is_relevant(source):
        return False
    if matches_noise(class_id_string(image), rules.IMAGE_CLASS_SUBSTRINGS):
        return False
    return image_dimensions_are_relevant(image)


def _heading(element: HtmlElement) -> Optional[HeadingBlock]:
    text = text_of(element)
    if len(text) < rules.MIN_HEADING_LENGTH:
        return None
    return HeadingBlock(level=int(element.tag[1]), text=text)


def _paragraph(element: HtmlElement) -> Optional[ParagraphBlock]:
    text = text_of(element)
    if len(text) <= rules.MIN_PARAGRAPH_LENGTH:
        return None
    return ParagraphBlock(text=text)


def _list(element: HtmlElement) -> Optional[ListBlock]:
    items = tuple(text for text in (text_of(item) for item in descendants(element, "li")) if text)
    if not items:
        return None
    return ListBlock(items=items)


def _quote(element: HtmlElement) -> Optional[QuoteBlock]:
    text = text_of(element)
    if len(text) <= rules.MIN_QUOTE_LENGTH:
        return None
    return QuoteBlock(text=text)


def _image(element: HtmlElement, base_url: Optional[str]) -> Optional[ImageBlock]:
    source = resolve_image_source(element, base_url)
    if not source or not image_is_relevant(element, source):
        return None
    return ImageBlock(alt_text=element.get("alt") or "", source_url=source)


def build_blocks(container: HtmlElement, base_url: Optional[str] = None) -> Tuple[ContentBlock, ...]:
    """Walk ``container`` in document order and emit the blocks that pass their filters."""

    blocks: List[ContentBlock] = []
    for element in container.iterdescendants():
        if not is_element(element):
            continue
        tag = element.tag.lower()
        block: Optional[ContentBlock] = None
        if tag in rules.HEADING_TAGS:
            block = _heading(element)
        elif tag == "p":
            block = _paragraph(element)
        elif tag in rules.LIST_TAGS:
            block = _list(element)
        elif tag == "blockquote":
            block = _quote(element)
        elif tag == "img":
            block = _image(element, base_url)
        if block is not None:
            blocks.append(block)
    return tuple(blocks)


__all__ = [
    "build_blocks",
    "image_dimensions_are_relevant",
    "image_is_relevant",
    "image_source_is_relevant",
    "resolve_image_source",
    "resolve_url",
]
