"""Small helpers over lxml element trees shared by the extraction stages."""
from __future__ import annotations

import html
import re
from typing import Iterable, Iterator, List, Optional

from lxml import etree
from lxml.html import HtmlElement

_TOKEN_SPLIT_RE = re.compile(r"[\s_\-]+")


def is_element(node: object) -> bool:
    """Return ``True`` for real elements, skipping comments and processing instructions."""

    return isinstance(getattr(node, "tag", None), str)


def text_of(element: HtmlElement) -> str:
    return str(element.text_content()).strip()


def descendants(element: HtmlElement, *tags: str) -> List[HtmlElement]:
    return [node for node in element.iterdescendants(*tags) if is_element(node)]


def anchor_text_length(element: HtmlElement) -> int:
    return sum(len(str(anchor.text_content())) for anchor in element.iterdescendants("a"))


def class_id_string(element: HtmlElement) -> str:
    return f"{element.get('class') or ''} {element.get('id') or ''}".lower()


def matches_noise(
    class_id: str,
    substrings: Iterable[str],
    tokens: Iterable[str] = (),
) -> bool:
    """Check a lower-cased class/id string against substring and whole-token rules."""

    if not class_id.strip():
        return False
    if any(needle in class_id for needle in substrings):
        return True
    parts = set(_TOKEN_SPLIT_RE.split(class_id))
    return any(token in parts for token in tokens)


def iter_children(element: HtmlElement) -> Iterator[HtmlElement]:
    for child in list(element):
        if is_element(child):
            yield child


def remove(element: HtmlElement) -> None:
    """Detach ``element`` while keeping its tail text in the parent."""

    if element.getparent() is not None:
        element.drop_tree()


def inner_html(element: HtmlElement) -> str:
    parts = [html.escape(element.text, quote=False)] if element.text else []
    for child in element:
        parts.append(etree.tostring(child, encoding="unicode", method="html", with_tail=True))
    return "".join(parts).strip()


def first_text(elements: Iterable[HtmlElement]) -> Optional[str]:
    """Trimmed text of the first element, or ``None`` when absent or blank."""

    for element in elements:
        return text_of(element) or None
    return None


__all__ = [
    "anchor_text_length",
    "class_id_string",
    "descendants",
    "first_text",
    "inner_html",
    "is_element",
    "iter_children",
    "matches_noise",
    "remove",
    "text_of",
]
