"""Boilerplate removal applied to documents and located containers."""
from __future__ import annotations

import logging

from lxml.html import HtmlElement

from . import rules
from .dom import (
    anchor_text_length,
    class_id_string,
    descendants,
    is_element,
    iter_children,
    matches_noise,
    remove,
    text_of,
)

logger = logging.getLogger(__name__)


def is_noise(element: HtmlElement) -> bool:
    """Return ``True`` when the element is page furniture by tag, class/id or data attribute."""

    if not is_element(element):
        return False
    tag = element.tag.lower()
    if tag in rules.PROTECTED_TAGS:
        return False
    if tag in rules.NOISE_TAGS:
        return True
    if any(element.get(attribute) is not None for attribute in rules.NOISE_DATA_ATTRIBUTES):
        return True
    return matches_noise(
        class_id_string(element),
        rules.NOISE_CLASS_SUBSTRINGS,
        rules.NOISE_CLASS_TOKENS,
    )


def sanitize(root: HtmlElement) -> int:
    """Remove noisy descendants of ``root`` in place and return how many were dropped."""

    removed = 0
    pending = list(iter_children(root))
    while pending:
        element = pending.pop(0)
        if is_noise(element):
            remove(element)
            removed += 1
            continue
        pending[0:0] = list(iter_children(element))
    return removed


def is_link_cluster(element: HtmlElement) -> bool:
    """Detect link lists, short link-heavy blocks and tag clouds."""

    text_length = len(text_of(element))
    if text_length > 0:
        anchors = descendants(element, "a")
        link_density = anchor_text_length(element) / text_length
        if link_density > rules.PRUNE_LINK_DENSITY and text_length < rules.PRUNE_LINK_DENSITY_MAX_TEXT:
            return True
        if len(anchors) >= rules.PRUNE_MIN_ANCHORS and text_length < rules.PRUNE_ANCHORS_MAX_TEXT:
            return True

    items = descendants(element, "li")
    if len(items) >= rules.PRUNE_MIN_LIST_ITEMS:
        average = sum(len(str(item.text_content())) for item in items) / len(items)
        if average < rules.PRUNE_MAX_AVG_ITEM_LENGTH:
            return True
    return False


def prune_link_clusters(container: HtmlElement) -> int:
    """Drop link-dense descendants of ``container``, walking top-down in document order."""

    removed = 0
    pending = list(iter_children(container))
    while pending:
        element = pending.pop(0)
        if is_link_cluster(element):
            remove(element)
            removed += 1
            continue
        pending[0:0] = list(iter_children(element))
    return removed


def clean_container(container: HtmlElement) -> int:
    """Fine-grained pass over a located container before it is structured."""

    removed = sanitize(container) + prune_link_clusters(container)
    if removed:
        logger.debug(
            "Removed %d noisy elements from <%s>",
            removed,
            container.tag,
            extra={"event": "sanitizer.container_cleaned", "removed": removed},
        )
    return removed


__all__ = ["clean_container", "is_link_cluster", "is_noise", "prune_link_clusters", "sanitize"]
