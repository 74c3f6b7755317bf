"""Candidate scoring and main-container location.

The locator runs two strategies in priority order. The curated pass only
trusts well-known article containers and a simplified length/paragraph score;
the generic pass scores broad containers (or every ``section``/``div``) with
:func:`score_candidate`. When neither produces a positive candidate the
document body is returned.

All weights live in :mod:`readingmode.extraction.rules` and are empirically
chosen defaults rather than verified optima.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, NamedTuple, Optional

from lxml.html import HtmlElement

from . import rules
from .dom import anchor_text_length, descendants, text_of
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+\s")
_WORD_SPLIT_RE = re.compile(r"\s+")


class ScoredCandidate(NamedTuple):
    element: HtmlElement
    score: float


def average_sentence_length(text: str) -> float:
    sentences = [chunk for chunk in _SENTENCE_SPLIT_RE.split(text) if chunk.strip()]
    if not sentences:
        return 0.0
    words = [word for word in _WORD_SPLIT_RE.split(text) if word]
    return len(words) / len(sentences)


def link_density(element: HtmlElement, text: Optional[str] = None) -> float:
    """Anchor text length over total text length; 1.0 for elements without text."""

    text = text_of(element) if text is None else text
    if not text:
        return 1.0
    return anchor_text_length(element) / len(text)


def score_candidate(element: HtmlElement) -> float:
    """Article likelihood of ``element``; zero for elements without text."""

    text = text_of(element)
    if not text:
        return 0.0

    paragraph_count = len(descendants(element, "p"))
    heading_count = len(descendants(element, *rules.HEADING_TAGS))
    score = (
        min(len(text), rules.SCORE_TEXT_CAP)
        + paragraph_count * rules.SCORE_PARAGRAPH_WEIGHT
        + heading_count * rules.SCORE_HEADING_WEIGHT
    )

    low, high = rules.PROSE_SENTENCE_RANGE
    if low <= average_sentence_length(text) <= high:
        score *= rules.PROSE_BONUS

    if link_density(element, text) > rules.LINK_DENSITY_LIMIT:
        score *= rules.LINK_DENSITY_PENALTY
    if len(descendants(element, *rules.LIST_TAGS)) > rules.LIST_COUNT_LIMIT:
        score *= rules.LIST_PENALTY
    if len(descendants(element, *rules.CODE_TAGS)) > rules.CODE_COUNT_LIMIT:
        score *= rules.CODE_PENALTY
    return float(score)


def _select_all(root: HtmlElement, selectors: Iterable[str]) -> List[HtmlElement]:
    seen = set()
    found: List[HtmlElement] = []
    for selector in selectors:
        for element in root.cssselect(selector):
            if element in seen:
                continue
            seen.add(element)
            found.append(element)
    return found


def find_curated_container(root: HtmlElement) -> Optional[ScoredCandidate]:
    """Best well-known article container that is long enough, or ``None``."""

    best: Optional[ScoredCandidate] = None
    for element in _select_all(root, rules.CURATED_SELECTORS):
        sanitize(element)
        text_length = len(text_of(element))
        paragraph_count = len(descendants(element, "p"))
        if text_length <= rules.CURATED_MIN_TEXT_LENGTH or paragraph_count < rules.CURATED_MIN_PARAGRAPHS:
            continue
        heading_count = len(descendants(element, *rules.HEADING_TAGS))
        score = (
            text_length
            + paragraph_count * rules.CURATED_PARAGRAPH_WEIGHT
            + heading_count * rules.CURATED_HEADING_WEIGHT
        )
        if best is None or score > best.score:
            best = ScoredCandidate(element, float(score))

    if best is not None and best.score > rules.CURATED_MIN_SCORE:
        return best
    return None


def find_generic_container(root: HtmlElement) -> Optional[ScoredCandidate]:
    """Highest scoring broad container; first seen wins ties."""

    candidates = _select_all(root, rules.GENERIC_SELECTORS)
    if not candidates:
        candidates = descendants(root, *rules.FALLBACK_CONTAINER_TAGS)

    best: Optional[ScoredCandidate] = None
    for element in candidates:
        score = score_candidate(element)
        if score <= 0:
            continue
        if best is None or score > best.score:
            best = ScoredCandidate(element, score)
    return best


def _body_of(document: HtmlElement) -> HtmlElement:
    if document.tag == "body":
        return document
    body = document.find("body")
    return body if body is not None else document


def locate_main_container(document: HtmlElement) -> HtmlElement:
    """Return the element most likely to hold the article body."""

    curated = find_curated_container(document)
    if curated is not None:
        logger.debug(
            "Curated container <%s> selected (score %.1f)",
            curated.element.tag,
            curated.score,
            extra={"event": "locator.curated", "score": curated.score},
        )
        return curated.element

    generic = find_generic_container(document)
    if generic is not None:
        logger.debug(
            "Generic container <%s> selected (score %.1f)",
            generic.element.tag,
            generic.score,
            extra={"event": "locator.generic", "score": generic.score},
        )
        return generic.element

    logger.debug("No candidate container; using document body", extra={"event": "locator.fallback"})
    return _body_of(document)


__all__ = [
    "ScoredCandidate",
    "average_sentence_length",
    "find_curated_container",
    "find_generic_container",
    "link_density",
    "locate_main_container",
    "score_candidate",
]
