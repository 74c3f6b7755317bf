"""Reading-mode cleaning for HTML embedded in syndicated feed items."""
from __future__ import annotations

import logging
import re
from typing import Optional

from lxml import etree
from lxml import html as lxml_html
from readability import Document
from readability.readability import Unparseable

from readingmode.config.settings import CleaningOptions
from readingmode.errors import ArticleParseError
from readingmode.telemetry import metrics

from .dom import inner_html, text_of
from .extractor import body_of, parse_document
from .models import CleanedFeedContent
from .sanitizer import clean_container, sanitize
from .scoring import find_curated_container, locate_main_container

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"<[^>]+>")
MIN_FALLBACK_CONTENT_LENGTH = 100

EMPTY_CONTENT = CleanedFeedContent(html="", text="", success=False)


def _strip_tags(markup: str) -> str:
    return TAG_RE.sub("", markup).strip()


def _readability_summary(markup: str, link_url: Optional[str], options: CleaningOptions) -> Optional[CleanedFeedContent]:
    try:
        summary_html = Document(
            markup,
            url=link_url,
            retry_length=options.min_text_length,
        ).summary(html_partial=True)
    except Unparseable as exc:
        logger.debug(
            "Readability could not parse feed content for %s: %s",
            link_url,
            exc,
            extra={"event": "feed_content.readability_failed", "url": link_url},
        )
        return None

    try:
        text = text_of(lxml_html.fragment_fromstring(summary_html, create_parent="div"))
    except (etree.ParserError, ValueError) as exc:  # pragma: no cover - lxml parsing path
        logger.debug("Failed to parse readability summary for %s: %s", link_url, exc)
        text = ""
    if not text:
        return None
    return CleanedFeedContent(html=summary_html.strip(), text=text, success=True)


def _fallback(markup: str, link_url: Optional[str]) -> CleanedFeedContent:
    document = parse_document(f"<body>{markup}</body>", link_url)
    container = locate_main_container(document)
    clean_container(container)
    content = inner_html(container)
    return CleanedFeedContent(
        html=content or markup,
        text=text_of(container) or _strip_tags(markup),
        success=len(content) > MIN_FALLBACK_CONTENT_LENGTH,
    )


def clean_feed_content(
    content_html: Optional[str],
    description_html: Optional[str] = None,
    link_url: Optional[str] = None,
    options: Optional[CleaningOptions] = None,
) -> CleanedFeedContent:
    """Reduce a feed item's HTML to its article body.

    Tries, in order, a well-known article container, readability's summary and
    the generic container scorer. Unparseable input yields an unsuccessful
    result rather than an error so a single bad item never fails a feed.
    """

    options = options or CleaningOptions()
    markup = content_html or description_html
    if not markup or not markup.strip():
        return EMPTY_CONTENT

    try:
        document = parse_document(markup, link_url)
    except ArticleParseError:
        metrics.record_feed_cleaning(strategy="unparseable", success=False)
        return CleanedFeedContent(html=markup, text=_strip_tags(markup), success=False)

    sanitize(body_of(document))
    curated = find_curated_container(document)
    if curated is not None:
        metrics.record_feed_cleaning(strategy="curated", success=True)
        return CleanedFeedContent(
            html=inner_html(curated.element),
            text=text_of(curated.element),
            success=True,
        )

    summary = _readability_summary(markup, link_url, options)
    if summary is not None:
        metrics.record_feed_cleaning(strategy="readability", success=True)
        return summary

    result = _fallback(markup, link_url)
    metrics.record_feed_cleaning(strategy="fallback", success=result.success)
    if not result.success:
        logger.info(
            "Feed content for %s is too short to clean",
            link_url or "<inline>",
            extra={"event": "feed_content.too_short", "url": link_url},
        )
    return result


__all__ = ["clean_feed_content"]
