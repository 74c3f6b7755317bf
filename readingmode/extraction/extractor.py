"""Article extraction entry point."""
from __future__ import annotations

import logging
import time
from typing import Optional

from lxml import etree
from lxml import html as lxml_html
from lxml.html import HtmlElement

from readingmode.config.settings import AppSettings, CleaningOptions
from readingmode.errors import ArticleParseError
from readingmode.telemetry import metrics

from .dom import inner_html
from .metadata import extract_metadata
from .models import ExtractedArticle
from .render import make_excerpt, render_plain_text
from .sanitizer import clean_container, sanitize
from .scoring import locate_main_container
from .structure import build_blocks

logger = logging.getLogger(__name__)


def parse_document(markup: str, url: Optional[str] = None) -> HtmlElement:
    """Parse a page or fragment into an ``<html>`` rooted tree.

    Raises :class:`ArticleParseError` when lxml cannot build a tree.
    """

    if not markup or not markup.strip():
        raise ArticleParseError("Document is empty", url=url)
    try:
        try:
            return lxml_html.document_fromstring(markup, base_url=url)
        except ValueError:
            # str input carrying an XML encoding declaration
            return lxml_html.document_fromstring(markup.encode("utf-8"), base_url=url)
    except (etree.ParserError, ValueError) as exc:
        raise ArticleParseError(f"Unable to parse HTML: {exc}", url=url) from exc


def body_of(document: HtmlElement) -> HtmlElement:
    body = document.find("body")
    return body if body is not None else document


class ArticleExtractor:
    """Extract and normalize article content from raw HTML."""

    def __init__(self, options: Optional[CleaningOptions] = None) -> None:
        self._options = options or CleaningOptions()

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ArticleExtractor":
        return cls(settings.cleaning)

    @property
    def options(self) -> CleaningOptions:
        return self._options

    def extract(self, markup: str, url: Optional[str] = None) -> ExtractedArticle:
        """Locate the main content of ``markup`` and return it as an :class:`ExtractedArticle`."""

        start_time = time.perf_counter()
        try:
            document = parse_document(markup, url)
        except ArticleParseError:
            metrics.record_extraction(
                outcome="parse_error",
                block_count=0,
                duration_seconds=time.perf_counter() - start_time,
            )
            logger.warning(
                "Failed to parse HTML for %s",
                url or "<inline>",
                extra={"event": "extraction.parse_error", "url": url},
            )
            raise

        sanitize(body_of(document))
        meta = extract_metadata(document, url)

        container = locate_main_container(document)
        clean_container(container)

        blocks = build_blocks(container, url)
        content_text = render_plain_text(blocks, self._options.min_text_length)
        article = ExtractedArticle(
            url=url,
            title=meta.title,
            content_text=content_text,
            content_html=inner_html(container) or None,
            excerpt=make_excerpt(content_text),
            author=meta.author,
            published_time=meta.published_time,
            modified_time=meta.modified_time,
            image=meta.image,
            site_name=meta.site_name,
            structured_content=blocks,
        )

        outcome = "extracted" if blocks else "empty"
        duration = time.perf_counter() - start_time
        metrics.record_extraction(outcome=outcome, block_count=len(blocks), duration_seconds=duration)
        if blocks:
            logger.debug(
                "Extracted %d blocks from %s in %.3fs",
                len(blocks),
                url or "<inline>",
                duration,
                extra={"event": "extraction.completed", "url": url, "blocks": len(blocks)},
            )
        else:
            logger.debug(
                "No article content found in %s",
                url or "<inline>",
                extra={"event": "extraction.empty", "url": url},
            )
        return article


def extract(
    markup: str,
    url: Optional[str] = None,
    options: Optional[CleaningOptions] = None,
) -> ExtractedArticle:
    """Convenience wrapper around :meth:`ArticleExtractor.extract`."""

    return ArticleExtractor(options).extract(markup, url)


__all__ = ["ArticleExtractor", "body_of", "extract", "parse_document"]
