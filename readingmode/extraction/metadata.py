"""Title, byline, dates, site name and cover image from standard meta tags."""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from lxml.html import HtmlElement

from .dom import first_text
from .models import ArticleMetadata
from .structure import resolve_url

UNTITLED = "Untitled"


def _meta(document: HtmlElement, selector: str) -> Optional[str]:
    for element in document.cssselect(selector):
        value = (element.get("content") or "").strip()
        return value or None
    return None


def _first_attribute(document: HtmlElement, selector: str, attribute: str) -> Optional[str]:
    for element in document.cssselect(selector):
        value = (element.get(attribute) or "").strip()
        return value or None
    return None


def _hostname(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlparse(url).hostname or None
    except ValueError:
        return None


def extract_metadata(document: HtmlElement, url: Optional[str] = None) -> ArticleMetadata:
    """Resolve each field through its fallback chain; the first non-blank value wins."""

    title = (
        _meta(document, 'meta[property="og:title"]')
        or first_text(document.iter("title"))
        or first_text(document.iter("h1"))
        or UNTITLED
    )
    author = _meta(document, 'meta[name="author"]') or _meta(document, 'meta[property="article:author"]')
    published_time = _meta(document, 'meta[property="article:published_time"]') or _first_attribute(
        document, "time[datetime]", "datetime"
    )
    modified_time = _meta(document, 'meta[property="article:modified_time"]')
    image = (
        _meta(document, 'meta[property="og:image"]')
        or _meta(document, 'meta[name="twitter:image"]')
        or _meta(document, 'meta[property="twitter:image"]')
        or resolve_url(_first_attribute(document, "article img", "src"), url)
    )
    site_name = _meta(document, 'meta[property="og:site_name"]') or _hostname(url)

    return ArticleMetadata(
        title=title,
        author=author,
        published_time=published_time,
        modified_time=modified_time,
        image=image,
        site_name=site_name,
    )


__all__ = ["UNTITLED", "extract_metadata"]
