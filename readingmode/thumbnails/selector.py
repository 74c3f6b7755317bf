"""Pick a representative image for a feed item from weak signals.

Signals are tried from most to least trusted: explicit media and enclosure
URLs, the first relevant ``<img>`` in the item's content then description,
a synthesized video-platform thumbnail, and finally the first relevant image
of the linked page. Every candidate is rejected when its URL hints at a small
image; that check sniffs dimensions out of URLs and is approximate by nature.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse

import requests
from lxml import etree
from lxml import html as lxml_html

from readingmode.config.settings import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    AppSettings,
)
from readingmode.extraction.structure import (
    image_is_relevant,
    image_source_is_relevant,
    resolve_image_source,
    resolve_url,
)
from readingmode.telemetry import metrics

logger = logging.getLogger(__name__)

SMALL_WIDTH = 854
SMALL_HEIGHT = 480

THUMBNAIL_SOURCE_ATTRIBUTES = ("src", "data-src", "data-lazy-src", "data-original")

_DIMENSIONS_IN_PATH_RE = re.compile(r"(?:^|[/_=-])(\d{2,4})x(\d{2,4})(?:[/_.-]|$)", re.IGNORECASE)
_SMALL_HINT_RE = re.compile(r"/avatar|/icon|/thumb|favicon|sprite", re.IGNORECASE)
_BARE_IMAGE_URL_RE = re.compile(r"https?://[^\s\"'<>]+\.(?:png|jpe?g|gif|webp)", re.IGNORECASE)
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")

YOUTUBE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
YOUTUBE_HOSTS = frozenset({"youtube.com", "m.youtube.com", "music.youtube.com"})
YOUTUBE_SHORT_HOST = "youtu.be"
YOUTUBE_PATH_PREFIXES = ("/shorts/", "/embed/", "/v/", "/live/")
YOUTUBE_THUMBNAIL_TEMPLATE = "https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"


@dataclass(frozen=True)
class ThumbnailSignals:
    """Image hints gathered for one feed item."""

    media_url: Optional[str] = None
    enclosure_url: Optional[str] = None
    content_html: Optional[str] = None
    description_html: Optional[str] = None
    link_url: Optional[str] = None


def _query_int(query: dict, *keys: str) -> Optional[int]:
    for key in keys:
        values = query.get(key)
        if not values:
            continue
        match = _LEADING_INT_RE.match(values[0])
        if match:
            return int(match.group(1))
    return None


def url_suggests_small_size(url: str) -> bool:
    """Heuristically flag thumbnails that are likely below 854x480."""

    match = _DIMENSIONS_IN_PATH_RE.search(url)
    if match:
        width, height = int(match.group(1)), int(match.group(2))
        if width < SMALL_WIDTH or height < SMALL_HEIGHT:
            return True

    try:
        query = parse_qs(urlparse(url).query)
    except ValueError:
        query = {}
    width = _query_int(query, "w", "width")
    height = _query_int(query, "h", "height")
    if width is not None and width < SMALL_WIDTH:
        return True
    if height is not None and height < SMALL_HEIGHT:
        return True

    return bool(_SMALL_HINT_RE.search(url))


def youtube_video_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]

    video_id: Optional[str] = None
    if host == YOUTUBE_SHORT_HOST:
        video_id = parsed.path.lstrip("/").split("/")[0]
    elif host in YOUTUBE_HOSTS:
        if parsed.path.rstrip("/") == "/watch":
            video_id = (parse_qs(parsed.query).get("v") or [None])[0]
        else:
            for prefix in YOUTUBE_PATH_PREFIXES:
                if parsed.path.startswith(prefix):
                    video_id = parsed.path[len(prefix):].split("/")[0]
                    break

    if video_id and YOUTUBE_ID_RE.match(video_id):
        return video_id
    return None


def youtube_thumbnail_url(url: Optional[str]) -> Optional[str]:
    video_id = youtube_video_id(url)
    if video_id is None:
        return None
    return YOUTUBE_THUMBNAIL_TEMPLATE.format(video_id=video_id)


def _srcset_first(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    first = value.split(",")[0].strip().split()
    return first[0] if first else None


def first_image_from_html(markup: Optional[str], base_url: Optional[str] = None) -> Optional[str]:
    """First relevant, not-small image in ``markup``.

    Falls back to an embedded ``og:image`` meta, then to the first bare image
    URL in the text.
    """

    if not markup or not markup.strip():
        return None
    try:
        document = lxml_html.document_fromstring(markup)
    except (etree.ParserError, ValueError) as exc:
        logger.debug("Unable to parse HTML while looking for images: %s", exc)
        return None

    for image in document.iter("img"):
        source = resolve_image_source(image, base_url, THUMBNAIL_SOURCE_ATTRIBUTES) or resolve_url(
            _srcset_first(image.get("srcset")), base_url
        )
        if not source or not image_is_relevant(image, source):
            continue
        if url_suggests_small_size(source):
            continue
        return source

    for meta in document.cssselect('meta[property="og:image"]'):
        source = resolve_url(meta.get("content"), base_url)
        if source and image_source_is_relevant(source) and not url_suggests_small_size(source):
            return source

    # bare image URLs in the visible text
    etree.strip_elements(document, "script", "style", with_tail=False)
    for match in _BARE_IMAGE_URL_RE.finditer(document.text_content()):
        source = match.group(0)
        if image_source_is_relevant(source) and not url_suggests_small_size(source):
            return source
    return None


def _is_http_url(url: Optional[str]) -> bool:
    if not url:
        return False
    try:
        return urlparse(url).scheme in {"http", "https"}
    except ValueError:
        return False


class ThumbnailSelector:
    """Select a thumbnail URL, fetching the linked page only as a last resort."""

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        fetch_pages: bool = True,
    ) -> None:
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent}
        self._fetch_pages = fetch_pages

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ThumbnailSelector":
        thumbnails = settings.thumbnails
        return cls(
            timeout=thumbnails.request_timeout,
            user_agent=thumbnails.user_agent,
            fetch_pages=thumbnails.fetch_pages,
        )

    def select(self, signals: ThumbnailSignals) -> Optional[str]:
        source, url = self._select(signals)
        metrics.record_thumbnail(source)
        if url:
            logger.debug(
                "Selected %s thumbnail for %s",
                source,
                signals.link_url or "<inline>",
                extra={"event": "thumbnail.selected", "source": source, "url": signals.link_url},
            )
        return url

    def _select(self, signals: ThumbnailSignals) -> Tuple[Optional[str], Optional[str]]:
        for source, candidate in (("media", signals.media_url), ("enclosure", signals.enclosure_url)):
            candidate = (candidate or "").strip()
            if candidate and not url_suggests_small_size(candidate):
                return source, candidate

        for source, markup in (("content", signals.content_html), ("description", signals.description_html)):
            image = first_image_from_html(markup, signals.link_url)
            if image:
                return source, image

        video = youtube_thumbnail_url(signals.link_url)
        if video and not url_suggests_small_size(video):
            return "video", video

        if self._fetch_pages and _is_http_url(signals.link_url):
            page = self._fetch_page(signals.link_url)
            image = first_image_from_html(page, signals.link_url)
            if image:
                return "page", image

        return None, None

    def _fetch_page(self, url: str) -> Optional[str]:
        """Download ``url`` as HTML; non-HTML bodies are never read."""

        try:
            with requests.get(url, timeout=self._timeout, headers=self._headers, stream=True) as response:
                response.raise_for_status()
                content_type = response.headers.get("Content-Type", "")
                if content_type and "html" not in content_type.lower():
                    logger.info(
                        "Skipping %s for thumbnail lookup: content type %s",
                        url,
                        content_type,
                        extra={"event": "thumbnail.not_html", "url": url, "content_type": content_type},
                    )
                    return None
                return response.text
        except requests.RequestException as exc:
            logger.warning(
                "Failed to download %s for thumbnail lookup: %s",
                url,
                exc,
                extra={"event": "thumbnail.fetch_failed", "url": url},
            )
            return None


def select_thumbnail(
    media_url: Optional[str] = None,
    enclosure_url: Optional[str] = None,
    content_html: Optional[str] = None,
    description_html: Optional[str] = None,
    link_url: Optional[str] = None,
    *,
    selector: Optional[ThumbnailSelector] = None,
) -> Optional[str]:
    """Module-level shortcut that builds :class:`ThumbnailSignals` for the caller."""

    signals = ThumbnailSignals(
        media_url=media_url,
        enclosure_url=enclosure_url,
        content_html=content_html,
        description_html=description_html,
        link_url=link_url,
    )
    return (selector or ThumbnailSelector()).select(signals)


__all__ = [
    "ThumbnailSelector",
    "ThumbnailSignals",
    "first_image_from_html",
    "select_thumbnail",
    "url_suggests_small_size",
    "youtube_thumbnail_url",
    "youtube_video_id",
]
