"""Reading-mode article extraction for feeds and scraped pages."""

from .config.settings import AppSettings, CleaningOptions, SettingsError, load_settings
from .errors import ArticleParseError, ReadingModeError
from .extraction import (
    ArticleExtractor,
    CleanedFeedContent,
    ContentBlock,
    ExtractedArticle,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
    clean_feed_content,
    extract,
)
from .thumbnails.selector import ThumbnailSelector, ThumbnailSignals, select_thumbnail

__all__ = [
    "AppSettings",
    "ArticleExtractor",
    "ArticleParseError",
    "CleanedFeedContent",
    "CleaningOptions",
    "ContentBlock",
    "ExtractedArticle",
    "HeadingBlock",
    "ImageBlock",
    "ListBlock",
    "ParagraphBlock",
    "QuoteBlock",
    "ReadingModeError",
    "SettingsError",
    "ThumbnailSelector",
    "ThumbnailSignals",
    "clean_feed_content",
    "extract",
    "load_settings",
    "select_thumbnail",
]
