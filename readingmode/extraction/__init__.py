"""Main-content extraction and cleaning for arbitrary HTML."""

from .extractor import ArticleExtractor, extract, parse_document
from .feed_content import clean_feed_content
from .models import (
    ArticleMetadata,
    CleanedFeedContent,
    ContentBlock,
    ExtractedArticle,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
)

__all__ = [
    "ArticleExtractor",
    "ArticleMetadata",
    "CleanedFeedContent",
    "ContentBlock",
    "ExtractedArticle",
    "HeadingBlock",
    "ImageBlock",
    "ListBlock",
    "ParagraphBlock",
    "QuoteBlock",
    "clean_feed_content",
    "extract",
    "parse_document",
]
