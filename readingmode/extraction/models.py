"""Value objects produced by the extraction engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class HeadingBlock:
    kind: ClassVar[str] = "heading"

    level: int
    text: str


@dataclass(frozen=True)
class ParagraphBlock:
    kind: ClassVar[str] = "paragraph"

    text: str


@dataclass(frozen=True)
class ListBlock:
    kind: ClassVar[str] = "list"

    items: Tuple[str, ...]


@dataclass(frozen=True)
class QuoteBlock:
    kind: ClassVar[str] = "quote"

    text: str


@dataclass(frozen=True)
class ImageBlock:
    kind: ClassVar[str] = "image"

    alt_text: str
    source_url: str


ContentBlock = Union[HeadingBlock, ParagraphBlock, ListBlock, QuoteBlock, ImageBlock]


def block_to_dict(block: ContentBlock) -> Dict[str, Any]:
    """Serialize a block with a ``type`` discriminator."""

    if isinstance(block, HeadingBlock):
        return {"type": block.kind, "level": block.level, "text": block.text}
    if isinstance(block, ListBlock):
        return {"type": block.kind, "items": list(block.items)}
    if isinstance(block, ImageBlock):
        return {"type": block.kind, "alt": block.alt_text, "src": block.source_url}
    return {"type": block.kind, "text": block.text}


@dataclass(frozen=True)
class ArticleMetadata:
    title: str
    author: Optional[str] = None
    published_time: Optional[str] = None
    modified_time: Optional[str] = None
    image: Optional[str] = None
    site_name: Optional[str] = None


@dataclass(frozen=True)
class ExtractedArticle:
    """Normalized representation of an article extracted from HTML."""

    title: str
    content_text: str
    excerpt: str
    url: Optional[str] = None
    content_html: Optional[str] = None
    author: Optional[str] = None
    published_time: Optional[str] = None
    modified_time: Optional[str] = None
    image: Optional[str] = None
    site_name: Optional[str] = None
    structured_content: Tuple[ContentBlock, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "contentText": self.content_text,
            "contentHtml": self.content_html,
            "excerpt": self.excerpt,
            "author": self.author,
            "publishedTime": self.published_time,
            "modifiedTime": self.modified_time,
            "image": self.image,
            "siteName": self.site_name,
            "structuredContent": [block_to_dict(block) for block in self.structured_content],
        }


@dataclass(frozen=True)
class CleanedFeedContent:
    """Cleaned markup and text for a single syndicated item."""

    html: str
    text: str
    success: bool


__all__ = [
    "ArticleMetadata",
    "CleanedFeedContent",
    "ContentBlock",
    "ExtractedArticle",
    "HeadingBlock",
    "ImageBlock",
    "ListBlock",
    "ParagraphBlock",
    "QuoteBlock",
    "block_to_dict",
]
