"""Flatten structured blocks into plain text and a sentence-aware excerpt."""
from __future__ import annotations

import re
from typing import Sequence

from . import rules
from .models import ContentBlock, HeadingBlock, ListBlock, ParagraphBlock, QuoteBlock

_WHITESPACE_RE = re.compile(r"\s+")


def render_block(block: ContentBlock) -> str:
    if isinstance(block, HeadingBlock):
        return f"{'#' * min(6, max(1, block.level))} {block.text}"
    if isinstance(block, ParagraphBlock):
        return block.text
    if isinstance(block, ListBlock):
        return "\n".join(f"{rules.LIST_BULLET}{item}" for item in block.items)
    if isinstance(block, QuoteBlock):
        return f"> {block.text}"
    # images stay out of the plain text
    return ""


def render_plain_text(blocks: Sequence[ContentBlock], min_text_length: int) -> str:
    """Join rendered blocks; fall back to the first paragraph when the result is too short."""

    rendered = "\n\n".join(text for text in (render_block(block) for block in blocks) if text)
    text = _WHITESPACE_RE.sub(" ", rendered).strip()
    if len(text) >= min_text_length:
        return text
    for block in blocks:
        if isinstance(block, ParagraphBlock):
            return block.text
    return ""


def make_excerpt(text: str) -> str:
    if len(text) <= rules.EXCERPT_LENGTH:
        return text
    window = text[: rules.EXCERPT_LENGTH]
    end = max(window.rfind("."), window.rfind("!"), window.rfind("?"))
    if end > rules.EXCERPT_MIN_SENTENCE_END:
        return text[: end + 1]
    return window + rules.EXCERPT_ELLIPSIS


__all__ = ["make_excerpt", "render_block", "render_plain_text"]
