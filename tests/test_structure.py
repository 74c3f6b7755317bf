from __future__ import annotations

import pytest
from lxml import html as lxml_html

from readingmode.extraction.models import (
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
)
from readingmode.extraction.structure import (
    build_blocks,
    image_is_relevant,
    image_source_is_relevant,
    resolve_image_source,
)


def _container(markup: str):
    return lxml_html.fragment_fromstring(markup, create_parent="div")


def test_blocks_follow_document_order() -> None:
    container = _container(
        "<h2>Section heading</h2>"
        "<p>A paragraph long enough to be kept as prose.</p>"
        "<ul><li>First item</li><li>  </li><li>Second item</li></ul>"
        "<blockquote>Quoted remark from a source.</blockquote>"
        '<img src="https://cdn.example.com/photos/bridge.jpg" alt="Bridge">'
        "<h3>Later heading</h3>"
    )

    assert build_blocks(container) == (
        HeadingBlock(level=2, text="Section heading"),
        ParagraphBlock(text="A paragraph long enough to be kept as prose."),
        ListBlock(items=("First item", "Second item")),
        QuoteBlock(text="Quoted remark from a source."),
        ImageBlock(alt_text="Bridge", source_url="https://cdn.example.com/photos/bridge.jpg"),
        HeadingBlock(level=3, text="Later heading"),
    )


def test_short_blocks_are_dropped() -> None:
    container = _container(
        "<h2>Hey</h2><h4>Title</h4>"
        "<p>Exactly twenty chars</p><p>Twenty-one characters</p>"
        "<ul><li> </li></ul><ol></ol>"
        "<blockquote>Ten chars!</blockquote><blockquote>Eleven chars</blockquote>"
    )

    assert build_blocks(container) == (
        HeadingBlock(level=4, text="Title"),
        ParagraphBlock(text="Twenty-one characters"),
        QuoteBlock(text="Eleven chars"),
    )


def test_image_sources_resolve_in_priority_order() -> None:
    container = _container(
        '<img data-src="https://cdn.example.com/lazy/first.jpg" data-lazy-src="https://cdn.example.com/lazy/second.jpg">'
        '<img data-lazy-src="https://cdn.example.com/lazy/second.jpg">'
        '<img src="/images/relative.jpg">'
        "<img alt='no source at all'>"
    )

    blocks = build_blocks(container, base_url="https://example.com/post/1")

    assert blocks == (
        ImageBlock(alt_text="", source_url="https://cdn.example.com/lazy/first.jpg"),
        ImageBlock(alt_text="", source_url="https://cdn.example.com/lazy/second.jpg"),
        ImageBlock(alt_text="", source_url="https://example.com/images/relative.jpg"),
    )


@pytest.mark.parametrize(
    "attributes, expected",
    [
        ('src="https://cdn.example.com/photos/harbour.jpg"', True),
        ('src="data:image/png;base64,iVBORw0KGgo="', False),
        ('src="data:image/jpeg;base64,' + "A" * 1300 + '"', True),
        ('src="https://cdn.example.com/assets/site-logo.png"', False),
        ('src="https://cdn.example.com/loading/spinner.gif"', False),
        ('src="https://cdn.example.com/charts/growth.svg"', False),
        ('src="https://cdn.example.com/charts/growth.svg?v=2"', False),
        ('src="https://cdn.example.com/ads/300x250.jpg"', False),
        ('src="https://www.gravatar.com/avatar/abc"', False),
        ('src="https://cdn.example.com/photos/a.jpg" class="site-icon"', False),
        ('src="https://cdn.example.com/photos/a.jpg" class="ad"', False),
        ('src="https://cdn.example.com/photos/a.jpg" id="footer-badge"', False),
        ('src="https://cdn.example.com/photos/a.jpg" class="lead-image"', False),
        ('src="https://cdn.example.com/photos/a.jpg" class="adsense-slot"', False),
        ('src="https://cdn.example.com/photos/a.jpg" id="headline-photo"', False),
        ('src="https://cdn.example.com/photos/a.jpg" class="feature-photo"', True),
        ('src="https://cdn.example.com/photos/a.jpg" width="50"', False),
        ('src="https://cdn.example.com/photos/a.jpg" width="100" height="70"', False),
        ('src="https://cdn.example.com/photos/a.jpg" width="100" height="90"', True),
        ('src="https://cdn.example.com/photos/a.jpg" width="400" height="100"', False),
        ('src="https://cdn.example.com/photos/a.jpg" width="100" height="500"', False),
        ('src="https://cdn.example.com/photos/a.jpg" width="300px" height="200px"', True),
    ],
)
def test_image_relevance_filters(attributes: str, expected: bool) -> None:
    image = lxml_html.fragment_fromstring(f"<img {attributes}>")
    source = resolve_image_source(image)

    assert source is not None
    assert image_is_relevant(image, source) is expected


def test_source_level_checks() -> None:
    assert image_source_is_relevant("https://example.com/photo.JPG")
    assert not image_source_is_relevant("https://example.com/tracking/beacon.png")
    assert not image_source_is_relevant("https://example.com/img/spacer.png")
    assert not image_source_is_relevant("https://example.com/IMG/Chart.SVG")
