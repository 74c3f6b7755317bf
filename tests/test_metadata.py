from __future__ import annotations

from readingmode.extraction.extractor import parse_document
from readingmode.extraction.metadata import extract_metadata


def _metadata(head: str = "", body: str = "", url=None):
    document = parse_document(f"<html><head>{head}</head><body>{body}</body></html>")
    return extract_metadata(document, url)


def test_title_fallback_chain() -> None:
    assert _metadata('<meta property="og:title" content="OG"><title>Doc</title>', "<h1>H1</h1>").title == "OG"
    assert _metadata("<title> Doc title </title>", "<h1>H1</h1>").title == "Doc title"
    assert _metadata('<meta property="og:title" content="  ">', "<h1>Heading one</h1>").title == "Heading one"
    assert _metadata(body="<p>No title anywhere</p>").title == "Untitled"


def test_author_and_dates() -> None:
    meta = _metadata(
        '<meta property="article:author" content="Second Choice">'
        '<meta property="article:modified_time" content="2024-05-02">',
        '<time datetime="2024-05-01">May 1</time><time datetime="2023-01-01">old</time>',
    )

    assert meta.author == "Second Choice"
    assert meta.published_time == "2024-05-01"
    assert meta.modified_time == "2024-05-02"

    preferred = _metadata(
        '<meta name="author" content="First Choice">'
        '<meta property="article:author" content="Second Choice">'
        '<meta property="article:published_time" content="2024-04-30">',
        '<time datetime="2024-05-01">May 1</time>',
    )
    assert preferred.author == "First Choice"
    assert preferred.published_time == "2024-04-30"


def test_missing_optional_fields_are_none() -> None:
    meta = _metadata(body="<p>Body</p>")

    assert meta.author is None
    assert meta.published_time is None
    assert meta.modified_time is None
    assert meta.image is None
    assert meta.site_name is None


def test_image_fallback_chain() -> None:
    assert _metadata('<meta property="og:image" content="https://a.example/og.jpg">'
                     '<meta name="twitter:image" content="https://a.example/tw.jpg">').image == "https://a.example/og.jpg"
    assert _metadata('<meta name="twitter:image" content="https://a.example/tw.jpg">').image == "https://a.example/tw.jpg"
    assert (
        _metadata(body='<article><p>x</p><img src="/cover.jpg"></article>', url="https://news.example.com/a/b").image
        == "https://news.example.com/cover.jpg"
    )


def test_site_name_prefers_og_then_hostname() -> None:
    assert _metadata('<meta property="og:site_name" content="Example News">', url="https://news.example.com/x").site_name == "Example News"
    assert _metadata(url="https://news.example.com/x").site_name == "news.example.com"
