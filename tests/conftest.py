from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from readingmode.telemetry import metrics


PROSE = [
    (
        "Rivers were the first highways of the ancient world. Settlements clustered where boats "
        "could land safely. Trade followed the current downstream and brought wealth to the banks "
        "where merchants gathered."
    ),
    (
        "Over centuries those landing places grew into markets. Markets became towns, and towns "
        "became cities with bridges, warehouses and ferries. The river remained the reason for "
        "their existence long after roads arrived."
    ),
    (
        "Modern planners still read the landscape through water. Flood plains dictate where "
        "parks can go, and old harbours are turned into promenades. The shape of a city often "
        "mirrors the meander of its river."
    ),
]


ARTICLE_PAGE = f"""
<html>
<head>
  <title>Fallback title</title>
  <meta property="og:title" content="How Rivers Shape Cities">
  <meta property="og:image" content="https://example.com/media/rivers-cover.jpg">
  <meta name="author" content="Dana Example">
  <meta property="article:published_time" content="2024-03-01T10:00:00Z">
  <script>window.tracking = true;</script>
</head>
<body>
  <header><a href="/">Home</a> <a href="/news">News</a></header>
  <nav>
    <ul>
      <li><a href="/world">World</a></li>
      <li><a href="/science">Science</a></li>
      <li><a href="/culture">Culture</a></li>
    </ul>
  </nav>
  <div class="layout">
    <div class="entry-content">
      <h2>Rivers as early highways</h2>
      <p>{PROSE[0]}</p>
      <p>{PROSE[1]}</p>
      <figure>
        <img src="/media/river-delta.jpg" alt="A river delta" width="800" height="450">
      </figure>
      <blockquote>Cities follow water, and water follows gravity.</blockquote>
      <p>{PROSE[2]}</p>
      <img src="/static/logo.png" alt="Site logo">
      <div class="share-buttons"><a href="#">Facebook</a> <a href="#">Twitter</a></div>
      <ul class="related-list">
        <li><a href="/one">Another story about bridges</a></li>
        <li><a href="/two">Harbours of the north</a></li>
      </ul>
    </div>
    <aside>Sidebar promotions and widgets</aside>
  </div>
  <footer>Copyright Example Media</footer>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture()
def article_page() -> str:
    return ARTICLE_PAGE


@pytest.fixture()
def prose() -> list:
    return list(PROSE)
