"""Static rule tables driving sanitization, locating and image filtering.

Kept as plain data so each table can be reviewed and tested on its own.
"""
from __future__ import annotations

# --- Markup sanitizer -------------------------------------------------------

NOISE_TAGS = frozenset({"script", "style", "nav", "header", "footer", "aside", "form"})

# Never removed by the sanitizer even when their class/id looks noisy.
PROTECTED_TAGS = frozenset({"html", "head", "body"})

# Matched as substrings of the lower-cased "class id" string.
NOISE_CLASS_SUBSTRINGS = (
    "sidebar",
    "toolbar",
    "breadcrumb",
    "comment",
    "social",
    "share",
    "related",
    "newsletter",
    "subscribe",
    "advertisement",
    "sponsor",
    "cookie",
    "popup",
    "modal",
    "overlay",
    "promo",
    "banner",
    # support / donation widgets
    "support",
    "donate",
    "more-contents",
    "read-count",
    "advantages",
    "prices-type",
    "prices-selections",
    "price-custom",
)

# Matched against whole class/id tokens; as substrings these hit "header", "read", "lead".
NOISE_CLASS_TOKENS = frozenset({"ad", "ads"})

NOISE_DATA_ATTRIBUTES = (
    "data-ad",
    "data-sponsor",
    "data-widget",
    "data-module",
    "data-promo",
    "data-ea-module",
)

# --- Link-cluster pruning ---------------------------------------------------

PRUNE_LINK_DENSITY = 0.45
PRUNE_LINK_DENSITY_MAX_TEXT = 800
PRUNE_MIN_ANCHORS = 4
PRUNE_ANCHORS_MAX_TEXT = 200
PRUNE_MIN_LIST_ITEMS = 6
PRUNE_MAX_AVG_ITEM_LENGTH = 25

# --- Main content locator ---------------------------------------------------

CURATED_SELECTORS = (
    "article",
    "[itemprop=\"articleBody\"]",
    "[data-content-id]",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".content-body",
    ".story-content",
    ".main-content",
    ".article-body",
    ".post-body",
    ".entry-body",
    # CMS themes
    ".single-post-content",
    ".single-content",
    ".post-single-content",
    # news sites
    ".news-content",
    ".article-text",
    ".content-text",
    ".story-text",
    ".story-body",
    ".content__article-body",
    # blogs
    ".blog-content",
    ".post-text",
    ".entry-text",
)

GENERIC_SELECTORS = (
    "article",
    "[role=\"main\"]",
    "main",
    ".content",
    ".post-content",
    ".entry-content",
    ".article-content",
    "#content",
    "#main",
)

FALLBACK_CONTAINER_TAGS = ("section", "div")

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
LIST_TAGS = ("ul", "ol")
CODE_TAGS = ("pre", "code")

CURATED_MIN_TEXT_LENGTH = 500
CURATED_MIN_PARAGRAPHS = 2
CURATED_MIN_SCORE = 1000
CURATED_PARAGRAPH_WEIGHT = 100
CURATED_HEADING_WEIGHT = 50

# --- Candidate scorer -------------------------------------------------------

SCORE_TEXT_CAP = 8000
SCORE_PARAGRAPH_WEIGHT = 120
SCORE_HEADING_WEIGHT = 60
PROSE_SENTENCE_RANGE = (12, 35)
PROSE_BONUS = 1.15
LINK_DENSITY_LIMIT = 0.4
LINK_DENSITY_PENALTY = 0.6
LIST_COUNT_LIMIT = 6
LIST_PENALTY = 0.8
CODE_COUNT_LIMIT = 2
CODE_PENALTY = 0.85

# --- Structured content builder ---------------------------------------------

MIN_HEADING_LENGTH = 5
MIN_PARAGRAPH_LENGTH = 20
MIN_QUOTE_LENGTH = 10

IMAGE_SOURCE_ATTRIBUTES = ("src", "data-src", "data-lazy-src")
MIN_DATA_URI_LENGTH = 1200

IMAGE_URL_DENYLIST = (
    "placeholder",
    "spacer",
    "pixel",
    "sprite",
    "icon",
    "favicon",
    "logo",
    "banner",
    "ad-",
    "/ads/",
    "share",
    "social",
    "pinterest",
    "pinimg",
    "tracking",
    "analytics",
    "avatar",
    "gravatar",
    "badge",
    "/animation",
    "/animations",
    ".gif",
)

IMAGE_CLASS_SUBSTRINGS = (
    "ad",
    "logo",
    "icon",
    "sprite",
    "banner",
    "social",
    "share",
    "header",
    "footer",
    "nav",
    "toolbar",
)

MIN_IMAGE_SIDE = 80
MIN_IMAGE_AREA = 8000
IMAGE_ASPECT_RANGE = (0.25, 3.5)

# --- Plain text & excerpt ---------------------------------------------------

LIST_BULLET = "• "
EXCERPT_LENGTH = 200
EXCERPT_MIN_SENTENCE_END = 100
EXCERPT_ELLIPSIS = "..."
