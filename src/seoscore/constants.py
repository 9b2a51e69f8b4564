# src/seoscore/constants.py
"""Centralized constants for the SEO scoring engine.

Point values, length bands and weights used by the score calculator and
the recommendation generator. For user-configurable thresholds, see
config.py and ScoringThresholds.
"""

# =============================================================================
# Fetch / Render Constants
# =============================================================================

# Default timeout for a static fetch (seconds)
DEFAULT_FETCH_TIMEOUT_SECONDS = 10

# Default timeout for a rendered page load (milliseconds)
DEFAULT_RENDER_TIMEOUT_MS = 30000

# Mobile viewport applied in rendered mode
MOBILE_VIEWPORT_WIDTH = 375
MOBILE_VIEWPORT_HEIGHT = 812
MOBILE_DEVICE_SCALE_FACTOR = 2

# A page still "fits" the mobile viewport up to this much horizontal overflow
MOBILE_OVERFLOW_TOLERANCE = 1.1

DEFAULT_USER_AGENT = "SEOScore/1.0 SEO Analyzer"


# =============================================================================
# Domain Structure
# =============================================================================

ROOT_DOMAIN_LABELS = 2
SUBDOMAIN_LABELS = 3
WWW_LABEL = "www"


# =============================================================================
# SEO Category (document modes)
# =============================================================================

TITLE_IDEAL_POINTS = 20
TITLE_PRESENT_POINTS = 10
DESCRIPTION_IDEAL_POINTS = 20
DESCRIPTION_PRESENT_POINTS = 10
CANONICAL_POINTS = 10
OG_FULL_POINTS = 10
OG_PARTIAL_POINTS = 5
OG_MIN_TAGS = 3
STRUCTURED_DATA_POINTS = 10
SINGLE_H1_POINTS = 10
MULTIPLE_H1_POINTS = 5


# =============================================================================
# Performance Category (document modes)
# =============================================================================

HTTPS_POINTS = 15
DOMAIN_FORM_POINTS = 5
SHALLOW_PATH_POINTS = 5
SHALLOW_PATH_MAX_DEPTH = 3
NO_QUERY_POINTS = 5
STATUS_OK_POINTS = 15
MOBILE_FULL_POINTS = 15
MOBILE_RESPONSIVE_POINTS = 10
MOBILE_RENDERS_POINTS = 5

# (upper bound in ms, exclusive; points)
LOAD_TIME_BANDS = (
    (1000, 25),
    (2000, 20),
    (3000, 15),
    (5000, 10),
    (8000, 5),
)


# =============================================================================
# Accessibility Category (document modes)
# =============================================================================

ACCESSIBILITY_BASE_RENDERED = 50
ACCESSIBILITY_BASE_STATIC = 70

# (minimum alt coverage, inclusive; points). Anything above zero gets the tail.
ALT_COVERAGE_BANDS = (
    (1.0, 20),
    (0.8, 15),
    (0.5, 10),
)
ALT_COVERAGE_SOME_POINTS = 5

HEADING_ORDER_POINTS = 15
LANG_ATTRIBUTE_POINTS = 10
CONTRAST_POINTS = 15

# Luminance = (0.299 R + 0.587 G + 0.114 B) / 255
LIGHT_BACKGROUND_LUMINANCE = 0.5
DARK_TEXT_LUMINANCE = 0.4


# =============================================================================
# Best Practices Category (document modes)
# =============================================================================

LONG_CONTENT_WORDS = 600
MIN_CONTENT_WORDS = 300
LONG_CONTENT_POINTS = 20
MIN_CONTENT_POINTS = 10
HEADING_STRUCTURE_POINTS = 20
SUBHEADINGS_ONLY_POINTS = 10
MANY_PARAGRAPHS = 5
MANY_PARAGRAPHS_POINTS = 10
SOME_PARAGRAPHS_POINTS = 5
BOTH_LINK_KINDS_POINTS = 20
ONE_LINK_KIND_POINTS = 10
ALT_TEXT_GOOD_COVERAGE = 0.8
ALT_TEXT_GOOD_POINTS = 20
ALT_TEXT_SOME_POINTS = 10


# =============================================================================
# URL-only Mode
# =============================================================================

URL_HTTPS_POINTS = 20
URL_DOMAIN_FORM_POINTS = 10
URL_SUBDOMAIN_POINTS = 5
# (maximum depth, inclusive; points)
URL_PATH_DEPTH_BANDS = (
    (0, 15),
    (2, 10),
    (4, 5),
)
URL_NO_QUERY_POINTS = 5
URL_ONLY_META_SCORE = 60
URL_ONLY_CONTENT_SCORE = 50
URL_ONLY_ACCESSIBILITY_SCORE = 70
URL_DEEP_PATH_DEPTH = 3


# =============================================================================
# Weights
# =============================================================================

# Percentages; weighted sums are computed in integers and rounded half up
DOCUMENT_WEIGHTS = {
    "seo": 30,
    "performance": 30,
    "accessibility": 20,
    "best_practices": 20,
}

URL_ONLY_WEIGHTS = {
    "technical": 40,
    "meta": 30,
    "content": 30,
}

MAX_SCORE = 100
MIN_SCORE = 0

# Score used for every category when a page could not be analyzed
DEGRADED_SCORE = 50


# =============================================================================
# Recommendations
# =============================================================================

MAX_RECOMMENDATIONS = 10
MIN_RECOMMENDATIONS = 5
SLOW_LOAD_TIME_MS = 3000
PRIORITY_FIXES_LIMIT = 5
PLAN_SECTION_LIMIT = 3
