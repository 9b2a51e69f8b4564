"""Score calculator - turns extracted features into category scores.

All three analysis kinds are dispatched through ``compute_scores`` so the
point tables live in one place:

    URL_ONLY  - technical/meta/content scheme, weighted 40/30/30
    STATIC    - document tables with static length bands, lang attribute bonus
    RENDERED  - document tables with rendered bands, contrast and layout checks

RENDERED is the canonical scheme; the other two are kept for callers that
cannot render the page.
"""

import logging
from typing import Dict, Optional, Tuple

from seoscore.config import ScoringThresholds, default_thresholds
from seoscore.constants import (
    ACCESSIBILITY_BASE_RENDERED,
    ACCESSIBILITY_BASE_STATIC,
    ALT_COVERAGE_BANDS,
    ALT_COVERAGE_SOME_POINTS,
    ALT_TEXT_GOOD_COVERAGE,
    ALT_TEXT_GOOD_POINTS,
    ALT_TEXT_SOME_POINTS,
    BOTH_LINK_KINDS_POINTS,
    CANONICAL_POINTS,
    CONTRAST_POINTS,
    DEGRADED_SCORE,
    DESCRIPTION_IDEAL_POINTS,
    DESCRIPTION_PRESENT_POINTS,
    DOCUMENT_WEIGHTS,
    DOMAIN_FORM_POINTS,
    HEADING_ORDER_POINTS,
    HEADING_STRUCTURE_POINTS,
    HTTPS_POINTS,
    LANG_ATTRIBUTE_POINTS,
    LOAD_TIME_BANDS,
    LONG_CONTENT_POINTS,
    LONG_CONTENT_WORDS,
    MANY_PARAGRAPHS,
    MANY_PARAGRAPHS_POINTS,
    MAX_SCORE,
    MIN_CONTENT_POINTS,
    MIN_CONTENT_WORDS,
    MIN_SCORE,
    MOBILE_FULL_POINTS,
    MOBILE_RENDERS_POINTS,
    MOBILE_RESPONSIVE_POINTS,
    MULTIPLE_H1_POINTS,
    NO_QUERY_POINTS,
    OG_FULL_POINTS,
    OG_MIN_TAGS,
    OG_PARTIAL_POINTS,
    ONE_LINK_KIND_POINTS,
    SHALLOW_PATH_MAX_DEPTH,
    SHALLOW_PATH_POINTS,
    SINGLE_H1_POINTS,
    SOME_PARAGRAPHS_POINTS,
    STATUS_OK_POINTS,
    STRUCTURED_DATA_POINTS,
    SUBHEADINGS_ONLY_POINTS,
    TITLE_IDEAL_POINTS,
    TITLE_PRESENT_POINTS,
    URL_DOMAIN_FORM_POINTS,
    URL_HTTPS_POINTS,
    URL_NO_QUERY_POINTS,
    URL_ONLY_ACCESSIBILITY_SCORE,
    URL_ONLY_CONTENT_SCORE,
    URL_ONLY_META_SCORE,
    URL_ONLY_WEIGHTS,
    URL_PATH_DEPTH_BANDS,
    URL_SUBDOMAIN_POINTS,
)
from seoscore.models import (
    AnalysisKind,
    AnalysisMode,
    CategoryScores,
    DocumentFeatures,
    DomainForm,
    UrlFeatures,
)

logger = logging.getLogger(__name__)

Breakdown = Dict[str, int]

_PREFERRED_DOMAIN_FORMS = (DomainForm.ROOT, DomainForm.WWW_SUBDOMAIN)


def clamp(score: int) -> int:
    """Clamp a summed category score into [0, 100]."""
    return max(MIN_SCORE, min(MAX_SCORE, score))


def weighted_overall(scores: Dict[str, int], weights: Dict[str, int]) -> int:
    """Weighted average with percentage weights, rounded half up."""
    total = sum(scores[name] * weight for name, weight in weights.items())
    return (total + 50) // 100


def length_points(length: int, minimum: int, maximum: int, ideal: int, present: int) -> int:
    """Points for a text field: ideal inside the band, partial when merely present."""
    if length == 0:
        return 0
    if minimum <= length <= maximum:
        return ideal
    return present


def load_time_points(load_time_ms: Optional[int]) -> int:
    if load_time_ms is None:
        return 0
    for upper_bound, points in LOAD_TIME_BANDS:
        if load_time_ms < upper_bound:
            return points
    return 0


def alt_coverage_points(coverage: float) -> int:
    for minimum, points in ALT_COVERAGE_BANDS:
        if coverage >= minimum:
            return points
    return ALT_COVERAGE_SOME_POINTS if coverage > 0 else 0


class ScoreCalculator:
    """Maps a feature set to CategoryScores. Pure and deterministic."""

    def __init__(self, thresholds: Optional[ScoringThresholds] = None):
        self.thresholds = thresholds or default_thresholds

    def calculate(self, mode: AnalysisMode) -> CategoryScores:
        """Compute category scores for the given analysis mode.

        Args:
            mode: Tagged feature set (URL-only, static or rendered)

        Returns:
            CategoryScores with every value in [0, 100]
        """
        if mode.kind == AnalysisKind.URL_ONLY:
            return self._url_only_scores(mode.url)
        return self._document_scores(mode.kind, mode.url, mode.document)

    # ------------------------------------------------------------------
    # URL-only scheme
    # ------------------------------------------------------------------

    def _url_only_scores(self, url: UrlFeatures) -> CategoryScores:
        technical, breakdown = self._url_technical(url)
        technical = clamp(technical)

        overall = weighted_overall(
            {"technical": technical, "meta": URL_ONLY_META_SCORE, "content": URL_ONLY_CONTENT_SCORE},
            URL_ONLY_WEIGHTS,
        )

        logger.debug(f"URL-only score breakdown for {url.url}: {breakdown}")

        return CategoryScores(
            seo=URL_ONLY_META_SCORE,
            performance=technical,
            accessibility=URL_ONLY_ACCESSIBILITY_SCORE,
            best_practices=URL_ONLY_CONTENT_SCORE,
            overall=overall,
        )

    def _url_technical(self, url: UrlFeatures) -> Tuple[int, Breakdown]:
        breakdown: Breakdown = {}

        breakdown["https"] = URL_HTTPS_POINTS if url.https_protocol else 0

        if url.domain_structure in _PREFERRED_DOMAIN_FORMS:
            breakdown["domain_structure"] = URL_DOMAIN_FORM_POINTS
        elif url.domain_structure == DomainForm.SUBDOMAIN:
            breakdown["domain_structure"] = URL_SUBDOMAIN_POINTS
        else:
            breakdown["domain_structure"] = 0

        breakdown["path_depth"] = 0
        for max_depth, points in URL_PATH_DEPTH_BANDS:
            if url.path_depth <= max_depth:
                breakdown["path_depth"] = points
                break

        breakdown["query_params"] = 0 if url.has_query_params else URL_NO_QUERY_POINTS

        return sum(breakdown.values()), breakdown

    # ------------------------------------------------------------------
    # Document schemes (static and rendered)
    # ------------------------------------------------------------------

    def _document_scores(
        self, kind: AnalysisKind, url: UrlFeatures, doc: DocumentFeatures
    ) -> CategoryScores:
        rendered = kind == AnalysisKind.RENDERED

        seo, seo_breakdown = self._seo(doc, rendered)
        performance, perf_breakdown = self._performance(url, doc)
        accessibility, a11y_breakdown = self._accessibility(doc, rendered)
        best_practices, bp_breakdown = self._best_practices(doc, rendered)

        categories = {
            "seo": clamp(seo),
            "performance": clamp(performance),
            "accessibility": clamp(accessibility),
            "best_practices": clamp(best_practices),
        }

        logger.debug(
            f"{kind.value} score breakdown for {url.url}: seo={seo_breakdown} "
            f"performance={perf_breakdown} accessibility={a11y_breakdown} "
            f"best_practices={bp_breakdown}"
        )

        return CategoryScores(
            overall=weighted_overall(categories, DOCUMENT_WEIGHTS),
            **categories,
        )

    def _seo(self, doc: DocumentFeatures, rendered: bool) -> Tuple[int, Breakdown]:
        t = self.thresholds
        title_min = t.title_min_rendered if rendered else t.title_min_static
        description_min = t.description_min_rendered if rendered else t.description_min_static

        og_count = len(doc.open_graph)
        if og_count >= OG_MIN_TAGS:
            og_points = OG_FULL_POINTS
        elif og_count > 0:
            og_points = OG_PARTIAL_POINTS
        else:
            og_points = 0

        h1_count = doc.headings.h1_count
        if h1_count == 1:
            h1_points = SINGLE_H1_POINTS
        elif h1_count > 1:
            h1_points = MULTIPLE_H1_POINTS
        else:
            h1_points = 0

        breakdown = {
            "title": length_points(
                len(doc.title), title_min, t.title_max, TITLE_IDEAL_POINTS, TITLE_PRESENT_POINTS
            ),
            "description": length_points(
                len(doc.description), description_min, t.description_max,
                DESCRIPTION_IDEAL_POINTS, DESCRIPTION_PRESENT_POINTS,
            ),
            "canonical": CANONICAL_POINTS if doc.canonical else 0,
            "open_graph": og_points,
            "structured_data": STRUCTURED_DATA_POINTS if doc.structured_data else 0,
            "h1": h1_points,
        }
        return sum(breakdown.values()), breakdown

    def _performance(self, url: UrlFeatures, doc: DocumentFeatures) -> Tuple[int, Breakdown]:
        responsive = doc.has_viewport_meta
        renders = bool(doc.mobile_render_fits)
        if responsive and renders:
            mobile_points = MOBILE_FULL_POINTS
        elif responsive:
            mobile_points = MOBILE_RESPONSIVE_POINTS
        elif renders:
            mobile_points = MOBILE_RENDERS_POINTS
        else:
            mobile_points = 0

        breakdown = {
            "https": HTTPS_POINTS if url.https_protocol else 0,
            "domain_structure": DOMAIN_FORM_POINTS if url.domain_structure in _PREFERRED_DOMAIN_FORMS else 0,
            "path_depth": SHALLOW_PATH_POINTS if url.path_depth <= SHALLOW_PATH_MAX_DEPTH else 0,
            "query_params": 0 if url.has_query_params else NO_QUERY_POINTS,
            "load_time": load_time_points(doc.load_time_ms),
            "status_code": STATUS_OK_POINTS if doc.status_code == 200 else 0,
            "mobile_viewport": mobile_points,
        }
        return sum(breakdown.values()), breakdown

    def _accessibility(self, doc: DocumentFeatures, rendered: bool) -> Tuple[int, Breakdown]:
        breakdown = {
            "base": ACCESSIBILITY_BASE_RENDERED if rendered else ACCESSIBILITY_BASE_STATIC,
            "alt_text": alt_coverage_points(doc.images.alt_coverage),
            "heading_order": HEADING_ORDER_POINTS if doc.headings.has_proper_order else 0,
        }
        if rendered:
            breakdown["contrast"] = CONTRAST_POINTS if doc.has_good_contrast else 0
        else:
            breakdown["lang"] = LANG_ATTRIBUTE_POINTS if doc.lang else 0
        return sum(breakdown.values()), breakdown

    def _best_practices(self, doc: DocumentFeatures, rendered: bool) -> Tuple[int, Breakdown]:
        breakdown: Breakdown = {}

        if doc.word_count >= LONG_CONTENT_WORDS:
            breakdown["word_count"] = LONG_CONTENT_POINTS
        elif doc.word_count >= MIN_CONTENT_WORDS:
            breakdown["word_count"] = MIN_CONTENT_POINTS
        else:
            breakdown["word_count"] = 0

        headings = doc.headings
        if headings.has_proper_order and headings.h2_count > 0:
            breakdown["heading_structure"] = HEADING_STRUCTURE_POINTS
        elif headings.h2_count > 0:
            breakdown["heading_structure"] = SUBHEADINGS_ONLY_POINTS
        else:
            breakdown["heading_structure"] = 0

        if doc.paragraph_count >= MANY_PARAGRAPHS:
            breakdown["paragraphs"] = MANY_PARAGRAPHS_POINTS
        elif doc.paragraph_count > 0:
            breakdown["paragraphs"] = SOME_PARAGRAPHS_POINTS
        else:
            breakdown["paragraphs"] = 0

        if doc.links.internal > 0 and doc.links.external > 0:
            breakdown["links"] = BOTH_LINK_KINDS_POINTS
        elif doc.links.internal > 0 or doc.links.external > 0:
            breakdown["links"] = ONE_LINK_KIND_POINTS
        else:
            breakdown["links"] = 0

        if rendered:
            coverage = doc.images.alt_coverage
            if coverage >= ALT_TEXT_GOOD_COVERAGE:
                breakdown["alt_text"] = ALT_TEXT_GOOD_POINTS
            elif coverage > 0:
                breakdown["alt_text"] = ALT_TEXT_SOME_POINTS
            else:
                breakdown["alt_text"] = 0

        return sum(breakdown.values()), breakdown


def compute_scores(mode: AnalysisMode, thresholds: Optional[ScoringThresholds] = None) -> CategoryScores:
    """Compute category scores for any analysis mode.

    Args:
        mode: Tagged feature set
        thresholds: Optional length bands (defaults to ScoringThresholds())

    Returns:
        CategoryScores
    """
    return ScoreCalculator(thresholds).calculate(mode)


def default_scores() -> CategoryScores:
    """Scores reported when a page could not be fetched or rendered."""
    return CategoryScores(
        seo=DEGRADED_SCORE,
        performance=DEGRADED_SCORE,
        accessibility=DEGRADED_SCORE,
        best_practices=DEGRADED_SCORE,
        overall=DEGRADED_SCORE,
    )
