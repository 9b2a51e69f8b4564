"""Recommendation generator.

Inspects the same feature set as the score calculator and emits an ordered
list of remediation sentences. Order is priority: feature-derived rules
come first in a fixed sequence, then evergreen tips fill the list up to a
minimum, and the result is capped.
"""

import logging
from typing import List, Optional, Set, Tuple

from seoscore.config import ScoringThresholds, default_thresholds
from seoscore.constants import OG_MIN_TAGS, URL_DEEP_PATH_DEPTH
from seoscore.models import (
    AnalysisKind,
    AnalysisMode,
    Category,
    DocumentFeatures,
    DomainForm,
    Level,
    Recommendation,
    UrlFeatures,
)

logger = logging.getLogger(__name__)

HIGH, MEDIUM, LOW = Level.HIGH, Level.MEDIUM, Level.LOW


def _rec(text: str, category: Category, priority: Level, effort: Level, impact: Level) -> Recommendation:
    return Recommendation(text=text, category=category, priority=priority, effort=effort, impact=impact)


# (topics covered, recommendation). A tip is skipped when a rule already
# produced advice on one of its topics.
GENERIC_TIPS: Tuple[Tuple[Tuple[str, ...], Recommendation], ...] = (
    (("title",), _rec(
        "Ensure your page has a descriptive title tag (ideally 50-60 characters).",
        Category.META, LOW, LOW, MEDIUM)),
    (("description",), _rec(
        "Add a meta description that summarizes your page content (ideally 150-160 characters).",
        Category.META, LOW, LOW, MEDIUM)),
    (("h1",), _rec(
        "Use a single H1 heading that clearly describes your page content.",
        Category.CONTENT, LOW, LOW, MEDIUM)),
    (("headings",), _rec(
        "Structure your content with H2-H6 subheadings for better readability and SEO.",
        Category.CONTENT, LOW, MEDIUM, LOW)),
    (("keywords",), _rec(
        "Include relevant keywords in your content naturally, avoiding keyword stuffing.",
        Category.CONTENT, LOW, MEDIUM, LOW)),
    (("images",), _rec(
        "Optimize images with descriptive file names and ALT text.",
        Category.MEDIA, LOW, LOW, LOW)),
    (("mobile", "speed"), _rec(
        "Ensure your website is mobile-friendly and loads quickly.",
        Category.MOBILE, LOW, MEDIUM, MEDIUM)),
    (("internal_links",), _rec(
        "Add internal links to other relevant pages on your site.",
        Category.LINKS, LOW, LOW, LOW)),
    (("external_links",), _rec(
        "Include external links to authoritative sources when appropriate.",
        Category.LINKS, LOW, LOW, LOW)),
)

DEGRADED_RECOMMENDATIONS = (
    _rec("We couldn't fully analyze your website. Please ensure it's publicly accessible.",
         Category.GENERAL, HIGH, LOW, HIGH),
    _rec("Check that your URL is correct and the site is online.",
         Category.GENERAL, HIGH, LOW, HIGH),
    _rec("Make sure your website allows robots to crawl it.",
         Category.TECHNICAL, MEDIUM, LOW, MEDIUM),
)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


class RecommendationGenerator:
    """Builds the ordered recommendation list for an analysis mode."""

    def __init__(self, thresholds: Optional[ScoringThresholds] = None):
        self.thresholds = thresholds or default_thresholds

    def generate(self, mode: AnalysisMode) -> List[Recommendation]:
        """Generate recommendations.

        Args:
            mode: Tagged feature set (URL-only, static or rendered)

        Returns:
            Ordered list of at most ``max_recommendations`` entries
        """
        found: List[Tuple[str, Recommendation]] = []

        if mode.kind == AnalysisKind.URL_ONLY:
            found.extend(self._url_rules(mode.url))
            minimum = self.thresholds.max_recommendations
        else:
            found.extend(self._document_rules(mode.kind, mode.url, mode.document))
            minimum = self.thresholds.min_recommendations

        recommendations = [rec for _, rec in found]
        covered: Set[str] = {topic for topic, _ in found}

        for topics, tip in GENERIC_TIPS:
            if len(recommendations) >= minimum:
                break
            if covered.intersection(topics):
                continue
            recommendations.append(tip)

        logger.debug(
            f"{len(found)} feature-derived recommendations, "
            f"{len(recommendations) - len(found)} generic tips for {mode.url.url}"
        )

        return recommendations[:self.thresholds.max_recommendations]

    def _url_rules(self, url: UrlFeatures) -> List[Tuple[str, Recommendation]]:
        rules: List[Tuple[str, Recommendation]] = []

        if not url.https_protocol:
            rules.append(("https", self._https()))

        if not url.domain_has_www and url.domain_structure == DomainForm.ROOT:
            rules.append(("domain", _rec(
                "Consider using a consistent www or non-www version of your domain "
                "and set up proper redirects.",
                Category.TECHNICAL, LOW, MEDIUM, LOW)))

        if url.path_depth > URL_DEEP_PATH_DEPTH:
            rules.append(("url_structure", _rec(
                "Your URL path is quite deep. Consider a flatter site structure for better SEO.",
                Category.TECHNICAL, MEDIUM, HIGH, MEDIUM)))

        if url.has_query_params:
            rules.append(("url_structure", _rec(
                "Your URL contains query parameters. Consider using clean, descriptive URLs "
                "without parameters when possible.",
                Category.TECHNICAL, LOW, MEDIUM, LOW)))

        if url.has_fragment:
            rules.append(("url_structure", _rec(
                "Your URL contains a fragment identifier (#). Search engines typically ignore "
                "content after the #.",
                Category.TECHNICAL, LOW, LOW, LOW)))

        return rules

    def _document_rules(
        self, kind: AnalysisKind, url: UrlFeatures, doc: DocumentFeatures
    ) -> List[Tuple[str, Recommendation]]:
        t = self.thresholds
        rendered = kind == AnalysisKind.RENDERED
        title_min = t.title_min_rendered if rendered else t.title_min_static
        description_min = t.description_min_rendered if rendered else t.description_min_static
        rules: List[Tuple[str, Recommendation]] = []

        # 1. Title
        title_length = len(doc.title)
        if not doc.title:
            rules.append(("title", _rec(
                "Add a title tag to your page.", Category.META, HIGH, LOW, HIGH)))
        elif title_length < title_min:
            rules.append(("title", _rec(
                f"Your title tag is too short. Make it more descriptive: aim for "
                f"{title_min}-{t.title_max} characters (currently {title_length}).",
                Category.META, HIGH, LOW, HIGH)))
        elif title_length > t.title_max:
            rules.append(("title", _rec(
                f"Your title tag is too long. Keep it under {t.title_max} characters "
                f"for better SEO (currently {title_length}).",
                Category.META, HIGH, LOW, HIGH)))

        # 2. Meta description
        description_length = len(doc.description)
        if not doc.description:
            rules.append(("description", _rec(
                "Add a meta description to your page.", Category.META, HIGH, LOW, HIGH)))
        elif description_length < description_min:
            rules.append(("description", _rec(
                f"Your meta description is too short. Aim for {description_min}-"
                f"{t.description_max} characters (currently {description_length}).",
                Category.META, HIGH, LOW, HIGH)))
        elif description_length > t.description_max:
            rules.append(("description", _rec(
                f"Your meta description is too long. Keep it under {t.description_max} "
                f"characters (currently {description_length}).",
                Category.META, HIGH, LOW, HIGH)))

        # 3. Favicon, only checked on raw markup
        if not rendered and not doc.has_favicon:
            rules.append(("favicon", _rec(
                "Add a favicon to your website.", Category.TECHNICAL, LOW, LOW, LOW)))

        # 4. Canonical
        if not doc.canonical:
            rules.append(("canonical", _rec(
                "Add a canonical URL tag to prevent duplicate content issues.",
                Category.TECHNICAL, MEDIUM, LOW, MEDIUM)))

        # 5. Open Graph
        if len(doc.open_graph) < OG_MIN_TAGS:
            rules.append(("open_graph", _rec(
                "Add Open Graph meta tags to improve social media sharing.",
                Category.META, LOW, LOW, LOW)))

        # 6. H1
        h1_count = doc.headings.h1_count
        if h1_count == 0:
            rules.append(("h1", _rec(
                "Add an H1 heading to your page.", Category.CONTENT, HIGH, LOW, HIGH)))
        elif h1_count > 1:
            rules.append(("h1", _rec(
                f"Use only one H1 heading per page. Current: {h1_count}.",
                Category.CONTENT, HIGH, LOW, HIGH)))

        # 7. Heading order
        if not doc.headings.has_proper_order:
            rules.append(("headings", _rec(
                "Fix your heading structure. Use headings in the proper order "
                "(H1, then H2, then H3, etc.) without skipping levels.",
                Category.CONTENT, MEDIUM, MEDIUM, MEDIUM)))

        # 8. Content length
        if rendered and doc.word_count < t.thin_content_words_rendered:
            rules.append(("content", _rec(
                f"Expand your page content. In-depth pages of {t.thin_content_words_rendered}+ "
                f"words tend to rank better. Current word count: {doc.word_count}.",
                Category.CONTENT, MEDIUM, HIGH, MEDIUM)))
        elif not rendered and doc.word_count < t.thin_content_words_static:
            rules.append(("content", _rec(
                f"Add more content to your page. Aim for at least {t.thin_content_words_static} "
                f"words. Current word count: {doc.word_count}.",
                Category.CONTENT, MEDIUM, HIGH, MEDIUM)))

        # 9. Alt text
        missing_alt = doc.images.without_alt
        if missing_alt > 0:
            rules.append(("images", _rec(
                f"Add alt text to {_plural(missing_alt, 'image')}.",
                Category.ACCESSIBILITY, MEDIUM, LOW, MEDIUM)))

        # 10. Links
        if doc.links.internal == 0:
            rules.append(("internal_links", _rec(
                "Add internal links to other pages on your site.",
                Category.LINKS, MEDIUM, LOW, MEDIUM)))
        if doc.links.external == 0:
            rules.append(("external_links", _rec(
                "Add external links to authoritative sources to improve credibility.",
                Category.LINKS, LOW, LOW, LOW)))

        # 11. HTTPS
        if not url.https_protocol:
            rules.append(("https", self._https()))

        # 12. Load time
        if doc.load_time_ms is not None and doc.load_time_ms > t.slow_load_time_ms:
            rules.append(("speed", _rec(
                f"Improve page load speed. Current load time: {doc.load_time_ms / 1000:.2f} seconds.",
                Category.PERFORMANCE, HIGH, HIGH, HIGH)))

        # 13. Mobile
        if not doc.has_viewport_meta:
            rules.append(("mobile", _rec(
                "Add a proper viewport meta tag for better mobile responsiveness.",
                Category.MOBILE, HIGH, LOW, HIGH)))
        if rendered and not doc.mobile_render_fits:
            rules.append(("mobile", _rec(
                "Fix mobile viewport rendering issues. Your page does not display properly "
                "on mobile devices.",
                Category.MOBILE, HIGH, HIGH, HIGH)))

        # 14-17. Markup checks (static only)
        if not rendered:
            if not doc.has_charset_meta:
                rules.append(("charset", _rec(
                    "Add a meta charset tag to specify character encoding.",
                    Category.TECHNICAL, MEDIUM, LOW, MEDIUM)))
            if not doc.lang:
                rules.append(("lang", _rec(
                    "Add a lang attribute to your HTML tag.",
                    Category.ACCESSIBILITY, MEDIUM, LOW, MEDIUM)))
            if not doc.has_main_landmark:
                rules.append(("landmarks", _rec(
                    "Add a main landmark for better accessibility.",
                    Category.ACCESSIBILITY, MEDIUM, LOW, MEDIUM)))
            if doc.unlabelled_form_fields > 0:
                rules.append(("form_labels", _rec(
                    f"Add proper labels to {_plural(doc.unlabelled_form_fields, 'form field')}.",
                    Category.ACCESSIBILITY, MEDIUM, LOW, MEDIUM)))

        return rules

    def _https(self) -> Recommendation:
        return _rec(
            "Implement HTTPS to secure your website and improve search rankings.",
            Category.TECHNICAL, HIGH, HIGH, HIGH)


def generate_recommendations(
    mode: AnalysisMode, thresholds: Optional[ScoringThresholds] = None
) -> List[Recommendation]:
    """Generate the ordered recommendation list for any analysis mode."""
    return RecommendationGenerator(thresholds).generate(mode)


def degraded_recommendations() -> List[Recommendation]:
    """Recommendations reported when a page could not be fetched or rendered."""
    return list(DEGRADED_RECOMMENDATIONS)
