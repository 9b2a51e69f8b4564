"""Document feature extraction from fetched or rendered page markup."""

import json
import logging
import re
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Comment, Doctype

from seoscore.constants import (
    DARK_TEXT_LUMINANCE,
    LIGHT_BACKGROUND_LUMINANCE,
    MOBILE_OVERFLOW_TOLERANCE,
)
from seoscore.models import (
    AnalysisInput,
    DocumentFeatures,
    HeadingStructure,
    ImageStats,
    LinkCounts,
    RenderMetrics,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HEADING_PATTERN = re.compile(r"^h[1-6]$")
_RGB_PATTERN = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)")
_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")
# Input types that are buttons or invisible rather than fields a user fills in
_NON_FIELD_INPUT_TYPES = ("submit", "button", "reset", "hidden", "image")


def luminance(color: str) -> Optional[float]:
    """Simplified luminance of a CSS ``rgb()``/``rgba()`` color in [0, 1].

    Returns None if the string is not an rgb color.
    """
    match = _RGB_PATTERN.search(color or "")
    if not match:
        return None
    r, g, b = (int(v) for v in match.groups())
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def has_proper_heading_order(levels: list[int]) -> bool:
    """Check headings start at h1 and never skip a level going deeper.

    A page without headings passes.
    """
    previous = 0
    for level in levels:
        if previous == 0:
            if level != 1:
                return False
        elif level - previous > 1:
            return False
        previous = level
    return True


def has_good_contrast(metrics: RenderMetrics) -> bool:
    """Light body background combined with at least one dark-text paragraph."""
    background = luminance(metrics.body_background)
    if background is None or background <= LIGHT_BACKGROUND_LUMINANCE:
        return False

    for color in metrics.paragraph_colors:
        text = luminance(color)
        if text is not None and text < DARK_TEXT_LUMINANCE:
            return True
    return False


def mobile_render_fits(metrics: RenderMetrics) -> bool:
    """Page width stays within the viewport, allowing slight overflow."""
    return metrics.scroll_width <= metrics.viewport_width * MOBILE_OVERFLOW_TOLERANCE


class DocumentFeatureExtractor:
    """Extracts content facts from page markup.

    Every feature group is computed independently; if one fails it is logged
    and reported as absent instead of aborting the whole extraction.
    """

    def extract(
        self,
        html: str,
        page_url: str,
        status_code: int = 200,
        load_time_ms: Optional[int] = None,
        render: Optional[RenderMetrics] = None,
    ) -> DocumentFeatures:
        """Extract document features.

        Args:
            html: Page markup (raw or rendered)
            page_url: URL the markup was loaded from, used to resolve links
            status_code: HTTP status of the primary request
            load_time_ms: Measured load time, None when not measurable
            render: Layout measurements from a rendered page, None in static mode

        Returns:
            DocumentFeatures for the page
        """
        soup = BeautifulSoup(html or "", "html.parser")

        word_count = self._guard("word_count", lambda: self._word_count(soup, render), 0)

        mobile_fits = None
        contrast = None
        if render is not None:
            mobile_fits = self._guard("mobile_render_fits", lambda: mobile_render_fits(render), False)
            contrast = self._guard("contrast", lambda: has_good_contrast(render), False)

        return DocumentFeatures(
            title=self._guard("title", lambda: self._title(soup), ""),
            description=self._guard("description", lambda: self._description(soup), ""),
            canonical=self._guard("canonical", lambda: self._canonical(soup), None),
            open_graph=self._guard("open_graph", lambda: self._open_graph(soup), {}),
            structured_data=self._guard("structured_data", lambda: self._structured_data(soup), []),
            headings=self._guard("headings", lambda: self._headings(soup), HeadingStructure()),
            word_count=word_count,
            paragraph_count=self._guard("paragraphs", lambda: len(soup.find_all("p")), 0),
            links=self._guard("links", lambda: self._links(soup, page_url), LinkCounts()),
            images=self._guard("images", lambda: self._images(soup), ImageStats()),
            has_viewport_meta=self._guard(
                "viewport", lambda: soup.find("meta", attrs={"name": "viewport"}) is not None, False
            ),
            has_charset_meta=self._guard("charset", lambda: self._has_charset(soup), False),
            has_favicon=self._guard("favicon", lambda: self._has_favicon(soup), False),
            lang=self._guard("lang", lambda: self._lang(soup), None),
            has_main_landmark=self._guard("main_landmark", lambda: self._has_main_landmark(soup), False),
            unlabelled_form_fields=self._guard("form_labels", lambda: self._unlabelled_form_fields(soup), 0),
            load_time_ms=load_time_ms,
            status_code=status_code,
            mobile_render_fits=mobile_fits,
            has_good_contrast=contrast,
        )

    def extract_input(self, captured: AnalysisInput) -> DocumentFeatures:
        """Extract document features from a captured fetch or render."""
        return self.extract(
            captured.html or "",
            page_url=captured.url,
            status_code=captured.status_code,
            load_time_ms=captured.load_time_ms,
            render=captured.render,
        )

    def _guard(self, feature: str, extractor: Callable[[], T], default: T) -> T:
        try:
            return extractor()
        except Exception as e:
            logger.warning(f"Failed to extract {feature}, treating as absent: {e}")
            return default

    def _title(self, soup: BeautifulSoup) -> str:
        title = soup.find("title")
        return title.get_text(strip=True) if title else ""

    def _description(self, soup: BeautifulSoup) -> str:
        tag = soup.find("meta", attrs={"name": "description"})
        return (tag.get("content") or "").strip() if tag else ""

    def _canonical(self, soup: BeautifulSoup) -> Optional[str]:
        tag = soup.find("link", rel="canonical")
        if not tag:
            return None
        return tag.get("href") or None

    def _open_graph(self, soup: BeautifulSoup) -> dict[str, str]:
        open_graph = {}
        for meta in soup.find_all("meta", property=True):
            prop = meta.get("property", "")
            content = meta.get("content", "")
            if prop.startswith("og:") and content:
                open_graph[prop] = content
        return open_graph

    def _structured_data(self, soup: BeautifulSoup) -> list[Any]:
        blocks = []
        for script in soup.find_all("script", type="application/ld+json"):
            try:
                if script.string:
                    blocks.append(json.loads(script.string))
            except (json.JSONDecodeError, ValueError):
                logger.debug("Skipping invalid JSON-LD block")
        return blocks

    def _headings(self, soup: BeautifulSoup) -> HeadingStructure:
        levels = [int(tag.name[1]) for tag in soup.find_all(_HEADING_PATTERN)]
        counts = {level: levels.count(level) for level in range(1, 7)}
        return HeadingStructure(
            h1_count=counts[1],
            h2_count=counts[2],
            h3_count=counts[3],
            h4_count=counts[4],
            h5_count=counts[5],
            h6_count=counts[6],
            has_proper_order=has_proper_heading_order(levels),
        )

    def _word_count(self, soup: BeautifulSoup, render: Optional[RenderMetrics]) -> int:
        if render is not None and render.inner_text is not None:
            text = render.inner_text
        else:
            body = soup.body or soup
            text = " ".join(
                str(node) for node in body.find_all(string=True)
                if not isinstance(node, (Comment, Doctype)) and node.parent.name not in _NON_CONTENT_TAGS
            )
        return len(text.split())

    def _links(self, soup: BeautifulSoup, page_url: str) -> LinkCounts:
        page_host = urlparse(page_url).hostname
        internal = 0
        external = 0

        for link in soup.find_all("a", href=True):
            href = link["href"].strip()

            # Skip empty, javascript: and bare fragment links
            if not href or href.lower().startswith("javascript:") or href == "#":
                continue

            try:
                host = urlparse(urljoin(page_url, href)).hostname
            except ValueError:
                continue

            if host == page_host:
                internal += 1
            else:
                external += 1

        return LinkCounts(internal=internal, external=external)

    def _images(self, soup: BeautifulSoup) -> ImageStats:
        images = soup.find_all("img")
        with_alt = sum(1 for img in images if (img.get("alt") or "").strip())
        return ImageStats(count=len(images), with_alt=with_alt, without_alt=len(images) - with_alt)

    def _has_charset(self, soup: BeautifulSoup) -> bool:
        if soup.find("meta", charset=True):
            return True
        content_type = soup.find("meta", attrs={"http-equiv": re.compile("^content-type$", re.I)})
        return bool(content_type and "charset=" in content_type.get("content", "").lower())

    def _has_favicon(self, soup: BeautifulSoup) -> bool:
        for link in soup.find_all("link", rel=True):
            rel = link.get("rel")
            rels = rel if isinstance(rel, list) else [rel]
            if any(value.lower() == "icon" for value in rels):
                return True
        return False

    def _lang(self, soup: BeautifulSoup) -> Optional[str]:
        html_tag = soup.find("html")
        if not html_tag:
            return None
        return (html_tag.get("lang") or "").strip() or None

    def _has_main_landmark(self, soup: BeautifulSoup) -> bool:
        return soup.find("main") is not None or soup.find(attrs={"role": "main"}) is not None

    def _unlabelled_form_fields(self, soup: BeautifulSoup) -> int:
        """Count user-editable fields with neither a ``label[for]`` nor a wrapping label."""
        labelled_ids = {label.get("for") for label in soup.find_all("label") if label.get("for")}
        count = 0
        for control in soup.find_all(["input", "select", "textarea"]):
            if control.name == "input" and (control.get("type") or "text").lower() in _NON_FIELD_INPUT_TYPES:
                continue
            if control.get("id") in labelled_ids or control.find_parent("label") is not None:
                continue
            count += 1
        return count
