"""Tests for document feature extraction."""

from unittest.mock import patch

import pytest

from seoscore.document_features import (
    DocumentFeatureExtractor,
    has_good_contrast,
    has_proper_heading_order,
    luminance,
    mobile_render_fits,
)
from seoscore.models import HeadingStructure, RenderMetrics


@pytest.fixture
def extractor():
    return DocumentFeatureExtractor()


class TestLuminance:
    """Test cases for luminance."""

    def test_white_and_black(self):
        assert luminance("rgb(255, 255, 255)") == pytest.approx(1.0)
        assert luminance("rgb(0, 0, 0)") == 0.0

    def test_rgba(self):
        assert luminance("rgba(255, 0, 0, 0.5)") == pytest.approx(0.299)

    def test_non_rgb_returns_none(self):
        assert luminance("transparent") is None
        assert luminance("") is None


class TestHeadingOrder:
    """Test cases for has_proper_heading_order."""

    @pytest.mark.parametrize("levels,expected", [
        ([], True),
        ([1, 2, 3], True),
        ([1, 2, 3, 1, 2], True),
        ([1, 2, 2, 3, 2], True),
        ([2, 3], False),
        ([1, 3], False),
        ([1, 2, 4], False),
    ])
    def test_order(self, levels, expected):
        assert has_proper_heading_order(levels) is expected


class TestRenderChecks:
    """Test cases for contrast and mobile fit checks."""

    def test_good_contrast(self):
        metrics = RenderMetrics(
            body_background="rgb(255, 255, 255)",
            paragraph_colors=("rgb(200, 200, 200)", "rgb(20, 20, 20)"),
        )
        assert has_good_contrast(metrics) is True

    def test_transparent_background_fails(self):
        metrics = RenderMetrics(
            body_background="rgba(0, 0, 0, 0)",
            paragraph_colors=("rgb(0, 0, 0)",),
        )
        assert has_good_contrast(metrics) is False

    def test_no_paragraphs_fails(self):
        metrics = RenderMetrics(body_background="rgb(255, 255, 255)")
        assert has_good_contrast(metrics) is False

    def test_mobile_fit_tolerates_slight_overflow(self):
        assert mobile_render_fits(RenderMetrics(viewport_width=375, scroll_width=412)) is True
        assert mobile_render_fits(RenderMetrics(viewport_width=375, scroll_width=413)) is False


class TestDocumentFeatureExtractor:
    """Test cases for DocumentFeatureExtractor."""

    def test_extract_metadata(self, extractor, sample_html):
        features = extractor.extract(sample_html, "https://example.com/blog/post")

        assert features.title == "Example Blog Post"
        assert features.description == "A short description of the post."
        assert features.canonical == "https://example.com/blog/post"
        assert features.open_graph == {"og:title": "Example", "og:description": "Example description"}
        assert features.structured_data == [{"@type": "BlogPosting"}]
        assert features.has_viewport_meta is True
        assert features.has_charset_meta is True
        assert features.has_favicon is True
        assert features.lang == "en"

    def test_extract_content(self, extractor, sample_html):
        features = extractor.extract(sample_html, "https://example.com/blog/post")

        assert features.headings == HeadingStructure(
            h1_count=1, h2_count=1, h3_count=1, has_proper_order=True
        )
        assert features.paragraph_count == 2
        assert features.links.internal == 2
        assert features.links.external == 1
        assert features.images.count == 3
        assert features.images.with_alt == 1
        assert features.images.without_alt == 2

    def test_word_count_skips_scripts_and_comments(self, extractor, sample_html):
        features = extractor.extract(sample_html, "https://example.com/blog/post")
        assert features.word_count == 19

    def test_static_mode_leaves_render_facts_unknown(self, extractor, sample_html):
        features = extractor.extract(sample_html, "https://example.com/", status_code=404)

        assert features.status_code == 404
        assert features.load_time_ms is None
        assert features.mobile_render_fits is None
        assert features.has_good_contrast is None

    def test_rendered_mode_uses_metrics(self, extractor, sample_html):
        render = RenderMetrics(
            viewport_width=375,
            scroll_width=375,
            body_background="rgb(255, 255, 255)",
            paragraph_colors=("rgb(0, 0, 0)",),
            inner_text="just three words",
        )

        features = extractor.extract(
            sample_html, "https://example.com/", load_time_ms=1200, render=render
        )

        assert features.word_count == 3
        assert features.load_time_ms == 1200
        assert features.mobile_render_fits is True
        assert features.has_good_contrast is True

    def test_empty_document(self, extractor):
        features = extractor.extract("", "https://example.com/")

        assert features.title == ""
        assert features.description == ""
        assert features.canonical is None
        assert features.open_graph == {}
        assert features.word_count == 0
        assert features.headings.has_proper_order is True
        assert features.images.alt_coverage == 1.0
        assert features.lang is None

    def test_charset_from_http_equiv(self, extractor):
        html = '<head><meta http-equiv="Content-Type" content="text/html; charset=UTF-8"></head>'
        assert extractor.extract(html, "https://example.com/").has_charset_meta is True

    def test_shortcut_icon_counts_as_favicon(self, extractor):
        html = '<head><link rel="shortcut icon" href="/f.ico"></head>'
        assert extractor.extract(html, "https://example.com/").has_favicon is True

    @pytest.mark.parametrize("html,expected", [
        ("<body><main><p>Hi</p></main></body>", True),
        ('<body><div role="main"><p>Hi</p></div></body>', True),
        ("<body><div><p>Hi</p></div></body>", False),
    ])
    def test_main_landmark(self, extractor, html, expected):
        assert extractor.extract(html, "https://example.com/").has_main_landmark is expected

    def test_unlabelled_form_fields(self, extractor):
        html = """
        <form>
            <label for="email">Email</label>
            <input id="email" type="email">
            <label>Name <input type="text"></label>
            <input type="text" id="phone">
            <input name="q">
            <select id="country"></select>
            <textarea></textarea>
            <input type="hidden" name="token">
            <input type="submit" value="Send">
            <input type="button" value="Cancel">
            <input type="reset">
        </form>
        """
        features = extractor.extract(html, "https://example.com/")
        assert features.unlabelled_form_fields == 4

    def test_sample_page_has_no_landmark_or_fields(self, extractor, sample_html):
        features = extractor.extract(sample_html, "https://example.com/blog/post")

        assert features.has_main_landmark is False
        assert features.unlabelled_form_fields == 0

    def test_failed_feature_is_reported_absent(self, extractor, sample_html):
        """Test one failing feature group does not abort extraction."""
        with patch.object(DocumentFeatureExtractor, "_open_graph", side_effect=RuntimeError("boom")):
            features = extractor.extract(sample_html, "https://example.com/blog/post")

        assert features.open_graph == {}
        assert features.title == "Example Blog Post"
