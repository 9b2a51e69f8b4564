"""Shared fixtures for seoscore tests."""

from dataclasses import replace

import pytest

from seoscore.models import (
    DocumentFeatures,
    HeadingStructure,
    ImageStats,
    LinkCounts,
)
from seoscore.url_features import extract_url_features


@pytest.fixture
def https_root_url():
    """URL features for https://example.com/blog (root domain, depth 1)."""
    return extract_url_features("https://example.com/blog")


@pytest.fixture
def rich_document():
    """A well-optimized page that triggers no feature-derived recommendation."""
    return DocumentFeatures(
        title="A" * 45,
        description="D" * 140,
        canonical="https://example.com/blog",
        open_graph={"og:title": "t", "og:description": "d", "og:image": "i"},
        structured_data=[{"@type": "Article"}],
        headings=HeadingStructure(h1_count=1, h2_count=3, h3_count=2, has_proper_order=True),
        word_count=700,
        paragraph_count=6,
        links=LinkCounts(internal=4, external=2),
        images=ImageStats(count=4, with_alt=4, without_alt=0),
        has_viewport_meta=True,
        has_charset_meta=True,
        has_favicon=True,
        lang="en",
        has_main_landmark=True,
        load_time_ms=800,
        status_code=200,
        mobile_render_fits=True,
        has_good_contrast=True,
    )


@pytest.fixture
def static_document(rich_document):
    """The rich page as seen without a browser: no timing or layout facts."""
    return replace(rich_document, load_time_ms=None, mobile_render_fits=None, has_good_contrast=None)


@pytest.fixture
def empty_document():
    """A blank page that answered 200."""
    return DocumentFeatures(status_code=200)


@pytest.fixture
def sample_html():
    """Markup covering every extracted feature."""
    return """
    <!DOCTYPE html>
    <html lang="en">
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1">
            <title>  Example Blog Post  </title>
            <meta name="description" content="A short description of the post.">
            <link rel="canonical" href="https://example.com/blog/post">
            <link rel="icon" href="/favicon.ico">
            <meta property="og:title" content="Example">
            <meta property="og:description" content="Example description">
            <meta property="og:image" content="">
            <script type="application/ld+json">{"@type": "BlogPosting"}</script>
            <script type="application/ld+json">{not valid json</script>
            <style>body { color: black; }</style>
        </head>
        <body>
            <h1>Main Heading</h1>
            <h2>First Section</h2>
            <h3>Detail</h3>
            <p>One two three four five.</p>
            <p>Six seven eight.</p>
            <!-- a comment with several words inside -->
            <script>var ignored = "these words are not content";</script>
            <a href="/about">About</a>
            <a href="https://example.com/contact">Contact</a>
            <a href="https://other.org/">Other</a>
            <a href="#">Top</a>
            <a href="javascript:void(0)">Noop</a>
            <a href="">Empty</a>
            <img src="a.png" alt="A picture">
            <img src="b.png" alt="   ">
            <img src="c.png">
        </body>
    </html>
    """
