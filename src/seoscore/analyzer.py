"""Single-page SEO analysis service.

Wires the URL feature extractor, the fetchers, the document feature
extractor, the score calculator and the recommendation generator into one
call that always returns an AnalysisResult for a well-formed URL.
"""

import asyncio
import logging
from typing import Literal, Optional

from pydantic import BaseModel, Field

from seoscore.browser_config import BrowserConfig
from seoscore.browser_crawler import BrowserCrawler
from seoscore.config import AnalyzerConfig, ScoringThresholds, default_thresholds
from seoscore.crawler import WebCrawler
from seoscore.document_features import DocumentFeatureExtractor
from seoscore.errors import FetchError, RenderError
from seoscore.models import AnalysisInput, AnalysisKind, AnalysisMode, AnalysisResult, UrlFeatures
from seoscore.recommendations import degraded_recommendations, generate_recommendations
from seoscore.scoring import compute_scores, default_scores
from seoscore.url_features import extract_url_features

logger = logging.getLogger(__name__)


def _in_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class AnalysisOptions(BaseModel):
    """Per-request analysis options."""

    mode: Literal["url_only", "static", "rendered"] = Field(
        default="static",
        description="Feature set to score: URL string only, raw markup, or rendered page"
    )

    timeout: Optional[int] = Field(
        default=None,
        description="Static fetch timeout in seconds. If None, the analyzer config value is used.",
        ge=1,
        le=300
    )

    browser: BrowserConfig = Field(
        default_factory=BrowserConfig,
        description="Renderer settings for rendered mode"
    )

    class Config:
        """Pydantic model configuration."""
        frozen = False
        validate_assignment = True


class SEOAnalyzer:
    """Analyzes a single URL and produces scores and recommendations.

    Collaborators are injected so callers (and tests) can supply their own
    crawler or extractor. The analyzer keeps no per-request state, so one
    instance can serve independent requests.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        crawler: Optional[WebCrawler] = None,
        extractor: Optional[DocumentFeatureExtractor] = None,
        thresholds: Optional[ScoringThresholds] = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Analyzer configuration (defaults to AnalyzerConfig())
            crawler: Static fetcher (a WebCrawler with the configured user agent if None)
            extractor: Document feature extractor
            thresholds: Scoring thresholds (defaults to the module-wide defaults)
        """
        self.config = config or AnalyzerConfig()
        self._owns_crawler = crawler is None
        self.crawler = crawler or WebCrawler(user_agent=self.config.user_agent)
        self.extractor = extractor or DocumentFeatureExtractor()
        self.thresholds = thresholds or default_thresholds

    def __enter__(self) -> "SEOAnalyzer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Release the HTTP session of a crawler this analyzer created.

        An injected crawler belongs to the caller and is left open.
        """
        if self._owns_crawler:
            self.crawler.close()

    def _options(self, options: Optional[AnalysisOptions]) -> AnalysisOptions:
        if options is not None:
            return options
        return AnalysisOptions(mode=self.config.default_mode)

    def analyze(self, url: str, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
        """Analyze a URL.

        Args:
            url: URL to analyze; a missing scheme defaults to https
            options: Analysis options (mode, timeout, renderer settings)

        Returns:
            AnalysisResult; degraded if the page could not be fetched or rendered

        Raises:
            InvalidUrlError: If the URL is malformed (raised before any I/O)
            RuntimeError: If rendered mode is requested from inside a running
                event loop; use analyze_async there
        """
        options = self._options(options)
        url_features = extract_url_features(url)

        if options.mode == AnalysisKind.RENDERED.value:
            if _in_event_loop():
                raise RuntimeError(
                    "SEOAnalyzer.analyze() cannot render from inside a running event loop; "
                    "await SEOAnalyzer.analyze_async() instead"
                )
            return asyncio.run(self._analyze_rendered(url_features, options, renderer=None))

        if options.mode == AnalysisKind.URL_ONLY.value:
            return self._build_result(AnalysisMode.url_only(url_features))

        return self._analyze_static(url_features, options)

    async def analyze_async(
        self,
        url: str,
        options: Optional[AnalysisOptions] = None,
        renderer: Optional[BrowserCrawler] = None,
    ) -> AnalysisResult:
        """Analyze a URL from inside a running event loop.

        Args:
            url: URL to analyze
            options: Analysis options
            renderer: Running BrowserCrawler to reuse; if None one is launched
                for this request and torn down afterwards

        Returns:
            AnalysisResult

        Raises:
            InvalidUrlError: If the URL is malformed
        """
        options = self._options(options)
        url_features = extract_url_features(url)

        if options.mode == AnalysisKind.RENDERED.value:
            return await self._analyze_rendered(url_features, options, renderer=renderer)

        if options.mode == AnalysisKind.URL_ONLY.value:
            return self._build_result(AnalysisMode.url_only(url_features))

        # requests is blocking; keep it off the event loop
        return await asyncio.to_thread(self._analyze_static, url_features, options)

    def _analyze_static(self, url_features: UrlFeatures, options: AnalysisOptions) -> AnalysisResult:
        timeout = options.timeout or self.config.timeout

        try:
            page = self.crawler.fetch(url_features.url, timeout=timeout)
        except FetchError as e:
            logger.error(f"Static analysis failed for {url_features.url}: {e.message}")
            return self._degraded(url_features, AnalysisKind.STATIC, e.message)

        document = self.extractor.extract_input(AnalysisInput(
            url=page.final_url or url_features.url,
            html=page.html,
            status_code=page.status_code,
        ))
        return self._build_result(AnalysisMode.static(url_features, document))

    async def _analyze_rendered(
        self,
        url_features: UrlFeatures,
        options: AnalysisOptions,
        renderer: Optional[BrowserCrawler],
    ) -> AnalysisResult:
        try:
            if renderer is not None:
                page = await renderer.render(url_features.url)
            else:
                async with BrowserCrawler(options.browser) as crawler:
                    page = await crawler.render(url_features.url)
        except RenderError as e:
            logger.error(f"Rendered analysis failed for {url_features.url}: {e.message}")
            return self._degraded(url_features, AnalysisKind.RENDERED, e.message)

        document = self.extractor.extract_input(AnalysisInput(
            url=page.final_url or url_features.url,
            html=page.html,
            status_code=page.status_code,
            load_time_ms=page.load_time_ms,
            render=page.metrics,
        ))
        return self._build_result(AnalysisMode.rendered(url_features, document))

    def _build_result(self, mode: AnalysisMode) -> AnalysisResult:
        scores = compute_scores(mode, self.thresholds)
        recommendations = generate_recommendations(mode, self.thresholds)

        logger.info(
            f"Analyzed {mode.url.url} ({mode.kind.value}): overall={scores.overall}, "
            f"{len(recommendations)} recommendations"
        )

        return AnalysisResult(
            url=mode.url.url,
            mode=mode.kind,
            scores=scores,
            recommendations=recommendations,
            url_features=mode.url,
            document_features=mode.document,
        )

    def _degraded(self, url_features: UrlFeatures, kind: AnalysisKind, error: str) -> AnalysisResult:
        return AnalysisResult(
            url=url_features.url,
            mode=kind,
            scores=default_scores(),
            recommendations=degraded_recommendations(),
            url_features=url_features,
            error=error,
            degraded=True,
        )


def analyze(url: str, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
    """Analyze a URL with a fresh SEOAnalyzer built from environment config."""
    with SEOAnalyzer(config=AnalyzerConfig.from_env()) as analyzer:
        return analyzer.analyze(url, options)
