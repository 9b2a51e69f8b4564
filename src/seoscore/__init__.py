"""SEO scoring engine: scores a single web page and recommends fixes."""

__version__ = "0.1.0"

from seoscore.analyzer import SEOAnalyzer, AnalysisOptions, analyze
from seoscore.crawler import WebCrawler
from seoscore.browser_crawler import BrowserCrawler
from seoscore.browser_config import BrowserConfig
from seoscore.document_features import DocumentFeatureExtractor
from seoscore.scoring import ScoreCalculator, compute_scores
from seoscore.recommendations import RecommendationGenerator, generate_recommendations
from seoscore.url_features import extract_url_features
from seoscore.models import (
    AnalysisKind,
    AnalysisMode,
    AnalysisResult,
    CategoryScores,
    DocumentFeatures,
    Recommendation,
    UrlFeatures,
)
from seoscore.errors import SEOScoreError, InvalidUrlError, FetchError, RenderError
from seoscore.config import settings, AnalyzerConfig, ScoringThresholds
from seoscore.logging_config import setup_logging, get_logger

__all__ = [
    "SEOAnalyzer",
    "AnalysisOptions",
    "analyze",
    "WebCrawler",
    "BrowserCrawler",
    "BrowserConfig",
    "DocumentFeatureExtractor",
    "ScoreCalculator",
    "compute_scores",
    "RecommendationGenerator",
    "generate_recommendations",
    "extract_url_features",
    "AnalysisKind",
    "AnalysisMode",
    "AnalysisResult",
    "CategoryScores",
    "DocumentFeatures",
    "Recommendation",
    "UrlFeatures",
    "SEOScoreError",
    "InvalidUrlError",
    "FetchError",
    "RenderError",
    "settings",
    "AnalyzerConfig",
    "ScoringThresholds",
    "setup_logging",
    "get_logger",
]
