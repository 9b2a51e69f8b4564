"""Data models for SEO scoring."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class DomainForm(str, Enum):
    """Subdomain structure of a hostname."""
    ROOT = "Root Domain"
    WWW_SUBDOMAIN = "WWW Subdomain"
    SUBDOMAIN = "Subdomain"
    MULTI_LEVEL_SUBDOMAIN = "Multi-level Subdomain"
    OTHER = "Other"


class AnalysisKind(str, Enum):
    """Which feature set an analysis was built from."""
    URL_ONLY = "url_only"
    STATIC = "static"
    RENDERED = "rendered"


class Category(str, Enum):
    META = "meta"
    CONTENT = "content"
    MEDIA = "media"
    MOBILE = "mobile"
    PERFORMANCE = "performance"
    LINKS = "links"
    TECHNICAL = "technical"
    ACCESSIBILITY = "accessibility"
    GENERAL = "general"


class Level(str, Enum):
    """Shared high/medium/low scale for priority, effort and impact."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class UrlFeatures:
    """Structural facts derived from the URL string alone."""

    url: str
    https_protocol: bool
    domain_has_www: bool
    domain_structure: DomainForm
    path_depth: int
    has_query_params: bool
    has_fragment: bool

    def to_dict(self) -> dict:
        return {
            "httpsProtocol": self.https_protocol,
            "domainHasWww": self.domain_has_www,
            "domainStructure": self.domain_structure.value,
            "pathDepth": self.path_depth,
            "hasQueryParams": self.has_query_params,
            "hasFragment": self.has_fragment,
        }


@dataclass(frozen=True)
class HeadingStructure:
    """Heading counts per level plus the document-order check."""

    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    h4_count: int = 0
    h5_count: int = 0
    h6_count: int = 0
    has_proper_order: bool = True

    @property
    def other_count(self) -> int:
        return self.h4_count + self.h5_count + self.h6_count


@dataclass(frozen=True)
class ImageStats:
    count: int = 0
    with_alt: int = 0
    without_alt: int = 0

    @property
    def alt_coverage(self) -> float:
        """Share of images with non-blank alt text; 1.0 for a page without images."""
        if self.count == 0:
            return 1.0
        return self.with_alt / self.count


@dataclass(frozen=True)
class LinkCounts:
    internal: int = 0
    external: int = 0


@dataclass(frozen=True)
class RenderMetrics:
    """Layout and style measurements taken from a rendered page."""

    viewport_width: int = 0
    scroll_width: int = 0
    body_background: str = ""
    paragraph_colors: tuple[str, ...] = ()
    inner_text: Optional[str] = None


@dataclass(frozen=True)
class AnalysisInput:
    """Everything captured for one analysis pass."""

    url: str
    html: Optional[str] = None
    status_code: int = 0
    load_time_ms: Optional[int] = None
    render: Optional[RenderMetrics] = None


@dataclass(frozen=True)
class DocumentFeatures:
    """Content facts extracted from fetched or rendered markup."""

    title: str = ""
    description: str = ""
    canonical: Optional[str] = None
    open_graph: dict[str, str] = field(default_factory=dict)
    structured_data: list[Any] = field(default_factory=list)
    headings: HeadingStructure = field(default_factory=HeadingStructure)
    word_count: int = 0
    paragraph_count: int = 0
    links: LinkCounts = field(default_factory=LinkCounts)
    images: ImageStats = field(default_factory=ImageStats)
    has_viewport_meta: bool = False
    has_charset_meta: bool = False
    has_favicon: bool = False
    lang: Optional[str] = None
    has_main_landmark: bool = False
    unlabelled_form_fields: int = 0
    load_time_ms: Optional[int] = None  # None when not measurable (static mode)
    status_code: int = 0
    mobile_render_fits: Optional[bool] = None  # None when not measurable
    has_good_contrast: Optional[bool] = None  # None when not measurable

    def metadata_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "canonical": self.canonical,
            "ogTags": dict(self.open_graph),
            "schema": list(self.structured_data),
        }

    def content_dict(self) -> dict:
        return {
            "headingStructure": {
                "h1Count": self.headings.h1_count,
                "h2Count": self.headings.h2_count,
                "h3Count": self.headings.h3_count,
                "otherHeadingsCount": self.headings.other_count,
                "hasProperHeadingOrder": self.headings.has_proper_order,
            },
            "wordCount": self.word_count,
            "paragraphCount": self.paragraph_count,
            "linkCount": {
                "internal": self.links.internal,
                "external": self.links.external,
            },
            "images": {
                "count": self.images.count,
                "withAlt": self.images.with_alt,
                "withoutAlt": self.images.without_alt,
            },
        }


@dataclass(frozen=True)
class AnalysisMode:
    """Tagged variant selecting the scoring scheme.

    Use the ``url_only``, ``static`` and ``rendered`` constructors rather than
    building instances directly.
    """

    kind: AnalysisKind
    url: UrlFeatures
    document: Optional[DocumentFeatures] = None

    def __post_init__(self):
        if self.kind != AnalysisKind.URL_ONLY and self.document is None:
            raise ValueError(f"{self.kind.value} analysis requires document features")

    @classmethod
    def url_only(cls, url: UrlFeatures) -> "AnalysisMode":
        return cls(kind=AnalysisKind.URL_ONLY, url=url)

    @classmethod
    def static(cls, url: UrlFeatures, document: DocumentFeatures) -> "AnalysisMode":
        return cls(kind=AnalysisKind.STATIC, url=url, document=document)

    @classmethod
    def rendered(cls, url: UrlFeatures, document: DocumentFeatures) -> "AnalysisMode":
        return cls(kind=AnalysisKind.RENDERED, url=url, document=document)


@dataclass(frozen=True)
class CategoryScores:
    """Four category scores and the weighted overall score, all in [0, 100]."""

    seo: int
    performance: int
    accessibility: int
    best_practices: int
    overall: int

    def to_dict(self) -> dict:
        return {
            "performance": self.performance,
            "accessibility": self.accessibility,
            "seo": self.seo,
            "bestPractices": self.best_practices,
        }


@dataclass(frozen=True)
class Recommendation:
    """A remediation sentence with the classification of the rule that produced it."""

    text: str
    category: Category = Category.GENERAL
    priority: Level = Level.MEDIUM
    effort: Level = Level.MEDIUM
    impact: Level = Level.MEDIUM

    @property
    def title(self) -> str:
        return self.text.split(".")[0] + "."


@dataclass
class AnalysisResult:
    """Outcome of one analysis, either genuine or the degraded default."""

    url: str
    mode: AnalysisKind
    scores: CategoryScores
    recommendations: list[Recommendation] = field(default_factory=list)
    url_features: Optional[UrlFeatures] = None
    document_features: Optional[DocumentFeatures] = None
    error: Optional[str] = None
    degraded: bool = False
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def recommendation_texts(self) -> list[str]:
        return [rec.text for rec in self.recommendations]

    def to_record(self) -> dict:
        """Build the record handed to persistence and presentation collaborators."""
        from seoscore.actions import priority_fixes, to_actionable_item

        record: dict[str, Any] = {
            "url": self.url,
            "date": self.analyzed_at.isoformat(),
            "scores": self.scores.to_dict(),
            "recommendations": self.recommendation_texts,
        }

        if self.error:
            record["analysisError"] = self.error

        if self.degraded:
            return record

        technical: dict[str, Any] = self.url_features.to_dict() if self.url_features else {}
        details: dict[str, Any] = {"technical": technical, "overallScore": self.scores.overall}

        doc = self.document_features
        if doc is not None:
            technical["statusCode"] = doc.status_code
            technical["mobileViewport"] = {
                "renders": bool(doc.mobile_render_fits),
                "responsive": doc.has_viewport_meta,
            }
            if doc.load_time_ms is not None:
                technical["loadTime"] = doc.load_time_ms
            details["metadata"] = doc.metadata_dict()
            details["content"] = doc.content_dict()

        record["analysisDetails"] = details
        record["actionableItems"] = [to_actionable_item(rec) for rec in self.recommendations]
        record["priorityFixes"] = priority_fixes(self.recommendations)
        return record
