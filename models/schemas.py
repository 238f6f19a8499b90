"""
Data models and schemas for the scan pipeline.

This module defines the Pydantic models passed between the agents: the scan
input and its enrichment context, per-response analyses, and the final
ScanResult handed to persistence and rendering collaborators.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any, Literal

from config.settings import settings
from utils.helpers import dedupe_names, sanitize_brand_name


ProductType = Literal["physical", "software", "service"]
VisibilityStatus = Literal["not_mentioned", "low_visibility", "recommended"]
PositionBucket = Literal["top_3", "mentioned", "not_found"]
Sentiment = Literal["recommended", "neutral", "negative"]
DescriptionAccuracy = Literal["accurate", "partially_accurate", "inaccurate", "not_mentioned"]
ResponseType = Literal["direct_recommendation", "comparison", "informational", "deflection", "unclear"]
IssueType = Literal["none", "deflection", "generic", "off_topic", "knowledge_cutoff", "refusal"]
SignalStatus = Literal["success", "warning", "error"]
SignalConfidence = Literal["observed", "likely"]
ActionCategory = Literal["content", "positioning", "visibility", "competitive"]
ScanState = Literal["initializing", "querying", "analyzing", "scoring", "complete", "aborted", "failed"]


class QueryDimension(str, Enum):
    """Aspect of a brand a query asks about. The applicable subset depends on product/industry type."""
    QUALITY = "quality"
    REPUTATION = "reputation"
    VALUE = "value"
    CUSTOMER_SERVICE = "customer_service"
    FEATURES = "features"
    PERFORMANCE = "performance"
    EASE_OF_USE = "ease_of_use"
    PRICE = "price"
    STYLE = "style"
    COMFORT = "comfort"
    DURABILITY = "durability"
    CONVENIENCE = "convenience"
    RELIABILITY = "reliability"
    SELECTION = "selection"
    COVERAGE = "coverage"
    CLAIMS_PROCESS = "claims_process"
    FLEET_QUALITY = "fleet_quality"
    RATES_FEES = "rates_fees"
    DIGITAL_EXPERIENCE = "digital_experience"
    EXPERTISE = "expertise"
    COMMUNICATION = "communication"
    FOOD_QUALITY = "food_quality"
    AMBIANCE = "ambiance"
    CLEANLINESS = "cleanliness"
    LOCATION = "location"
    AMENITIES = "amenities"
    WAIT_TIMES = "wait_times"
    CARE_QUALITY = "care_quality"
    SAFETY = "safety"
    NETWORK = "network"
    GENERAL = "general"


DIMENSION_LABELS: Dict[str, str] = {
    "quality": "Quality",
    "reputation": "Reputation",
    "value": "Value for Money",
    "customer_service": "Customer Service",
    "features": "Features",
    "performance": "Performance",
    "ease_of_use": "Ease of Use",
    "price": "Price",
    "style": "Style & Design",
    "comfort": "Comfort & Fit",
    "durability": "Durability",
    "convenience": "Convenience",
    "reliability": "Reliability",
    "selection": "Selection & Options",
    "coverage": "Coverage Options",
    "claims_process": "Claims Process",
    "fleet_quality": "Fleet Quality",
    "rates_fees": "Rates & Fees",
    "digital_experience": "Digital Experience",
    "expertise": "Expertise",
    "communication": "Communication",
    "food_quality": "Food Quality",
    "ambiance": "Ambiance",
    "cleanliness": "Cleanliness",
    "location": "Location",
    "amenities": "Amenities",
    "wait_times": "Wait Times",
    "care_quality": "Quality of Care",
    "safety": "Safety",
    "network": "Network Coverage",
    "general": "General",
}


# Scan input

class ScanInput(BaseModel):
    """Brand profile submitted for a scan. Immutable once the scan starts."""
    model_config = ConfigDict(frozen=True)

    brand_name: str = Field(
        ...,
        description="Brand to look for in LLM answers",
        min_length=1,
        examples=["Cal.com"]
    )
    brand_url: str = Field(
        "",
        description="Brand website URL",
        examples=["https://cal.com"]
    )
    category: str = Field(
        "",
        description="Primary product/service category",
        examples=["scheduling software"]
    )
    description: str = Field(
        "",
        description="Free-text description of what the brand does"
    )
    competitors: List[str] = Field(
        default_factory=list,
        description="User-supplied competitor names",
        max_length=settings.MAX_COMPETITORS,
        examples=[["Calendly", "SavvyCal"]]
    )
    categories: List[str] = Field(
        default_factory=list,
        description="User-supplied search categories",
        max_length=settings.MAX_CATEGORIES
    )
    custom_queries: List[str] = Field(
        default_factory=list,
        description="User-supplied questions asked verbatim",
        max_length=settings.MAX_CUSTOM_QUERIES
    )
    query_count: int = Field(
        settings.DEFAULT_QUERY_COUNT,
        description="Number of generated queries; above the enhanced threshold the scan runs 3x",
        ge=settings.MIN_QUERY_COUNT,
        le=settings.MAX_QUERY_COUNT
    )

    @field_validator("brand_name")
    @classmethod
    def _brand_name_not_blank(cls, value: str) -> str:
        cleaned = sanitize_brand_name(value)
        if not cleaned:
            raise ValueError("brand_name must not be blank")
        return cleaned

    @field_validator("categories", "custom_queries")
    @classmethod
    def _drop_blank_entries(cls, value: List[str]) -> List[str]:
        return [item.strip() for item in value if item and item.strip()]

    @field_validator("competitors")
    @classmethod
    def _dedupe_competitors(cls, value: List[str]) -> List[str]:
        return dedupe_names(value)

    @property
    def is_enhanced(self) -> bool:
        return self.query_count > settings.ENHANCED_SCAN_THRESHOLD


class IndustryTerminology(BaseModel):
    """How people refer to one business in an industry ("carrier", "carriers", "insure with")."""
    singular: str = ""
    plural: str = ""
    verb_phrase: str = ""


class EnrichmentContext(BaseModel):
    """
    Website-analysis output consumed read-only by the scan.

    Every field is optional; a missing context degrades query generation to
    category-only queries.
    """
    model_config = ConfigDict(frozen=True)

    extracted_keywords: List[str] = Field(default_factory=list)
    extracted_features: List[str] = Field(default_factory=list)
    extracted_category: Optional[str] = None
    extracted_description: Optional[str] = None
    target_audience: Optional[str] = None
    use_cases: List[str] = Field(default_factory=list)
    discovered_competitors: List[str] = Field(default_factory=list)
    detected_country: Optional[str] = None
    detected_country_code: Optional[str] = None
    is_location_bound: bool = False
    industry_type: Optional[str] = None
    product_type: Optional[ProductType] = None
    industry_terminology: Optional[IndustryTerminology] = None
    confidence: float = Field(1.0, ge=0.0, le=1.0)


class TaggedQuery(BaseModel):
    """A query string tagged with the dimension it asks about."""
    query: str
    dimension: QueryDimension = QueryDimension.GENERAL
    variation_group: Optional[str] = Field(
        None,
        description="Shared id for paraphrases of the same question (elevated scans only)",
        examples=["best_tools_v2"]
    )
    is_custom: bool = False


# Per-response analysis

class ResponseQuality(BaseModel):
    """How useful an LLM answer was, independent of whether the brand appeared."""
    score: int = Field(100, ge=0, le=100)
    is_deflection: bool = False
    is_generic: bool = False
    is_off_topic: bool = False
    has_specific_brands: bool = False
    issue_type: IssueType = "none"
    issue_detail: Optional[str] = None


class MentionAnalysis(BaseModel):
    """Result of analysing one (query, provider) answer."""
    mentioned: bool = False
    position: PositionBucket = "not_found"
    exact_position: Optional[int] = Field(None, ge=1)
    sentiment: Optional[Sentiment] = None
    description: Optional[str] = None
    competitors_mentioned: List[str] = Field(default_factory=list)
    competitors_in_top_3: List[str] = Field(default_factory=list)
    other_brands_mentioned: List[str] = Field(default_factory=list)
    response_type: ResponseType = "unclear"
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    quality: Optional[ResponseQuality] = None

    @classmethod
    def empty(cls) -> "MentionAnalysis":
        """Neutral analysis for a query the provider never answered."""
        return cls()

    @property
    def is_valid(self) -> bool:
        return self.confidence > 0


class MentionVerdict(BaseModel):
    """Structured verifier output for one answer, before reconciliation with exact matching."""
    brand_mentioned: bool = Field(False, description="True if the brand appears anywhere in the response")
    brand_position: Optional[str] = Field(
        None, description="'top_3', 'mentioned_not_top' or 'not_mentioned'"
    )
    brand_exact_position: Optional[int] = Field(
        None, description="Number in a numbered list, otherwise order of appearance; null if not mentioned"
    )
    brand_sentiment: Optional[str] = Field(None, description="'recommended', 'neutral' or 'negative'")
    brand_description: Optional[str] = Field(
        None, description="One sentence on how the response portrays the brand, null if not mentioned"
    )
    competitors_mentioned: List[str] = Field(default_factory=list, description="Competitor names found")
    competitors_in_top_3: List[str] = Field(
        default_factory=list, description="Competitors explicitly recommended as top choices"
    )
    other_brands_mentioned: List[str] = Field(
        default_factory=list, description="Every other brand that is neither the brand nor a competitor"
    )
    response_type: Optional[str] = Field(
        None, description="'list_recommendations', 'single_recommendation', 'comparison', 'general_advice' or 'unclear'"
    )

    @field_validator("competitors_mentioned", "competitors_in_top_3", "other_brands_mentioned", mode="before")
    @classmethod
    def coerce_names(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [str(item).strip() for item in value if isinstance(item, (str, int)) and str(item).strip()]


class AccuracyVerdict(BaseModel):
    """Structured verifier output comparing an AI description with the brand's own."""
    accuracy: Literal["accurate", "partially_accurate", "inaccurate"] = Field(
        description="How well the AI description captures the product's purpose and audience"
    )
    issue: Optional[str] = Field(None, description="Brief explanation of any mismatch, null if accurate")


class SourceResult(BaseModel):
    """Per-provider roll-up of all analyses."""
    source: str
    mentioned: bool = False
    position: PositionBucket = "not_found"
    sentiment: Optional[Sentiment] = None
    description: Optional[str] = None
    description_accuracy: DescriptionAccuracy = "not_mentioned"
    description_issue: Optional[str] = None
    mention_count: int = 0
    top_three_count: int = 0
    total_queries: int = 0


class Signal(BaseModel):
    """Human-readable visibility signal derived from aggregated analyses."""
    id: str
    name: str
    status: SignalStatus
    explanation: str
    confidence: SignalConfidence = "observed"
    details: Optional[str] = None


class Action(BaseModel):
    """Prioritised recommendation. A scan always carries exactly three."""
    id: str
    priority: Literal[1, 2, 3]
    title: str
    why: str
    what: str
    category: ActionCategory


class CompetitorResult(BaseModel):
    """Visibility of one competitor (user-supplied or discovered in answers)."""
    name: str
    mentioned: bool = False
    mention_count: int = 0
    top_three_count: int = 0
    total_queries: int = 0
    visibility_level: VisibilityStatus = "not_mentioned"
    description: Optional[str] = None
    outranks_user: bool = False
    is_discovered: bool = False


class DimensionScore(BaseModel):
    """Score restricted to the queries tagged with one dimension."""
    dimension: QueryDimension
    label: str
    score: int = Field(0, ge=0, le=100)
    queries_count: int = 0
    mention_count: int = 0


class ScoreBreakdown(BaseModel):
    mention_rate: int = 0
    avg_position: Optional[float] = None
    top_three_rate: int = 0
    model_consistency: int = 0


class VisibilityScore(BaseModel):
    """Position-weighted visibility score."""
    overall: int = Field(0, ge=0, le=100)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    by_model: Dict[str, int] = Field(default_factory=dict)
    by_dimension: List[DimensionScore] = Field(default_factory=list)


class QueryTestRecord(BaseModel):
    """Per-query outcome across both providers."""
    query: str
    chatgpt: bool = False
    claude: bool = False
    chatgpt_position: Optional[int] = None
    claude_position: Optional[int] = None
    dimension: QueryDimension = QueryDimension.GENERAL
    is_custom: bool = False
    variation_group: Optional[str] = None


class RawQueryResponse(BaseModel):
    """Raw provider answers kept for audit."""
    query: str
    chatgpt_response: Optional[str] = None
    claude_response: Optional[str] = None


class NotMentionedAnalysis(BaseModel):
    """Likely reasons the brand is missing from answers, with suggestions."""
    reasons: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class ScanResult(BaseModel):
    """Complete scan output, serialisable with model_dump()."""
    brand_name: str
    brand_url: str = ""
    category: str = ""
    status: VisibilityStatus = "not_mentioned"
    scan_state: ScanState = "complete"
    visibility_score: VisibilityScore = Field(default_factory=VisibilityScore)
    sources: Dict[str, SourceResult] = Field(default_factory=dict)
    queries_tested: List[QueryTestRecord] = Field(default_factory=list)
    signals: List[Signal] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)
    competitor_results: List[CompetitorResult] = Field(default_factory=list)
    raw_responses: List[RawQueryResponse] = Field(default_factory=list)
    why_not_mentioned: Optional[NotMentionedAnalysis] = None
    runs: int = 1
    errors: List[str] = Field(default_factory=list)
