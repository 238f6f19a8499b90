"""
State for the scorer analyzer graph.
"""

from typing import Any, Dict, List, Optional, TypedDict

from models.schemas import (
    Action,
    CompetitorResult,
    EnrichmentContext,
    MentionAnalysis,
    NotMentionedAnalysis,
    QueryTestRecord,
    Signal,
    SourceResult,
    TaggedQuery,
    VisibilityScore
)


class ScorerAnalyzerState(TypedDict):
    """State for the scorer analyzer graph."""
    # Input
    brand_name: str
    user_description: str
    category: str
    competitors: List[str]  # User-supplied
    all_competitors: List[str]  # User-supplied + enrichment-discovered
    tagged_queries: List[TaggedQuery]
    model_responses: Dict[str, List[Optional[str]]]  # provider -> answer per query
    enrichment: Optional[EnrichmentContext]
    verifier: Optional[Any]  # LangChain chat model, None for heuristic analysis

    # Processing
    analyses: Dict[str, List[MentionAnalysis]]  # provider -> analysis per query

    # Output
    visibility_score: Optional[VisibilityScore]
    status: str
    sources: Dict[str, SourceResult]
    competitor_results: List[CompetitorResult]
    queries_tested: List[QueryTestRecord]
    signals: List[Signal]
    actions: List[Action]
    why_not_mentioned: Optional[NotMentionedAnalysis]

    # Metadata
    errors: List[str]
    completed: bool
