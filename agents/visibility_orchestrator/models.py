"""
State model for the scan orchestration workflow.

One graph run is one scan pass:
initialize → generate queries → query providers → analyze → score → finalize.
"""

from typing import Any, Dict, List, Optional, TypedDict

from agents.query_generator_agent.models import QueryProfile
from models.schemas import EnrichmentContext, ScanInput, ScanResult, TaggedQuery


class ScanOrchestrationState(TypedDict):
    """
    State for a single scan pass.

    Any stage can set `failed`; the graph then jumps to finalize, which
    still assembles a (partial) result.
    """
    # Input
    scan_input: ScanInput
    enrichment: Optional[EnrichmentContext]
    clients: Dict[str, Any]  # provider -> LLMQueryClient
    verifier: Optional[Any]  # LangChain chat model for mention verification
    abort_event: Optional[Any]  # asyncio.Event set by the caller to abort

    # Processing
    scan_id: str
    phase: str  # initializing | querying | analyzing | scoring | complete | failed
    profile: Optional[QueryProfile]
    category: str
    tagged_queries: List[TaggedQuery]
    model_responses: Dict[str, List[Optional[str]]]  # provider -> answer per query
    skipped_providers: List[str]
    analysis: Dict[str, Any]  # scorer analyzer output

    # Output
    result: Optional[ScanResult]

    # Metadata
    errors: List[str]
    failed: bool
    completed: bool
