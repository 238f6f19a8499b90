"""
LangGraph workflow definition for scan orchestration.

Single pass:
  initialize → generate_queries → query_providers → analyze_responses
             → score_results → finalize
Any stage that fails jumps straight to finalize. Enhanced scans run the
whole pass CONSENSUS_RUNS times concurrently and merge the results.
"""

import asyncio
import logging
from typing import Dict, Optional, Union

from langgraph.graph import StateGraph, END
from pydantic import ValidationError

from agents.visibility_orchestrator.consensus import average_scan_results
from agents.visibility_orchestrator.models import ScanOrchestrationState
from agents.visibility_orchestrator.nodes import (
    initialize_scan,
    generate_queries,
    query_providers,
    analyze_responses,
    score_results,
    finalize
)
from config.settings import settings
from models.schemas import EnrichmentContext, ScanInput, ScanResult
from utils.exceptions import InvalidScanInput, ScanAborted

logger = logging.getLogger(__name__)


# Singleton graph instance
_graph = None


def route_after_stage(state: ScanOrchestrationState) -> str:
    """
    Conditional edge: Skip the remaining stages once a stage has failed.
    """
    return "failed" if state.get("failed") else "continue"


def create_scan_orchestration_graph():
    """
    Create the LangGraph workflow for one scan pass.

    Workflow:
    START → initialize → generate_queries → query_providers → analyze_responses
          → score_results → finalize → END
    with a [failed?] edge from every stage before scoring to finalize.
    """
    from langgraph.graph import START

    workflow = StateGraph(ScanOrchestrationState)

    # Add nodes
    workflow.add_node("initialize", initialize_scan)
    workflow.add_node("generate_queries", generate_queries)
    workflow.add_node("query_providers", query_providers)
    workflow.add_node("analyze_responses", analyze_responses)
    workflow.add_node("score_results", score_results)
    workflow.add_node("finalize", finalize)

    # Define edges
    workflow.add_edge(START, "initialize")
    stages = ["initialize", "generate_queries", "query_providers", "analyze_responses", "score_results"]
    for stage, next_stage in zip(stages, stages[1:]):
        workflow.add_conditional_edges(
            stage,
            route_after_stage,
            {
                "continue": next_stage,
                "failed": "finalize"
            }
        )
    workflow.add_edge("score_results", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_scan_orchestration_graph():
    """Get or create the scan orchestration graph."""
    global _graph
    if _graph is None:
        _graph = create_scan_orchestration_graph()
    return _graph


def parse_scan_input(data: Union[ScanInput, Dict]) -> ScanInput:
    """
    Validate raw scan input.

    Raises:
        InvalidScanInput: blank brand name, too many list entries or an
            out-of-range query count
    """
    if isinstance(data, ScanInput):
        return data
    try:
        return ScanInput.model_validate(data)
    except ValidationError as e:
        raise InvalidScanInput(str(e)) from e


async def run_single_scan(
    scan_input: ScanInput,
    enrichment: Optional[EnrichmentContext] = None,
    clients: Optional[Dict[str, object]] = None,
    verifier=None,
    progress_callback=None,
    abort_event: Optional[asyncio.Event] = None
) -> ScanResult:
    """
    Run one scan pass through the orchestration graph.

    Raises:
        ScanAborted: the abort event was set before the pass finished
    """
    graph = get_scan_orchestration_graph()

    # Prepare initial state
    initial_state = {
        "scan_input": scan_input,
        "enrichment": enrichment,
        "clients": clients or {},
        "verifier": verifier,
        "abort_event": abort_event,
        "scan_id": "",
        "phase": "initializing",
        "profile": None,
        "category": scan_input.category,
        "tagged_queries": [],
        "model_responses": {},
        "skipped_providers": [],
        "analysis": {},
        "result": None,
        "errors": [],
        "failed": False,
        "completed": False
    }

    # Execute graph with streaming
    state = initial_state
    async for step_output in graph.astream(initial_state):
        node_name = list(step_output.keys())[0]
        state = step_output[node_name]

        # Progress callbacks
        if progress_callback:
            if node_name == "initialize":
                progress_callback("initializing", "completed", f"Scan {state['scan_id']} started", None)
            elif node_name == "generate_queries":
                count = len(state.get("tagged_queries", []))
                progress_callback("querying", "in_progress", f"Generated {count} queries", None)
            elif node_name == "query_providers":
                answered = sum(
                    1 for responses in state.get("model_responses", {}).values()
                    for response in responses if response is not None
                )
                progress_callback("querying", "completed", f"Received {answered} answers", None)
            elif node_name == "analyze_responses":
                progress_callback("analyzing", "completed", "Responses analyzed", None)
            elif node_name == "score_results":
                if state.get("result") is not None:
                    score = state["result"].visibility_score.overall
                    progress_callback("scoring", "completed", f"Visibility score: {score}", None)
                else:
                    progress_callback("scoring", "error", "Result assembly failed", None)
            elif node_name == "finalize":
                progress_callback(
                    state["phase"],
                    "completed" if state["phase"] == "complete" else "error",
                    f"Scan {state['phase']}",
                    state["result"].model_dump()
                )

    return state["result"]


async def run_scan(
    scan_input: Union[ScanInput, Dict],
    enrichment: Optional[EnrichmentContext] = None,
    clients: Optional[Dict[str, object]] = None,
    verifier=None,
    progress_callback=None,
    abort_event: Optional[asyncio.Event] = None
) -> ScanResult:
    """
    Run a complete brand visibility scan.

    Entry point for the visibility orchestrator.

    Args:
        scan_input: ScanInput or a dict to validate into one
        enrichment: Optional website-analysis context
        clients: Optional provider -> LLMQueryClient mapping (tests inject fakes here);
            when omitted, clients are built from settings
        verifier: Optional LangChain chat model for mention verification; built from
            settings only when `clients` is omitted
        progress_callback: Optional callback function(step, status, message, data)
        abort_event: Optional asyncio.Event; setting it aborts the scan

    Returns:
        ScanResult (merged across runs for enhanced scans)

    Raises:
        InvalidScanInput: the input failed validation
        ScanAborted: the abort event was set
    """
    scan_input = parse_scan_input(scan_input)
    if abort_event is not None and abort_event.is_set():
        raise ScanAborted("Scan aborted before it started")

    if clients is None:
        from agents.ai_model_tester_agent import get_query_clients
        from agents.scorer_analyzer_agent import build_verifier_model

        clients = get_query_clients()
        if verifier is None:
            verifier = build_verifier_model()

    if not scan_input.is_enhanced:
        return await run_single_scan(scan_input, enrichment, clients, verifier, progress_callback, abort_event)

    runs = settings.CONSENSUS_RUNS
    logger.info(f"🚀 Enhanced scan for '{scan_input.brand_name}': {runs} concurrent runs")

    tasks = [
        asyncio.create_task(
            run_single_scan(scan_input, enrichment, clients, verifier, progress_callback, abort_event)
        )
        for _ in range(runs)
    ]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    merged = average_scan_results(list(results))
    logger.info(f"✅ Consensus of {runs} runs: {merged.status}, score {merged.visibility_score.overall}")
    return merged.model_copy(update={"runs": runs})


class ScanOrchestrator:
    """
    Reusable scan runner holding the provider clients and verifier.

    Example:
        orchestrator = ScanOrchestrator()
        result = await orchestrator.scan({"brand_name": "Cal.com", "category": "scheduling software"})
    """

    def __init__(self, clients: Optional[Dict[str, object]] = None, verifier=None, progress_callback=None):
        if clients is None:
            from agents.ai_model_tester_agent import get_query_clients
            from agents.scorer_analyzer_agent import build_verifier_model

            clients = get_query_clients()
            if verifier is None:
                verifier = build_verifier_model()
        self.clients = clients
        self.verifier = verifier
        self.progress_callback = progress_callback

    async def scan(
        self,
        scan_input: Union[ScanInput, Dict],
        enrichment: Optional[EnrichmentContext] = None,
        abort_event: Optional[asyncio.Event] = None
    ) -> ScanResult:
        return await run_scan(
            scan_input,
            enrichment=enrichment,
            clients=self.clients,
            verifier=self.verifier,
            progress_callback=self.progress_callback,
            abort_event=abort_event
        )
