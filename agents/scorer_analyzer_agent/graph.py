"""
LangGraph workflow definition for scorer analysis.
"""

from typing import Dict, List, Optional
from langgraph.graph import StateGraph, END

from agents.scorer_analyzer_agent.models import ScorerAnalyzerState
from agents.scorer_analyzer_agent.nodes import (
    initialize_analysis,
    analyze_responses,
    score_results,
    check_descriptions,
    build_insights,
    finalize
)
from models.schemas import EnrichmentContext, TaggedQuery


# Singleton graph instance
_graph = None


def create_scorer_analyzer_graph():
    """Create the LangGraph workflow for scorer analysis."""
    from langgraph.graph import START

    workflow = StateGraph(ScorerAnalyzerState)

    # Add nodes
    workflow.add_node("initialize", initialize_analysis)
    workflow.add_node("analyze", analyze_responses)
    workflow.add_node("score", score_results)
    workflow.add_node("check_descriptions", check_descriptions)
    workflow.add_node("build_insights", build_insights)
    workflow.add_node("finalize", finalize)

    # Define edges (workflow)
    workflow.add_edge(START, "initialize")
    workflow.add_edge("initialize", "analyze")
    workflow.add_edge("analyze", "score")
    workflow.add_edge("score", "check_descriptions")
    workflow.add_edge("check_descriptions", "build_insights")
    workflow.add_edge("build_insights", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_scorer_analyzer_graph():
    """Get or create the scorer analyzer graph."""
    global _graph
    if _graph is None:
        _graph = create_scorer_analyzer_graph()
    return _graph


async def run_scorer_analysis_workflow(
    brand_name: str,
    tagged_queries: List[TaggedQuery],
    model_responses: Dict[str, List[Optional[str]]],
    competitors: Optional[List[str]] = None,
    all_competitors: Optional[List[str]] = None,
    user_description: str = "",
    category: str = "",
    enrichment: Optional[EnrichmentContext] = None,
    verifier=None,
    progress_callback=None
):
    """
    Run the scorer analysis workflow with optional progress streaming.

    Entry point for the scorer analyzer agent.

    Args:
        brand_name: Brand to look for
        tagged_queries: Queries asked, in order
        model_responses: provider -> answer per query (None when unanswered)
        competitors: User-supplied competitors
        all_competitors: Competitors to look for (defaults to `competitors`)
        user_description: The brand's own description
        category: Category label used in explanations
        enrichment: Optional website-analysis context
        verifier: Optional LangChain chat model for structured mention analysis
        progress_callback: Optional callback function(step, status, message, data) for progress updates

    Returns:
        Dictionary with analyses, visibility_score, status, sources,
        competitor_results, queries_tested, signals, actions,
        why_not_mentioned and errors
    """
    graph = get_scorer_analyzer_graph()
    competitors = list(competitors or [])

    # Prepare initial state
    initial_state = {
        "brand_name": brand_name,
        "user_description": user_description,
        "category": category,
        "competitors": competitors,
        "all_competitors": list(all_competitors) if all_competitors is not None else competitors,
        "tagged_queries": list(tagged_queries),
        "model_responses": model_responses,
        "enrichment": enrichment,
        "verifier": verifier,
        "analyses": {},
        "visibility_score": None,
        "status": "not_mentioned",
        "sources": {},
        "competitor_results": [],
        "queries_tested": [],
        "signals": [],
        "actions": [],
        "why_not_mentioned": None,
        "errors": [],
        "completed": False
    }

    # Execute graph with streaming
    state = initial_state
    async for step_output in graph.astream(initial_state):
        node_name = list(step_output.keys())[0]
        state = step_output[node_name]

        # Progress callbacks
        if progress_callback:
            if node_name == "analyze":
                progress_callback("analyzing", "in_progress", "Analyzing responses for mentions...", None)
            elif node_name == "score":
                score = state["visibility_score"].overall
                progress_callback("scoring", "in_progress", f"Visibility score: {score}", None)
            elif node_name == "finalize":
                progress_callback("scoring", "completed", "Scoring complete", None)

    return {
        "analyses": state.get("analyses", {}),
        "visibility_score": state.get("visibility_score"),
        "status": state.get("status", "not_mentioned"),
        "sources": state.get("sources", {}),
        "competitor_results": state.get("competitor_results", []),
        "queries_tested": state.get("queries_tested", []),
        "signals": state.get("signals", []),
        "actions": state.get("actions", []),
        "why_not_mentioned": state.get("why_not_mentioned"),
        "errors": state.get("errors", [])
    }
