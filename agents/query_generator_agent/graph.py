"""
LangGraph workflow definition for query generation.
"""

from typing import List, Optional
from langgraph.graph import StateGraph, END

from agents.query_generator_agent.models import QueryGeneratorState, QueryProfile
from agents.query_generator_agent.nodes import (
    resolve_profile,
    build_core_tiers,
    build_elevated_tiers,
    build_backup_tier,
    assemble_queries,
    finalize
)
from config.settings import settings
from models.schemas import TaggedQuery


# Singleton graph instance
_graph = None


def should_build_elevated(state: QueryGeneratorState) -> str:
    """Conditional edge: Elevated budgets get variations and enhanced queries."""
    if state["budget"] > settings.ENHANCED_SCAN_THRESHOLD:
        return "build_elevated_tiers"
    return "build_backup_tier"


def create_query_generator_graph():
    """Create the LangGraph workflow for query generation."""
    from langgraph.graph import START

    workflow = StateGraph(QueryGeneratorState)

    # Add nodes
    workflow.add_node("resolve_profile", resolve_profile)
    workflow.add_node("build_core_tiers", build_core_tiers)
    workflow.add_node("build_elevated_tiers", build_elevated_tiers)
    workflow.add_node("build_backup_tier", build_backup_tier)
    workflow.add_node("assemble_queries", assemble_queries)
    workflow.add_node("finalize", finalize)

    # Define edges (workflow)
    workflow.add_edge(START, "resolve_profile")
    workflow.add_edge("resolve_profile", "build_core_tiers")

    # Conditional: Elevated tiers only above the threshold
    workflow.add_conditional_edges(
        "build_core_tiers",
        should_build_elevated,
        {
            "build_elevated_tiers": "build_elevated_tiers",
            "build_backup_tier": "build_backup_tier"
        }
    )

    workflow.add_edge("build_elevated_tiers", "build_backup_tier")
    workflow.add_edge("build_backup_tier", "assemble_queries")
    workflow.add_edge("assemble_queries", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_query_generator_graph():
    """Get or create the query generator graph."""
    global _graph
    if _graph is None:
        _graph = create_query_generator_graph()
    return _graph


def run_query_generation_workflow(
    profile: QueryProfile,
    budget: int,
    custom_queries: Optional[List[str]] = None,
    progress_callback=None
):
    """
    Run the query generation workflow with optional progress streaming.

    Entry point for the query generator agent.

    Args:
        profile: Brand profile (see build_query_profile)
        budget: Number of generated queries, exactly
        custom_queries: User questions appended verbatim after the generated ones
        progress_callback: Optional callback function(step, status, message, data) for progress updates

    Returns:
        Dictionary with queries, product_type, industry, category and errors
    """
    if budget < 1:
        raise ValueError(f"Query budget must be positive, got {budget}")

    graph = get_query_generator_graph()

    # Prepare initial state
    initial_state = {
        "profile": profile,
        "budget": budget,
        "custom_queries": list(custom_queries or []),
        "product_type": "",
        "industry": "",
        "category": "",
        "fields": {},
        "context": {},
        "tiers": {},
        "queries": [],
        "errors": [],
        "completed": False
    }

    # Execute graph with streaming
    state = initial_state
    for step_output in graph.stream(initial_state):
        node_name = list(step_output.keys())[0]
        state = step_output[node_name]

        # Progress callbacks
        if progress_callback:
            if node_name == "resolve_profile":
                progress_callback("queries", "in_progress", "Generating queries...", None)
            elif node_name == "assemble_queries":
                num_generated = len(state.get("queries", []))
                progress_callback("queries", "in_progress", f"Generated {num_generated} queries", None)
            elif node_name == "finalize":
                progress_callback("queries", "completed", "Query generation complete", None)

    return {
        "queries": state.get("queries", []),
        "product_type": state.get("product_type", ""),
        "industry": state.get("industry", ""),
        "category": state.get("category", ""),
        "errors": state.get("errors", [])
    }


def generate_tagged_queries(profile: QueryProfile, budget: int) -> List[TaggedQuery]:
    """
    Generate exactly `budget` unique, dimension-tagged queries for a profile.

    Deterministic: the same profile and budget always give the same list.
    """
    return run_query_generation_workflow(profile, budget)["queries"]
