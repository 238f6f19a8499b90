"""
LangGraph workflow definition for AI model testing.
"""

from typing import Dict, List, Optional
from langgraph.graph import StateGraph, END

from agents.ai_model_tester_agent.models import AIModelTesterState
from agents.ai_model_tester_agent.nodes import (
    initialize_responses,
    query_providers,
    finalize
)
from config.settings import settings


# Singleton graph instance
_graph = None


def create_ai_model_tester_graph():
    """Create the LangGraph workflow for AI model testing."""
    from langgraph.graph import START

    workflow = StateGraph(AIModelTesterState)

    # Add nodes
    workflow.add_node("initialize", initialize_responses)
    workflow.add_node("query_providers", query_providers)
    workflow.add_node("finalize", finalize)

    # Define edges (workflow)
    workflow.add_edge(START, "initialize")
    workflow.add_edge("initialize", "query_providers")
    workflow.add_edge("query_providers", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_ai_model_tester_graph():
    """Get or create the AI model tester graph."""
    global _graph
    if _graph is None:
        _graph = create_ai_model_tester_graph()
    return _graph


async def run_ai_model_testing_workflow(
    queries: List[str],
    providers: Optional[List[str]] = None,
    clients: Optional[Dict[str, object]] = None,
    progress_callback=None
):
    """
    Run the AI model testing workflow with optional progress streaming.

    Entry point for the AI model tester agent.

    Args:
        queries: Query strings to ask every provider
        providers: Provider names (defaults to SCAN_PROVIDERS, or the keys of `clients`)
        clients: Optional provider -> LLMQueryClient mapping (tests inject fakes here)
        progress_callback: Optional callback function(step, status, message, data) for progress updates

    Returns:
        Dictionary with model_responses, skipped_providers and errors
    """
    graph = get_ai_model_tester_graph()
    providers = list(providers or (clients.keys() if clients else settings.SCAN_PROVIDERS))

    # Prepare initial state
    initial_state = {
        "queries": queries,
        "providers": providers,
        "clients": clients or {},
        "active_providers": [],
        "model_responses": {},
        "skipped_providers": [],
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
            if node_name == "initialize":
                active = len(state.get("active_providers", []))
                progress_callback("testing", "in_progress", f"Querying {active} providers...", None)
            elif node_name == "query_providers":
                total_responses = sum(
                    1 for responses in state.get("model_responses", {}).values()
                    for response in responses if response is not None
                )
                expected = len(queries) * len(state.get("active_providers", []))
                progress_callback("testing", "in_progress", f"Received {total_responses}/{expected} responses", None)
            elif node_name == "finalize":
                progress_callback("testing", "completed", "Model testing complete", None)

    return {
        "model_responses": state.get("model_responses", {}),
        "skipped_providers": state.get("skipped_providers", []),
        "errors": state.get("errors", [])
    }
