"""
Node functions for the scan orchestration workflow.

Each stage delegates to one agent workflow. A stage that fails for an
unexpected reason marks the scan failed instead of raising, so the caller
still gets a partial result; only an abort propagates.
"""

import asyncio
import logging
from typing import Optional

from agents.visibility_orchestrator.models import ScanOrchestrationState
from models.schemas import RawQueryResponse, ScanResult, VisibilityScore
from utils.exceptions import ScanAborted
from utils.helpers import dedupe_names, generate_scan_id

logger = logging.getLogger(__name__)


def check_abort(state: ScanOrchestrationState):
    """Raise ScanAborted when the caller has set the abort event."""
    abort_event = state.get("abort_event")
    if abort_event is not None and abort_event.is_set():
        raise ScanAborted(f"Scan {state.get('scan_id', '')} aborted during {state.get('phase', 'startup')}")


async def run_abortable(coro, abort_event: Optional[asyncio.Event], stage: str):
    """
    Await `coro` unless the abort event fires first.

    On abort (or cancellation of the caller) the work is cancelled and
    awaited before returning, so no provider call outlives the scan.
    """
    if abort_event is None:
        return await coro

    work = asyncio.ensure_future(coro)
    waiter = asyncio.ensure_future(abort_event.wait())
    try:
        done, _ = await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [task for task in (work, waiter) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if work in done:
        return work.result()
    raise ScanAborted(f"Scan aborted during {stage}")


def mark_failed(state: ScanOrchestrationState, stage: str, error: Exception) -> ScanOrchestrationState:
    error_msg = f"{stage} failed: {str(error)}"
    logger.error(f"❌ {error_msg}")
    state["errors"].append(error_msg)
    state["failed"] = True
    return state


def assemble_result(state: ScanOrchestrationState, scan_state: str) -> ScanResult:
    """Build the ScanResult from whatever the completed stages produced."""
    from agents.scorer_analyzer_agent.actions import default_action_plan

    scan_input = state["scan_input"]
    analysis = state.get("analysis") or {}
    tagged_queries = state.get("tagged_queries", [])
    model_responses = state.get("model_responses", {})

    def answer(provider: str, index: int) -> Optional[str]:
        responses = model_responses.get(provider) or []
        return responses[index] if index < len(responses) else None

    raw_responses = [
        RawQueryResponse(
            query=tagged.query,
            chatgpt_response=answer("chatgpt", index),
            claude_response=answer("claude", index)
        )
        for index, tagged in enumerate(tagged_queries)
    ]

    status = analysis.get("status", "not_mentioned")
    actions = analysis.get("actions") or default_action_plan(
        status,
        scan_input.brand_name,
        dedupe_names(scan_input.competitors, exclude=scan_input.brand_name)
    )

    return ScanResult(
        brand_name=scan_input.brand_name,
        brand_url=scan_input.brand_url,
        category=state.get("category") or scan_input.category,
        status=status,
        scan_state=scan_state,
        visibility_score=analysis.get("visibility_score") or VisibilityScore(),
        sources=analysis.get("sources", {}),
        queries_tested=analysis.get("queries_tested", []),
        signals=analysis.get("signals", []),
        actions=actions,
        competitor_results=analysis.get("competitor_results", []),
        raw_responses=raw_responses,
        why_not_mentioned=analysis.get("why_not_mentioned"),
        errors=list(state.get("errors", []))
    )


def initialize_scan(state: ScanOrchestrationState) -> ScanOrchestrationState:
    """Node: Assign a scan id and build the query profile."""
    from agents.query_generator_agent import build_query_profile

    state["scan_id"] = generate_scan_id()
    state["phase"] = "initializing"
    check_abort(state)

    scan_input = state["scan_input"]
    logger.info(f"🚀 Starting scan {state['scan_id']} for '{scan_input.brand_name}' "
                f"({scan_input.query_count} queries)")

    try:
        state["profile"] = build_query_profile(scan_input, state.get("enrichment"))
    except Exception as e:
        return mark_failed(state, "Profile preparation", e)

    logger.info(f"✓ Category '{state['profile'].category}', "
                f"{len(state['profile'].competitors)} competitors to track")
    return state


def generate_queries(state: ScanOrchestrationState) -> ScanOrchestrationState:
    """Node: Generate the tagged query battery."""
    from agents.query_generator_agent import run_query_generation_workflow

    check_abort(state)
    scan_input = state["scan_input"]

    try:
        generated = run_query_generation_workflow(
            state["profile"],
            scan_input.query_count,
            custom_queries=scan_input.custom_queries
        )
    except Exception as e:
        return mark_failed(state, "Query generation", e)

    state["tagged_queries"] = generated["queries"]
    state["category"] = scan_input.category or generated["category"]
    state["errors"].extend(generated["errors"])

    logger.info(f"✓ Generated {len(state['tagged_queries'])} queries")
    return state


async def query_providers(state: ScanOrchestrationState) -> ScanOrchestrationState:
    """Node: Ask every configured provider every query."""
    from agents.ai_model_tester_agent import run_ai_model_testing_workflow

    state["phase"] = "querying"
    check_abort(state)

    queries = [tagged.query for tagged in state["tagged_queries"]]
    try:
        tested = await run_abortable(
            run_ai_model_testing_workflow(queries, clients=state.get("clients") or None),
            state.get("abort_event"),
            "querying"
        )
    except ScanAborted:
        raise
    except Exception as e:
        return mark_failed(state, "Provider querying", e)

    state["model_responses"] = tested["model_responses"]
    state["skipped_providers"] = tested["skipped_providers"]
    for provider in tested["skipped_providers"]:
        state["errors"].append(f"{provider}: API key not configured, provider skipped")
    state["errors"].extend(tested["errors"])
    return state


async def analyze_responses(state: ScanOrchestrationState) -> ScanOrchestrationState:
    """Node: Analyze the answers and score the scan."""
    from agents.scorer_analyzer_agent import run_scorer_analysis_workflow

    state["phase"] = "analyzing"
    check_abort(state)

    scan_input = state["scan_input"]
    profile = state["profile"]
    try:
        state["analysis"] = await run_abortable(
            run_scorer_analysis_workflow(
                brand_name=scan_input.brand_name,
                tagged_queries=state["tagged_queries"],
                model_responses=state["model_responses"],
                competitors=dedupe_names(scan_input.competitors, exclude=scan_input.brand_name),
                all_competitors=profile.competitors,
                user_description=scan_input.description,
                category=state.get("category", ""),
                enrichment=state.get("enrichment"),
                verifier=state.get("verifier")
            ),
            state.get("abort_event"),
            "analysis"
        )
    except ScanAborted:
        raise
    except Exception as e:
        return mark_failed(state, "Response analysis", e)

    state["errors"].extend(state["analysis"].get("errors", []))
    return state


def score_results(state: ScanOrchestrationState) -> ScanOrchestrationState:
    """Node: Assemble the scored result."""
    state["phase"] = "scoring"
    check_abort(state)

    try:
        state["result"] = assemble_result(state, "complete")
    except Exception as e:
        return mark_failed(state, "Result assembly", e)

    logger.info(f"✓ {state['result'].brand_name}: {state['result'].status}, "
                f"score {state['result'].visibility_score.overall}")
    return state


def finalize(state: ScanOrchestrationState) -> ScanOrchestrationState:
    """Node: Close the scan, keeping a partial result when a stage failed."""
    if state.get("failed"):
        state["phase"] = "failed"
        state["result"] = assemble_result(state, "failed")
        logger.warning(f"⚠️ Scan {state.get('scan_id', '')} finished with partial results")
    else:
        state["phase"] = "complete"
        state["result"] = state["result"].model_copy(update={"errors": list(state["errors"])})
        logger.info(f"✅ Scan {state.get('scan_id', '')} complete")

    state["completed"] = True
    return state
