"""
Node functions for the scorer analyzer LangGraph workflow.
"""

import asyncio
import logging

from agents.scorer_analyzer_agent.actions import generate_actions
from agents.scorer_analyzer_agent.analyzer import analyze, check_description_accuracy
from agents.scorer_analyzer_agent.models import ScorerAnalyzerState
from agents.scorer_analyzer_agent.scoring import (
    analyze_why_not_mentioned,
    calculate_visibility_score,
    compile_competitor_results,
    compile_source_result,
    determine_overall_status
)
from agents.scorer_analyzer_agent.signals import detect_signals
from models.schemas import QueryTestRecord

logger = logging.getLogger(__name__)

# Providers always reported, answered or not
SCORED_PROVIDERS = ("chatgpt", "claude")


def initialize_analysis(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Align every provider's answers with the query list."""
    logger.info("🔍 Initializing response analysis...")

    query_count = len(state.get("tagged_queries", []))
    model_responses = dict(state.get("model_responses", {}))
    for provider in SCORED_PROVIDERS:
        responses = list(model_responses.get(provider) or [])
        # Missing trailing answers count as unanswered
        model_responses[provider] = (responses + [None] * query_count)[:query_count]

    state["model_responses"] = model_responses
    state["analyses"] = {}
    logger.info(f"Analyzing {query_count} queries across {len(SCORED_PROVIDERS)} providers")
    return state


async def analyze_responses(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Analyze every answer of every provider concurrently."""
    logger.info("📊 Analyzing model responses...")

    tagged_queries = state.get("tagged_queries", [])
    brand_name = state["brand_name"]
    competitors = state.get("all_competitors", [])
    verifier = state.get("verifier")

    async def analyze_provider(provider):
        responses = state["model_responses"][provider]
        return await asyncio.gather(*(
            analyze(response, brand_name, competitors, tagged.query, verifier=verifier)
            for response, tagged in zip(responses, tagged_queries)
        ))

    results = await asyncio.gather(*(analyze_provider(provider) for provider in SCORED_PROVIDERS))
    state["analyses"] = {provider: list(analyses) for provider, analyses in zip(SCORED_PROVIDERS, results)}

    for provider, analyses in state["analyses"].items():
        mentions = sum(1 for analysis in analyses if analysis.mentioned)
        valid = sum(1 for analysis in analyses if analysis.is_valid)
        logger.info(f"  ✓ {provider}: {mentions} mentions in {valid} analysed answers")
    return state


def score_results(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Score, classify and roll up per-source and competitor results."""
    logger.info("🎯 Calculating visibility score...")

    tagged_queries = state.get("tagged_queries", [])
    chatgpt = state["analyses"]["chatgpt"]
    claude = state["analyses"]["claude"]

    state["visibility_score"] = calculate_visibility_score(chatgpt, claude, tagged_queries)
    state["status"] = determine_overall_status(chatgpt, claude)
    sources = {
        provider: compile_source_result(provider, state["analyses"][provider], len(tagged_queries))
        for provider in SCORED_PROVIDERS
    }
    state["sources"] = sources

    user_is_top_three = any(source.position == "top_3" for source in sources.values())
    state["competitor_results"] = compile_competitor_results(
        chatgpt,
        claude,
        state.get("all_competitors", []),
        user_is_top_three,
        state.get("competitors", [])
    )

    state["queries_tested"] = [
        QueryTestRecord(
            query=tagged.query,
            chatgpt=chatgpt_analysis.mentioned,
            claude=claude_analysis.mentioned,
            chatgpt_position=chatgpt_analysis.exact_position,
            claude_position=claude_analysis.exact_position,
            dimension=tagged.dimension,
            is_custom=tagged.is_custom,
            variation_group=tagged.variation_group
        )
        for tagged, chatgpt_analysis, claude_analysis in zip(tagged_queries, chatgpt, claude)
    ]

    logger.info(f"✓ Status: {state['status']}, score {state['visibility_score'].overall}")
    return state


async def check_descriptions(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Compare each source's description of the brand with the brand's own."""
    logger.info("📝 Checking description accuracy...")

    sources = state["sources"]
    user_description = state.get("user_description", "")
    verifier = state.get("verifier")

    checks = await asyncio.gather(*(
        check_description_accuracy(sources[provider].description, user_description, verifier=verifier)
        for provider in SCORED_PROVIDERS
    ))
    state["sources"] = {
        provider: sources[provider].model_copy(update={
            "description_accuracy": accuracy,
            "description_issue": issue
        })
        for provider, (accuracy, issue) in zip(SCORED_PROVIDERS, checks)
    }
    return state


def build_insights(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Derive signals, the action plan and, for weak results, the explanation."""
    logger.info("💡 Building signals and actions...")

    brand_name = state["brand_name"]
    competitors = state.get("competitors", [])
    sources = state["sources"]
    status = state["status"]

    signals = detect_signals(
        state["analyses"]["chatgpt"],
        state["analyses"]["claude"],
        state["competitor_results"],
        brand_name,
        state.get("user_description", ""),
        competitors
    )
    ai_description = sources["chatgpt"].description or sources["claude"].description

    state["signals"] = signals
    state["actions"] = generate_actions(
        signals,
        status,
        state["competitor_results"],
        ai_description,
        brand_name,
        competitors,
        user_description=state.get("user_description", ""),
        sources=sources
    )
    if status != "recommended":
        state["why_not_mentioned"] = analyze_why_not_mentioned(
            status,
            signals,
            state["competitor_results"],
            state.get("enrichment"),
            brand_name,
            state.get("category", "")
        )

    logger.info(f"✓ {len(signals)} signals, {len(state['actions'])} actions")
    return state


def finalize(state: ScorerAnalyzerState) -> ScorerAnalyzerState:
    """Node: Finalize and mark as completed."""
    logger.info("✅ Scorer analysis workflow complete")
    state["completed"] = True
    return state
