"""
Node functions for the AI model tester LangGraph workflow.
"""

import asyncio
import logging

from agents.ai_model_tester_agent.models import AIModelTesterState
from agents.ai_model_tester_agent.utils import get_query_clients, query_provider_batch

logger = logging.getLogger(__name__)


def initialize_responses(state: AIModelTesterState) -> AIModelTesterState:
    """Node: Initialize response storage and drop unconfigured providers."""
    logger.info("🚀 Initializing AI model testing...")

    providers = state.get("providers", [])
    queries = state.get("queries", [])
    clients = state.get("clients") or get_query_clients(providers)

    active = []
    skipped = []
    for provider in providers:
        client = clients.get(provider)
        if client is not None and client.is_configured:
            active.append(provider)
        else:
            skipped.append(provider)
            logger.info(f"⚠️ Skipping {provider}: API key not configured")

    state["clients"] = clients
    state["active_providers"] = active
    state["skipped_providers"] = skipped
    state["model_responses"] = {provider: [None] * len(queries) for provider in providers}

    logger.info(f"Testing {len(queries)} queries across {len(active)} providers")
    return state


async def query_providers(state: AIModelTesterState) -> AIModelTesterState:
    """Node: Query every active provider concurrently, all queries at once per provider."""
    logger.info("🧪 Querying providers...")

    queries = state.get("queries", [])
    active = state.get("active_providers", [])
    clients = state["clients"]
    model_responses = state.get("model_responses", {})
    errors = state.get("errors", [])

    if not queries or not active:
        logger.info("Nothing to query")
        return state

    results = await asyncio.gather(
        *(query_provider_batch(clients[provider], queries) for provider in active)
    )

    for provider, responses in zip(active, results):
        model_responses[provider] = responses
        answered = sum(1 for response in responses if response is not None)
        if answered < len(queries):
            error_msg = f"{provider}: {len(queries) - answered}/{len(queries)} queries unanswered"
            errors.append(error_msg)
            logger.warning(f"⚠️ {error_msg}")
        logger.info(f"  ✓ {provider}: {answered} responses")

    state["model_responses"] = model_responses
    state["errors"] = errors
    return state


def finalize(state: AIModelTesterState) -> AIModelTesterState:
    """Node: Finalize and mark as completed."""
    logger.info("✅ AI model testing workflow complete")
    state["completed"] = True
    return state
