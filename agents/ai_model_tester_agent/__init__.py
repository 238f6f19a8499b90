"""
AI Model Tester Agent

A modular LangGraph-based agent for asking scan queries to multiple LLM providers concurrently.
"""

from agents.ai_model_tester_agent.graph import run_ai_model_testing_workflow
from agents.ai_model_tester_agent.utils import LLMQueryClient, get_query_clients, query_provider_batch


__all__ = [
    "run_ai_model_testing_workflow",
    "LLMQueryClient",
    "get_query_clients",
    "query_provider_batch"
]
