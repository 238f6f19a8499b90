"""
Query Generator Agent

A modular LangGraph-based agent for generating dimension-tagged brand visibility queries.
"""

from agents.query_generator_agent.graph import generate_tagged_queries, run_query_generation_workflow
from agents.query_generator_agent.models import QueryProfile
from agents.query_generator_agent.utils import build_query_profile


__all__ = [
    "generate_tagged_queries",
    "run_query_generation_workflow",
    "QueryProfile",
    "build_query_profile"
]
