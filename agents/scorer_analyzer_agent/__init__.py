"""
Scorer Analyzer Agent

A modular LangGraph-based agent for analysing LLM answers and scoring brand visibility.
"""

from agents.scorer_analyzer_agent.graph import run_scorer_analysis_workflow
from agents.scorer_analyzer_agent.analyzer import analyze, check_description_accuracy, score_response_quality
from agents.scorer_analyzer_agent.signals import detect_signals
from agents.scorer_analyzer_agent.actions import generate_actions
from agents.scorer_analyzer_agent.scoring import (
    calculate_visibility_score,
    determine_overall_status,
    compile_source_result,
    compile_competitor_results,
    analyze_why_not_mentioned
)
from agents.scorer_analyzer_agent.utils import build_verifier_model


__all__ = [
    "run_scorer_analysis_workflow",
    "analyze",
    "check_description_accuracy",
    "score_response_quality",
    "detect_signals",
    "generate_actions",
    "calculate_visibility_score",
    "determine_overall_status",
    "compile_source_result",
    "compile_competitor_results",
    "analyze_why_not_mentioned",
    "build_verifier_model"
]
