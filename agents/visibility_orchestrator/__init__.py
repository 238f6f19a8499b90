"""
Visibility Orchestrator

A modular LangGraph-based agent that runs a full brand visibility scan:
query generation, provider testing, analysis and scoring, with consensus
merging for enhanced scans.
"""

from agents.visibility_orchestrator.graph import (
    run_scan,
    run_single_scan,
    parse_scan_input,
    ScanOrchestrator
)
from agents.visibility_orchestrator.consensus import average_scan_results


__all__ = [
    "run_scan",
    "run_single_scan",
    "parse_scan_input",
    "ScanOrchestrator",
    "average_scan_results"
]
