"""
Pydantic models and state for AI model tester.
"""

from typing import Dict, List, Optional, TypedDict


class AIModelTesterState(TypedDict):
    """State for the AI model tester graph."""
    # Input
    queries: List[str]
    providers: List[str]
    clients: Dict[str, object]  # provider -> LLMQueryClient

    # Processing
    active_providers: List[str]  # Configured providers actually queried

    # Output
    model_responses: Dict[str, List[Optional[str]]]  # provider -> answer per query, None when unanswered
    skipped_providers: List[str]

    # Metadata
    errors: List[str]
    completed: bool
