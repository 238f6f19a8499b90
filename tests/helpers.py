"""
In-process fakes for provider clients and chat models.

No test talks to a real provider: scans get FakeQueryClient instances via
the `clients` argument, LLMQueryClient gets ScriptedChatModel and the
verifier gets StructuredChatModel or FakeListChatModel.
"""

import asyncio
from typing import Callable, List, Optional, Union

from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from models.schemas import MentionAnalysis


class FakeQueryClient:
    """
    Stands in for LLMQueryClient.

    `answers` is either a fixed string, a list consumed in call order, or a
    callable taking the query text.
    """

    def __init__(
        self,
        provider: str,
        answers: Union[str, List[str], Callable[[str], str]] = "",
        delay: float = 0.0,
        error: Optional[Exception] = None,
        configured: bool = True,
        overall_timeout: float = 5.0
    ):
        self.provider = provider
        self.answers = answers
        self.delay = delay
        self.error = error
        self.configured = configured
        self.overall_timeout = overall_timeout
        self.calls: List[str] = []
        self.cancelled = 0

    @property
    def is_configured(self) -> bool:
        return self.configured

    def _answer(self, text: str) -> str:
        if callable(self.answers):
            return self.answers(text)
        if isinstance(self.answers, list):
            return self.answers[(len(self.calls) - 1) % len(self.answers)]
        return self.answers

    async def query(self, text: str) -> str:
        self.calls.append(text)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        if self.error is not None:
            raise self.error
        return self._answer(text)


class ScriptedChatModel:
    """
    Minimal async chat model: each ainvoke consumes the next outcome.

    An outcome is answer text, an exception to raise, or a float meaning
    "sleep this long, then answer 'late'".
    """

    def __init__(self, outcomes: List[Union[str, Exception, float]]):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def ainvoke(self, messages):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, float):
            await asyncio.sleep(outcome)
            return AIMessage(content="late")
        return AIMessage(content=outcome)


class StructuredChatModel(ScriptedChatModel):
    """
    Chat model whose structured-output runnable returns the given verdicts
    in order. Raw ainvoke calls fall through to ScriptedChatModel.
    """

    def __init__(self, verdicts: List[object], outcomes: Optional[List[Union[str, Exception, float]]] = None):
        super().__init__(outcomes or ["{}"])
        self.verdicts = list(verdicts)
        self.schemas = []

    def with_structured_output(self, schema):
        self.schemas.append(schema)
        return RunnableLambda(lambda messages: self.verdicts.pop(0))


def ranked_answer(*brands: str) -> str:
    """A numbered recommendation list naming the brands in order."""
    lines = ["Here are some good options:"]
    for index, brand in enumerate(brands, start=1):
        lines.append(f"{index}. {brand} - a popular choice")
    return "\n".join(lines)


def analysis(
    mentioned: bool = True,
    rank: Optional[int] = 1,
    confidence: float = 0.9,
    **fields
) -> MentionAnalysis:
    """Build a MentionAnalysis with consistent position fields."""
    if not mentioned:
        return MentionAnalysis(confidence=confidence, **fields)
    position = "top_3" if rank is not None and rank <= 3 else "mentioned"
    return MentionAnalysis(
        mentioned=True,
        position=fields.pop("position", position),
        exact_position=rank,
        confidence=confidence,
        **fields
    )
