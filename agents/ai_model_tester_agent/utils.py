"""
Utility functions for AI model tester.

Wraps the LangChain chat models behind LLMQueryClient: one client per
provider, per-call timeout, a single retry and rate-limit detection.
"""

import asyncio
import logging
from functools import wraps
from typing import Dict, List, Optional

from langchain_core.messages import SystemMessage, HumanMessage

from config.settings import settings
from utils.exceptions import (
    ProviderError,
    ProviderRateLimited,
    ProviderTimeout,
    ProviderUnconfigured
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant. The user is looking for recommendations and advice. "
    "Give practical, specific suggestions based on their needs. Mention specific brands, "
    "companies, products, or services by name when relevant. Be concise but helpful. "
    "Answer questions about any industry - including insurance, healthcare, finance, retail, "
    "technology, and more. If you don't have specific knowledge about something, provide "
    "general guidance."
)

RATE_LIMIT_TERMS = ('rate limit', 'too many requests', '429', 'quota')


def is_rate_limit_error(error: BaseException) -> bool:
    """True when a provider error message looks like throttling."""
    error_msg = str(error).lower()
    return any(term in error_msg for term in RATE_LIMIT_TERMS)


def retry_with_backoff(max_retries=None, initial_delay=None):
    """
    Decorator for retrying async provider calls with linear backoff.

    Rate-limited and unconfigured calls are never retried. The delay grows
    linearly with the attempt number.
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            retries = settings.MAX_RETRIES if max_retries is None else max_retries
            delay = settings.RETRY_DELAY if initial_delay is None else initial_delay
            last_exception = None

            for attempt in range(retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (ProviderRateLimited, ProviderUnconfigured):
                    raise
                except ProviderError as e:
                    last_exception = e
                    if attempt < retries:
                        wait_time = delay * (attempt + 1)
                        logger.warning(
                            f"Attempt {attempt + 1}/{retries + 1} failed: {str(e)}. "
                            f"Retrying in {wait_time}s..."
                        )
                        await asyncio.sleep(wait_time)
                    else:
                        logger.error(f"All {retries + 1} attempts failed: {str(e)}")

            raise last_exception
        return wrapper
    return decorator


def build_chat_model(provider: str, temperature: Optional[float] = None, max_tokens: Optional[int] = None):
    """
    Get the LangChain chat model for a provider.

    Args:
        provider: "chatgpt" or "claude"
        temperature: Sampling temperature, defaults to QUERY_TEMPERATURE
        max_tokens: Answer length cap, defaults to QUERY_MAX_TOKENS

    Returns:
        ChatOpenAI or ChatAnthropic instance

    Raises:
        ProviderUnconfigured: when the provider's API key is missing
    """
    temperature = settings.QUERY_TEMPERATURE if temperature is None else temperature
    max_tokens = max_tokens or settings.QUERY_MAX_TOKENS

    if provider == "chatgpt":
        if not settings.OPENAI_API_KEY:
            raise ProviderUnconfigured(provider)
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(
            model=settings.CHATGPT_MODEL,
            openai_api_key=settings.OPENAI_API_KEY,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0
        )

    if provider == "claude":
        if not settings.ANTHROPIC_API_KEY:
            raise ProviderUnconfigured(provider)
        from langchain_anthropic import ChatAnthropic
        return ChatAnthropic(
            model=settings.CLAUDE_MODEL,
            anthropic_api_key=settings.ANTHROPIC_API_KEY,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0
        )

    raise ProviderError(provider, f"Unknown provider: {provider}")


def _provider_configured(provider: str) -> bool:
    if provider == "chatgpt":
        return bool(settings.OPENAI_API_KEY)
    if provider == "claude":
        return bool(settings.ANTHROPIC_API_KEY)
    return False


def _overall_timeout(provider: str) -> float:
    if provider == "claude":
        return settings.CLAUDE_OVERALL_TIMEOUT
    return settings.CHATGPT_OVERALL_TIMEOUT


def response_text(content) -> str:
    """Flatten a LangChain message content (string or content blocks) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content or "")


class LLMQueryClient:
    """
    Sends one recommendation-seeking question to one provider.

    The chat model is built lazily so a missing credential surfaces as
    ProviderUnconfigured at call time. Tests inject a fake chat model.
    """

    def __init__(
        self,
        provider: str,
        chat_model=None,
        timeout: Optional[float] = None,
        overall_timeout: Optional[float] = None
    ):
        self.provider = provider
        self._chat_model = chat_model
        self.timeout = timeout or settings.QUERY_TIMEOUT
        self.overall_timeout = overall_timeout or _overall_timeout(provider)

    @property
    def is_configured(self) -> bool:
        return self._chat_model is not None or _provider_configured(self.provider)

    @property
    def chat_model(self):
        if self._chat_model is None:
            self._chat_model = build_chat_model(self.provider)
        return self._chat_model

    @retry_with_backoff()
    async def query(self, text: str) -> str:
        """
        Ask the provider a question.

        Returns:
            Non-empty answer text

        Raises:
            ProviderUnconfigured, ProviderTimeout, ProviderRateLimited, ProviderError
        """
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=text)
        ]
        try:
            response = await asyncio.wait_for(self.chat_model.ainvoke(messages), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ProviderTimeout(self.provider, f"No answer within {self.timeout}s")
        except ProviderError:
            raise
        except Exception as e:
            if is_rate_limit_error(e):
                raise ProviderRateLimited(self.provider, str(e)) from e
            raise ProviderError(self.provider, str(e)) from e

        answer = response_text(response.content).strip()
        if not answer:
            raise ProviderError(self.provider, "Empty response")
        return answer


def get_query_clients(providers: Optional[List[str]] = None) -> Dict[str, LLMQueryClient]:
    """Build one client per provider name (defaults to SCAN_PROVIDERS)."""
    return {provider: LLMQueryClient(provider) for provider in (providers or settings.SCAN_PROVIDERS)}


async def query_provider_batch(client: LLMQueryClient, queries: List[str]) -> List[Optional[str]]:
    """
    Ask every query concurrently under the provider's overall timeout.

    Calls still running when the overall timeout expires are cancelled.
    Failed or cancelled queries yield None at their index.
    """
    if not queries:
        return []

    tasks = [asyncio.create_task(client.query(query)) for query in queries]
    try:
        done, pending = await asyncio.wait(tasks, timeout=client.overall_timeout)
        if pending:
            logger.warning(f"⚠️ {client.provider}: {len(pending)} queries still running after "
                           f"{client.overall_timeout}s, cancelling")
    finally:
        unfinished = [task for task in tasks if not task.done()]
        for task in unfinished:
            task.cancel()
        if unfinished:
            await asyncio.gather(*unfinished, return_exceptions=True)

    responses: List[Optional[str]] = []
    for query, task in zip(queries, tasks):
        if task.cancelled():
            responses.append(None)
            continue
        error = task.exception()
        if error is not None:
            logger.error(f"❌ {client.provider} failed on '{query[:60]}': {error}")
            responses.append(None)
        else:
            responses.append(task.result())
    return responses
