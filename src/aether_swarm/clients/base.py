"""Base class for LLM clients.

All LLM provider clients inherit from BaseLLMClient and implement
the normalization methods to convert between provider-specific formats
and the unified types.
"""

import asyncio
import functools
import random
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

from ..exceptions import ProviderUnavailableError, RateLimitError, RetriesExhaustedError
from ..logging import get_logger
from ..tools.base import BaseTool
from ..types import ModelResponse, Turn

logger = get_logger(__name__)

T = TypeVar("T")


def with_retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    max_rate_limit_waits: int = 5,
    jitter: bool = False,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator for retrying async API calls with exponential backoff.

    ProviderUnavailableError is retried with exponential backoff until
    ``max_attempts`` calls have been made, after which RetriesExhaustedError
    is raised. A RateLimitError carrying ``retry_after`` sleeps exactly that
    long and retries without using up an attempt, at most
    ``max_rate_limit_waits`` times per call; a RateLimitError without a
    suggested delay counts as an ordinary transient failure. Other
    exceptions are raised immediately.

    Args:
        max_attempts: Total number of calls before giving up (default: 3)
        initial_delay: Delay in seconds before the second attempt (default: 1.0)
        max_delay: Maximum delay in seconds (default: 60.0)
        exponential_base: Multiplier applied to the delay after each attempt (default: 2.0)
        max_rate_limit_waits: Server-suggested waits honoured per call (default: 5)
        jitter: Whether to add random jitter to delay (default: False)

    Returns:
        Decorated coroutine function with retry logic.

    Example:
        @with_retry(max_attempts=3, initial_delay=1.0)
        async def make_api_call():
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = getattr(func, "__qualname__", getattr(func, "__name__", "call"))

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            rate_limit_waits = 0
            delay = initial_delay

            while True:
                try:
                    return await func(*args, **kwargs)
                except RateLimitError as e:
                    if e.retry_after is not None and rate_limit_waits < max_rate_limit_waits:
                        rate_limit_waits += 1
                        logger.info(
                            f"rate limited in {name}, waiting {e.retry_after:.1f}s "
                            f"as suggested by the server"
                        )
                        await asyncio.sleep(e.retry_after)
                        continue
                    last_exception: Exception = e
                except ProviderUnavailableError as e:
                    last_exception = e

                attempt += 1
                if attempt >= max_attempts:
                    logger.warning(
                        f"max attempts ({max_attempts}) exceeded for {name}: {last_exception}"
                    )
                    raise RetriesExhaustedError(name, attempt, last_exception) from last_exception

                actual_delay = min(delay, max_delay)
                if jitter:
                    actual_delay *= (0.5 + random.random())

                logger.info(
                    f"retry {attempt}/{max_attempts - 1} for {name} "
                    f"after {actual_delay:.1f}s: {last_exception}"
                )
                await asyncio.sleep(actual_delay)
                delay *= exponential_base

        return wrapper
    return decorator


class BaseLLMClient(ABC):
    """Abstract base class for all LLM clients.

    Each client is responsible for:
    1. Converting the Turn history to provider format
    2. Converting tool declarations to provider format
    3. Making API calls
    4. Converting responses back to ModelResponse

    Agents only interact with unified types - all provider-specific
    handling is encapsulated within each client implementation.
    """

    def __init__(self, client_config: dict | None = None):
        """Initialize the client.
        Args:
            client_config: Optional dictionary of configuration parameters
                           (e.g. temperature, max_tokens, etc.)
        """
        self.client_config = client_config or {}

    @abstractmethod
    async def generate(
        self,
        history: list[Turn],
        system_instruction: str,
        tools: list[BaseTool] | None = None,
    ) -> ModelResponse:
        """Generate the next model turn.

        Args:
            history: Conversation history in unified format
            system_instruction: System instructions for this call
            tools: Optional list of tools the model may call

        Returns:
            ModelResponse wrapping one model turn
        """

    @abstractmethod
    def _convert_history(self, history: list[Turn]) -> Any:
        """Convert unified turns to provider-specific format.

        Each provider has different message formats:
        - Anthropic: content blocks, tool results inside user messages
        - Google: parts-based format with function_call/function_response

        Args:
            history: List of Turn objects

        Returns:
            Provider-specific message format
        """

    @abstractmethod
    def _convert_tools(self, tools: list[BaseTool]) -> list[Any]:
        """Convert tool declarations to provider-specific format.

        Args:
            tools: List of BaseTool objects

        Returns:
            Provider-specific tool definitions
        """

    @abstractmethod
    def _parse_response(self, response: Any) -> ModelResponse:
        """Parse provider response into unified format.

        Args:
            response: Raw response from the provider API

        Returns:
            ModelResponse with normalized turn and metadata
        """
