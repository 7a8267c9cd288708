"""Anthropic client implementation.

This client handles communication with the Anthropic API (Claude models)
and normalizes responses to the unified format.

Anthropic has unique requirements:
- System prompt is passed separately, not in messages
- Tool calls use content blocks with type "tool_use"
- Tool results go in user messages with type "tool_result"
- Tool input schemas are JSON schema, so the upper-case declaration
  types (STRING, OBJECT, ...) are lowered
- Rate limit responses carry a "retry-after" header
"""

import os
from typing import Any

from anthropic import APIConnectionError, APIStatusError, AsyncAnthropic, InternalServerError
from anthropic import AuthenticationError as AnthropicAuthError
from anthropic import BadRequestError
from anthropic import RateLimitError as AnthropicRateLimitError

from ..exceptions import (
    AuthenticationError,
    InvalidResponseError,
    ProviderUnavailableError,
    RateLimitError,
)
from ..tools.base import BaseTool
from ..types import (
    FinishReason,
    FunctionCall,
    ModelResponse,
    Part,
    Turn,
    TurnRole,
    UsageStats,
)
from .base import BaseLLMClient

# supported configuration keys for anthropic
SUPPORTED_CONFIG_KEYS = {
    "temperature",
    "top_p",
    "top_k",
    "max_tokens",
    "stop_sequences",
}

# assistant messages must not be empty
EMPTY_TURN_TEXT = "(no response)"


def to_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Lower a declaration schema's upper-case types to JSON schema types."""
    converted: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            converted[key] = value.lower()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: to_json_schema(sub) for name, sub in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = to_json_schema(value)
        else:
            converted[key] = value
    return converted


def _retry_after(error: AnthropicRateLimitError) -> float | None:
    response = getattr(error, "response", None)
    if response is None:
        return None
    value = response.headers.get("retry-after")
    try:
        return float(value) if value is not None else None
    except ValueError:
        return None


class AnthropicClient(BaseLLMClient):
    """Anthropic API client with unified response handling.

    Supports:
    - Generation parameters: temperature, top_p, top_k, stop_sequences
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-5-20250929",
        client_config: dict | None = None,
    ):
        """Initialize the Anthropic client.

        Args:
            api_key: Anthropic API key. Defaults to ANTHROPIC_API_KEY env var.
            model: Model to use. Defaults to Claude Sonnet 4.5.
            client_config: Optional configuration parameters:
                - temperature: float (0.0-1.0, default 1.0)
                - top_p: float (nucleus sampling)
                - top_k: int (top-k sampling)
                - max_tokens: int (default 4096)
                - stop_sequences: list[str]
        """
        super().__init__(client_config)
        # the sdk retries on its own by default; the agent owns the retry policy
        self.client = AsyncAnthropic(
            api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"),
            max_retries=0,
        )
        self.model = model
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the client configuration."""
        if not self.client_config:
            return

        unsupported = set(self.client_config.keys()) - SUPPORTED_CONFIG_KEYS
        if unsupported:
            raise ValueError(f"Unsupported config keys for Anthropic: {unsupported}")

    async def generate(
        self,
        history: list[Turn],
        system_instruction: str,
        tools: list[BaseTool] | None = None,
    ) -> ModelResponse:
        """Generate the next model turn from Anthropic.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If rate limit is exceeded
            ProviderUnavailableError: If API is unavailable
            InvalidResponseError: If the request is rejected
        """
        kwargs = self._build_api_kwargs(
            system_instruction,
            self._convert_history(history),
            self._convert_tools(tools) if tools else None,
        )

        try:
            response = await self.client.messages.create(**kwargs)
        except AnthropicAuthError as e:
            raise AuthenticationError(f"Anthropic authentication failed: {e}") from e
        except AnthropicRateLimitError as e:
            raise RateLimitError("Anthropic rate limit exceeded", retry_after=_retry_after(e)) from e
        except (APIConnectionError, InternalServerError) as e:
            raise ProviderUnavailableError(f"Anthropic API unavailable: {e}") from e
        except BadRequestError as e:
            raise InvalidResponseError(f"Invalid request to Anthropic API: {e}") from e
        except APIStatusError as e:
            # 503, 504 and 529 (overloaded) are not InternalServerError subclasses
            if e.status_code >= 500:
                raise ProviderUnavailableError(f"Anthropic API unavailable: {e}") from e
            raise InvalidResponseError(f"Anthropic API rejected the request: {e}") from e

        return self._parse_response(response)

    def _build_api_kwargs(
        self,
        system_prompt: str | None,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None,
    ) -> dict[str, Any]:
        """Build the API kwargs from configuration."""
        config = self.client_config or {}

        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": config.get("max_tokens", 4096),
        }

        if system_prompt:
            kwargs["system"] = system_prompt
        if tools:
            kwargs["tools"] = tools

        for key in ("temperature", "top_p", "top_k", "stop_sequences"):
            if key in config:
                kwargs[key] = config[key]

        return kwargs

    def _convert_history(self, history: list[Turn]) -> list[dict[str, Any]]:
        """Convert unified turns to Anthropic messages.

        Consecutive tool turns share one user message.
        """
        converted: list[dict[str, Any]] = []

        for turn in history:
            if turn.role == TurnRole.USER:
                converted.append({"role": "user", "content": turn.text or ""})

            elif turn.role == TurnRole.MODEL:
                content: list[dict[str, Any]] = []
                for part in turn.parts:
                    if part.function_call:
                        content.append({
                            "type": "tool_use",
                            "id": part.function_call.id,
                            "name": part.function_call.name,
                            "input": part.function_call.arguments,
                        })
                    elif part.text:
                        content.append({"type": "text", "text": part.text})
                if not content:
                    content.append({"type": "text", "text": EMPTY_TURN_TEXT})
                converted.append({"role": "assistant", "content": content})

            elif turn.role == TurnRole.TOOL:
                block = {
                    "type": "tool_result",
                    "tool_use_id": turn.tool_call_id,
                    "content": turn.text or "",
                }
                previous = converted[-1] if converted else None
                if (
                    previous is not None
                    and previous["role"] == "user"
                    and isinstance(previous["content"], list)
                ):
                    previous["content"].append(block)
                else:
                    converted.append({"role": "user", "content": [block]})

        return converted

    def _convert_tools(self, tools: list[BaseTool]) -> list[dict[str, Any]]:
        """Convert tools to Anthropic format with input_schema."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "input_schema": to_json_schema(tool.parameters),
            }
            for tool in tools
        ]

    def _parse_response(self, response: Any) -> ModelResponse:
        """Parse Anthropic response into unified format."""
        try:
            parts: list[Part] = []
            for block in response.content:
                if block.type == "text":
                    parts.append(Part(text=block.text))
                elif block.type == "tool_use":
                    parts.append(Part(function_call=FunctionCall(
                        id=block.id,
                        name=block.name,
                        arguments=dict(block.input or {}),
                    )))

            finish_map = {
                "end_turn": FinishReason.STOP,
                "tool_use": FinishReason.TOOL_USE,
                "max_tokens": FinishReason.LENGTH,
            }

            return ModelResponse(
                turn=Turn.model(parts),
                finish_reason=finish_map.get(response.stop_reason, FinishReason.STOP),
                usage=UsageStats(
                    prompt_tokens=response.usage.input_tokens,
                    completion_tokens=response.usage.output_tokens,
                    total_tokens=response.usage.input_tokens + response.usage.output_tokens,
                ),
            )
        except Exception as e:
            raise InvalidResponseError(f"Failed to parse Anthropic response: {e}") from e
