"""Google Gemini client implementation using the google-genai SDK.

This client handles communication with the Google Gemini API and normalizes
responses to the unified format.

Google Gemini has unique requirements:
- Uses "parts" format for message content
- Tool calls use "function_call" in parts
- Tool results use "function_response" in parts, one user turn answering
  every call of the preceding model turn
- System instruction is a separate parameter
- Role names: "user" and "model"
- Quota errors (429) carry a RetryInfo detail with the suggested delay

Supported models:
- gemini-2.5-flash (default)
- gemini-2.5-pro
- gemini-2.0-flash
"""

import os
import re
from typing import Any

import httpx
from google import genai
from google.genai import types
from google.genai.errors import APIError, ClientError, ServerError

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

# supported configuration keys for google
SUPPORTED_CONFIG_KEYS = {
    "temperature",
    "top_p",
    "top_k",
    "max_tokens",
    "stop_sequences",
    "thinking_budget",
    "function_calling_mode",
}

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)s\s*$")


def parse_retry_delay(payload: Any) -> float | None:
    """Extract the server-suggested retry delay from a Gemini error payload.

    The payload looks like ``{"error": {"details": [{"@type":
    "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": "37s"}]}}``.

    Returns:
        The delay in seconds, or None if the payload carries no RetryInfo.
    """
    if not isinstance(payload, dict):
        return None
    error = payload.get("error", payload)
    if not isinstance(error, dict):
        return None
    for detail in error.get("details") or []:
        if not isinstance(detail, dict):
            continue
        if not str(detail.get("@type", "")).endswith("RetryInfo"):
            continue
        match = _DURATION_RE.match(str(detail.get("retryDelay", "")))
        if match:
            return float(match.group(1))
    return None


class GoogleClient(BaseLLMClient):
    """Google Gemini API client using the async google-genai SDK.

    Supports:
    - Generation parameters: temperature, top_p, top_k, max_tokens
    - Thinking budget configuration
    - Function calling modes: AUTO, ANY, NONE
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.5-flash",
        client_config: dict | None = None,
    ):
        """Initialize the Google client.

        Args:
            api_key: Google API key. Defaults to GOOGLE_API_KEY or GEMINI_API_KEY env var.
            model: Model to use. Defaults to gemini-2.5-flash.
            client_config: Optional configuration parameters:
                - temperature: float
                - top_p: float
                - top_k: int
                - max_tokens: int (default 8192)
                - stop_sequences: list[str]
                - thinking_budget: int
                - function_calling_mode: str ("AUTO", "ANY", "NONE")
        """
        super().__init__(client_config)

        resolved_key = api_key or os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
        if not resolved_key:
            raise ValueError("Google API key not found. Set GOOGLE_API_KEY or GEMINI_API_KEY env var.")

        self.client = genai.Client(api_key=resolved_key)
        self.model_name = model
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the client configuration."""
        if not self.client_config:
            return

        unsupported = set(self.client_config.keys()) - SUPPORTED_CONFIG_KEYS
        if unsupported:
            raise ValueError(f"Unsupported config keys for Google: {unsupported}")

        mode = self.client_config.get("function_calling_mode")
        if mode and mode not in ("AUTO", "ANY", "NONE"):
            raise ValueError(f"Invalid function_calling_mode: {mode}. Must be AUTO, ANY, or NONE.")

    async def generate(
        self,
        history: list[Turn],
        system_instruction: str,
        tools: list[BaseTool] | None = None,
    ) -> ModelResponse:
        """Generate the next model turn from Google Gemini."""
        contents = self._convert_history(history)
        declarations = self._convert_tools(tools) if tools else None
        config = self._build_generation_config(declarations, system_instruction)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        except ClientError as e:
            if e.code == 429:
                raise RateLimitError(
                    "Google rate limit exceeded",
                    retry_after=parse_retry_delay(e.details),
                ) from e
            if e.code in (401, 403):
                raise AuthenticationError(f"Google authentication failed: {e}") from e
            raise InvalidResponseError(f"Invalid request to Google API: {e}") from e
        except ServerError as e:
            raise ProviderUnavailableError(f"Google API unavailable: {e}") from e
        except APIError as e:
            raise InvalidResponseError(f"Google API error: {e}") from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(f"Google API unreachable: {e}") from e

        return self._parse_response(response)

    def _build_generation_config(
        self,
        declarations: list[types.FunctionDeclaration] | None,
        system_instruction: str | None = None,
    ) -> types.GenerateContentConfig:
        """Build the generation config from client configuration."""
        cfg = self.client_config or {}

        config_kwargs: dict[str, Any] = {
            "max_output_tokens": cfg.get("max_tokens", 8192),
        }

        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction

        for key in ("temperature", "top_p", "top_k", "stop_sequences"):
            if key in cfg:
                config_kwargs[key] = cfg[key]

        if "thinking_budget" in cfg:
            config_kwargs["thinking_config"] = types.ThinkingConfig(
                thinking_budget=cfg["thinking_budget"]
            )

        if declarations:
            config_kwargs["tools"] = [types.Tool(function_declarations=declarations)]
            mode = cfg.get("function_calling_mode", "AUTO")
            config_kwargs["tool_config"] = types.ToolConfig(
                function_calling_config=types.FunctionCallingConfig(mode=mode)
            )
            # the agent loop drives tool execution itself
            config_kwargs["automatic_function_calling"] = types.AutomaticFunctionCallingConfig(
                disable=True
            )

        return types.GenerateContentConfig(**config_kwargs)

    def _convert_history(self, history: list[Turn]) -> list[types.Content]:
        """Convert unified turns to Gemini contents.

        Consecutive tool turns are merged into a single user content so that
        every function call of a model turn is answered in one place.
        """
        converted: list[types.Content] = []

        for turn in history:
            if turn.role == TurnRole.USER:
                converted.append(types.Content(
                    role="user",
                    parts=[types.Part.from_text(text=turn.text or "")],
                ))

            elif turn.role == TurnRole.MODEL:
                parts: list[types.Part] = []
                for part in turn.parts:
                    if part.function_call:
                        parts.append(types.Part.from_function_call(
                            name=part.function_call.name,
                            args=part.function_call.arguments,
                        ))
                    elif part.text:
                        parts.append(types.Part.from_text(text=part.text))
                if not parts:
                    parts.append(types.Part.from_text(text=""))
                converted.append(types.Content(role="model", parts=parts))

            elif turn.role == TurnRole.TOOL:
                response_part = types.Part.from_function_response(
                    name=turn.tool_name or "",
                    response={"result": turn.text or ""},
                )
                previous = converted[-1] if converted else None
                if previous is not None and previous.role == "user" and _is_function_response(previous):
                    previous.parts.append(response_part)
                else:
                    converted.append(types.Content(role="user", parts=[response_part]))

        return converted

    def _convert_tools(self, tools: list[BaseTool]) -> list[types.FunctionDeclaration]:
        """Convert tools to Gemini function declaration format."""
        return [
            types.FunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters=tool.parameters,
            )
            for tool in tools
        ]

    def _parse_response(self, response: Any) -> ModelResponse:
        """Parse Gemini response into unified format."""
        try:
            candidate = response.candidates[0]
            content = candidate.content

            parts: list[Part] = []
            call_count = 0
            for part in (content.parts if content and content.parts else []):
                if getattr(part, "thought", False):
                    continue
                if getattr(part, "function_call", None):
                    fc = part.function_call
                    parts.append(Part(function_call=FunctionCall(
                        id=fc.id or f"call_{fc.name}_{call_count}",
                        name=fc.name,
                        arguments=dict(fc.args) if fc.args else {},
                    )))
                    call_count += 1
                elif getattr(part, "text", None):
                    parts.append(Part(text=part.text))

            finish_reason = FinishReason.STOP
            if candidate.finish_reason and str(candidate.finish_reason).endswith("MAX_TOKENS"):
                finish_reason = FinishReason.LENGTH
            if call_count:
                finish_reason = FinishReason.TOOL_USE

            usage = None
            um = getattr(response, "usage_metadata", None)
            if um:
                usage = UsageStats(
                    prompt_tokens=getattr(um, "prompt_token_count", 0) or 0,
                    completion_tokens=getattr(um, "candidates_token_count", 0) or 0,
                    total_tokens=getattr(um, "total_token_count", 0) or 0,
                )

            return ModelResponse(
                turn=Turn.model(parts),
                finish_reason=finish_reason,
                usage=usage,
            )
        except Exception as e:
            raise InvalidResponseError(f"Failed to parse Google response: {e}") from e


def _is_function_response(content: types.Content) -> bool:
    return bool(content.parts) and all(
        getattr(part, "function_response", None) for part in content.parts
    )
