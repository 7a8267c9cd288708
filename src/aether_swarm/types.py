"""Unified types for the swarm.

These types provide a provider-agnostic interface for LLM interactions.
All clients convert their provider-specific formats to/from these types.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from .exceptions import ConfigurationError


class TurnRole(Enum):
    """Role of a turn in the conversation."""
    USER = "user"
    MODEL = "model"
    TOOL = "tool"


class FinishReason(Enum):
    """Reason why the model stopped generating."""
    STOP = "stop"
    TOOL_USE = "tool_use"
    LENGTH = "length"
    ERROR = "error"


class Role(Enum):
    """The closed set of roles an agent can be hired into."""
    CEO = "Ceo"
    PROJECT_MANAGER = "Project Manager"
    CODER = "Coder"
    TESTER = "Tester"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Resolve a role from its display name.

        Raises:
            ConfigurationError: If the value names no known role.
        """
        if isinstance(value, Role):
            return value
        for role in cls:
            if role.value == value:
                return role
        raise ConfigurationError(f"Unknown role: {value}")

    @classmethod
    def names(cls) -> list[str]:
        return [role.value for role in cls]


class WorkStatus(Enum):
    """Lifecycle of a work item. COMPLETED is terminal."""
    UNASSIGNED = "unassigned"
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass
class FunctionCall:
    """A tool call requested by the model."""
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class Part:
    """One part of a turn: plain text or a function call."""
    text: str | None = None
    function_call: FunctionCall | None = None


@dataclass
class UsageStats:
    """Token usage statistics."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class Turn:
    """A single causal step in a conversation history.

    This is the canonical turn format used throughout the swarm.
    Each LLM client converts to/from this format internally.

    Attributes:
        role: Who produced the turn (user input, model output or tool result)
        parts: Text and/or function call parts, in the order produced
        tool_name: Name of the tool (only for tool turns)
        tool_call_id: ID of the function call this turn answers (only for tool turns)
    """
    role: TurnRole
    parts: list[Part] = field(default_factory=list)
    tool_name: str | None = None
    tool_call_id: str | None = None

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=TurnRole.USER, parts=[Part(text=text)])

    @classmethod
    def model(cls, parts: list[Part]) -> "Turn":
        return cls(role=TurnRole.MODEL, parts=list(parts))

    @classmethod
    def tool_result(cls, call: FunctionCall, text: str) -> "Turn":
        return cls(
            role=TurnRole.TOOL,
            parts=[Part(text=text)],
            tool_name=call.name,
            tool_call_id=call.id,
        )

    @property
    def text(self) -> str | None:
        """The first text part, if any."""
        for part in self.parts:
            if part.text:
                return part.text
        return None

    @property
    def function_calls(self) -> list[FunctionCall]:
        """All function call parts, in order."""
        return [part.function_call for part in self.parts if part.function_call]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        result: dict[str, Any] = {"role": self.role.value}
        texts = [part.text for part in self.parts if part.text]
        if texts:
            result["text"] = "\n".join(texts)
        calls = self.function_calls
        if calls:
            result["function_calls"] = [
                {"id": fc.id, "name": fc.name, "arguments": fc.arguments}
                for fc in calls
            ]
        if self.tool_name is not None:
            result["tool_name"] = self.tool_name
        if self.tool_call_id is not None:
            result["tool_call_id"] = self.tool_call_id
        return result


@dataclass
class ModelResponse:
    """Response from an LLM provider.

    Attributes:
        turn: The model turn to append to history
        finish_reason: Why the model stopped generating
        usage: Token usage statistics (optional)
    """
    turn: Turn
    finish_reason: FinishReason
    usage: UsageStats | None = None


# ==================== agent state types ====================


class AgentState(Enum):
    """State of an agent's request loop."""
    IDLE = auto()
    AWAITING_MODEL = auto()
    EXECUTING_TOOL = auto()
