"""Aether Swarm - a team of collaborating LLM agents.

This package provides role-based agents (CEO, Project Manager, Coder,
Tester) that talk to each other through tools, hire new colleagues and
track work items, on top of a provider-agnostic client interface.
"""

from .agent import SwarmAgent
from .capabilities import CapabilityPolicy
from .exceptions import (
    AgentError,
    AgentTimeoutError,
    ClientError,
    ConfigurationError,
    NamePoolExhaustedError,
    RetriesExhaustedError,
    ToolError,
    WorkQueueError,
)
from .hiring import HiringService, NamePool
from .swarm import Swarm
from .types import (
    FinishReason,
    FunctionCall,
    ModelResponse,
    Part,
    Role,
    Turn,
    TurnRole,
    WorkStatus,
)

__all__ = [
    # swarm
    "CapabilityPolicy",
    "HiringService",
    "NamePool",
    "Swarm",
    "SwarmAgent",
    # types
    "FinishReason",
    "FunctionCall",
    "ModelResponse",
    "Part",
    "Role",
    "Turn",
    "TurnRole",
    "WorkStatus",
    # exceptions
    "AgentError",
    "AgentTimeoutError",
    "ClientError",
    "ConfigurationError",
    "NamePoolExhaustedError",
    "RetriesExhaustedError",
    "ToolError",
    "WorkQueueError",
]
