"""Shared test fixtures and configuration."""

import inspect
from dataclasses import dataclass
from typing import Any

import pytest

from aether_swarm.agent import SwarmAgent
from aether_swarm.clients.base import BaseLLMClient
from aether_swarm.config import Settings
from aether_swarm.core import Directory, WorkQueue
from aether_swarm.hiring import NamePool
from aether_swarm.swarm import Swarm
from aether_swarm.tools.base import BaseTool
from aether_swarm.tools.messaging import MessageRouter
from aether_swarm.types import (
    FinishReason,
    FunctionCall,
    ModelResponse,
    Part,
    Turn,
)


def text_response(text: str) -> ModelResponse:
    """A model turn that answers in plain text."""
    return ModelResponse(turn=Turn.model([Part(text=text)]), finish_reason=FinishReason.STOP)


def call_response(name: str, arguments: dict[str, Any] | None = None, call_id: str | None = None) -> ModelResponse:
    """A model turn with a single function call."""
    return calls_response(FunctionCall(id=call_id or f"call_{name}", name=name, arguments=arguments or {}))


def calls_response(*calls: FunctionCall) -> ModelResponse:
    """A model turn with several function calls."""
    return ModelResponse(
        turn=Turn.model([Part(function_call=call) for call in calls]),
        finish_reason=FinishReason.TOOL_USE,
    )


def agent_name(system_instruction: str) -> str:
    """Recover the agent name from the first line of its instructions."""
    first_line = system_instruction.split("\n", 1)[0]
    return first_line.removeprefix("You are ").rstrip(".")


@dataclass
class RecordedCall:
    agent: str
    history: list[Turn]
    system_instruction: str
    tools: list[str]


class ScriptedClient(BaseLLMClient):
    """Fake client that plays back a script per agent.

    Each step is a ModelResponse, an exception to raise, or a callable
    taking the history and returning either (optionally async). Agents
    without remaining steps answer with ``default``.
    """

    def __init__(self, scripts: dict[str, list] | None = None, default: str = "Acknowledged."):
        super().__init__()
        self.scripts: dict[str, list] = {name: list(steps) for name, steps in (scripts or {}).items()}
        self.default = default
        self.calls: list[RecordedCall] = []

    def script(self, name: str, *steps) -> None:
        self.scripts.setdefault(name, []).extend(steps)

    def calls_for(self, name: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.agent == name]

    async def generate(self, history, system_instruction, tools=None):
        name = agent_name(system_instruction)
        self.calls.append(RecordedCall(
            agent=name,
            history=list(history),
            system_instruction=system_instruction,
            tools=[tool.name for tool in tools or []],
        ))

        steps = self.scripts.get(name)
        step = steps.pop(0) if steps else text_response(self.default)

        if isinstance(step, BaseException):
            raise step
        if callable(step):
            step = step(history)
            if inspect.isawaitable(step):
                step = await step
        if isinstance(step, BaseException):
            raise step
        return step

    def _convert_history(self, history):
        return history

    def _convert_tools(self, tools):
        return [tool.declaration for tool in tools]

    def _parse_response(self, response):
        return response


class EchoTool(BaseTool):
    """Returns its text argument."""

    def __init__(self):
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echoes the given text"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {"text": {"type": "STRING", "description": "Text to echo"}},
            "required": ["text"],
        }

    async def execute(self, text: str) -> str:
        self.calls.append(text)
        return f"echo: {text}"


@pytest.fixture
def settings():
    """Settings with no backoff delays and no .env lookup."""
    return Settings(
        _env_file=None,
        max_attempts=3,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        max_rate_limit_waits=5,
        call_timeout=None,
        name_seed=None,
    )


@pytest.fixture
def client():
    return ScriptedClient()


@pytest.fixture
def directory():
    return Directory()


@pytest.fixture
def router():
    return MessageRouter()


@pytest.fixture
def work_queue():
    return WorkQueue()


@pytest.fixture
def make_agent(client, directory):
    """Factory for agents that share the fixture client and directory."""

    def _make(name: str, role: str = "Coder", tools: list[BaseTool] | None = None, **kwargs) -> SwarmAgent:
        agent_client = kwargs.pop("agent_client", client)
        agent = SwarmAgent(
            name=name,
            role=role,
            system_instructions=f"You are {name}.\nYou help with tests.",
            client=agent_client,
            directory=directory,
            retry_base_delay=0.0,
            retry_max_delay=0.0,
            **kwargs,
        )
        if tools is not None:
            agent.set_tools(tools)
        directory.add_agent(agent)
        return agent

    return _make


@pytest.fixture
def swarm(client, settings):
    """A swarm whose names come out of the pool in list order."""
    return Swarm(client, settings=settings, name_pool=NamePool(shuffle=False))
