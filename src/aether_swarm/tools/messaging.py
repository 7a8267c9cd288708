"""Tools for agent-to-agent communication.

The MessageRouter is the address book used by the ``message`` and
``broadcast`` tools. Each tool instance is bound to the agent that owns it,
so the sender of a message is always known and never supplied by the model.
"""

import asyncio
from collections import Counter
from typing import TYPE_CHECKING, Any

from ..exceptions import AgentError, ConfigurationError
from ..logging import get_logger
from .base import BaseTool

if TYPE_CHECKING:
    from ..agent import SwarmAgent

logger = get_logger(__name__)


def sender_header(from_name: str) -> str:
    return f"Message from {from_name}:\n"


class MessageRouter:
    """Routes messages between registered agents.

    A send blocks the sender until the target's whole loop finishes. While
    it is in flight the router records a wait-for edge from sender to
    target. A send whose target is already waiting on the sender, directly
    or through other agents, would never finish, so it is refused with an
    explanation instead.
    """

    def __init__(self):
        self.agents: dict[str, "SwarmAgent"] = {}
        self._waiting_on: dict[str, Counter[str]] = {}

    def add_agent(self, agent: "SwarmAgent") -> None:
        if agent.name in self.agents:
            raise ConfigurationError(f"Agent '{agent.name}' is already routable.")
        self.agents[agent.name] = agent

    def names(self) -> list[str]:
        """Snapshot of routable agent names in registration order."""
        return list(self.agents)

    def _waits_on(self, start: str, goal: str) -> bool:
        """True if ``start`` is transitively waiting on a reply from ``goal``."""
        seen: set[str] = set()
        stack = [start]
        while stack:
            current = stack.pop()
            if current == goal:
                return True
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self._waiting_on.get(current, ()))
        return False

    async def send(self, target_name: str, text: str, from_name: str) -> str:
        """Deliver ``text`` to ``target_name`` and return the reply.

        Negative outcomes (unknown target, self-addressed message, a reply
        that could never arrive) come back as explanatory text.

        Raises:
            AgentError: If the target's loop fails (retries exhausted, timeout).
        """
        agent = self.agents.get(target_name)
        if agent is None:
            return f"Error: Agent with name '{target_name}' not found."
        if target_name == from_name:
            return (
                "Error: You cannot send a message to yourself. "
                "Pick another agent from the directory."
            )
        if self._waits_on(target_name, from_name):
            return (
                f"Error: {target_name} is waiting for your reply and cannot take "
                f"a message right now. Put what you want to tell {target_name} "
                f"in your response instead."
            )

        logger.info(f"routing message {from_name} -> {target_name}: {text!r}")
        edges = self._waiting_on.setdefault(from_name, Counter())
        edges[target_name] += 1
        try:
            return await agent.post_message(sender_header(from_name) + text)
        finally:
            edges[target_name] -= 1
            if edges[target_name] <= 0:
                del edges[target_name]
            if not edges:
                self._waiting_on.pop(from_name, None)

    async def broadcast(self, text: str, from_name: str) -> str:
        """Send ``text`` to every other agent concurrently.

        Returns one ``name: reply`` line per recipient, in registration order
        regardless of which reply arrives first. A recipient whose call
        fails gets an ``Error:`` line; the others are unaffected.
        """
        recipients = [name for name in self.names() if name != from_name]
        if not recipients:
            return "There are no other agents to broadcast to."

        logger.info(f"broadcast from {from_name} to {', '.join(recipients)}")
        results = await asyncio.gather(
            *(self.send(name, text, from_name) for name in recipients),
            return_exceptions=True,
        )

        lines = []
        for name, result in zip(recipients, results):
            if isinstance(result, AgentError):
                logger.warning(f"broadcast to {name} failed: {result}")
                result = f"Error: {result}"
            elif isinstance(result, BaseException):
                raise result
            lines.append(f"{name}: {result}")
        return "\n".join(lines)


class MessageTool(BaseTool):
    """Sends a message to one named agent and returns that agent's reply."""

    def __init__(self, router: MessageRouter, owner: str):
        self._router = router
        self._owner = owner

    @property
    def name(self) -> str:
        return "message"

    @property
    def description(self) -> str:
        return "Sends a message to a named agent and returns that agent's response."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {
                "name": {
                    "type": "STRING",
                    "description": "The name of the agent to send the message to.",
                },
                "text": {
                    "type": "STRING",
                    "description": "The content of the message.",
                },
            },
            "required": ["name", "text"],
        }

    async def execute(self, name: str, text: str) -> str:
        return await self._router.send(name, text, self._owner)


class BroadcastTool(BaseTool):
    """Sends one message to every other agent and collects their replies."""

    def __init__(self, router: MessageRouter, owner: str):
        self._router = router
        self._owner = owner

    @property
    def name(self) -> str:
        return "broadcast"

    @property
    def description(self) -> str:
        return (
            "Sends a message to all other agents and returns their responses, "
            "one line per agent."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {
                "text": {
                    "type": "STRING",
                    "description": "The content of the message to broadcast.",
                },
            },
            "required": ["text"],
        }

    async def execute(self, text: str) -> str:
        return await self._router.broadcast(text, self._owner)
