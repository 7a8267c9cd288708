"""Hiring new agents into a swarm.

The HiringService draws a name from the pool, composes the new agent's
instructions from its role and persona, wires its tools and makes it
reachable through the directory and the message router.
"""

import random
from typing import Callable, Sequence

from .agent import SwarmAgent
from .capabilities import CapabilityPolicy
from .clients.base import BaseLLMClient
from .config import Settings
from .core import Directory, PromptBuilder
from .exceptions import NamePoolExhaustedError
from .logging import get_logger
from .prompts import NAMES, TOOLS_REFERENCE, get_persona_instructions, get_role_instructions
from .tools.messaging import MessageRouter
from .types import Role

logger = get_logger(__name__)


class NamePool:
    """A finite, shuffled supply of unique agent names."""

    def __init__(
        self,
        names: Sequence[str] = NAMES,
        seed: int | None = None,
        shuffle: bool = True,
    ):
        self._names = list(dict.fromkeys(names))
        if shuffle:
            random.Random(seed).shuffle(self._names)
        self._index = 0

    def next_name(self) -> str:
        """Return the next unused name.

        Raises:
            NamePoolExhaustedError: If every name has been used.
        """
        if self._index >= len(self._names):
            raise NamePoolExhaustedError(len(self._names))
        name = self._names[self._index]
        self._index += 1
        return name

    @property
    def remaining(self) -> int:
        return len(self._names) - self._index


class HiringService:
    """Creates agents and registers them with the rest of the swarm."""

    def __init__(
        self,
        client: BaseLLMClient,
        directory: Directory,
        router: MessageRouter,
        policy: CapabilityPolicy,
        name_pool: NamePool | None = None,
        settings: Settings | None = None,
        role_instructions: Callable[[Role], str] = get_role_instructions,
        persona_instructions: Callable[[str], str] = get_persona_instructions,
        tools_reference: str = TOOLS_REFERENCE,
    ):
        self.client = client
        self.directory = directory
        self.router = router
        self.policy = policy
        self.settings = settings or Settings()
        self.name_pool = name_pool or NamePool(seed=self.settings.name_seed)
        self._role_instructions = role_instructions
        self._persona_instructions = persona_instructions
        self._tools_reference = tools_reference

    async def hire(self, role: Role | str, persona: str) -> SwarmAgent:
        """Hire a new agent.

        Role and persona are checked before a name is taken from the pool,
        so a bad request does not use up a name.

        Raises:
            ConfigurationError: If the role or persona is unknown.
            NamePoolExhaustedError: If no names are left.
        """
        parsed_role = Role.parse(role)
        role_text = self._role_instructions(parsed_role)
        persona_text = self._persona_instructions(persona)

        name = self.name_pool.next_name()
        instructions = PromptBuilder.compose_instructions(
            name, role_text, persona_text, self._tools_reference
        )

        agent = SwarmAgent(
            name=name,
            role=parsed_role,
            system_instructions=instructions,
            client=self.client,
            directory=self.directory,
            max_attempts=self.settings.max_attempts,
            retry_base_delay=self.settings.retry_base_delay,
            retry_max_delay=self.settings.retry_max_delay,
            max_rate_limit_waits=self.settings.max_rate_limit_waits,
        )
        self.policy.grant(agent)
        self.directory.add_agent(agent)
        self.router.add_agent(agent)

        logger.info(f"hired {name} as {parsed_role.value} ({persona})")
        return agent
