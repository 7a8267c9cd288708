"""Service container for one swarm run.

A Swarm owns the shared state of a run (directory, work queue, router) and
wires the capability policy and hiring service together. The client only
ever talks to the CEO; everything else is observable through read-only
views.
"""

from .agent import SwarmAgent
from .capabilities import CapabilityPolicy
from .clients.base import BaseLLMClient
from .config import Settings, get_settings
from .core import Directory, WorkItem, WorkQueue
from .exceptions import ConfigurationError
from .hiring import HiringService, NamePool
from .logging import get_logger
from .tools.messaging import MessageRouter
from .types import Role, WorkStatus

logger = get_logger(__name__)

CEO_PERSONA = "blue"


class Swarm:
    """Wires one run's components and exposes the client boundary."""

    def __init__(
        self,
        client: BaseLLMClient,
        settings: Settings | None = None,
        name_pool: NamePool | None = None,
    ):
        self.settings = settings or get_settings()
        self.client = client
        self.directory = Directory()
        self.work_queue = WorkQueue()
        self.router = MessageRouter()
        self.policy = CapabilityPolicy(self.router, self.work_queue)
        self.hiring = HiringService(
            client,
            self.directory,
            self.router,
            self.policy,
            name_pool=name_pool,
            settings=self.settings,
        )
        self.policy.attach_hiring(self.hiring)
        self.ceo: SwarmAgent | None = None

    async def start(self) -> SwarmAgent:
        """Hire the CEO if there is none yet and return it."""
        if self.ceo is None:
            self.ceo = await self.hiring.hire(Role.CEO, CEO_PERSONA)
            logger.info(f"swarm started with CEO {self.ceo.name}")
        return self.ceo

    async def post_message(self, text: str, timeout: float | None = None) -> str:
        """Send a client message to the CEO and return the CEO's reply.

        Args:
            text: The client's message
            timeout: Deadline in seconds; defaults to ``Settings.call_timeout``

        Raises:
            AgentTimeoutError: If the deadline expires.
            RetriesExhaustedError: If the model kept failing.
        """
        ceo = await self.start()
        if timeout is None:
            timeout = self.settings.call_timeout
        return await ceo.post_message(text, timeout=timeout)

    def roster(self) -> list[dict[str, str]]:
        return [
            {"name": agent.name, "role": agent.role.value}
            for agent in self.directory.agents()
        ]

    def history(self, name: str) -> list[dict]:
        """Conversation history of one agent.

        Raises:
            ConfigurationError: If no agent has this name.
        """
        agent = self.directory.get_agent(name)
        if agent is None:
            raise ConfigurationError(f"Agent with name '{name}' not found.")
        return agent.get_history()

    def work_items(self, status: WorkStatus | str | None = None) -> list[WorkItem]:
        if status is None:
            return self.work_queue.items()
        return self.work_queue.list_by_status(status)
