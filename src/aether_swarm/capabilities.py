"""Role-based tool grants.

Each role gets a fixed, ordered set of tools. Tools that speak on behalf
of an agent (message, broadcast, assignWorkItem) are built per agent and
bound to its name.
"""

from typing import TYPE_CHECKING, Callable

from .core.work_queue import WorkQueue
from .exceptions import ConfigurationError
from .logging import get_logger
from .tools.base import BaseTool
from .tools.hiring import HireTool
from .tools.messaging import BroadcastTool, MessageRouter, MessageTool
from .tools.work_items import (
    AssignWorkItemTool,
    CompleteWorkItemTool,
    CreateWorkItemTool,
    GetWorkItemDetailTool,
)
from .types import Role

if TYPE_CHECKING:
    from .agent import SwarmAgent
    from .hiring import HiringService

logger = get_logger(__name__)

ToolFactory = Callable[[str], BaseTool]


class CapabilityPolicy:
    """Assigns each agent the tools its role permits, exactly once."""

    def __init__(self, router: MessageRouter, work_queue: WorkQueue):
        self.router = router
        self.work_queue = work_queue
        self._hiring: "HiringService | None" = None
        self._wired: set[str] = set()

    def attach_hiring(self, hiring: "HiringService") -> None:
        """Provide the hiring service behind the CEO's ``hire`` tool."""
        self._hiring = hiring

    def _hire_tool(self, owner: str) -> BaseTool:
        if self._hiring is None:
            raise ConfigurationError("No hiring service attached; cannot grant 'hire'.")
        return HireTool(self._hiring)

    def _factories(self, role: Role) -> list[ToolFactory]:
        message: ToolFactory = lambda owner: MessageTool(self.router, owner)
        broadcast: ToolFactory = lambda owner: BroadcastTool(self.router, owner)
        create: ToolFactory = lambda owner: CreateWorkItemTool(self.work_queue)
        assign: ToolFactory = lambda owner: AssignWorkItemTool(self.work_queue, self.router, owner)
        detail: ToolFactory = lambda owner: GetWorkItemDetailTool(self.work_queue)
        complete: ToolFactory = lambda owner: CompleteWorkItemTool(self.work_queue)

        if role == Role.CEO:
            return [message, broadcast, self._hire_tool]
        if role == Role.PROJECT_MANAGER:
            return [message, create, assign, detail, complete]
        if role in (Role.CODER, Role.TESTER):
            return [message, complete, assign, detail]
        raise ConfigurationError(f"Unknown role: {role}")

    def tools_for(self, role: Role | str, owner: str) -> list[BaseTool]:
        """Build the tools a role grants, bound to ``owner``.

        Raises:
            ConfigurationError: If the role is unknown.
        """
        return [factory(owner) for factory in self._factories(Role.parse(role))]

    def grant(self, agent: "SwarmAgent") -> bool:
        """Install the role's tools on ``agent``.

        Returns:
            True if tools were installed, False if this agent name was
            already wired (the call is then a no-op).

        Raises:
            ConfigurationError: If the agent's role is unknown.
        """
        if agent.name in self._wired:
            logger.debug(f"tools already granted to {agent.name}")
            return False
        tools = self.tools_for(agent.role, agent.name)
        agent.set_tools(tools)
        self._wired.add(agent.name)
        logger.info(f"granted {agent.name} ({agent.role.value}): {', '.join(t.name for t in tools)}")
        return True

    def is_wired(self, name: str) -> bool:
        return name in self._wired
