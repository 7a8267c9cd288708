"""Registry of every live agent in a swarm run.

The directory keeps agents in hiring order and renders the roster block
that is appended to each agent's system instructions.
"""

from typing import TYPE_CHECKING, Iterator

from ..exceptions import ConfigurationError
from ..logging import get_logger

if TYPE_CHECKING:
    from ..agent import SwarmAgent

logger = get_logger(__name__)


class Directory:
    """Insertion-ordered mapping of agent name to agent.

    Mutations never await, so under the event loop they are atomic; readers
    that iterate get a snapshot list rather than a live view.
    """

    def __init__(self):
        self._agents: dict[str, "SwarmAgent"] = {}

    def add_agent(self, agent: "SwarmAgent") -> None:
        """Register an agent.

        Raises:
            ConfigurationError: If an agent with the same name is already registered.
        """
        if agent.name in self._agents:
            raise ConfigurationError(f"An agent named '{agent.name}' already exists.")
        self._agents[agent.name] = agent
        logger.debug(f"directory: added {agent.name} ({agent.role.value})")

    def get_agent(self, name: str) -> "SwarmAgent | None":
        return self._agents.get(name)

    def agents(self) -> list["SwarmAgent"]:
        """Snapshot of all agents in creation order."""
        return list(self._agents.values())

    def names(self) -> list[str]:
        """Snapshot of all agent names in creation order."""
        return list(self._agents)

    def get_listing(self) -> str:
        """Return one ``name: role`` line per agent, ordered by creation time."""
        return "\n".join(
            f"{agent.name}: {agent.role.value}" for agent in self.agents()
        )

    def __contains__(self, name: object) -> bool:
        return name in self._agents

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator["SwarmAgent"]:
        return iter(self.agents())
