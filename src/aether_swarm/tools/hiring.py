"""Tool for growing the team."""

from typing import TYPE_CHECKING, Any

from ..exceptions import AgentError
from ..prompts import list_personas
from ..types import Role
from .base import BaseTool

if TYPE_CHECKING:
    from ..hiring import HiringService


class HireTool(BaseTool):
    """Hires a new agent with a given role and persona.

    Hiring failures (unknown role, no names left) are reported back to the
    model as text.
    """

    def __init__(self, hiring: "HiringService"):
        self._hiring = hiring

    @property
    def name(self) -> str:
        return "hire"

    @property
    def description(self) -> str:
        return "Hires a new agent with a specified role and personality hat."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {
                "role": {
                    "type": "STRING",
                    "description": "The role of the new agent to hire.",
                    "enum": Role.names(),
                },
                "persona": {
                    "type": "STRING",
                    "description": "The personality hat color for the new agent.",
                    "enum": list_personas(),
                },
            },
            "required": ["role", "persona"],
        }

    async def execute(self, role: str, persona: str) -> str:
        try:
            agent = await self._hiring.hire(role, persona)
        except AgentError as e:
            return f"Error: {e}"
        return f"You have successfully hired {agent.name} as a new {agent.role.value}."
