from abc import ABC, abstractmethod
from typing import Any


class BaseTool(ABC):
    """Abstract base class for all tools.

    A tool is a declaration (name, description and parameter schema) plus
    an async ``execute`` that returns text for the model to read. Parameter
    schemas use the upper-case types of the model service:
    STRING, NUMBER, INTEGER, BOOLEAN, ARRAY and OBJECT.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return the tool description."""
        pass

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """Return the schema for tool parameters."""
        pass

    @abstractmethod
    async def execute(self, **kwargs) -> str:
        """Execute the tool with the given arguments."""
        pass

    @property
    def declaration(self) -> dict[str, Any]:
        """Return the function declaration sent to the model."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }

    def validate_arguments(self, arguments: dict[str, Any]) -> list[str]:
        """Return a list of problems with ``arguments``; empty when valid."""
        required = self.parameters.get("required", [])
        return [
            f"missing required argument '{key}'"
            for key in required
            if arguments.get(key) in (None, "")
        ]
