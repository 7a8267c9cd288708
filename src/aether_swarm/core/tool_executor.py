"""Tool execution logic for the agent.

This module resolves the function calls of a model turn against an agent's
tool registry, runs the first one and records a result for every call.
"""

from typing import TYPE_CHECKING

from ..exceptions import (
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
)
from ..logging import get_agent_logger
from ..tools.base import BaseTool
from ..types import FunctionCall

if TYPE_CHECKING:
    from .memory_manager import MemoryManager

DEFERRED_CALL_MESSAGE = (
    "Not executed: only the first tool call of a turn is run. "
    "Issue this call again in a separate turn if it is still needed."
)


class ToolExecutor:
    """Handles tool execution for one agent.

    Every failure mode (unknown tool, bad arguments, a tool that raises) is
    turned into result text so the model can read it and adapt.
    """

    def __init__(self, owner: str, tools: dict[str, BaseTool] | None = None):
        """Initialize the tool executor.

        Args:
            owner: Name of the agent whose calls are executed; its agent
                logger receives the tool log lines.
            tools: Dictionary mapping tool names to tool instances.
        """
        self.owner = owner
        self.logger = get_agent_logger(owner)
        self.tools: dict[str, BaseTool] = dict(tools or {})

    async def execute_single_tool(self, call: FunctionCall) -> str:
        """Execute one function call and return its textual result.

        Returns:
            The tool output, or an ``Error: ...`` string describing why the
            call could not be completed.
        """
        tool = self.tools.get(call.name)
        if tool is None:
            error = ToolNotFoundError(call.name)
            self.logger.warning(str(error))
            return f"Error: {error}"

        problems = tool.validate_arguments(call.arguments)
        if problems:
            error = ToolValidationError(call.name, problems)
            self.logger.info(str(error))
            return f"Error: {error}"

        self.logger.info(f"executing tool {call.name} with args: {call.arguments}")
        try:
            result = await tool.execute(**call.arguments)
        except Exception as e:
            error = ToolExecutionError(call.name, e)
            self.logger.exception(str(error))
            return f"Error: {error}"

        self.logger.debug(f"{call.name} result: {result}")
        return str(result)

    async def execute_tool_calls(
        self,
        calls: list[FunctionCall],
        memory: "MemoryManager",
    ) -> None:
        """Run the first call and record a result for every call.

        Only the first call of a model turn is executed. The others are
        answered with a message asking the model to re-issue them, so the
        history keeps one result per call.
        """
        if not calls:
            return

        first, *rest = calls
        result = await self.execute_single_tool(first)
        memory.add_tool_result(first, result)

        for call in rest:
            self.logger.info(f"deferring extra tool call {call.name}")
            memory.add_tool_result(call, DEFERRED_CALL_MESSAGE)

    def get_tool(self, name: str) -> BaseTool | None:
        return self.tools.get(name)

    def has_tool(self, name: str) -> bool:
        return name in self.tools
