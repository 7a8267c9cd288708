"""Main agent implementation.

A SwarmAgent owns one conversation with the model and drives the
request/tool-execution loop. It uses unified types for all interactions,
making it provider-agnostic.
"""

import asyncio

from .clients.base import BaseLLMClient, with_retry
from .core import Directory, MemoryManager, PromptBuilder, ToolExecutor
from .exceptions import AgentTimeoutError, ConfigurationError
from .logging import get_agent_logger
from .tools.base import BaseTool
from .types import AgentState, Role, Turn

NO_RESPONSE_PLACEHOLDER = "(no response)"


class SwarmAgent:
    """Agent that coordinates between the model and its tools.

    The agent maintains conversation history and handles the tool-use loop:
    1. Send the history to the model
    2. If the model requests a tool call, execute it
    3. Add the tool result to history
    4. Repeat until the model produces plain text

    Calls to ``post_message`` are serialized: while one is running, later
    ones wait their turn, so two conversations never interleave in one
    history.
    """

    def __init__(
        self,
        name: str,
        role: Role | str,
        system_instructions: str,
        client: BaseLLMClient,
        directory: Directory | None = None,
        max_attempts: int = 3,
        retry_base_delay: float = 1.0,
        retry_max_delay: float = 60.0,
        max_rate_limit_waits: int = 5,
    ):
        """Initialize the agent.

        Args:
            name: Unique, immutable agent name
            role: One of the swarm roles
            system_instructions: Immutable instructions for every model call
            client: The LLM client to use (provider-agnostic)
            directory: Directory whose roster is added to every model call
            max_attempts: Total attempts for a failing model call
            retry_base_delay: First backoff delay in seconds
            retry_max_delay: Upper bound for one backoff delay
            max_rate_limit_waits: Server-suggested waits honoured per model call

        Raises:
            ConfigurationError: If a required field is missing or the role is unknown.
        """
        if not name:
            raise ConfigurationError("An agent name is required.")
        if not system_instructions:
            raise ConfigurationError("System instructions are required.")
        if client is None:
            raise ConfigurationError("A model client is required.")

        self.name = name
        self.role = Role.parse(role)
        self.system_instructions = system_instructions
        self.client = client
        self.state = AgentState.IDLE
        self.logger = get_agent_logger(name)

        # initialize components
        self.prompt_builder = PromptBuilder(system_instructions, directory)
        self.tool_executor = ToolExecutor(owner=name)
        self.memory = MemoryManager()

        self._tools_granted = False
        self._lock = asyncio.Lock()
        self._generate = with_retry(
            max_attempts=max_attempts,
            initial_delay=retry_base_delay,
            max_delay=retry_max_delay,
            max_rate_limit_waits=max_rate_limit_waits,
        )(client.generate)

    @property
    def tools(self) -> dict[str, BaseTool]:
        return self.tool_executor.tools

    @property
    def tool_list(self) -> list[BaseTool]:
        return list(self.tool_executor.tools.values())

    @property
    def history(self) -> list[Turn]:
        return self.memory.history

    @property
    def is_busy(self) -> bool:
        """True while a call is running or queued on this agent."""
        return self._lock.locked()

    def set_tools(self, tools: list[BaseTool]) -> None:
        """Install the agent's tool registry. Allowed exactly once.

        Raises:
            ConfigurationError: If tools were already installed.
        """
        if self._tools_granted:
            raise ConfigurationError(f"Tools for '{self.name}' were already granted.")
        self.tool_executor.tools = {tool.name: tool for tool in tools}
        self._tools_granted = True

    async def post_message(self, text: str, timeout: float | None = None) -> str:
        """Send text to the agent and return its final reply.

        Args:
            text: The incoming message
            timeout: Optional deadline in seconds for this call, including
                time spent waiting for earlier calls to finish

        Returns:
            The first text part of the model's final turn.

        Raises:
            AgentTimeoutError: If the deadline expires.
            RetriesExhaustedError: If the model kept failing.
        """
        if timeout is None:
            return await self._serialized_run(text)
        try:
            return await asyncio.wait_for(self._serialized_run(text), timeout)
        except asyncio.TimeoutError:
            self.logger.warning(f"call abandoned after {timeout}s")
            raise AgentTimeoutError(self.name, timeout) from None

    async def _serialized_run(self, text: str) -> str:
        async with self._lock:
            # a cancelled earlier call may have left a call without a result
            self.memory.cleanup_pending_state()
            self.memory.add_turn(Turn.user(text))
            try:
                return await self._run_loop()
            finally:
                self.state = AgentState.IDLE

    async def _run_loop(self) -> str:
        """Internal agent loop; returns once the model answers in text."""
        while True:
            self.state = AgentState.AWAITING_MODEL
            self.logger.debug(f"requesting model turn ({len(self.memory)} turns)")
            response = await self._generate(
                list(self.memory.history),
                self.prompt_builder.build_system_instruction(),
                self.tool_list or None,
            )

            turn = response.turn
            self.memory.add_turn(turn)

            calls = turn.function_calls
            if calls:
                self.state = AgentState.EXECUTING_TOOL
                await self.tool_executor.execute_tool_calls(calls, self.memory)
                continue

            text = turn.text
            if text is None:
                self.logger.warning("model turn had neither text nor a tool call")
                return NO_RESPONSE_PLACEHOLDER
            return text

    def get_history(self) -> list[dict]:
        """Get conversation history as list of dicts."""
        return self.memory.get_history()

    def __repr__(self) -> str:
        return f"SwarmAgent(name='{self.name}', role='{self.role.value}', tools={len(self.tools)})"
