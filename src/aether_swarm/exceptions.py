"""Custom exception hierarchy for the swarm.

This module defines all custom exceptions used throughout the swarm,
organized into logical categories: configuration errors, client errors,
tool errors and work queue errors.
"""


class AgentError(Exception):
    """Base exception for all swarm errors."""


# =============================================================================
# Configuration and resource errors - abort the responsible operation
# =============================================================================

class ConfigurationError(AgentError):
    """A caller supplied an invalid setup (unknown role, missing field)."""


class NamePoolExhaustedError(AgentError):
    """Every name in the pool has already been handed out."""

    def __init__(self, pool_size: int):
        self.pool_size = pool_size
        super().__init__(f"All {pool_size} names have been used.")


class AgentTimeoutError(AgentError):
    """A top-level call to an agent ran past its deadline."""

    def __init__(self, agent_name: str, timeout: float):
        self.agent_name = agent_name
        self.timeout = timeout
        super().__init__(f"Agent '{agent_name}' did not respond within {timeout}s")


# =============================================================================
# Client Errors - Issues with LLM API interactions
# =============================================================================

class ClientError(AgentError):
    """Base class for LLM client errors."""


class AuthenticationError(ClientError):
    """API key is invalid or missing."""


class RateLimitError(ClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None):
        self.retry_after = retry_after
        if retry_after is not None:
            message = f"{message}. Retry after: {retry_after}s"
        super().__init__(message)


class ProviderUnavailableError(ClientError):
    """Provider API is temporarily unavailable."""


class InvalidResponseError(ClientError):
    """Request was rejected or the response could not be parsed."""


class RetriesExhaustedError(ClientError):
    """A model call kept failing until the retry budget ran out."""

    def __init__(self, operation: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{operation} failed after {attempts} attempts: {last_error}"
        )


# =============================================================================
# Tool Errors - Issues with tool execution
# =============================================================================

class ToolError(AgentError):
    """Base class for tool execution errors."""


class ToolNotFoundError(ToolError):
    """Requested tool is not registered to the agent."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' is not available to you.")


class ToolExecutionError(ToolError):
    """Tool execution failed."""

    def __init__(self, tool_name: str, cause: Exception | str):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"Tool '{tool_name}' execution failed: {cause}")


class ToolValidationError(ToolError):
    """Tool arguments failed validation."""

    def __init__(self, tool_name: str, errors: list[str]):
        self.tool_name = tool_name
        self.errors = errors
        super().__init__(f"Tool '{tool_name}' validation failed: {', '.join(errors)}")


# =============================================================================
# Work Queue Errors - invalid work item operations
# =============================================================================

class WorkQueueError(AgentError):
    """A work item operation violated the queue's rules."""


class UnknownWorkItemError(WorkQueueError):
    """No work item exists with the given id."""

    def __init__(self, item_id: object):
        self.item_id = item_id
        super().__init__(f"Work item {item_id} not found.")
