"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel


class MessageRequest(BaseModel):
    """A client message for the CEO."""

    text: str
    timeout: float | None = None


class MessageResponse(BaseModel):
    """The CEO's reply, or the error that prevented one."""

    state: str  # "completed", "error"
    agent: str | None = None
    content: str | None = None
    error: str | None = None


class AgentInfo(BaseModel):
    """One roster entry."""

    name: str
    role: str


class WorkItemInfo(BaseModel):
    """Read-only view of a work item."""

    id: int
    title: str
    description: str
    status: str
    assignee: str | None = None
    comments: list[str] = []

    @classmethod
    def from_item(cls, data: dict[str, Any]) -> "WorkItemInfo":
        return cls(**data)
