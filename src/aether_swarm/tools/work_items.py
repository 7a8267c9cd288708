"""Tools for tracking work items.

These tools wrap the WorkQueue for the Project Manager, Coder and Tester
roles. Queue errors are returned as text so the model can correct itself.
"""

import json
from typing import Any

from ..core.work_queue import WorkQueue
from ..exceptions import AgentError, WorkQueueError
from ..logging import get_logger
from .base import BaseTool
from .messaging import MessageRouter

logger = get_logger(__name__)


def _item_id_schema(purpose: str) -> dict[str, Any]:
    return {
        "type": "NUMBER",
        "description": f"The id number for the work item to {purpose}.",
    }


class CreateWorkItemTool(BaseTool):
    """Creates a new unassigned work item."""

    def __init__(self, queue: WorkQueue):
        self._queue = queue

    @property
    def name(self) -> str:
        return "createWorkItem"

    @property
    def description(self) -> str:
        return "Creates a new, unassigned work item, and returns the item with its ID number."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {
                "title": {
                    "type": "STRING",
                    "description": "A one line summary (title) of the work item.",
                },
                "description": {
                    "type": "STRING",
                    "description": (
                        "A description of the work item with enough information "
                        "to implement and verify it."
                    ),
                },
            },
            "required": ["title", "description"],
        }

    async def execute(self, title: str, description: str) -> str:
        try:
            item = self._queue.create({"title": title, "description": description})
        except WorkQueueError as e:
            return f"Error: {e}"
        return json.dumps(item.to_dict())


class AssignWorkItemTool(BaseTool):
    """Assigns a work item and notifies the assignee.

    The assignment is recorded before the assignee is messaged, so the
    assignee already sees the item as pending when it reads the details.
    If the notification fails the assignment stands and the result says so.
    """

    def __init__(self, queue: WorkQueue, router: MessageRouter, owner: str):
        self._queue = queue
        self._router = router
        self._owner = owner

    @property
    def name(self) -> str:
        return "assignWorkItem"

    @property
    def description(self) -> str:
        return (
            "Assigns the work item to a specific agent. The agent will receive a "
            "message letting them know the work item has been assigned to them."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {
                "id": _item_id_schema("assign"),
                "assignee": {
                    "type": "STRING",
                    "description": "The name of the agent to assign the work item to.",
                },
            },
            "required": ["id", "assignee"],
        }

    async def execute(self, id: int, assignee: str) -> str:
        try:
            item = self._queue.assign(id, assignee)
        except WorkQueueError as e:
            return f"Error: {e}"

        try:
            reply = await self._router.send(
                assignee,
                f"You have been assigned work item {item.id}: {item.title}.",
                self._owner,
            )
        except AgentError as e:
            logger.warning(f"notification for work item {item.id} to {assignee} failed: {e}")
            return f"Assigned work item {item.id} to {assignee}, but the notification failed: {e}"
        return f"Assigned work item {item.id} to {assignee}. {assignee} replied: {reply}"


class GetWorkItemDetailTool(BaseTool):
    """Returns the full record of a work item."""

    def __init__(self, queue: WorkQueue):
        self._queue = queue

    @property
    def name(self) -> str:
        return "getWorkItemDetail"

    @property
    def description(self) -> str:
        return (
            "Returns the complete title, description, status, assignee and "
            "comment history of a work item."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {"id": _item_id_schema("return")},
            "required": ["id"],
        }

    async def execute(self, id: int) -> str:
        try:
            item = self._queue.get_detail(id)
        except WorkQueueError as e:
            return f"Error: {e}"
        return json.dumps(item.to_dict())


class CompleteWorkItemTool(BaseTool):
    """Marks a work item as complete, optionally with a closing comment."""

    def __init__(self, queue: WorkQueue):
        self._queue = queue

    @property
    def name(self) -> str:
        return "completeWorkItem"

    @property
    def description(self) -> str:
        return "Marks a work item as complete."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "OBJECT",
            "properties": {
                "id": _item_id_schema("complete"),
                "comment": {
                    "type": "STRING",
                    "description": "Optional note on what was done, kept with the item.",
                },
            },
            "required": ["id"],
        }

    async def execute(self, id: int, comment: str | None = None) -> str:
        try:
            item = self._queue.complete(id, comment=comment)
        except WorkQueueError as e:
            return f"Error: {e}"
        return f"Completed work item {item.id}."
