"""In-memory work item tracking.

Work items move through ``unassigned -> pending -> completed``. Completed
is absorbing: nothing moves an item out of it. Ids come from a counter
shared by every queue in the process, so an id is never handed out twice.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..exceptions import UnknownWorkItemError, WorkQueueError
from ..logging import get_logger
from ..types import WorkStatus

logger = get_logger(__name__)

FIRST_ID = 1000

_next_id = itertools.count(FIRST_ID)


@dataclass
class WorkItem:
    """A trackable unit of project work.

    Attributes:
        id: Process-wide unique id, assigned at creation
        title: One line summary
        description: Enough detail to implement and verify the work
        status: Lifecycle state
        assignee: Name of the agent doing the work (absent while unassigned)
        comments: Notes appended over the item's life, oldest first
    """
    id: int
    title: str
    description: str
    status: WorkStatus = WorkStatus.UNASSIGNED
    assignee: str | None = None
    comments: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "assignee": self.assignee,
            "comments": list(self.comments),
        }


def _parse_status(value: Any) -> WorkStatus:
    if isinstance(value, WorkStatus):
        return value
    try:
        return WorkStatus(value)
    except ValueError:
        raise WorkQueueError(f"Unknown status: {value}") from None


class WorkQueue:
    """Store of work items for one swarm run."""

    def __init__(self):
        self._items: dict[int, WorkItem] = {}

    def create(self, payload: Mapping[str, Any]) -> WorkItem:
        """Create a work item from a payload.

        The payload must carry a non-empty ``title`` and ``description``. It
        may not carry an ``id``. ``status`` defaults to unassigned; a pending
        item needs an ``assignee``, an unassigned one may not have one, and
        completed items cannot be created.

        Raises:
            WorkQueueError: If the payload breaks any of these rules.
        """
        title = payload.get("title")
        description = payload.get("description")
        if not title:
            raise WorkQueueError("Item must have a title.")
        if not description:
            raise WorkQueueError("Item must have a description.")
        if payload.get("id") is not None:
            raise WorkQueueError("Item must not have an id.")

        status = _parse_status(payload.get("status") or WorkStatus.UNASSIGNED)
        assignee = payload.get("assignee") or None
        if status == WorkStatus.UNASSIGNED and assignee:
            raise WorkQueueError("Unassigned items must not have an assignee.")
        if status == WorkStatus.PENDING and not assignee:
            raise WorkQueueError("Pending items must have an assignee.")
        if status == WorkStatus.COMPLETED:
            raise WorkQueueError("You cannot create a completed item.")

        item = WorkItem(
            id=next(_next_id),
            title=str(title),
            description=str(description),
            status=status,
            assignee=assignee,
        )
        self._items[item.id] = item
        logger.info(f"work item {item.id} created: {item.title}")
        return item

    def assign(self, item_id: int, assignee: str) -> WorkItem:
        """Assign an item, moving it to pending.

        Re-assigning a pending item is allowed; a completed item stays
        completed.

        Raises:
            UnknownWorkItemError: If no item has this id.
            WorkQueueError: If the assignee is empty or the item is completed.
        """
        item = self.get_detail(item_id)
        if not assignee:
            raise WorkQueueError("An assignee is required.")
        if item.status == WorkStatus.COMPLETED:
            raise WorkQueueError(f"Work item {item.id} is already completed.")
        item.assignee = assignee
        item.status = WorkStatus.PENDING
        logger.info(f"work item {item.id} assigned to {assignee}")
        return item

    def complete(self, item_id: int, comment: str | None = None) -> WorkItem:
        """Mark an item completed. Completing twice is harmless."""
        item = self.get_detail(item_id)
        item.status = WorkStatus.COMPLETED
        if comment:
            item.comments.append(comment)
        logger.info(f"work item {item.id} completed")
        return item

    def get_detail(self, item_id: int) -> WorkItem:
        """Return the item with this id.

        Raises:
            UnknownWorkItemError: If no item has this id.
        """
        try:
            key = int(item_id)
        except (TypeError, ValueError):
            raise UnknownWorkItemError(item_id) from None
        item = self._items.get(key)
        if item is None:
            raise UnknownWorkItemError(item_id)
        return item

    def list_by_status(self, status: WorkStatus | str) -> list[WorkItem]:
        wanted = _parse_status(status)
        return [item for item in self._items.values() if item.status == wanted]

    def items(self) -> list[WorkItem]:
        """Snapshot of all items in creation order."""
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
