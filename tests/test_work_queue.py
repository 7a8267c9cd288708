"""Tests for the work item state machine."""

import pytest

from aether_swarm.core import WorkQueue
from aether_swarm.exceptions import UnknownWorkItemError, WorkQueueError
from aether_swarm.types import WorkStatus


def make_item(queue, title="Build login", description="A login form with validation."):
    return queue.create({"title": title, "description": description})


class TestCreate:
    def test_defaults_to_unassigned(self, work_queue):
        item = make_item(work_queue)
        assert item.status == WorkStatus.UNASSIGNED
        assert item.assignee is None
        assert item.comments == []
        assert item.id >= 1000

    def test_ids_increase_across_queues(self, work_queue):
        first = make_item(work_queue)
        second = make_item(WorkQueue())
        third = make_item(work_queue)
        assert first.id < second.id < third.id
        assert third.id == second.id + 1

    def test_pending_with_assignee(self, work_queue):
        item = work_queue.create({
            "title": "t", "description": "d", "status": "pending", "assignee": "Bao",
        })
        assert item.status == WorkStatus.PENDING
        assert item.assignee == "Bao"

    @pytest.mark.parametrize("payload, message", [
        ({"description": "d"}, "title"),
        ({"title": "t"}, "description"),
        ({"title": "", "description": "d"}, "title"),
        ({"title": "t", "description": "d", "id": 5}, "must not have an id"),
        ({"title": "t", "description": "d", "assignee": "Bao"}, "must not have an assignee"),
        ({"title": "t", "description": "d", "status": "pending"}, "must have an assignee"),
        ({"title": "t", "description": "d", "status": "completed"}, "completed"),
        ({"title": "t", "description": "d", "status": "archived"}, "Unknown status"),
    ])
    def test_rejections(self, work_queue, payload, message):
        with pytest.raises(WorkQueueError, match=message):
            work_queue.create(payload)
        assert len(work_queue) == 0


class TestAssign:
    def test_moves_to_pending(self, work_queue):
        item = make_item(work_queue)
        work_queue.assign(item.id, "Bao")
        assert item.status == WorkStatus.PENDING
        assert item.assignee == "Bao"

    def test_reassignment_is_allowed(self, work_queue):
        item = make_item(work_queue)
        work_queue.assign(item.id, "Bao")
        work_queue.assign(item.id, "Chen")
        assert item.status == WorkStatus.PENDING
        assert item.assignee == "Chen"

    def test_unknown_id(self, work_queue):
        with pytest.raises(UnknownWorkItemError, match="Work item 1 not found."):
            work_queue.assign(1, "Bao")

    def test_empty_assignee(self, work_queue):
        item = make_item(work_queue)
        with pytest.raises(WorkQueueError, match="assignee is required"):
            work_queue.assign(item.id, "")
        assert item.status == WorkStatus.UNASSIGNED

    def test_completed_is_terminal(self, work_queue):
        item = make_item(work_queue)
        work_queue.assign(item.id, "Bao")
        work_queue.complete(item.id)
        with pytest.raises(WorkQueueError, match="already completed"):
            work_queue.assign(item.id, "Chen")
        assert item.status == WorkStatus.COMPLETED
        assert item.assignee == "Bao"


class TestComplete:
    def test_complete_keeps_assignee(self, work_queue):
        item = make_item(work_queue)
        work_queue.assign(item.id, "Bao")
        work_queue.complete(item.id, comment="Done, tests pass.")
        detail = work_queue.get_detail(item.id)
        assert detail.status == WorkStatus.COMPLETED
        assert detail.assignee == "Bao"
        assert detail.comments == ["Done, tests pass."]

    def test_complete_is_idempotent(self, work_queue):
        item = make_item(work_queue)
        work_queue.complete(item.id)
        work_queue.complete(item.id)
        assert item.status == WorkStatus.COMPLETED
        assert item.comments == []

    def test_unassigned_item_can_be_completed(self, work_queue):
        item = make_item(work_queue)
        work_queue.complete(item.id)
        assert item.status == WorkStatus.COMPLETED

    def test_unknown_id(self, work_queue):
        with pytest.raises(UnknownWorkItemError):
            work_queue.complete(42)


class TestReads:
    def test_get_detail_accepts_numeric_ids(self, work_queue):
        item = make_item(work_queue)
        assert work_queue.get_detail(float(item.id)) is item
        assert work_queue.get_detail(str(item.id)) is item

    def test_get_detail_unknown(self, work_queue):
        with pytest.raises(UnknownWorkItemError):
            work_queue.get_detail("not-a-number")

    def test_list_by_status(self, work_queue):
        a = make_item(work_queue, title="a")
        b = make_item(work_queue, title="b")
        c = make_item(work_queue, title="c")
        work_queue.assign(b.id, "Bao")
        work_queue.complete(c.id)

        assert work_queue.list_by_status("unassigned") == [a]
        assert work_queue.list_by_status(WorkStatus.PENDING) == [b]
        assert work_queue.list_by_status("completed") == [c]
        assert work_queue.items() == [a, b, c]

    def test_list_by_unknown_status(self, work_queue):
        with pytest.raises(WorkQueueError):
            work_queue.list_by_status("archived")

    def test_to_dict(self, work_queue):
        item = make_item(work_queue)
        assert item.to_dict() == {
            "id": item.id,
            "title": "Build login",
            "description": "A login form with validation.",
            "status": "unassigned",
            "assignee": None,
            "comments": [],
        }
