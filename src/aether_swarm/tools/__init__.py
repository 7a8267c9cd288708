"""Tool implementations for the swarm.

All tools inherit from BaseTool and implement the async execute method.
Which agent gets which tool is decided by the CapabilityPolicy.
"""

from .base import BaseTool
from .hiring import HireTool
from .messaging import BroadcastTool, MessageRouter, MessageTool, sender_header
from .work_items import (
    AssignWorkItemTool,
    CompleteWorkItemTool,
    CreateWorkItemTool,
    GetWorkItemDetailTool,
)

__all__ = [
    "BaseTool",
    "AssignWorkItemTool",
    "BroadcastTool",
    "CompleteWorkItemTool",
    "CreateWorkItemTool",
    "GetWorkItemDetailTool",
    "HireTool",
    "MessageRouter",
    "MessageTool",
    "sender_header",
]
