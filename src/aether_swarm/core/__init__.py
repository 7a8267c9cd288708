"""Core swarm components.

This module provides the building blocks the agents share:
- Directory: registry of live agents and roster text
- WorkQueue: work item state machine
- MemoryManager: per-agent conversation history
- PromptBuilder: system instructions plus roster
- ToolExecutor: resolves and runs function calls
"""

from .directory import Directory
from .memory_manager import MemoryManager
from .prompt_builder import PromptBuilder
from .tool_executor import ToolExecutor
from .work_queue import WorkItem, WorkQueue

__all__ = [
    "Directory",
    "MemoryManager",
    "PromptBuilder",
    "ToolExecutor",
    "WorkItem",
    "WorkQueue",
]
