"""Conversation history for a single agent.

This module keeps an agent's turns in causal order and repairs the tail
of the history when a previous call was abandoned mid-loop.
"""

from ..types import FunctionCall, Turn, TurnRole

ABANDONED_CALL_MESSAGE = (
    "Operation abandoned: the request that issued this call timed out "
    "or was cancelled before it finished."
)


class MemoryManager:
    """Manages an agent's conversation history.

    The history is append-only. Every function call in a model turn is
    answered by exactly one tool turn before the next model turn.
    """

    def __init__(self):
        """Initialize the memory manager with an empty history."""
        self.history: list[Turn] = []

    def add_turn(self, turn: Turn) -> None:
        """Append a turn to the conversation history."""
        self.history.append(turn)

    def add_tool_result(self, call: FunctionCall, text: str) -> None:
        """Append the result of ``call`` to the conversation history."""
        self.history.append(Turn.tool_result(call, text))

    def unanswered_calls(self) -> list[FunctionCall]:
        """Function calls of the last model turn that have no result yet."""
        answered: set[str] = set()
        for turn in reversed(self.history):
            if turn.role == TurnRole.TOOL and turn.tool_call_id:
                answered.add(turn.tool_call_id)
            elif turn.role == TurnRole.MODEL:
                return [fc for fc in turn.function_calls if fc.id not in answered]
            else:
                break
        return []

    def cleanup_pending_state(self) -> None:
        """Answer any calls left open by an abandoned loop.

        If a previous call timed out while a tool was running, its function
        call has no result. A placeholder result is added so the model sees a
        well-formed history on the next request.
        """
        for call in self.unanswered_calls():
            self.add_tool_result(call, ABANDONED_CALL_MESSAGE)

    def get_history(self) -> list[dict]:
        """Export history as list of dicts."""
        return [turn.to_dict() for turn in self.history]

    def __len__(self) -> int:
        return len(self.history)
