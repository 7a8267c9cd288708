"""Prompt construction and formatting utilities.

This module composes an agent's fixed system instructions at hiring time
and the per-call system instruction that adds the live team roster.
"""

from .directory import Directory

ROSTER_HEADER = "Current team directory (name: role):"


class PromptBuilder:
    """Constructs system instructions for an agent.

    The instructions fixed at hiring time never change; the roster block is
    rebuilt from the directory on every model call so that agents see
    colleagues hired after them.
    """

    def __init__(self, base_instructions: str, directory: Directory | None = None):
        """Initialize the prompt builder.

        Args:
            base_instructions: The agent's immutable system instructions.
            directory: Directory whose listing is appended on every call.
        """
        self.base_instructions = base_instructions
        self.directory = directory

    @staticmethod
    def compose_instructions(
        name: str,
        role_instructions: str,
        persona_instructions: str,
        tools_reference: str,
    ) -> str:
        """Compose the immutable instructions of a newly hired agent."""
        return (
            f"You are {name}.\n"
            f"{role_instructions.strip()}\n\n"
            f"A little about your personality:\n"
            f"{persona_instructions.strip()}\n\n"
            f"Depending on your role, you will have various tools at your disposal.\n\n"
            f"{tools_reference.strip()}\n"
        )

    def build_system_instruction(self) -> str:
        """Return the base instructions followed by the current roster."""
        if self.directory is None:
            return self.base_instructions
        listing = self.directory.get_listing()
        return f"{self.base_instructions}\n\n{ROSTER_HEADER}\n{listing}"
