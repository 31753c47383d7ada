"""Prompt construction and formatting utilities.

This module handles the creation and formatting of prompts and messages
for the data assistant.
"""

from ..clients.base import BaseLLMClient
from ..prompts import COLUMNS_SUFFIX, NO_DATASET_SUFFIX
from ..tools.base import BaseTool
from ..types import MessageRole, UnifiedMessage


class PromptBuilder:
    """Constructs and formats prompts for the agent.

    The system prompt is rebuilt for every model call because it names the
    dataset's current columns, which change when the agent adds one.
    """

    def __init__(self, base_prompt: str):
        """Initialize the prompt builder.

        Args:
            base_prompt: The base system prompt template.
        """
        self.base_prompt = base_prompt

    def format_system_prompt(
        self,
        tools: list[BaseTool],
        client: BaseLLMClient,
        column_headers: list[str],
    ) -> str:
        """Format the system prompt with tool descriptions and columns.

        Args:
            tools: List of available tools.
            client: The LLM client (used for provider-specific formatting).
            column_headers: Current dataset headers, in order.

        Returns:
            Formatted system prompt string.
        """
        prompt = client.format_system_prompt(self.base_prompt, tools)
        if column_headers:
            return prompt + COLUMNS_SUFFIX.format(columns=", ".join(column_headers))
        return prompt + NO_DATASET_SUFFIX

    def build_system_message(self, content: str) -> UnifiedMessage:
        """Create a system message."""
        return UnifiedMessage(role=MessageRole.SYSTEM, content=content)

    def build_user_message(self, content: str) -> UnifiedMessage:
        """Create a user message."""
        return UnifiedMessage(role=MessageRole.USER, content=content)
