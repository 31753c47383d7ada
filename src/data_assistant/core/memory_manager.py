"""Conversation history for the agent.

This module keeps the ordered message history and enforces its pairing
rule: an assistant message carrying tool calls is always followed by one
user-role message carrying the matching tool results.
"""

from ..types import (
    ExecutionStep,
    MessageRole,
    ToolCall,
    ToolResponse,
    UnifiedMessage,
)


class MemoryManager:
    """Manages conversation history.

    History is append-only while the agent runs; only clear() drops
    messages, and it keeps the system prompt by default.
    """

    def __init__(self):
        """Initialize the memory manager with empty history."""
        self.history: list[UnifiedMessage] = []

    def add_message(self, message: UnifiedMessage) -> None:
        """Add a message to conversation history.

        Args:
            message: The message to add.

        Raises:
            ValueError: If the message would leave a tool-call batch unanswered.
        """
        if self.awaiting_tool_results and not message.tool_results:
            raise ValueError("Tool calls must be answered before adding another message")
        self.history.append(message)

    def add_tool_round(
        self,
        tool_calls: list[ToolCall],
        tool_results: list[ToolResponse],
        content: str | None = None,
    ) -> None:
        """Append one tool-call batch and its result batch.

        Args:
            tool_calls: Calls requested by the model, in order.
            tool_results: One result per call, ids matching.
            content: Optional narration the model gave alongside the calls.

        Raises:
            ValueError: If the results do not answer the calls one-to-one.
        """
        call_ids = [tc.id for tc in tool_calls]
        result_ids = [tr.id for tr in tool_results]
        if call_ids != result_ids:
            raise ValueError(
                f"Tool results {result_ids} do not match tool calls {call_ids}"
            )

        self.add_message(UnifiedMessage(
            role=MessageRole.ASSISTANT,
            content=content,
            tool_calls=list(tool_calls),
        ))
        self.add_message(UnifiedMessage(
            role=MessageRole.USER,
            tool_results=list(tool_results),
        ))

    def add_assistant_reply(
        self,
        content: str,
        steps: list[ExecutionStep] | None = None,
    ) -> UnifiedMessage:
        """Append the assistant's final text, with its execution trace."""
        message = UnifiedMessage(
            role=MessageRole.ASSISTANT,
            content=content,
            execution_steps=steps or None,
        )
        self.add_message(message)
        return message

    @property
    def awaiting_tool_results(self) -> bool:
        """True if the last message is a tool-call batch without results."""
        return bool(self.history) and bool(self.history[-1].tool_calls)

    def clear(self, keep_system: bool = True) -> None:
        """Clear conversation history.

        Args:
            keep_system: If True, preserve the system message.
        """
        if keep_system and self.history and self.history[0].role == MessageRole.SYSTEM:
            self.history = [self.history[0]]
        else:
            self.history = []

    def get_history(self) -> list[dict]:
        """Export history as list of dicts.

        Returns:
            List of message dictionaries.
        """
        return [msg.to_dict() for msg in self.history]
