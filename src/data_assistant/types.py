"""Unified types for the data assistant.

These types provide a provider-agnostic interface for LLM interactions.
All clients convert their provider-specific formats to/from these types.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class MessageRole(Enum):
    """Role of a message in the conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class FinishReason(Enum):
    """Reason why the model stopped generating."""
    STOP = "stop"
    TOOL_USE = "tool_use"
    LENGTH = "length"
    ERROR = "error"


@dataclass
class ToolCall:
    """A tool call requested by the model."""
    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ToolResponse:
    """The outcome of a tool call, answering the call with the same id.

    The response payload is forwarded verbatim to the model, so it must
    stay JSON-serialisable.
    """
    id: str
    name: str
    response: dict[str, Any]


@dataclass
class UsageStats:
    """Token usage statistics."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class StepKind(Enum):
    """Kind of an entry in an agent execution trace."""
    THOUGHT = "thought"
    TOOL_CALL = "tool-call"
    TOOL_RESULT = "tool-result"
    FINAL_ANSWER = "final-answer"


@dataclass
class ExecutionStep:
    """One entry of the trace recorded while the agent works on a turn."""
    kind: StepKind
    content: Any

    def to_dict(self) -> dict[str, Any]:
        content = self.content
        if isinstance(content, (ToolCall, ToolResponse)):
            content = dict(vars(content))
        return {"type": self.kind.value, "content": content}


@dataclass
class UnifiedMessage:
    """A message in the conversation history.

    This is the canonical message format used throughout the agent.
    Each LLM client converts to/from this format internally.

    Tool results are not a separate role: they travel as a user-role
    message carrying ``tool_results``, answering the assistant message
    right before it that carried the matching ``tool_calls``.

    Attributes:
        role: The role of the message sender
        content: Text content of the message (optional for tool batches)
        tool_calls: Tool calls requested by the model (assistant only)
        tool_results: Results for the preceding tool calls (user only)
        execution_steps: Trace attached to the assistant reply ending a run
    """
    role: MessageRole
    content: str | None = None
    reasoning_content: str | None = None
    tool_calls: list[ToolCall] | None = None
    tool_results: list[ToolResponse] | None = None
    execution_steps: list[ExecutionStep] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        result: dict[str, Any] = {"role": self.role.value}
        if self.content is not None:
            result["content"] = self.content
        if self.reasoning_content is not None:
            result["reasoning_content"] = self.reasoning_content
        if self.tool_calls:
            result["tool_calls"] = [
                {"id": tc.id, "name": tc.name, "arguments": tc.arguments}
                for tc in self.tool_calls
            ]
        if self.tool_results:
            result["tool_results"] = [
                {"id": tr.id, "name": tr.name, "response": tr.response}
                for tr in self.tool_results
            ]
        if self.execution_steps:
            result["execution_steps"] = [s.to_dict() for s in self.execution_steps]
        return result


@dataclass
class UnifiedResponse:
    """Response from an LLM provider.

    Attributes:
        message: The assistant's response message
        finish_reason: Why the model stopped generating
        usage: Token usage statistics (optional)
    """
    message: UnifiedMessage
    finish_reason: FinishReason
    usage: UsageStats | None = None


# ==================== agent state types ====================


class AgentState(Enum):
    """State of the agent loop within one user turn."""
    AWAITING_MODEL = auto()
    EXECUTING_TOOLS = auto()
    COMPLETED = auto()
    ERROR = auto()


@dataclass
class AgentRunResult:
    """Result of an agent run.

    Attributes:
        state: Final state of the run (COMPLETED or ERROR)
        content: Final answer (if completed)
        steps: Execution trace recorded during the run
        rounds: Number of model calls made
        error: Error message (if error state)
    """
    state: AgentState
    content: str | None = None
    steps: list[ExecutionStep] = field(default_factory=list)
    rounds: int = 0
    error: str | None = None

    @property
    def is_completed(self) -> bool:
        """Check if the agent produced a final answer."""
        return self.state == AgentState.COMPLETED

    @property
    def is_error(self) -> bool:
        """Check if the agent encountered an error."""
        return self.state == AgentState.ERROR
