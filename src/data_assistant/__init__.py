"""Data Assistant - a conversational assistant for tabular data.

This package provides a tool-using agent that inspects and transforms a
loaded dataset, a column profiler, and a batched categorization pipeline,
on top of multiple LLM providers through a unified interface.
"""

from .agent import DataAgent
from .dataset import Dataset
from .exceptions import (
    AgentError,
    ClientError,
    DataError,
    ToolError,
)
from .session import DataSession, create_session
from .types import (
    AgentRunResult,
    AgentState,
    ExecutionStep,
    FinishReason,
    MessageRole,
    StepKind,
    ToolCall,
    ToolResponse,
    UnifiedMessage,
    UnifiedResponse,
)
from .workspace import Workspace

__all__ = [
    # main entry points
    "DataAgent",
    "DataSession",
    "create_session",
    "Dataset",
    "Workspace",
    # types
    "AgentRunResult",
    "AgentState",
    "ExecutionStep",
    "FinishReason",
    "MessageRole",
    "StepKind",
    "ToolCall",
    "ToolResponse",
    "UnifiedMessage",
    "UnifiedResponse",
    # exceptions
    "AgentError",
    "ClientError",
    "DataError",
    "ToolError",
]
