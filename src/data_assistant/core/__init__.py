"""Core agent components.

This module provides the extracted components from the main agent:
- PromptBuilder: Constructs and formats prompts
- ToolExecutor: Dispatches tool calls against the workspace
- MemoryManager: Manages conversation history
"""

from .memory_manager import MemoryManager
from .prompt_builder import PromptBuilder
from .tool_executor import ToolExecutor

__all__ = ["MemoryManager", "PromptBuilder", "ToolExecutor"]
