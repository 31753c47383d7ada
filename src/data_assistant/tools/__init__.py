"""Tool implementations for the data assistant.

All tools inherit from BaseTool, declare a typed argument model, and
implement the execute method against the session workspace.
"""

from .base import BaseTool, ToolArguments
from .add_column import AddColumnArgs, AddNewColumnTool
from .column_summary import ColumnSummaryArgs, GetColumnSummaryTool

__all__ = [
    "BaseTool",
    "ToolArguments",
    "AddColumnArgs",
    "AddNewColumnTool",
    "ColumnSummaryArgs",
    "GetColumnSummaryTool",
    "get_default_tools",
]


def get_default_tools(generator) -> list[BaseTool]:
    """Get the default set of tools for the agent.

    Args:
        generator: ColumnValueGenerator used by add_new_column.
    """
    return [
        GetColumnSummaryTool(),
        AddNewColumnTool(generator),
    ]
