from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from ..analysis import get_column_summary
from ..exceptions import ColumnNotFoundError
from .base import BaseTool, ToolArguments

if TYPE_CHECKING:
    from ..workspace import Workspace


class ColumnSummaryArgs(ToolArguments):
    column_name: str = Field(alias="columnName", min_length=1)


class GetColumnSummaryTool(BaseTool):
    """Read-only statistics for a single column."""

    args_model = ColumnSummaryArgs

    @property
    def name(self) -> str:
        return "get_column_summary"

    @property
    def description(self) -> str:
        return "Provides a statistical summary of a single column in the dataset."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "columnName": {
                    "type": "string",
                    "description": "The name of the column to summarize.",
                },
            },
            "required": ["columnName"],
        }

    def execute(self, workspace: Workspace, args: ColumnSummaryArgs) -> dict[str, Any]:
        try:
            return get_column_summary(workspace.dataset, args.column_name).to_payload()
        except ColumnNotFoundError as e:
            # informational for the model, not a failure of the run
            return {"error": str(e)}
