from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from ..exceptions import GenerationError
from ..logging import get_logger
from .base import BaseTool, ToolArguments

if TYPE_CHECKING:
    from ..generation import ColumnValueGenerator
    from ..workspace import Workspace

logger = get_logger(__name__)


class AddColumnArgs(ToolArguments):
    new_column_name: str = Field(alias="newColumnName", min_length=1)
    source_column_name: str = Field(alias="sourceColumnName", min_length=1)
    logic_description: str = Field(alias="logicDescription", min_length=1)


class AddNewColumnTool(BaseTool):
    """Derives a new column from a source column using a natural-language rule.

    Value generation is delegated to a ColumnValueGenerator. Generated
    values are paired with rows by position, and the new dataset is committed
    to the workspace in one step, so a failure leaves the dataset untouched.
    """

    args_model = AddColumnArgs

    def __init__(self, generator: ColumnValueGenerator):
        self.generator = generator

    @property
    def name(self) -> str:
        return "add_new_column"

    @property
    def description(self) -> str:
        return "Adds a new column to the dataset based on a transformation of a source column."

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "newColumnName": {
                    "type": "string",
                    "description": "The name for the new column.",
                },
                "sourceColumnName": {
                    "type": "string",
                    "description": "The name of the column to use as input for the transformation.",
                },
                "logicDescription": {
                    "type": "string",
                    "description": "A clear, natural language description of the logic to be applied.",
                },
            },
            "required": ["newColumnName", "sourceColumnName", "logicDescription"],
        }

    def execute(self, workspace: Workspace, args: AddColumnArgs) -> dict[str, Any]:
        dataset = workspace.dataset

        if not dataset.has_column(args.source_column_name):
            return {
                "success": False,
                "message": f"Source column '{args.source_column_name}' not found.",
            }
        if dataset.has_column(args.new_column_name):
            return {
                "success": False,
                "message": f"Column '{args.new_column_name}' already exists. Choose another name.",
            }

        source_values = dataset.column_values(args.source_column_name)
        try:
            new_values = self.generator.generate(
                args.logic_description, args.source_column_name, source_values
            )
        except GenerationError as e:
            logger.warning(f"add_new_column failed for '{args.new_column_name}': {e}")
            return {
                "success": False,
                "message": f"Failed to generate column data: {e}",
            }

        workspace.commit(dataset.with_columns({args.new_column_name: new_values}))
        return {
            "success": True,
            "message": f"Column '{args.new_column_name}' added based on your logic.",
        }
