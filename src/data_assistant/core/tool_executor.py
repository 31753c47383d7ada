"""Tool execution logic for the agent.

This module dispatches tool calls by name against the session workspace.
Every outcome, success or failure, is returned as a ToolResponse payload:
the payload goes back to the model verbatim, and the model needs to see
failures to adjust its plan.
"""

from typing import Any

from ..exceptions import ToolExecutionError, ToolNotFoundError, ToolValidationError
from ..logging import get_logger
from ..tools.base import BaseTool
from ..types import ExecutionStep, StepKind, ToolCall, ToolResponse
from ..workspace import Workspace

logger = get_logger(__name__)


class ToolExecutor:
    """Dispatches tool calls against the current dataset.

    This is the only component that changes the dataset on the agent's
    behalf; tools that change it commit a new version to the workspace.
    """

    def __init__(self, tools: dict[str, BaseTool], workspace: Workspace):
        """Initialize the tool executor.

        Args:
            tools: Dictionary mapping tool names to tool instances.
            workspace: Holder of the current dataset.
        """
        self.tools = tools
        self.workspace = workspace

    def execute(self, tool_call: ToolCall) -> ToolResponse:
        """Execute a single tool call. Never raises.

        Args:
            tool_call: The tool call requested by the model.

        Returns:
            A ToolResponse whose id and name match the call.
        """
        return ToolResponse(
            id=tool_call.id,
            name=tool_call.name,
            response=self._dispatch(tool_call),
        )

    def _dispatch(self, tool_call: ToolCall) -> dict[str, Any]:
        tool = self.tools.get(tool_call.name)
        if tool is None:
            error = ToolNotFoundError(tool_call.name)
            logger.warning(str(error))
            return {"success": False, "message": str(error)}

        try:
            args = tool.validate_arguments(tool_call.arguments)
        except ToolValidationError as e:
            logger.warning(str(e))
            return {"success": False, "message": str(e), "errors": e.errors}

        logger.info(f"executing tool: {tool_call.name} with args: {tool_call.arguments}")
        try:
            result = tool.execute(self.workspace, args)
        except Exception as e:
            logger.exception(f"tool '{tool_call.name}' raised")
            error = ToolExecutionError(tool_call.name, e)
            return {"success": False, "message": str(error)}

        logger.debug(f"tool '{tool_call.name}' result: {result}")
        return result

    def execute_tool_calls(
        self,
        tool_calls: list[ToolCall],
        trace: list[ExecutionStep] | None = None,
    ) -> list[ToolResponse]:
        """Execute tool calls one after another, in the given order.

        Later calls see the dataset as left by earlier ones.

        Args:
            tool_calls: Tool calls in the order the model returned them.
            trace: Optional trace that receives a tool-call and a tool-result
                step per call.

        Returns:
            One ToolResponse per call, in the same order.
        """
        responses = []
        for tool_call in tool_calls:
            if trace is not None:
                trace.append(ExecutionStep(StepKind.TOOL_CALL, tool_call))
            response = self.execute(tool_call)
            if trace is not None:
                trace.append(ExecutionStep(StepKind.TOOL_RESULT, response))
            responses.append(response)
        return responses

    def get_tool(self, name: str) -> BaseTool | None:
        """Get a tool by name."""
        return self.tools.get(name)

    def has_tool(self, name: str) -> bool:
        """Check if a tool exists."""
        return name in self.tools
