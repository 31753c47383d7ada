from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import ToolValidationError

if TYPE_CHECKING:
    from ..workspace import Workspace


class ToolArguments(BaseModel):
    """Base for the typed argument model of a tool.

    Fields use snake_case names with camelCase aliases, which are the names
    the model sees in the function declaration.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, str_strip_whitespace=True)


class BaseTool(ABC):
    """Abstract base class for all tools.

    A tool declares its argument model in ``args_model``. The executor
    validates the raw arguments from the model against it before calling
    ``execute``, so tools only ever see well-formed, typed arguments.
    """

    args_model: ClassVar[type[ToolArguments]] = ToolArguments

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return the tool description."""
        pass

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """Return the JSON schema for tool parameters."""
        pass

    @abstractmethod
    def execute(self, workspace: Workspace, args: ToolArguments) -> dict[str, Any]:
        """Execute the tool and return its JSON-serialisable result payload."""
        pass

    def validate_arguments(self, arguments: dict[str, Any]) -> ToolArguments:
        """Validate raw model-supplied arguments.

        Raises:
            ToolValidationError: If the arguments do not fit ``args_model``.
        """
        try:
            return self.args_model.model_validate(arguments or {})
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ToolValidationError(self.name, errors) from e

    def to_schema(self) -> dict[str, Any]:
        """Return the tool schema for LLM function calling."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
