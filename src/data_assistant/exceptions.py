"""Custom exception hierarchy for the data assistant.

This module defines all custom exceptions used throughout the package,
organized into logical categories: client errors, tool errors, data errors
and session errors.
"""


class AgentError(Exception):
    """Base exception for all data assistant errors."""


# =============================================================================
# Client Errors - Issues with LLM API interactions
# =============================================================================

class ClientError(AgentError):
    """Base class for LLM client errors."""


class AuthenticationError(ClientError):
    """API key is invalid or missing."""


class RateLimitError(ClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None):
        self.retry_after = retry_after
        if retry_after:
            message = f"{message}. Retry after: {retry_after}s"
        super().__init__(message)


class ModelNotFoundError(ClientError):
    """Requested model does not exist."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(f"Model not found: {model_name}")


class ProviderUnavailableError(ClientError):
    """Provider API is temporarily unavailable."""


class InvalidResponseError(ClientError):
    """Response from provider could not be parsed."""


# =============================================================================
# Agent Loop Errors
# =============================================================================

class MaxRoundsExceededError(AgentError):
    """The model kept requesting tools past the configured round limit."""

    def __init__(self, max_rounds: int):
        self.max_rounds = max_rounds
        super().__init__(
            f"Agent stopped after {max_rounds} rounds without a final answer"
        )


# =============================================================================
# Tool Errors - Issues with tool execution
# =============================================================================

class ToolError(AgentError):
    """Base class for tool execution errors."""


class ToolNotFoundError(ToolError):
    """Requested tool does not exist."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolExecutionError(ToolError):
    """Tool execution failed."""

    def __init__(self, tool_name: str, cause: Exception | str):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"Tool '{tool_name}' execution failed: {cause}")


class ToolValidationError(ToolError):
    """Tool arguments failed validation."""

    def __init__(self, tool_name: str, errors: list[str]):
        self.tool_name = tool_name
        self.errors = errors
        super().__init__(f"Tool '{tool_name}' validation failed: {', '.join(errors)}")


# =============================================================================
# Data Errors - Dataset access and model-backed transformations
# =============================================================================

class DataError(AgentError):
    """Base class for dataset and transformation errors."""


class NoDatasetLoadedError(DataError):
    """An operation needed a dataset but none has been loaded."""

    def __init__(self):
        super().__init__("No dataset loaded")


class ColumnNotFoundError(DataError):
    """Referenced column is not one of the dataset headers."""

    def __init__(self, column_name: str):
        self.column_name = column_name
        super().__init__(f"Column '{column_name}' not found.")


class DuplicateColumnError(DataError):
    """A new column would reuse an existing header."""

    def __init__(self, column_name: str):
        self.column_name = column_name
        super().__init__(f"Column '{column_name}' already exists.")


class GenerationError(DataError):
    """The model failed to generate values for a new column."""


class GenerationLengthError(GenerationError):
    """Generated values do not line up with the source column."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"AI returned an array of the wrong length. Expected {expected}, got {actual}."
        )


class CategorizationError(DataError):
    """The model failed to categorize a chunk of values."""


class LengthMismatchError(CategorizationError):
    """A categorization chunk came back with the wrong number of results."""

    def __init__(self, expected: int, actual: int, chunk_index: int | None = None):
        self.expected = expected
        self.actual = actual
        self.chunk_index = chunk_index
        where = f" in chunk {chunk_index + 1}" if chunk_index is not None else ""
        super().__init__(f"AI returned {actual} results for {expected} inputs{where}.")


# =============================================================================
# Session Errors
# =============================================================================

class SessionBusyError(AgentError):
    """Another operation is still running on this session."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Session is busy with: {operation}")
