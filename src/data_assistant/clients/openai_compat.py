"""Base class for OpenAI-compatible API clients.

This class provides shared implementation for providers that use the
OpenAI-compatible chat completions format (OpenAI, Groq, local servers, etc.).
"""

import json
from abc import abstractmethod
from contextlib import contextmanager
from typing import Any

from ..exceptions import InvalidResponseError
from ..tools.base import BaseTool
from ..types import (
    FinishReason,
    MessageRole,
    ToolCall,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)
from .base import BaseLLMClient, with_retry


class OpenAICompatibleClient(BaseLLMClient):
    """Base class for clients using OpenAI-compatible API format.

    Subclasses must implement:
    - _create_client(): initialize the provider SDK client
    - _get_supported_config_keys(): return set of supported config parameters
    - _get_default_api_args(): return provider-specific default arguments
    - _handle_api_errors(): context manager for exception mapping
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        client_config: dict | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key for the provider
            model: Model name to use
            client_config: Optional configuration parameters
        """
        super().__init__(client_config)
        self.model = model
        self.client = self._create_client(api_key)

    @abstractmethod
    def _create_client(self, api_key: str | None) -> Any:
        """Create the provider's SDK client instance."""

    @abstractmethod
    def _get_supported_config_keys(self) -> set[str]:
        """Return the set of config keys supported by this provider."""

    @abstractmethod
    def _get_default_api_args(self) -> dict[str, Any]:
        """Return provider-specific default API arguments."""

    @abstractmethod
    @contextmanager
    def _handle_api_errors(self):
        """Context manager for handling provider-specific errors.

        Should catch provider exceptions and re-raise as our exceptions:
        - AuthenticationError
        - RateLimitError
        - ProviderUnavailableError
        """

    # ==================== shared implementations ====================

    def generate(
        self,
        messages: list[UnifiedMessage],
        tools: list[BaseTool] | None = None,
        json_output: bool = False,
    ) -> UnifiedResponse:
        """Generate a response from the provider.

        ``json_output`` is accepted for interface parity; the chat API's
        JSON mode only allows top-level objects, so the prompt carries the
        format instructions instead.

        Raises:
            AuthenticationError: If API key is invalid
            RateLimitError: If rate limit is exceeded
            ProviderUnavailableError: If API is unavailable
        """
        api_args: dict[str, Any] = {
            "model": self.model,
            "messages": self._convert_messages(messages),
            **self._get_default_api_args(),
        }
        if tools:
            api_args["tools"] = self._convert_tools(tools)
            api_args["tool_choice"] = "auto"

        # apply config overrides for supported keys
        if self.client_config:
            supported_keys = self._get_supported_config_keys()
            for key, value in self.client_config.items():
                if key in supported_keys:
                    api_args[key] = value

        return self._parse_response(self._call_api(api_args))

    @with_retry(max_retries=3, initial_delay=1.0)
    def _call_api(self, api_args: dict[str, Any]) -> Any:
        with self._handle_api_errors():
            return self.client.chat.completions.create(**api_args)

    def _convert_messages(self, messages: list[UnifiedMessage]) -> list[dict[str, Any]]:
        """Convert unified messages to OpenAI-compatible format.

        A tool-result batch becomes one ``tool`` message per result.
        """
        converted: list[dict[str, Any]] = []
        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                converted.append({"role": "system", "content": msg.content})
            elif msg.role == MessageRole.USER and msg.tool_results:
                converted.extend(
                    {
                        "role": "tool",
                        "tool_call_id": tr.id,
                        "content": json.dumps(tr.response, default=str),
                    }
                    for tr in msg.tool_results
                )
            elif msg.role == MessageRole.USER:
                converted.append({"role": "user", "content": msg.content or ""})
            elif msg.role == MessageRole.ASSISTANT:
                converted.append(self._convert_assistant_message(msg))
        return converted

    def _convert_assistant_message(self, message: UnifiedMessage) -> dict[str, Any]:
        """Convert assistant message handling tool calls."""
        entry: dict[str, Any] = {"role": "assistant", "content": message.content}
        if message.tool_calls:
            entry["tool_calls"] = [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {
                        "name": tc.name,
                        "arguments": json.dumps(tc.arguments),
                    },
                }
                for tc in message.tool_calls
            ]
        return entry

    def _map_finish_reason(self, reason: str | None) -> FinishReason:
        """Map OpenAI-compatible finish reason to unified FinishReason."""
        if not reason:
            return FinishReason.STOP
        mapping = {
            "stop": FinishReason.STOP,
            "tool_calls": FinishReason.TOOL_USE,
            "length": FinishReason.LENGTH,
        }
        return mapping.get(reason, FinishReason.STOP)

    def _convert_tools(self, tools: list[BaseTool]) -> list[dict[str, Any]]:
        """Convert tools to OpenAI-compatible function format."""
        return [tool.to_schema() for tool in tools]

    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse OpenAI-compatible response into unified format."""
        try:
            choice = response.choices[0]
            message = choice.message

            reasoning_content = getattr(message, "reasoning", None) or getattr(
                message, "reasoning_content", None
            )

            tool_calls = None
            if message.tool_calls:
                tool_calls = [
                    ToolCall(
                        id=tc.id,
                        name=tc.function.name,
                        arguments=json.loads(tc.function.arguments or "{}"),
                    )
                    for tc in message.tool_calls
                ]

            usage = None
            if response.usage:
                usage = UsageStats(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                )

            return UnifiedResponse(
                message=UnifiedMessage(
                    role=MessageRole.ASSISTANT,
                    content=message.content,
                    reasoning_content=reasoning_content,
                    tool_calls=tool_calls,
                ),
                finish_reason=self._map_finish_reason(choice.finish_reason),
                usage=usage,
            )
        except Exception as e:
            raise InvalidResponseError(
                f"Failed to parse {self.__class__.__name__} response: {e}"
            ) from e
