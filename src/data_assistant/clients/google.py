"""Google Gemini client implementation using the google-genai SDK.

This client handles communication with the Google Gemini API and normalizes
responses to the unified format.

Google Gemini has unique requirements:
- Uses "parts" format for message content
- Tool calls use "function_call" in parts
- Tool results use "function_response" in parts, sent in a user turn
- System instruction is a separate parameter
- Role names: "user" and "model" (not "assistant")

Supported models:
- gemini-2.5-flash (default)
- gemini-2.5-pro
- gemini-2.0-flash
"""

import os
import uuid
from typing import Any

from google import genai
from google.genai import types
from google.genai.errors import APIError, ClientError, ServerError

from ..exceptions import (
    AuthenticationError,
    InvalidResponseError,
    ProviderUnavailableError,
    RateLimitError,
)
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

# supported configuration keys for google
SUPPORTED_CONFIG_KEYS = {
    "temperature",
    "top_p",
    "top_k",
    "max_tokens",
    "stop_sequences",
    "thinking_budget",
    "function_calling_mode",
}


class GoogleClient(BaseLLMClient):
    """Google Gemini API client using the google-genai SDK.

    Supports:
    - Generation parameters: temperature, top_p, top_k, max_tokens
    - Thinking budget
    - Function calling modes: AUTO, ANY, NONE
    - JSON replies via response_mime_type
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.5-flash",
        client_config: dict | None = None,
    ):
        """Initialize the Google client.

        Args:
            api_key: Google API key. Defaults to GOOGLE_API_KEY or GEMINI_API_KEY env var.
            model: Model to use. Defaults to gemini-2.5-flash.
            client_config: Optional configuration parameters:
                - temperature: float
                - top_p: float
                - top_k: int
                - max_tokens: int (default 8192)
                - stop_sequences: list[str]
                - thinking_budget: int
                - function_calling_mode: str ("AUTO", "ANY", "NONE")
        """
        super().__init__(client_config)

        resolved_key = api_key or os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
        if not resolved_key:
            raise ValueError("Google API key not found. Set GOOGLE_API_KEY or GEMINI_API_KEY env var.")

        self.client = genai.Client(api_key=resolved_key)
        self.model_name = model
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the client configuration."""
        if not self.client_config:
            return

        unsupported = set(self.client_config.keys()) - SUPPORTED_CONFIG_KEYS
        if unsupported:
            raise ValueError(f"Unsupported config keys for Google: {unsupported}")

        mode = self.client_config.get("function_calling_mode")
        if mode and mode not in ("AUTO", "ANY", "NONE"):
            raise ValueError(f"Invalid function_calling_mode: {mode}. Must be AUTO, ANY, or NONE.")

    def generate(
        self,
        messages: list[UnifiedMessage],
        tools: list[BaseTool] | None = None,
        json_output: bool = False,
    ) -> UnifiedResponse:
        """Generate a response from Google Gemini."""
        system_instruction, converted_messages = self._convert_messages(messages)
        converted_tools = self._convert_tools(tools) if tools else None

        config = self._build_generation_config(converted_tools, system_instruction, json_output)
        response = self._call_api(converted_messages, config)
        return self._parse_response(response)

    @with_retry(max_retries=3, initial_delay=1.0)
    def _call_api(self, contents: list[types.Content], config: types.GenerateContentConfig) -> Any:
        """Call the API, mapping SDK errors onto the client error hierarchy."""
        try:
            return self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        except ClientError as e:
            error_msg = str(e).lower()
            if "unauthorized" in error_msg or "authentication" in error_msg or "api key" in error_msg:
                raise AuthenticationError(f"Google authentication failed: {e}") from e
            if getattr(e, "code", None) == 429 or "resource_exhausted" in error_msg:
                raise RateLimitError("Google rate limit exceeded") from e
            raise InvalidResponseError(f"Invalid request to Google API: {e}") from e
        except ServerError as e:
            raise ProviderUnavailableError(f"Google API unavailable: {e}") from e
        except APIError as e:
            raise InvalidResponseError(f"Google API error: {e}") from e

    def _build_generation_config(
        self,
        tools: list[types.FunctionDeclaration] | None,
        system_instruction: str | None = None,
        json_output: bool = False,
    ) -> types.GenerateContentConfig:
        """Build the generation config from client configuration."""
        cfg = self.client_config or {}

        config_kwargs: dict[str, Any] = {
            "max_output_tokens": cfg.get("max_tokens", 8192),
        }

        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction

        if "temperature" in cfg:
            config_kwargs["temperature"] = cfg["temperature"]
        if "top_p" in cfg:
            config_kwargs["top_p"] = cfg["top_p"]
        if "top_k" in cfg:
            config_kwargs["top_k"] = cfg["top_k"]
        if "stop_sequences" in cfg:
            config_kwargs["stop_sequences"] = cfg["stop_sequences"]

        if cfg.get("thinking_budget") is not None:
            config_kwargs["thinking_config"] = types.ThinkingConfig(
                thinking_budget=cfg["thinking_budget"]
            )

        if json_output:
            config_kwargs["response_mime_type"] = "application/json"

        if tools:
            config_kwargs["tools"] = [types.Tool(function_declarations=tools)]
            mode = cfg.get("function_calling_mode", "AUTO")
            config_kwargs["tool_config"] = types.ToolConfig(
                function_calling_config=types.FunctionCallingConfig(mode=mode)
            )

        return types.GenerateContentConfig(**config_kwargs)

    def _convert_messages(
        self, messages: list[UnifiedMessage]
    ) -> tuple[str | None, list[types.Content]]:
        """Convert unified messages to Gemini format."""
        system_instruction = None
        converted: list[types.Content] = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_instruction = msg.content

            elif msg.role == MessageRole.USER:
                parts: list[types.Part] = []
                if msg.content:
                    parts.append(types.Part.from_text(text=msg.content))
                for tr in msg.tool_results or []:
                    parts.append(types.Part.from_function_response(
                        name=tr.name,
                        response=tr.response,
                    ))
                if parts:
                    converted.append(types.Content(role="user", parts=parts))

            elif msg.role == MessageRole.ASSISTANT:
                parts = []
                if msg.content:
                    parts.append(types.Part.from_text(text=msg.content))
                for tc in msg.tool_calls or []:
                    parts.append(types.Part.from_function_call(
                        name=tc.name,
                        args=tc.arguments,
                    ))
                if parts:
                    converted.append(types.Content(role="model", parts=parts))

        return system_instruction, converted

    def _convert_tools(self, tools: list[BaseTool]) -> list[types.FunctionDeclaration]:
        """Convert tools to Gemini function declaration format."""
        return [
            types.FunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters=tool.parameters,
            )
            for tool in tools
        ]

    def _parse_response(self, response: Any) -> UnifiedResponse:
        """Parse Gemini response into unified format."""
        try:
            candidate = response.candidates[0]
            parts = candidate.content.parts if candidate.content and candidate.content.parts else []

            tool_calls = []
            text_content = ""
            reasoning_content = ""

            for part in parts:
                if getattr(part, "thought", None):
                    reasoning_content += part.text or ""
                elif getattr(part, "text", None):
                    text_content += part.text
                elif getattr(part, "function_call", None):
                    fc = part.function_call
                    tool_calls.append(ToolCall(
                        id=fc.id or f"call_{fc.name}_{uuid.uuid4().hex[:12]}",
                        name=fc.name,
                        arguments=dict(fc.args) if fc.args else {},
                    ))

            finish_reason = FinishReason.STOP
            if candidate.finish_reason and str(candidate.finish_reason).endswith("MAX_TOKENS"):
                finish_reason = FinishReason.LENGTH
            if tool_calls:
                finish_reason = FinishReason.TOOL_USE

            usage = None
            if getattr(response, "usage_metadata", None):
                um = response.usage_metadata
                usage = UsageStats(
                    prompt_tokens=getattr(um, "prompt_token_count", 0) or 0,
                    completion_tokens=getattr(um, "candidates_token_count", 0) or 0,
                    total_tokens=getattr(um, "total_token_count", 0) or 0,
                )

            return UnifiedResponse(
                message=UnifiedMessage(
                    role=MessageRole.ASSISTANT,
                    content=text_content if text_content else None,
                    reasoning_content=reasoning_content if reasoning_content else None,
                    tool_calls=tool_calls if tool_calls else None,
                ),
                finish_reason=finish_reason,
                usage=usage,
            )
        except Exception as e:
            raise InvalidResponseError(f"Failed to parse Google response: {e}") from e
