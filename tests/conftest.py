"""Shared test fixtures and configuration."""

import json

import pytest
from unittest.mock import MagicMock

from data_assistant.clients.base import BaseLLMClient
from data_assistant.dataset import Dataset
from data_assistant.types import (
    FinishReason,
    MessageRole,
    ToolCall,
    UnifiedMessage,
    UnifiedResponse,
    UsageStats,
)
from data_assistant.workspace import Workspace


class ScriptedClient(BaseLLMClient):
    """LLM client that replays a fixed list of replies.

    Each reply is a UnifiedResponse, a string (final text), a list of
    ToolCalls, or an exception instance to raise. Every request is kept in
    ``calls`` for inspection.
    """

    def __init__(self, replies=None):
        super().__init__()
        self.replies = list(replies or [])
        self.calls = []

    def generate(self, messages, tools=None, json_output=False):
        self.calls.append({
            "messages": list(messages),
            "tools": tools,
            "json_output": json_output,
        })
        if not self.replies:
            raise AssertionError("ScriptedClient ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, UnifiedResponse):
            return reply
        if isinstance(reply, list):
            return tool_response(*reply)
        return text_response(reply)

    def _convert_messages(self, messages):
        return messages

    def _convert_tools(self, tools):
        return tools

    def _parse_response(self, response):
        return response


def text_response(content):
    return UnifiedResponse(
        message=UnifiedMessage(role=MessageRole.ASSISTANT, content=content),
        finish_reason=FinishReason.STOP,
    )


def tool_response(*tool_calls, content=None):
    return UnifiedResponse(
        message=UnifiedMessage(
            role=MessageRole.ASSISTANT,
            content=content,
            tool_calls=list(tool_calls),
        ),
        finish_reason=FinishReason.TOOL_USE,
    )


def json_reply(payload):
    return json.dumps(payload)


@pytest.fixture
def mock_client():
    """Create a mock LLM client."""
    client = MagicMock(spec=BaseLLMClient)
    return client


@pytest.fixture
def scripted_client():
    return ScriptedClient()


@pytest.fixture
def sample_dataset():
    """Five products with a numeric and a categorical column."""
    return Dataset.from_records(
        ["product", "price", "brand"],
        [
            {"product": "Red running shoes", "price": 25, "brand": "Acme"},
            {"product": "Leather wallet", "price": 100, "brand": "Acme"},
            {"product": "Espresso machine", "price": 200, "brand": "Brewco"},
            {"product": "Dog leash", "price": 49, "brand": None},
            {"product": "Garden hose", "price": "120", "brand": "Acme"},
        ],
    )


@pytest.fixture
def workspace(sample_dataset):
    return Workspace(sample_dataset, name="products.csv")


@pytest.fixture
def sample_tool_call():
    """Create a sample tool call."""
    return ToolCall(
        id="call_123",
        name="get_column_summary",
        arguments={"columnName": "price"},
    )


@pytest.fixture
def sample_response():
    """Create a sample unified response."""
    return UnifiedResponse(
        message=UnifiedMessage(
            role=MessageRole.ASSISTANT,
            content="The average price is 98.8.",
        ),
        finish_reason=FinishReason.STOP,
        usage=UsageStats(
            prompt_tokens=10,
            completion_tokens=5,
            total_tokens=15,
        ),
    )
