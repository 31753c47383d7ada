"""Tests for conversation history bookkeeping."""

import pytest

from data_assistant.core import MemoryManager
from data_assistant.types import MessageRole, ToolCall, ToolResponse, UnifiedMessage


def test_tool_round_pairs_messages():
    memory = MemoryManager()
    calls = [ToolCall(id="a", name="t", arguments={}), ToolCall(id="b", name="t", arguments={})]
    results = [ToolResponse(id="a", name="t", response={}), ToolResponse(id="b", name="t", response={})]
    memory.add_tool_round(calls, results, content="checking")

    assert [m.role for m in memory.history] == [MessageRole.ASSISTANT, MessageRole.USER]
    assert memory.history[0].content == "checking"
    assert memory.history[1].tool_results == results
    assert not memory.awaiting_tool_results


def test_mismatched_results_rejected():
    memory = MemoryManager()
    calls = [ToolCall(id="a", name="t", arguments={})]
    with pytest.raises(ValueError, match="do not match"):
        memory.add_tool_round(calls, [ToolResponse(id="x", name="t", response={})])
    assert memory.history == []


def test_unanswered_calls_block_new_messages():
    memory = MemoryManager()
    memory.add_message(UnifiedMessage(
        role=MessageRole.ASSISTANT, tool_calls=[ToolCall(id="a", name="t", arguments={})]
    ))
    assert memory.awaiting_tool_results
    with pytest.raises(ValueError):
        memory.add_message(UnifiedMessage(role=MessageRole.USER, content="hi"))


def test_clear_keeps_system_message():
    memory = MemoryManager()
    memory.add_message(UnifiedMessage(role=MessageRole.SYSTEM, content="sys"))
    memory.add_message(UnifiedMessage(role=MessageRole.USER, content="hi"))
    memory.clear()
    assert [m.content for m in memory.history] == ["sys"]
    memory.clear(keep_system=False)
    assert memory.history == []
