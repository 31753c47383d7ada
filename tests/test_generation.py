"""Tests for model-backed value generation and chunk categorization."""

import json

import pytest

from conftest import ScriptedClient
from data_assistant.exceptions import (
    CategorizationError,
    GenerationError,
    GenerationLengthError,
    LengthMismatchError,
    RateLimitError,
)
from data_assistant.generation import (
    CategorizationResult,
    Categorizer,
    ColumnValueGenerator,
    strip_code_fences,
)
from data_assistant.prompts import DEFAULT_CATEGORIZATION_PROMPT


def result(value, cid="1", name="Animals & Pet Supplies"):
    return {"input": value, "category_id": cid, "category_name": name, "rationale": "fits"}


@pytest.mark.parametrize(
    "text, expected",
    [
        ('["a"]', '["a"]'),
        ('```json\n["a"]\n```', '["a"]'),
        ('```\n[1, 2]\n```', "[1, 2]"),
        ('  ["a"]  ', '["a"]'),
    ],
)
def test_strip_code_fences(text, expected):
    assert strip_code_fences(text) == expected


class TestColumnValueGenerator:

    def test_generate(self):
        client = ScriptedClient(['```json\n["Low", "High"]\n```'])
        values = ColumnValueGenerator(client).generate("band it", "price", [10, 200])
        assert values == ["Low", "High"]
        request = client.calls[0]
        assert request["json_output"] is True
        assert request["tools"] is None
        assert len(request["messages"]) == 1
        assert 'The logic is: "band it"' in request["messages"][0].content

    def test_length_mismatch(self):
        client = ScriptedClient(['["Low"]'])
        with pytest.raises(GenerationLengthError) as exc_info:
            ColumnValueGenerator(client).generate("band it", "price", [10, 200])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1

    @pytest.mark.parametrize("reply", ["", "   ", "not json", '{"a": 1}'])
    def test_bad_replies(self, reply):
        with pytest.raises(GenerationError, match="failed to generate column data"):
            ColumnValueGenerator(ScriptedClient([reply])).generate("x", "price", [1])

    def test_client_error(self):
        client = ScriptedClient([RateLimitError()])
        with pytest.raises(GenerationError, match="Rate limit exceeded"):
            ColumnValueGenerator(client).generate("x", "price", [1])


class TestCategorizer:

    def test_prompt_substitution(self):
        prompt = Categorizer(ScriptedClient()).build_prompt(
            DEFAULT_CATEGORIZATION_PROMPT, ["Dog leash", 3], "- ID: 1, Name: Pets"
        )
        assert "{{" not in prompt
        assert "- ID: 1, Name: Pets" in prompt
        assert '["Dog leash", 3]' in prompt

    def test_categorize(self):
        client = ScriptedClient([json.dumps([result("Dog leash"), result(42, cid=7)])])
        results = Categorizer(client).categorize(
            DEFAULT_CATEGORIZATION_PROMPT, ["Dog leash", 42], "tax"
        )
        assert results[0] == CategorizationResult(
            input="Dog leash", category_id="1", category_name="Animals & Pet Supplies", rationale="fits"
        )
        assert results[1].input == "42"
        assert results[1].category_id == "7"

    def test_empty_chunk_skips_model(self):
        client = ScriptedClient()
        assert Categorizer(client).categorize(DEFAULT_CATEGORIZATION_PROMPT, [], "tax") == []
        assert client.calls == []

    def test_length_mismatch(self):
        client = ScriptedClient([json.dumps([result("a")])])
        with pytest.raises(LengthMismatchError) as exc_info:
            Categorizer(client).categorize(DEFAULT_CATEGORIZATION_PROMPT, ["a", "b"], "tax")
        assert exc_info.value.expected == 2
        assert exc_info.value.chunk_index is None

    def test_invalid_objects(self):
        client = ScriptedClient([json.dumps([{"input": "a"}])])
        with pytest.raises(CategorizationError, match="invalid result"):
            Categorizer(client).categorize(DEFAULT_CATEGORIZATION_PROMPT, ["a"], "tax")

    def test_not_an_array(self):
        client = ScriptedClient([json.dumps(result("a"))])
        with pytest.raises(CategorizationError, match="expected a JSON array"):
            Categorizer(client).categorize(DEFAULT_CATEGORIZATION_PROMPT, ["a"], "tax")
