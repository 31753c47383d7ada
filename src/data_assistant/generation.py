"""Model-backed value generation.

Two single-shot calls sit behind the data operations:

- ColumnValueGenerator turns a natural-language rule plus a source column
  into one new value per row (used by the add_new_column tool).
- Categorizer maps a chunk of values onto a taxonomy (used by the batched
  categorization pipeline).

Both send one user message, expect a raw JSON array back, and check that
the array lines up one-to-one with the inputs.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any, Sequence

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from .exceptions import (
    CategorizationError,
    ClientError,
    GenerationError,
    GenerationLengthError,
    LengthMismatchError,
)
from .logging import get_logger
from .prompts import (
    COLUMN_VALUES_PROMPT,
    SAMPLE_DATA_PLACEHOLDER,
    TAXONOMY_PLACEHOLDER,
)
from .types import MessageRole, UnifiedMessage

if TYPE_CHECKING:
    from .clients.base import BaseLLMClient

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


class CategorizationResult(BaseModel):
    """One categorized input value, as returned by the model."""

    model_config = ConfigDict(extra="ignore")

    # missing cells are sent as null and may come back as null
    input: str | None = None
    category_id: str | None = None
    category_name: str | None
    rationale: str = ""

    @field_validator("input", "category_id", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("rationale", mode="before")
    @classmethod
    def _null_rationale(cls, value: Any) -> Any:
        return "" if value is None else value


_RESULTS_ADAPTER = TypeAdapter(list[CategorizationResult])


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    return _FENCE_RE.sub("", text.strip())


def _complete_json(client: BaseLLMClient, prompt: str) -> Any:
    """Send a single prompt and decode the JSON reply.

    Raises:
        ValueError: If the reply is empty or not valid JSON.
        ClientError: If the model call itself fails.
    """
    response = client.generate(
        messages=[UnifiedMessage(role=MessageRole.USER, content=prompt)],
        json_output=True,
    )
    text = response.message.content
    if not text or not text.strip():
        raise ValueError("The AI model returned an empty response.")

    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"failed to parse model JSON: {cleaned[:200]!r}")
        raise ValueError("The AI model returned malformed JSON.") from e


class ColumnValueGenerator:
    """Generates a new column's values from a source column and a rule."""

    def __init__(self, client: BaseLLMClient):
        self.client = client

    def build_prompt(
        self,
        logic_description: str,
        source_column_name: str,
        source_values: Sequence[Any],
    ) -> str:
        return COLUMN_VALUES_PROMPT.format(
            logic=logic_description,
            column=source_column_name,
            values=json.dumps(list(source_values), default=str),
            count=len(source_values),
        )

    def generate(
        self,
        logic_description: str,
        source_column_name: str,
        source_values: Sequence[Any],
    ) -> list[Any]:
        """Return one generated value per source value, in order.

        Raises:
            GenerationLengthError: If the model returned the wrong number of values.
            GenerationError: For any other failure (model call, empty or malformed output).
        """
        prompt = self.build_prompt(logic_description, source_column_name, source_values)
        logger.debug(
            f"generating {len(source_values)} values from column '{source_column_name}'"
        )

        try:
            values = _complete_json(self.client, prompt)
        except (ValueError, ClientError) as e:
            raise GenerationError(
                f"The AI model failed to generate column data. Reason: {e}"
            ) from e

        if not isinstance(values, list):
            raise GenerationError(
                "The AI model failed to generate column data. Reason: expected a JSON array."
            )
        if len(values) != len(source_values):
            raise GenerationLengthError(len(source_values), len(values))
        return values


class Categorizer:
    """Maps a chunk of values onto categories of a taxonomy."""

    def __init__(self, client: BaseLLMClient):
        self.client = client

    def build_prompt(
        self,
        prompt_template: str,
        chunk_values: Sequence[Any],
        taxonomy: str,
    ) -> str:
        return (
            prompt_template
            .replace(TAXONOMY_PLACEHOLDER, taxonomy)
            .replace(SAMPLE_DATA_PLACEHOLDER, json.dumps(list(chunk_values), default=str))
        )

    def categorize(
        self,
        prompt_template: str,
        chunk_values: Sequence[Any],
        taxonomy: str,
    ) -> list[CategorizationResult]:
        """Categorize one chunk; results are positionally aligned with the inputs.

        Raises:
            LengthMismatchError: If a non-empty chunk got a different number of results.
            CategorizationError: For any other failure.
        """
        if not chunk_values:
            return []

        prompt = self.build_prompt(prompt_template, chunk_values, taxonomy)
        try:
            raw = _complete_json(self.client, prompt)
        except (ValueError, ClientError) as e:
            raise CategorizationError(
                f"The AI model failed to categorize the data. Reason: {e}"
            ) from e

        if not isinstance(raw, list):
            raise CategorizationError(
                "The AI model failed to categorize the data. Reason: expected a JSON array."
            )

        try:
            results = _RESULTS_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise CategorizationError(
                f"The AI model failed to categorize the data. Reason: {e.error_count()} invalid result(s)."
            ) from e

        if len(results) != len(chunk_values):
            raise LengthMismatchError(len(chunk_values), len(results))
        return results
