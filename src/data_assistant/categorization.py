"""Batched categorization of a column.

A column's values are split into contiguous chunks, each chunk is sent to
the Categorizer in order, and the results are merged back as three new
columns. The merge happens only after every chunk succeeded, so a failure
anywhere leaves the dataset exactly as it was.
"""

from __future__ import annotations

from typing import Any, Sequence

from .dataset import Dataset
from .exceptions import DuplicateColumnError, LengthMismatchError
from .generation import CategorizationResult, Categorizer
from .logging import get_logger
from .prompts import DEFAULT_CATEGORIZATION_PROMPT, GOOGLE_PRODUCT_TAXONOMY
from .workspace import Workspace

logger = get_logger(__name__)

# written for rows that have no result
NO_RESULT = (None, "N/A", "No result")


def chunk_values(values: Sequence[Any], batch_size: int) -> list[list[Any]]:
    """Split values into contiguous chunks of batch_size; the last may be shorter."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    return [list(values[i:i + batch_size]) for i in range(0, len(values), batch_size)]


def category_columns(column: str) -> tuple[str, str, str]:
    return (
        f"{column}_category_id",
        f"{column}_category_name",
        f"{column}_rationale",
    )


def merge_results(
    dataset: Dataset,
    column: str,
    results: Sequence[CategorizationResult],
) -> Dataset:
    """Return a new dataset with the category columns, paired by row index."""
    id_col, name_col, rationale_col = category_columns(column)
    ids, names, rationales = [], [], []
    for index in range(len(dataset)):
        if index < len(results):
            r = results[index]
            ids.append(r.category_id)
            names.append(r.category_name)
            rationales.append(r.rationale)
        else:
            ids.append(NO_RESULT[0])
            names.append(NO_RESULT[1])
            rationales.append(NO_RESULT[2])
    return dataset.with_columns({id_col: ids, name_col: names, rationale_col: rationales})


def results_to_dataset(results: Sequence[CategorizationResult]) -> Dataset:
    """Categorization results as a standalone table, for download."""
    headers = ("input", "category_id", "category_name", "rationale")
    return Dataset.from_records(headers, (r.model_dump(include=set(headers)) for r in results))


class CategorizationPipeline:
    """Runs chunked categorization over a workspace column."""

    def __init__(self, categorizer: Categorizer, workspace: Workspace):
        self.categorizer = categorizer
        self.workspace = workspace

    def categorize_values(
        self,
        column: str,
        batch_size: int,
        prompt_template: str = DEFAULT_CATEGORIZATION_PROMPT,
        taxonomy: str = GOOGLE_PRODUCT_TAXONOMY,
    ) -> list[CategorizationResult]:
        """Categorize every value of a column without touching the dataset.

        Chunks are sent one at a time; chunk k+1 is only sent once chunk k
        came back with one result per input.

        Raises:
            ColumnNotFoundError: If the column does not exist.
            LengthMismatchError: If a chunk came back with the wrong number of results.
            CategorizationError: If any chunk failed.
        """
        values = self.workspace.dataset.column_values(column)
        chunks = chunk_values(values, batch_size)
        logger.info(
            f"categorizing column '{column}': {len(values)} values in {len(chunks)} chunk(s)"
        )

        results: list[CategorizationResult] = []
        for index, chunk in enumerate(chunks):
            try:
                chunk_results = self.categorizer.categorize(prompt_template, chunk, taxonomy)
            except LengthMismatchError as e:
                raise LengthMismatchError(e.expected, e.actual, chunk_index=index) from e
            if len(chunk_results) != len(chunk):
                raise LengthMismatchError(len(chunk), len(chunk_results), chunk_index=index)
            results.extend(chunk_results)
            logger.debug(f"chunk {index + 1}/{len(chunks)} done ({len(chunk)} values)")

        return results

    def run(
        self,
        column: str,
        batch_size: int,
        prompt_template: str = DEFAULT_CATEGORIZATION_PROMPT,
        taxonomy: str = GOOGLE_PRODUCT_TAXONOMY,
    ) -> Dataset:
        """Categorize a column and merge the result columns into the dataset.

        Returns:
            The newly committed dataset.
        """
        dataset = self.workspace.dataset
        for name in category_columns(column):
            if dataset.has_column(name):
                raise DuplicateColumnError(name)

        results = self.categorize_values(column, batch_size, prompt_template, taxonomy)
        new_dataset = merge_results(dataset, column, results)
        self.workspace.commit(new_dataset)
        return new_dataset
