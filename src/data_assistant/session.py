"""Analyst session.

A DataSession owns everything one analyst works with: the workspace with
its dataset, the agent and its conversation, and the categorization
pipeline. It runs one operation at a time and turns operation failures into
a single dismissible error message, leaving the dataset and the
conversation in their last good state.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .agent import DEFAULT_MAX_ROUNDS, DataAgent
from .analysis import ColumnProfile, ColumnSummary, get_column_summary
from .categorization import CategorizationPipeline
from .clients.base import BaseLLMClient
from .clients.factory import create_client
from .config import get_settings
from .dataset import Dataset
from .exceptions import DataError, SessionBusyError
from .generation import CategorizationResult, Categorizer, ColumnValueGenerator
from .ingestion import export_csv
from .logging import get_logger
from .prompts import DEFAULT_CATEGORIZATION_PROMPT, GOOGLE_PRODUCT_TAXONOMY, SYSTEM_PROMPT
from .tools import get_default_tools
from .types import AgentRunResult, UnifiedMessage
from .workspace import Workspace

logger = get_logger(__name__)

LOADED_MESSAGE = "File loaded successfully. What would you like to do with the data?"
REVERTED_MESSAGE = "Data has been reverted to its original state. What would you like to do next?"
CLEARED_MESSAGE = "Chat cleared. How can I help you with the data?"


class DataSession:
    """One analyst's dataset, conversation and pending error."""

    def __init__(
        self,
        client: BaseLLMClient,
        system_prompt: str = SYSTEM_PROMPT,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        batch_size: int = 100,
    ):
        self.client = client
        self.workspace = Workspace()
        self.batch_size = batch_size
        self.generator = ColumnValueGenerator(client)
        self.categorizer = Categorizer(client)
        self.pipeline = CategorizationPipeline(self.categorizer, self.workspace)
        self.agent = DataAgent(
            client=client,
            tools=get_default_tools(self.generator),
            workspace=self.workspace,
            system_prompt=system_prompt,
            max_rounds=max_rounds,
        )
        self.error: str | None = None
        self._busy_with: str | None = None

    # ==================== state ====================

    @property
    def busy(self) -> bool:
        return self._busy_with is not None

    @property
    def dataset(self) -> Dataset:
        return self.workspace.dataset

    @property
    def report(self) -> list[ColumnProfile]:
        return self.workspace.report

    @property
    def messages(self) -> list[UnifiedMessage]:
        return self.agent.history

    def dismiss_error(self) -> None:
        self.error = None

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        if self._busy_with is not None:
            raise SessionBusyError(self._busy_with)
        self._busy_with = name
        self.error = None
        try:
            yield
        finally:
            self._busy_with = None

    # ==================== dataset lifecycle ====================

    def load(self, dataset: Dataset, name: str | None = None) -> None:
        """Start over with a newly loaded dataset."""
        with self._operation("load"):
            self.workspace.load(dataset, name=name)
            self.agent.clear_history()
            self.agent.add_assistant_message(LOADED_MESSAGE)

    def revert(self) -> Dataset:
        """Restore the dataset as loaded and restart the conversation."""
        with self._operation("revert"):
            dataset = self.workspace.revert()
            self.agent.clear_history()
            self.agent.add_assistant_message(REVERTED_MESSAGE)
            return dataset

    def reset(self) -> None:
        """Forget the dataset and the conversation."""
        with self._operation("reset"):
            self.workspace.reset()
            self.agent.clear_history()

    def export(self) -> bytes:
        return export_csv(self.workspace.dataset)

    def summarize(self, column: str) -> ColumnSummary:
        return get_column_summary(self.workspace.dataset, column)

    # ==================== conversation ====================

    def send_message(self, prompt: str) -> AgentRunResult:
        """Run one agent turn; failures land in ``error``."""
        with self._operation("agent"):
            result = self.agent.run(prompt)
            if result.is_error:
                self.error = result.error
            return result

    def clear_chat(self) -> None:
        self.agent.clear_history()
        if self.workspace.is_loaded:
            self.agent.add_assistant_message(CLEARED_MESSAGE)

    # ==================== categorization ====================

    def categorize(
        self,
        column: str,
        batch_size: int | None = None,
        prompt_template: str = DEFAULT_CATEGORIZATION_PROMPT,
        taxonomy: str = GOOGLE_PRODUCT_TAXONOMY,
    ) -> Dataset | None:
        """Categorize a column and merge the results into the dataset.

        Returns:
            The new dataset, or None if categorization failed (see ``error``).
        """
        with self._operation("categorize"):
            try:
                return self.pipeline.run(
                    column,
                    self.batch_size if batch_size is None else batch_size,
                    prompt_template,
                    taxonomy,
                )
            except (DataError, ValueError) as e:
                logger.warning(f"categorization of '{column}' failed: {e}")
                self.error = f"Categorization failed: {e}"
                return None

    def categorize_to_records(
        self,
        column: str,
        batch_size: int | None = None,
        prompt_template: str = DEFAULT_CATEGORIZATION_PROMPT,
        taxonomy: str = GOOGLE_PRODUCT_TAXONOMY,
    ) -> list[CategorizationResult] | None:
        """Categorize a column without merging, e.g. to download the results."""
        with self._operation("categorize"):
            try:
                return self.pipeline.categorize_values(
                    column,
                    self.batch_size if batch_size is None else batch_size,
                    prompt_template,
                    taxonomy,
                )
            except (DataError, ValueError) as e:
                logger.warning(f"categorization of '{column}' failed: {e}")
                self.error = f"Categorization failed: {e}"
                return None


def create_session(
    provider: str | None = None,
    model: str | None = None,
    client_config: dict | None = None,
) -> DataSession:
    """Create a session with a client for the configured provider.

    Raises:
        ValueError: If no provider is given or detected, or its key is missing.
    """
    settings = get_settings()
    provider = provider or settings.detect_provider()
    model = model or settings.llm_model
    if not provider:
        raise ValueError("No provider specified and none found in environment")

    client = create_client(
        provider,
        model=model,
        client_config=client_config,
        api_key=settings.get_api_key_for_provider(provider),
    )
    return DataSession(
        client,
        max_rounds=settings.max_agent_rounds,
        batch_size=settings.categorization_batch_size,
    )
