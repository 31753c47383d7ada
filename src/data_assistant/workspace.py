"""Ownership of the working dataset.

The Workspace holds the single current Dataset, the snapshot taken when it
was loaded, and the profiling report for the current dataset. Every change
goes through commit(), which swaps the reference to a fully built new
Dataset and then re-profiles it, so readers only ever see the state before
or after a change.
"""

from __future__ import annotations

from .analysis import ColumnProfile, profile_dataset
from .dataset import Dataset
from .exceptions import NoDatasetLoadedError
from .logging import get_logger

logger = get_logger(__name__)


class Workspace:
    """Holds the current dataset, its load-time snapshot and its profile."""

    def __init__(self, dataset: Dataset | None = None, name: str | None = None):
        self._dataset: Dataset | None = None
        self._original: Dataset | None = None
        self._report: list[ColumnProfile] = []
        self.name = name
        if dataset is not None:
            self.load(dataset, name=name)

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    @property
    def dataset(self) -> Dataset:
        """The current dataset.

        Raises:
            NoDatasetLoadedError: If nothing has been loaded yet.
        """
        if self._dataset is None:
            raise NoDatasetLoadedError()
        return self._dataset

    @property
    def original(self) -> Dataset:
        if self._original is None:
            raise NoDatasetLoadedError()
        return self._original

    @property
    def report(self) -> list[ColumnProfile]:
        return self._report

    @property
    def headers(self) -> list[str]:
        return list(self._dataset.headers) if self._dataset is not None else []

    def load(self, dataset: Dataset, name: str | None = None) -> None:
        """Start working on a freshly loaded dataset and snapshot it."""
        self._original = dataset.copy()
        self.name = name or self.name
        logger.info(
            f"loaded dataset {self.name or ''} with {len(dataset)} rows, "
            f"{len(dataset.headers)} columns"
        )
        self._swap(dataset.copy())

    def commit(self, dataset: Dataset) -> None:
        """Replace the current dataset with a new version."""
        if self._dataset is None:
            raise NoDatasetLoadedError()
        added = [h for h in dataset.headers if h not in self._dataset.headers]
        logger.info(f"committing dataset change, new columns: {added}")
        self._swap(dataset)

    def revert(self) -> Dataset:
        """Restore the dataset captured at load time."""
        original = self.original
        logger.info("reverting dataset to its load-time snapshot")
        self._swap(original.copy())
        return self.dataset

    def reset(self) -> None:
        """Forget the dataset entirely."""
        self._dataset = None
        self._original = None
        self._report = []
        self.name = None

    def _swap(self, dataset: Dataset) -> None:
        report = profile_dataset(dataset)
        self._dataset = dataset
        self._report = report
