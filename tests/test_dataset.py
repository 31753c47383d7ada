"""Tests for the dataset value type and the workspace."""

import pytest

from data_assistant.dataset import Dataset
from data_assistant.exceptions import (
    ColumnNotFoundError,
    DuplicateColumnError,
    NoDatasetLoadedError,
)
from data_assistant.workspace import Workspace


class TestDataset:

    def test_duplicate_headers_rejected(self):
        with pytest.raises(ValueError, match="Duplicate column names"):
            Dataset.from_records(["a", "a"], [])

    def test_row_keys_must_be_headers(self):
        with pytest.raises(ValueError, match="not in headers"):
            Dataset.from_records(["a"], [{"a": 1, "b": 2}])

    def test_column_values(self, sample_dataset):
        assert sample_dataset.column_values("brand") == ["Acme", "Acme", "Brewco", None, "Acme"]

    def test_column_values_unknown(self, sample_dataset):
        with pytest.raises(ColumnNotFoundError):
            sample_dataset.column_values("color")

    def test_with_columns_returns_new_dataset(self, sample_dataset):
        new = sample_dataset.with_columns({"flag": [1, 2, 3, 4, 5]})
        assert new.headers == ("product", "price", "brand", "flag")
        assert new.column_values("flag") == [1, 2, 3, 4, 5]
        assert sample_dataset.headers == ("product", "price", "brand")
        assert "flag" not in sample_dataset.rows[0]

    def test_with_columns_length_mismatch(self, sample_dataset):
        with pytest.raises(ValueError, match="has 2 values for 5 rows"):
            sample_dataset.with_columns({"flag": [1, 2]})

    def test_with_columns_duplicate(self, sample_dataset):
        with pytest.raises(DuplicateColumnError):
            sample_dataset.with_columns({"price": [0] * 5})

    def test_copy_is_detached(self, sample_dataset):
        copied = sample_dataset.copy()
        copied.rows[0]["price"] = -1
        assert sample_dataset.rows[0]["price"] == 25

    def test_from_records_copies_rows(self):
        record = {"a": 1}
        dataset = Dataset.from_records(["a"], [record])
        record["a"] = 2
        assert dataset.rows[0]["a"] == 1


class TestWorkspace:

    def test_not_loaded(self):
        workspace = Workspace()
        assert not workspace.is_loaded
        assert workspace.headers == []
        assert workspace.report == []
        with pytest.raises(NoDatasetLoadedError):
            _ = workspace.dataset

    def test_load_profiles(self, workspace):
        assert workspace.is_loaded
        assert workspace.name == "products.csv"
        assert [p.name for p in workspace.report] == ["product", "price", "brand"]

    def test_commit_reprofiles(self, workspace):
        workspace.commit(workspace.dataset.with_columns({"flag": ["y"] * 5}))
        assert workspace.headers[-1] == "flag"
        assert workspace.report[-1].name == "flag"
        assert workspace.report[-1].top_values == [("y", 5)]

    def test_commit_without_dataset(self, sample_dataset):
        with pytest.raises(NoDatasetLoadedError):
            Workspace().commit(sample_dataset)

    def test_revert_restores_snapshot(self, workspace, sample_dataset):
        workspace.commit(workspace.dataset.with_columns({"flag": ["y"] * 5}))
        restored = workspace.revert()
        assert restored == sample_dataset
        assert workspace.headers == ["product", "price", "brand"]
        assert [p.name for p in workspace.report] == ["product", "price", "brand"]

    def test_snapshot_detached_from_loaded_rows(self, sample_dataset):
        workspace = Workspace(sample_dataset)
        workspace.dataset.rows[0]["price"] = 999
        assert workspace.revert().rows[0]["price"] == 25

    def test_reset(self, workspace):
        workspace.reset()
        assert not workspace.is_loaded
        assert workspace.name is None
        with pytest.raises(NoDatasetLoadedError):
            workspace.revert()
