"""Tests for dataset profiling."""

from data_assistant.analysis import profile_column, profile_dataset, render_report
from data_assistant.analysis.profiler import PROFILE_TOP_VALUES
from data_assistant.dataset import Dataset


def test_one_profile_per_header_in_order(sample_dataset):
    report = profile_dataset(sample_dataset)
    assert [p.name for p in report] == ["product", "price", "brand"]


def test_counts(sample_dataset):
    profile = profile_column(sample_dataset, "brand")
    assert profile.total_rows == 5
    assert profile.missing == 1
    assert profile.unique == 2
    assert profile.top_values == [("Acme", 3), ("Brewco", 1)]


def test_top_values_capped():
    dataset = Dataset.from_records(["x"], [{"x": i} for i in range(12)])
    profile = profile_column(dataset, "x")
    assert len(profile.top_values) == PROFILE_TOP_VALUES
    # all counts tie at 1, so the first values encountered win
    assert [v for v, _ in profile.top_values] == ["0", "1", "2", "3", "4"]


def test_report_ties_keep_first_encounter_order():
    dataset = Dataset.from_records(
        ["x"], [{"x": v} for v in ["z", "y", "x", "w", "v", "u", "y"]]
    )
    [profile] = profile_dataset(dataset)
    # "u" ties with four earlier values and falls off the top five
    assert profile.top_values == [("y", 2), ("z", 1), ("x", 1), ("w", 1), ("v", 1)]


def test_counts_non_increasing():
    dataset = Dataset.from_records(
        ["x"], [{"x": v} for v in ["c", "a", "b", "a", "b", "a", "d"]]
    )
    counts = [c for _, c in profile_column(dataset, "x").top_values]
    assert counts == sorted(counts, reverse=True)


def test_absent_keys_count_as_missing():
    dataset = Dataset.from_records(["x", "y"], [{"x": 1}, {"x": 2, "y": "a"}])
    profile = profile_column(dataset, "y")
    assert profile.missing == 1
    assert profile.unique == 1


def test_empty_dataset():
    assert profile_dataset(Dataset.empty()) == []


def test_to_dict(sample_dataset):
    d = profile_column(sample_dataset, "brand").to_dict()
    assert d["name"] == "brand"
    assert d["topValues"][0] == ["Acme", 3]


def test_render_report(sample_dataset):
    text = render_report(profile_dataset(sample_dataset))
    lines = text.splitlines()
    assert lines[0].startswith("column")
    assert any(line.startswith("brand") and "Acme (3)" in line for line in lines)


def test_render_report_clips_long_values():
    dataset = Dataset.from_records(["x"], [{"x": "y" * 50}])
    text = render_report(profile_dataset(dataset), max_value_width=10)
    assert "y" * 11 not in text
    assert "…" in text


def test_render_empty_report():
    assert render_report([]) == "(no columns)"
