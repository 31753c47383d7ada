"""Tests for CSV loading and export."""

import pytest

from data_assistant.dataset import Dataset
from data_assistant.ingestion import (
    convert_cell,
    export_csv,
    load_csv,
    modified_filename,
    parse_csv,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", None),
        ("42", 42),
        ("-3", -3),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("TRUE", True),
        ("false", False),
        ("abc", "abc"),
        ("12abc", "12abc"),
    ],
)
def test_convert_cell(text, expected):
    assert convert_cell(text) == expected
    assert type(convert_cell(text)) is type(expected)


def test_parse_csv_types_and_blank_lines():
    dataset = parse_csv("name,price,active\nShoe,25,true\n\nHat,,false\n")
    assert dataset.headers == ("name", "price", "active")
    assert len(dataset) == 2
    assert dataset.rows[0] == {"name": "Shoe", "price": 25, "active": True}
    assert dataset.rows[1]["price"] is None


def test_parse_csv_without_typing():
    dataset = parse_csv("a\n1\n", dynamic_typing=False)
    assert dataset.rows[0]["a"] == "1"


def test_parse_csv_deduplicates_headers():
    dataset = parse_csv("a,a,\n1,2,3\n")
    assert dataset.headers == ("a", "a_1", "column_3")


def test_parse_csv_short_rows():
    dataset = parse_csv("a,b\n1\n")
    assert dataset.column_values("b") == [None]


def test_parse_empty_text():
    assert parse_csv("") == Dataset.empty()


def test_load_csv_strips_bom(tmp_path):
    path = tmp_path / "data.csv"
    path.write_bytes("\ufeffname,qty\nPen,3\n".encode("utf-8"))
    dataset = load_csv(path)
    assert dataset.headers == ("name", "qty")
    assert dataset.rows[0]["qty"] == 3


def test_load_csv_delimiter(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a;b\n1;x\n", encoding="utf-8")
    assert load_csv(path, delimiter=";").rows[0] == {"a": 1, "b": "x"}


def test_export_csv():
    dataset = Dataset.from_records(
        ["name", "qty", "ok"],
        [{"name": "Pen, blue", "qty": 3, "ok": True}, {"name": "Cup", "qty": None}],
    )
    assert export_csv(dataset).decode("utf-8") == (
        'name,qty,ok\n"Pen, blue",3,true\nCup,,\n'
    )


def test_export_then_parse_keeps_values(sample_dataset):
    parsed = parse_csv(export_csv(sample_dataset).decode("utf-8"))
    assert parsed.headers == sample_dataset.headers
    assert parsed.column_values("brand") == sample_dataset.column_values("brand")


@pytest.mark.parametrize(
    "name, expected",
    [("sales.csv", "sales_modified.csv"), ("report", "report_modified.csv"), ("", "data_modified.csv")],
)
def test_modified_filename(name, expected):
    assert modified_filename(name) == expected
