"""Tests for the CLI commands."""

import argparse
import json

import pytest

from conftest import ScriptedClient
from data_assistant.config import get_settings
from data_assistant.main import build_parser, get_provider_and_model, handle_command
from data_assistant.session import DataSession


@pytest.fixture
def session(sample_dataset):
    session = DataSession(ScriptedClient(), batch_size=10)
    session.load(sample_dataset, name="products.csv")
    return session


def test_parser():
    args = build_parser().parse_args(["data.csv", "--provider", "google", "--batch-size", "20"])
    assert args.file == "data.csv"
    assert args.provider == "google"
    assert args.batch_size == 20


def test_provider_priority(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    get_settings.cache_clear()
    try:
        args = argparse.Namespace(provider=None, model=None)
        assert get_provider_and_model(args, {"llm": {"provider": "google"}})[0] == "google"
        assert get_provider_and_model(args, {})[0] == "openai"
        args = argparse.Namespace(provider="google", model="gemini-2.5-pro")
        assert get_provider_and_model(args, {"llm": {"provider": "openai"}}) == ("google", "gemini-2.5-pro")
    finally:
        get_settings.cache_clear()


def test_profile_command(session, capsys):
    handle_command(session, "/profile")
    assert "brand" in capsys.readouterr().out


def test_summary_command(session, capsys):
    handle_command(session, "/summary price")
    out = capsys.readouterr().out
    assert "columnName: price" in out
    assert "median: 100" in out


def test_categorize_command_with_spaces_in_column(sample_dataset, capsys):
    session = DataSession(ScriptedClient(), batch_size=10)
    session.load(sample_dataset.with_columns({"product name": ["a", "b", "c", "d", "e"]}))
    session.client.replies.append(json.dumps([
        {"input": v, "category_id": "1", "category_name": "X", "rationale": ""}
        for v in "abcde"
    ]))
    handle_command(session, "/categorize product name 5")
    assert "product name_category_id" in capsys.readouterr().out


def categorized(values):
    return json.dumps([
        {"input": v, "category_id": "1", "category_name": "Things", "rationale": "r"}
        for v in values
    ])


def test_categorize_download_to_path(session, sample_dataset, tmp_path, capsys):
    products = session.dataset.column_values("product")
    session.client.replies.append(categorized(products))
    target = tmp_path / "cats.csv"

    handle_command(session, f"/categorize product 10 --download {target}")

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "input,category_id,category_name,rationale"
    assert lines[1] == "Red running shoes,1,Things,r"
    assert len(lines) == 1 + len(products)
    assert session.dataset == sample_dataset
    assert f"Wrote {len(products)} categorized values to {target}" in capsys.readouterr().out


def test_categorize_download_default_name(session, sample_dataset, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session.client.replies.append(categorized(session.dataset.column_values("product")))

    handle_command(session, "/categorize product --download")

    assert (tmp_path / "products_categorized.csv").exists()
    assert session.dataset == sample_dataset
    assert len(session.client.calls) == 1


def test_categorize_download_failure_writes_nothing(session, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    handle_command(session, "/categorize title --download")
    assert session.error == "Categorization failed: Column 'title' not found."
    assert list(tmp_path.iterdir()) == []


def test_categorize_without_column_prints_usage(session, capsys):
    handle_command(session, "/categorize --download")
    assert "Usage: /categorize COLUMN" in capsys.readouterr().out
    assert session.client.calls == []


def test_export_command(session, tmp_path, capsys):
    target = tmp_path / "out.csv"
    handle_command(session, f"/export {target}")
    assert target.read_text(encoding="utf-8").startswith("product,price,brand")


def test_unknown_command_prints_help(session, capsys):
    handle_command(session, "/help")
    assert "/categorize COLUMN [N]" in capsys.readouterr().out
