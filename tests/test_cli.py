"""Tests for the task-service CLI."""
from __future__ import annotations

import json

import pytest

from task_service import cli


@pytest.fixture
def store_path(tmp_path, monkeypatch):
    path = tmp_path / "task.json"
    monkeypatch.setenv("TASKS_STORE_PATH", str(path))
    return path


def test_init_creates_store(store_path, capsys):
    assert cli.main(["init"]) == 0

    assert json.loads(store_path.read_text(encoding="utf-8")) == {"tasks": []}
    assert str(store_path) in capsys.readouterr().out


def test_add_list_show_delete_flow(store_path, capsys):
    assert cli.main(["add", "--title", "Buy milk", "--description", "2 litres"]) == 0
    assert cli.main(
        ["add", "--title", "Ship", "--description", "release", "--priority", "high", "--completed", "true"]
    ) == 0
    assert "Created task 2: Ship" in capsys.readouterr().out

    assert cli.main(["list", "--completed", "false"]) == 0
    out = capsys.readouterr().out
    assert "Buy milk" in out
    assert "Ship" not in out

    assert cli.main(["list", "--priority", "high", "--sort", "date"]) == 0
    out = capsys.readouterr().out
    assert "Ship" in out
    assert "Buy milk" not in out

    assert cli.main(["show", "1"]) == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown["title"] == "Buy milk"
    assert shown["priority"] == "medium"

    assert cli.main(["delete", "1"]) == 0
    assert "Deleted task 1" in capsys.readouterr().out

    assert cli.main(["show", "1"]) == 1
    assert "Task not found" in capsys.readouterr().err


def test_list_empty_store(store_path, capsys):
    assert cli.main(["list"]) == 0
    assert capsys.readouterr().out.strip() == "No tasks."


def test_invalid_priority_filter_reports_error(store_path, capsys):
    assert cli.main(["list", "--priority", "urgent"]) == 1
    assert "Invalid priority level" in capsys.readouterr().err


def test_serve_runs_uvicorn_with_settings(store_path, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setenv("TASKS_PORT", "9100")

    assert cli.main(["serve", "--host", "0.0.0.0"]) == 0

    assert calls == [("api.main:app", {"host": "0.0.0.0", "port": 9100, "reload": False})]


def test_serve_rejects_bad_port(store_path, monkeypatch, capsys):
    monkeypatch.setenv("TASKS_PORT", "not-a-port")

    assert cli.main(["serve"]) == 1
    assert "TASKS_PORT" in capsys.readouterr().err
