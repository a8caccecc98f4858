"""Tests for the clup command line."""

import pytest
from click.testing import CliRunner

from clup.cli import main
from clup.core.api import ClickUpError
from clup.core.config import TEAM_ENV, TOKEN_ENV
from clup.core.fzf import FzfError
from clup.core.screens import CredentialEntry, SpaceSelection, TaskDetail, TaskEditing
from clup.tui.app import ClupApp


@pytest.fixture
def runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def launched(monkeypatch):
    """Record apps that would have been run instead of running them."""
    apps: list[ClupApp] = []
    monkeypatch.setattr(ClupApp, "run", lambda self: apps.append(self))
    return apps


@pytest.fixture
def with_credentials(monkeypatch):
    monkeypatch.setenv(TOKEN_ENV, "pk_test")
    monkeypatch.setenv(TEAM_ENV, "T1")


@pytest.fixture
def tasks(monkeypatch, task):
    async def fake_fetch(credentials):
        return [task]

    monkeypatch.setattr("clup.commands.list.fetch_all_tasks", fake_fetch)
    return [task]


def test_help(runner):
    result = runner.invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "ClickUp from the terminal" in result.output
    assert "list" in result.output
    assert "task" in result.output


def test_no_subcommand_without_credentials(runner, mock_clup_home, launched):
    result = runner.invoke(main, [])

    assert result.exit_code == 0
    [app] = launched
    assert isinstance(app.session.screen, CredentialEntry)


def test_no_subcommand_with_credentials(runner, mock_clup_home, with_credentials, launched):
    result = runner.invoke(main, [])

    assert result.exit_code == 0
    [app] = launched
    assert isinstance(app.session.screen, SpaceSelection)
    assert not app.session.creating_task


def test_task_starts_wizard(runner, mock_clup_home, with_credentials, launched):
    result = runner.invoke(main, ["task"])

    assert result.exit_code == 0
    [app] = launched
    assert isinstance(app.session.screen, SpaceSelection)
    assert app.session.creating_task


def test_debug_flag_writes_log(runner, mock_clup_home, launched):
    result = runner.invoke(main, ["--debug", "task"])

    assert result.exit_code == 0
    assert (mock_clup_home / ".clup" / "clup.log").exists()


def test_list_requires_credentials(runner, mock_clup_home, launched):
    result = runner.invoke(main, ["list"])

    assert result.exit_code == 1
    assert "API token and team ID must be set" in result.output
    assert launched == []


def test_list_nothing_selected(runner, mock_clup_home, with_credentials, tasks, launched, monkeypatch):
    seen = []

    def fake_select(lines):
        seen.extend(lines)
        return None

    monkeypatch.setattr("clup.commands.list.select", fake_select)

    result = runner.invoke(main, ["list"])

    assert result.exit_code == 0
    assert seen == ["[abc] Fix login"]
    assert "No task selected." in result.output
    assert launched == []


def test_list_view(runner, mock_clup_home, with_credentials, tasks, launched, monkeypatch):
    monkeypatch.setattr("clup.commands.list.select", lambda lines: lines[0])

    result = runner.invoke(main, ["list"], input="view\n")

    assert result.exit_code == 0
    assert "Selected: Fix login" in result.output
    [app] = launched
    assert isinstance(app.session.screen, TaskDetail)
    assert app.session.selected_task_id == "abc"


def test_list_edit(runner, mock_clup_home, with_credentials, tasks, launched, monkeypatch):
    monkeypatch.setattr("clup.commands.list.select", lambda lines: lines[0])

    result = runner.invoke(main, ["list"], input="edit\n")

    assert result.exit_code == 0
    [app] = launched
    assert isinstance(app.session.screen, TaskEditing)


def test_list_rejects_other_actions(runner, mock_clup_home, with_credentials, tasks, launched, monkeypatch):
    monkeypatch.setattr("clup.commands.list.select", lambda lines: lines[0])

    result = runner.invoke(main, ["list"], input="delete\nview\n")

    assert result.exit_code == 0
    assert "delete" in result.output
    [app] = launched
    assert isinstance(app.session.screen, TaskDetail)


def test_list_fetch_error(runner, mock_clup_home, with_credentials, launched, monkeypatch):
    async def failing_fetch(credentials):
        raise ClickUpError("fetch all tasks failed: Token invalid")

    monkeypatch.setattr("clup.commands.list.fetch_all_tasks", failing_fetch)

    result = runner.invoke(main, ["list"])

    assert result.exit_code == 1
    assert "fetch all tasks failed: Token invalid" in result.output


def test_list_without_fzf(runner, mock_clup_home, with_credentials, tasks, launched, monkeypatch):
    def missing(lines):
        raise FzfError("fzf is not installed")

    monkeypatch.setattr("clup.commands.list.select", missing)

    result = runner.invoke(main, ["list"])

    assert result.exit_code == 1
    assert "fzf is not installed" in result.output
