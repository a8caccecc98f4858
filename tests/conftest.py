"""Shared pytest fixtures for clup tests."""

from pathlib import Path

import pytest

from clup.core.config import TEAM_ENV, TOKEN_ENV
from clup.core.log import DEBUG_ENV
from clup.core.models import Task
from clup.core.session import Credentials


@pytest.fixture
def mock_clup_home(tmp_path, monkeypatch):
    """Point the home and working directories at tmp_path.

    This ensures tests never read or write the real ~/.clup/ directory or
    a .clup.json in the checkout. Also clears the credential and debug
    environment variables so the developer's own setup cannot leak in.
    """
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()

    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(work)
    monkeypatch.delenv(TOKEN_ENV, raising=False)
    monkeypatch.delenv(TEAM_ENV, raising=False)
    monkeypatch.delenv(DEBUG_ENV, raising=False)

    return home


@pytest.fixture
def credentials():
    return Credentials(api_token="pk_test", team_id="T1")


@pytest.fixture
def task():
    """A task as the list endpoint returns it."""
    return Task(
        id="abc",
        name="Fix login",
        description="Users cannot log in",
        status="to do",
        space_id="S1",
        list_id="L1",
        list_name="Sprint",
        folder_name="Eng",
    )
