"""Tests for running effects and turning their outcomes into events."""

import httpx
import orjson
import pytest

from clup.core.api import ClickUpClient
from clup.core.config import get_config_path
from clup.core.effects import (
    DeleteTask,
    FetchMembers,
    FetchSpaces,
    PostComment,
    SaveCredentials,
    UpdateTask,
    Wait,
    execute,
)
from clup.core.events import DELETE_SUCCESS, Failure, Result, Tick
from clup.core.models import SpacesResponse
from clup.core.session import Credentials


def client_for(handler) -> ClickUpClient:
    return ClickUpClient("pk_test", transport=httpx.MockTransport(handler))


def unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request {request.method} {request.url}")


@pytest.mark.asyncio
async def test_fetch_resolves_to_result():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"spaces": [{"id": "S1", "name": "Eng"}]})

    async with client_for(handler) as client:
        event = await execute(FetchSpaces("T1"), client)

    assert isinstance(event, Result)
    assert isinstance(event.payload, SpacesResponse)


@pytest.mark.asyncio
async def test_service_error_resolves_to_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text='{"err":"Task not found"}')

    async with client_for(handler) as client:
        event = await execute(DeleteTask("t1"), client)

    assert event == Failure('delete task failed: {"err":"Task not found"}')


@pytest.mark.asyncio
async def test_delete_resolves_to_sentinel():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async with client_for(handler) as client:
        event = await execute(DeleteTask("t1"), client)

    assert event == Result(DELETE_SUCCESS)


@pytest.mark.asyncio
async def test_noop_effects_resolve_to_none():
    async with client_for(unreachable) as client:
        assert await execute(PostComment("t1", ""), client) == Result(None)
        assert await execute(UpdateTask("t1"), client) == Result(None)


@pytest.mark.asyncio
async def test_wait_resolves_to_tick():
    async with client_for(unreachable) as client:
        assert await execute(Wait(), client) == Tick()
        assert await execute(Wait(0.01), client) == Tick()


@pytest.mark.asyncio
async def test_save_credentials(mock_clup_home):
    async with client_for(unreachable) as client:
        event = await execute(SaveCredentials(Credentials("pk_1", "99")), client)

    assert event == Result(None)
    data = orjson.loads(get_config_path().read_bytes())
    assert data == {"api_token": "pk_1", "team_id": "99"}


@pytest.mark.asyncio
async def test_save_credentials_failure(mock_clup_home):
    """Test a filesystem error becomes a Failure instead of raising."""
    (mock_clup_home / ".clup").write_text("not a directory")

    async with client_for(unreachable) as client:
        event = await execute(SaveCredentials(Credentials("pk_1", "99")), client)

    assert isinstance(event, Failure)


@pytest.mark.asyncio
async def test_malformed_payload_resolves_to_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"members": [{"id": "abc"}]})

    async with client_for(handler) as client:
        event = await execute(FetchMembers("L1"), client)

    assert isinstance(event, Failure)
    assert event.message.startswith("fetch assignees failed: unexpected response")
