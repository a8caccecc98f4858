"""Effects: outbound commands issued by the state machine.

An effect is a plain value describing one unit of work. The state machine
only returns effects; the app runs each one on its own worker with
``execute``, which always resolves to exactly one event that is fed back
into the machine. Because effects are values, tests can assert on what a
transition asked for without any network or timing involved.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from clup.core.api import ClickUpClient, ClickUpError
from clup.core.config import save_credentials
from clup.core.events import Event, Failure, Result, Tick
from clup.core.session import Credentials

logger = logging.getLogger(__name__)


class Effect:
    """Base class for effects."""

    async def perform(self, client: ClickUpClient) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class SaveCredentials(Effect):
    credentials: Credentials

    async def perform(self, client: ClickUpClient) -> None:
        await asyncio.to_thread(save_credentials, self.credentials)
        return None


@dataclass(frozen=True)
class FetchSpaces(Effect):
    team_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_spaces(self.team_id)


@dataclass(frozen=True)
class FetchFolderlessLists(Effect):
    space_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_folderless_lists(self.space_id)


@dataclass(frozen=True)
class FetchFolders(Effect):
    space_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_folders(self.space_id)


@dataclass(frozen=True)
class FetchMembers(Effect):
    list_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_members(self.list_id)


@dataclass(frozen=True)
class FetchStatuses(Effect):
    space_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_statuses(self.space_id)


@dataclass(frozen=True)
class CreateTask(Effect):
    list_id: str
    name: str
    description: str
    status: str
    assignees: tuple[int, ...]
    priority: int = 0

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.create_task(
            self.list_id,
            self.name,
            self.description,
            self.status,
            list(self.assignees),
            self.priority,
        )


@dataclass(frozen=True)
class FetchTasks(Effect):
    team_id: str
    space_id: str | None = None

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_tasks(self.team_id, self.space_id)


@dataclass(frozen=True)
class FetchTask(Effect):
    task_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_task(self.task_id)


@dataclass(frozen=True)
class FetchComments(Effect):
    task_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.get_comments(self.task_id)


@dataclass(frozen=True)
class PostComment(Effect):
    task_id: str
    text: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.post_comment(self.task_id, self.text)


@dataclass(frozen=True)
class UpdateTask(Effect):
    """Partial update; None fields are left untouched on the server."""

    task_id: str
    description: str | None = None
    status: str | None = None

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.update_task(
            self.task_id, description=self.description, status=self.status
        )


@dataclass(frozen=True)
class DeleteTask(Effect):
    task_id: str

    async def perform(self, client: ClickUpClient) -> Any:
        return await client.delete_task(self.task_id)


@dataclass(frozen=True)
class Wait(Effect):
    """Sleep, then deliver a Tick. Paces the progress animations."""

    seconds: float = 0.0

    async def perform(self, client: ClickUpClient) -> Any:
        if self.seconds > 0:
            await asyncio.sleep(self.seconds)
        return Tick()


async def execute(effect: Effect, client: ClickUpClient) -> Event:
    """Run one effect and turn its outcome into an event.

    Service, decoding and filesystem errors become a Failure; nothing is
    raised, so every effect resolves exactly once.
    """
    try:
        payload = await effect.perform(client)
    except ClickUpError as e:
        logger.error("%s failed: %s", type(effect).__name__, e)
        return Failure(str(e))
    except OSError as e:
        logger.error("%s failed: %s", type(effect).__name__, e)
        return Failure(str(e))

    if isinstance(payload, Tick):
        return payload
    logger.debug("%s done", type(effect).__name__)
    return Result(payload)
