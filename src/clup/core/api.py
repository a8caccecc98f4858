"""ClickUp API client.

A thin asynchronous wrapper around the v2 REST API. Nothing is cached:
every call is one request, and every failure is raised as ClickUpError
with the operation name and the raw response body.
"""

import logging
from typing import Callable, TypeVar

import httpx
import orjson

from clup.core.events import CREATE_SUCCESS, DELETE_SUCCESS, REFRESH_LIST_SUCCESS
from clup.core.models import (
    Comment,
    CommentsResponse,
    Folder,
    FoldersResponse,
    ListInfo,
    ListsResponse,
    Member,
    MembersResponse,
    Space,
    SpacesResponse,
    Status,
    StatusesResponse,
    Task,
    TasksResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

API_URL = "https://api.clickup.com/api/v2"
DEFAULT_TIMEOUT = 30.0


class ClickUpError(Exception):
    """Raised when a ClickUp request fails or returns something unusable."""

    pass


def _decode(operation: str, build: Callable[[], T]) -> T:
    """Run a decoder, reporting a malformed payload as ClickUpError."""
    try:
        return build()
    except (TypeError, ValueError, AttributeError) as e:
        raise ClickUpError(f"{operation} failed: unexpected response: {e}") from e


class ClickUpClient:
    """Async client bound to one API token.

    Args:
        api_token: Personal API token, sent as the Authorization header.
        base_url: API root, overridable for tests.
        transport: Optional httpx transport (e.g. httpx.MockTransport).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_token = api_token
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": api_token},
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "ClickUpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        payload: object = None,
        expected_status: int | None = None,
    ) -> httpx.Response:
        """Send one request and check its status.

        Args:
            operation: Human-readable name used in error messages.
            expected_status: Exact status required; any 2xx when None.

        Raises:
            ClickUpError: On transport failure or an unexpected status.
        """
        headers = {}
        content = None
        if payload is not None:
            content = orjson.dumps(payload)
            headers["Content-Type"] = "application/json"

        logger.debug("%s: %s %s", operation, method, path)
        try:
            response = await self._http.request(
                method, path, params=params, content=content, headers=headers
            )
        except httpx.HTTPError as e:
            logger.warning("%s: request error: %s", operation, e)
            raise ClickUpError(f"{operation} failed: {e}") from e

        if expected_status is not None:
            ok = response.status_code == expected_status
        else:
            ok = response.is_success
        if not ok:
            logger.warning("%s: HTTP %s", operation, response.status_code)
            raise ClickUpError(f"{operation} failed: {response.text}")
        return response

    async def _get_json(self, operation: str, path: str, params: dict | None = None) -> dict:
        response = await self._request(operation, "GET", path, params=params)
        try:
            data = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise ClickUpError(f"{operation} failed: invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ClickUpError(f"{operation} failed: unexpected response: {response.text}")
        return data

    async def get_spaces(self, team_id: str) -> SpacesResponse:
        data = await self._get_json(
            "fetch spaces", f"/team/{team_id}/space", {"archived": "false"}
        )
        return _decode(
            "fetch spaces",
            lambda: SpacesResponse(
                tuple(Space.from_json(item) for item in data.get("spaces") or [])
            ),
        )

    async def get_folderless_lists(self, space_id: str) -> ListsResponse:
        data = await self._get_json("fetch lists", f"/space/{space_id}/list")
        return _decode(
            "fetch lists",
            lambda: ListsResponse(
                tuple(ListInfo.from_json(item) for item in data.get("lists") or [])
            ),
        )

    async def get_folders(self, space_id: str) -> FoldersResponse:
        data = await self._get_json(
            "fetch folders", f"/space/{space_id}/folder", {"archived": "false"}
        )
        return _decode(
            "fetch folders",
            lambda: FoldersResponse(
                tuple(Folder.from_json(item) for item in data.get("folders") or [])
            ),
        )

    async def get_members(self, list_id: str) -> MembersResponse:
        data = await self._get_json("fetch assignees", f"/list/{list_id}/member")
        return _decode(
            "fetch assignees",
            lambda: MembersResponse(
                tuple(Member.from_json(item) for item in data.get("members") or [])
            ),
        )

    async def get_statuses(self, space_id: str) -> StatusesResponse:
        """Fetch the statuses configured on a space.

        Raises:
            ClickUpError: If the space has no statuses.
        """
        data = await self._get_json("fetch statuses", f"/space/{space_id}")
        statuses = _decode(
            "fetch statuses",
            lambda: tuple(Status.from_json(item) for item in data.get("statuses") or []),
        )
        if not statuses:
            raise ClickUpError(f"no statuses found for space {space_id}")
        return StatusesResponse(statuses)

    async def create_task(
        self,
        list_id: str,
        name: str,
        description: str,
        status: str,
        assignees: list[int],
        priority: int = 0,
    ) -> str:
        """Create a task. Priority 0 ("None") is left out of the payload."""
        payload: dict[str, object] = {
            "name": name,
            "description": description,
            "status": status,
            "assignees": list(assignees),
        }
        if priority > 0:
            payload["priority"] = priority
        await self._request("create task", "POST", f"/list/{list_id}/task", payload=payload)
        return CREATE_SUCCESS

    async def get_tasks(self, team_id: str, space_id: str | None = None) -> TasksResponse:
        """Fetch the team's tasks, optionally restricted to one space."""
        if space_id:
            operation = "fetch tasks"
            params = {"space_ids[]": space_id}
        else:
            operation = "fetch all tasks"
            params = None
        data = await self._get_json(operation, f"/team/{team_id}/task", params)
        return _decode(
            operation,
            lambda: TasksResponse(
                tuple(Task.from_json(item) for item in data.get("tasks") or [])
            ),
        )

    async def get_task(self, task_id: str) -> Task:
        data = await self._get_json("fetch task details", f"/task/{task_id}")
        return _decode("fetch task details", lambda: Task.from_json(data))

    async def get_comments(self, task_id: str) -> CommentsResponse:
        data = await self._get_json("fetch comments", f"/task/{task_id}/comment")
        return _decode(
            "fetch comments",
            lambda: CommentsResponse(
                tuple(Comment.from_json(item) for item in data.get("comments") or []),
                task_id=task_id,
            ),
        )

    async def post_comment(self, task_id: str, text: str) -> str | None:
        """Post a comment. An empty comment is a no-op and returns None."""
        if not text:
            return None
        await self._request(
            "post comment",
            "POST",
            f"/task/{task_id}/comment",
            payload={"comment_text": text},
        )
        return REFRESH_LIST_SUCCESS

    async def update_task(
        self,
        task_id: str,
        description: str | None = None,
        status: str | None = None,
    ) -> str | None:
        """Update only the given fields. Nothing to send returns None."""
        payload: dict[str, str] = {}
        if description is not None:
            payload["description"] = description
        if status is not None:
            payload["status"] = status
        if not payload:
            return None
        await self._request("update task", "PUT", f"/task/{task_id}", payload=payload)
        return REFRESH_LIST_SUCCESS

    async def delete_task(self, task_id: str) -> str:
        """Delete a task. Only 204 No Content counts as success."""
        await self._request(
            "delete task", "DELETE", f"/task/{task_id}", expected_status=204
        )
        return DELETE_SUCCESS
