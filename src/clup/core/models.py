"""Remote entities decoded from ClickUp API responses."""

from dataclasses import dataclass
from datetime import datetime, timezone


def _str(value: object) -> str:
    return "" if value is None else str(value)


def _obj(value: object) -> dict:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class Space:
    id: str
    name: str

    @classmethod
    def from_json(cls, data: dict) -> "Space":
        return cls(id=_str(data.get("id")), name=_str(data.get("name")))


@dataclass(frozen=True)
class ListInfo:
    id: str
    name: str

    @classmethod
    def from_json(cls, data: dict) -> "ListInfo":
        return cls(id=_str(data.get("id")), name=_str(data.get("name")))


@dataclass(frozen=True)
class Folder:
    """A folder and the lists nested in it."""

    id: str
    name: str
    lists: tuple[ListInfo, ...] = ()

    @classmethod
    def from_json(cls, data: dict) -> "Folder":
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            lists=tuple(ListInfo.from_json(item) for item in data.get("lists") or []),
        )

    def qualified_lists(self) -> list[ListInfo]:
        """Nested lists renamed to "<folder> / <list>"."""
        return [ListInfo(id=lst.id, name=f"{self.name} / {lst.name}") for lst in self.lists]


@dataclass(frozen=True)
class Status:
    status: str
    order: int = 0
    color: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Status":
        try:
            order = int(data.get("orderindex") or 0)
        except (TypeError, ValueError):
            order = 0
        return cls(
            status=_str(data.get("status")),
            order=order,
            color=_str(data.get("color")),
        )


@dataclass(frozen=True)
class Member:
    id: int
    username: str
    email: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Member":
        return cls(
            id=int(data.get("id") or 0),
            username=_str(data.get("username")),
            email=_str(data.get("email")),
        )


@dataclass(frozen=True)
class Priority:
    name: str
    value: int
    color: str


PRIORITIES: tuple[Priority, ...] = (
    Priority(name="Urgent", value=1, color="#ff0000"),
    Priority(name="High", value=2, color="#ff8000"),
    Priority(name="Normal", value=3, color="#00aaff"),
    Priority(name="Low", value=4, color="#d3d3d3"),
    Priority(name="None", value=0, color="#ffffff"),
)


@dataclass(frozen=True)
class Comment:
    """A comment on a task.

    Attributes:
        id: Comment ID
        text: Concatenated text of all comment parts
        date: Timestamp as returned by the API (RFC3339 or epoch millis)
        username: Author's username
    """

    id: str
    text: str
    date: str
    username: str

    @classmethod
    def from_json(cls, data: dict) -> "Comment":
        parts = data.get("comment") or []
        return cls(
            id=_str(data.get("id")),
            text="".join(_str(_obj(part).get("text")) for part in parts),
            date=_str(data.get("date")),
            username=_str(_obj(data.get("user")).get("username")),
        )

    @property
    def timestamp(self) -> str:
        """Creation time formatted as YYYY-MM-DD HH:MM."""
        parsed = parse_timestamp(self.date)
        if parsed is None:
            return self.date
        return parsed.strftime("%Y-%m-%d %H:%M")


def parse_timestamp(value: str) -> datetime | None:
    """Parse an RFC3339 timestamp or an epoch-milliseconds string."""
    if not value:
        return None
    if value.isdigit():
        return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class Task:
    """A task snapshot as returned by the service. Never mutated locally."""

    id: str
    name: str
    description: str = ""
    status: str = ""
    space_id: str = ""
    list_id: str = ""
    list_name: str = ""
    folder_name: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Task":
        task_list = _obj(data.get("list"))
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            description=_str(data.get("description")),
            status=_str(_obj(data.get("status")).get("status")),
            space_id=_str(_obj(data.get("space")).get("id")),
            list_id=_str(task_list.get("id")),
            list_name=_str(task_list.get("name")),
            folder_name=_str(_obj(data.get("folder")).get("name")),
        )

    @property
    def summary(self) -> str:
        return f"In: {self.folder_name} / {self.list_name} | Status: {self.status}"



# Response containers. Each fetch resolves to its own type so a screen can
# recognize (or ignore) a result even when the collection is empty.


@dataclass(frozen=True)
class SpacesResponse:
    spaces: tuple[Space, ...] = ()


@dataclass(frozen=True)
class ListsResponse:
    lists: tuple[ListInfo, ...] = ()


@dataclass(frozen=True)
class FoldersResponse:
    folders: tuple[Folder, ...] = ()


@dataclass(frozen=True)
class StatusesResponse:
    statuses: tuple[Status, ...] = ()


@dataclass(frozen=True)
class MembersResponse:
    members: tuple[Member, ...] = ()


@dataclass(frozen=True)
class TasksResponse:
    tasks: tuple[Task, ...] = ()


@dataclass(frozen=True)
class CommentsResponse:
    """Comments of one task; task_id lets a screen drop a stale thread."""

    comments: tuple[Comment, ...] = ()
    task_id: str = ""
