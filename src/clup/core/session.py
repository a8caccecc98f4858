"""Session aggregate for clup.

The session is the single piece of mutable state in the program. It is
owned by the state machine and only changed inside ``clup.core.machine.apply``.
"""

from dataclasses import dataclass, field
from enum import Enum

from clup.core.models import Task
from clup.core.screens import CredentialEntry, Screen
from clup.core.widgets import Picker


class EditMode(Enum):
    """Input mode of the task editor."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


@dataclass(frozen=True)
class Credentials:
    api_token: str = ""
    team_id: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.api_token and self.team_id)


@dataclass
class TaskDraft:
    """Fields collected by the creation wizard before the create call.

    Attributes:
        title: Task name (step 1)
        description: Task description (step 2)
        status: Status label (step 3)
        assignees: Member IDs (step 4)
        priority: Priority value (step 5); 0 means "None" and is not sent
    """

    title: str = ""
    description: str = ""
    status: str = ""
    assignees: list[int] = field(default_factory=list)
    priority: int = 0

    def reset(self) -> None:
        self.title = ""
        self.description = ""
        self.status = ""
        self.assignees = []
        self.priority = 0


class AssigneeSelection:
    """Unordered set of member IDs picked in the wizard."""

    def __init__(self, ids: set[int] | None = None) -> None:
        self._ids: set[int] = set(ids or ())

    def toggle(self, member_id: int) -> None:
        if member_id in self._ids:
            self._ids.remove(member_id)
        else:
            self._ids.add(member_id)

    def clear(self) -> None:
        self._ids.clear()

    def ids(self) -> list[int]:
        return sorted(self._ids)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssigneeSelection):
            return NotImplemented
        return self._ids == other._ids

    def __repr__(self) -> str:
        return f"AssigneeSelection({self.ids()!r})"


@dataclass
class Session:
    """Everything the state machine knows.

    Attributes:
        screen: The active screen
        credentials: API token and team ID
        selected_space_id: Space chosen in the space picker
        selected_space_name: Its display name
        selected_list_id: List chosen for a new task
        selected_task_id: Task last opened from the list
        mode: Input mode of the task editor
        draft: Fields accumulated by the creation wizard
        assignees: Members toggled in the wizard's assignee step
        creating_task: True when the session was started for the wizard
        tasks: Task collection shown by the task list; survives the detail,
            edit and delete screens
        width: Terminal width
        height: Terminal height
    """

    screen: Screen = field(default_factory=CredentialEntry)
    credentials: Credentials = field(default_factory=Credentials)
    selected_space_id: str = ""
    selected_space_name: str = ""
    selected_list_id: str = ""
    selected_task_id: str = ""
    mode: EditMode = EditMode.NORMAL
    draft: TaskDraft = field(default_factory=TaskDraft)
    assignees: AssigneeSelection = field(default_factory=AssigneeSelection)
    creating_task: bool = False
    tasks: Picker[Task] | None = None
    width: int = 80
    height: int = 24
