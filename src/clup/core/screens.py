"""Screen variants.

Exactly one screen is active at a time. Each variant carries only the
transient state of that screen; leaving a screen discards it.
"""

from dataclasses import dataclass, field

from clup.core.models import (
    PRIORITIES,
    Comment,
    ListInfo,
    Member,
    Priority,
    Space,
    Status,
    Task,
)
from clup.core.widgets import Picker, TextBuffer

PROGRESS_STEPS = 4
TICK_INTERVAL = 0.2
CREDENTIAL_CHAR_LIMIT = 128
COMMAND_CHAR_LIMIT = 5

DESCRIPTION_FOCUS = "description"
COMMENT_FOCUS = "comment"


def _credential_inputs() -> list[TextBuffer]:
    return [
        TextBuffer(placeholder="ClickUp API Token", limit=CREDENTIAL_CHAR_LIMIT),
        TextBuffer(placeholder="Team ID", limit=CREDENTIAL_CHAR_LIMIT),
    ]


def _space_picker() -> Picker[Space]:
    return Picker(title="Select a Space", label=lambda space: space.name)


def _list_picker() -> Picker[ListInfo]:
    return Picker(title="Select a List", label=lambda lst: lst.name)


def _status_picker(title: str = "Select Status") -> Picker[Status]:
    return Picker(title=title, label=lambda status: status.status)


@dataclass
class CredentialEntry:
    inputs: list[TextBuffer] = field(default_factory=_credential_inputs)
    focus: int = 0


@dataclass
class SpaceSelection:
    picker: Picker[Space] = field(default_factory=_space_picker)


@dataclass
class ListSelection:
    """List picker for the creation wizard.

    Folder-less lists and folder-nested lists arrive from two independent
    fetches and are kept apart so the displayed order does not depend on
    which one lands first.
    """

    picker: Picker[ListInfo] = field(default_factory=_list_picker)
    folderless: list[ListInfo] = field(default_factory=list)
    foldered: list[ListInfo] = field(default_factory=list)

    def merge(self) -> None:
        self.picker.set_items(self.folderless + self.foldered)


@dataclass
class TaskList:
    """Task browsing. The collection itself lives on the session."""

    loading: bool = False


@dataclass
class TaskDetail:
    task: Task | None = None
    comments: tuple[Comment, ...] | None = None
    scroll: int = 0


@dataclass
class TaskEditing:
    task: Task
    status: str = ""
    description: TextBuffer = field(default_factory=lambda: TextBuffer(multiline=True))
    comment: TextBuffer = field(
        default_factory=lambda: TextBuffer(placeholder="New comment...")
    )
    command: TextBuffer = field(
        default_factory=lambda: TextBuffer(limit=COMMAND_CHAR_LIMIT)
    )
    focus: str = DESCRIPTION_FOCUS

    @classmethod
    def for_task(cls, task: Task) -> "TaskEditing":
        """Seed the editing buffers from a task snapshot."""
        return cls(
            task=task,
            status=task.status,
            description=TextBuffer(value=task.description, multiline=True),
        )

    def focused_buffer(self) -> TextBuffer:
        return self.description if self.focus == DESCRIPTION_FOCUS else self.comment


@dataclass
class StatusUpdate:
    """Status picker nested inside the editor; returns to it on exit."""

    editor: TaskEditing
    picker: Picker[Status] = field(default_factory=_status_picker)


@dataclass
class WizardTitle:
    title: TextBuffer = field(default_factory=lambda: TextBuffer(placeholder="Task Title"))


@dataclass
class WizardDescription:
    description: TextBuffer = field(
        default_factory=lambda: TextBuffer(placeholder="Task Description", multiline=True)
    )


@dataclass
class WizardStatus:
    picker: Picker[Status] = field(default_factory=_status_picker)


@dataclass
class WizardAssignees:
    picker: Picker[Member] = field(
        default_factory=lambda: Picker(
            title="Select Assignees (space to select, enter to confirm)",
            label=lambda member: member.username,
        )
    )


@dataclass
class WizardPriority:
    picker: Picker[Priority] = field(
        default_factory=lambda: Picker(
            title="Select Priority",
            items=list(PRIORITIES),
            label=lambda priority: priority.name,
        )
    )
    submitted: bool = False


@dataclass
class TaskCreated:
    steps: int = 0

    @property
    def percent(self) -> float:
        return self.steps / PROGRESS_STEPS


@dataclass
class DeleteConfirmation:
    task: Task


@dataclass
class TaskDeleted:
    task: Task
    steps: int = 0
    deleted: bool = False

    @property
    def percent(self) -> float:
        return self.steps / PROGRESS_STEPS


@dataclass
class ErrorScreen:
    message: str


@dataclass
class Quitting:
    pass


Screen = (
    CredentialEntry
    | SpaceSelection
    | ListSelection
    | TaskList
    | TaskDetail
    | TaskEditing
    | StatusUpdate
    | WizardTitle
    | WizardDescription
    | WizardStatus
    | WizardAssignees
    | WizardPriority
    | TaskCreated
    | DeleteConfirmation
    | TaskDeleted
    | ErrorScreen
    | Quitting
)
