"""Screen state machine.

``apply(session, event)`` is the only way the session changes. It looks at
the active screen, interprets the event for that screen, updates the
session and returns the effects to run. Effects never touch the session;
their outcomes come back later as new events.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from clup.core.effects import (
    CreateTask,
    DeleteTask,
    Effect,
    FetchComments,
    FetchFolderlessLists,
    FetchFolders,
    FetchMembers,
    FetchSpaces,
    FetchStatuses,
    FetchTask,
    FetchTasks,
    PostComment,
    SaveCredentials,
    UpdateTask,
    Wait,
)
from clup.core.events import (
    CREATE_SUCCESS,
    DELETE_SUCCESS,
    REFRESH_LIST_SUCCESS,
    Event,
    Failure,
    Key,
    Resize,
    Result,
    Tick,
)
from clup.core.models import (
    CommentsResponse,
    FoldersResponse,
    ListsResponse,
    MembersResponse,
    SpacesResponse,
    StatusesResponse,
    Task,
    TasksResponse,
)
from clup.core.screens import (
    COMMENT_FOCUS,
    DESCRIPTION_FOCUS,
    PROGRESS_STEPS,
    TICK_INTERVAL,
    CredentialEntry,
    DeleteConfirmation,
    ErrorScreen,
    ListSelection,
    Quitting,
    SpaceSelection,
    StatusUpdate,
    TaskCreated,
    TaskDeleted,
    TaskDetail,
    TaskEditing,
    TaskList,
    WizardAssignees,
    WizardDescription,
    WizardPriority,
    WizardStatus,
    WizardTitle,
)
from clup.core.session import Credentials, EditMode, Session
from clup.core.widgets import Picker

logger = logging.getLogger(__name__)

VIEW_ACTIONS = ("view", "edit")
DETAIL_PAGE = 10


@dataclass
class Transition:
    """Outcome of one event: the updated session and the effects to run."""

    session: Session
    effects: list[Effect] = field(default_factory=list)


def start(credentials: Credentials, creating_task: bool = False) -> Transition:
    """Build the initial session.

    Without complete credentials the user is asked for them first;
    otherwise the space picker opens and spaces are fetched.
    """
    session = Session(credentials=credentials, creating_task=creating_task)
    if not credentials.complete:
        session.screen = CredentialEntry()
        return Transition(session)
    session.screen = SpaceSelection()
    return Transition(session, [FetchSpaces(credentials.team_id)])


def start_on_task(credentials: Credentials, task: Task, action: str) -> Transition:
    """Build a session that opens directly on one task.

    Args:
        credentials: Complete credentials.
        task: Task picked outside the app (e.g. with fzf).
        action: "view" for the detail screen, "edit" for the editor.

    Raises:
        ValueError: If action is not one of VIEW_ACTIONS.
    """
    if action not in VIEW_ACTIONS:
        raise ValueError(f"Invalid action: {action}. Must be one of {VIEW_ACTIONS}")

    session = Session(
        credentials=credentials,
        selected_space_id=task.space_id,
        selected_task_id=task.id,
    )
    if action == "view":
        session.screen = TaskDetail()
        return Transition(session, [FetchTask(task.id), FetchComments(task.id)])
    session.screen = TaskEditing.for_task(task)
    return Transition(session)


def apply(session: Session, event: Event) -> Transition:
    """Apply one event to the session."""
    if isinstance(event, Key) and event.name == "ctrl+c":
        session.screen = Quitting()
        return Transition(session)

    if isinstance(event, Resize):
        session.width = event.width
        session.height = event.height
        return Transition(session)

    if isinstance(event, Failure):
        if not isinstance(session.screen, (ErrorScreen, Quitting)):
            logger.error("Error on %s: %s", type(session.screen).__name__, event.message)
            session.screen = ErrorScreen(event.message)
        return Transition(session)

    handler = _HANDLERS[type(session.screen)]
    effects = handler(session, session.screen, event)
    return Transition(session, effects or [])


# -------------------- helpers --------------------


def _payload(event: Event) -> object:
    return event.payload if isinstance(event, Result) else None


def _task_picker(session: Session) -> Picker[Task]:
    title = f"Tasks in {session.selected_space_name}" if session.selected_space_name else "Tasks"
    return Picker(title=title, label=lambda task: task.name)


def _fetch_tasks(session: Session) -> FetchTasks:
    return FetchTasks(session.credentials.team_id, session.selected_space_id or None)


def _reload_list(session: Session) -> list[Effect]:
    """Show the task list in its loading state and refetch it."""
    if session.tasks is None:
        session.tasks = _task_picker(session)
    session.screen = TaskList(loading=True)
    return [_fetch_tasks(session)]


def _back_to_list(session: Session) -> list[Effect]:
    """Return to the task list, loading it if it was never fetched."""
    session.mode = EditMode.NORMAL
    if session.tasks is None:
        return _reload_list(session)
    session.screen = TaskList()
    return []


def _browse(session: Session, picker: Picker, key: Key) -> None:
    """Keys shared by the top-level pickers: navigation, filter, q to quit."""
    if picker.filtering:
        picker.handle_key(key)
    elif key.text == "q":
        session.screen = Quitting()
    else:
        picker.handle_key(key)


def _confirms(picker: Picker, event: Event) -> bool:
    """True for enter on a picker that is not being filtered."""
    return isinstance(event, Key) and event.name == "enter" and not picker.filtering


# -------------------- credentials --------------------


def _credential_entry(session: Session, screen: CredentialEntry, event: Event):
    if not isinstance(event, Key):
        return None

    if event.name in ("tab", "shift+tab", "enter", "up", "down"):
        if event.name == "enter" and screen.focus == len(screen.inputs) - 1:
            credentials = Credentials(
                api_token=screen.inputs[0].value,
                team_id=screen.inputs[1].value,
            )
            session.credentials = credentials
            session.screen = SpaceSelection()
            return [SaveCredentials(credentials), FetchSpaces(credentials.team_id)]

        step = -1 if event.name in ("up", "shift+tab") else 1
        screen.focus = (screen.focus + step) % len(screen.inputs)
        return None

    screen.inputs[screen.focus].handle_key(event)
    return None


# -------------------- space / list pickers --------------------


def _space_selection(session: Session, screen: SpaceSelection, event: Event):
    payload = _payload(event)
    if isinstance(payload, SpacesResponse):
        screen.picker.set_items(list(payload.spaces))
        return None
    if not isinstance(event, Key):
        return None

    if not _confirms(screen.picker, event):
        _browse(session, screen.picker, event)
        return None

    space = screen.picker.selected()
    if space is None:
        return None
    session.selected_space_id = space.id
    session.selected_space_name = space.name

    if session.creating_task:
        lists = ListSelection()
        lists.picker.title = f"Select a List in {space.name}"
        session.screen = lists
        return [FetchFolderlessLists(space.id), FetchFolders(space.id)]

    session.tasks = _task_picker(session)
    session.screen = TaskList(loading=True)
    return [_fetch_tasks(session)]


def _list_selection(session: Session, screen: ListSelection, event: Event):
    payload = _payload(event)
    if isinstance(payload, ListsResponse):
        screen.folderless.extend(payload.lists)
        screen.merge()
        return None
    if isinstance(payload, FoldersResponse):
        for folder in payload.folders:
            screen.foldered.extend(folder.qualified_lists())
        screen.merge()
        return None
    if not isinstance(event, Key):
        return None

    if not _confirms(screen.picker, event):
        _browse(session, screen.picker, event)
        return None

    selected = screen.picker.selected()
    if selected is None:
        return None
    session.selected_list_id = selected.id
    session.draft.reset()
    session.assignees.clear()
    session.screen = WizardTitle()
    return None


# -------------------- creation wizard --------------------


def _wizard_title(session: Session, screen: WizardTitle, event: Event):
    if not isinstance(event, Key):
        return None
    if event.name == "enter":
        session.draft.title = screen.title.value
        session.screen = WizardDescription()
        return None
    screen.title.handle_key(event)
    return None


def _wizard_description(session: Session, screen: WizardDescription, event: Event):
    if not isinstance(event, Key):
        return None
    if event.name == "ctrl+d":
        session.draft.description = screen.description.value
        session.screen = WizardStatus()
        return [FetchStatuses(session.selected_space_id)]
    screen.description.handle_key(event)
    return None


def _wizard_status(session: Session, screen: WizardStatus, event: Event):
    payload = _payload(event)
    if isinstance(payload, StatusesResponse):
        screen.picker.set_items(list(payload.statuses))
        return None
    if not isinstance(event, Key):
        return None

    if not _confirms(screen.picker, event):
        screen.picker.handle_key(event)
        return None

    status = screen.picker.selected()
    if status is None:
        return None
    session.draft.status = status.status
    session.screen = WizardAssignees()
    return [FetchMembers(session.selected_list_id)]


def _wizard_assignees(session: Session, screen: WizardAssignees, event: Event):
    payload = _payload(event)
    if isinstance(payload, MembersResponse):
        screen.picker.set_items(list(payload.members))
        return None
    if not isinstance(event, Key):
        return None

    if not screen.picker.filtering and event.text == " ":
        member = screen.picker.selected()
        if member is not None:
            session.assignees.toggle(member.id)
        return None

    if _confirms(screen.picker, event):
        session.draft.assignees = session.assignees.ids()
        session.screen = WizardPriority()
        return None

    screen.picker.handle_key(event)
    return None


def _wizard_priority(session: Session, screen: WizardPriority, event: Event):
    if _payload(event) == CREATE_SUCCESS:
        session.draft.reset()
        session.assignees.clear()
        session.screen = TaskCreated()
        return [Wait()]
    if not isinstance(event, Key):
        return None

    if not _confirms(screen.picker, event):
        screen.picker.handle_key(event)
        return None

    priority = screen.picker.selected()
    if priority is None or screen.submitted:
        return None
    screen.submitted = True
    draft = session.draft
    draft.priority = priority.value
    return [
        CreateTask(
            list_id=session.selected_list_id,
            name=draft.title,
            description=draft.description,
            status=draft.status,
            assignees=tuple(draft.assignees),
            priority=draft.priority,
        )
    ]


def _task_created(session: Session, screen: TaskCreated, event: Event):
    if not isinstance(event, Tick):
        return None
    if screen.steps >= PROGRESS_STEPS:
        session.screen = Quitting()
        return None
    screen.steps += 1
    return [Wait(TICK_INTERVAL)]


# -------------------- task list --------------------


def _task_list(session: Session, screen: TaskList, event: Event):
    if session.tasks is None:
        session.tasks = _task_picker(session)
    picker = session.tasks

    payload = _payload(event)
    if isinstance(payload, TasksResponse):
        picker.set_items(list(payload.tasks))
        screen.loading = False
        return None
    if payload == REFRESH_LIST_SUCCESS:
        screen.loading = True
        return [_fetch_tasks(session)]
    if not isinstance(event, Key) or screen.loading:
        return None

    if picker.filtering or event.text not in ("v", "e", "d"):
        _browse(session, picker, event)
        return None

    task = picker.selected()
    if task is None:
        return None
    session.selected_task_id = task.id

    if event.text == "v":
        session.screen = TaskDetail()
        return [FetchTask(task.id), FetchComments(task.id)]
    if event.text == "e":
        session.mode = EditMode.NORMAL
        session.screen = TaskEditing.for_task(task)
        return None
    session.screen = DeleteConfirmation(task)
    return None


def _task_detail(session: Session, screen: TaskDetail, event: Event):
    payload = _payload(event)
    if isinstance(payload, Task):
        if payload.id == session.selected_task_id:
            screen.task = payload
        return None
    if isinstance(payload, CommentsResponse):
        if payload.task_id == session.selected_task_id:
            screen.comments = payload.comments
        return None
    if not isinstance(event, Key):
        return None

    if event.text in ("q", "escape"):
        return _back_to_list(session)
    if event.name in ("up", "k"):
        screen.scroll = max(screen.scroll - 1, 0)
    elif event.name in ("down", "j"):
        screen.scroll += 1
    elif event.name == "pageup":
        screen.scroll = max(screen.scroll - DETAIL_PAGE, 0)
    elif event.name == "pagedown":
        screen.scroll += DETAIL_PAGE
    return None


# -------------------- editor --------------------


def _task_editing(session: Session, screen: TaskEditing, event: Event):
    if not isinstance(event, Key):
        return None
    if session.mode is EditMode.COMMAND:
        return _editor_command(session, screen, event)
    if session.mode is EditMode.INSERT:
        return _editor_insert(session, screen, event)
    return _editor_normal(session, screen, event)


def _editor_normal(session: Session, screen: TaskEditing, key: Key):
    text = key.text
    if text == ":":
        session.mode = EditMode.COMMAND
        screen.command.reset()
    elif text == "i":
        session.mode = EditMode.INSERT
        screen.focus = DESCRIPTION_FOCUS
    elif text == "a":
        session.mode = EditMode.INSERT
        screen.focus = COMMENT_FOCUS
    elif text == "s":
        status = StatusUpdate(editor=screen)
        status.picker.title = f"Select new status for: {screen.task.name}"
        session.screen = status
        return [FetchStatuses(screen.task.space_id)]
    elif text == "q":
        return _back_to_list(session)
    return None


def _editor_insert(session: Session, screen: TaskEditing, key: Key):
    if key.name == "escape":
        session.mode = EditMode.NORMAL
    elif key.name == "tab":
        screen.focus = COMMENT_FOCUS if screen.focus == DESCRIPTION_FOCUS else DESCRIPTION_FOCUS
    else:
        screen.focused_buffer().handle_key(key)
    return None


def _editor_command(session: Session, screen: TaskEditing, key: Key):
    if key.name == "escape":
        session.mode = EditMode.NORMAL
        screen.command.reset()
        return None
    if key.name != "enter":
        screen.command.handle_key(key)
        return None

    command = screen.command.value
    screen.command.reset()
    session.mode = EditMode.NORMAL

    if command == "w":
        effects = _edit_effects(screen)
        return effects + _back_to_list(session)
    if command == "q!":
        return _back_to_list(session)
    if command == "q":
        session.screen = Quitting()
    return None


def _edit_effects(screen: TaskEditing) -> list[Effect]:
    """Effects for ":w": a comment post and/or an update of changed fields."""
    task = screen.task
    effects: list[Effect] = []
    if screen.comment.value:
        effects.append(PostComment(task.id, screen.comment.value))

    description_changed = screen.description.value != task.description
    status_changed = screen.status != task.status
    if description_changed or status_changed:
        effects.append(
            UpdateTask(
                task.id,
                description=screen.description.value if description_changed else None,
                status=screen.status if status_changed else None,
            )
        )
    return effects


def _status_update(session: Session, screen: StatusUpdate, event: Event):
    payload = _payload(event)
    if isinstance(payload, StatusesResponse):
        screen.picker.set_items(list(payload.statuses))
        return None
    if not isinstance(event, Key):
        return None

    if event.name == "escape" and not screen.picker.filtering:
        session.screen = screen.editor
        return None
    if not _confirms(screen.picker, event):
        screen.picker.handle_key(event)
        return None

    status = screen.picker.selected()
    if status is None:
        return None
    screen.editor.status = status.status
    session.screen = screen.editor
    return None


# -------------------- delete --------------------


def _delete_confirmation(session: Session, screen: DeleteConfirmation, event: Event):
    if not isinstance(event, Key):
        return None
    if event.text in ("y", "Y"):
        session.screen = TaskDeleted(screen.task)
        return [DeleteTask(screen.task.id), Wait()]
    if event.text in ("n", "N", "escape"):
        return _back_to_list(session)
    return None


def _task_deleted(session: Session, screen: TaskDeleted, event: Event):
    # The list is reloaded once both the animation and the delete are done.
    if _payload(event) == DELETE_SUCCESS:
        screen.deleted = True
        if screen.steps >= PROGRESS_STEPS:
            return _reload_list(session)
        return None
    if not isinstance(event, Tick):
        return None
    if screen.steps >= PROGRESS_STEPS:
        return _reload_list(session) if screen.deleted else None
    screen.steps += 1
    return [Wait(TICK_INTERVAL)]


# -------------------- terminal screens --------------------


def _error(session: Session, screen: ErrorScreen, event: Event):
    if isinstance(event, Key):
        session.screen = Quitting()
    return None


def _quitting(session: Session, screen: Quitting, event: Event):
    return None


_HANDLERS: dict[type, Callable[..., list[Effect] | None]] = {
    CredentialEntry: _credential_entry,
    SpaceSelection: _space_selection,
    ListSelection: _list_selection,
    TaskList: _task_list,
    TaskDetail: _task_detail,
    TaskEditing: _task_editing,
    StatusUpdate: _status_update,
    WizardTitle: _wizard_title,
    WizardDescription: _wizard_description,
    WizardStatus: _wizard_status,
    WizardAssignees: _wizard_assignees,
    WizardPriority: _wizard_priority,
    TaskCreated: _task_created,
    DeleteConfirmation: _delete_confirmation,
    TaskDeleted: _task_deleted,
    ErrorScreen: _error,
    Quitting: _quitting,
}
