"""Text content for each screen.

``render(session)`` returns what the app shows for the active screen.
Layout and styling are left to the widget that displays it.
"""

from typing import Callable

from clup.core.models import Member, Priority, Status, Task
from clup.core.screens import (
    COMMENT_FOCUS,
    DESCRIPTION_FOCUS,
    PROGRESS_STEPS,
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
from clup.core.session import AssigneeSelection, EditMode, Session
from clup.core.widgets import Picker, TextBuffer

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
CURSOR = "█"
PROGRESS_WIDTH = 40
# Lines taken by titles, help and padding around a picker.
PICKER_CHROME = 6

NORMAL_HELP = (
    "[NORMAL MODE] i: edit desc • a: add comment • s: change status • "
    "q: back to list • :: command"
)
INSERT_HELP = "[INSERT MODE] esc to exit • tab to switch"


def render_buffer(buffer: TextBuffer, focused: bool = False) -> str:
    """Show a buffer's text, its placeholder when empty, and the cursor when focused."""
    if not buffer.value:
        return f"{CURSOR}{buffer.placeholder}" if focused else buffer.placeholder
    if not focused:
        return buffer.value
    return buffer.value[: buffer.cursor] + CURSOR + buffer.value[buffer.cursor :]


def render_picker(
    picker: Picker,
    height: int,
    line: Callable[[object], str] | None = None,
    status_bar: bool = False,
) -> str:
    """Render a picker: title, filter prompt, and the visible window of items."""
    line = line or picker.label
    lines = [picker.title, ""]
    if picker.filtering or picker.filter_text:
        lines.append(f"Filter: {picker.filter_text}{CURSOR if picker.filtering else ''}")
        lines.append("")

    visible = picker.visible()
    if status_bar:
        lines.append(f"{len(visible)} items")
        lines.append("")

    offset, window = picker.window(max(height - PICKER_CHROME, 1))
    if not window:
        lines.append("No items.")
    for index, item in enumerate(window, start=offset):
        marker = "> " if index == picker.cursor else "  "
        for number, text in enumerate(line(item).split("\n")):
            lines.append((marker if number == 0 else "  ") + text)
    return "\n".join(lines)


def render_progress(steps: int, width: int = PROGRESS_WIDTH) -> str:
    percent = min(steps / PROGRESS_STEPS, 1.0)
    filled = round(width * percent)
    return f"   {'█' * filled}{'░' * (width - filled)} {percent:4.0%}"


def _credential_entry(session: Session, screen: CredentialEntry, frame: int) -> str:
    lines = ["Enter ClickUp Credentials", ""]
    for index, buffer in enumerate(screen.inputs):
        focused = index == screen.focus
        prefix = "> " if focused else "  "
        lines.append(prefix + render_buffer(buffer, focused))
    lines.append("")
    lines.append("enter to submit • tab to navigate • ctrl+c to quit")
    return "\n".join(lines)


def _space_selection(session: Session, screen: SpaceSelection, frame: int) -> str:
    return render_picker(screen.picker, session.height)


def _list_selection(session: Session, screen: ListSelection, frame: int) -> str:
    return render_picker(screen.picker, session.height)


def _task_line(task: Task) -> str:
    return f"{task.name}\n  {task.summary}"


def _task_list(session: Session, screen: TaskList, frame: int) -> str:
    if screen.loading or session.tasks is None:
        spinner = SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]
        return f"\n\n   {spinner} Loading tasks... \n\n"
    text = render_picker(session.tasks, session.height // 2, _task_line, status_bar=True)
    return text + "\n\nv: view • e: edit • d: delete • /: filter • q: quit"


def detail_text(screen: TaskDetail) -> str:
    """Full (unscrolled) detail text: task header, description, comments."""
    task = screen.task
    if task is None:
        return "Loading task details and comments..."
    parts = [task.name, f"Status: {task.status}\n\n---\n\n{task.description}"]
    if screen.comments is not None:
        parts.append("\n---\n\nComments\n")
        if not screen.comments:
            parts.append("No comments on this task.")
        for comment in screen.comments:
            parts.append(f"From: {comment.username} ({comment.timestamp})\n{comment.text}\n")
    return "\n".join(parts)


def _task_detail(session: Session, screen: TaskDetail, frame: int) -> str:
    lines = detail_text(screen).split("\n")
    height = max(session.height - 2, 1)
    offset = min(screen.scroll, max(len(lines) - height, 0))
    return "\n".join(lines[offset : offset + height])


def _task_editing(session: Session, screen: TaskEditing, frame: int) -> str:
    inserting = session.mode is EditMode.INSERT
    lines = [
        f"Editing: {screen.task.name}",
        "",
        f"Status: {screen.status}",
        "",
        "Description:",
        render_buffer(screen.description, inserting and screen.focus == DESCRIPTION_FOCUS),
        "",
        "Add Comment:",
        render_buffer(screen.comment, inserting and screen.focus == COMMENT_FOCUS),
        "",
    ]
    if session.mode is EditMode.COMMAND:
        lines.append(":" + render_buffer(screen.command, True))
    elif inserting:
        lines.append(INSERT_HELP)
    else:
        lines.append(NORMAL_HELP)
    return "\n".join(lines)


def _status_line(status: Status) -> str:
    return status.status


def _status_update(session: Session, screen: StatusUpdate, frame: int) -> str:
    return render_picker(screen.picker, session.height, _status_line)


def _wizard_title(session: Session, screen: WizardTitle, frame: int) -> str:
    return f"Enter Task Title:\n\n{render_buffer(screen.title, True)}"


def _wizard_description(session: Session, screen: WizardDescription, frame: int) -> str:
    return (
        "Enter Task Description (Ctrl+D to finish):\n\n"
        f"{render_buffer(screen.description, True)}"
    )


def _wizard_status(session: Session, screen: WizardStatus, frame: int) -> str:
    return render_picker(screen.picker, session.height, _status_line)


def _assignee_line(selection: AssigneeSelection) -> Callable[[Member], str]:
    def line(member: Member) -> str:
        mark = "[x]" if member.id in selection else "[ ]"
        return f"{mark} {member.username}"

    return line


def _wizard_assignees(session: Session, screen: WizardAssignees, frame: int) -> str:
    return render_picker(screen.picker, session.height, _assignee_line(session.assignees))


def _priority_line(priority: Priority) -> str:
    return priority.name


def _wizard_priority(session: Session, screen: WizardPriority, frame: int) -> str:
    text = render_picker(screen.picker, session.height, _priority_line)
    if screen.submitted:
        spinner = SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]
        text += f"\n\n{spinner} Creating task..."
    return text


def _task_created(session: Session, screen: TaskCreated, frame: int) -> str:
    return (
        "\n   Task Created Successfully!\n\n"
        + render_progress(screen.steps)
        + "\n\n   Quitting..."
    )


def _delete_confirmation(session: Session, screen: DeleteConfirmation, frame: int) -> str:
    return (
        f"\n\n   Are you sure you want to delete the task '{screen.task.name}'? (y/n)\n\n"
    )


def _task_deleted(session: Session, screen: TaskDeleted, frame: int) -> str:
    return (
        "\n   Task Deleted Successfully!\n\n"
        + render_progress(screen.steps)
        + "\n\n   Returning to list..."
    )


def _error(session: Session, screen: ErrorScreen, frame: int) -> str:
    return f"\nAn error occurred: {screen.message}\n\nPress any key to quit."


def _quitting(session: Session, screen: Quitting, frame: int) -> str:
    return "Quitting...\n"


_VIEWS: dict[type, Callable[[Session, object, int], str]] = {
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


def render(session: Session, frame: int = 0) -> str:
    """Render the active screen.

    Args:
        session: Current session.
        frame: Spinner animation frame.
    """
    screen = session.screen
    return _VIEWS[type(screen)](session, screen, frame)
