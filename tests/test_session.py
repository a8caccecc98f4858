"""Tests for the session aggregate."""

from clup.core.screens import CredentialEntry
from clup.core.session import (
    AssigneeSelection,
    Credentials,
    EditMode,
    Session,
    TaskDraft,
)


def test_session_defaults():
    session = Session()

    assert isinstance(session.screen, CredentialEntry)
    assert session.mode is EditMode.NORMAL
    assert session.tasks is None
    assert not session.creating_task


def test_credentials_complete():
    assert Credentials("tok", "team").complete
    assert not Credentials("tok", "").complete
    assert not Credentials("", "team").complete


def test_assignee_toggle_twice_is_noop():
    selection = AssigneeSelection({7})

    selection.toggle(3)
    selection.toggle(3)

    assert selection == AssigneeSelection({7})


def test_assignee_ids_sorted():
    selection = AssigneeSelection()
    for member_id in (9, 2, 5):
        selection.toggle(member_id)

    assert selection.ids() == [2, 5, 9]
    assert 5 in selection
    assert len(selection) == 3


def test_assignee_clear():
    selection = AssigneeSelection({1, 2})
    selection.clear()

    assert len(selection) == 0
    assert 1 not in selection


def test_task_draft_reset():
    draft = TaskDraft(title="t", description="d", status="s", assignees=[1], priority=2)
    draft.reset()

    assert draft == TaskDraft()
