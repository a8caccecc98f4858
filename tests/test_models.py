"""Tests for decoding ClickUp entities."""

from clup.core.models import (
    PRIORITIES,
    Comment,
    Folder,
    Member,
    Status,
    Task,
    parse_timestamp,
)


def test_task_from_json():
    """Test a task decodes its nested status, space, list and folder."""
    task = Task.from_json(
        {
            "id": "abc",
            "name": "Fix login",
            "description": "Users cannot log in",
            "status": {"status": "in progress"},
            "space": {"id": "S1"},
            "list": {"id": "L1", "name": "Sprint"},
            "folder": {"name": "Eng"},
        }
    )

    assert task.id == "abc"
    assert task.status == "in progress"
    assert task.space_id == "S1"
    assert task.list_name == "Sprint"
    assert task.summary == "In: Eng / Sprint | Status: in progress"


def test_task_from_json_missing_fields():
    """Test missing or null fields decode as empty strings."""
    task = Task.from_json({"id": "abc", "name": "Bare", "description": None})

    assert task.description == ""
    assert task.status == ""
    assert task.space_id == ""


def test_folder_qualified_lists():
    """Test nested lists are prefixed with the folder name."""
    folder = Folder.from_json(
        {"id": "F1", "name": "Eng", "lists": [{"id": "L2", "name": "Sprint"}]}
    )

    [qualified] = folder.qualified_lists()
    assert qualified.id == "L2"
    assert qualified.name == "Eng / Sprint"


def test_status_from_json():
    status = Status.from_json({"status": "done", "orderindex": "3", "color": "#000"})

    assert status == Status(status="done", order=3, color="#000")


def test_member_from_json():
    member = Member.from_json({"id": 42, "username": "alice", "email": "a@x.io"})

    assert member.id == 42
    assert member.username == "alice"


def test_comment_joins_text_parts():
    """Test a comment's text is the concatenation of its parts."""
    comment = Comment.from_json(
        {
            "id": "c1",
            "comment": [{"text": "Looks "}, {"text": "good"}],
            "date": "1700000000000",
            "user": {"username": "bob"},
        }
    )

    assert comment.text == "Looks good"
    assert comment.username == "bob"
    assert comment.timestamp == "2023-11-14 22:13"


def test_comment_timestamp_rfc3339():
    comment = Comment(id="c1", text="", date="2024-01-02T03:04:05Z", username="bob")

    assert comment.timestamp == "2024-01-02 03:04"


def test_comment_timestamp_unparseable_is_raw():
    comment = Comment(id="c1", text="", date="yesterday", username="bob")

    assert comment.timestamp == "yesterday"


def test_parse_timestamp_empty():
    assert parse_timestamp("") is None


def test_priorities_order():
    """Test the fixed priority list and that None maps to 0."""
    assert [p.name for p in PRIORITIES] == ["Urgent", "High", "Normal", "Low", "None"]
    assert [p.value for p in PRIORITIES] == [1, 2, 3, 4, 0]
