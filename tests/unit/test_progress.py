"""Tests for the progress log of a thread."""

from threads_mcp.core.client import ThreadsClient


def test_add_progress_appends_and_touches_thread(populated_client: ThreadsClient) -> None:
    entry = populated_client.add_progress("t-task1", "Deployed")

    assert entry is not None
    assert entry.note == "Deployed"
    assert entry.timestamp.endswith("Z")
    thread = populated_client.get_thread("t-task1")
    assert thread is not None
    assert thread.progress[-1] == entry
    assert thread.updated_at > "2024-01-03T09:00:00.000Z"


def test_add_progress_keeps_explicit_timestamp(populated_client: ThreadsClient) -> None:
    entry = populated_client.add_progress("t-task2", "Backfilled", "2023-12-24T18:00:00.000Z")

    assert entry is not None
    assert entry.timestamp == "2023-12-24T18:00:00.000Z"


def test_add_progress_to_missing_thread_returns_none(populated_client: ThreadsClient) -> None:
    assert populated_client.add_progress("nope", "note") is None
    assert populated_client.add_progress("c-project", "containers have no log") is None


def test_list_progress_is_most_recent_first(populated_client: ThreadsClient) -> None:
    notes = [p.id for p in populated_client.list_progress("t-task1")]
    assert notes == ["p3", "p2", "p1"]


def test_list_progress_limit(populated_client: ThreadsClient) -> None:
    assert [p.id for p in populated_client.list_progress("t-task1", limit=2)] == ["p3", "p2"]
    # Non-positive limits return everything.
    assert len(populated_client.list_progress("t-task1", limit=0)) == 3
    assert len(populated_client.list_progress("t-task1", limit=-1)) == 3


def test_list_progress_unknown_thread_is_empty(populated_client: ThreadsClient) -> None:
    assert populated_client.list_progress("nope") == []


def test_edit_progress_replaces_note_in_place(populated_client: ThreadsClient) -> None:
    edited = populated_client.edit_progress("t-task1", "p2", "Wrote all tools")

    assert edited is not None
    assert edited.note == "Wrote all tools"
    assert edited.timestamp == "2024-01-02T09:00:00.000Z"
    assert [p.note for p in populated_client.list_progress("t-task1")] == [
        "Added tests",
        "Wrote all tools",
        "Started",
    ]


def test_edit_progress_unknown_ids_return_none(populated_client: ThreadsClient) -> None:
    assert populated_client.edit_progress("nope", "p1", "x") is None
    assert populated_client.edit_progress("t-task1", "nope", "x") is None


def test_delete_progress(populated_client: ThreadsClient) -> None:
    assert populated_client.delete_progress("t-task1", "p1") is True
    assert [p.id for p in populated_client.list_progress("t-task1")] == ["p3", "p2"]
    assert populated_client.delete_progress("t-task1", "p1") is False
    assert populated_client.delete_progress("nope", "p2") is False
