"""Tests for MCP tool core functions and resource readers."""

import asyncio
import json

import pytest

from threads_mcp.core.client import ThreadsClient
from threads_mcp.mcp.server import (
    mcp_server,
    read_container_resource,
    read_group_resource,
    read_progress_resource,
    read_thread_resource,
    threads_add_progress,
    threads_archive_thread,
    threads_create_container,
    threads_create_thread,
    threads_delete_thread,
    threads_get_entity,
    threads_get_full_tree,
    threads_get_group,
    threads_get_next_action,
    threads_get_subtree,
    threads_get_thread,
    threads_list_progress,
    threads_list_threads,
    threads_move_to_group,
    threads_search,
    threads_set_parent,
    threads_update_group,
    threads_update_thread,
)


def test_create_thread_returns_serialized_record(client: ThreadsClient) -> None:
    result = threads_create_thread(client, name="New", temperature="hot", tags=["x"])

    thread = result["thread"]
    assert thread["name"] == "New"
    assert thread["temperature"] == "hot"
    assert thread["status"] == "active"
    assert thread["tags"] == ["x"]
    assert thread["parentId"] is None


def test_create_thread_reports_invalid_arguments(client: ThreadsClient) -> None:
    assert "error" in threads_create_thread(client, name="")
    assert "error" in threads_create_thread(client, name="X", importance=9)


def test_update_thread_ignores_omitted_fields(populated_client: ThreadsClient) -> None:
    result = threads_update_thread(populated_client, thread_id="t-task1", status="paused")

    assert result["thread"]["status"] == "paused"
    assert result["thread"]["name"] == "Task1"
    assert result["thread"]["tags"] == ["mcp", "python"]


def test_not_found_is_reported_as_error(populated_client: ThreadsClient) -> None:
    assert threads_update_thread(populated_client, thread_id="nope", name="x") == {
        "error": "Thread not found: nope"
    }
    assert "error" in threads_archive_thread(populated_client, thread_id="nope")
    assert "error" in threads_delete_thread(populated_client, thread_id="nope")
    assert "error" in threads_get_subtree(populated_client, entity_id="nope")
    assert "error" in threads_add_progress(populated_client, thread_id="nope", note="x")
    assert "error" in threads_update_group(populated_client, group_id="nope", name="x")


def test_get_thread_by_id_or_name(populated_client: ThreadsClient) -> None:
    assert threads_get_thread(populated_client, identifier="t-solo")["thread"]["id"] == "t-solo"
    by_name = threads_get_thread(populated_client, identifier="solo errand")
    assert by_name["thread"]["id"] == "t-solo"
    assert "error" in threads_get_thread(populated_client, identifier="c-project")


def test_get_entity_and_group_by_name(populated_client: ThreadsClient) -> None:
    assert threads_get_entity(populated_client, identifier="sub")["entity"]["id"] == "c-sub"
    assert threads_get_group(populated_client, identifier="work")["group"]["id"] == "g-work"


def test_delete_thread_reports_id(populated_client: ThreadsClient) -> None:
    assert threads_delete_thread(populated_client, thread_id="t-task2") == {
        "deleted": True,
        "id": "t-task2",
    }


def test_list_progress_most_recent_first(populated_client: ThreadsClient) -> None:
    result = threads_list_progress(populated_client, thread_id="t-task1", limit=2)

    assert result["count"] == 2
    assert [p["id"] for p in result["progress"]] == ["p3", "p2"]


def test_list_threads_roots_only(populated_client: ThreadsClient) -> None:
    result = threads_list_threads(populated_client, roots_only=True)
    assert [t["id"] for t in result["threads"]] == ["t-solo", "t-legacy"]


def test_list_threads_with_filters(populated_client: ThreadsClient) -> None:
    result = threads_list_threads(populated_client, status="active", tags=["home"])
    assert result["count"] == 1
    assert result["threads"][0]["id"] == "t-solo"


def test_set_parent_and_move_to_group_errors(populated_client: ThreadsClient) -> None:
    assert threads_set_parent(populated_client, entity_id="t-solo", parent_id="nope") == {
        "error": "Entity or parent not found"
    }
    assert threads_move_to_group(populated_client, entity_id="t-solo", group_id="nope") == {
        "error": "Entity or group not found"
    }
    moved = threads_set_parent(populated_client, entity_id="t-solo", parent_id="c-sub")
    assert moved["entity"]["parentId"] == "c-sub"


def test_search_lists_containers_first(populated_client: ThreadsClient) -> None:
    threads_create_container(populated_client, name="Python stuff")

    result = threads_search(populated_client, query="python")

    assert [r["type"] for r in result["results"]] == ["container", "thread"]


def test_next_action_without_active_threads(client: ThreadsClient) -> None:
    assert threads_get_next_action(client) == {"thread": None, "message": "No active threads"}


def test_full_tree_is_json_serializable(populated_client: ThreadsClient) -> None:
    result = threads_get_full_tree(populated_client)

    assert result["count"] == 3
    assert json.loads(json.dumps(result))["tree"][0]["entity"]["name"] == "Project"


def test_thread_resources(populated_client: ThreadsClient) -> None:
    all_threads = json.loads(read_thread_resource(populated_client, "list"))
    active = json.loads(read_thread_resource(populated_client, "active"))
    hot = json.loads(read_thread_resource(populated_client, "hot"))
    by_name = json.loads(read_thread_resource(populated_client, "Task2"))

    assert len(all_threads) == 4
    assert [t["id"] for t in active] == ["t-task1", "t-solo"]
    assert [t["id"] for t in hot] == ["t-task1"]
    assert by_name["id"] == "t-task2"


def test_resources_raise_for_unknown_identifiers(populated_client: ThreadsClient) -> None:
    with pytest.raises(ValueError, match="Resource not found"):
        read_thread_resource(populated_client, "nope")
    with pytest.raises(ValueError):
        read_container_resource(populated_client, "nope")
    with pytest.raises(ValueError):
        read_group_resource(populated_client, "nope")
    with pytest.raises(ValueError):
        read_progress_resource(populated_client, "t-task2")


def test_group_and_container_resources(populated_client: ThreadsClient) -> None:
    members = json.loads(read_group_resource(populated_client, "g-work", members=True))
    groups = json.loads(read_group_resource(populated_client, "list"))
    container = json.loads(read_container_resource(populated_client, "project"))

    assert [m["id"] for m in members] == ["c-project"]
    assert {g["name"] for g in groups} == {"Work", "Home"}
    assert container["id"] == "c-project"


def test_progress_resource(populated_client: ThreadsClient) -> None:
    progress = json.loads(read_progress_resource(populated_client, "t-task1"))
    assert [p["id"] for p in progress] == ["p3", "p2", "p1"]


def test_server_registers_all_tools() -> None:
    tools = asyncio.run(mcp_server.list_tools())
    names = {t.name for t in tools}

    assert {
        "create_thread",
        "update_thread",
        "archive_thread",
        "delete_thread",
        "get_thread",
        "add_progress",
        "list_progress",
        "edit_progress",
        "delete_progress",
        "create_container",
        "update_container",
        "delete_container",
        "create_group",
        "update_group",
        "delete_group",
        "set_parent",
        "move_to_group",
        "get_children",
        "get_ancestors",
        "get_subtree",
        "list_threads",
        "list_containers",
        "list_groups",
        "search_threads",
        "get_next_action",
        "get_full_tree",
        "get_entity",
        "get_container",
        "get_group",
    } <= names
