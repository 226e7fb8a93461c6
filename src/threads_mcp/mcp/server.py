"""MCP server exposing threads, containers and groups as tools and resources."""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from threads_mcp.config import StoreConfig, resolve_store_config
from threads_mcp.core.client import ThreadsClient
from threads_mcp.core.storage.json_store import JsonFileStorage
from threads_mcp.models.entity import Entity
from threads_mcp.models.query import UNSET, ContainerFilter, ThreadFilter

StatusArg = Literal["active", "paused", "stopped", "completed", "archived"]
TemperatureArg = Literal["frozen", "freezing", "cold", "tepid", "warm", "hot"]
SizeArg = Literal["tiny", "small", "medium", "large", "huge"]


def _entities(entities: list[Entity]) -> list[dict[str, Any]]:
    return [e.to_dict() for e in entities]


def _provided(**kwargs: Any) -> dict[str, Any]:
    """Keep only the arguments the caller actually passed."""
    return {k: v for k, v in kwargs.items() if v is not None}


# --- Core functions (testable without MCP context) ---


def threads_create_thread(
    client: ThreadsClient,
    *,
    name: str,
    description: str | None = None,
    status: str | None = None,
    temperature: str | None = None,
    size: str | None = None,
    importance: int | None = None,
    parent_id: str | None = None,
    group_id: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Create a thread. Unset fields take their defaults."""
    options = _provided(
        description=description,
        status=status,
        temperature=temperature,
        size=size,
        importance=importance,
        tags=tags,
    )
    try:
        thread = client.create_thread(name, parent_id=parent_id, group_id=group_id, **options)
    except ValueError as e:
        return {"error": str(e)}
    return {"thread": thread.to_dict()}


def threads_update_thread(
    client: ThreadsClient,
    *,
    thread_id: str,
    name: str | None = None,
    description: str | None = None,
    status: str | None = None,
    temperature: str | None = None,
    size: str | None = None,
    importance: int | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Update the provided fields of a thread."""
    fields = _provided(
        name=name,
        description=description,
        status=status,
        temperature=temperature,
        size=size,
        importance=importance,
        tags=tags,
    )
    try:
        thread = client.update_thread(thread_id, **fields)
    except ValueError as e:
        return {"error": str(e)}
    if thread is None:
        return {"error": f"Thread not found: {thread_id}"}
    return {"thread": thread.to_dict()}


def threads_archive_thread(
    client: ThreadsClient, *, thread_id: str, cascade: bool = False
) -> dict[str, Any]:
    """Archive a thread, optionally with its direct child threads."""
    thread = client.archive_thread(thread_id, cascade=cascade)
    if thread is None:
        return {"error": f"Thread not found: {thread_id}"}
    return {"thread": thread.to_dict()}


def threads_delete_thread(client: ThreadsClient, *, thread_id: str) -> dict[str, Any]:
    if not client.delete_thread(thread_id):
        return {"error": f"Thread not found: {thread_id}"}
    return {"deleted": True, "id": thread_id}


def threads_get_thread(client: ThreadsClient, *, identifier: str) -> dict[str, Any]:
    """Get a thread by id, falling back to a case-insensitive name match."""
    thread = client.get_thread(identifier) or client.get_thread_by_name(identifier)
    if thread is None:
        return {"error": f"Thread not found: {identifier}"}
    return {"thread": thread.to_dict()}


def threads_add_progress(
    client: ThreadsClient, *, thread_id: str, note: str, timestamp: str | None = None
) -> dict[str, Any]:
    entry = client.add_progress(thread_id, note, timestamp)
    if entry is None:
        return {"error": f"Thread not found: {thread_id}"}
    return {"progress": entry.to_dict()}


def threads_list_progress(
    client: ThreadsClient, *, thread_id: str, limit: int | None = None
) -> dict[str, Any]:
    """List progress entries, most recent first."""
    entries = client.list_progress(thread_id, limit)
    return {"progress": [p.to_dict() for p in entries], "count": len(entries)}


def threads_edit_progress(
    client: ThreadsClient, *, thread_id: str, progress_id: str, note: str
) -> dict[str, Any]:
    entry = client.edit_progress(thread_id, progress_id, note)
    if entry is None:
        return {"error": f"Thread or progress entry not found: {thread_id}/{progress_id}"}
    return {"progress": entry.to_dict()}


def threads_delete_progress(
    client: ThreadsClient, *, thread_id: str, progress_id: str
) -> dict[str, Any]:
    if not client.delete_progress(thread_id, progress_id):
        return {"error": f"Thread or progress entry not found: {thread_id}/{progress_id}"}
    return {"deleted": True, "id": progress_id}


def threads_create_container(
    client: ThreadsClient,
    *,
    name: str,
    description: str | None = None,
    parent_id: str | None = None,
    group_id: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    try:
        container = client.create_container(
            name,
            description=description or "",
            parent_id=parent_id,
            group_id=group_id,
            tags=tags,
        )
    except ValueError as e:
        return {"error": str(e)}
    return {"container": container.to_dict()}


def threads_update_container(
    client: ThreadsClient,
    *,
    container_id: str,
    name: str | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    fields = _provided(name=name, description=description, tags=tags)
    try:
        container = client.update_container(container_id, **fields)
    except ValueError as e:
        return {"error": str(e)}
    if container is None:
        return {"error": f"Container not found: {container_id}"}
    return {"container": container.to_dict()}


def threads_delete_container(client: ThreadsClient, *, container_id: str) -> dict[str, Any]:
    if not client.delete_container(container_id):
        return {"error": f"Container not found: {container_id}"}
    return {"deleted": True, "id": container_id}


def threads_create_group(
    client: ThreadsClient, *, name: str, description: str | None = None
) -> dict[str, Any]:
    try:
        group = client.create_group(name, description=description or "")
    except ValueError as e:
        return {"error": str(e)}
    return {"group": group.to_dict()}


def threads_update_group(
    client: ThreadsClient,
    *,
    group_id: str,
    name: str | None = None,
    description: str | None = None,
) -> dict[str, Any]:
    try:
        group = client.update_group(group_id, **_provided(name=name, description=description))
    except ValueError as e:
        return {"error": str(e)}
    if group is None:
        return {"error": f"Group not found: {group_id}"}
    return {"group": group.to_dict()}


def threads_delete_group(client: ThreadsClient, *, group_id: str) -> dict[str, Any]:
    if not client.delete_group(group_id):
        return {"error": f"Group not found: {group_id}"}
    return {"deleted": True, "id": group_id}


def threads_set_parent(
    client: ThreadsClient, *, entity_id: str, parent_id: str | None = None
) -> dict[str, Any]:
    """Set or clear (parent_id=None) the parent of a thread or container."""
    entity = client.set_parent(entity_id, parent_id)
    if entity is None:
        return {"error": "Entity or parent not found"}
    return {"entity": entity.to_dict()}


def threads_move_to_group(
    client: ThreadsClient, *, entity_id: str, group_id: str | None = None
) -> dict[str, Any]:
    """Set or clear (group_id=None) the group of a thread or container."""
    entity = client.move_to_group(entity_id, group_id)
    if entity is None:
        return {"error": "Entity or group not found"}
    return {"entity": entity.to_dict()}


def threads_get_children(client: ThreadsClient, *, entity_id: str) -> dict[str, Any]:
    children = client.get_children(entity_id)
    return {"children": _entities(children), "count": len(children)}


def threads_get_ancestors(client: ThreadsClient, *, entity_id: str) -> dict[str, Any]:
    """Ancestors nearest first."""
    ancestors = client.get_ancestors(entity_id)
    return {"ancestors": _entities(ancestors), "count": len(ancestors)}


def threads_get_subtree(client: ThreadsClient, *, entity_id: str) -> dict[str, Any]:
    subtree = client.get_subtree(entity_id)
    if subtree is None:
        return {"error": f"Entity not found: {entity_id}"}
    return {"subtree": subtree.to_dict()}


def threads_list_threads(
    client: ThreadsClient,
    *,
    status: str | None = None,
    temperature: str | None = None,
    size: str | None = None,
    importance: int | None = None,
    group_id: str | None = None,
    parent_id: str | None = None,
    roots_only: bool = False,
    tags: list[str] | None = None,
    search: str | None = None,
) -> dict[str, Any]:
    """List threads matching all given filters.

    Args:
        roots_only: Only threads without a parent (overrides parent_id).
    """
    flt = ThreadFilter(
        status=status,
        temperature=temperature,
        size=size,
        importance=importance,
        group_id=group_id if group_id is not None else UNSET,
        parent_id=None if roots_only else (parent_id if parent_id is not None else UNSET),
        tags=tuple(tags or ()),
        search=search,
    )
    threads = client.list_threads(flt)
    return {"threads": [t.to_dict() for t in threads], "count": len(threads)}


def threads_list_containers(
    client: ThreadsClient,
    *,
    group_id: str | None = None,
    parent_id: str | None = None,
    roots_only: bool = False,
    tags: list[str] | None = None,
    search: str | None = None,
) -> dict[str, Any]:
    flt = ContainerFilter(
        group_id=group_id if group_id is not None else UNSET,
        parent_id=None if roots_only else (parent_id if parent_id is not None else UNSET),
        tags=tuple(tags or ()),
        search=search,
    )
    containers = client.list_containers(flt)
    return {"containers": [c.to_dict() for c in containers], "count": len(containers)}


def threads_list_groups(client: ThreadsClient) -> dict[str, Any]:
    groups = client.list_groups()
    return {"groups": [g.to_dict() for g in groups], "count": len(groups)}


def threads_search(client: ThreadsClient, *, query: str) -> dict[str, Any]:
    """Search threads and containers by name, description and tags."""
    results = client.search(query)
    return {"results": _entities(results), "count": len(results)}


def threads_get_next_action(client: ThreadsClient) -> dict[str, Any]:
    thread = client.get_next_action()
    if thread is None:
        return {"thread": None, "message": "No active threads"}
    return {"thread": thread.to_dict()}


def threads_get_full_tree(client: ThreadsClient) -> dict[str, Any]:
    tree = client.get_full_tree()
    return {"tree": [node.to_dict() for node in tree], "count": len(tree)}


def threads_get_entity(client: ThreadsClient, *, identifier: str) -> dict[str, Any]:
    entity = client.get_entity(identifier) or client.get_entity_by_name(identifier)
    if entity is None:
        return {"error": f"Entity not found: {identifier}"}
    return {"entity": entity.to_dict()}


def threads_get_container(client: ThreadsClient, *, identifier: str) -> dict[str, Any]:
    container = client.get_container(identifier) or client.get_container_by_name(identifier)
    if container is None:
        return {"error": f"Container not found: {identifier}"}
    return {"container": container.to_dict()}


def threads_get_group(client: ThreadsClient, *, identifier: str) -> dict[str, Any]:
    group = client.get_group(identifier) or client.get_group_by_name(identifier)
    if group is None:
        return {"error": f"Group not found: {identifier}"}
    return {"group": group.to_dict()}


# --- Resource readers (testable without MCP context) ---


def _json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def read_thread_resource(client: ThreadsClient, segment: str) -> str:
    """Read ``threads://threads/{segment}``.

    Raises:
        ValueError: If the segment is not a known list nor a thread id/name.
    """
    if segment == "list":
        return _json([t.to_dict() for t in client.list_threads()])
    if segment == "active":
        return _json([t.to_dict() for t in client.list_threads(ThreadFilter(status="active"))])
    if segment == "hot":
        hot = [t for t in client.list_threads() if t.temperature in ("hot", "warm")]
        return _json([t.to_dict() for t in hot])

    thread = client.get_thread(segment) or client.get_thread_by_name(segment)
    if thread is None:
        msg = f"Resource not found: threads://threads/{segment}"
        raise ValueError(msg)
    return _json(thread.to_dict())


def read_container_resource(client: ThreadsClient, segment: str) -> str:
    if segment == "list":
        return _json([c.to_dict() for c in client.list_containers()])
    container = client.get_container(segment) or client.get_container_by_name(segment)
    if container is None:
        msg = f"Resource not found: threads://containers/{segment}"
        raise ValueError(msg)
    return _json(container.to_dict())


def read_group_resource(client: ThreadsClient, segment: str, *, members: bool = False) -> str:
    if segment == "list" and not members:
        return _json([g.to_dict() for g in client.list_groups()])
    if members:
        return _json(_entities(client.get_group_members(segment)))
    group = client.get_group(segment) or client.get_group_by_name(segment)
    if group is None:
        msg = f"Resource not found: threads://groups/{segment}"
        raise ValueError(msg)
    return _json(group.to_dict())


def read_progress_resource(client: ThreadsClient, thread_id: str) -> str:
    progress = client.list_progress(thread_id)
    if not progress:
        msg = f"Resource not found: threads://progress/{thread_id}"
        raise ValueError(msg)
    return _json([p.to_dict() for p in progress])


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    config: StoreConfig
    client: ThreadsClient


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Resolve the data file location on startup."""
    config = resolve_store_config()
    logger.info("Using threads data file {}", config.data_file)
    yield ServerContext(config=config, client=ThreadsClient(JsonFileStorage(config)))


mcp_server = FastMCP(
    "threads-mcp",
    instructions="""\
Threads tracks ongoing work. Threads are units of work with a status,
temperature (momentum: frozen → hot), size and importance (1-5). Containers
are folders, groups are cross-cutting tags. Threads and containers nest via
a parent id.

## Tips
- Use get_next_action to pick what to work on next.
- Use get_full_tree or get_subtree to see how work is organized.
- Record what happened on a thread with add_progress.
- Tools that take an identifier accept either an id or an exact name.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


def _client(mcp_ctx: Context) -> ThreadsClient:
    return _ctx(mcp_ctx).client


def _resource_client() -> ThreadsClient:
    return _client(mcp_server.get_context())


# --- MCP Tool Wrappers ---


@mcp_server.tool(name="create_thread")
async def create_thread_tool(
    ctx: Context,
    name: str,
    description: str | None = None,
    status: StatusArg | None = None,
    temperature: TemperatureArg | None = None,
    size: SizeArg | None = None,
    importance: int | None = None,
    parent_id: str | None = None,
    group_id: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Create a new thread.

    Args:
        name: Thread name.
        description: What the thread is about.
        status: Defaults to active.
        temperature: Momentum, defaults to warm.
        size: Defaults to medium.
        importance: 1 (low) to 5 (high), defaults to 3.
        parent_id: Parent thread or container ID.
        group_id: Group ID.
        tags: Tags for categorization.
    """
    return threads_create_thread(
        _client(ctx),
        name=name,
        description=description,
        status=status,
        temperature=temperature,
        size=size,
        importance=importance,
        parent_id=parent_id,
        group_id=group_id,
        tags=tags,
    )


@mcp_server.tool(name="update_thread")
async def update_thread_tool(
    ctx: Context,
    id: str,
    name: str | None = None,
    description: str | None = None,
    status: StatusArg | None = None,
    temperature: TemperatureArg | None = None,
    size: SizeArg | None = None,
    importance: int | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Update properties of a thread. Only the given fields change.

    Args:
        id: Thread ID.
        tags: Replaces the tag list.
    """
    return threads_update_thread(
        _client(ctx),
        thread_id=id,
        name=name,
        description=description,
        status=status,
        temperature=temperature,
        size=size,
        importance=importance,
        tags=tags,
    )


@mcp_server.tool(name="archive_thread")
async def archive_thread_tool(ctx: Context, id: str, cascade: bool = False) -> dict[str, Any]:
    """Archive a thread.

    Args:
        id: Thread ID.
        cascade: Also archive direct child threads.
    """
    return threads_archive_thread(_client(ctx), thread_id=id, cascade=cascade)


@mcp_server.tool(name="delete_thread")
async def delete_thread_tool(ctx: Context, id: str) -> dict[str, Any]:
    """Permanently delete a thread. Children are not deleted."""
    return threads_delete_thread(_client(ctx), thread_id=id)


@mcp_server.tool(name="get_thread")
async def get_thread_tool(ctx: Context, identifier: str) -> dict[str, Any]:
    """Get a thread by ID or name."""
    return threads_get_thread(_client(ctx), identifier=identifier)


@mcp_server.tool(name="add_progress")
async def add_progress_tool(
    ctx: Context, thread_id: str, note: str, timestamp: str | None = None
) -> dict[str, Any]:
    """Add a progress note to a thread.

    Args:
        thread_id: Thread ID.
        note: What happened.
        timestamp: ISO-8601 timestamp, defaults to now.
    """
    return threads_add_progress(_client(ctx), thread_id=thread_id, note=note, timestamp=timestamp)


@mcp_server.tool(name="list_progress")
async def list_progress_tool(
    ctx: Context, thread_id: str, limit: int | None = None
) -> dict[str, Any]:
    """List progress notes of a thread, most recent first.

    Args:
        thread_id: Thread ID.
        limit: Max entries to return.
    """
    return threads_list_progress(_client(ctx), thread_id=thread_id, limit=limit)


@mcp_server.tool(name="edit_progress")
async def edit_progress_tool(
    ctx: Context, thread_id: str, progress_id: str, note: str
) -> dict[str, Any]:
    """Replace the text of a progress note."""
    return threads_edit_progress(
        _client(ctx), thread_id=thread_id, progress_id=progress_id, note=note
    )


@mcp_server.tool(name="delete_progress")
async def delete_progress_tool(ctx: Context, thread_id: str, progress_id: str) -> dict[str, Any]:
    """Delete a progress note."""
    return threads_delete_progress(_client(ctx), thread_id=thread_id, progress_id=progress_id)


@mcp_server.tool(name="create_container")
async def create_container_tool(
    ctx: Context,
    name: str,
    description: str | None = None,
    parent_id: str | None = None,
    group_id: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Create a new container for organizing threads."""
    return threads_create_container(
        _client(ctx),
        name=name,
        description=description,
        parent_id=parent_id,
        group_id=group_id,
        tags=tags,
    )


@mcp_server.tool(name="update_container")
async def update_container_tool(
    ctx: Context,
    id: str,
    name: str | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Update properties of a container."""
    return threads_update_container(
        _client(ctx), container_id=id, name=name, description=description, tags=tags
    )


@mcp_server.tool(name="delete_container")
async def delete_container_tool(ctx: Context, id: str) -> dict[str, Any]:
    """Delete a container. Its children are not deleted."""
    return threads_delete_container(_client(ctx), container_id=id)


@mcp_server.tool(name="create_group")
async def create_group_tool(
    ctx: Context, name: str, description: str | None = None
) -> dict[str, Any]:
    """Create a new group."""
    return threads_create_group(_client(ctx), name=name, description=description)


@mcp_server.tool(name="update_group")
async def update_group_tool(
    ctx: Context, id: str, name: str | None = None, description: str | None = None
) -> dict[str, Any]:
    """Update properties of a group."""
    return threads_update_group(_client(ctx), group_id=id, name=name, description=description)


@mcp_server.tool(name="delete_group")
async def delete_group_tool(ctx: Context, id: str) -> dict[str, Any]:
    """Delete a group. Members keep their group reference."""
    return threads_delete_group(_client(ctx), group_id=id)


@mcp_server.tool(name="set_parent")
async def set_parent_tool(
    ctx: Context, entity_id: str, parent_id: str | None = None
) -> dict[str, Any]:
    """Set the parent of a thread or container.

    Args:
        entity_id: Thread or container ID.
        parent_id: New parent ID, or null to make it a root.
    """
    return threads_set_parent(_client(ctx), entity_id=entity_id, parent_id=parent_id)


@mcp_server.tool(name="move_to_group")
async def move_to_group_tool(
    ctx: Context, entity_id: str, group_id: str | None = None
) -> dict[str, Any]:
    """Move a thread or container to a group.

    Args:
        entity_id: Thread or container ID.
        group_id: Group ID, or null to remove from its group.
    """
    return threads_move_to_group(_client(ctx), entity_id=entity_id, group_id=group_id)


@mcp_server.tool(name="get_children")
async def get_children_tool(ctx: Context, entity_id: str) -> dict[str, Any]:
    """Get direct children of a thread or container."""
    return threads_get_children(_client(ctx), entity_id=entity_id)


@mcp_server.tool(name="get_ancestors")
async def get_ancestors_tool(ctx: Context, entity_id: str) -> dict[str, Any]:
    """Get the ancestor chain of a thread or container, nearest first."""
    return threads_get_ancestors(_client(ctx), entity_id=entity_id)


@mcp_server.tool(name="get_subtree")
async def get_subtree_tool(ctx: Context, entity_id: str) -> dict[str, Any]:
    """Get a thread or container with all its descendants."""
    return threads_get_subtree(_client(ctx), entity_id=entity_id)


@mcp_server.tool(name="list_threads")
async def list_threads_tool(
    ctx: Context,
    status: StatusArg | None = None,
    temperature: TemperatureArg | None = None,
    size: SizeArg | None = None,
    importance: int | None = None,
    group_id: str | None = None,
    parent_id: str | None = None,
    roots_only: bool = False,
    tags: list[str] | None = None,
    search: str | None = None,
) -> dict[str, Any]:
    """List threads with optional filtering.

    All filters must match. A thread matches tags if it has any of them.

    Args:
        status: Filter by status.
        temperature: Filter by temperature.
        size: Filter by size.
        importance: Filter by importance (1-5).
        group_id: Filter by group.
        parent_id: Filter by parent.
        roots_only: Only threads without a parent.
        tags: Filter by any of these tags.
        search: Search in name and description.
    """
    return threads_list_threads(
        _client(ctx),
        status=status,
        temperature=temperature,
        size=size,
        importance=importance,
        group_id=group_id,
        parent_id=parent_id,
        roots_only=roots_only,
        tags=tags,
        search=search,
    )


@mcp_server.tool(name="list_containers")
async def list_containers_tool(
    ctx: Context,
    group_id: str | None = None,
    parent_id: str | None = None,
    roots_only: bool = False,
    tags: list[str] | None = None,
    search: str | None = None,
) -> dict[str, Any]:
    """List containers with optional filtering."""
    return threads_list_containers(
        _client(ctx),
        group_id=group_id,
        parent_id=parent_id,
        roots_only=roots_only,
        tags=tags,
        search=search,
    )


@mcp_server.tool(name="list_groups")
async def list_groups_tool(ctx: Context) -> dict[str, Any]:
    """List all groups."""
    return threads_list_groups(_client(ctx))


@mcp_server.tool(name="search_threads")
async def search_threads_tool(ctx: Context, query: str) -> dict[str, Any]:
    """Search threads and containers by name, description or tag."""
    return threads_search(_client(ctx), query=query)


@mcp_server.tool(name="get_next_action")
async def get_next_action_tool(ctx: Context) -> dict[str, Any]:
    """Suggest the next thread to work on.

    Picks the active thread with the highest temperature, then importance.
    """
    return threads_get_next_action(_client(ctx))


@mcp_server.tool(name="get_full_tree")
async def get_full_tree_tool(ctx: Context) -> dict[str, Any]:
    """Get the complete hierarchy of threads and containers."""
    return threads_get_full_tree(_client(ctx))


@mcp_server.tool(name="get_entity")
async def get_entity_tool(ctx: Context, identifier: str) -> dict[str, Any]:
    """Get any entity (thread or container) by ID or name."""
    return threads_get_entity(_client(ctx), identifier=identifier)


@mcp_server.tool(name="get_container")
async def get_container_tool(ctx: Context, identifier: str) -> dict[str, Any]:
    """Get a container by ID or name."""
    return threads_get_container(_client(ctx), identifier=identifier)


@mcp_server.tool(name="get_group")
async def get_group_tool(ctx: Context, identifier: str) -> dict[str, Any]:
    """Get a group by ID or name."""
    return threads_get_group(_client(ctx), identifier=identifier)


# --- MCP Resources ---


@mcp_server.resource(
    "threads://threads/list", name="All Threads", mime_type="application/json"
)
def all_threads_resource() -> str:
    """List of all threads in the system."""
    return read_thread_resource(_resource_client(), "list")


@mcp_server.resource(
    "threads://threads/active", name="Active Threads", mime_type="application/json"
)
def active_threads_resource() -> str:
    """Threads with active status."""
    return read_thread_resource(_resource_client(), "active")


@mcp_server.resource("threads://threads/hot", name="Hot Threads", mime_type="application/json")
def hot_threads_resource() -> str:
    """Threads with hot or warm temperature."""
    return read_thread_resource(_resource_client(), "hot")


@mcp_server.resource("threads://threads/{identifier}", mime_type="application/json")
def thread_resource(identifier: str) -> str:
    """A single thread by ID or name."""
    return read_thread_resource(_resource_client(), identifier)


@mcp_server.resource(
    "threads://containers/list", name="All Containers", mime_type="application/json"
)
def all_containers_resource() -> str:
    """List of all containers."""
    return read_container_resource(_resource_client(), "list")


@mcp_server.resource("threads://containers/{identifier}", mime_type="application/json")
def container_resource(identifier: str) -> str:
    """A single container by ID or name."""
    return read_container_resource(_resource_client(), identifier)


@mcp_server.resource("threads://groups/list", name="All Groups", mime_type="application/json")
def all_groups_resource() -> str:
    """List of all groups."""
    return read_group_resource(_resource_client(), "list")


@mcp_server.resource("threads://groups/{identifier}", mime_type="application/json")
def group_resource(identifier: str) -> str:
    """A single group by ID or name."""
    return read_group_resource(_resource_client(), identifier)


@mcp_server.resource("threads://groups/{identifier}/members", mime_type="application/json")
def group_members_resource(identifier: str) -> str:
    """Containers and threads in a group."""
    return read_group_resource(_resource_client(), identifier, members=True)


@mcp_server.resource("threads://tree", name="Full Hierarchy Tree", mime_type="application/json")
def tree_resource() -> str:
    """Complete hierarchy of all threads and containers."""
    return _json([node.to_dict() for node in _resource_client().get_full_tree()])


@mcp_server.resource("threads://next", name="Next Action", mime_type="application/json")
def next_action_resource() -> str:
    """Suggested next thread to work on."""
    thread = _resource_client().get_next_action()
    return _json(thread.to_dict() if thread else None)


@mcp_server.resource("threads://progress/{thread_id}", mime_type="application/json")
def progress_resource(thread_id: str) -> str:
    """Progress log of a thread, most recent first."""
    return read_progress_resource(_resource_client(), thread_id)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from threads_mcp.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
