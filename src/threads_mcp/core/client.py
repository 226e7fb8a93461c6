"""Threads store client: CRUD, progress log, hierarchy and queries.

Every call loads the full document from storage; every mutation saves the
full document back. Nothing is cached between calls. Lookups that fail
return ``None`` (or ``False``/``[]``) instead of raising; only storage
failures and invalid arguments raise.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from threads_mcp.core.search.searcher import (
    filter_containers,
    filter_threads,
    pick_next_action,
    search_entities,
)
from threads_mcp.core.tree.navigation import (
    build_forest,
    build_subtree,
    find_entity,
    get_ancestors,
    get_children,
)
from threads_mcp.models.entity import (
    Container,
    Entity,
    Group,
    ProgressEntry,
    Thread,
    ThreadsData,
    TreeNode,
    validate_thread_fields,
)
from threads_mcp.models.query import ContainerFilter, ThreadFilter
from threads_mcp.protocols import StorageProtocol

_CONTAINER_FIELDS = frozenset({"name", "description", "parent_id", "group_id", "tags"})
_THREAD_FIELDS = _CONTAINER_FIELDS | {"status", "temperature", "size", "importance"}
_GROUP_FIELDS = frozenset({"name", "description"})


def _now() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_name(name: str) -> None:
    if not name or not name.strip():
        msg = "Name must not be empty"
        raise ValueError(msg)


def _check_fields(fields: dict[str, Any], allowed: frozenset[str], kind: str) -> None:
    unknown = sorted(set(fields) - allowed)
    if unknown:
        msg = f"Cannot update {kind} fields: {', '.join(unknown)}"
        raise ValueError(msg)
    if "name" in fields:
        _require_name(fields["name"])


def _find_by_name(records: list[Any], name: str) -> Any | None:
    lower = name.lower()
    return next((r for r in records if r.name.lower() == lower), None)


class ThreadsClient:
    """Operations over the threads document."""

    def __init__(self, storage: StorageProtocol) -> None:
        self.storage = storage

    def _load(self) -> ThreadsData:
        return self.storage.load()

    def _save(self, data: ThreadsData) -> None:
        self.storage.save(data)

    # --- Threads ---

    def list_threads(self, flt: ThreadFilter | None = None) -> list[Thread]:
        return filter_threads(self._load().threads, flt)

    def get_thread(self, thread_id: str) -> Thread | None:
        return next((t for t in self._load().threads if t.id == thread_id), None)

    def get_thread_by_name(self, name: str) -> Thread | None:
        return _find_by_name(self._load().threads, name)

    def create_thread(
        self,
        name: str,
        *,
        description: str = "",
        status: str = "active",
        temperature: str = "warm",
        size: str = "medium",
        importance: int = 3,
        parent_id: str | None = None,
        group_id: str | None = None,
        tags: list[str] | None = None,
    ) -> Thread:
        """Create a thread.

        ``parent_id`` and ``group_id`` are stored as given; use ``set_parent``
        and ``move_to_group`` for validated assignment.

        Raises:
            ValueError: If the name is empty or an enum field is out of range.
        """
        _require_name(name)
        validate_thread_fields(
            {"status": status, "temperature": temperature, "size": size, "importance": importance}
        )
        data = self._load()
        now = _now()
        thread = Thread(
            id=_new_id(),
            name=name,
            description=description or "",
            status=status,  # type: ignore[arg-type]
            temperature=temperature,  # type: ignore[arg-type]
            size=size,  # type: ignore[arg-type]
            importance=importance,
            parent_id=parent_id,
            group_id=group_id,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )
        data.threads.append(thread)
        self._save(data)
        logger.info("Created thread {} ({!r})", thread.id, thread.name)
        return thread

    def update_thread(self, thread_id: str, **fields: Any) -> Thread | None:
        """Merge ``fields`` into a thread; unspecified fields keep their value.

        Raises:
            ValueError: On unknown fields or out-of-range values.
        """
        _check_fields(fields, _THREAD_FIELDS, "thread")
        validate_thread_fields(fields)
        data = self._load()
        thread = next((t for t in data.threads if t.id == thread_id), None)
        if thread is None:
            return None
        for key, value in fields.items():
            setattr(thread, key, list(value) if key == "tags" else value)
        thread.updated_at = _now()
        self._save(data)
        return thread

    def archive_thread(self, thread_id: str, *, cascade: bool = False) -> Thread | None:
        """Archive a thread and, with ``cascade``, its direct child threads.

        Grandchildren are left alone.
        """
        data = self._load()
        thread = next((t for t in data.threads if t.id == thread_id), None)
        if thread is None:
            return None

        now = _now()
        thread.status = "archived"
        thread.updated_at = now

        if cascade:
            for child in data.threads:
                if child.parent_id == thread_id:
                    child.status = "archived"
                    child.updated_at = now

        self._save(data)
        return thread

    def delete_thread(self, thread_id: str) -> bool:
        """Delete a thread. Children keep their now-dangling parent id."""
        data = self._load()
        index = next((i for i, t in enumerate(data.threads) if t.id == thread_id), None)
        if index is None:
            return False
        del data.threads[index]
        self._save(data)
        logger.info("Deleted thread {}", thread_id)
        return True

    # --- Progress ---

    def add_progress(
        self, thread_id: str, note: str, timestamp: str | None = None
    ) -> ProgressEntry | None:
        data = self._load()
        thread = next((t for t in data.threads if t.id == thread_id), None)
        if thread is None:
            return None

        entry = ProgressEntry(id=_new_id(), timestamp=timestamp or _now(), note=note)
        thread.progress.append(entry)
        thread.updated_at = _now()
        self._save(data)
        return entry

    def list_progress(self, thread_id: str, limit: int | None = None) -> list[ProgressEntry]:
        """Progress entries most recent first, optionally truncated to ``limit``."""
        thread = self.get_thread(thread_id)
        if thread is None:
            return []
        progress = list(reversed(thread.progress))
        if limit and limit > 0:
            progress = progress[:limit]
        return progress

    def edit_progress(self, thread_id: str, progress_id: str, note: str) -> ProgressEntry | None:
        data = self._load()
        thread = next((t for t in data.threads if t.id == thread_id), None)
        if thread is None:
            return None
        entry = next((p for p in thread.progress if p.id == progress_id), None)
        if entry is None:
            return None

        entry.note = note
        thread.updated_at = _now()
        self._save(data)
        return entry

    def delete_progress(self, thread_id: str, progress_id: str) -> bool:
        data = self._load()
        thread = next((t for t in data.threads if t.id == thread_id), None)
        if thread is None:
            return False
        index = next((i for i, p in enumerate(thread.progress) if p.id == progress_id), None)
        if index is None:
            return False

        del thread.progress[index]
        thread.updated_at = _now()
        self._save(data)
        return True

    # --- Containers ---

    def list_containers(self, flt: ContainerFilter | None = None) -> list[Container]:
        return filter_containers(self._load().containers, flt)

    def get_container(self, container_id: str) -> Container | None:
        return next((c for c in self._load().containers if c.id == container_id), None)

    def get_container_by_name(self, name: str) -> Container | None:
        return _find_by_name(self._load().containers, name)

    def create_container(
        self,
        name: str,
        *,
        description: str = "",
        parent_id: str | None = None,
        group_id: str | None = None,
        tags: list[str] | None = None,
    ) -> Container:
        _require_name(name)
        data = self._load()
        now = _now()
        container = Container(
            id=_new_id(),
            name=name,
            description=description or "",
            parent_id=parent_id,
            group_id=group_id,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )
        data.containers.append(container)
        self._save(data)
        logger.info("Created container {} ({!r})", container.id, container.name)
        return container

    def update_container(self, container_id: str, **fields: Any) -> Container | None:
        _check_fields(fields, _CONTAINER_FIELDS, "container")
        data = self._load()
        container = next((c for c in data.containers if c.id == container_id), None)
        if container is None:
            return None
        for key, value in fields.items():
            setattr(container, key, list(value) if key == "tags" else value)
        container.updated_at = _now()
        self._save(data)
        return container

    def delete_container(self, container_id: str) -> bool:
        data = self._load()
        index = next((i for i, c in enumerate(data.containers) if c.id == container_id), None)
        if index is None:
            return False
        del data.containers[index]
        self._save(data)
        logger.info("Deleted container {}", container_id)
        return True

    # --- Groups ---

    def list_groups(self) -> list[Group]:
        return self._load().groups

    def get_group(self, group_id: str) -> Group | None:
        return next((g for g in self._load().groups if g.id == group_id), None)

    def get_group_by_name(self, name: str) -> Group | None:
        return _find_by_name(self._load().groups, name)

    def create_group(self, name: str, *, description: str = "") -> Group:
        _require_name(name)
        data = self._load()
        now = _now()
        group = Group(
            id=_new_id(),
            name=name,
            description=description or "",
            created_at=now,
            updated_at=now,
        )
        data.groups.append(group)
        self._save(data)
        logger.info("Created group {} ({!r})", group.id, group.name)
        return group

    def update_group(self, group_id: str, **fields: Any) -> Group | None:
        _check_fields(fields, _GROUP_FIELDS, "group")
        data = self._load()
        group = next((g for g in data.groups if g.id == group_id), None)
        if group is None:
            return None
        for key, value in fields.items():
            setattr(group, key, value)
        group.updated_at = _now()
        self._save(data)
        return group

    def delete_group(self, group_id: str) -> bool:
        """Delete a group. Members keep their now-dangling group id."""
        data = self._load()
        index = next((i for i, g in enumerate(data.groups) if g.id == group_id), None)
        if index is None:
            return False
        del data.groups[index]
        self._save(data)
        logger.info("Deleted group {}", group_id)
        return True

    def get_group_members(self, group_id: str) -> list[Entity]:
        """Containers then threads assigned to a group."""
        data = self._load()
        containers: list[Entity] = [c for c in data.containers if c.group_id == group_id]
        threads: list[Entity] = [t for t in data.threads if t.group_id == group_id]
        return containers + threads

    # --- Entities ---

    def get_entity(self, entity_id: str) -> Entity | None:
        return find_entity(self._load(), entity_id)

    def get_entity_by_name(self, name: str) -> Entity | None:
        data = self._load()
        return _find_by_name(data.threads, name) or _find_by_name(data.containers, name)

    def list_all_entities(self) -> list[Entity]:
        data = self._load()
        return [*data.threads, *data.containers]

    def set_parent(self, entity_id: str, parent_id: str | None) -> Entity | None:
        """Reparent a thread or container.

        Returns ``None`` if the entity or the new parent does not exist.
        Cycles are not checked.
        """
        if parent_id is not None and self.get_entity(parent_id) is None:
            return None
        if self.get_thread(entity_id) is not None:
            return self.update_thread(entity_id, parent_id=parent_id)
        if self.get_container(entity_id) is not None:
            return self.update_container(entity_id, parent_id=parent_id)
        return None

    def move_to_group(self, entity_id: str, group_id: str | None) -> Entity | None:
        """Assign a thread or container to a group, or clear it with ``None``.

        Returns ``None`` if the entity or the group does not exist.
        """
        if group_id is not None and self.get_group(group_id) is None:
            return None
        if self.get_thread(entity_id) is not None:
            return self.update_thread(entity_id, group_id=group_id)
        if self.get_container(entity_id) is not None:
            return self.update_container(entity_id, group_id=group_id)
        return None

    # --- Hierarchy ---

    def get_children(self, entity_id: str) -> list[Entity]:
        return get_children(self._load(), entity_id)

    def get_ancestors(self, entity_id: str) -> list[Entity]:
        return get_ancestors(self._load(), entity_id)

    def get_subtree(self, entity_id: str) -> TreeNode | None:
        data = self._load()
        entity = find_entity(data, entity_id)
        if entity is None:
            return None
        return build_subtree(data, entity)

    def get_full_tree(self) -> list[TreeNode]:
        return build_forest(self._load())

    # --- Query ---

    def search(self, query: str) -> list[Entity]:
        return search_entities(self._load(), query)

    def get_next_action(self) -> Thread | None:
        """Suggest the active thread to work on next."""
        return pick_next_action(self._load().threads)
