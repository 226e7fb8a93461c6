"""Domain models for threads, containers and groups."""

from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict, get_args

ThreadStatus = Literal["active", "paused", "stopped", "completed", "archived"]
Temperature = Literal["frozen", "freezing", "cold", "tepid", "warm", "hot"]
ThreadSize = Literal["tiny", "small", "medium", "large", "huge"]

THREAD_STATUSES: tuple[str, ...] = get_args(ThreadStatus)
# Ordered from coldest to hottest; the index is the rank used by next-action.
TEMPERATURES: tuple[str, ...] = get_args(Temperature)
THREAD_SIZES: tuple[str, ...] = get_args(ThreadSize)
MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 5

DATA_VERSION = "1.0.0"


class DetailsEntry(TypedDict):
    """Free-form note attached to an entity."""

    id: str
    timestamp: str
    content: str


class Dependency(TypedDict):
    """Dependency of a thread on another thread."""

    threadId: str
    why: str
    what: str
    how: str
    when: str


def _extra(raw: dict[str, Any], known: frozenset[str]) -> dict[str, Any]:
    """Keys written by other tools that we do not model but must keep."""
    return {k: v for k, v in raw.items() if k not in known}


@dataclass
class ProgressEntry:
    """A timestamped note in a thread's progress log."""

    id: str
    timestamp: str
    note: str
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    _KEYS = frozenset({"id", "timestamp", "note"})

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ProgressEntry":
        return cls(
            id=raw["id"],
            timestamp=raw.get("timestamp", ""),
            note=raw.get("note", ""),
            extra=_extra(raw, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.extra, "id": self.id, "timestamp": self.timestamp, "note": self.note}


@dataclass
class Thread:
    """A unit of ongoing work."""

    id: str
    name: str
    created_at: str
    updated_at: str
    description: str = ""
    status: ThreadStatus = "active"
    temperature: Temperature = "warm"
    size: ThreadSize = "medium"
    importance: int = 3
    parent_id: str | None = None
    group_id: str | None = None
    tags: list[str] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)
    progress: list[ProgressEntry] = field(default_factory=list)
    details: list[DetailsEntry] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    type: Literal["thread"] = "thread"

    _KEYS = frozenset(
        {
            "type",
            "id",
            "name",
            "description",
            "status",
            "importance",
            "temperature",
            "size",
            "parentId",
            "groupId",
            "tags",
            "dependencies",
            "progress",
            "details",
            "createdAt",
            "updatedAt",
        }
    )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Thread":
        return cls(
            id=raw["id"],
            name=raw["name"],
            description=raw["description"],
            status=raw.get("status", "active"),
            importance=raw.get("importance", 3),
            temperature=raw.get("temperature", "warm"),
            size=raw.get("size", "medium"),
            parent_id=raw.get("parentId"),
            group_id=raw.get("groupId"),
            tags=list(raw["tags"]),
            dependencies=list(raw.get("dependencies", [])),
            progress=[ProgressEntry.from_dict(p) for p in raw.get("progress", [])],
            details=list(raw.get("details", [])),
            created_at=raw.get("createdAt", ""),
            updated_at=raw.get("updatedAt", ""),
            extra=_extra(raw, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "type": self.type,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "importance": self.importance,
            "temperature": self.temperature,
            "size": self.size,
            "parentId": self.parent_id,
            "groupId": self.group_id,
            "tags": list(self.tags),
            "dependencies": list(self.dependencies),
            "progress": [p.to_dict() for p in self.progress],
            "details": list(self.details),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class Container:
    """An organizational folder for threads and other containers."""

    id: str
    name: str
    created_at: str
    updated_at: str
    description: str = ""
    parent_id: str | None = None
    group_id: str | None = None
    tags: list[str] = field(default_factory=list)
    details: list[DetailsEntry] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    type: Literal["container"] = "container"

    _KEYS = frozenset(
        {
            "type",
            "id",
            "name",
            "description",
            "parentId",
            "groupId",
            "tags",
            "details",
            "createdAt",
            "updatedAt",
        }
    )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Container":
        return cls(
            id=raw["id"],
            name=raw["name"],
            description=raw["description"],
            parent_id=raw.get("parentId"),
            group_id=raw.get("groupId"),
            tags=list(raw["tags"]),
            details=list(raw.get("details", [])),
            created_at=raw.get("createdAt", ""),
            updated_at=raw.get("updatedAt", ""),
            extra=_extra(raw, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "type": self.type,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "parentId": self.parent_id,
            "groupId": self.group_id,
            "tags": list(self.tags),
            "details": list(self.details),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


Entity = Thread | Container


def is_thread(entity: Entity) -> bool:
    return entity.type != "container"


def is_container(entity: Entity) -> bool:
    return entity.type == "container"


@dataclass
class Group:
    """A cross-cutting tag that threads and containers can belong to."""

    id: str
    name: str
    created_at: str
    updated_at: str
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    _KEYS = frozenset({"id", "name", "description", "createdAt", "updatedAt"})

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Group":
        return cls(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            created_at=raw.get("createdAt", ""),
            updated_at=raw.get("updatedAt", ""),
            extra=_extra(raw, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class ThreadsData:
    """The whole persisted document."""

    threads: list[Thread] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    version: str = DATA_VERSION
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    _KEYS = frozenset({"threads", "containers", "groups", "version"})

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ThreadsData":
        """Build the document from already-migrated JSON data."""
        return cls(
            threads=[Thread.from_dict(t) for t in raw["threads"]],
            containers=[Container.from_dict(c) for c in raw["containers"]],
            groups=[Group.from_dict(g) for g in raw.get("groups", [])],
            version=raw.get("version", DATA_VERSION),
            extra=_extra(raw, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "threads": [t.to_dict() for t in self.threads],
            "containers": [c.to_dict() for c in self.containers],
            "groups": [g.to_dict() for g in self.groups],
            "version": self.version,
        }


@dataclass
class TreeNode:
    """An entity with its descendants."""

    entity: Entity
    children: list["TreeNode"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity": self.entity.to_dict(),
            "children": [c.to_dict() for c in self.children],
        }


def validate_thread_fields(fields: dict[str, Any]) -> None:
    """Validate enum-like thread fields present in ``fields``.

    Raises:
        ValueError: If a status, temperature, size or importance is out of range.
    """
    choices = {"status": THREAD_STATUSES, "temperature": TEMPERATURES, "size": THREAD_SIZES}
    for key, allowed in choices.items():
        if key in fields and fields[key] not in allowed:
            msg = f"Invalid {key} {fields[key]!r}. Must be one of: {', '.join(allowed)}"
            raise ValueError(msg)
    if "importance" in fields:
        importance = fields["importance"]
        if (
            not isinstance(importance, int)
            or isinstance(importance, bool)
            or not MIN_IMPORTANCE <= importance <= MAX_IMPORTANCE
        ):
            msg = f"Invalid importance {importance!r}. Must be {MIN_IMPORTANCE}-{MAX_IMPORTANCE}"
            raise ValueError(msg)
