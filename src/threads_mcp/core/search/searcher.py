"""Filtering, free-text search and next-action selection."""

from collections.abc import Iterable, Sequence
from typing import TypeVar

from threads_mcp.models.entity import TEMPERATURES, Container, Entity, Thread, ThreadsData
from threads_mcp.models.query import UNSET, ContainerFilter, ThreadFilter

E = TypeVar("E", Thread, Container)


def _matches_text(entity: Entity, needle: str) -> bool:
    return needle in entity.name.lower() or needle in (entity.description or "").lower()


def _apply_shared_filters(records: Iterable[E], flt: ContainerFilter) -> list[E]:
    """Apply the filters threads and containers have in common."""
    result = list(records)
    if flt.group_id is not UNSET:
        result = [r for r in result if r.group_id == flt.group_id]
    if flt.parent_id is not UNSET:
        result = [r for r in result if r.parent_id == flt.parent_id]
    if flt.tags:
        wanted = set(flt.tags)
        result = [r for r in result if wanted.intersection(r.tags or ())]
    if flt.search:
        needle = flt.search.lower()
        result = [r for r in result if _matches_text(r, needle)]
    return result


def filter_threads(threads: Iterable[Thread], flt: ThreadFilter | None = None) -> list[Thread]:
    """Filter threads; all provided criteria must match, any tag is enough."""
    if flt is None:
        return list(threads)

    result = list(threads)
    if flt.status:
        result = [t for t in result if t.status == flt.status]
    if flt.temperature:
        result = [t for t in result if t.temperature == flt.temperature]
    if flt.size:
        result = [t for t in result if t.size == flt.size]
    if flt.importance:
        result = [t for t in result if t.importance == flt.importance]
    return _apply_shared_filters(result, flt)


def filter_containers(
    containers: Iterable[Container], flt: ContainerFilter | None = None
) -> list[Container]:
    """Filter containers; all provided criteria must match, any tag is enough."""
    if flt is None:
        return list(containers)
    return _apply_shared_filters(containers, flt)


def search_entities(data: ThreadsData, query: str) -> list[Entity]:
    """Case-insensitive substring search over name, description and tags.

    Containers come before threads.
    """
    needle = query.lower()

    def matches(entity: Entity) -> bool:
        if _matches_text(entity, needle):
            return True
        return any(needle in tag.lower() for tag in entity.tags or ())

    containers: list[Entity] = [c for c in data.containers if matches(c)]
    threads: list[Entity] = [t for t in data.threads if matches(t)]
    return containers + threads


def _priority(thread: Thread) -> tuple[int, int]:
    if thread.temperature in TEMPERATURES:
        return TEMPERATURES.index(thread.temperature), thread.importance
    return -1, thread.importance


def pick_next_action(threads: Sequence[Thread]) -> Thread | None:
    """Pick the active thread with the highest temperature, then importance.

    Ties on both keys go to the thread that comes first.
    """
    active = [t for t in threads if t.status == "active"]
    if not active:
        return None
    return max(active, key=_priority)
