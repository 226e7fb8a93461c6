"""Tree navigation over a loaded document: children, ancestors, subtrees."""

from loguru import logger

from threads_mcp.models.entity import Entity, ThreadsData, TreeNode


def find_entity(data: ThreadsData, entity_id: str) -> Entity | None:
    """Find a thread or container by exact id, threads first."""
    for thread in data.threads:
        if thread.id == entity_id:
            return thread
    for container in data.containers:
        if container.id == entity_id:
            return container
    return None


def get_children(data: ThreadsData, entity_id: str) -> list[Entity]:
    """Get direct children of an entity, containers before threads."""
    containers: list[Entity] = [c for c in data.containers if c.parent_id == entity_id]
    threads: list[Entity] = [t for t in data.threads if t.parent_id == entity_id]
    return containers + threads


def get_roots(data: ThreadsData) -> list[Entity]:
    """Get entities without a parent, containers before threads."""
    containers: list[Entity] = [c for c in data.containers if c.parent_id is None]
    threads: list[Entity] = [t for t in data.threads if t.parent_id is None]
    return containers + threads


def get_ancestors(data: ThreadsData, entity_id: str) -> list[Entity]:
    """Walk parent links upward from an entity.

    Returns ancestors nearest first. Stops at a root or at a parent id that
    does not resolve.
    """
    ancestors: list[Entity] = []
    current = find_entity(data, entity_id)
    seen = {entity_id}

    while current is not None and current.parent_id:
        if current.parent_id in seen:
            logger.warning("Parent cycle detected at {}, stopping ancestor walk", current.parent_id)
            break
        parent = find_entity(data, current.parent_id)
        if parent is None:
            break
        ancestors.append(parent)
        seen.add(parent.id)
        current = parent

    return ancestors


def build_subtree(
    data: ThreadsData, entity: Entity, _path: frozenset[str] = frozenset()
) -> TreeNode:
    """Recursively build a tree node for ``entity`` and all its descendants.

    An entity already on the path from the root is not expanded again.
    """
    path = _path | {entity.id}
    children: list[TreeNode] = []
    for child in get_children(data, entity.id):
        if child.id in path:
            logger.warning("Parent cycle detected at {}, not expanding", child.id)
            continue
        children.append(build_subtree(data, child, path))
    return TreeNode(entity=entity, children=children)


def build_forest(data: ThreadsData) -> list[TreeNode]:
    """Build one tree per root entity."""
    return [build_subtree(data, root) for root in get_roots(data)]
