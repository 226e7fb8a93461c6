"""Domain models."""

from threads_mcp.models.entity import (
    Container,
    Entity,
    Group,
    ProgressEntry,
    Thread,
    ThreadsData,
    TreeNode,
    is_container,
    is_thread,
)
from threads_mcp.models.query import UNSET, ContainerFilter, ThreadFilter

__all__ = [
    "UNSET",
    "Container",
    "ContainerFilter",
    "Entity",
    "Group",
    "ProgressEntry",
    "Thread",
    "ThreadFilter",
    "ThreadsData",
    "TreeNode",
    "is_container",
    "is_thread",
]
