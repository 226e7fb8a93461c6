"""Filter models for listing threads and containers."""

from dataclasses import dataclass
from enum import Enum


class _Unset(Enum):
    UNSET = "UNSET"


# Distinguishes "do not filter on parent/group" from "filter on no parent/group".
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class ContainerFilter:
    """Conjunctive filter over containers.

    ``parent_id`` and ``group_id`` default to ``UNSET``; passing ``None``
    selects records without a parent or group.
    """

    group_id: str | None | _Unset = UNSET
    parent_id: str | None | _Unset = UNSET
    tags: tuple[str, ...] = ()
    search: str | None = None


@dataclass(frozen=True)
class ThreadFilter(ContainerFilter):
    """Conjunctive filter over threads."""

    status: str | None = None
    temperature: str | None = None
    size: str | None = None
    importance: int | None = None
