"""Protocols for dependency injection in the threads client."""

from typing import Protocol, runtime_checkable

from threads_mcp.models.entity import ThreadsData


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for whole-document storage backends."""

    def load(self) -> ThreadsData:
        """Read and return the full document."""
        ...

    def save(self, data: ThreadsData) -> None:
        """Persist the full document."""
        ...
