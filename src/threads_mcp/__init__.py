"""Threads tracker: JSON-backed store and MCP server."""

from threads_mcp.config import StoreConfig, resolve_store_config
from threads_mcp.core.client import ThreadsClient
from threads_mcp.core.storage.json_store import JsonFileStorage, StorageError
from threads_mcp.protocols import StorageProtocol

__all__ = [
    "JsonFileStorage",
    "StorageError",
    "StorageProtocol",
    "StoreConfig",
    "ThreadsClient",
    "resolve_store_config",
]
