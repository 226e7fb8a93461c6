"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from tests.unit.fakes import InMemoryStorage
from threads_mcp.config import StoreConfig
from threads_mcp.core.client import ThreadsClient
from threads_mcp.core.storage.json_store import JsonFileStorage

SAMPLE_DOCUMENT: dict[str, Any] = {
    "threads": [
        {
            "type": "thread",
            "id": "t-task1",
            "name": "Task1",
            "description": "Write the MCP server",
            "status": "active",
            "importance": 2,
            "temperature": "warm",
            "size": "medium",
            "parentId": "c-project",
            "groupId": None,
            "tags": ["mcp", "python"],
            "dependencies": [],
            "progress": [
                {"id": "p1", "timestamp": "2024-01-01T09:00:00.000Z", "note": "Started"},
                {"id": "p2", "timestamp": "2024-01-02T09:00:00.000Z", "note": "Wrote tools"},
                {"id": "p3", "timestamp": "2024-01-03T09:00:00.000Z", "note": "Added tests"},
            ],
            "details": [],
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-03T09:00:00.000Z",
        },
        {
            "type": "thread",
            "id": "t-task2",
            "name": "Task2",
            "description": "Review docs",
            "status": "paused",
            "importance": 4,
            "temperature": "cold",
            "size": "small",
            "parentId": "c-sub",
            "groupId": None,
            "tags": [],
            "dependencies": [],
            "progress": [],
            "details": [],
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-01T08:00:00.000Z",
        },
        {
            "type": "thread",
            "id": "t-solo",
            "name": "Solo errand",
            "description": "Buy groceries",
            "status": "active",
            "importance": 5,
            "temperature": "tepid",
            "size": "tiny",
            "parentId": None,
            "groupId": "g-home",
            "tags": ["home"],
            "dependencies": [],
            "progress": [],
            "details": [],
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-01T08:00:00.000Z",
        },
        {
            # Written by an older version: no type, tags or description.
            "id": "t-legacy",
            "name": "Legacy thread",
            "status": "completed",
            "importance": 1,
            "temperature": "frozen",
            "size": "large",
            "parentId": None,
            "groupId": None,
            "dependencies": [],
            "progress": [],
            "details": [],
            "createdAt": "2023-06-01T08:00:00.000Z",
            "updatedAt": "2023-06-01T08:00:00.000Z",
        },
    ],
    "containers": [
        {
            "type": "container",
            "id": "c-project",
            "name": "Project",
            "description": "Main project",
            "parentId": None,
            "groupId": "g-work",
            "tags": ["work"],
            "details": [],
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-01T08:00:00.000Z",
        },
        {
            "type": "container",
            "id": "c-sub",
            "name": "Sub",
            "description": "",
            "parentId": "c-project",
            "groupId": None,
            "tags": [],
            "details": [],
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-01T08:00:00.000Z",
        },
    ],
    "groups": [
        {
            "id": "g-work",
            "name": "Work",
            "description": "Day job",
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-01T08:00:00.000Z",
        },
        {
            "id": "g-home",
            "name": "Home",
            "description": "",
            "createdAt": "2024-01-01T08:00:00.000Z",
            "updatedAt": "2024-01-01T08:00:00.000Z",
        },
    ],
    "version": "1.0.0",
}


@pytest.fixture
def store_config(tmp_path: Path) -> StoreConfig:
    return StoreConfig.from_directory(tmp_path / "threads")


@pytest.fixture
def populated_config(store_config: StoreConfig) -> StoreConfig:
    """A config whose data file holds SAMPLE_DOCUMENT."""
    store_config.data_file.parent.mkdir(parents=True)
    store_config.data_file.write_text(json.dumps(SAMPLE_DOCUMENT, indent=2))
    return store_config


@pytest.fixture
def populated_client(populated_config: StoreConfig) -> ThreadsClient:
    """Return a file-backed client loaded with SAMPLE_DOCUMENT."""
    return ThreadsClient(JsonFileStorage(populated_config))


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def client(memory_storage: InMemoryStorage) -> ThreadsClient:
    """Return a client over an empty in-memory document."""
    return ThreadsClient(memory_storage)
