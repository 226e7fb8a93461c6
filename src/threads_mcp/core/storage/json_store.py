"""Whole-document JSON storage with a single-slot backup."""

import json
import shutil
from typing import Any

from loguru import logger

from threads_mcp.config import StoreConfig
from threads_mcp.models.entity import DATA_VERSION, ThreadsData


class StorageError(RuntimeError):
    """The data file cannot be read or does not hold a valid document."""


def migrate_data(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize documents written by older versions, in place.

    Guarantees a ``containers`` list and that every thread and container
    carries ``tags`` and ``description``.
    """
    if "containers" not in data or data["containers"] is None:
        data["containers"] = []

    for record in [*data["threads"], *data["containers"]]:
        if record.get("tags") is None:
            record["tags"] = []
        if record.get("description") is None:
            record["description"] = ""

    return data


class JsonFileStorage:
    """Read and rewrite the whole document on every call.

    There is no locking: when two processes save concurrently, the last
    write wins.
    """

    def __init__(self, config: StoreConfig) -> None:
        self.config = config

    def _ensure_data_file(self) -> None:
        data_file = self.config.data_file
        if data_file.exists():
            return
        data_file.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Initializing empty data file {}", data_file)
        self._write(ThreadsData(version=DATA_VERSION))

    def _create_backup(self) -> None:
        if self.config.data_file.exists():
            self.config.backup_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.config.data_file, self.config.backup_file)

    def _write(self, data: ThreadsData) -> None:
        self.config.data_file.write_text(
            json.dumps(data.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )

    def load(self) -> ThreadsData:
        """Read the document, creating an empty one if the file is missing.

        Raises:
            StorageError: If the file is unreadable or malformed.
        """
        self._ensure_data_file()
        data_file = self.config.data_file
        try:
            raw = json.loads(data_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Cannot read data file {str(data_file)!r}: {e}"
            raise StorageError(msg) from e

        if not isinstance(raw, dict):
            msg = f"Data file {str(data_file)!r} does not contain a JSON object"
            raise StorageError(msg)

        try:
            data = ThreadsData.from_dict(migrate_data(raw))
        except (KeyError, TypeError, AttributeError) as e:
            msg = f"Malformed document in {str(data_file)!r}: {e!r}"
            raise StorageError(msg) from e

        logger.debug(
            "Loaded {} threads, {} containers, {} groups from {}",
            len(data.threads),
            len(data.containers),
            len(data.groups),
            data_file,
        )
        return data

    def save(self, data: ThreadsData) -> None:
        """Back up the current file, then overwrite it with ``data``."""
        self._ensure_data_file()
        self._create_backup()
        self._write(data)
        logger.debug("Saved document to {}", self.config.data_file)
