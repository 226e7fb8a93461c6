"""Configuration for the threads store."""

import os
from dataclasses import dataclass
from pathlib import Path

# Shared with the Threads CLI, which reads and writes the same file.
DEFAULT_DATA_DIR: Path = Path("~/.threads").expanduser()

DATA_FILE_NAME = "threads.json"
BACKUP_FILE_NAME = "threads.backup.json"

# Overrides DEFAULT_DATA_DIR when set.
DATA_DIR_ENV = "THREADS_DATA_DIR"


@dataclass(frozen=True)
class StoreConfig:
    """Locations of the data file and its single-slot backup."""

    data_file: Path
    backup_file: Path

    @classmethod
    def from_directory(cls, data_dir: str | Path) -> "StoreConfig":
        base = Path(data_dir).expanduser()
        return cls(data_file=base / DATA_FILE_NAME, backup_file=base / BACKUP_FILE_NAME)


def resolve_store_config(data_dir: Path | None = None) -> StoreConfig:
    """Build a StoreConfig from an explicit directory, the environment, or the default."""
    if data_dir is not None:
        return StoreConfig.from_directory(data_dir)
    data_dir_env = os.environ.get(DATA_DIR_ENV)
    return StoreConfig.from_directory(data_dir_env if data_dir_env else DEFAULT_DATA_DIR)
