from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional, Protocol

import yaml

from startlights import const
from startlights.errors import StorageError


class KeyValueStore(Protocol):
    """String get/set by key. Implementations report failures as StorageError."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


def default_data_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "runtime" / "cache"


class FileStore:
    """
    String key-value pairs kept in a small YAML mapping, e.g.

        best: '197'

    The whole file is rewritten on every set().
    """

    def __init__(self, root: Optional[Path] = None, filename: str = const.SCORES_FILE):
        self.root = Path(root) if root is not None else default_data_dir()
        self.path = self.root / filename

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise StorageError(f"could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except StorageError:
            # unreadable file gets replaced
            data = {}
        data[key] = value
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"could not write {self.path}: {e}") from e
