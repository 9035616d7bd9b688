from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import IKeyValueStore
from src.domain.exceptions import PersistenceError


@dataclass(slots=True)
class JsonFileKeyValueStore(IKeyValueStore):
    """Keeps all keys in a single JSON object on disk.

    Env vars:
      - FAVORITES_PATH (default: data/favorites.json)
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("FAVORITES_PATH") or "data/favorites.json"
        return Path(value)

    def _read_all(self, path: Path) -> dict[str, str]:
        if not path.exists():
            return {}
        try:
            with path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"Unexpected content in {path}")
        return {str(k): str(v) for k, v in data.items()}

    def get_item(self, key: str) -> str | None:
        return self._read_all(self._path()).get(key)

    def set_item(self, key: str, value: str) -> None:
        path = self._path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            lock_path = path.with_suffix(path.suffix + ".lock")
            with open(lock_path, "w", encoding="utf-8") as lock_fp:
                try:
                    import fcntl

                    fcntl.flock(lock_fp.fileno(), fcntl.LOCK_EX)
                except ImportError:
                    # No advisory locks on this platform; last writer wins.
                    pass

                data = self._read_all(path)
                data[key] = value

                tmp = path.with_suffix(path.suffix + ".tmp")
                with open(tmp, "w", encoding="utf-8") as fp:
                    json.dump(data, fp, indent=2, sort_keys=True)
                os.replace(tmp, path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc
