"""
Local filesystem key-value adapter.

One file per key under base_path. Writes go to a temp file in the same
directory and are moved into place with os.replace, so readers see either
the previous value or the new one.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


class JsonFileKeyValueStore:
    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path).resolve()
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _safe_path(self, key: str) -> Path:
        # Prevent traversal
        target = (self.base_path / f"{key}.json").resolve()
        if target.parent != self.base_path:
            raise ValueError(f"Invalid storage key: {key!r}")
        return target

    def get_string(self, key: str) -> str | None:
        target = self._safe_path(key)
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_string(self, key: str, value: str) -> None:
        target = self._safe_path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.base_path, prefix=f".{target.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def remove(self, key: str) -> None:
        target = self._safe_path(key)
        if target.exists():
            os.remove(target)


def create_file_store(
    base_path: str | Path | None = None,
    *,
    env_var: str = "FESTIVAL_CATALOG_DATA_DIR",
    default_path: str = "./data",
) -> JsonFileKeyValueStore:
    """
    Factory function to create JsonFileKeyValueStore from config.

    Args:
        base_path: Explicit base path (overrides env var)
        env_var: Environment variable name for the data directory
        default_path: Default path if not configured
    """
    if base_path is None:
        base_path = os.environ.get(env_var, default_path)
    return JsonFileKeyValueStore(base_path)
