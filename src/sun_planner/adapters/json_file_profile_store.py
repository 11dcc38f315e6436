"""File-backed key/value store for local profile blobs."""

import re
from dataclasses import dataclass
from pathlib import Path

from sun_planner.services.profiles import ProfileStore

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass
class JsonFileProfileStore(ProfileStore):
    """Stores each key as a JSON file inside a directory."""

    directory: Path

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key, if present."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, blob: str) -> None:
        """Write the blob atomically by replacing a temp file."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        """Remove the blob for a key if it exists."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"
