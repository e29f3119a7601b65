from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class MemoryStorage:
    """Dict-backed storage; contents live as long as the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.entries[key] = value


class FileStorage:
    """One file per entry: ``<root>/<key>.json``."""

    def __init__(self, root: Path | str):
        self.root = Path(root).expanduser()

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key or ""):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        target_path = self.path_for(key)
        self.root.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file, then swap it in so readers never see a partial entry
        fd, temp_path = tempfile.mkstemp(
            prefix=f"{target_path.stem}.",
            suffix=".tmp",
            dir=str(self.root),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, target_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
