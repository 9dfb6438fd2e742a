from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import orjson
from filelock import FileLock

from domain.ports.repositories import DocumentRepository

DOCUMENT_PATTERNS = ("*.md", "*.md.html", "*.txt")


def write_bytes_atomic(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_bytes(payload)
    tmp_path.replace(path)


class FileSystemDocumentRepository(DocumentRepository):
    def load(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, str]]:
        return [(path, self.load(path)) for path in sorted(set(self._iter_paths(directory)))]

    def save(self, text: str, path: Path) -> None:
        with FileLock(str(self._lock_path(path))):
            write_bytes_atomic(path, text.encode("utf-8"))

    def save_json(self, payload: Mapping[str, Any], path: Path) -> None:
        data = orjson.dumps(dict(payload), option=orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE)
        with FileLock(str(self._lock_path(path))):
            write_bytes_atomic(path, data)

    def _lock_path(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.with_suffix(f"{path.suffix}.lock")

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        for pattern in DOCUMENT_PATTERNS:
            yield from directory.glob(pattern)
