from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol


class DocumentRepository(Protocol):
    def load(self, path: Path) -> str: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, str]]: ...

    def save(self, text: str, path: Path) -> None: ...

    def save_json(self, payload: Mapping[str, Any], path: Path) -> None: ...
