from __future__ import annotations

from functools import cache, lru_cache
from pathlib import Path

from domain.grid import Grid


@lru_cache(maxsize=1)
def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")


def fixture_path(name: str) -> Path:
    return repo_root() / "examples" / "diagrams" / name


@cache
def load_document_fixture(name: str) -> str:
    return fixture_path(name).read_text(encoding="utf-8")


def bordered(*rows: str, marker: str = "*") -> str:
    """Wrap interior rows in a marker border one cell wider on every side."""
    width = max(len(row) for row in rows)
    edge = marker * (width + 2)
    body = "".join(f"{marker}{row.ljust(width)}{marker}\n" for row in rows)
    return f"{edge}\n{body}{edge}\n"


def used_cells(grid: Grid) -> set[tuple[int, int]]:
    return {(x, y) for y in range(grid.height) for x in range(grid.width) if grid.is_used(x, y)}
