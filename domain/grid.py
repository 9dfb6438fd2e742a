from __future__ import annotations

from collections.abc import Iterator


def equalize_line_lengths(text: str) -> str:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    longest = max((len(line) for line in lines), default=0)
    return "".join(line.ljust(longest) + "\n" for line in lines)


class Grid:
    """Rectangular character lookup over one diagram interior.

    The characters never change after construction; only the used mask grows.
    Coordinates outside the grid read as a blank and cannot be marked used.
    """

    def __init__(self, text: str) -> None:
        rows = equalize_line_lengths(text).split("\n")[:-1]
        self._rows: tuple[str, ...] = tuple(rows)
        self.height = len(rows)
        self.width = len(rows[0]) if rows else 0
        self._used: list[bytearray] = [bytearray(self.width) for _ in range(self.height)]

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> str:
        if not self._in_bounds(x, y):
            return " "
        return self._rows[y][x]

    def set_used(self, x: int, y: int) -> None:
        if self._in_bounds(x, y):
            self._used[y][x] = 1

    def is_used(self, x: int, y: int) -> bool:
        return self._in_bounds(x, y) and bool(self._used[y][x])

    def unused_cells(self) -> Iterator[tuple[int, int, str]]:
        for y, row in enumerate(self._rows):
            for x, char in enumerate(row):
                if char != " " and not self._used[y][x]:
                    yield x, y, char
