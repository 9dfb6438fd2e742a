from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, Field

from domain.glyphs import HIDDEN_O, is_decoration, is_point

if TYPE_CHECKING:
    from domain.grid import Grid

EPSILON = 1e-6

AlignmentHint = Literal["center", "floatleft", "floatright", ""]
ALIGNMENT_HINTS: tuple[str, ...] = ("center", "floatleft", "floatright", "")

DIAGNOSTIC_UNTERMINATED_BORDER = "unterminated_border"
DIAGNOSTIC_UNANCHORED_GLYPH = "unanchored_glyph"


class IllegalDecorationError(ValueError):
    pass


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float


@dataclass(frozen=True)
class Path:
    start: Vec2
    end: Vec2
    control1: Optional[Vec2] = None
    control2: Optional[Vec2] = None
    dashed: bool = False

    def __post_init__(self) -> None:
        if self.control1 is not None and self.control2 is None:
            object.__setattr__(self, "control2", self.control1)

    def is_vertical(self) -> bool:
        return self.end.x == self.start.x

    def is_horizontal(self) -> bool:
        return self.end.y == self.start.y

    def is_diagonal(self) -> bool:
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        return abs(dy + dx) < EPSILON

    def is_back_diagonal(self) -> bool:
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        return abs(dy - dx) < EPSILON

    def is_curved(self) -> bool:
        return self.control1 is not None

    def ends_at(self, x: float, y: float) -> bool:
        return (self.start.x == x and self.start.y == y) or (self.end.x == x and self.end.y == y)

    def up_ends_at(self, x: float, y: float) -> bool:
        return self.is_vertical() and self.start.x == x and min(self.start.y, self.end.y) == y

    def down_ends_at(self, x: float, y: float) -> bool:
        return self.is_vertical() and self.start.x == x and max(self.start.y, self.end.y) == y

    def left_ends_at(self, x: float, y: float) -> bool:
        return self.is_horizontal() and self.start.y == y and min(self.start.x, self.end.x) == x

    def right_ends_at(self, x: float, y: float) -> bool:
        return self.is_horizontal() and self.start.y == y and max(self.start.x, self.end.x) == x

    def diagonal_up_ends_at(self, x: float, y: float) -> bool:
        if not self.is_diagonal():
            return False
        return self._upper(x, y)

    def diagonal_down_ends_at(self, x: float, y: float) -> bool:
        if not self.is_diagonal():
            return False
        return self._lower(x, y)

    def back_diagonal_up_ends_at(self, x: float, y: float) -> bool:
        if not self.is_back_diagonal():
            return False
        return self._upper(x, y)

    def back_diagonal_down_ends_at(self, x: float, y: float) -> bool:
        if not self.is_back_diagonal():
            return False
        return self._lower(x, y)

    def vertical_passes_through(self, x: float, y: float) -> bool:
        return (
            self.is_vertical()
            and self.start.x == x
            and min(self.start.y, self.end.y) <= y <= max(self.start.y, self.end.y)
        )

    def horizontal_passes_through(self, x: float, y: float) -> bool:
        return (
            self.is_horizontal()
            and self.start.y == y
            and min(self.start.x, self.end.x) <= x <= max(self.start.x, self.end.x)
        )

    def _upper(self, x: float, y: float) -> bool:
        point = self.start if self.start.y < self.end.y else self.end
        return point.x == x and point.y == y

    def _lower(self, x: float, y: float) -> bool:
        point = self.start if self.end.y < self.start.y else self.end
        return point.x == x and point.y == y


def _any_path(predicate: Callable[[Path, float, float], bool]) -> Callable[..., bool]:
    def _query(self: PathSet, x: float, y: float) -> bool:
        return any(predicate(path, x, y) for path in self._paths)

    _query.__name__ = predicate.__name__
    return _query


class PathSet:
    def __init__(self) -> None:
        self._paths: list[Path] = []

    def insert(self, path: Path) -> None:
        self._paths.append(path)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    ends_at = _any_path(Path.ends_at)
    up_ends_at = _any_path(Path.up_ends_at)
    down_ends_at = _any_path(Path.down_ends_at)
    left_ends_at = _any_path(Path.left_ends_at)
    right_ends_at = _any_path(Path.right_ends_at)
    diagonal_up_ends_at = _any_path(Path.diagonal_up_ends_at)
    diagonal_down_ends_at = _any_path(Path.diagonal_down_ends_at)
    back_diagonal_up_ends_at = _any_path(Path.back_diagonal_up_ends_at)
    back_diagonal_down_ends_at = _any_path(Path.back_diagonal_down_ends_at)
    vertical_passes_through = _any_path(Path.vertical_passes_through)
    horizontal_passes_through = _any_path(Path.horizontal_passes_through)


@dataclass(frozen=True)
class Decoration:
    position: Vec2
    kind: str
    angle: float = 0.0


class DecorationSet:
    """Decorations in draw order.

    Points always land at the tail and everything else at the head, so points
    are drawn over arrowheads, jumps and shading no matter when they were found.
    """

    def __init__(self) -> None:
        self._decorations: deque[Decoration] = deque()

    def insert(self, position: Vec2, kind: str, angle: float = 0.0) -> None:
        if not is_decoration(kind):
            msg = f"Illegal decoration character: {kind!r}"
            raise IllegalDecorationError(msg)
        decoration = Decoration(position=position, kind=kind, angle=angle)
        if is_point(kind):
            self._decorations.append(decoration)
        else:
            self._decorations.appendleft(decoration)

    def __iter__(self) -> Iterator[Decoration]:
        return iter(self._decorations)

    def __len__(self) -> int:
        return len(self._decorations)


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    line: int
    column: int
    detail: str = ""


@dataclass(frozen=True)
class DiagramExtraction:
    before: str
    diagram: str
    alignment_hint: AlignmentHint
    after: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.diagram)


@dataclass
class ParsedDiagram:
    grid: Grid
    paths: PathSet
    decorations: DecorationSet
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class DiagramReplacement:
    text: str
    diagram_count: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)


class PointRecord(BaseModel):
    x: float
    y: float


class PathRecord(BaseModel):
    start: PointRecord
    end: PointRecord
    controls: list[PointRecord] = Field(default_factory=list)
    dashed: bool = False


class DecorationRecord(BaseModel):
    kind: str
    position: PointRecord
    angle: float = 0.0


class LabelRecord(BaseModel):
    text: str
    position: PointRecord


class DiagnosticRecord(BaseModel):
    kind: str
    line: int
    column: int
    detail: str = ""


class DiagramReport(BaseModel):
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    alignment_hint: AlignmentHint = "center"
    paths: list[PathRecord] = Field(default_factory=list)
    decorations: list[DecorationRecord] = Field(default_factory=list)
    labels: list[LabelRecord] = Field(default_factory=list)
    diagnostics: list[DiagnosticRecord] = Field(default_factory=list)

    @classmethod
    def from_parsed(
        cls, parsed: ParsedDiagram, alignment_hint: AlignmentHint = "center"
    ) -> DiagramReport:
        grid = parsed.grid
        return cls(
            width=grid.width,
            height=grid.height,
            alignment_hint=alignment_hint,
            paths=[
                PathRecord(
                    start=_point(path.start),
                    end=_point(path.end),
                    controls=[
                        _point(control)
                        for control in (path.control1, path.control2)
                        if control is not None
                    ],
                    dashed=path.dashed,
                )
                for path in parsed.paths
            ],
            decorations=[
                DecorationRecord(
                    kind=decoration.kind,
                    position=_point(decoration.position),
                    angle=decoration.angle,
                )
                for decoration in parsed.decorations
            ],
            labels=[
                LabelRecord(text=text.replace(HIDDEN_O, "o"), position=PointRecord(x=x, y=y))
                for x, y, text in grid.unused_cells()
            ],
            diagnostics=[
                DiagnosticRecord(
                    kind=diagnostic.kind,
                    line=diagnostic.line,
                    column=diagnostic.column,
                    detail=diagnostic.detail,
                )
                for diagnostic in parsed.diagnostics
            ],
        )


def _point(vec: Vec2) -> PointRecord:
    return PointRecord(x=vec.x, y=vec.y)
