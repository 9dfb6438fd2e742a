from __future__ import annotations

from domain.glyphs import (
    is_ascii_letter,
    is_bottom_vertex,
    is_jump,
    is_point,
    is_solid_bline,
    is_solid_dline,
    is_solid_hline,
    is_solid_vline,
    is_solid_vline_or_jump_or_point,
    is_top_vertex,
    is_vertex,
    is_vertex_or_left_decoration,
    is_vertex_or_right_decoration,
)
from domain.grid import Grid
from domain.models import Path, PathSet, Vec2


def trace_paths(grid: Grid, paths: PathSet | None = None) -> PathSet:
    paths = paths if paths is not None else PathSet()
    _find_vertical_lines(grid, paths)
    _find_horizontal_lines(grid, paths)
    _find_back_diagonal_lines(grid, paths)
    _find_diagonal_lines(grid, paths)
    _find_curved_corners(grid, paths)
    _find_underscore_lines(grid, paths)
    find_replacement_characters(grid, paths)
    return paths


def is_solid_vline_at(grid: Grid, x: int, y: int) -> bool:
    up = grid.get(x, y - 1)
    c = grid.get(x, y)
    dn = grid.get(x, y + 1)
    uprt = grid.get(x + 1, y - 1)
    uplt = grid.get(x - 1, y - 1)

    if is_solid_vline(c):
        return (
            is_top_vertex(up)
            or up == "^"
            or is_solid_vline(up)
            or is_jump(up)
            or is_bottom_vertex(dn)
            or dn == "v"
            or is_solid_vline(dn)
            or is_jump(dn)
            or is_point(up)
            or is_point(dn)
            or up == "_"
            or uplt == "_"
            or uprt == "_"
            # One-high vertical between two curved corners
            or (
                (is_top_vertex(uplt) or is_top_vertex(uprt))
                and (
                    is_bottom_vertex(grid.get(x - 1, y + 1))
                    or is_bottom_vertex(grid.get(x + 1, y + 1))
                )
            )
        )
    if is_top_vertex(c) or c == "^":
        return is_solid_vline(dn) or (is_jump(dn) and c != ".")
    if is_bottom_vertex(c) or c == "v":
        return is_solid_vline(up) or (is_jump(up) and c != "'")
    if is_point(c):
        return is_solid_vline(up) or is_solid_vline(dn)
    return False


def is_solid_hline_at(grid: Grid, x: int, y: int) -> bool:
    # Underscores are handled by their own pass
    ltlt = grid.get(x - 2, y)
    lt = grid.get(x - 1, y)
    c = grid.get(x, y)
    rt = grid.get(x + 1, y)
    rtrt = grid.get(x + 2, y)

    if is_solid_hline(c) or (is_solid_hline(lt) and is_jump(c)):
        # Needs three in a row
        if is_solid_hline(lt):
            return (
                is_solid_hline(rt)
                or is_vertex_or_right_decoration(rt)
                or is_solid_hline(ltlt)
                or is_vertex_or_left_decoration(ltlt)
            )
        if is_vertex_or_left_decoration(lt):
            return is_solid_hline(rt)
        return is_solid_hline(rt) and (is_solid_hline(rtrt) or is_vertex_or_right_decoration(rtrt))
    if c == "<":
        return is_solid_hline(rt) and is_solid_hline(rtrt)
    if c == ">":
        return is_solid_hline(lt) and is_solid_hline(ltlt)
    if is_vertex(c):
        return (is_solid_hline(lt) and is_solid_hline(ltlt)) or (
            is_solid_hline(rt) and is_solid_hline(rtrt)
        )
    return False


def is_solid_bline_at(grid: Grid, x: int, y: int) -> bool:
    c = grid.get(x, y)
    lt = grid.get(x - 1, y - 1)
    rt = grid.get(x + 1, y + 1)

    if c == "\\":
        return (
            is_solid_bline(rt)
            or is_bottom_vertex(rt)
            or is_point(rt)
            or rt == "v"
            or is_solid_bline(lt)
            or is_top_vertex(lt)
            or is_point(lt)
            or lt == "^"
            or grid.get(x, y - 1) == "/"
            or grid.get(x, y + 1) == "/"
            or rt == "_"
            or lt == "_"
        )
    if c == ".":
        return rt == "\\"
    if c == "'":
        return lt == "\\"
    if c == "^":
        return rt == "\\"
    if c == "v":
        return lt == "\\"
    if is_vertex(c) or is_point(c) or c == "|":
        return is_solid_bline(lt) or is_solid_bline(rt)
    return False


def is_solid_dline_at(grid: Grid, x: int, y: int) -> bool:
    c = grid.get(x, y)
    lt = grid.get(x - 1, y + 1)
    rt = grid.get(x + 1, y - 1)

    if c == "/" and (grid.get(x, y - 1) == "\\" or grid.get(x, y + 1) == "\\"):
        # Tiny hexagon corner
        return True
    if is_solid_dline(c):
        return (
            is_solid_dline(rt)
            or is_top_vertex(rt)
            or is_point(rt)
            or rt == "^"
            or rt == "_"
            or is_solid_dline(lt)
            or is_bottom_vertex(lt)
            or is_point(lt)
            or lt == "v"
            or lt == "_"
        )
    if c == ".":
        return lt == "/"
    if c == "'":
        return rt == "/"
    if c == "^":
        return lt == "/"
    if c == "v":
        return rt == "/"
    if is_vertex(c) or is_point(c) or c == "|":
        return is_solid_dline(lt) or is_solid_dline(rt)
    return False


def _line_contains(grid: Grid, ax: int, ay: int, bx: int, by: int, glyph: str) -> bool:
    dx = (bx > ax) - (bx < ax)
    dy = (by > ay) - (by < ay)
    x, y = ax, ay
    while x != bx or y != by:
        if grid.get(x, y) == glyph:
            return True
        x += dx
        y += dy
    return grid.get(x, y) == glyph


def _find_vertical_lines(grid: Grid, paths: PathSet) -> None:
    # Sweep column by column so that no line is found twice
    for x in range(grid.width):
        y = 0
        while y < grid.height:
            if is_solid_vline_at(grid, x, y):
                top = y
                while True:
                    grid.set_used(x, y)
                    y += 1
                    if not is_solid_vline_at(grid, x, y):
                        break
                bottom = y - 1
                ay: float = top
                by: float = bottom

                up = grid.get(x, top)
                upup = grid.get(x, top - 1)
                if (
                    not is_vertex(up)
                    and (
                        upup in {"-", "_", "┳"}
                        or grid.get(x - 1, top - 1) == "_"
                        or grid.get(x + 1, top - 1) == "_"
                        or is_bottom_vertex(upup)
                    )
                ) or is_jump(upup):
                    # Stretch up to almost reach the line above
                    ay -= 0.5

                dn = grid.get(x, bottom)
                dndn = grid.get(x, bottom + 1)
                if (
                    (not is_vertex(dn) and (dndn in {"-", "┻"} or is_top_vertex(dndn)))
                    or is_jump(dndn)
                    or grid.get(x - 1, bottom) == "_"
                    or grid.get(x + 1, bottom) == "_"
                ):
                    # Stretch down to almost reach the line below
                    by += 0.5

                if ay != by:
                    paths.insert(Path(Vec2(x, ay), Vec2(x, by)))
            else:
                _find_circuit_stub(grid, paths, x, y)
            y += 1


def _find_circuit_stub(grid: Grid, paths: PathSet, x: int, y: int) -> None:
    c = grid.get(x, y)
    if c == "'" and (
        (
            grid.get(x - 1, y) == "-"
            and grid.get(x + 1, y - 1) == "_"
            and not is_solid_vline_or_jump_or_point(grid.get(x - 1, y - 1))
        )
        or (
            grid.get(x - 1, y - 1) == "_"
            and grid.get(x + 1, y) == "-"
            and not is_solid_vline_or_jump_or_point(grid.get(x + 1, y - 1))
        )
    ):
        #      _  _
        #    -'    '-
        paths.insert(Path(Vec2(x, y - 0.5), Vec2(x, y)))
    elif c == "." and (
        (
            grid.get(x - 1, y) == "_"
            and grid.get(x + 1, y) == "-"
            and not is_solid_vline_or_jump_or_point(grid.get(x + 1, y + 1))
        )
        or (
            grid.get(x - 1, y) == "-"
            and grid.get(x + 1, y) == "_"
            and not is_solid_vline_or_jump_or_point(grid.get(x - 1, y + 1))
        )
    ):
        #    _.-  -._
        paths.insert(Path(Vec2(x, y), Vec2(x, y + 0.5)))
    elif c == "." and grid.get(x - 1, y) == "-" and grid.get(x + 1, y) == "╱":
        # Resistor: -.╱
        paths.insert(Path(Vec2(x, y), Vec2(x + 0.5, y + 0.5)))
    elif c == "'" and grid.get(x + 1, y) == "-" and grid.get(x - 1, y) == "╱":
        # Resistor: ╱'-
        paths.insert(Path(Vec2(x, y), Vec2(x - 0.5, y - 0.5)))


def _find_horizontal_lines(grid: Grid, paths: PathSet) -> None:
    for y in range(grid.height):
        x = 0
        while x < grid.width:
            if is_solid_hline_at(grid, x, y):
                left = x
                while True:
                    grid.set_used(x, y)
                    x += 1
                    if not is_solid_hline_at(grid, x, y):
                        break
                right = x - 1
                ax: float = left
                bx: float = right

                # Box-drawing tees lengthen the edge
                if grid.get(right + 1, y) == "┫":
                    bx += 0.5
                if grid.get(left - 1, y) == "┣":
                    ax -= 0.5

                # Curves shorten the edge
                if not is_vertex(grid.get(left - 1, y)) and (
                    (
                        is_top_vertex(grid.get(left, y))
                        and is_solid_vline_or_jump_or_point(grid.get(left - 1, y + 1))
                    )
                    or (
                        is_bottom_vertex(grid.get(left, y))
                        and is_solid_vline_or_jump_or_point(grid.get(left - 1, y - 1))
                    )
                ):
                    ax += 1

                if not is_vertex(grid.get(right + 1, y)) and (
                    (
                        is_top_vertex(grid.get(right, y))
                        and is_solid_vline_or_jump_or_point(grid.get(right + 1, y + 1))
                    )
                    or (
                        is_bottom_vertex(grid.get(right, y))
                        and is_solid_vline_or_jump_or_point(grid.get(right + 1, y - 1))
                    )
                ):
                    bx -= 1

                if ax != bx:
                    paths.insert(Path(Vec2(ax, y), Vec2(bx, y)))
            x += 1


def _find_back_diagonal_lines(grid: Grid, paths: PathSet) -> None:
    # Walk each "\" diagonal (y - x constant) from the top
    for i in range(-grid.height, grid.width):
        x, y = i, 0
        while y < grid.height:
            if is_solid_bline_at(grid, x, y):
                ax, ay = x, y
                while True:
                    x += 1
                    y += 1
                    if not is_solid_bline_at(grid, x, y):
                        break
                bx, by = x - 1, y - 1

                # A run of vertices alone is not a diagonal
                if _line_contains(grid, ax, ay, bx, by, "\\"):
                    for j in range(ax, bx + 1):
                        grid.set_used(j, ay + (j - ax))

                    start_x: float = ax
                    start_y: float = ay
                    up = grid.get(ax, ay - 1)
                    uplt = grid.get(ax - 1, ay - 1)
                    if (
                        up in {"/", "_"}
                        or uplt == "_"
                        or (
                            not is_vertex(grid.get(ax, ay))
                            and (is_solid_hline(uplt) or is_solid_vline(uplt))
                        )
                    ):
                        #  ___   ___
                        #  \        \    /      ----     |
                        #   \        \   \        ^      |^
                        start_x -= 0.5
                        start_y -= 0.5
                    elif is_point(uplt):
                        #  o
                        #   ^
                        #    \
                        start_x -= 0.25
                        start_y -= 0.25

                    end_x: float = bx
                    end_y: float = by
                    dnrt = grid.get(bx + 1, by + 1)
                    if (
                        grid.get(bx, by + 1) == "/"
                        or grid.get(bx + 1, by) == "_"
                        or grid.get(bx - 1, by) == "_"
                        or (
                            not is_vertex(grid.get(bx, by))
                            and (is_solid_hline(dnrt) or is_solid_vline(dnrt))
                        )
                    ):
                        #                       \      \ |
                        #  \       \     \       v      v|
                        #   \__   __\    /      ----     |
                        end_x += 0.5
                        end_y += 0.5
                    elif is_point(dnrt):
                        #    \
                        #     v
                        #      o
                        end_x += 0.25
                        end_y += 0.25

                    paths.insert(Path(Vec2(start_x, start_y), Vec2(end_x, end_y)))
            x += 1
            y += 1


def _find_diagonal_lines(grid: Grid, paths: PathSet) -> None:
    # Walk each "/" diagonal (y + x constant) from the bottom
    for i in range(-grid.height, grid.width):
        x, y = i, grid.height - 1
        while y >= 0:
            if is_solid_dline_at(grid, x, y):
                ax, ay = x, y
                while True:
                    x += 1
                    y -= 1
                    if not is_solid_dline_at(grid, x, y):
                        break
                bx, by = x - 1, y + 1

                if _line_contains(grid, ax, ay, bx, by, "/"):
                    for j in range(ax, bx + 1):
                        grid.set_used(j, ay - (j - ax))

                    end_x: float = bx
                    end_y: float = by
                    up = grid.get(bx, by - 1)
                    uprt = grid.get(bx + 1, by - 1)
                    if (
                        up in {"\\", "_"}
                        or uprt == "_"
                        or (
                            not is_vertex(grid.get(bx, by))
                            and (is_solid_hline(uprt) or is_solid_vline(uprt))
                        )
                    ):
                        #     __   __  ---     |
                        #    /      /   ^     ^|
                        #   /      /   /     / |
                        end_x += 0.5
                        end_y -= 0.5
                    elif is_point(uprt):
                        #       o
                        #      ^
                        #     /
                        end_x += 0.25
                        end_y -= 0.25

                    start_x: float = ax
                    start_y: float = ay
                    dnlt = grid.get(ax - 1, ay + 1)
                    if (
                        grid.get(ax, ay + 1) == "\\"
                        or grid.get(ax - 1, ay) == "_"
                        or grid.get(ax + 1, ay) == "_"
                        or (
                            not is_vertex(grid.get(ax, ay))
                            and (is_solid_hline(dnlt) or is_solid_vline(dnlt))
                        )
                    ):
                        #               /     \ |
                        #    /  /      v       v|
                        # __/  /__   ----       |
                        start_x -= 0.5
                        start_y += 0.5
                    elif is_point(dnlt):
                        #       /
                        #      v
                        #     o
                        start_x -= 0.25
                        start_y += 0.25

                    paths.insert(Path(Vec2(start_x, start_y), Vec2(end_x, end_y)))
            x += 1
            y -= 1


def _find_curved_corners(grid: Grid, paths: PathSet) -> None:
    # Every rounded corner can be recognised from a 3x3 neighbourhood. The cases
    # are not exclusive because "+" is both a top and a bottom vertex.
    for y in range(grid.height):
        for x in range(grid.width):
            c = grid.get(x, y)

            if is_top_vertex(c):
                # -.
                #   |
                if is_solid_hline(grid.get(x - 1, y)) and is_solid_vline(grid.get(x + 1, y + 1)):
                    _use(grid, (x - 1, y), (x, y), (x + 1, y + 1))
                    paths.insert(
                        Path(
                            Vec2(x - 1, y),
                            Vec2(x + 1, y + 1),
                            Vec2(x + 1.1, y),
                            Vec2(x + 1, y + 1),
                        )
                    )
                #  .-
                # |
                if is_solid_hline(grid.get(x + 1, y)) and is_solid_vline(grid.get(x - 1, y + 1)):
                    _use(grid, (x - 1, y + 1), (x, y), (x + 1, y))
                    paths.insert(
                        Path(
                            Vec2(x + 1, y),
                            Vec2(x - 1, y + 1),
                            Vec2(x - 1.1, y),
                            Vec2(x - 1, y + 1),
                        )
                    )

            #   .  .   .  .
            #  (  o     )  o
            #   '  .   '  '
            if (
                (c == ")" or is_point(c))
                and grid.get(x - 1, y - 1) == "."
                and grid.get(x - 1, y + 1) == "'"
            ):
                _use(grid, (x, y), (x - 1, y - 1), (x - 1, y + 1))
                paths.insert(
                    Path(
                        Vec2(x - 2, y - 1),
                        Vec2(x - 2, y + 1),
                        Vec2(x + 0.6, y - 1),
                        Vec2(x + 0.6, y + 1),
                    )
                )
            if (
                (c == "(" or is_point(c))
                and grid.get(x + 1, y - 1) == "."
                and grid.get(x + 1, y + 1) == "'"
            ):
                _use(grid, (x, y), (x + 1, y - 1), (x + 1, y + 1))
                paths.insert(
                    Path(
                        Vec2(x + 2, y - 1),
                        Vec2(x + 2, y + 1),
                        Vec2(x - 0.6, y - 1),
                        Vec2(x - 0.6, y + 1),
                    )
                )

            if is_bottom_vertex(c):
                #   |
                # -'
                if is_solid_hline(grid.get(x - 1, y)) and is_solid_vline(grid.get(x + 1, y - 1)):
                    _use(grid, (x - 1, y), (x, y), (x + 1, y - 1))
                    paths.insert(
                        Path(
                            Vec2(x - 1, y),
                            Vec2(x + 1, y - 1),
                            Vec2(x + 1.1, y),
                            Vec2(x + 1, y - 1),
                        )
                    )
                # |
                #  '-
                if is_solid_hline(grid.get(x + 1, y)) and is_solid_vline(grid.get(x - 1, y - 1)):
                    _use(grid, (x - 1, y - 1), (x, y), (x + 1, y))
                    paths.insert(
                        Path(
                            Vec2(x + 1, y),
                            Vec2(x - 1, y - 1),
                            Vec2(x - 1.1, y),
                            Vec2(x - 1, y - 1),
                        )
                    )


def _find_underscore_lines(grid: Grid, paths: PathSet) -> None:
    # Low lines sit half a cell below the row. A double underscore running into
    # a letter on one side only is read as an identifier such as __FILE__.
    for y in range(grid.height):
        x = 0
        # No baseline starts in the last two columns, so "__" flush right stays text
        while x < grid.width - 2:
            lt = grid.get(x - 1, y)
            rtrt = grid.get(x + 2, y)
            if (
                grid.get(x, y) == "_"
                and grid.get(x + 1, y) == "_"
                and (not is_ascii_letter(rtrt) or lt == "_")
                and (not is_ascii_letter(lt) or rtrt == "_")
            ):
                ltlt = grid.get(x - 2, y)
                ax = x - 0.5
                ay = y + 0.5

                if lt in {"|", "."} or grid.get(x - 1, y + 1) in {"|", "'"}:
                    # Meet the adjacent vertical
                    ax -= 0.5
                    # Overrun into the side of a curve, as on logic gates
                    if lt == "." and ltlt in {"-", "."} and grid.get(x - 2, y + 1) == "(":
                        ax -= 0.5
                elif lt == "/":
                    ax -= 1.0

                # Tight double curve
                if (
                    lt == "("
                    and ltlt == "("
                    and grid.get(x, y + 1) == "'"
                    and grid.get(x, y - 1) == "."
                ):
                    ax += 0.5

                while True:
                    grid.set_used(x, y)
                    x += 1
                    if grid.get(x, y) != "_":
                        break

                bx = x - 0.5
                by = y + 0.5
                c = grid.get(x, y)
                rt = grid.get(x + 1, y)
                dn = grid.get(x, y + 1)

                if c in {"|", "."} or dn in {"|", "'"}:
                    bx += 0.5
                    if c == "." and rt in {"-", "."} and grid.get(x + 1, y + 1) == ")":
                        bx += 0.5
                elif c == "\\":
                    bx += 1.0

                if (
                    c == ")"
                    and rt == ")"
                    and grid.get(x - 1, y + 1) == "'"
                    and grid.get(x - 1, y - 1) == "."
                ):
                    bx -= 0.5

                paths.insert(Path(Vec2(ax, ay), Vec2(bx, by)))
            x += 1


def find_replacement_characters(grid: Grid, paths: PathSet) -> None:
    # Heavier unicode slashes are redrawn as plain diagonals
    for x in range(grid.width):
        for y in range(grid.height):
            if grid.is_used(x, y):
                continue
            c = grid.get(x, y)
            if c == "╱":
                paths.insert(Path(Vec2(x - 0.5, y + 0.5), Vec2(x + 0.5, y - 0.5)))
                grid.set_used(x, y)
            elif c == "╲":
                paths.insert(Path(Vec2(x - 0.5, y - 0.5), Vec2(x + 0.5, y + 0.5)))
                grid.set_used(x, y)


def _use(grid: Grid, *cells: tuple[int, int]) -> None:
    for x, y in cells:
        grid.set_used(x, y)
