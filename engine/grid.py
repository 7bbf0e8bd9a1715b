"""2D grid geometry: distances, occupancy, reachability, and line of sight.

Two metrics are in play and are kept apart: ability range and
area radius use Chebyshev distance, while walking uses Manhattan distance
over 4-directional steps.
"""

from __future__ import annotations

from collections import deque

from models.game_state import GridCell

Position = tuple[int, int]

_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def create_grid(width: int, height: int) -> list[list[GridCell]]:
    """Initialize an empty grid of GridCells.

    Args:
        width: Number of columns.
        height: Number of rows.

    Returns:
        A 2D list indexed as grid[y][x].
    """
    return [
        [GridCell(x=x, y=y) for x in range(width)]
        for y in range(height)
    ]


def chebyshev_distance(pos1: Position, pos2: Position) -> int:
    """Distance in squares where a diagonal step counts as one: max(|dx|, |dy|)."""
    return max(abs(pos1[0] - pos2[0]), abs(pos1[1] - pos2[1]))


def manhattan_distance(pos1: Position, pos2: Position) -> int:
    """Distance in 4-directional steps: |dx| + |dy|."""
    return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def in_bounds(x: int, y: int, grid: list[list[GridCell]]) -> bool:
    """Check if coordinates are within grid bounds."""
    if not grid:
        return False
    return 0 <= y < len(grid) and 0 <= x < len(grid[0])


def is_walkable(x: int, y: int, grid: list[list[GridCell]]) -> bool:
    """In bounds and not a wall."""
    return in_bounds(x, y, grid) and grid[y][x].terrain != "wall"


def is_occupied(x: int, y: int, grid: list[list[GridCell]]) -> bool:
    """True if a unit stands on the cell. Unwalkable cells count as occupied."""
    if not is_walkable(x, y, grid):
        return True
    return grid[y][x].occupant_id is not None


def occupant_at(x: int, y: int, grid: list[list[GridCell]]) -> str | None:
    """Return the id of the unit on a cell, if any."""
    if not in_bounds(x, y, grid):
        return None
    return grid[y][x].occupant_id


def place_occupant(occupant_id: str, pos: Position, grid: list[list[GridCell]]) -> None:
    """Mark a cell as held by `occupant_id`.

    Raises:
        ValueError: If the cell is out of bounds, a wall, or already held by
            another occupant.
    """
    x, y = pos
    if not in_bounds(x, y, grid):
        raise ValueError(f"Position ({x}, {y}) is out of bounds")
    cell = grid[y][x]
    if cell.terrain == "wall":
        raise ValueError(f"Position ({x}, {y}) is a wall")
    if cell.occupant_id is not None and cell.occupant_id != occupant_id:
        raise ValueError(f"Position ({x}, {y}) is already occupied")
    cell.occupant_id = occupant_id


def clear_occupant(occupant_id: str, pos: Position, grid: list[list[GridCell]]) -> None:
    """Free a cell if (and only if) `occupant_id` holds it."""
    x, y = pos
    if in_bounds(x, y, grid) and grid[y][x].occupant_id == occupant_id:
        grid[y][x].occupant_id = None


def relocate_occupant(
    occupant_id: str,
    old_pos: Position,
    new_pos: Position,
    grid: list[list[GridCell]],
) -> None:
    """Move an occupant between cells: the old cell is freed before the new one is taken."""
    clear_occupant(occupant_id, old_pos, grid)
    place_occupant(occupant_id, new_pos, grid)


def calculate_movement_range(
    start: Position,
    max_range: int,
    grid: list[list[GridCell]],
) -> list[Position]:
    """All cells within `max_range` Manhattan steps a unit could end a move on.

    The start cell is excluded, as are out-of-bounds, wall and occupied cells.
    Cells are not checked for a connecting path; see reachable_cells for that.

    Args:
        start: (x, y) the unit moves from.
        max_range: Movement budget in squares.
        grid: The battle grid.

    Returns:
        List of (x, y) destinations, in row-major scan order.
    """
    sx, sy = start
    moves = []
    for dx in range(-max_range, max_range + 1):
        for dy in range(-max_range, max_range + 1):
            steps = abs(dx) + abs(dy)
            if steps == 0 or steps > max_range:
                continue
            nx, ny = sx + dx, sy + dy
            if not is_occupied(nx, ny, grid):
                moves.append((nx, ny))
    return moves


def reachable_cells(
    start: Position,
    max_steps: int,
    grid: list[list[GridCell]],
    ignore_units: bool = False,
) -> dict[Position, int]:
    """Breadth-first search over 4-directional neighbours.

    Walls and the grid edge always block. Units can be walked through but
    not stopped on, so occupied cells are left out of the result unless
    `ignore_units` is set; the start cell is always included.

    Args:
        start: (x, y) to search from.
        max_steps: Maximum number of steps.
        grid: The battle grid.
        ignore_units: Also return cells other units stand on.

    Returns:
        Mapping of reachable (x, y) to step distance, including start at 0.
    """
    if not is_walkable(start[0], start[1], grid):
        return {}

    visited: dict[Position, int] = {start: 0}
    queue: deque[Position] = deque([start])

    while queue:
        cx, cy = queue.popleft()
        steps = visited[(cx, cy)]
        if steps >= max_steps:
            continue
        for dx, dy in _STEPS:
            nxt = (cx + dx, cy + dy)
            if nxt in visited or not is_walkable(nxt[0], nxt[1], grid):
                continue
            visited[nxt] = steps + 1
            queue.append(nxt)

    if ignore_units:
        return visited
    return {
        pos: steps for pos, steps in visited.items()
        if pos == start or grid[pos[1]][pos[0]].occupant_id is None
    }


def line_of_sight(
    pos1: Position,
    pos2: Position,
    grid: list[list[GridCell]],
) -> bool:
    """Check if pos1 can see pos2 (blocked only by walls).

    Uses Bresenham's line algorithm to trace between positions.

    Args:
        pos1: (x, y) of observer.
        pos2: (x, y) of target.
        grid: The game grid.

    Returns:
        True if line of sight is clear.
    """
    x0, y0 = pos1
    x1, y1 = pos2

    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        if (x0, y0) != pos1 and (x0, y0) != pos2:
            if in_bounds(x0, y0, grid) and grid[y0][x0].terrain == "wall":
                return False
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy

    return True
