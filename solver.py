"""Breadth-first path finding and structural checks over a Maze."""

import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from mazegen import MOVES, Coord, Direction, Maze, can_move, step


logger = logging.getLogger(__name__)


class MazeValidationError(RuntimeError):
    """The maze breaks a structural rule."""

    pass


def neighbors_open(maze: Maze, row: int, col: int) -> Iterable[Coord]:
    """Yield cells reachable in one step from (row, col).

    Order is up, right, down, left.
    """

    for direction in MOVES:
        if can_move(maze, row, col, direction):
            yield step((row, col), direction)


def find_path(
    maze: Maze,
    start: Tuple[int, int],
    goal: Tuple[int, int],
) -> List[Coord]:
    """Compute a shortest path from start to goal using BFS.

    Returns the cells from start to goal inclusive, or an empty list when the
    goal cannot be reached. Among equally short paths the one found by
    expanding up, right, down, left first wins.
    """

    start = Coord(*start)
    goal = Coord(*goal)
    maze.require(start.row, start.col)
    maze.require(goal.row, goal.col)

    if start == goal:
        return [start]

    q: Deque[Coord] = deque([start])
    came_from: Dict[Coord, Optional[Coord]] = {start: None}

    while q:
        cur = q.popleft()
        if cur == goal:
            break
        for nxt in neighbors_open(maze, cur.row, cur.col):
            if nxt in came_from:
                continue
            came_from[nxt] = cur
            q.append(nxt)

    if goal not in came_from:
        logger.debug("No path from %s to %s", tuple(start), tuple(goal))
        return []

    path: List[Coord] = [goal]
    while path[-1] != start:
        prev = came_from[path[-1]]
        assert prev is not None
        path.append(prev)
    path.reverse()
    return path


def path_to_directions(path: Sequence[Tuple[int, int]]) -> List[Direction]:
    """Convert a coordinate path into the directions walked."""

    out: List[Direction] = []
    for a, b in zip(path, path[1:]):
        delta = (b[0] - a[0], b[1] - a[1])
        for direction, move in MOVES.items():
            if (move.dr, move.dc) == delta:
                out.append(direction)
                break
        else:
            raise ValueError(f"Non-adjacent steps in path: {a} -> {b}")
    return out


def reachable_cells(maze: Maze, start: Tuple[int, int]) -> Set[Coord]:
    """Flood fill from `start` through open walls."""

    origin = Coord(*start)
    maze.require(origin.row, origin.col)
    seen: Set[Coord] = {origin}
    q: Deque[Coord] = deque([origin])
    while q:
        cur = q.popleft()
        for nxt in neighbors_open(maze, cur.row, cur.col):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def validate_maze(maze: Maze) -> None:
    """Validate the maze structure.

    Checks:
    - Border walls remain closed to the outside.
    - Neighboring cells have coherent walls.
    - Every cell is reachable from (0, 0).
    - No loops: a spanning tree has exactly cells - 1 passages.
    """

    h, w = maze.rows, maze.cols
    grid = maze.grid

    for r in range(h):
        if not grid[r][0].walls["left"]:
            raise MazeValidationError("Invalid maze: left border has an opening")
        if not grid[r][w - 1].walls["right"]:
            raise MazeValidationError("Invalid maze: right border has an opening")
    for c in range(w):
        if not grid[0][c].walls["top"]:
            raise MazeValidationError("Invalid maze: top border has an opening")
        if not grid[h - 1][c].walls["bottom"]:
            raise MazeValidationError(
                "Invalid maze: bottom border has an opening"
            )

    for r in range(h):
        for c in range(w):
            cell = grid[r][c]
            if r + 1 < h and cell.walls["bottom"] != grid[r + 1][c].walls["top"]:
                raise MazeValidationError(
                    f"Invalid maze: incoherent bottom/top walls at {(r, c)}"
                )
            if c + 1 < w and cell.walls["right"] != grid[r][c + 1].walls["left"]:
                raise MazeValidationError(
                    f"Invalid maze: incoherent right/left walls at {(r, c)}"
                )

    total = h * w
    if len(reachable_cells(maze, (0, 0))) != total:
        raise MazeValidationError("Invalid maze: disconnected cells exist")

    if maze.passage_count() != total - 1:
        raise MazeValidationError("Invalid maze: maze contains loops")
