"""Maze model, generator and movement checks.

Basic usage:

    from mazegen import Direction, can_move, generate_maze
    from seeded_random import derive_generator

    maze = generate_maze(25, 25, derive_generator("maze-seed"))
    can_move(maze, 0, 0, Direction.RIGHT)

The maze is stored as a 2D list of `Cell` instances (`maze.grid[row][col]`).
Each `Cell` has a `walls` mapping with keys "top", "right", "bottom", "left"
where True means closed. A wall shared by two cells is stored on both of them
and the two flags are always changed together.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

from seeded_random import Prng


logger = logging.getLogger(__name__)


class Coord(NamedTuple):
    """Grid coordinate, 0-indexed."""

    row: int
    col: int


class InvalidDimensionsError(ValueError):
    """Maze dimensions are not positive integers."""

    pass


class OutOfRangeError(IndexError):
    """A coordinate lies outside the maze."""

    pass


class Direction(Enum):
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


@dataclass(frozen=True)
class Move:
    """Row/column delta and the wall pair crossed by a step."""

    dr: int
    dc: int
    wall: str
    opposite: str


# Insertion order is the canonical neighbor order: up, right, down, left.
MOVES: Mapping[Direction, Move] = {
    Direction.UP: Move(-1, 0, "top", "bottom"),
    Direction.RIGHT: Move(0, 1, "right", "left"),
    Direction.DOWN: Move(1, 0, "bottom", "top"),
    Direction.LEFT: Move(0, -1, "left", "right"),
}

WALL_BITS: Mapping[str, int] = {"top": 1, "right": 2, "bottom": 4, "left": 8}


def step(coord: Tuple[int, int], direction: Direction) -> Coord:
    """Return the coordinate one step away in `direction`."""

    move = MOVES[direction]
    return Coord(coord[0] + move.dr, coord[1] + move.dc)


@dataclass
class Cell:
    """A single maze cell."""

    row: int
    col: int
    walls: Dict[str, bool]

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.walls = {"top": True, "right": True, "bottom": True, "left": True}

    def is_fully_closed(self) -> bool:
        """Return True if all four walls are closed."""

        return all(self.walls.values())

    def open_directions(self) -> List[Direction]:
        return [d for d, move in MOVES.items() if not self.walls[move.wall]]


class Maze:
    """Rectangular grid of cells, every wall closed until carved."""

    rows: int
    cols: int
    grid: List[List[Cell]]

    def __init__(self, rows: int, cols: int) -> None:
        check_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.grid = [[Cell(r, c) for c in range(cols)] for r in range(rows)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return self.wall_masks() == other.wall_masks()

    def __repr__(self) -> str:
        return f"Maze(rows={self.rows}, cols={self.cols})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def require(self, row: int, col: int) -> None:
        """Raise OutOfRangeError unless (row, col) is inside the maze."""

        if not self.in_bounds(row, col):
            raise OutOfRangeError(
                f"({row}, {col}) is outside the "
                f"{self.rows}x{self.cols} maze"
            )

    def cell(self, row: int, col: int) -> Cell:
        self.require(row, col)
        return self.grid[row][col]

    def neighbors(self, row: int, col: int) -> List[Tuple[Direction, Coord]]:
        """In-bounds neighbors of (row, col), walls ignored.

        Ordered up, right, down, left.
        """

        out: List[Tuple[Direction, Coord]] = []
        for direction in MOVES:
            nxt = step((row, col), direction)
            if self.in_bounds(nxt.row, nxt.col):
                out.append((direction, nxt))
        return out

    def carve_between(self, a: Tuple[int, int], b: Tuple[int, int]) -> None:
        """Remove the wall pair separating two adjacent cells."""

        for direction, nxt in self.neighbors(a[0], a[1]):
            if nxt == tuple(b):
                move = MOVES[direction]
                self.grid[a[0]][a[1]].walls[move.wall] = False
                self.grid[nxt.row][nxt.col].walls[move.opposite] = False
                return
        raise ValueError(f"Cells {tuple(a)} and {tuple(b)} are not adjacent")

    def passage_count(self) -> int:
        """Number of open wall pairs between in-bounds cells."""

        count = 0
        for r in range(self.rows):
            for c in range(self.cols):
                cell = self.grid[r][c]
                if c + 1 < self.cols and not cell.walls["right"]:
                    count += 1
                if r + 1 < self.rows and not cell.walls["bottom"]:
                    count += 1
        return count

    def wall_mask(self, row: int, col: int) -> int:
        """Encode the closed walls of a cell: top=1, right=2, bottom=4, left=8."""

        walls = self.cell(row, col).walls
        return sum(bit for name, bit in WALL_BITS.items() if walls[name])

    def wall_masks(self) -> List[List[int]]:
        return [
            [self.wall_mask(r, c) for c in range(self.cols)]
            for r in range(self.rows)
        ]


def check_dimensions(rows: int, cols: int) -> None:
    if not all(
        isinstance(n, int) and not isinstance(n, bool) for n in (rows, cols)
    ):
        raise InvalidDimensionsError("rows and cols must be integers")
    if rows <= 0 or cols <= 0:
        raise InvalidDimensionsError(
            f"rows and cols must be > 0 (got {rows}x{cols})"
        )


def shuffle_in_place(items: List[Coord], rng: Prng) -> None:
    """Fisher-Yates shuffle driven by `rng`."""

    for i in range(len(items) - 1, 0, -1):
        j = int(rng() * (i + 1))
        items[i], items[j] = items[j], items[i]


def generate_maze(
    rows: int,
    cols: int,
    rng: Prng,
    *,
    on_step: Optional[Callable[[Maze], None]] = None,
) -> Maze:
    """Carve a perfect maze with a randomized depth-first search.

    The search starts at (0, 0) and keeps its frontier on an explicit stack,
    so grid size is not limited by the recursion depth. `on_step` is called
    after every carve, e.g. to animate generation.
    """

    check_dimensions(rows, cols)
    maze = Maze(rows, cols)

    start = Coord(0, 0)
    visited = [[False] * cols for _ in range(rows)]
    visited[start.row][start.col] = True
    stack: List[Coord] = [start]

    while stack:
        r, c = stack[-1]
        unvisited = [
            nxt for _, nxt in maze.neighbors(r, c)
            if not visited[nxt.row][nxt.col]
        ]
        if not unvisited:
            stack.pop()
            continue
        shuffle_in_place(unvisited, rng)
        nxt = unvisited[0]
        maze.carve_between((r, c), nxt)
        visited[nxt.row][nxt.col] = True
        stack.append(nxt)

        if on_step is not None:
            on_step(maze)

    logger.debug(
        "Generated %dx%d maze with %d passages",
        rows,
        cols,
        maze.passage_count(),
    )
    return maze


def can_move(maze: Maze, row: int, col: int, direction: Direction) -> bool:
    """Return True if a step from (row, col) in `direction` is open.

    Raises OutOfRangeError when (row, col) is not a cell of the maze.
    """

    cell = maze.cell(row, col)
    if cell.walls[MOVES[direction].wall]:
        return False
    dest = step((row, col), direction)
    return maze.in_bounds(dest.row, dest.col)
