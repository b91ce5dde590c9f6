"""Game session: one maze, a player walking it and auto-solve playback.

The session owns no timers. A front-end calls `try_move` on key presses and
`advance_auto` on its own clock while `auto_running` is True.
"""

import logging
from typing import Callable, List, Optional

from mazegen import Coord, Direction, Maze, can_move, generate_maze, step
from seeded_random import derive_generator, random_seed
from solver import find_path


logger = logging.getLogger(__name__)

ROWS = 25
COLS = 25


class GameSession:
    """State of a single game, regenerated on every new game."""

    maze: Maze
    seed: str
    custom_seed: bool
    player: Coord
    paused: bool
    victory: bool
    auto_path: List[Coord]

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        seed: Optional[str] = None,
        *,
        seed_factory: Callable[[], str] = random_seed,
        on_move: Optional[Callable[[], None]] = None,
        on_win: Optional[Callable[[], None]] = None,
        on_step: Optional[Callable[[Maze], None]] = None,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.start = Coord(0, 0)
        self.goal = Coord(rows - 1, cols - 1)
        self.paused = False
        self.on_move = on_move
        self.on_win = on_win
        self.on_step = on_step
        self._seed_factory = seed_factory
        self._pending: List[Coord] = []

        self.custom_seed = bool(seed)
        self.seed = seed if seed else seed_factory()
        self._regenerate()

    @property
    def auto_running(self) -> bool:
        return bool(self._pending)

    def _regenerate(self) -> None:
        self.maze = generate_maze(
            self.rows,
            self.cols,
            derive_generator(self.seed),
            on_step=self.on_step,
        )
        self.player = self.start
        self.victory = False
        self.auto_path = []
        self._pending = []
        logger.info(
            "New %dx%d maze from seed %r", self.rows, self.cols, self.seed
        )

    def new_game(self) -> None:
        """Start over; a random seed is drawn unless the player chose one."""

        if not self.custom_seed:
            self.seed = self._seed_factory()
        self._regenerate()

    def set_seed(self, seed: Optional[str]) -> None:
        """Use `seed` for this and later games; empty means random again."""

        seed = (seed or "").strip()
        self.custom_seed = bool(seed)
        self.seed = seed if seed else self._seed_factory()
        self._regenerate()

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        if self.paused:
            self._pending = []
        return self.paused

    def try_move(self, direction: Direction) -> bool:
        """Move the player one cell if the way is open."""

        if self.paused or self.victory or self.auto_running:
            return False
        if not can_move(self.maze, self.player.row, self.player.col, direction):
            return False
        self.player = step(self.player, direction)
        self.auto_path = []
        if self.on_move is not None:
            self.on_move()
        if self.player == self.goal:
            self._win()
        return True

    def start_auto(self) -> bool:
        """Plan a shortest path from the player to the goal."""

        if self.paused or self.victory:
            return False
        path = find_path(self.maze, self.player, self.goal)
        if len(path) <= 1:
            return False
        self.auto_path = path[:1]
        self._pending = path[1:]
        logger.info("Auto-solve: %d steps to the goal", len(self._pending))
        return True

    def stop_auto(self) -> None:
        self._pending = []
        self.auto_path = []

    def toggle_auto(self) -> bool:
        """Stop a running auto-solve, or start one. Returns the new state."""

        if self.auto_running:
            self.stop_auto()
            return False
        return self.start_auto()

    def advance_auto(self) -> bool:
        """Walk one cell of the planned path. Returns False when idle."""

        if self.paused or not self._pending:
            return False
        nxt = self._pending.pop(0)
        self.auto_path.append(nxt)
        self.player = nxt
        if not self._pending:
            self._win()
        return True

    def _win(self) -> None:
        self.victory = True
        logger.info("Goal reached on seed %r", self.seed)
        if self.on_win is not None:
            self.on_win()
