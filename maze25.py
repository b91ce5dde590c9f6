"""Terminal maze game.

Usage: python3 maze25.py [config.txt]

Arrow keys (or WASD) move, P pauses, R starts a new game, Space toggles the
auto-solver, E sets a seed and Q quits.
"""

import curses
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Set, Tuple

from game import GameSession
from mazegen import Direction, Maze
from parsing import Config, ConfigError, read_config
from solver import MazeValidationError, validate_maze


logger = logging.getLogger(__name__)

WALL_CHAR = "█"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
SEED_MAX_LEN = 32

KEY_DIRECTIONS: Dict[int, Direction] = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_RIGHT: Direction.RIGHT,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    ord("w"): Direction.UP,
    ord("d"): Direction.RIGHT,
    ord("s"): Direction.DOWN,
    ord("a"): Direction.LEFT,
}

MENU = [
    "=== Maze 25 ===",
    "Arrows/WASD: move   Space: auto-solve   P: pause",
    "R: new game   E: set seed   Q: quit",
]


class _CursesWindow(Protocol):
    def getmaxyx(self) -> Tuple[int, int]:
        ...

    def clear(self) -> None:
        ...

    def refresh(self) -> None:
        ...

    def addstr(self, y: int, x: int, s: str, attr: int = 0) -> Any:
        ...

    def addch(self, y: int, x: int, ch: str, attr: int = 0) -> Any:
        ...

    def bkgd(self, ch: str, attr: int = 0) -> Any:
        ...

    def getch(self) -> int:
        ...

    def getstr(self, y: int, x: int, n: int) -> bytes:
        ...

    def keypad(self, flag: bool) -> None:
        ...

    def timeout(self, delay: int) -> None:
        ...


def direction_from_key(key: int) -> Optional[Direction]:
    """Map a curses key code to a direction, if it is a movement key."""

    if 0 <= key < 256:
        key = ord(chr(key).lower())
    return KEY_DIRECTIONS.get(key)


def to_canvas(c: Tuple[int, int]) -> Tuple[int, int]:
    return (2 * c[0] + 1, 2 * c[1] + 1)


def render_block(
    maze: Maze,
    *,
    marks: Optional[Dict[Tuple[int, int], str]] = None,
) -> List[str]:
    """Render the maze as block characters for terminal/curses display."""

    marks = marks or {}
    out_h = 2 * maze.rows + 1
    out_w = 2 * maze.cols + 1
    canvas: List[List[str]] = [
        [WALL_CHAR for _ in range(out_w)]
        for _ in range(out_h)
    ]

    for r in range(maze.rows):
        for c in range(maze.cols):
            cr, cc = to_canvas((r, c))
            canvas[cr][cc] = " "

            walls = maze.grid[r][c].walls
            # carve passages
            if not walls["top"]:
                canvas[cr - 1][cc] = " "
            if not walls["bottom"]:
                canvas[cr + 1][cc] = " "
            if not walls["left"]:
                canvas[cr][cc - 1] = " "
            if not walls["right"]:
                canvas[cr][cc + 1] = " "

            m = marks.get((r, c))
            if m is not None and len(m) == 1:
                canvas[cr][cc] = m

    return ["".join(row) for row in canvas]


def path_tiles(path: Sequence[Tuple[int, int]]) -> Set[Tuple[int, int]]:
    """Canvas tiles covered by a path, passages between cells included."""

    tiles: Set[Tuple[int, int]] = {to_canvas(p) for p in path}
    for a, b in zip(path, path[1:]):
        ar, ac = to_canvas(a)
        br, bc = to_canvas(b)
        tiles.add(((ar + br) // 2, (ac + bc) // 2))
    return tiles


def checked_maze(session: GameSession) -> None:
    try:
        validate_maze(session.maze)
    except MazeValidationError:
        logger.exception("Seed %r produced an invalid maze", session.seed)
        raise


def curses_view(
    stdscr: _CursesWindow,
    *,
    config: Config,
) -> None:
    """Interactive terminal (curses) view for the game."""

    if curses.has_colors():
        curses.start_color()
        curses.use_default_colors()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)

    def init_pairs() -> Dict[str, int]:
        if not curses.has_colors():
            return dict.fromkeys(
                ("wall", "path", "start", "goal", "player", "bg"), 0
            )
        try:
            curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLACK)
            curses.init_pair(2, curses.COLOR_BLACK, curses.COLOR_BLUE)
            curses.init_pair(3, curses.COLOR_BLACK, curses.COLOR_GREEN)
            curses.init_pair(4, curses.COLOR_BLACK, curses.COLOR_RED)
            curses.init_pair(5, curses.COLOR_BLACK, curses.COLOR_YELLOW)
            curses.init_pair(6, curses.COLOR_WHITE, curses.COLOR_BLACK)
        except curses.error:
            pass
        return {
            "wall": curses.color_pair(1),
            "path": curses.color_pair(2),
            "start": curses.color_pair(3),
            "goal": curses.color_pair(4),
            "player": curses.color_pair(5),
            "bg": curses.color_pair(6),
        }

    attrs = init_pairs()
    last_error: Optional[str] = None

    def safe_addstr(y: int, x: int, s: str, attr: int = 0) -> None:
        max_y, max_x = stdscr.getmaxyx()
        if y < 0 or x < 0 or y >= max_y or x >= max_x:
            return
        try:
            stdscr.addstr(y, x, s[: max(0, max_x - x - 1)], attr)
        except curses.error:
            return

    def safe_addch(y: int, x: int, ch: str, attr: int = 0) -> None:
        max_y, max_x = stdscr.getmaxyx()
        if y < 0 or x < 0 or y >= max_y or x >= max_x:
            return
        try:
            stdscr.addch(y, x, ch, attr)
        except curses.error:
            return

    def draw_walls(lines: Sequence[str]) -> None:
        for i, line in enumerate(lines):
            for j, ch_char in enumerate(line):
                if ch_char == WALL_CHAR:
                    safe_addch(i, j, ch_char, attrs["wall"])
                else:
                    safe_addch(i, j, ch_char)

    cell_count = config.rows * config.cols
    draw_every = max(1, cell_count // 250)
    delay_ms = 5 if cell_count <= 900 else 1
    step_count = 0

    def on_step(m: Maze) -> None:
        nonlocal step_count
        step_count += 1
        if step_count % draw_every != 0:
            return
        stdscr.clear()
        draw_walls(render_block(m))
        stdscr.refresh()
        try:
            curses.napms(delay_ms)
        except curses.error:
            return

    def on_win() -> None:
        try:
            curses.beep()
        except curses.error:
            pass

    session = GameSession(
        config.rows,
        config.cols,
        config.seed,
        on_win=on_win,
        on_step=on_step if config.animate_generation else None,
    )
    checked_maze(session)

    def regenerate(action: Any, *args: Any) -> None:
        nonlocal last_error
        last_error = None
        try:
            action(*args)
            checked_maze(session)
        except Exception as exc:
            # Keep the UI alive on regeneration; show a message instead.
            last_error = f"{type(exc).__name__}: {exc}"

    def prompt_seed(row: int) -> Optional[str]:
        safe_addstr(row, 0, "Seed (empty = random): ")
        stdscr.refresh()
        stdscr.timeout(-1)
        curses.echo()
        try:
            raw = stdscr.getstr(row, 23, SEED_MAX_LEN)
        except curses.error:
            return None
        finally:
            curses.noecho()
        return raw.decode("utf-8", errors="replace")

    while True:
        lines = render_block(session.maze)
        max_y, max_x = stdscr.getmaxyx()
        menu_lines = len(MENU) + 3
        needed_y = len(lines) + menu_lines
        needed_x = max((len(line) for line in lines), default=0)

        stdscr.clear()

        if max_y < needed_y or max_x < needed_x:
            safe_addstr(0, 0, "Terminal too small.")
            safe_addstr(1, 0, f"Need {needed_x}x{needed_y}, have {max_x}x{max_y}.")
            safe_addstr(3, 0, "Resize or press Q to quit.")
            stdscr.refresh()
            stdscr.timeout(-1)
            if stdscr.getch() in (ord("q"), ord("Q")):
                return
            continue

        try:
            stdscr.bkgd(" ", attrs["bg"])
        except curses.error:
            pass

        draw_walls(lines)
        for tile in path_tiles(session.auto_path):
            safe_addch(tile[0], tile[1], " ", attrs["path"])
        for cell, key in ((session.start, "start"), (session.goal, "goal")):
            cr, cc = to_canvas(cell)
            safe_addch(cr, cc, " ", attrs[key])
        pr, pc = to_canvas(session.player)
        safe_addch(pr, pc, "@", attrs["player"])

        base = len(lines)
        for i, text in enumerate(MENU):
            safe_addstr(base + i, 0, text)
        status = f"Seed: {session.seed}"
        if session.custom_seed:
            status += " (custom)"
        if session.paused:
            status += "   [PAUSED]"
        if session.auto_running:
            status += "   [AUTO]"
        safe_addstr(base + len(MENU), 0, status)
        if session.victory:
            safe_addstr(
                base + len(MENU) + 1,
                0,
                "You reached the goal! Press R for a new game.",
                curses.A_BOLD,
            )
        elif last_error is not None:
            safe_addstr(base + len(MENU) + 1, 0, f"Last error: {last_error}")
        stdscr.refresh()

        stdscr.timeout(config.move_interval_ms if session.auto_running else -1)
        key = stdscr.getch()
        if key == -1:
            session.advance_auto()
            continue

        direction = direction_from_key(key)
        if direction is not None:
            session.try_move(direction)
        elif key in (ord("q"), ord("Q")):
            return
        elif key in (ord("p"), ord("P")):
            session.toggle_pause()
        elif key in (ord("r"), ord("R")):
            regenerate(session.new_game)
        elif key == ord(" "):
            session.toggle_auto()
        elif key in (ord("e"), ord("E")):
            seed = prompt_seed(base + len(MENU) + 2)
            if seed is not None:
                regenerate(session.set_seed, seed)


def configure_logging(config: Config) -> None:
    """Send logs to LOG_FILE; without one, drop them, curses owns the tty."""

    if config.log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(config.log_file),
        level=config.log_level_value,
        format=LOG_FORMAT,
    )


def run(config: Config) -> int:
    """Run the interactive game until the player quits."""

    configure_logging(config)
    logger.info("Starting %dx%d game", config.rows, config.cols)
    try:
        curses.wrapper(curses_view, config=config)
    except curses.error as exc:
        print(f"Error: curses: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str]) -> int:
    """CLI entrypoint."""

    if len(argv) > 2:
        print("Usage: python3 maze25.py [config.txt]", file=sys.stderr)
        return 2

    try:
        config = read_config(Path(argv[1])) if len(argv) == 2 else Config()
        return run(config)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (ConfigError, OSError, RuntimeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
