import curses
import tempfile
import unittest
from pathlib import Path

from mazegen import Direction, Maze, generate_maze
from maze25 import direction_from_key, main, path_tiles, render_block
from seeded_random import derive_generator


class RenderBlockTests(unittest.TestCase):
    def test_single_closed_cell(self) -> None:
        self.assertEqual(render_block(Maze(1, 1)), ["███", "█ █", "███"])

    def test_reference_maze(self) -> None:
        maze = generate_maze(3, 3, derive_generator("test"))
        lines = render_block(maze)
        self.assertEqual(len(lines), 7)
        self.assertTrue(all(len(line) == 7 for line in lines))
        self.assertEqual(lines[0], "███████")
        self.assertEqual(lines[1], "█   █ █")
        self.assertEqual(lines[2], "███ █ █")
        self.assertEqual(lines[6], "███████")

    def test_marks(self) -> None:
        maze = generate_maze(3, 3, derive_generator("test"))
        lines = render_block(maze, marks={(0, 0): "@", (2, 2): "GG"})
        self.assertEqual(lines[1], "█@  █ █")
        self.assertEqual(lines[5][5], " ")

    def test_path_tiles_include_passages(self) -> None:
        tiles = path_tiles([(0, 0), (0, 1), (1, 1)])
        self.assertEqual(tiles, {(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)})


class DirectionFromKeyTests(unittest.TestCase):
    def test_arrow_keys(self) -> None:
        self.assertEqual(direction_from_key(curses.KEY_UP), Direction.UP)
        self.assertEqual(direction_from_key(curses.KEY_LEFT), Direction.LEFT)

    def test_wasd_any_case(self) -> None:
        self.assertEqual(direction_from_key(ord("W")), Direction.UP)
        self.assertEqual(direction_from_key(ord("d")), Direction.RIGHT)

    def test_other_keys(self) -> None:
        self.assertIsNone(direction_from_key(ord("x")))
        self.assertIsNone(direction_from_key(-1))


class MainTests(unittest.TestCase):
    def test_usage(self) -> None:
        self.assertEqual(main(["maze25.py", "a.txt", "b.txt"]), 2)

    def test_config_error_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.txt"
            path.write_text("ROWS=zero\n", encoding="utf-8")
            self.assertEqual(main(["maze25.py", str(path)]), 1)
            self.assertEqual(main(["maze25.py", str(Path(tmp) / "none")]), 1)


if __name__ == "__main__":
    unittest.main()
