import tempfile
import unittest
from pathlib import Path

from parsing import Config, ConfigError, parse_bool, parse_config, read_config


class ParseConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.dir / "config.txt"
        path.write_text(text, encoding="utf-8")
        return path

    def test_defaults(self) -> None:
        config = Config()
        self.assertEqual((config.rows, config.cols), (25, 25))
        self.assertIsNone(config.seed)
        self.assertEqual(config.move_interval_ms, 130)
        self.assertFalse(config.animate_generation)
        self.assertIsNone(config.log_file)
        self.assertEqual(parse_config({}), config)

    def test_read_full_file(self) -> None:
        path = self._write(
            "# game settings\n"
            "\n"
            "rows = 11\n"
            "COLS=13\n"
            "SEED=hello world\n"
            "MOVE_INTERVAL_MS=80\n"
            "ANIMATE_GENERATION=yes\n"
            "LOG_FILE=logs/maze.log\n"
            "LOG_LEVEL=debug\n"
        )
        config = read_config(path)
        self.assertEqual(config.rows, 11)
        self.assertEqual(config.cols, 13)
        self.assertEqual(config.seed, "hello world")
        self.assertEqual(config.move_interval_ms, 80)
        self.assertTrue(config.animate_generation)
        self.assertEqual(config.log_file, Path("logs/maze.log"))
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.log_level_value, 10)

    def test_empty_seed_means_random(self) -> None:
        self.assertIsNone(parse_config({"SEED": ""}).seed)

    def test_missing_file(self) -> None:
        with self.assertRaisesRegex(ConfigError, "not found"):
            read_config(self.dir / "nope.txt")

    def test_bad_syntax(self) -> None:
        with self.assertRaisesRegex(ConfigError, "line 2"):
            read_config(self._write("ROWS=5\nCOLS 5\n"))

    def test_invalid_values(self) -> None:
        bad = [
            {"ROWS": "ten"},
            {"ROWS": "0"},
            {"COLS": "-3"},
            {"MOVE_INTERVAL_MS": "0"},
            {"ANIMATE_GENERATION": "maybe"},
            {"LOG_LEVEL": "LOUD"},
            {"WIDTH": "5"},
        ]
        for raw in bad:
            with self.assertRaises(ConfigError, msg=raw):
                parse_config(raw)

    def test_parse_bool(self) -> None:
        self.assertTrue(parse_bool(" On ", key="K"))
        self.assertFalse(parse_bool("0", key="K"))


if __name__ == "__main__":
    unittest.main()
