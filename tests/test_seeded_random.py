import random
import unittest

from seeded_random import (
    DEFAULT_SEED,
    derive_generator,
    mulberry32,
    random_seed,
    xmur3,
)


class Xmur3Tests(unittest.TestCase):
    def test_known_initial_states(self) -> None:
        self.assertEqual(xmur3("abc")(), 1792905582)
        self.assertEqual(xmur3("maze-seed")(), 2197388384)
        self.assertEqual(xmur3("test")(), 2974430664)

    def test_stream_keeps_mixing(self) -> None:
        next_hash = xmur3("abc")
        values = [next_hash() for _ in range(4)]
        self.assertEqual(len(set(values)), 4)
        self.assertTrue(all(0 <= v < 2**32 for v in values))


class GeneratorTests(unittest.TestCase):
    def test_first_draws_for_abc(self) -> None:
        rng = derive_generator("abc")
        self.assertEqual(rng(), 3807890421 / 4294967296)
        self.assertEqual(rng(), 2150340831 / 4294967296)
        self.assertEqual(rng(), 579508299 / 4294967296)

    def test_first_draws_for_default_seed(self) -> None:
        rng = derive_generator(DEFAULT_SEED)
        self.assertAlmostEqual(rng(), 0.9293123728130013, places=15)
        self.assertAlmostEqual(rng(), 0.35258079366758466, places=15)

    def test_missing_or_empty_seed_uses_default(self) -> None:
        expected = derive_generator("maze-seed")()
        self.assertEqual(derive_generator(None)(), expected)
        self.assertEqual(derive_generator("")(), expected)

    def test_same_seed_same_stream(self) -> None:
        a = derive_generator("repeat me")
        b = derive_generator("repeat me")
        self.assertEqual([a() for _ in range(50)], [b() for _ in range(50)])

    def test_draws_stay_in_unit_interval(self) -> None:
        rng = mulberry32(0xFFFFFFFF)
        for _ in range(1000):
            value = rng()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)


class RandomSeedTests(unittest.TestCase):
    def test_format(self) -> None:
        seed = random_seed()
        self.assertEqual(len(seed), 8)
        self.assertRegex(seed, r"^[0-9a-z]{8}$")

    def test_reproducible_with_explicit_rng(self) -> None:
        self.assertEqual(
            random_seed(random.Random(7)), random_seed(random.Random(7))
        )


if __name__ == "__main__":
    unittest.main()
