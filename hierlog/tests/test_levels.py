"""Unit tests for LevelRegistry lookups and verbosity stepping."""
from __future__ import annotations

import unittest

from hierlog.core.exceptions import LoggingError, UnknownLevelError
from hierlog.core.levels import DEFAULT_LEVELS, LevelRegistry


class TestIndexOf(unittest.TestCase):
    def setUp(self) -> None:
        self.levels = LevelRegistry()

    def test_canonical_name(self) -> None:
        self.assertEqual(self.levels.index_of("WARN"), 3)

    def test_lowercase_name_falls_back_to_upper(self) -> None:
        self.assertEqual(self.levels.index_of("warn"), 3)
        self.assertEqual(self.levels.index_of("Critical"), 5)

    def test_index_passthrough(self) -> None:
        self.assertEqual(self.levels.index_of(0), 0)
        self.assertEqual(self.levels.index_of(5), 5)

    def test_out_of_range_index_raises(self) -> None:
        with self.assertRaises(UnknownLevelError):
            self.levels.index_of(6)
        with self.assertRaises(UnknownLevelError):
            self.levels.index_of(-1)

    def test_unknown_name_raises(self) -> None:
        with self.assertRaises(UnknownLevelError) as ctx:
            self.levels.index_of("NOT_A_LEVEL")
        self.assertEqual(ctx.exception.code, "UNKNOWN_LEVEL")
        self.assertEqual(ctx.exception.details["level"], "NOT_A_LEVEL")

    def test_unknown_level_is_lookup_error_and_logging_error(self) -> None:
        with self.assertRaises(LookupError):
            self.levels.index_of("nope")
        with self.assertRaises(LoggingError):
            self.levels.index_of(None)  # type: ignore[arg-type]

    def test_bool_is_not_an_index(self) -> None:
        with self.assertRaises(UnknownLevelError):
            self.levels.index_of(True)

    def test_contains(self) -> None:
        self.assertIn("info", self.levels)
        self.assertNotIn("verbose", self.levels)


class TestNameOf(unittest.TestCase):
    def test_in_range(self) -> None:
        levels = LevelRegistry()
        self.assertEqual(levels.name_of(2), "INFO")

    def test_out_of_range_returns_none(self) -> None:
        levels = LevelRegistry()
        self.assertIsNone(levels.name_of(-1))
        self.assertIsNone(levels.name_of(42))
        self.assertIsNone(levels.name_of(None))


class TestStepping(unittest.TestCase):
    def setUp(self) -> None:
        self.levels = LevelRegistry()

    def test_step_down(self) -> None:
        self.assertEqual(self.levels.step_down("INFO"), "DEBUG")

    def test_step_down_past_bottom_is_none(self) -> None:
        self.assertIsNone(self.levels.step_down("TRACE"))

    def test_step_up(self) -> None:
        self.assertEqual(self.levels.step_up("ERROR"), "CRITICAL")

    def test_step_up_clamps_at_top(self) -> None:
        self.assertEqual(self.levels.step_up("CRITICAL"), "CRITICAL")


class TestCustomLevels(unittest.TestCase):
    def test_names_are_uppercased(self) -> None:
        levels = LevelRegistry(["low", "High"])
        self.assertEqual(list(levels), ["LOW", "HIGH"])
        self.assertEqual(levels.lowest, "LOW")
        self.assertEqual(levels.highest, "HIGH")

    def test_duplicates_rejected(self) -> None:
        with self.assertRaises(ValueError):
            LevelRegistry(["a", "A"])

    def test_empty_rejected(self) -> None:
        with self.assertRaises(ValueError):
            LevelRegistry([])

    def test_default_order(self) -> None:
        self.assertEqual(tuple(LevelRegistry()), DEFAULT_LEVELS)
