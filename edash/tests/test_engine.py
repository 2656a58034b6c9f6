"""Tests for the heatmap engine and cell lookup."""

import copy
import unittest
from unittest import mock

from edash.config.loader import DEFAULT_CONFIG
from edash.heatmap import generator
from edash.heatmap.aggregation import usage_pattern
from edash.heatmap.engine import HeatmapEngine, lookup
from edash.models.entities import Day, DAYS, HOURS


class TestEndToEnd(unittest.TestCase):
    """Generate, normalize and look up a cell."""

    def test_monday_morning_intensity(self):
        """Verify lookup(grid, 'Mon', 7) intensity against independent min/max."""
        engine = HeatmapEngine()
        grid = engine.cells
        self.assertEqual(len(grid), 168)

        values = [
            generator.generate_value(day_index, hour)
            for day_index in range(7) for hour in range(24)
        ]
        low, high = min(values), max(values)
        self.assertGreaterEqual(low, 50.0)

        cell = lookup(grid, "Mon", 7)
        self.assertIsNotNone(cell)
        self.assertAlmostEqual(cell.intensity, (cell.value - low) / (high - low))


class TestLookup(unittest.TestCase):
    """Test module-level and indexed lookup."""

    def setUp(self):
        self.engine = HeatmapEngine()

    def test_every_valid_pair_found(self):
        """Verify every (day, hour) returns exactly its own cell."""
        for day in DAYS:
            for hour in HOURS:
                cell = lookup(self.engine.cells, day, hour)
                self.assertEqual((cell.day, cell.hour), (day, hour))
                self.assertEqual(self.engine.lookup(day, hour), cell)

    def test_string_labels(self):
        """Verify string day labels are accepted."""
        self.assertIs(lookup(self.engine.cells, "Sun", 23).day, Day.SUN)
        self.assertIs(self.engine.lookup("Sat", 0).day, Day.SAT)

    def test_out_of_domain_returns_none(self):
        """Verify lookups outside the grid signal absence without raising."""
        for day, hour in [("Mon", 24), ("Mon", -1), ("Funday", 3), ("mon", 3), (None, 0), ("Tue", "7"),
                          ("Mon", 7.0), ("Mon", True), ("Mon", [7]), (["Mon"], 7)]:
            self.assertIsNone(lookup(self.engine.cells, day, hour))
            self.assertIsNone(self.engine.lookup(day, hour))

    def test_partial_grid_miss(self):
        """Verify a valid pair missing from a partial grid returns None."""
        partial = self.engine.cells[:24]
        self.assertIsNotNone(lookup(partial, "Mon", 5))
        self.assertIsNone(lookup(partial, "Tue", 5))


class TestMemoization(unittest.TestCase):
    """Test that derived views are computed once per grid."""

    def test_generate_called_once(self):
        """Verify the generator runs once at construction."""
        with mock.patch('edash.heatmap.engine.generator.generate',
                        wraps=generator.generate) as generate:
            engine = HeatmapEngine()
            engine.cells
            engine.insights
            engine.lookup("Mon", 7)
            self.assertEqual(generate.call_count, 1)

    def test_normalize_and_aggregate_cached(self):
        """Verify normalize/aggregate run at most once per grid."""
        engine = HeatmapEngine()
        with mock.patch('edash.heatmap.engine.aggregation.normalize',
                        wraps=lambda grid: ()) as normalize, \
                mock.patch('edash.heatmap.engine.aggregation.aggregate') as aggregate:
            engine.cells
            engine.cells
            engine.insights
            engine.insights
            self.assertEqual(normalize.call_count, 1)
            self.assertEqual(aggregate.call_count, 1)

    def test_views_are_stable(self):
        """Verify repeated access returns the same objects."""
        engine = HeatmapEngine()
        self.assertIs(engine.cells, engine.cells)
        self.assertIs(engine.insights, engine.insights)


class TestRegenerate(unittest.TestCase):
    """Test regenerating with a new seed."""

    def test_regenerate_replaces_grid_and_caches(self):
        engine = HeatmapEngine()
        old_cells = engine.cells
        old_insights = engine.insights
        old_pattern = engine.pattern

        engine.regenerate(999)

        self.assertEqual(engine.seed_offset, 999)
        self.assertIsNot(engine.cells, old_cells)
        self.assertNotEqual(engine.insights, old_insights)
        self.assertEqual(engine.pattern, usage_pattern(engine.insights))
        self.assertEqual(len(engine.cells), 168)
        self.assertNotEqual(
            [c.value for c in engine.cells], [c.value for c in old_cells]
        )
        self.assertIsInstance(old_pattern, str)

    def test_regenerate_same_seed_is_identical(self):
        engine = HeatmapEngine()
        before = [(c.day, c.hour, c.value) for c in engine.cells]
        engine.regenerate(engine.seed_offset)
        self.assertEqual([(c.day, c.hour, c.value) for c in engine.cells], before)

    def test_lookup_follows_regenerate(self):
        engine = HeatmapEngine()
        engine.lookup("Mon", 7)
        engine.regenerate(1)
        self.assertEqual(engine.lookup("Mon", 7).value, generator.generate_value(0, 7, seed_offset=1))


class TestFromConfig(unittest.TestCase):
    """Test building an engine from configuration."""

    def test_defaults(self):
        engine = HeatmapEngine.from_config(copy.deepcopy(DEFAULT_CONFIG))
        self.assertEqual(engine.seed_offset, 12345)
        self.assertEqual(
            [c.value for c in engine.grid],
            [c.value for c in HeatmapEngine().grid],
        )

    def test_custom_params(self):
        config = copy.deepcopy(DEFAULT_CONFIG)
        config["heatmap"].update({"seed_offset": 7, "base_load": 400, "amplitude": 0})
        engine = HeatmapEngine.from_config(config)
        self.assertEqual(engine.seed_offset, 7)
        self.assertAlmostEqual(engine.lookup("Mon", 7).value, 720.0)

    def test_invalid_params_raise(self):
        for key, value in [("base_load", 0), ("floor", -1), ("amplitude", -5)]:
            config = copy.deepcopy(DEFAULT_CONFIG)
            config["heatmap"][key] = value
            with self.assertRaises(ValueError):
                HeatmapEngine.from_config(config)


class TestPayload(unittest.TestCase):
    """Test the serialized payload."""

    def test_to_dict(self):
        engine = HeatmapEngine()
        payload = engine.to_dict()
        self.assertEqual(len(payload["cells"]), 168)
        self.assertEqual(payload["cells"][0]["day"], "Mon")
        self.assertEqual(payload["cells"][0]["hour"], 0)
        self.assertEqual(payload["seed_offset"], 12345)
        self.assertEqual(payload["min_value"], min(c.value for c in engine.grid))
        self.assertEqual(payload["max_value"], max(c.value for c in engine.grid))
        self.assertEqual(payload["pattern"], engine.pattern)
        self.assertIn("weekend_direction", payload["insights"])


if __name__ == '__main__':
    unittest.main()
