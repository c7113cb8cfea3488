#!/usr/bin/env python3
# tests/test_population.py
import unittest

import numpy as np

from population import (random_points_around, estimate_population, estimate_deaths,
                        lethality, max_weight, ExposurePoint)
from simulation import Coordinate
from config import MAX_LETHALITY

CENTER = Coordinate(40.0, 29.0)


class TestExposureSampler(unittest.TestCase):
    def setUp(self):
        self.field = random_points_around(CENTER, 200.0, 4000, rng=7)

    def test_fixed_count(self):
        self.assertEqual(len(self.field), 4000)
        self.assertEqual(len(list(self.field.points())), 4000)
        self.assertEqual(len(self.field.heat_data()), 4000)

    def test_points_inside_radius_with_positive_weight(self):
        self.assertTrue(np.all(self.field.distance_km <= 200.0))
        self.assertTrue(np.all(self.field.weight > 0))
        p = next(self.field.points())
        self.assertIsInstance(p, ExposurePoint)

    def test_denser_and_heavier_near_center(self):
        d, w = self.field.distance_km, self.field.weight
        inner, outer = d <= 100.0, d > 100.0
        self.assertGreater(inner.sum(), outer.sum())
        self.assertGreater(w[d <= 20.0].mean(), w[outer].mean())

    def test_seeded_generation_is_reproducible(self):
        again = random_points_around(CENTER, 200.0, 4000, rng=7)
        np.testing.assert_array_equal(self.field.lat, again.lat)
        np.testing.assert_array_equal(self.field.weight, again.weight)

    def test_new_generation_differs(self):
        other = random_points_around(CENTER, 200.0, 4000, rng=8)
        self.assertFalse(np.array_equal(self.field.lat, other.lat))

    def test_coordinates_stay_on_globe(self):
        polar = random_points_around(Coordinate(89.9, 179.9), 500.0, 2000, rng=1)
        self.assertTrue(np.all(polar.lat <= 90.0))
        self.assertTrue(np.all(polar.lat >= -90.0))
        self.assertTrue(np.all(polar.lng >= -180.0))
        self.assertTrue(np.all(polar.lng < 180.0))


class TestEstimator(unittest.TestCase):
    def setUp(self):
        self.field = random_points_around(CENTER, 200.0, 4000, rng=3)

    def test_population_grows_with_radius(self):
        pops = [estimate_population(self.field, r) for r in (0, 10, 50, 100, 200)]
        self.assertEqual(pops, sorted(pops))
        self.assertGreater(pops[-1], 0)
        self.assertIsInstance(pops[0], int)

    def test_deaths_never_exceed_population(self):
        for r in (0.5, 5, 50, 150, 500, 5000):
            pop = estimate_population(self.field, r)
            deaths = estimate_deaths(pop, r)
            self.assertGreaterEqual(deaths, 0)
            self.assertLessEqual(deaths, pop)
        self.assertLessEqual(estimate_deaths(1, 1e9), 1)

    def test_lethality_bounded_and_non_decreasing(self):
        values = [lethality(r) for r in (0, 1, 10, 100, 1000, 1e6)]
        self.assertEqual(values, sorted(values))
        self.assertLessEqual(max(values), MAX_LETHALITY)

    def test_pure(self):
        self.assertEqual(estimate_population(self.field, 42.0), estimate_population(self.field, 42.0))

    def test_max_weight(self):
        self.assertGreaterEqual(max_weight(self.field), 1.0)
        empty = random_points_around(CENTER, 200.0, 0, rng=1)
        self.assertEqual(max_weight(empty), 1.0)


if __name__ == '__main__':
    unittest.main()
