#!/usr/bin/env python3
# tests/test_simulation.py
import itertools
import unittest

from simulation import (impact_model, impact_energy_megatons, radii_for, Coordinate,
                        ScenarioParameters, DamageRadii)
from config import MIN_SEVERE_RADIUS_KM

DIAMETERS = [20, 50, 200, 800, 1500]
SPEEDS = [11, 19, 40, 72]
ANGLES = [0.01, 1, 15, 45, 75, 90]


class TestImpactModel(unittest.TestCase):
    def test_bands_are_ordered_and_positive(self):
        for d, v, a in itertools.product(DIAMETERS, SPEEDS, ANGLES):
            r = impact_model(d, v, a)
            self.assertGreater(r.severe_km, 0)
            self.assertLessEqual(r.severe_km, r.major_km)
            self.assertLessEqual(r.major_km, r.light_km)

    def test_monotonic_in_diameter_and_speed(self):
        for v, a in itertools.product(SPEEDS, ANGLES):
            prev = None
            for d in DIAMETERS:
                r = impact_model(d, v, a)
                if prev:
                    self.assertGreaterEqual(r.light_km, prev.light_km)
                    self.assertGreaterEqual(r.severe_km, prev.severe_km)
                prev = r
        for d, a in itertools.product(DIAMETERS, ANGLES):
            radii = [impact_model(d, v, a).major_km for v in SPEEDS]
            self.assertEqual(radii, sorted(radii))

    def test_shallower_angle_never_grows_radii(self):
        for d, v in itertools.product(DIAMETERS, SPEEDS):
            radii = [impact_model(d, v, a).severe_km for a in sorted(ANGLES, reverse=True)]
            self.assertEqual(radii, sorted(radii, reverse=True))

    def test_grazing_angle_hits_floor_not_zero(self):
        r = impact_model(20, 11, 1e-9)
        self.assertGreaterEqual(r.severe_km, MIN_SEVERE_RADIUS_KM)
        self.assertEqual(impact_model(200, 19, 1e-9), impact_model(200, 19, 0.5))

    def test_reference_scenario(self):
        r = impact_model(200, 19, 45)
        self.assertAlmostEqual(r.severe_km, 50.8, delta=0.5)
        self.assertAlmostEqual(r.major_km / r.severe_km, 2.2)
        self.assertAlmostEqual(r.light_km / r.severe_km, 4.0)

    def test_deterministic(self):
        self.assertEqual(impact_model(333, 27, 61), impact_model(333, 27, 61))

    def test_radii_for_parameters(self):
        p = ScenarioParameters(200, 19, 45, Coordinate(40.0, 29.0))
        self.assertEqual(radii_for(p), impact_model(200, 19, 45))

    def test_scaled(self):
        r = DamageRadii(10, 20, 40).scaled(0.5, 0.9)
        self.assertEqual(r, DamageRadii(5, 10, 36))


class TestEnergy(unittest.TestCase):
    def test_energy_megatons(self):
        p = ScenarioParameters(200, 19, 45, Coordinate(0, 0))
        # 3000 kg/m^3 sphere of 100 m radius at 19 km/s ~ 542 Mt
        self.assertAlmostEqual(impact_energy_megatons(p), 542.0, delta=2.0)

    def test_energy_grows_with_speed(self):
        slow = impact_energy_megatons(ScenarioParameters(200, 11, 45, Coordinate(0, 0)))
        fast = impact_energy_megatons(ScenarioParameters(200, 22, 45, Coordinate(0, 0)))
        self.assertAlmostEqual(fast / slow, 4.0)


if __name__ == '__main__':
    unittest.main()
