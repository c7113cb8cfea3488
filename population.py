# population.py
"""
Synthetic exposure field and casualty estimates.

The exposure field is a Monte-Carlo proxy for population around the impact
site: points get denser and heavier towards the center, like a city around its
downtown. It is not real geographic data.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from config import EXPOSURE_POINT_COUNT, PEOPLE_PER_WEIGHT, MAX_LETHALITY
from simulation import Coordinate

logger = logging.getLogger(__name__)

KM_PER_DEG_LAT = 111.32


@dataclass(frozen=True)
class ExposurePoint:
    lat: float
    lng: float
    weight: float
    distance_km: float


@dataclass(frozen=True, eq=False)
class ExposureField:
    """One generation of exposure points, stored column-wise."""
    center: Coordinate
    radius_km: float
    lat: np.ndarray
    lng: np.ndarray
    weight: np.ndarray
    distance_km: np.ndarray

    def __len__(self):
        return len(self.weight)

    def points(self):
        for la, ln, w, d in zip(self.lat, self.lng, self.weight, self.distance_km):
            yield ExposurePoint(float(la), float(ln), float(w), float(d))

    def heat_data(self):
        """[[lat, lng, weight], ...] as expected by folium's HeatMap."""
        return np.column_stack([self.lat, self.lng, self.weight]).tolist()


def random_points_around(center: Coordinate, radius_km, count=EXPOSURE_POINT_COUNT, rng=None) -> ExposureField:
    """
    Scatter `count` weighted points within `radius_km` of `center`.

    Distance is radius * u^2 so points cluster near the center; weight decays
    exponentially with distance and gets a random jitter in [0.5, 1.5).
    """
    if rng is None or isinstance(rng, int):
        rng = np.random.default_rng(rng)
    u = rng.random(count)
    distance = radius_km * u ** 2
    bearing = rng.uniform(0.0, 2.0 * math.pi, count)
    weight = (1.0 + 99.0 * np.exp(-4.0 * distance / radius_km)) * rng.uniform(0.5, 1.5, count)

    cos_lat = max(math.cos(math.radians(center.lat)), 0.01)
    lat = np.clip(center.lat + distance * np.cos(bearing) / KM_PER_DEG_LAT, -90.0, 90.0)
    lng = center.lng + distance * np.sin(bearing) / (KM_PER_DEG_LAT * cos_lat)
    lng = (lng + 180.0) % 360.0 - 180.0

    logger.debug("Generated %d exposure points within %.1f km of (%.3f, %.3f)",
                 count, radius_km, center.lat, center.lng)
    return ExposureField(center=center, radius_km=radius_km, lat=lat, lng=lng,
                         weight=weight, distance_km=distance)


def estimate_population(field: ExposureField, radius_km) -> int:
    """People living within `radius_km` of the field's center."""
    inside = field.distance_km <= radius_km
    return int(round(float(field.weight[inside].sum()) * PEOPLE_PER_WEIGHT))


def lethality(radius_km):
    """Fraction of the severe-zone population killed; grows with the zone size, capped."""
    return min(MAX_LETHALITY, 0.1 + 0.5 * radius_km / (radius_km + 50.0))


def estimate_deaths(population, radius_km) -> int:
    # lethality < 1 so rounding can never push deaths above population
    return int(round(population * lethality(radius_km)))


def max_weight(field: ExposureField):
    if len(field) == 0:
        return 1.0
    return max(1.0, float(field.weight.max()))
