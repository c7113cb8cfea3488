# geo.py
"""Country boundaries and small display helpers."""

import logging

import requests

from config import COUNTRIES_GEOJSON_URL, COUNTRIES_FETCH_TIMEOUT_S
from simulation import Coordinate

logger = logging.getLogger(__name__)

# low -> high intensity
HEAT_STOPS = [
    (0.0, (59, 130, 246)),    # blue
    (0.35, (34, 197, 94)),    # green
    (0.65, (250, 204, 21)),   # yellow
    (1.0, (239, 68, 68)),     # red
]


def load_countries(url=COUNTRIES_GEOJSON_URL, timeout=COUNTRIES_FETCH_TIMEOUT_S):
    """
    Fetch country features from a GeoJSON FeatureCollection.
    Any failure (network, status, bad JSON) yields an empty list; the map simply
    renders without borders.
    """
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        return r.json().get('features') or []
    except (requests.RequestException, ValueError) as e:
        logger.warning("Could not load country boundaries from %s: %s", url, e)
        return []


def _outer_ring(geometry):
    gtype = geometry.get('type')
    coords = geometry.get('coordinates') or []
    if gtype == 'Polygon':
        return coords[0] if coords else []
    if gtype == 'MultiPolygon':
        # largest part by vertex count
        rings = [poly[0] for poly in coords if poly]
        return max(rings, key=len) if rings else []
    return []


def feature_centroid(feature) -> Coordinate:
    """Representative point of a country feature: mean of its main outer ring."""
    ring = _outer_ring(feature.get('geometry') or {})
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    if not ring:
        return Coordinate(0.0, 0.0)
    lng = sum(p[0] for p in ring) / len(ring)
    lat = sum(p[1] for p in ring) / len(ring)
    return Coordinate(lat=lat, lng=lng)


def feature_name(feature, default="Unknown"):
    return (feature.get('properties') or {}).get('name') or default


def color_scale(t):
    """Map intensity in [0, 1] to a hex color; out-of-range values are clamped."""
    t = max(0.0, min(1.0, t))
    for (t0, c0), (t1, c1) in zip(HEAT_STOPS, HEAT_STOPS[1:]):
        if t <= t1:
            f = (t - t0) / (t1 - t0)
            rgb = [round(a + (b - a) * f) for a, b in zip(c0, c1)]
            return '#{:02x}{:02x}{:02x}'.format(*rgb)
    return '#{:02x}{:02x}{:02x}'.format(*HEAT_STOPS[-1][1])


def format_compact(n):
    """1234 -> '1.2K', 5600000 -> '5.6M'."""
    sign = '-' if n < 0 else ''
    n = abs(n)
    for div, suffix in ((1e9, 'B'), (1e6, 'M'), (1e3, 'K')):
        if n >= div:
            return f"{sign}{n / div:.1f}{suffix}"
    return f"{sign}{n:.0f}"
