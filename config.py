# config.py
"""
Defaults, slider ranges and model constants for the Impactor-2025 explorer.

Everything here is illustrative: the model is a toy and the numbers are
chosen to give readable results on a world map, not to match real impacts.
"""

from dataclasses import dataclass

ASTEROID_NAME = "Impactor-2025"


@dataclass(frozen=True)
class SliderRange:
    min_value: float
    max_value: float
    step: float


# Initial scenario (Istanbul-ish impact point)
DEFAULT_SCENARIO = {
    "lat": 40.0,
    "lng": 29.0,
    "diameter_m": 200.0,
    "speed_kms": 19.0,
    "angle_deg": 45.0,
}

DEFAULT_DEFLECTION = {"delta_v_mm_s": 2.0, "lead_years": 2.0}
DEFAULT_EVACUATION = {"radius_km": 30.0, "coverage_pct": 60.0}
DEFAULT_EXPLOSION = {"kind": "ground", "diameter_km": 50.0}

SLIDERS = {
    "diameter_m": SliderRange(20, 1500, 10),
    "speed_kms": SliderRange(11, 72, 1),
    "angle_deg": SliderRange(15, 90, 1),
    "delta_v_mm_s": SliderRange(0, 10, 1),
    "lead_years": SliderRange(0, 10, 1),
    "evac_radius_km": SliderRange(5, 150, 5),
    "evac_coverage_pct": SliderRange(0, 100, 5),
    "explosion_diameter_km": SliderRange(5, 300, 5),
}

ASTEROID_PRESETS = {
    ASTEROID_NAME: {"diameter_m": 340.0, "speed_kms": 21.0, "angle_deg": 52.0},
}

# ---------------- Impact model -----------------
ASTEROID_DENSITY_KG_M3 = 3000.0
RADIUS_SCALE_KM = 0.04          # severe radius per unit of (d^3 v^2 sin a)^(1/3)
MAJOR_TO_SEVERE = 2.2
LIGHT_TO_SEVERE = 4.0
MIN_SEVERE_RADIUS_KM = 0.5
MIN_ANGLE_DEG = 1.0

# ---------------- Exposure / population -----------------
EXPOSURE_MIN_RADIUS_KM = 200.0
EXPOSURE_POINT_COUNT = 4000
PEOPLE_PER_WEIGHT = 250.0
MAX_LETHALITY = 0.6

# ---------------- Explosions -----------------
EXPLOSION_TTL_MS = 6500
EXPLOSION_SWEEP_INTERVAL_S = 0.5
MAX_LIVE_EXPLOSIONS = 32

# ---------------- External data -----------------
COUNTRIES_GEOJSON_URL = "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson"
COUNTRIES_FETCH_TIMEOUT_S = 10
