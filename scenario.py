# scenario.py
"""
Scenario evaluation, A/B snapshots and their comparison.

Derivation chain for one evaluation:

    parameters -> base radii -> mitigated radii -> exposure field
               -> base outcome -> mitigated outcome

`evaluate_scenario` is pure given an exposure field. `ScenarioEngine` only adds
the invalidation rule for the exposure field: it is regenerated when, and only
when, its center or influence radius changes.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import numpy as np

from config import ASTEROID_NAME, EXPOSURE_MIN_RADIUS_KM, EXPOSURE_POINT_COUNT
from mitigation import MitigationState, NoMitigation, Outcome, apply_mitigation, mitigate_radii
from population import ExposureField, random_points_around, estimate_population, estimate_deaths
from simulation import ScenarioParameters, DamageRadii, radii_for, impact_energy_megatons

logger = logging.getLogger(__name__)

SNAPSHOT_LABELS = ("A", "B")


@dataclass(frozen=True)
class ScenarioResult:
    parameters: ScenarioParameters
    mitigation: MitigationState
    base: Outcome
    mitigated: Outcome
    energy_megatons: float
    exposure: ExposureField


def influence_radius(radii: DamageRadii):
    return max(EXPOSURE_MIN_RADIUS_KM, radii.light_km)


def base_outcome(radii: DamageRadii, exposure: ExposureField) -> Outcome:
    population = estimate_population(exposure, radii.severe_km)
    return Outcome(population=population,
                   deaths=estimate_deaths(population, radii.severe_km),
                   radii=radii)


def evaluate_scenario(params: ScenarioParameters, mitigation: MitigationState,
                      exposure: ExposureField) -> ScenarioResult:
    base_radii = radii_for(params)
    base = base_outcome(base_radii, exposure)
    return ScenarioResult(parameters=params,
                          mitigation=mitigation,
                          base=base,
                          mitigated=apply_mitigation(mitigation, base, exposure),
                          energy_megatons=impact_energy_megatons(params),
                          exposure=exposure)


class ScenarioEngine:
    """Keeps the last exposure field and reuses it while its inputs are unchanged."""

    def __init__(self, seed=None, point_count=EXPOSURE_POINT_COUNT):
        self._rng = np.random.default_rng(seed)
        self.point_count = point_count
        self._exposure = None
        self.regenerations = 0

    def exposure_for(self, params: ScenarioParameters, mitigation: MitigationState) -> ExposureField:
        radius = influence_radius(mitigate_radii(mitigation, radii_for(params)))
        current = self._exposure
        if current is None or current.center != params.impact or current.radius_km != radius:
            logger.debug("Regenerating exposure field (radius %.1f km)", radius)
            self._exposure = random_points_around(params.impact, radius, self.point_count, rng=self._rng)
            self.regenerations += 1
        return self._exposure

    def evaluate(self, params: ScenarioParameters, mitigation: MitigationState = None) -> ScenarioResult:
        mitigation = mitigation or NoMitigation()
        return evaluate_scenario(params, mitigation, self.exposure_for(params, mitigation))


# ---------------- Snapshots -----------------

@dataclass(frozen=True)
class ScenarioSnapshot:
    label: str
    asteroid_name: str
    parameters: ScenarioParameters
    mitigation: MitigationState
    base: Outcome
    mitigated: Outcome
    saved_at: datetime


@dataclass(frozen=True)
class ComparisonDelta:
    """B - A on the mitigated outcomes."""
    population: int
    deaths: int
    severe_km: float
    major_km: float
    light_km: float

    def __neg__(self):
        return ComparisonDelta(-self.population, -self.deaths,
                               -self.severe_km, -self.major_km, -self.light_km)


def compare(a: Optional[ScenarioSnapshot], b: Optional[ScenarioSnapshot]) -> Optional[ComparisonDelta]:
    """None until both snapshots exist."""
    if a is None or b is None:
        return None
    ma, mb = a.mitigated, b.mitigated
    return ComparisonDelta(population=mb.population - ma.population,
                           deaths=mb.deaths - ma.deaths,
                           severe_km=mb.radii.severe_km - ma.radii.severe_km,
                           major_km=mb.radii.major_km - ma.radii.major_km,
                           light_km=mb.radii.light_km - ma.radii.light_km)


class SnapshotStore:
    """Two slots, A and B; saving a label replaces its previous snapshot."""

    def __init__(self):
        self._slots = {}

    def save(self, label, result: ScenarioResult, asteroid_name=ASTEROID_NAME) -> ScenarioSnapshot:
        if label not in SNAPSHOT_LABELS:
            raise ValueError(f"Unknown snapshot label {label!r}; expected one of {SNAPSHOT_LABELS}")
        snap = ScenarioSnapshot(label=label,
                                asteroid_name=asteroid_name,
                                parameters=result.parameters,
                                mitigation=result.mitigation,
                                base=result.base,
                                mitigated=result.mitigated,
                                saved_at=datetime.now())
        self._slots[label] = snap
        logger.info("Saved scenario %s (deaths %d)", label, snap.mitigated.deaths)
        return snap

    def get(self, label) -> Optional[ScenarioSnapshot]:
        return self._slots.get(label)

    def delta(self) -> Optional[ComparisonDelta]:
        return compare(self.get("A"), self.get("B"))
