# mitigation.py
"""
Mitigation strategies and how they turn a base outcome into a mitigated one.

Exactly one strategy is active at a time:
 - NoMitigation : identity
 - Deflection   : shrinks the damage geometry, casualties are re-derived from it
 - Evacuation   : keeps the geometry, removes part of the losses in the severe zone
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from population import ExposureField, estimate_population, estimate_deaths
from simulation import DamageRadii

MAX_DEFLECTION_REDUCTION = 0.7
MAX_AVOIDABLE_LOSSES = 0.7


def clamp(x, lo, hi):
    return max(lo, min(hi, x))


@dataclass(frozen=True)
class Outcome:
    population: int
    deaths: int
    radii: DamageRadii


@dataclass(frozen=True)
class NoMitigation:
    mode: ClassVar[str] = "none"


@dataclass(frozen=True)
class Deflection:
    delta_v_mm_s: float
    lead_years: float
    mode: ClassVar[str] = "deflection"

    @property
    def reduction_factor(self):
        effectiveness = clamp((self.delta_v_mm_s / 2) * (self.lead_years / 2), 0, 3)
        return 1 - min(MAX_DEFLECTION_REDUCTION, 0.18 * effectiveness)


@dataclass(frozen=True)
class Evacuation:
    radius_km: float
    coverage_pct: float
    mode: ClassVar[str] = "evacuation"


MitigationState = Union[NoMitigation, Deflection, Evacuation]


def mitigation_from_mode(mode, delta_v_mm_s=0.0, lead_years=0.0,
                         evac_radius_km=0.0, evac_coverage_pct=0.0) -> MitigationState:
    """Build the state for a strategy selector value; unused fields are dropped."""
    if mode == Deflection.mode:
        return Deflection(delta_v_mm_s, lead_years)
    if mode == Evacuation.mode:
        return Evacuation(evac_radius_km, evac_coverage_pct)
    return NoMitigation()


def mitigate_radii(state: MitigationState, base: DamageRadii) -> DamageRadii:
    if isinstance(state, Deflection):
        factor = state.reduction_factor
        # thermal/light effects shrink less than blast effects
        return base.scaled(factor, 0.85 + 0.15 * factor)
    return base


def apply_mitigation(state: MitigationState, base: Outcome, exposure: ExposureField) -> Outcome:
    """Mitigated outcome for `state`; mitigated deaths never exceed base deaths."""
    if isinstance(state, Deflection):
        radii = mitigate_radii(state, base.radii)
        population = estimate_population(exposure, radii.severe_km)
        return Outcome(population=population,
                       deaths=estimate_deaths(population, radii.severe_km),
                       radii=radii)
    if isinstance(state, Evacuation):
        covered = clamp(state.coverage_pct / 100, 0, 1)
        overlap = clamp(state.radius_km / base.radii.severe_km, 0, 1)
        loss_reduction = MAX_AVOIDABLE_LOSSES * overlap * covered
        return Outcome(population=int(round(base.population * (1 - 0.3 * overlap * covered))),
                       deaths=int(round(base.deaths * (1 - loss_reduction))),
                       radii=base.radii)
    return base


def describe(state: MitigationState) -> str:
    if isinstance(state, Deflection):
        return (f"Deflection: Δv {state.delta_v_mm_s:g} mm/s, lead {state.lead_years:g} y "
                f"(radius x{state.reduction_factor:.2f})")
    if isinstance(state, Evacuation):
        return f"Evacuation: {state.radius_km:g} km, {state.coverage_pct:g}% coverage"
    return "None"
