# simulation.py
"""
Impact model for the Impactor-2025 scenario explorer.

Notes:
 - All formulas are simplified toy approximations meant for demo purposes.
 - Units:
    diameter_m : meters
    speed_kms  : kilometers/second
    angle_deg  : degrees (90 vertical)
    lat/lng    : decimal degrees
    radii      : kilometers

Outputs:
 - DamageRadii (severe <= major <= light)
 - energy in megatons TNT (KPI only, does not feed the radii)
"""

import math
from dataclasses import dataclass

from config import (ASTEROID_DENSITY_KG_M3, RADIUS_SCALE_KM, MAJOR_TO_SEVERE,
                    LIGHT_TO_SEVERE, MIN_SEVERE_RADIUS_KM, MIN_ANGLE_DEG)

# constants
JOULES_PER_MEGATON_TNT = 4.184e15


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(frozen=True)
class ScenarioParameters:
    diameter_m: float
    speed_kms: float
    angle_deg: float
    impact: Coordinate


@dataclass(frozen=True)
class DamageRadii:
    """Concentric damage bands in km; severe is the innermost/strongest."""
    severe_km: float
    major_km: float
    light_km: float

    def scaled(self, blast_factor, light_factor):
        return DamageRadii(self.severe_km * blast_factor,
                           self.major_km * blast_factor,
                           self.light_km * light_factor)


def mass_from_diameter(diameter_m, density_kg_m3=ASTEROID_DENSITY_KG_M3):
    """Mass of a sphere (asteroid) in kg."""
    r = diameter_m / 2.0
    volume = (4.0/3.0) * math.pi * r**3
    return density_kg_m3 * volume


def kinetic_energy_joules(mass_kg, velocity_m_s):
    return 0.5 * mass_kg * velocity_m_s**2


def impact_energy_megatons(params: ScenarioParameters, density_kg_m3=ASTEROID_DENSITY_KG_M3):
    """Kinetic energy of the impactor in megatons TNT."""
    m = mass_from_diameter(params.diameter_m, density_kg_m3)
    return kinetic_energy_joules(m, params.speed_kms * 1000.0) / JOULES_PER_MEGATON_TNT


def impact_model(diameter_m, speed_kms, angle_deg) -> DamageRadii:
    """
    Toy scaling: every radius is proportional to (d^3 * v^2 * sin(angle))^(1/3),
    with fixed ratios between the bands.
    Shallow angles shrink the radii; the sine is floored at MIN_ANGLE_DEG and the
    severe radius at MIN_SEVERE_RADIUS_KM so nothing collapses to zero.
    """
    angle_factor = max(math.sin(math.radians(angle_deg)), math.sin(math.radians(MIN_ANGLE_DEG)))
    proxy = (diameter_m ** 3) * (speed_kms ** 2) * angle_factor
    severe = max(MIN_SEVERE_RADIUS_KM, RADIUS_SCALE_KM * proxy ** (1/3))
    return DamageRadii(severe_km=severe,
                       major_km=severe * MAJOR_TO_SEVERE,
                       light_km=severe * LIGHT_TO_SEVERE)


def radii_for(params: ScenarioParameters) -> DamageRadii:
    return impact_model(params.diameter_m, params.speed_kms, params.angle_deg)
