"""Recipe engine for the 4:6 pour-over method.

The first 40% of the water shapes flavor (two pours), the last 60% shapes
intensity (one to three pours). Every split is rounded on its own, so the
poured total can drift a gram or two from the nominal water total.
"""

import math

from four_six.domain.recipes import (
    FlavorProfile,
    IntensityProfile,
    PourCategory,
    PourSchedule,
    PourStep,
)

WATER_RATIO = 15
FLAVOR_SHARE = 0.4
INTENSITY_SHARE = 0.6
SUGGESTED_COFFEE_RANGE = (10, 50)

_FIRST_POUR_SHARE = {
    FlavorProfile.ACIDITY: 0.6,
    FlavorProfile.BALANCED: 0.5,
    FlavorProfile.SWEETNESS: 0.4,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def intensity_step_count(intensity: IntensityProfile) -> int:
    """Return how many pours the intensity phase uses."""
    return intensity.step_count


def compute_schedule(
    coffee_mass_grams: int,
    flavor: FlavorProfile,
    intensity: IntensityProfile,
) -> PourSchedule:
    """Compute the pour-by-pour schedule for a coffee dose."""
    total_water = round_half_up(coffee_mass_grams * WATER_RATIO)
    water40 = round_half_up(total_water * FLAVOR_SHARE)
    water60 = round_half_up(total_water * INTENSITY_SHARE)

    masses = [
        (PourCategory.FLAVOR, mass) for mass in _split_flavor(water40, flavor)
    ]
    masses.extend(
        (PourCategory.INTENSITY, mass) for mass in _split_intensity(water60, intensity)
    )

    steps: list[PourStep] = []
    cumulative = 0
    for position, (category, mass) in enumerate(masses, start=1):
        cumulative += mass
        steps.append(
            PourStep(
                index=position,
                category=category,
                mass_grams=mass,
                cumulative_mass_grams=cumulative,
            )
        )

    return PourSchedule(
        coffee_mass_grams=coffee_mass_grams,
        total_water_grams=total_water,
        flavor=flavor,
        intensity=intensity,
        steps=tuple(steps),
    )


def _split_flavor(water40: int, flavor: FlavorProfile) -> list[int]:
    first = round_half_up(water40 * _FIRST_POUR_SHARE[flavor])
    return [first, water40 - first]


def _split_intensity(water60: int, intensity: IntensityProfile) -> list[int]:
    if intensity is IntensityProfile.SOFT:
        return [water60]
    if intensity is IntensityProfile.MEDIUM:
        half = round_half_up(water60 / 2)
        return [half, water60 - half]
    third = round_half_up(water60 / 3)
    return [third, third, water60 - third * 2]


def format_clock(total_seconds: int) -> str:
    """Format seconds as a zero-padded MM:SS string."""
    minutes, seconds = divmod(max(total_seconds, 0), 60)
    return f"{minutes:02d}:{seconds:02d}"
