"""Domain models for 4:6 pour schedules and saved recipes."""

from dataclasses import dataclass
from enum import Enum


class FlavorProfile(str, Enum):
    """How the first 40% of the water is split across two pours."""

    ACIDITY = "acidity"
    BALANCED = "balanced"
    SWEETNESS = "sweetness"

    @property
    def label(self) -> str:
        """Display label used by the brewing UI."""
        return _FLAVOR_LABELS[self]

    @classmethod
    def parse(cls, value: "str | FlavorProfile") -> "FlavorProfile":
        """Parse a wire value case-insensitively."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class IntensityProfile(str, Enum):
    """How the last 60% of the water is split across one to three pours."""

    SOFT = "soft"
    MEDIUM = "medium"
    STRONG = "strong"

    @property
    def label(self) -> str:
        """Display label used by the brewing UI."""
        return _INTENSITY_LABELS[self]

    @property
    def step_count(self) -> int:
        """Number of pours the intensity phase uses."""
        return _INTENSITY_STEPS[self]

    @classmethod
    def parse(cls, value: "str | IntensityProfile") -> "IntensityProfile":
        """Parse a wire value case-insensitively."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class PourCategory(str, Enum):
    """Phase a pour belongs to."""

    FLAVOR = "Flavor"
    INTENSITY = "Intensity"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_FLAVOR_LABELS = {
    FlavorProfile.ACIDITY: "Ácido",
    FlavorProfile.BALANCED: "Equilibrado",
    FlavorProfile.SWEETNESS: "Doce",
}

_INTENSITY_LABELS = {
    IntensityProfile.SOFT: "Suave",
    IntensityProfile.MEDIUM: "Médio",
    IntensityProfile.STRONG: "Forte",
}

_INTENSITY_STEPS = {
    IntensityProfile.SOFT: 1,
    IntensityProfile.MEDIUM: 2,
    IntensityProfile.STRONG: 3,
}

_CATEGORY_LABELS = {
    PourCategory.FLAVOR: "Sabor",
    PourCategory.INTENSITY: "Intensidade",
}


@dataclass(frozen=True)
class PourStep:
    """Single pour in a schedule; index is 1-based."""

    index: int
    category: PourCategory
    mass_grams: int
    cumulative_mass_grams: int


@dataclass(frozen=True)
class PourSchedule:
    """Pour-by-pour water plan computed for one brew."""

    coffee_mass_grams: int
    total_water_grams: int
    flavor: FlavorProfile
    intensity: IntensityProfile
    steps: tuple[PourStep, ...]

    @property
    def poured_water_grams(self) -> int:
        """Water actually poured; may drift from the total by rounding."""
        if not self.steps:
            return 0
        return self.steps[-1].cumulative_mass_grams


@dataclass(frozen=True)
class SavedRecipe:
    """User-named recipe kept in the favorites library."""

    id: str
    name: str
    coffee_mass_grams: int
    flavor: FlavorProfile
    intensity: IntensityProfile
    created_at_epoch_millis: int
