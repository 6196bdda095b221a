"""UnitAmount value object: a mass quantity held canonically in kilograms."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from mealbudget.utilities.constants import GRAMS_PER_KG
from mealbudget.utilities.numbers import ZERO, parse_decimal, plain

# Normalized unit -> factor to the canonical kilogram
MASS_UNITS = {
    "kg": Decimal(1),
    "kilo": Decimal(1),
    "kilogram": Decimal(1),
    "kilograms": Decimal(1),
    "g": Decimal(1) / GRAMS_PER_KG,
    "gram": Decimal(1) / GRAMS_PER_KG,
    "grams": Decimal(1) / GRAMS_PER_KG,
    "mg": Decimal(1) / (GRAMS_PER_KG * GRAMS_PER_KG),
    "milligram": Decimal(1) / (GRAMS_PER_KG * GRAMS_PER_KG),
    "milligrams": Decimal(1) / (GRAMS_PER_KG * GRAMS_PER_KG),
}


@dataclass(frozen=True)
class UnitAmount:
    kilograms: Decimal = ZERO

    def __post_init__(self):
        object.__setattr__(self, "kilograms", parse_decimal(self.kilograms))

    @classmethod
    def parse(cls, value: Any, unit: str = "kg") -> "UnitAmount":
        """Build from draft input in any known mass unit; bad numbers become zero."""
        factor = MASS_UNITS.get((unit or "kg").strip().lower())
        if factor is None:
            raise ValueError(f"Unsupported mass unit: {unit!r}")
        return cls(parse_decimal(value) * factor)

    @classmethod
    def from_grams(cls, grams: Any) -> "UnitAmount":
        return cls.parse(grams, "g")

    @property
    def grams(self) -> Decimal:
        return self.kilograms * GRAMS_PER_KG

    def is_zero(self) -> bool:
        return self.kilograms == 0

    def display(self) -> str:
        """Below 1 kg as whole grams, otherwise kilograms at their own precision."""
        if self.kilograms == 0:
            return ""
        if self.kilograms >= 1:
            return f"{plain(self.kilograms)} kg"
        grams = self.grams.quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return f"{grams} g"

    def __add__(self, other: "UnitAmount") -> "UnitAmount":
        if not isinstance(other, UnitAmount):
            return NotImplemented
        return UnitAmount(self.kilograms + other.kilograms)

    def __str__(self) -> str:
        return self.display() or "0 kg"

    __repr__ = __str__
