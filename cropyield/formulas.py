"""
Fixed regression formulas for each supported crop.

Each crop is a CropModel: the numeric fields it needs (in the order they are
validated), the intercept and coefficient terms of its linear formula, and for
Maize the multiplicative management factor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple


class CropKind(str, Enum):
    TUR = "tur"
    MAIZE = "maize"
    GRAM = "gram"


class Management(str, Enum):
    GOOD = "good"
    POOR = "poor"


@dataclass(frozen=True)
class FieldCheck:
    """One validation step: every field must be present and >0 (positive) or >=0."""

    fields: Tuple[str, ...]
    positive: bool
    message: str

    def accepts(self, value: float) -> bool:
        return value > 0 if self.positive else value >= 0


@dataclass(frozen=True)
class CropModel:
    kind: CropKind
    name: str
    checks: Tuple[FieldCheck, ...]
    intercept: float
    terms: Tuple[Tuple[str, float], ...]
    management_factors: Optional[Dict[Management, float]] = None

    @property
    def fields(self) -> List[str]:
        return [f for check in self.checks for f in check.fields]

    @property
    def needs_management(self) -> bool:
        return self.management_factors is not None

    def label(self, management: Optional[Management] = None) -> str:
        if management is None:
            return f" ({self.name})"
        return f" ({self.name}, {management.value.capitalize()} management)"


def _area(crop: str) -> FieldCheck:
    return FieldCheck(("area",), True, f"Enter a valid positive area for {crop}.")


def _rainfall(crop: str) -> FieldCheck:
    return FieldCheck(("rainfall",), False, f"Enter rainfall (mm) for {crop}.")


def _fertilizer(crop: str) -> FieldCheck:
    return FieldCheck(("fertilizer",), False, f"Enter fertilizers (kg) for {crop}.")


TUR = CropModel(
    kind=CropKind.TUR,
    name="Tur",
    checks=(_area("Tur"), _rainfall("Tur"), _fertilizer("Tur")),
    intercept=-3.32843850766629,
    terms=(
        ("rainfall", 0.00459239788361382),
        ("area", 4.33370044211268),
        ("fertilizer", 0.0763918341341603),
    ),
)

MAIZE = CropModel(
    kind=CropKind.MAIZE,
    name="Maize",
    checks=(_area("Maize"), _rainfall("Maize"), _fertilizer("Maize")),
    intercept=-23.81399768,
    terms=(
        ("rainfall", 0.039441256),
        ("area", 13.03528484),
        ("fertilizer", 0.031329566),
    ),
    management_factors={Management.GOOD: 1.0, Management.POOR: 0.75},
)

# Monthly rainfall is checked before area, matching the order of the Gram form.
GRAM = CropModel(
    kind=CropKind.GRAM,
    name="Gram",
    checks=(
        FieldCheck(
            ("rain_september", "rain_october", "rain_november"),
            False,
            "Enter rainfall for September, October, and November for Gram.",
        ),
        _area("Gram"),
        _fertilizer("Gram"),
    ),
    intercept=57.91029391,
    terms=(
        ("area", 9.450850118),
        ("rain_september", -0.577080551),
        ("rain_october", 0.069920447),
        ("rain_november", 0.278021178),
        ("fertilizer", -0.006839212),
    ),
)

CROP_MODELS: Dict[CropKind, CropModel] = {m.kind: m for m in (TUR, MAIZE, GRAM)}


def evaluate(model: CropModel, values: Mapping[str, float], management: Optional[Management] = None) -> float:
    """
    Evaluate the crop's formula on validated values, without clamping or rounding.
    Terms are summed left to right so results match the reference figures exactly.
    """
    total = model.intercept
    for field, coef in model.terms:
        total += coef * values[field]

    if model.needs_management:
        if management is None:
            raise ValueError(f"{model.name} formula needs a management selection")
        total = total * model.management_factors[management]

    return total
