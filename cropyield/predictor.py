"""
Validation and computation of a single yield prediction.

predict() is the boundary used by the API and the batch scorer: it never raises
for bad user input and instead returns a PredictionOutcome carrying either the
result or the first validation error.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, model_validator

from cropyield.config import DECIMAL_PLACES, YIELD_UNIT
from cropyield.errors import InvalidField, MissingCrop, MissingSelection, PredictionError, UnknownCrop
from cropyield.formulas import CROP_MODELS, CropKind, CropModel, Management, evaluate

logger = logging.getLogger(__name__)

FIELD_ALIASES = {
    "rainSeptember": "rain_september",
    "rainOctober": "rain_october",
    "rainNovember": "rain_november",
}


class PredictionResult(BaseModel):
    crop: CropKind
    value: float
    label: str
    management: Optional[Management] = None
    text: str


class PredictionFailure(BaseModel):
    code: str
    message: str
    field: Optional[str] = None


class PredictionOutcome(BaseModel):
    result: Optional[PredictionResult] = None
    error: Optional[PredictionFailure] = None

    @model_validator(mode="after")
    def _result_or_error(self):
        if (self.result is None) == (self.error is None):
            raise ValueError("PredictionOutcome needs exactly one of result or error")
        return self

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def message(self) -> str:
        return self.result.text if self.result is not None else self.error.message


# -----------------------------
# Parsing
# -----------------------------
def parse_number(raw: Any) -> Optional[float]:
    """
    Parse a raw field value into a finite float.
    Returns None for absent, empty, non-numeric or non-finite input; never 0.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        text = raw.strip()
        if not text or "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError):
            return None

    return value if math.isfinite(value) else None


def parse_crop(raw: Any) -> CropKind:
    if isinstance(raw, CropKind):
        return raw
    if raw is None or not str(raw).strip():
        raise MissingCrop()
    try:
        return CropKind(str(raw).strip().lower())
    except ValueError:
        raise UnknownCrop(str(raw)) from None


def parse_management(raw: Any) -> Management:
    if isinstance(raw, Management):
        return raw
    if raw is None or not str(raw).strip():
        raise MissingSelection("management", "Select quality of management for Maize.")
    try:
        return Management(str(raw).strip().lower())
    except ValueError:
        raise InvalidField("management", "Quality of management for Maize must be Good or Poor.") from None


def normalize_fields(inputs: Mapping[str, Any]) -> Dict[str, Any]:
    return {FIELD_ALIASES.get(k, k): v for k, v in inputs.items()}


# -----------------------------
# Validation + post-processing
# -----------------------------
def validate_fields(model: CropModel, inputs: Mapping[str, Any]) -> Dict[str, float]:
    """Run the crop's checks in order; the first failing one is raised."""
    values = {}
    for check in model.checks:
        for field in check.fields:
            value = parse_number(inputs.get(field))
            if value is None or not check.accepts(value):
                raise InvalidField(field, check.message)
            values[field] = value
    return values


def round_yield(value: float) -> float:
    # half away from zero; callers pass the clamped (non-negative) value
    scale = 10 ** DECIMAL_PLACES
    return math.floor(value * scale + 0.5) / scale


def format_value(value: float) -> str:
    # integral values print without a fraction below 1e21, as a browser renders them
    if value.is_integer() and abs(value) < 1e21:
        return format(Decimal(repr(value)).to_integral_value(), "f")
    return repr(value)


def format_result(value: float, label: str) -> str:
    return f"{format_value(value)} {YIELD_UNIT} (approx.){label}"


def required_fields(crop: Any) -> List[str]:
    model = CROP_MODELS[parse_crop(crop)]
    fields = model.fields
    if model.needs_management:
        fields.append("management")
    return fields


def largest_term(model: CropModel, values: Mapping[str, float]) -> str:
    """Field whose formula term has the largest magnitude."""
    return max(model.terms, key=lambda term: abs(term[1] * values[term[0]]))[0]


# -----------------------------
# Prediction
# -----------------------------
def compute_prediction(crop: Any, inputs: Mapping[str, Any]) -> PredictionResult:
    """Like predict(), but raises PredictionError subclasses on invalid input."""
    kind = parse_crop(crop)
    model = CROP_MODELS[kind]
    fields = normalize_fields(inputs)

    values = validate_fields(model, fields)
    management = parse_management(fields.get("management")) if model.needs_management else None

    raw = evaluate(model, values, management)
    if not math.isfinite(raw * 10 ** DECIMAL_PLACES):
        field = largest_term(model, values)
        raise InvalidField(field, f"Value for {field} is too large to estimate a {model.name} yield.")

    value = round_yield(max(raw, 0.0))
    label = model.label(management)

    return PredictionResult(
        crop=kind,
        value=value,
        label=label,
        management=management,
        text=format_result(value, label),
    )


def predict(crop: Any, inputs: Optional[Mapping[str, Any]] = None) -> PredictionOutcome:
    try:
        result = compute_prediction(crop, inputs or {})
    except PredictionError as e:
        logger.info("Prediction rejected (%s): %s", e.code, e.message)
        return PredictionOutcome(error=PredictionFailure(code=e.code, message=e.message, field=e.field))

    logger.debug("Predicted %s", result.text)
    return PredictionOutcome(result=result)
