from pydantic import AliasChoices, BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from typing import List, Optional, Union

# Raw form values, kept as sent (booleans included) so the predictor decides what is a valid number
RawValue = Optional[Union[StrictBool, StrictInt, StrictFloat, StrictStr]]


class PredictionInput(BaseModel):
    crop: Optional[str] = None  # "tur" | "maize" | "gram"

    # Tur / Maize / Gram
    area: RawValue = None
    fertilizer: RawValue = None

    # Tur / Maize
    rainfall: RawValue = None
    management: Optional[str] = None  # Maize only: "good" | "poor"

    # Gram monthly rainfall (mm)
    rain_september: RawValue = Field(default=None, validation_alias=AliasChoices("rain_september", "rainSeptember"))
    rain_october: RawValue = Field(default=None, validation_alias=AliasChoices("rain_october", "rainOctober"))
    rain_november: RawValue = Field(default=None, validation_alias=AliasChoices("rain_november", "rainNovember"))


class PredictionOutput(BaseModel):
    crop: str
    predicted_yield_quintals: float
    label: str
    management: Optional[str] = None
    result: str


class CropInfo(BaseModel):
    crop: str
    name: str
    required_fields: List[str]
    management_options: Optional[List[str]] = None
