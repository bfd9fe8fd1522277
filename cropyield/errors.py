from typing import Optional


class PredictionError(ValueError):
    """Base class for user-correctable prediction failures."""

    code = "prediction_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class MissingCrop(PredictionError):
    code = "missing_crop"

    def __init__(self, message: str = "Please select a crop."):
        super().__init__(message)


class UnknownCrop(PredictionError):
    code = "unknown_crop"

    def __init__(self, crop: str, message: str = "No formula defined for this crop."):
        super().__init__(message)
        self.crop = crop


class InvalidField(PredictionError):
    code = "invalid_field"

    def __init__(self, field: str, reason: str):
        super().__init__(reason, field=field)
        self.reason = reason


class MissingSelection(PredictionError):
    code = "missing_selection"

    def __init__(self, field: str, message: str):
        super().__init__(message, field=field)
