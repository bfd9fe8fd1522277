import logging
import os

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

# API Configuration
API_TITLE = "Crop Yield Prediction API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Per-crop regression formulas for Tur, Maize and Gram yield (quintals)"

# Output
YIELD_UNIT = "quintals"
DECIMAL_PLACES = 2

# Deployment knobs
CORS_ORIGINS = [o.strip() for o in os.getenv("CROPYIELD_CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("CROPYIELD_LOG_LEVEL", "INFO").upper()


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
