import logging
from typing import List

from fastapi import FastAPI
from fastapi import HTTPException
from fastapi.middleware.cors import CORSMiddleware

from api.schema import CropInfo, PredictionInput, PredictionOutput
from cropyield.config import API_DESCRIPTION, API_TITLE, API_VERSION, CORS_ORIGINS, setup_logging
from cropyield.formulas import CROP_MODELS, Management
from cropyield.predictor import predict, required_fields

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, version=API_VERSION)

# Enable CORS so the browser form can call the API directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def home():
    return {"message": "Crop Yield Prediction API is running"}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/crops", response_model=List[CropInfo])
def list_crops():
    crops = []
    for kind, model in CROP_MODELS.items():
        crops.append(
            CropInfo(
                crop=kind.value,
                name=model.name,
                required_fields=required_fields(kind),
                management_options=[m.value for m in Management] if model.needs_management else None,
            )
        )
    return crops


@app.post("/predict", response_model=PredictionOutput)
def predict_yield(data: PredictionInput):
    input_dict = data.model_dump(exclude={"crop"})
    outcome = predict(data.crop, input_dict)

    if not outcome.ok:
        raise HTTPException(status_code=400, detail=outcome.error.message)

    result = outcome.result
    return PredictionOutput(
        crop=result.crop.value,
        predicted_yield_quintals=result.value,
        label=result.label,
        management=result.management.value if result.management else None,
        result=result.text,
    )
