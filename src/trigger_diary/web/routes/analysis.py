"""Routes for trigger analysis and flare-up prediction."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...exceptions import AnalysisError
from ...services.engine import TriggerEngine
from ..dependencies import get_engine

router = APIRouter()


@router.get("/triggers")
def trigger_analysis(engine: TriggerEngine = Depends(get_engine)):
    """Triggers observed on the day before each symptom spike."""
    try:
        analysis = engine.analyze_triggers()
    except AnalysisError as e:
        return JSONResponse(content={"message": str(e)})

    return JSONResponse(content=analysis.model_dump(mode="json"))


@router.get("/flareup")
def flareup_prediction(engine: TriggerEngine = Depends(get_engine)):
    """Heuristic flare-up risk from the most recent records."""
    try:
        prediction = engine.predict_flareup()
    except AnalysisError as e:
        return JSONResponse(content={"message": str(e)})

    if not prediction.has_probability:
        return JSONResponse(content={"message": prediction.message})

    return JSONResponse(content={
        "flareup_probability": prediction.flareup_probability,
        "flareup_predictions": prediction.flareup_predictions,
    })
