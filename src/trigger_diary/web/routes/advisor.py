"""Routes for AI-generated recommendations."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...exceptions import AnalysisError, ProviderNotConfiguredError, RecommendationError
from ...services.engine import TriggerEngine
from ..dependencies import get_engine

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/recommendations")
def recommendations(engine: TriggerEngine = Depends(get_engine)):
    """Three short recommendations based on the trigger analysis."""
    try:
        items = engine.recommend()
    except AnalysisError as e:
        return JSONResponse(content={"message": str(e)})
    except ProviderNotConfiguredError as e:
        return JSONResponse({"error": str(e)}, status_code=503)
    except RecommendationError as e:
        log.error("Recommendation failed: %s", e)
        return JSONResponse({"error": str(e)}, status_code=502)

    return JSONResponse({"recommendations": items})
