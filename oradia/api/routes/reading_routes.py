# oradia/api/routes/reading_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from oradia.core.config import Settings
from oradia.core.dependencies import get_narrative_client, get_settings
from oradia.core.errors import (
    IncompleteDrawError,
    MissingCredentialError,
    UpstreamUnavailableError,
)
from oradia.data.spreads import get_spread
from oradia.models.draw_models import AnalysisResponse, DrawRequest, ErrorResponse
from oradia.services.llm.llm_utils import NarrativeClient
from oradia.services.llm.narrative_strategies import get_strategy
from oradia.services.reading_services import analyse_draw_logic

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _analyse(
    spread_key: str,
    request: DrawRequest,
    settings: Settings,
    narrative_client: Optional[NarrativeClient],
):
    try:
        strategy = get_strategy(settings.NARRATIVE_MODE)
        text = await analyse_draw_logic(request, get_spread(spread_key), strategy, narrative_client)
        return AnalysisResponse(text=text)
    except IncompleteDrawError as e:
        return _error(400, str(e))
    except MissingCredentialError as e:
        logger.error(f"[{spread_key}] {e}")
        return _error(500, str(e))
    except UpstreamUnavailableError as e:
        return _error(503, str(e))
    except Exception as e:
        logger.exception(f"Erreur serveur [{spread_key}]: {e}")
        return _error(500, "Erreur serveur")


@router.post("/analyse-tore", response_model=AnalysisResponse, responses=ERROR_RESPONSES)
async def analyse_tore(
    request: DrawRequest,
    settings: Settings = Depends(get_settings),
    narrative_client: Optional[NarrativeClient] = Depends(get_narrative_client),
):
    """
    Analyse a six-family Tore draw and return the finished report.
    """
    return await _analyse("tore", request, settings, narrative_client)


@router.post("/analyse-traversee", response_model=AnalysisResponse, responses=ERROR_RESPONSES)
async def analyse_traversee(
    request: DrawRequest,
    settings: Settings = Depends(get_settings),
    narrative_client: Optional[NarrativeClient] = Depends(get_narrative_client),
):
    """
    Analyse a four-family Traversée draw and return the finished report.
    """
    return await _analyse("traversee", request, settings, narrative_client)


@router.get("/diag")
async def diag(settings: Settings = Depends(get_settings)):
    """Report whether the generation credential is configured, without exposing it."""
    api_key = settings.GEMINI_API_KEY
    return {
        "runtime": "python",
        "hasKey": bool(api_key),
        "keyPrefix": f"{api_key[:8]}..." if api_key else None,
        "model": settings.GEMINI_MODEL,
        "mode": settings.NARRATIVE_MODE,
    }
