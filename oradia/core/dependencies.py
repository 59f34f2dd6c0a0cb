# oradia/core/dependencies.py
import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from google import genai

from oradia.core.config import Settings, settings
from oradia.services.llm.llm_utils import NarrativeClient

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


@lru_cache
def _genai_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def get_narrative_client(settings: Settings = Depends(get_settings)) -> Optional[NarrativeClient]:
    """Generation client built from the injected settings, or None when no credential is configured."""
    logger.info(f"API key configured: {'yes' if settings.GEMINI_API_KEY else 'no'}")
    if not settings.GEMINI_API_KEY:
        return None
    return NarrativeClient(
        _genai_client(settings.GEMINI_API_KEY),
        model=settings.GEMINI_MODEL,
        temperature=settings.TEMPERATURE,
        max_output_tokens=settings.MAX_OUTPUT_TOKENS,
        timeout_seconds=settings.GENERATION_TIMEOUT_SECONDS,
    )
