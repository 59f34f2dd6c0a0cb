# oradia/services/llm/llm_utils.py
import asyncio
import logging
import re
import time
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors, types
from pydantic import BaseModel, ConfigDict, ValidationError

from oradia.core.errors import MalformedUpstreamResponseError, UpstreamUnavailableError
from oradia.models.draw_models import NarrativeFragments

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 25.0

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class NarrativeRequest(BaseModel):
    """Everything sent to the generation service for one draw."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    system_instruction: str
    prompt: str
    response_mime_type: str = "text/plain"
    response_schema: Optional[Any] = None


class NarrativeClient:
    """
    Single-shot access to the generation service. The genai client and every
    setting are passed in; nothing here reads the environment.
    """

    def __init__(
        self,
        client: genai.Client,
        model: str,
        temperature: float = 0.6,
        max_output_tokens: int = 1100,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.timeout_seconds = timeout_seconds

    def _config(self, request: NarrativeRequest) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type=request.response_mime_type,
            response_schema=request.response_schema,
        )

    async def generate(self, request: NarrativeRequest) -> str:
        """
        Run one generation call. The call is cancelled once the timeout elapses;
        there is no retry.
        """
        started = time.time()
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=request.prompt,
                    config=self._config(request),
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(f"Generation timed out after {self.timeout_seconds}s (model={self.model})")
            raise UpstreamUnavailableError("Analyse indisponible. Réessaie dans un instant.")
        except errors.APIError as e:
            logger.error(f"Generation API error (model={self.model}): {e}")
            raise UpstreamUnavailableError("Analyse indisponible. Réessaie dans un instant.") from e
        except httpx.HTTPError as e:
            logger.error(f"Generation transport error (model={self.model}): {e}")
            raise UpstreamUnavailableError("Analyse indisponible. Réessaie dans un instant.") from e

        text = (getattr(response, "text", None) or "").strip()
        logger.info(f"Generation finished in {time.time() - started:.2f}s (model={self.model}, {len(text)} chars)")
        if not text:
            raise UpstreamUnavailableError("Analyse indisponible. Réessaie dans un instant.")
        return text


def parse_fragments(raw_text: str) -> NarrativeFragments:
    """Validate the structured payload, tolerating a Markdown code fence around the JSON."""
    text = (raw_text or "").strip()
    match = _CODE_FENCE_RE.match(text)
    if match:
        text = match.group(1)
    try:
        return NarrativeFragments.model_validate_json(text)
    except ValidationError as e:
        raise MalformedUpstreamResponseError(f"Unparseable narrative fragments: {e.error_count()} error(s)") from e
