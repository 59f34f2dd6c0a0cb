# oradia/services/reading_services.py
import logging
import time
from typing import Optional

from oradia.core.errors import MissingCredentialError
from oradia.data.spreads import SpreadDefinition
from oradia.models.draw_models import DrawRequest
from oradia.services.draw_services import normalize_draw, validate_draw
from oradia.services.llm.llm_utils import NarrativeClient
from oradia.services.llm.narrative_strategies import NarrativeStrategy

logger = logging.getLogger(__name__)


async def analyse_draw_logic(
    request: DrawRequest,
    spread: SpreadDefinition,
    strategy: NarrativeStrategy,
    narrative_client: Optional[NarrativeClient],
) -> str:
    """
    Turn one draw into its report: normalize, gate on completeness, build the
    narrative request, make the single generation call, then render.
    """
    request_received_time = time.time()
    logger.info(f"Starting {spread.key} analysis ({strategy.name} mode)")

    draw = validate_draw(normalize_draw(request, spread))
    logger.info(f"Gateway flags for {spread.key}: {draw.gateway_flags}")

    if narrative_client is None:
        raise MissingCredentialError()

    narrative_request = strategy.build_request(draw)
    logger.debug(narrative_request.prompt)

    raw_text = await narrative_client.generate(narrative_request)
    report = strategy.render(draw, raw_text)

    logger.info(f"Total {spread.key} analysis time: {time.time() - request_received_time:.4f} seconds")
    return report
