# oradia/services/draw_services.py
import logging
from typing import Any

from oradia.core.errors import IncompleteDrawError
from oradia.data.spreads import FamilyDefinition, SpreadDefinition
from oradia.models.draw_models import Draw, DrawRequest, Family, FamilyEntry
from oradia.services.symbol_services import classify, is_gateway, safe

logger = logging.getLogger(__name__)


def normalize_family(definition: FamilyDefinition, raw: Any) -> Family:
    """Entries that are not JSON objects count as an empty family."""
    entry = FamilyEntry.model_validate(raw) if isinstance(raw, dict) else FamilyEntry()
    fixed_polarity = classify(entry.polarity)
    drawn_piece = classify(entry.piece)
    return Family(
        definition=definition,
        card=safe(entry.card),
        fixed_polarity=fixed_polarity,
        drawn_piece=drawn_piece,
        gateway=is_gateway(fixed_polarity, drawn_piece),
    )


def normalize_draw(request: DrawRequest, spread: SpreadDefinition) -> Draw:
    """
    Build a Draw for the given spread. Families are taken in spread order;
    entries for unknown family keys are ignored.
    """
    raw_families = request.families if isinstance(request.families, dict) else {}
    families = tuple(
        normalize_family(definition, raw_families.get(definition.key))
        for definition in spread.families
    )
    return Draw(
        spread=spread,
        intention=safe(request.intention),
        families=families,
        cosmos_memory=safe(request.cosmos_memory),
    )


def validate_draw(draw: Draw) -> Draw:
    """Reject a draw where any mandatory family has no card. The Cosmos Memory card is optional."""
    missing = [family.label for family in draw.families if not family.has_card]
    if missing:
        logger.warning(f"Incomplete {draw.spread.key} draw, missing: {missing}")
        raise IncompleteDrawError(draw.spread.subject, missing)
    return draw
