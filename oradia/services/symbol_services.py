# oradia/services/symbol_services.py
from typing import Any

from oradia.models.symbols import PLACEHOLDER, SYMBOL_ALIASES, Symbol, canonical_form


def classify(raw: Any) -> Symbol:
    """
    Map a free-form polarity token to a Symbol. Never raises: anything
    unrecognized, non-string or blank is Symbol.UNKNOWN.
    """
    if not isinstance(raw, str) or not raw.strip():
        return Symbol.UNKNOWN

    value = canonical_form(raw)
    for symbol, aliases in SYMBOL_ALIASES:
        if any(alias in value for alias in aliases):
            return symbol
    return Symbol.UNKNOWN


def safe(raw: Any) -> str:
    """Trimmed text, or the placeholder glyph for blank and non-string values."""
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return PLACEHOLDER


def is_gateway(fixed_polarity: Symbol, drawn_piece: Symbol) -> bool:
    return fixed_polarity.is_defined and drawn_piece.is_defined and fixed_polarity != drawn_piece
