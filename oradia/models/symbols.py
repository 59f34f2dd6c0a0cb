# oradia/models/symbols.py
import unicodedata
from enum import Enum
from typing import Dict, Tuple

PLACEHOLDER = "—"


class Symbol(str, Enum):
    FEMININE = "feminine"
    MASCULINE = "masculine"
    UNKNOWN = "unknown"

    @property
    def glyph(self) -> str:
        return SYMBOL_GLYPHS[self]

    @property
    def meaning(self) -> str:
        return SYMBOL_MEANINGS[self]

    @property
    def is_defined(self) -> bool:
        return self is not Symbol.UNKNOWN


SYMBOL_GLYPHS: Dict[Symbol, str] = {
    Symbol.FEMININE: "⚫",
    Symbol.MASCULINE: "🔺",
    Symbol.UNKNOWN: PLACEHOLDER,
}

SYMBOL_MEANINGS: Dict[Symbol, str] = {
    Symbol.FEMININE: "⚫ = énergie féminine",
    Symbol.MASCULINE: "🔺 = énergie masculine",
    Symbol.UNKNOWN: PLACEHOLDER,
}


def canonical_form(value: str) -> str:
    """NFD decomposition plus case folding; aliases and inputs are compared in this form."""
    return unicodedata.normalize("NFD", value).casefold()


# Order is the tie-break: a value matching several entries takes the first one.
_RAW_ALIASES: Tuple[Tuple[Symbol, Tuple[str, ...]], ...] = (
    (
        Symbol.FEMININE,
        (
            "⚫",  # U+26AB medium black circle
            "●",  # U+25CF black circle
            "⬤",  # U+2B24 black large circle
            "⏺",  # U+23FA black circle for record
            "🌑",  # U+1F311 new moon
            "féminin",
            "feminin",
        ),
    ),
    (
        Symbol.MASCULINE,
        (
            "🔺",  # U+1F53A up-pointing red triangle
            "▲",  # U+25B2 black up-pointing triangle
            "▴",  # U+25B4 small up-pointing triangle
            "🔼",  # U+1F53C up-pointing small red triangle
            "⏶",  # U+23F6 black medium up-pointing triangle
            "masculin",
        ),
    ),
)

SYMBOL_ALIASES: Tuple[Tuple[Symbol, Tuple[str, ...]], ...] = tuple(
    (symbol, tuple(canonical_form(alias) for alias in aliases))
    for symbol, aliases in _RAW_ALIASES
)
