# oradia/models/draw_models.py
from typing import Any, Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from oradia.data.spreads import FamilyDefinition, SpreadDefinition
from oradia.models.symbols import PLACEHOLDER, Symbol, canonical_form


class FamilyEntry(BaseModel):
    """One family as sent by the front end. Values are left raw until normalization."""
    model_config = ConfigDict(populate_by_name=True)

    card: Any = Field(default=None, validation_alias=AliasChoices("carte", "card"))
    polarity: Any = Field(default=None, validation_alias=AliasChoices("polarite", "polarité", "polarity"))
    piece: Any = Field(default=None, validation_alias=AliasChoices("piece", "pièce"))


class DrawRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    intention: Any = None
    families: Any = Field(
        default_factory=dict, validation_alias=AliasChoices("familles", "families")
    )
    cosmos_memory: Any = Field(
        default=None, validation_alias=AliasChoices("memoireCosmos", "cosmosMemory", "cosmos_memory")
    )


class Family(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: FamilyDefinition
    card: str
    fixed_polarity: Symbol
    drawn_piece: Symbol
    gateway: bool

    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def label(self) -> str:
        return self.definition.label

    @property
    def has_card(self) -> bool:
        return self.card != PLACEHOLDER


class Draw(BaseModel):
    model_config = ConfigDict(frozen=True)

    spread: SpreadDefinition
    intention: str
    families: Tuple[Family, ...]
    cosmos_memory: str

    @property
    def gateway_flags(self) -> Dict[str, bool]:
        return {family.key: family.gateway for family in self.families}


class FamilyFragment(BaseModel):
    family: str
    note: str = ""
    gateway: str = ""


class NarrativeFragments(BaseModel):
    """Variable prose returned by the generation service in structured mode."""
    intro: str = ""
    families: List[FamilyFragment] = Field(default_factory=list)
    synthesis: str = ""

    def for_family(self, definition: FamilyDefinition) -> Optional[FamilyFragment]:
        names = {canonical_form(definition.key), canonical_form(definition.label)}
        for fragment in self.families:
            if canonical_form(fragment.family.strip()) in names:
                return fragment
        return None


class AnalysisResponse(BaseModel):
    ok: bool = True
    text: str


class ErrorResponse(BaseModel):
    error: str
