# oradia/data/spreads.py
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict


class FamilyDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str


class SpreadDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    subject: str
    families: Tuple[FamilyDefinition, ...]

    @property
    def header(self) -> str:
        return f"Votre {self.name}:"

    @property
    def label_width(self) -> int:
        return max(len(family.label) for family in self.families)


EMOTIONS = FamilyDefinition(key="emotions", label="ÉMOTIONS")
BESOINS = FamilyDefinition(key="besoins", label="BESOINS")
TRANSMUTATION = FamilyDefinition(key="transmutation", label="TRANSMUTATIONS")
ARCHETYPES = FamilyDefinition(key="archetypes", label="ARCHÉTYPES")
REVELATIONS = FamilyDefinition(key="revelations", label="RÉVÉLATIONS")
ACTIONS = FamilyDefinition(key="actions", label="ACTIONS")

COSMOS_MEMORY_LABEL = "MÉMOIRES COSMOS"

spreads: Dict[str, SpreadDefinition] = {
    "tore": SpreadDefinition(
        key="tore",
        name="Tirage du Tore",
        subject="le Tore",
        families=(EMOTIONS, BESOINS, TRANSMUTATION, ARCHETYPES, REVELATIONS, ACTIONS),
    ),
    "traversee": SpreadDefinition(
        key="traversee",
        name="Tirage de la Traversée",
        subject="la Traversée",
        families=(EMOTIONS, BESOINS, REVELATIONS, ACTIONS),
    ),
}


def get_spread(key: str) -> SpreadDefinition:
    try:
        return spreads[key]
    except KeyError:
        raise ValueError(f"Unsupported spread type: {key}")
