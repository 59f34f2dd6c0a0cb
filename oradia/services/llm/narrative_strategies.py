# oradia/services/llm/narrative_strategies.py
import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Type

from google.genai import types

from oradia.core.errors import MalformedUpstreamResponseError
from oradia.data.spreads import COSMOS_MEMORY_LABEL, SpreadDefinition
from oradia.models.draw_models import Draw, NarrativeFragments
from oradia.services.llm.llm_utils import NarrativeRequest, parse_fragments
from oradia.services.report_services import (
    COSMOS_MEMORY_HEADING,
    GATEWAY_MARKER,
    SYNTHESIS_HEADING,
    compose_report,
    forward_full_text,
)

logger = logging.getLogger(__name__)

STYLE_RULES = (
    "Style Oradia : poétique, clair, ancré ; relie l'ensemble à l'intention. "
    "Langue : français. Pas de conseils médicaux ni financiers."
)

FRAGMENT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "intro": types.Schema(type=types.Type.STRING),
        "families": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "family": types.Schema(type=types.Type.STRING),
                    "note": types.Schema(type=types.Type.STRING),
                    "gateway": types.Schema(type=types.Type.STRING),
                },
                required=["family", "note"],
            ),
        ),
        "synthesis": types.Schema(type=types.Type.STRING),
    },
    required=["families", "synthesis"],
)


def describe_families(draw: Draw) -> str:
    """Normalized draw data, one line per family, as the generation service must read it."""
    lines = []
    for index, family in enumerate(draw.families, start=1):
        lines.append(
            f"- L{index} {family.label} (clé={family.key}) : nom=\"{family.card}\", "
            f"symbole=\"{family.fixed_polarity.glyph}\", piece=\"{family.drawn_piece.glyph}\", "
            f"passerelle={'true' if family.gateway else 'false'}"
        )
    lines.append(f"- L{len(draw.families) + 1} {COSMOS_MEMORY_LABEL} : \"{draw.cosmos_memory}\"")
    return "\n".join(lines)


def family_rows(spread: SpreadDefinition) -> str:
    return "\n".join(
        f"  L{index} — {family.label}" for index, family in enumerate(spread.families, start=1)
    )


class NarrativeStrategy(ABC):
    """Builds the generation request for a draw and turns the raw answer into the report text."""

    name = ""

    @abstractmethod
    def build_request(self, draw: Draw) -> NarrativeRequest:
        ...

    @abstractmethod
    def render(self, draw: Draw, raw_text: str) -> str:
        ...


class FullTextStrategy(NarrativeStrategy):
    """The generation service writes the whole report following the fixed template."""

    name = "full_text"

    def system_instruction(self, spread: SpreadDefinition) -> str:
        template_lines = [spread.header]
        for index, family in enumerate(spread.families, start=1):
            template_lines.append(
                f"Ligne {index} – {family.label.ljust(spread.label_width)} : "
                "{NomCarte} ({Symbole} = énergie féminine/masculine) "
                f"{{{GATEWAY_MARKER} … si passerelle=true}}"
            )
        template_lines += [COSMOS_MEMORY_HEADING, "{…}", SYNTHESIS_HEADING, "{…}"]
        template = "\n".join(template_lines)

        return f"""
Tu es l'analyste officiel d'Oradia pour le {spread.name}.

Règles :
- Polarité : affiche toujours le symbole (⚫ ou 🔺).
  ⚫ = énergie féminine, 🔺 = énergie masculine.
- "Carte passerelle" UNIQUEMENT si le drapeau fourni (passerelle=true) pour la ligne concernée.
- Familles (par lignes) :
{family_rows(spread)}
  L{len(spread.families) + 1} — {COSMOS_MEMORY_LABEL} (sans polarité propre).
- {STYLE_RULES}

Affichage final (sans préambule, sans visuel) :
{template}
""".strip()

    def build_request(self, draw: Draw) -> NarrativeRequest:
        prompt = f"""
Intention: {draw.intention}

Entrées normalisées (ne pas modifier les symboles) + flags passerelle:
{describe_families(draw)}

Consignes :
- Réutilise EXACTEMENT les symboles fournis (🔺, ⚫, ou '—' → alors pas de symbole).
- Ajoute "{GATEWAY_MARKER} …" UNIQUEMENT si passerelle=true sur la ligne correspondante.
""".strip()
        return NarrativeRequest(system_instruction=self.system_instruction(draw.spread), prompt=prompt)

    def render(self, draw: Draw, raw_text: str) -> str:
        return forward_full_text(raw_text)


class FragmentStrategy(NarrativeStrategy):
    """
    The generation service only writes prose: notes, gateway sentences, an intro
    and the synthesis. Card names, symbols, gateway logic and section order stay
    in compose_report.
    """

    name = "fragments"

    def system_instruction(self, spread: SpreadDefinition) -> str:
        return f"""
Tu es l'analyste officiel d'Oradia pour le {spread.name}.
Tu écris uniquement le texte variable du rapport ; la mise en page est faite ailleurs.

Réponds avec un objet JSON et rien d'autre :
{{
  "intro": "une phrase d'ouverture (facultative)",
  "families": [
    {{"family": "<clé de la famille>", "note": "1 à 2 phrases sur la carte", "gateway": "1 phrase, seulement si passerelle=true"}}
  ],
  "synthesis": "un paragraphe de 4 à 6 phrases reliant les familles et l'intention"
}}

Règles :
- Une entrée dans "families" par famille, avec la clé fournie.
- "gateway" reste vide si passerelle=false.
- Ne répète ni les symboles ni les numéros de ligne.
- {STYLE_RULES}
""".strip()

    def build_request(self, draw: Draw) -> NarrativeRequest:
        flagged = [family.key for family in draw.families if family.gateway]
        prompt = f"""
Intention: {draw.intention}

Tirage:
{describe_families(draw)}

Familles passerelles: {json.dumps(flagged, ensure_ascii=False)}
""".strip()
        return NarrativeRequest(
            system_instruction=self.system_instruction(draw.spread),
            prompt=prompt,
            response_mime_type="application/json",
            response_schema=FRAGMENT_SCHEMA,
        )

    def render(self, draw: Draw, raw_text: str) -> str:
        try:
            fragments = parse_fragments(raw_text)
        except MalformedUpstreamResponseError as e:
            logger.warning(f"Falling back to default narrative for every field: {e}")
            fragments = NarrativeFragments()
        return compose_report(draw, fragments)


strategies: Dict[str, Type[NarrativeStrategy]] = {
    FullTextStrategy.name: FullTextStrategy,
    FragmentStrategy.name: FragmentStrategy,
}


def get_strategy(mode: str) -> NarrativeStrategy:
    try:
        return strategies[mode]()
    except KeyError:
        raise ValueError(f"Unsupported narrative mode: {mode}")
