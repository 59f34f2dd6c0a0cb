# oradia/services/report_services.py
import re
from typing import List, Optional

from oradia.models.draw_models import Draw, Family, NarrativeFragments
from oradia.models.symbols import PLACEHOLDER

MIN_SYNTHESIS_CHARS = 80
MIN_NOTE_CHARS = 20

GATEWAY_MARKER = "— carte passerelle :"
COSMOS_MEMORY_HEADING = "Carte Mémoires Cosmos :"
NOTES_HEADING = "Notes des familles :"
SYNTHESIS_HEADING = "Synthèse du tirage :"

_WHITESPACE_RE = re.compile(r"\s+")


def _clean(text: Optional[str]) -> str:
    """Collapse whitespace so a fragment can never break a report line."""
    if not isinstance(text, str):
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def fallback_synthesis(intention: str) -> str:
    if intention == PLACEHOLDER:
        return (
            "Les cartes de ce tirage dessinent un mouvement d'ensemble : accueillez chaque famille "
            "comme une étape, et laissez la Mémoire Cosmos éclairer le passage de l'une à l'autre."
        )
    return (
        f"Les cartes de ce tirage dessinent un mouvement d'ensemble autour de votre intention « {intention} » : "
        "accueillez chaque famille comme une étape, et laissez la Mémoire Cosmos éclairer le passage."
    )


def fallback_note(family: Family) -> str:
    return f"{family.card} invite à écouter ce que la famille {family.label} dit de votre intention."


def render_family_line(index: int, family: Family, label_width: int, gateway_sentence: str = "") -> str:
    line = f"Ligne {index} – {family.label.ljust(label_width)} : {family.card} ({family.fixed_polarity.meaning})"
    if family.gateway and gateway_sentence:
        line += f" {GATEWAY_MARKER} {gateway_sentence}"
    return line


def compose_report(draw: Draw, fragments: Optional[NarrativeFragments] = None) -> str:
    """
    Render the final report. Section order never changes:
    header, optional intro, family lines, Cosmos Memory, optional notes, synthesis.
    """
    fragments = fragments or NarrativeFragments()
    spread = draw.spread
    lines: List[str] = [spread.header]

    intro = _clean(fragments.intro)
    if intro:
        lines.append(intro)

    notes: List[str] = []
    has_notes = False
    for index, family in enumerate(draw.families, start=1):
        fragment = fragments.for_family(family.definition)
        gateway_sentence = _clean(fragment.gateway) if fragment else ""
        lines.append(render_family_line(index, family, spread.label_width, gateway_sentence))

        note = _clean(fragment.note) if fragment else ""
        has_notes = has_notes or bool(note)
        notes.append(f"- {family.label} : {note if len(note) >= MIN_NOTE_CHARS else fallback_note(family)}")

    lines.append(COSMOS_MEMORY_HEADING)
    lines.append(draw.cosmos_memory)

    if has_notes:
        lines.append(NOTES_HEADING)
        lines.extend(notes)

    synthesis = (fragments.synthesis or "").strip()
    if len(synthesis) < MIN_SYNTHESIS_CHARS:
        synthesis = fallback_synthesis(draw.intention)
    lines.append(SYNTHESIS_HEADING)
    lines.append(synthesis)

    return "\n".join(lines)


def forward_full_text(raw_text: str) -> str:
    """Full-text mode: the generation service already produced the whole report."""
    return raw_text.strip()
