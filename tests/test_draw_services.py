import pytest

from oradia.core.errors import IncompleteDrawError
from oradia.data.spreads import get_spread
from oradia.models.draw_models import DrawRequest
from oradia.models.symbols import PLACEHOLDER, Symbol
from oradia.services.draw_services import normalize_draw, validate_draw


def test_normalize_draw_follows_spread_order(tore_payload):
    draw = normalize_draw(DrawRequest.model_validate(tore_payload), get_spread("tore"))

    assert [f.key for f in draw.families] == [
        "emotions", "besoins", "transmutation", "archetypes", "revelations", "actions",
    ]
    assert draw.intention == "Retrouver confiance dans mes choix"
    assert draw.cosmos_memory == "L'Étoile Ancienne"
    assert draw.families[0].fixed_polarity is Symbol.FEMININE
    assert draw.families[1].drawn_piece is Symbol.MASCULINE
    assert not any(draw.gateway_flags.values())


def test_normalize_draw_flags_gateway(tore_payload):
    tore_payload["familles"]["revelations"]["piece"] = "🔺"
    draw = normalize_draw(DrawRequest.model_validate(tore_payload), get_spread("tore"))

    assert draw.gateway_flags == {
        "emotions": False,
        "besoins": False,
        "transmutation": False,
        "archetypes": False,
        "revelations": True,
        "actions": False,
    }


def test_normalize_draw_defaults_blank_and_non_string_fields(traversee_payload):
    traversee_payload["intention"] = "   "
    traversee_payload["memoireCosmos"] = 12
    traversee_payload["familles"]["emotions"] = {"carte": "  La Marée  ", "polarite": None, "piece": 3}
    draw = normalize_draw(DrawRequest.model_validate(traversee_payload), get_spread("traversee"))

    emotions = draw.families[0]
    assert draw.intention == PLACEHOLDER
    assert draw.cosmos_memory == PLACEHOLDER
    assert emotions.card == "La Marée"
    assert emotions.fixed_polarity is Symbol.UNKNOWN
    assert emotions.drawn_piece is Symbol.UNKNOWN
    assert emotions.gateway is False


def test_normalize_draw_accepts_english_field_names():
    payload = {
        "intention": "x",
        "families": {"emotions": {"card": "A", "polarity": "⚫", "piece": "🔺"}},
        "cosmosMemory": "M",
    }
    draw = normalize_draw(DrawRequest.model_validate(payload), get_spread("traversee"))

    assert draw.families[0].card == "A"
    assert draw.families[0].gateway is True
    assert draw.cosmos_memory == "M"


def test_normalize_draw_ignores_families_outside_the_spread(traversee_payload):
    traversee_payload["familles"]["archetypes"] = {"carte": "La Gardienne"}
    draw = normalize_draw(DrawRequest.model_validate(traversee_payload), get_spread("traversee"))

    assert len(draw.families) == 4
    assert "archetypes" not in draw.gateway_flags


def test_validate_draw_accepts_complete_draw_without_cosmos_memory(tore_payload):
    tore_payload.pop("memoireCosmos")
    draw = normalize_draw(DrawRequest.model_validate(tore_payload), get_spread("tore"))

    assert validate_draw(draw) is draw


@pytest.mark.parametrize("family", ["emotions", "besoins", "transmutation", "archetypes", "revelations", "actions"])
def test_validate_draw_rejects_missing_family_card(tore_payload, family):
    tore_payload["familles"][family]["carte"] = "  "
    draw = normalize_draw(DrawRequest.model_validate(tore_payload), get_spread("tore"))

    with pytest.raises(IncompleteDrawError) as exc_info:
        validate_draw(draw)
    assert len(exc_info.value.missing) == 1
    assert "le Tore" in str(exc_info.value)


def test_validate_draw_rejects_absent_family(traversee_payload):
    del traversee_payload["familles"]["actions"]
    draw = normalize_draw(DrawRequest.model_validate(traversee_payload), get_spread("traversee"))

    with pytest.raises(IncompleteDrawError) as exc_info:
        validate_draw(draw)
    assert exc_info.value.missing == ["ACTIONS"]


def test_get_spread_rejects_unknown_key():
    with pytest.raises(ValueError):
        get_spread("celtic-cross")


@pytest.mark.parametrize("entry", ["La Marée", 3, ["La Marée", "⚫"], None])
def test_normalize_draw_treats_non_object_entry_as_empty(tore_payload, entry):
    tore_payload["familles"]["emotions"] = entry
    draw = normalize_draw(DrawRequest.model_validate(tore_payload), get_spread("tore"))

    assert draw.families[0].card == PLACEHOLDER
    assert draw.families[0].fixed_polarity is Symbol.UNKNOWN
    with pytest.raises(IncompleteDrawError) as exc_info:
        validate_draw(draw)
    assert exc_info.value.missing == ["ÉMOTIONS"]


def test_normalize_draw_treats_non_object_families_as_empty(tore_payload):
    tore_payload["familles"] = "émotions, besoins"
    draw = normalize_draw(DrawRequest.model_validate(tore_payload), get_spread("tore"))

    assert not any(family.has_card for family in draw.families)
