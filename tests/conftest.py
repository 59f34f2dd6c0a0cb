import asyncio
import copy
from types import SimpleNamespace

import pytest

TORE_PAYLOAD = {
    "intention": "Retrouver confiance dans mes choix",
    "familles": {
        "emotions": {"carte": "La Marée", "polarite": "⚫", "piece": "⚫"},
        "besoins": {"carte": "Le Refuge", "polarite": "🔺", "piece": "🔺"},
        "transmutation": {"carte": "Le Creuset", "polarite": "⚫", "piece": "⚫"},
        "archetypes": {"carte": "La Gardienne", "polarite": "🔺", "piece": "🔺"},
        "revelations": {"carte": "Le Miroir", "polarite": "⚫", "piece": "⚫"},
        "actions": {"carte": "Le Pas", "polarite": "🔺", "piece": "🔺"},
    },
    "memoireCosmos": "L'Étoile Ancienne",
}

TRAVERSEE_PAYLOAD = {
    "intention": "Traverser un changement de métier",
    "familles": {
        "emotions": {"carte": "La Marée", "polarite": "⚫", "piece": "⚫"},
        "besoins": {"carte": "Le Refuge", "polarite": "🔺", "piece": "🔺"},
        "revelations": {"carte": "Le Miroir", "polarite": "⚫", "piece": "⚫"},
        "actions": {"carte": "Le Pas", "polarite": "🔺", "piece": "🔺"},
    },
    "memoireCosmos": "L'Étoile Ancienne",
}


@pytest.fixture
def tore_payload():
    return copy.deepcopy(TORE_PAYLOAD)


@pytest.fixture
def traversee_payload():
    return copy.deepcopy(TRAVERSEE_PAYLOAD)


class FakeModels:
    """Stands in for genai's client.aio.models."""

    def __init__(self, text="", error=None, delay=0.0):
        self.text = text
        self.error = error
        self.delay = delay
        self.calls = []
        self.cancelled = False

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_genai_client(**kwargs):
    return SimpleNamespace(aio=SimpleNamespace(models=FakeModels(**kwargs)))


class FakeNarrativeClient:
    """Stands in for NarrativeClient at the route level."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.text
