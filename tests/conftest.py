from datetime import datetime

import pytest

from urdle import create_app
from urdle.config import TestingConfig
from urdle.models.game import GameMode
from urdle.services import game_service as game_service_module
from urdle.services.catalog import Catalog
from urdle.services.session import GameSession
from urdle.services.storage import MemoryStore
from urdle.utils.clock import ManualClock

SAMPLE_RECORDS = [
    {"word": "cat", "definitions": ["A small cat-like pet.", "Feline friend.", "Has whiskers."], "quality": 3},
    {"word": "brat", "definitions": ["A spoiled child.", "An unruly kid."], "quality": 2},
    {"word": "eel", "definitions": ["A snake-like fish."], "quality": 1},
    {"word": "algorithm", "definitions": ["A step-by-step procedure.", "What decides your feed.", "A recipe for computers."],
     "example": "The algorithm keeps showing me cats."},
    {"word": "no cap", "definitions": ["No lie.", "For real.", "Honestly."], "quality": 2},
    {"word": "slay", "definitions": ["To do something very well."]},
]

# 2025-03-10 is day 68 after the epoch
TODAY = datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def catalog():
    return Catalog.from_records(SAMPLE_RECORDS)


@pytest.fixture
def clock():
    return ManualClock(TODAY)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_session(catalog, clock, store):
    def _make(word, mode=GameMode.WORD, **kwargs):
        kwargs.setdefault('clock', clock)
        kwargs.setdefault('store', store)
        return GameSession(catalog.word_by_name(word), catalog, mode=mode, **kwargs)
    return _make


@pytest.fixture
def game_service(catalog, clock, store):
    service = game_service_module.initialize_game_service(catalog, store=store, clock=clock)
    yield service
    game_service_module._game_service = None


@pytest.fixture
def client(game_service):
    app = create_app(TestingConfig)
    return app.test_client()


def type_letters(session, letters):
    for letter in letters:
        session.add_letter(letter)
