"""Shared fixtures: a small hand-built lexicon and engines wired to it."""

from __future__ import annotations

import random

import pytest

from wordchains.engine.gameplay.game import GameEngine
from wordchains.models.lexicon import Lexicon

# "jaguar" is deliberately both an animal and a brand.
SOURCES: dict[str, list[object]] = {
    "dictionary": [
        "tiger", "rabbit", "tart", "table", "eagle", "toast", "stats",
        "level", "apple", "elbow", "window", "water", "radar", "trout",
    ],
    "animal": ["cat", "tiger", "eagle", "jaguar", "rat", "trout", "rabbit", "ox", "fox"],
    "country": ["Chad", "India", "Nepal", "Togo", "Iran", "Angola", "Côte d'Ivoire"],
    "name": ["Anna", "Otto", "Bob", "Tom"],
    "food": ["apple", "taco", "cherry", "egg", "tomato", "ice cream"],
    "brand": ["Nike Inc.", "Jaguar", "Kellogg's", "The Coca-Cola Company"],
    "screen": [{"name": "Titanic"}, {"name": "Up"}, {"title": "ignored"}],
}


@pytest.fixture
def lexicon() -> Lexicon:
    return Lexicon.from_sources(SOURCES)


@pytest.fixture
def engine(lexicon: Lexicon) -> GameEngine:
    """A started engine with no previous word, so any word opens the chain."""
    game = GameEngine(lexicon, rng=random.Random(0), now=lambda: 0.0)
    game.start()
    game.state.last_word = None
    return game
