"""Normalization, fuzzy category matching, loading, and the list builder."""

from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from wordchains.engine.scoring.scoring import categorize
from wordchains.models.categories import Category
from wordchains.models.lexicon import (
    Lexicon,
    LexiconLoader,
    build_word_list,
    default_words_dir,
    normalize,
    read_source,
    singularize,
    strip_corp_suffixes,
    write_word_list,
)

# -- normalization ------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Côte d'Ivoire", "cotedivoire"),
        ("Nike™", "nike"),
        ("Ben & Jerry's", "benjerrys"),
        ("  Ice-Cream ", "icecream"),
        ("Dr. Pepper®", "drpepper"),
    ],
)
def test_normalize(text: str, expected: str) -> None:
    assert normalize(text) == expected


@pytest.mark.parametrize(
    "word, expected",
    [("cherries", "cherry"), ("tomatoes", "tomato"), ("tacos", "taco"), ("egg", "egg")],
)
def test_singularize(word: str, expected: str) -> None:
    assert singularize(word) == expected


def test_strip_corp_suffixes() -> None:
    assert strip_corp_suffixes("Nike Inc.") == "Nike"
    assert strip_corp_suffixes("The Coca-Cola Company") == "Coca-Cola"
    assert strip_corp_suffixes("Coca") == "Coca"


# -- matching -----------------------------------------------------------------


@pytest.mark.parametrize(
    "category, word",
    [
        (Category.ANIMAL, "tiger"),
        (Category.ANIMAL, "Cats"),
        (Category.ANIMAL, "foxes"),
        (Category.COUNTRY, "chad"),
        (Category.COUNTRY, "cote divoire"),
        (Category.NAME, "ANNA"),
        (Category.FOOD, "tacos"),
        (Category.FOOD, "cherries"),
        (Category.FOOD, "icecream"),
        (Category.BRAND, "nike"),
        (Category.BRAND, "Coca-Cola Co."),
        (Category.BRAND, "kelloggs"),
        (Category.SCREEN, "titanic"),
    ],
)
def test_matches(lexicon: Lexicon, category: Category, word: str) -> None:
    assert lexicon.matches(category, word)
    assert category in categorize(word, lexicon)


def test_word_in_two_categories(lexicon: Lexicon) -> None:
    assert categorize("jaguar", lexicon) == {Category.ANIMAL, Category.BRAND}


def test_uncategorized_word(lexicon: Lexicon) -> None:
    assert categorize("table", lexicon) == set()
    assert lexicon.in_dictionary("table")
    assert lexicon.is_known("table")
    assert lexicon.is_known("Nepal")
    assert not lexicon.is_known("qwzx")


def test_screen_entries_without_name_are_skipped(lexicon: Lexicon) -> None:
    assert not lexicon.matches(Category.SCREEN, "ignored")
    assert len(lexicon.words(Category.SCREEN)) == 2


# -- starter words ------------------------------------------------------------


def test_starter_word_length(lexicon: Lexicon) -> None:
    rng = random.Random(3)
    for _ in range(20):
        word = lexicon.starter_word(rng)
        assert word is not None
        assert 4 <= len(word) <= 7
        assert word in lexicon.dictionary.raw


def test_starter_word_none_when_nothing_fits() -> None:
    assert Lexicon.from_sources({}).starter_word() is None
    short = Lexicon.from_sources({"dictionary": ["ox", "cat"]})
    assert short.starter_word(random.Random(1)) is None


# -- loading ------------------------------------------------------------------


def test_loader_degrades_on_missing_and_bad_files(tmp_path: Path) -> None:
    (tmp_path / "animals.json").write_text(json.dumps(["Cat", "Dog"]))
    (tmp_path / "countries.json").write_text("{not json")
    (tmp_path / "foods.json").write_text(json.dumps({"apple": 1}))

    lex = LexiconLoader(tmp_path).load()

    counts = lex.counts()
    assert counts["animal"] == 2
    assert counts["country"] == 0
    assert counts["food"] == 0
    assert counts["dictionary"] == 0
    assert lex.matches(Category.ANIMAL, "dogs")


def test_bundled_word_lists_load() -> None:
    lex = LexiconLoader(default_words_dir()).load()
    assert lex.counts()["dictionary"] > 0
    assert lex.matches(Category.COUNTRY, "cote divoire")
    assert categorize("jaguar", lex) >= {Category.ANIMAL, Category.BRAND}


# -- builder ------------------------------------------------------------------


def test_build_word_list_merges_text_and_json(tmp_path: Path) -> None:
    txt = tmp_path / "animals.txt"
    txt.write_text("Cat\ndog\n\n  cat  \n")
    js = tmp_path / "more.json"
    js.write_text(json.dumps(["Dog", {"name": "Emu"}, 42]))

    assert build_word_list([txt, js]) == ["cat", "dog", "emu"]


def test_read_source_rejects_non_array_json(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"words": []}))
    with pytest.raises(ValueError):
        read_source(bad)


def test_write_word_list(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "list.json"
    write_word_list(out, ["côte d'ivoire", "emu"])
    assert json.loads(out.read_text(encoding="utf-8")) == ["côte d'ivoire", "emu"]
