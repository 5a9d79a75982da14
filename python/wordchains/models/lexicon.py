"""Category word lists and the fuzzy matching rules applied to them.

Every category keeps two lookup sets: the lowercase display strings and a
normalized variant with accents, trademark symbols, and punctuation removed,
so ``"Côte d'Ivoire"`` and ``"cote divoire"`` hit the same entry.
"""

from __future__ import annotations

import json
import logging
import random
import re
import unicodedata
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from wordchains.models.categories import Category

logger = logging.getLogger(__name__)

DICTIONARY = "dictionary"

# File name of each source inside a word-list directory.
SOURCE_FILES: dict[str, str] = {
    DICTIONARY: "dictionary.json",
    Category.ANIMAL: "animals.json",
    Category.COUNTRY: "countries.json",
    Category.NAME: "names.json",
    Category.FOOD: "foods.json",
    Category.BRAND: "brands.json",
    Category.SCREEN: "screen.json",
}

INPUT_RE = re.compile(r"^[a-zA-Z][a-zA-Z\s'\-&.]*$")

_SYMBOLS_RE = re.compile(r"[™®©]")
_PUNCT_RE = re.compile(r"[\s'\-&.]")
_CORP_RE = re.compile(
    r"\b(company|co|corp|corporation|inc|incorporated|ltd|limited|llc|plc|ag|sa|gmbh)\b\.?",
    re.IGNORECASE,
)
_THE_RE = re.compile(r"\b(the)\b", re.IGNORECASE)


# -- normalization ------------------------------------------------------------


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(text: str) -> str:
    """Lowercase *text* and drop accents, ``™®©``, whitespace and ``'-&.``."""
    out = strip_diacritics(text).lower()
    out = _SYMBOLS_RE.sub("", out)
    return _PUNCT_RE.sub("", out)


def singularize(word: str) -> str:
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("es"):
        return word[:-2]
    if word.endswith("s"):
        return word[:-1]
    return word


def strip_corp_suffixes(text: str) -> str:
    """Remove corporate suffixes (``Inc.``, ``GmbH`` ...) and a leading "the"."""
    out = _CORP_RE.sub("", text)
    out = _THE_RE.sub("", out)
    return out.strip()


def display_strings(entries: Iterable[object]) -> list[str]:
    """Extract trimmed strings from a list of strings or ``{"name": ...}`` dicts."""
    out: list[str] = []
    for entry in entries:
        if isinstance(entry, str):
            value = entry
        elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
            value = entry["name"]
        else:
            continue
        value = value.strip()
        if value:
            out.append(value)
    return out


# -- word sets ----------------------------------------------------------------


@dataclass(frozen=True)
class WordSet:
    """Raw (lowercase) and normalized lookups for one source list."""

    raw: frozenset[str] = frozenset()
    norm: frozenset[str] = frozenset()

    @classmethod
    def build(cls, entries: Iterable[object], *, brand: bool = False) -> WordSet:
        words = display_strings(entries)
        if brand:
            normed = {normalize(strip_corp_suffixes(w)) for w in words}
        else:
            normed = {normalize(w) for w in words}
        normed.discard("")
        return cls(
            raw=frozenset(w.lower() for w in words),
            norm=frozenset(normed),
        )

    def __len__(self) -> int:
        return len(self.raw)


@dataclass(frozen=True)
class Lexicon:
    """Immutable collection of the dictionary plus the six category lists."""

    dictionary: WordSet = field(default_factory=WordSet)
    categories: Mapping[Category, WordSet] = field(default_factory=dict)

    @classmethod
    def from_sources(cls, sources: Mapping[str, Iterable[object] | None]) -> Lexicon:
        """Build a lexicon from ``{source_name: entries}``.

        Keys are ``"dictionary"`` or a :class:`Category` value.  A missing or
        ``None`` source becomes an empty set.
        """
        dictionary = WordSet.build(sources.get(DICTIONARY) or [])
        categories = {
            cat: WordSet.build(sources.get(cat) or [], brand=cat == Category.BRAND)
            for cat in Category
        }
        return cls(dictionary=dictionary, categories=categories)

    # -- matching -------------------------------------------------------------

    def words(self, category: Category) -> WordSet:
        return self.categories.get(category, WordSet())

    def in_dictionary(self, word: str) -> bool:
        lw = word.lower().strip()
        return lw in self.dictionary.raw or normalize(word) in self.dictionary.norm

    def matches(self, category: Category, word: str) -> bool:
        ws = self.words(category)
        lw = word.lower().strip()
        nw = normalize(word)

        if category == Category.ANIMAL:
            if lw in ws.raw:
                return True
            if lw.endswith("es") and lw[:-2] in ws.raw:
                return True
            if lw.endswith("s") and lw[:-1] in ws.raw:
                return True
            return nw in ws.norm

        if category == Category.FOOD:
            return (
                lw in ws.raw
                or nw in ws.norm
                or singularize(lw) in ws.raw
                or singularize(nw) in ws.norm
            )

        if category == Category.BRAND:
            return (
                lw in ws.raw
                or nw in ws.norm
                or normalize(strip_corp_suffixes(word)) in ws.norm
            )

        return lw in ws.raw or nw in ws.norm

    def is_known(self, word: str) -> bool:
        """True if *word* is in the dictionary or any category list."""
        if self.in_dictionary(word):
            return True
        return any(self.matches(cat, word) for cat in Category)

    # -- starter words --------------------------------------------------------

    def starter_word(
        self,
        rng: random.Random | None = None,
        min_len: int = 4,
        max_len: int = 7,
        attempts: int = 500,
    ) -> str | None:
        """Pick a random dictionary word of *min_len*..*max_len* letters."""
        pool = sorted(self.dictionary.raw)
        if not pool:
            return None
        rng = rng or random.Random()
        for _ in range(attempts):
            word = rng.choice(pool)
            if min_len <= len(word) <= max_len:
                return word
        return None

    def counts(self) -> dict[str, int]:
        out = {DICTIONARY: len(self.dictionary)}
        for cat in Category:
            out[cat.value] = len(self.words(cat))
        return out


# -- loading ------------------------------------------------------------------


class LexiconLoader:
    """Reads the seven JSON word lists from a directory.

    A source that is missing or malformed yields an empty set; loading never
    fails the run.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _read(self, name: str) -> list[object] | None:
        path = self.directory / SOURCE_FILES[name]
        if not path.exists():
            logger.warning("word list %s not found at %s", name, path)
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("could not read word list %s: %s", path, exc)
            return None
        if not isinstance(data, list):
            logger.warning("word list %s is not a JSON array", path)
            return None
        return data

    def load(self) -> Lexicon:
        lexicon = Lexicon.from_sources({name: self._read(name) for name in SOURCE_FILES})
        logger.info("loaded word lists from %s: %s", self.directory, lexicon.counts())
        return lexicon


def default_words_dir() -> Path:
    """Directory of the starter word lists bundled with the package."""
    return Path(__file__).resolve().parent.parent / "data"


# -- builder ------------------------------------------------------------------


def read_source(path: Path) -> list[str]:
    """Read one builder source: a JSON array, or plain text with one entry per line."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array, got {type(data).__name__}.")
        return display_strings(data)
    return [line.strip() for line in text.splitlines() if line.strip()]


def build_word_list(sources: Iterable[Path]) -> list[str]:
    """Merge *sources* into one lowercase, deduplicated, sorted list."""
    merged: set[str] = set()
    for path in sources:
        merged.update(entry.lower() for entry in read_source(path))
    return sorted(merged)


def write_word_list(path: Path, words: list[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(words, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
