"""Word categories, power-up keys, and the tuning constants of the game."""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    NAME = "name"
    ANIMAL = "animal"
    COUNTRY = "country"
    FOOD = "food"
    BRAND = "brand"
    SCREEN = "screen"


class PowerKey(StrEnum):
    NAME = "name"
    ANIMAL = "animal"
    COUNTRY = "country"
    FOOD = "food"
    BRAND = "brand"
    SCREEN = "screen"
    SAME = "same"

    @classmethod
    def for_category(cls, category: Category) -> PowerKey:
        return cls(category.value)


# Owner of the mission track that is not tied to a category.
MAIN = "main"

CATEGORIES: tuple[Category, ...] = tuple(Category)
OWNERS: tuple[str, ...] = (MAIN, *CATEGORIES)

LABELS: dict[str, str] = {
    MAIN: "Main",
    Category.NAME: "Names",
    Category.ANIMAL: "Animals",
    Category.COUNTRY: "Countries",
    Category.FOOD: "Foods",
    Category.BRAND: "Brands",
    Category.SCREEN: "TV/Movies",
    PowerKey.SAME: "Same-Letter",
}

# -- scoring ------------------------------------------------------------------

NORMAL_BASE = 1.0
CHAIN_BASE: dict[Category, float] = {
    Category.NAME: 2.0,
    Category.ANIMAL: 3.0,
    Category.COUNTRY: 5.0,
    Category.FOOD: 2.5,
    Category.BRAND: 2.0,
    Category.SCREEN: 2.0,
}

CHAIN_STEP_GROWTH = 0.3
SAME_LETTER_GROWTH = 0.2
TRACK_COMPLETION_BONUS = 10

# -- run ----------------------------------------------------------------------

START_LIVES = 3
MAX_LIVES = 5
TURN_SECONDS = 30
RECENT_WORDS = 30
SWITCH_LINK_COST = 1.0

# -- power-ups ----------------------------------------------------------------

POWER_THRESHOLDS: dict[PowerKey, int] = {
    PowerKey.NAME: 10,
    PowerKey.ANIMAL: 10,
    PowerKey.COUNTRY: 10,
    PowerKey.FOOD: 5,
    PowerKey.BRAND: 5,
    PowerKey.SCREEN: 10,
    PowerKey.SAME: 10,
}

POWER_NAMES: dict[PowerKey, str] = {
    PowerKey.COUNTRY: "Nuke",
    PowerKey.NAME: "Freeze",
    PowerKey.ANIMAL: "Wild Surge",
    PowerKey.FOOD: "Extra Life",
    PowerKey.BRAND: "Sponsor Boost",
    PowerKey.SCREEN: "Montage",
    PowerKey.SAME: "Mirror Charm",
}

POWER_LINK_REWARD = 0.5
SURGE_BONUS = 20.0
SPONSOR_BONUS = 50.0
MIRROR_BONUS = 10.0
MONTAGE_SECONDS = 15
