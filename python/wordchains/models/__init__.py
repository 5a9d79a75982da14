from wordchains.models.categories import MAIN, Category, PowerKey
from wordchains.models.lexicon import Lexicon, LexiconLoader
from wordchains.models.mission import Mission, MissionKind
from wordchains.models.stats import RunStats, RunSummary, StatsStore

__all__ = [
    "MAIN",
    "Category",
    "Lexicon",
    "LexiconLoader",
    "Mission",
    "MissionKind",
    "PowerKey",
    "RunStats",
    "RunSummary",
    "StatsStore",
]
