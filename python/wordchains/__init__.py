"""Word Chains: a word-chaining game engine with categories, missions and power-ups."""

__version__ = "0.1.0"
