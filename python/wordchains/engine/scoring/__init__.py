from wordchains.engine.scoring.scoring import ScoringEngine, categorize, total_multiplier

__all__ = ["ScoringEngine", "categorize", "total_multiplier"]
