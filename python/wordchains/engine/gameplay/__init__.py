from wordchains.engine.gameplay.game import GameEngine, Phase, RunReport, TurnResult

__all__ = ["GameEngine", "Phase", "RunReport", "TurnResult"]
