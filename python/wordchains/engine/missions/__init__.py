from wordchains.engine.missions.missions import MissionEngine, MissionReport

__all__ = ["MissionEngine", "MissionReport"]
