from wordchains.engine.powerups.powerups import Charge, PowerUpEngine

__all__ = ["Charge", "PowerUpEngine"]
