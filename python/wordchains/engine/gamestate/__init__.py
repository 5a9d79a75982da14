from wordchains.engine.gamestate.clock import RunClock
from wordchains.engine.gamestate.state import ChainState, RunState, WordEvent

__all__ = ["ChainState", "RunClock", "RunState", "WordEvent"]
