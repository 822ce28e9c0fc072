from .coordinator import EngineConfig, MonteCarloEstimator, combine_outcomes
from .poker_ai import NoGameStateError, PokerAI

__all__ = ["EngineConfig", "MonteCarloEstimator", "NoGameStateError", "PokerAI", "combine_outcomes"]
