from .actions import encode_action, format_action
from .engine import EngineConfig, NoGameStateError, PokerAI
from .policy import decide
from .state_decoder import StateDecodeError, decode_state
from .types import Action, ActionType, GameState, SimulationOutcome

__all__ = [
    "Action",
    "ActionType",
    "EngineConfig",
    "GameState",
    "NoGameStateError",
    "PokerAI",
    "SimulationOutcome",
    "StateDecodeError",
    "decide",
    "decode_state",
    "encode_action",
    "format_action",
]
