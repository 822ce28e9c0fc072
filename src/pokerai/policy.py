import math
from typing import Callable

from .types import Action

DecisionPolicy = Callable[[float, int], Action]

BET_THRESHOLD = 0.5
CALL_THRESHOLD = 0.25


def decide(win_probability: float, stack: int) -> Action:
    """
    Threshold policy over the estimated win probability.

    - p > 0.5 bets floor(stack * p), never more than the stack
    - 0.25 < p <= 0.5 calls
    - otherwise folds
    """
    if win_probability > BET_THRESHOLD:
        amount = math.floor(stack * win_probability)
        return Action.bet(max(0, min(int(stack), amount)))
    if win_probability > CALL_THRESHOLD:
        return Action.call()
    return Action.fold()
