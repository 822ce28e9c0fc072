import logging
import random
import time
from typing import Callable

from pokerai.constants import DEFAULT_CHECK_EVERY
from pokerai.types import GameState, SimulationOutcome

from .game import GameSimulator

logger = logging.getLogger(__name__)


def run_worker(
    state: GameState,
    simulate: GameSimulator,
    *,
    deadline: float,
    rng: random.Random,
    check_every: int = DEFAULT_CHECK_EVERY,
    max_games: int | None = None,
    clock: Callable[[], float] = time.monotonic,
    worker_id: int = 0,
) -> SimulationOutcome:
    """
    Simulate games until `deadline` (a `clock()` timestamp) is reached.

    The clock is read only every `check_every` games, starting before the
    first one, so the loop overshoots the deadline by at most one batch and
    may return 0/0 when the deadline has already passed.
    """
    if check_every < 1:
        raise ValueError("check_every must be positive")

    logger.debug("[worker %d] starting", worker_id)

    played = 0
    won = 0
    while True:
        if max_games is not None and played >= max_games:
            break
        if played % check_every == 0 and clock() >= deadline:
            break

        if simulate(state, rng):
            won += 1
        played += 1

    logger.debug("[worker %d] done (simulated %d games)", worker_id, played)
    return SimulationOutcome(games_played=played, games_won=won)
