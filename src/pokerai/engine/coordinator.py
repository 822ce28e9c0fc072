from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
import random
import time
from typing import Callable, Iterable

from pokerai.constants import DEFAULT_CHECK_EVERY
from pokerai.sim import GameSimulator, run_worker
from pokerai.types import GameState, SimulationOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    num_threads: int = 4
    timeout_ms: int = 1000
    # Games between deadline checks. Larger values read the clock less often
    # but let a worker run past the deadline by up to one full batch.
    check_every: int = DEFAULT_CHECK_EVERY
    seed: int | None = None
    max_games_per_worker: int | None = None

    def __post_init__(self) -> None:
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be non-negative, got {self.num_threads}")
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {self.timeout_ms}")
        if self.check_every < 1:
            raise ValueError(f"check_every must be positive, got {self.check_every}")
        if self.max_games_per_worker is not None and self.max_games_per_worker < 0:
            raise ValueError("max_games_per_worker must be non-negative")


def combine_outcomes(outcomes: Iterable[SimulationOutcome]) -> SimulationOutcome:
    total = SimulationOutcome()
    for outcome in outcomes:
        total = total + outcome
    return total


class MonteCarloEstimator:
    """
    Runs `num_threads` deadline-bounded workers over one game state.

    Each worker keeps a private tally and its own random source; tallies are
    summed only after every worker has joined, so nothing mutable is shared.
    """

    def __init__(
        self,
        cfg: EngineConfig,
        simulate: GameSimulator,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cfg = cfg
        self.simulate = simulate
        self.clock = clock
        self._seed_source = random.SystemRandom()

    def estimate(self, state: GameState) -> SimulationOutcome:
        if self.cfg.num_threads == 0:
            return SimulationOutcome()

        deadline = self.clock() + self.cfg.timeout_ms / 1000.0
        rngs = [random.Random(seed) for seed in self._worker_seeds()]

        logger.debug("Spawning %d Monte Carlo workers", self.cfg.num_threads)
        with ThreadPoolExecutor(
            max_workers=self.cfg.num_threads,
            thread_name_prefix="pokerai-mc",
        ) as executor:
            futures = [
                executor.submit(
                    run_worker,
                    state,
                    self.simulate,
                    deadline=deadline,
                    rng=rng,
                    check_every=self.cfg.check_every,
                    max_games=self.cfg.max_games_per_worker,
                    clock=self.clock,
                    worker_id=worker_id,
                )
                for worker_id, rng in enumerate(rngs)
            ]
        logger.debug("All Monte Carlo workers finished")

        return combine_outcomes(f.result() for f in futures)

    def _worker_seeds(self) -> list[int]:
        if self.cfg.seed is not None:
            return [self.cfg.seed + i for i in range(self.cfg.num_threads)]
        return [self._seed_source.getrandbits(63) for _ in range(self.cfg.num_threads)]
