import logging
from typing import Any

from pokerai.actions import encode_action
from pokerai.policy import DecisionPolicy, decide
from pokerai.sim import GameSimulator, SingleGameSimulator
from pokerai.state_decoder import decode_state
from pokerai.types import Action, GameState, HandEvaluator, SimulationOutcome

from .coordinator import EngineConfig, MonteCarloEstimator

logger = logging.getLogger(__name__)


class NoGameStateError(RuntimeError):
    """Raised when a decision is requested before any game state was loaded."""


class PokerAI:
    """
    Decision engine of the poker agent.

    One decision cycle: `update_state` with the server's view of the hand,
    check `is_my_turn`, then `compute_decision` runs the Monte Carlo workers
    and maps the estimated win probability to an action.

    `compute_decision` does not check whose turn it is; callers must.
    """

    def __init__(
        self,
        cfg: EngineConfig,
        evaluator: HandEvaluator | None = None,
        *,
        policy: DecisionPolicy = decide,
        simulate: GameSimulator | None = None,
    ) -> None:
        if simulate is None:
            if evaluator is None:
                raise ValueError("Either an evaluator or a simulate callable is required")
            simulate = SingleGameSimulator(evaluator)

        self.cfg = cfg
        self.policy = policy
        self.estimator = MonteCarloEstimator(cfg, simulate)

        self._state: GameState | None = None
        self._action = Action.UNSET
        self._last_outcome: SimulationOutcome | None = None

    @property
    def state(self) -> GameState | None:
        return self._state

    @property
    def action(self) -> Action:
        return self._action

    @property
    def last_outcome(self) -> SimulationOutcome | None:
        return self._last_outcome

    def update_state(self, raw_state: Any) -> GameState:
        # Decode first so a failure leaves the previous state and action intact.
        state = decode_state(raw_state)
        self._state = state
        self._action = Action.UNSET
        return state

    def is_my_turn(self) -> bool:
        return self._state is not None and self._state.my_turn

    def compute_decision(self) -> Action:
        if self._state is None:
            raise NoGameStateError("No game state loaded; call update_state first")

        outcome = self.estimator.estimate(self._state)
        win_probability = outcome.win_probability

        logger.debug("Simulated %d games.", outcome.games_played)
        logger.debug("Win probability: %f", win_probability)

        self._last_outcome = outcome
        self._action = self.policy(win_probability, self._state.stack)
        return self._action

    def describe(self, action: Action | None = None) -> str:
        return encode_action(self._action if action is None else action)
