import pytest

from helpers import FavoriteEvaluator, always_win
from pokerai import Action, ActionType, EngineConfig, NoGameStateError, PokerAI, StateDecodeError


def _fast_config(**overrides) -> EngineConfig:
    params = dict(num_threads=4, timeout_ms=60_000, max_games_per_worker=50, seed=7)
    params.update(overrides)
    return EngineConfig(**params)


def test_update_state_is_idempotent_and_resets_action(raw_flop_state) -> None:
    ai = PokerAI(_fast_config(), simulate=always_win)

    first = ai.update_state(raw_flop_state)
    ai.compute_decision()
    assert ai.action.is_set

    second = ai.update_state(raw_flop_state)
    assert second == first
    assert ai.state == first
    assert ai.action == Action.UNSET

    ai.update_state(raw_flop_state)
    assert ai.state == first
    assert ai.action == Action.UNSET


def test_decode_failure_keeps_previous_state(raw_flop_state) -> None:
    ai = PokerAI(_fast_config(), simulate=always_win)
    ai.update_state(raw_flop_state)
    decided = ai.compute_decision()

    with pytest.raises(StateDecodeError):
        ai.update_state(dict(raw_flop_state, hand=["Ah"]))

    assert ai.state is not None
    assert ai.state.hole_cards == (50, 45)
    assert ai.action == decided


def test_is_my_turn(raw_flop_state) -> None:
    ai = PokerAI(_fast_config(), simulate=always_win)
    assert not ai.is_my_turn()

    ai.update_state(dict(raw_flop_state, your_turn=False))
    assert not ai.is_my_turn()

    ai.update_state(raw_flop_state)
    assert ai.is_my_turn()


def test_sure_win_with_no_opponents_bets_whole_stack(raw_flop_state) -> None:
    raw = dict(raw_flop_state, num_opponents=0, stack=100)
    ai = PokerAI(_fast_config(), FavoriteEvaluator([50, 45]))
    ai.update_state(raw)

    action = ai.compute_decision()

    assert action == Action.bet(100)
    assert ai.describe() == "action_name=bet&amount=100"
    assert ai.last_outcome.games_played == 200
    assert ai.last_outcome.win_probability == 1.0


def test_evaluator_favoring_agent_bets_against_opponents(raw_flop_state) -> None:
    ai = PokerAI(_fast_config(), FavoriteEvaluator([50, 45]))
    ai.update_state(raw_flop_state)
    assert ai.compute_decision() == Action.bet(200)


def test_degenerate_cycle_folds(raw_flop_state) -> None:
    ai = PokerAI(EngineConfig(num_threads=0, timeout_ms=100), simulate=always_win)
    ai.update_state(raw_flop_state)

    assert ai.compute_decision() == Action.fold()
    assert ai.last_outcome.games_played == 0


def test_decision_requires_state() -> None:
    ai = PokerAI(_fast_config(), simulate=always_win)
    with pytest.raises(NoGameStateError):
        ai.compute_decision()
    with pytest.raises(ValueError):
        ai.describe()


def test_custom_policy_is_used(raw_flop_state) -> None:
    calls = []

    def always_call(win_probability: float, stack: int) -> Action:
        calls.append((win_probability, stack))
        return Action.call()

    ai = PokerAI(_fast_config(), simulate=always_win, policy=always_call)
    ai.update_state(raw_flop_state)

    assert ai.compute_decision().type == ActionType.CALL
    assert calls == [(1.0, 200)]


def test_requires_evaluator_or_simulator() -> None:
    with pytest.raises(ValueError):
        PokerAI(_fast_config())
