import random
import time

import pytest

from helpers import always_win
from pokerai.sim import run_worker


class FakeClock:
    """Reports `before` for the first `ticks` reads, then `after`."""

    def __init__(self, ticks: int, before: float = 0.0, after: float = 10.0) -> None:
        self.ticks = ticks
        self.before = before
        self.after = after
        self.reads = 0

    def __call__(self) -> float:
        self.reads += 1
        return self.before if self.reads <= self.ticks else self.after


def test_expired_deadline_reports_zero_games(flop_state) -> None:
    calls = []

    def simulate(state, rng) -> bool:
        calls.append(1)
        return True

    outcome = run_worker(flop_state, simulate, deadline=1.0, rng=random.Random(0), clock=FakeClock(0))

    assert outcome.games_played == 0
    assert outcome.games_won == 0
    assert outcome.win_probability == 0.0
    assert not calls


def test_clock_is_read_once_per_batch(flop_state) -> None:
    clock = FakeClock(ticks=3)

    outcome = run_worker(flop_state, always_win, deadline=1.0, rng=random.Random(0), check_every=10, clock=clock)

    assert outcome.games_played == 30
    assert outcome.games_won == 30
    assert clock.reads == 4


def test_tally_counts_wins_and_losses(flop_state) -> None:
    def alternate(state, rng) -> bool:
        return rng.random() < 0.5

    outcome = run_worker(flop_state, alternate, deadline=float("inf"), rng=random.Random(3), max_games=500)

    assert outcome.games_played == 500
    assert 0 < outcome.games_won < 500


def test_max_games_cap(flop_state) -> None:
    outcome = run_worker(flop_state, always_win, deadline=float("inf"), rng=random.Random(0), max_games=7)
    assert outcome.games_played == 7


def test_invalid_check_every(flop_state) -> None:
    with pytest.raises(ValueError):
        run_worker(flop_state, always_win, deadline=time.monotonic(), rng=random.Random(0), check_every=0)


def test_deadline_reached_exactly_reports_zero_games(flop_state) -> None:
    outcome = run_worker(flop_state, always_win, deadline=5.0, rng=random.Random(0), clock=lambda: 5.0)
    assert outcome.games_played == 0
