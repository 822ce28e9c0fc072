import pytest

from pokerai.types import GameState


@pytest.fixture
def flop_state() -> GameState:
    # Ah Kd on a Kh 8s 2c flop against two opponents
    hole = (50, 45)
    community = (46, 27, 0)
    return GameState(
        hole_cards=hole,
        community_cards=community,
        used_cards=frozenset(hole + community),
        num_opponents=2,
        stack=200,
        my_turn=True,
    )


@pytest.fixture
def raw_flop_state() -> dict:
    return {
        "hand": ["Ah", "Kd"],
        "community": ["Kh", "8s", "2c"],
        "num_opponents": 2,
        "stack": 200,
        "your_turn": True,
    }
