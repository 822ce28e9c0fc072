import random
from typing import Callable

from pokerai.constants import COMMUNITY_CARDS, HOLE_CARDS, MAX_OPPONENTS
from pokerai.types import GameState, HandEvaluator

from .deck import Deck

GameSimulator = Callable[[GameState, random.Random], bool]


class SingleGameSimulator:
    """
    Play out one random completion of the current hand.

    Missing community cards and every opponent's hole cards are drawn from a
    deck built fresh for each call, so concurrent calls share nothing but the
    read-only state and the evaluator.

    A tie with the best opponent counts as a loss for the agent.
    """

    def __init__(self, evaluator: HandEvaluator) -> None:
        self.evaluator = evaluator

    def __call__(self, state: GameState, rng: random.Random) -> bool:
        if state.num_opponents > MAX_OPPONENTS:
            raise ValueError(f"num_opponents must be at most {MAX_OPPONENTS}, got {state.num_opponents}")

        deck = Deck(state.remaining_cards())

        community = list(state.community_cards)
        while len(community) < COMMUNITY_CARDS:
            community.append(deck.draw(rng))

        opponents = [deck.draw_many(HOLE_CARDS, rng) + community for _ in range(state.num_opponents)]

        my_score = self.evaluator.score(list(state.hole_cards) + community)
        if not opponents:
            return True
        best_opponent = max(self.evaluator.score(hand) for hand in opponents)
        return my_score > best_opponent
