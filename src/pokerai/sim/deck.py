import random
from typing import Iterable


class Deck:
    """Pool of undealt cards supporting O(1) uniform draws without replacement."""

    __slots__ = ("_cards",)

    def __init__(self, cards: Iterable[int]) -> None:
        self._cards = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: int) -> bool:
        return card in self._cards

    def draw(self, rng: random.Random) -> int:
        """Remove and return a uniformly random card from the current pool."""
        if not self._cards:
            raise IndexError("Cannot draw from an empty deck")

        index = rng.randrange(len(self._cards))
        card = self._cards[index]
        # Swap-remove: the last card takes the drawn slot.
        self._cards[index] = self._cards[-1]
        self._cards.pop()
        return card

    def draw_many(self, n: int, rng: random.Random) -> list[int]:
        return [self.draw(rng) for _ in range(n)]
