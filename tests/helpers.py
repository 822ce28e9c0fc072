from typing import Sequence


class ConstantEvaluator:
    """Every hand gets the same score, so every showdown is a tie."""

    def __init__(self, value: int = 7) -> None:
        self.value = value

    def score(self, cards: Sequence[int]) -> int:
        return self.value


class FavoriteEvaluator:
    """Scores the hand holding `favorite` cards above everything else."""

    def __init__(self, favorite: Sequence[int]) -> None:
        self.favorite = set(favorite)

    def score(self, cards: Sequence[int]) -> int:
        return 100 if self.favorite <= set(cards) else 1


def always_win(state, rng) -> bool:
    return True
