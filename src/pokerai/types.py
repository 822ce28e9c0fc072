from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Protocol, Sequence

from .cards import remaining_cards


class HandEvaluator(Protocol):
    def score(self, cards: Sequence[int]) -> int:
        """Strength of a 7-card hand, larger is better."""
        ...


@dataclass(frozen=True, slots=True)
class GameState:
    hole_cards: tuple[int, ...]
    community_cards: tuple[int, ...]
    used_cards: frozenset[int]
    num_opponents: int
    stack: int
    my_turn: bool = False

    def remaining_cards(self) -> list[int]:
        return remaining_cards(self.used_cards)


class ActionType(IntEnum):
    UNSET = 0
    FOLD = 1
    CALL = 2
    BET = 3


@dataclass(frozen=True, slots=True)
class Action:
    type: ActionType
    amount: int = 0

    UNSET: ClassVar["Action"]

    @classmethod
    def fold(cls) -> "Action":
        return cls(ActionType.FOLD)

    @classmethod
    def call(cls) -> "Action":
        return cls(ActionType.CALL)

    @classmethod
    def bet(cls, amount: int) -> "Action":
        if amount < 0:
            raise ValueError(f"Bet amount must be non-negative, got {amount}")
        return cls(ActionType.BET, int(amount))

    @property
    def is_set(self) -> bool:
        return self.type != ActionType.UNSET


Action.UNSET = Action(ActionType.UNSET)


@dataclass(frozen=True, slots=True)
class SimulationOutcome:
    games_played: int = 0
    games_won: int = 0

    def __post_init__(self) -> None:
        if self.games_played < 0 or self.games_won < 0:
            raise ValueError("Simulation counts must be non-negative")
        if self.games_won > self.games_played:
            raise ValueError("games_won cannot exceed games_played")

    def __add__(self, other: "SimulationOutcome") -> "SimulationOutcome":
        return SimulationOutcome(
            games_played=self.games_played + other.games_played,
            games_won=self.games_won + other.games_won,
        )

    @property
    def win_probability(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played
