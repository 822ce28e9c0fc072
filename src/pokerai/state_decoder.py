from typing import Any, List, Mapping, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .cards import card_to_index
from .constants import COMMUNITY_CARDS, HOLE_CARDS, MAX_OPPONENTS, NUM_CARDS
from .types import GameState


class StateDecodeError(ValueError):
    """Raised when an inbound game state cannot be turned into a GameState."""


CardValue = Union[int, str]


class RawGameState(BaseModel):
    hand: List[CardValue]
    community: List[CardValue] = []
    num_opponents: int = Field(ge=0, le=MAX_OPPONENTS)
    stack: int = Field(ge=0)
    your_turn: bool = False
    dead: List[CardValue] = []  # seen cards that are out of play

    @field_validator("hand", "community", "dead", mode="after")
    @classmethod
    def _cards_to_indices(cls, cards: List[CardValue]) -> List[int]:
        return [_card_index(card) for card in cards]

    @model_validator(mode="after")
    def _check_cards(self) -> "RawGameState":
        if len(self.hand) != HOLE_CARDS:
            raise ValueError(f"hand must contain exactly {HOLE_CARDS} cards")
        if len(self.community) > COMMUNITY_CARDS:
            raise ValueError(f"community may contain at most {COMMUNITY_CARDS} cards")

        seen = [*self.hand, *self.community, *self.dead]
        if len(seen) != len(set(seen)):
            raise ValueError("hand, community and dead cards must be disjoint")

        draws = (COMMUNITY_CARDS - len(self.community)) + HOLE_CARDS * self.num_opponents
        if draws > NUM_CARDS - len(seen):
            raise ValueError(f"not enough unseen cards to deal {self.num_opponents} opponents")
        return self

    def to_game_state(self) -> GameState:
        return GameState(
            hole_cards=tuple(self.hand),
            community_cards=tuple(self.community),
            used_cards=frozenset([*self.hand, *self.community, *self.dead]),
            num_opponents=self.num_opponents,
            stack=self.stack,
            my_turn=self.your_turn,
        )


def _card_index(card: CardValue) -> int:
    if isinstance(card, str):
        return card_to_index(card)
    if not (0 <= card < NUM_CARDS):
        raise ValueError(f"Card index out of range: {card}")
    return card


def decode_state(raw_state: Union[Mapping[str, Any], str, bytes, RawGameState]) -> GameState:
    """Decode a JSON document or mapping into a GameState, all or nothing."""
    try:
        if isinstance(raw_state, RawGameState):
            model = raw_state
        elif isinstance(raw_state, (str, bytes)):
            model = RawGameState.model_validate_json(raw_state)
        else:
            model = RawGameState.model_validate(raw_state)
    except ValidationError as e:
        raise StateDecodeError(str(e)) from e
    return model.to_game_state()
