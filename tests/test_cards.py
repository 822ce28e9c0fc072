import pytest

from pokerai.cards import card_to_index, format_cards, index_to_card, parse_card_sequence, remaining_cards


def test_parse_card_sequence_compact_and_spaced() -> None:
    assert parse_card_sequence("Kh8s2c") == parse_card_sequence("Kh 8s 2c")


def test_parse_card_sequence_rejects_duplicates() -> None:
    with pytest.raises(ValueError):
        parse_card_sequence("KhKh2c")


def test_parse_card_sequence_empty_board() -> None:
    assert parse_card_sequence("", allow_empty=True) == []
    with pytest.raises(ValueError):
        parse_card_sequence("")


def test_card_index_round_trip_covers_deck() -> None:
    assert card_to_index("2c") == 0
    assert card_to_index("As") == 51
    assert [card_to_index(index_to_card(i)) for i in range(52)] == list(range(52))
    assert format_cards([50, 45]) == "Ah Kd"


def test_remaining_cards_excludes_used() -> None:
    rest = remaining_cards({0, 51, 7})
    assert len(rest) == 49
    assert not {0, 51, 7} & set(rest)
