from __future__ import annotations

import random

import pytest

from conftest import column_codes, make_state
from freecell import autoplay, rules
from freecell.cards import SUIT_ORDER, Card, Rank, Suit, create_deck, opposite_suits
from freecell.deal import deal
from freecell.encoding import parse_card
from freecell.state import FOUNDATION_ORDER, GameState, Location, validate_state


def test_min_opposite_rank() -> None:
    state = make_state(foundations={"hearts": 5, "diamonds": 3, "clubs": 4, "spades": 2})
    assert autoplay.min_opposite_rank(state, Suit.HEARTS) == 2
    assert autoplay.min_opposite_rank(state, Suit.CLUBS) == 3


def test_aces_and_twos_are_always_safe() -> None:
    state = make_state(["KS AH"], free_cells=("AC", None, None, None))
    move = autoplay.find_auto_move(state)
    assert move == autoplay.AutoMove(card=parse_card("AC"), source=Location.freecell(0))

    twos = make_state(["2D"], foundations={"diamonds": 1})
    assert autoplay.is_safe_auto_move(parse_card("2D"), twos)


def test_card_too_far_ahead_of_opposite_colour_stays() -> None:
    state = make_state(["5H"], foundations={"hearts": 4, "clubs": 2, "spades": 3})
    assert rules.can_move_to_foundation(parse_card("5H"), state.foundation(Suit.HEARTS))
    assert autoplay.find_auto_move(state) is None

    raised = make_state(["5H"], foundations={"hearts": 4, "clubs": 3, "spades": 3})
    assert autoplay.find_auto_move(raised) == autoplay.AutoMove(parse_card("5H"), Location.tableau(0))


def test_free_cells_are_scanned_before_columns() -> None:
    state = make_state(["AS"], free_cells=(None, None, "AD", None))
    move = autoplay.find_auto_move(state)
    assert move is not None
    assert move.source == Location.freecell(2)
    assert move.target == Location.foundation_for(Suit.DIAMONDS)


def test_columns_are_scanned_left_to_right() -> None:
    state = make_state(["KS", "AH", "AC"])
    move = autoplay.find_auto_move(state)
    assert move is not None and move.source == Location.tableau(1)


def _random_board(rng: random.Random) -> GameState:
    lengths = {suit: rng.randint(0, 13) for suit in SUIT_ORDER}
    loose = [card for card in create_deck() if card.value > lengths[card.suit]]
    rng.shuffle(loose)
    columns: list[list[Card]] = [[] for _ in range(8)]
    cells: list[Card | None] = [None, None, None, None]
    for card in loose:
        slot = rng.randrange(12)
        if slot >= 8 and cells[slot - 8] is None:
            cells[slot - 8] = card
        else:
            columns[slot % 8].append(card)
    piles = tuple(
        tuple(Card(rank, suit) for rank in Rank.ordered()[: lengths[suit]]) for suit in FOUNDATION_ORDER
    )
    return GameState(
        tableau=tuple(tuple(column) for column in columns),
        free_cells=tuple(cells),
        foundations=piles,
        game_number=0,
    )


@pytest.mark.parametrize("seed", range(40))
def test_auto_moves_respect_safety_bound(seed: int) -> None:
    state = _random_board(random.Random(seed))
    validate_state(state)
    for move, following in autoplay.iter_auto_moves(state):
        lengths = [state.foundation_length(other) for other in opposite_suits(move.card.suit)]
        assert move.card.value <= min(lengths) + autoplay.AUTO_MOVE_SAFE_RANK_OFFSET
        assert move.card.value == state.foundation_length(move.card.suit) + 1
        validate_state(following)
        state = following


def test_iter_auto_moves_reevaluates_after_each_move() -> None:
    state = make_state(["KS 2C AC"], free_cells=("AS", None, None, None))
    moves = [move.card for move, _ in autoplay.iter_auto_moves(state)]
    assert moves == [parse_card("AS"), parse_card("AC"), parse_card("2C")]


def test_auto_play_reaches_a_won_board() -> None:
    nearly = {"hearts": 12, "diamonds": 12, "clubs": 12, "spades": 12}
    state = make_state(["KH", "KD", "KC"], free_cells=("KS", None, None, None), foundations=nearly)
    final = autoplay.auto_play(state)
    assert rules.check_win(final)
    assert autoplay.find_auto_move(final) is None


def test_auto_play_without_moves_returns_input() -> None:
    state = deal(1)
    assert autoplay.auto_play(state) is state


def test_deal_one_free_cell_opening_sends_cards_home() -> None:
    state = deal(1)
    state = rules.try_move(Location.tableau(5), Location.freecell(0), state)
    assert autoplay.find_auto_move(state) is None
    state = rules.try_move(Location.tableau(5), Location.freecell(1), state)

    steps = list(autoplay.iter_auto_moves(state))
    assert [move.card for move, _ in steps] == [parse_card("AC"), parse_card("2C"), parse_card("AS")]
    final = steps[-1][1]

    assert column_codes(final.tableau[5]) == "7H QC"
    assert final.free_cells == (parse_card("3D"), None, None, None)
    assert column_codes(final.foundation(Suit.CLUBS)) == "AC 2C"
    assert column_codes(final.foundation(Suit.SPADES)) == "AS"
    assert [column_codes(column) for column in final.tableau[:5]] == [
        "JD KD 2S 4C 3S 6D 6S",
        "2D KC KS 5C TD 8S 9C",
        "9H 9S 9D TS 4S 8D 2H",
        "JC 5S QD QH TH QS 6H",
        "5D AD JS 4H 8H 6C",
    ]
    validate_state(final)


def _notation_location(token: str) -> Location:
    if token.isdigit():
        return Location.tableau(int(token) - 1)
    return Location.freecell(ord(token) - ord("a"))


def test_deal_one_standard_notation_opening() -> None:
    """Ten moves in the usual solver notation (columns 1-8, free cells a-d).

    The expected board was worked out by hand from the published game #1
    layout. No card becomes safe to send home along the way.
    """

    state = deal(1)
    for move in "3a 32 7b 3c 37 37 b7 8b 87 48".split():
        state = rules.require_move(_notation_location(move[0]), _notation_location(move[1]), state)
        assert autoplay.find_auto_move(state) is None

    assert [column_codes(column) for column in state.tableau] == [
        "JD KD 2S 4C 3S 6D 6S",
        "2D KC KS 5C TD 8S 9C 8D",
        "9H 9S",
        "JC 5S QD QH TH QS",
        "5D AD JS 4H 8H 6C",
        "7H QC AS AC 2C 3D",
        "7C KH AH 4D JH TS 9D 8C 7D",
        "5H 3H 3C 7S 6H",
    ]
    assert state.free_cells == (parse_card("2H"), parse_card("TC"), parse_card("4S"), None)
    assert all(pile == () for pile in state.foundations)
    validate_state(state)


def test_detect_auto_move() -> None:
    state = make_state(["KS AH"], free_cells=(None, "AC", None, None))
    after_cell = autoplay.apply_auto_move(state, autoplay.find_auto_move(state))
    assert autoplay.detect_auto_move(state, after_cell) == (
        Location.freecell(1),
        Location.foundation_for(Suit.CLUBS),
    )
    after_column = autoplay.auto_play(after_cell)
    assert autoplay.detect_auto_move(after_cell, after_column) == (
        Location.tableau(0),
        Location.foundation_for(Suit.HEARTS),
    )
    assert autoplay.detect_auto_move(state, state) is None
