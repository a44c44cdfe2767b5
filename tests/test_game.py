"""Tests for the round state machine: phases, shows, scouts, passes, scoring."""
import random
from collections import Counter

import pytest

from scout.ai import greedy_get_move
from scout.deal import Deal
from scout.deck import make_card
from scout.errors import IllegalAction, InvalidPlay, PlayTooWeak
from scout.game import Phase, RoundState, TablePlay, play_one_round
from scout.moves import Pass, Scout, Show


def _hand(*values, copy=0):
    """Cards for the given values; repeated values get successive copy numbers."""
    seen = Counter()
    cards = []
    for v in values:
        cards.append(make_card(v, copy + seen[v]))
        seen[v] += 1
    return cards


def _state(*hands, lock=True) -> RoundState:
    state = RoundState(Deal(hands=tuple(list(h) for h in hands), undealt=[]))
    if lock:
        state.lock_in()
    return state


def _ids(state: RoundState, seat: int, *values) -> list[str]:
    """Ids of the first card of each given effective value in the seat's hand."""
    ids = []
    for v in values:
        ids.append(next(c.id for c in state.hands[seat] if c.effective_value() == v and c.id not in ids))
    return ids


def test_round_starts_orienting_then_lock_in():
    state = _state(_hand(1, 2), _hand(3, 4, copy=1), lock=False)
    assert state.phase == Phase.ORIENTING_HANDS
    assert state.current_seat == 0
    with pytest.raises(IllegalAction):
        state.show(0, _ids(state, 0, 1))
    state.lock_in()
    assert state.phase == Phase.AWAITING_TURN


def test_toggle_flip_only_while_orienting_and_only_human():
    state = _state(_hand(3, 5), _hand(4, 6, copy=1), lock=False)
    card = state.toggle_flip("3-0")
    assert card.effective_value() == 8
    with pytest.raises(IllegalAction):
        state.toggle_flip("4-1", seat=1)
    with pytest.raises(IllegalAction):
        state.toggle_flip("no-such-card")
    state.lock_in()
    with pytest.raises(IllegalAction):
        state.toggle_flip("3-0")
    assert state.hands[0][0].flipped


def test_show_moves_cards_to_table_and_advances_turn():
    state = _state(_hand(3, 4, 5, 9), _hand(6, 7, 8, 1, copy=1))
    state.show(0, _ids(state, 0, 3, 4, 5))
    assert state.table is not None
    assert state.table.owner == 0
    assert [c.value for c in state.table.cards] == [3, 4, 5]
    assert [c.value for c in state.hands[0]] == [9]
    assert state.current_seat == 1
    assert state.can_scout
    assert state.moves[-1].action == "showed"
    assert state.moves[-1].detail == "3, 4, 5"


def test_show_rejections_leave_state_unchanged():
    state = _state(_hand(3, 5, 7, 8), _hand(6, 7, 8, 1, copy=1))
    before = [c.id for c in state.hands[0]]
    with pytest.raises(InvalidPlay):
        state.show(0, [])
    with pytest.raises(InvalidPlay):
        state.show(0, _ids(state, 0, 3, 5))
    with pytest.raises(IllegalAction):
        state.show(1, _ids(state, 1, 6))
    with pytest.raises(IllegalAction):
        state.show(0, ["3-0", "3-0"])
    with pytest.raises(IllegalAction):
        state.show(0, ["6-1"])
    assert [c.id for c in state.hands[0]] == before
    assert state.table is None
    assert state.current_seat == 0

    state.show(0, _ids(state, 0, 7, 8))
    with pytest.raises(PlayTooWeak):
        state.show(1, _ids(state, 1, 6, 7))  # max 7 < 8
    with pytest.raises(PlayTooWeak):
        state.show(1, _ids(state, 1, 8))  # size mismatch
    assert [c.value for c in state.table.cards] == [7, 8]
    assert state.current_seat == 1


def test_turn_rotation_four_seats():
    state = _state(
        _hand(1, 5, 9, copy=0),
        _hand(2, 6, 10, copy=1),
        _hand(3, 7, 9, copy=2),
        _hand(4, 8, 10, copy=3),
    )
    order = []
    for value in (1, 2, 3, 4):
        seat = state.current_seat
        order.append(seat)
        state.show(seat, _ids(state, seat, value))
    assert order == [0, 1, 2, 3]
    assert state.current_seat == 0

    # A scout does not skip anyone either
    state.show(0, _ids(state, 0, 5))
    state.scout_and_place(1, 0)
    assert state.current_seat == 2
    state.show(2, _ids(state, 2, 7))
    assert state.current_seat == 3


def test_scout_discards_the_rest_of_the_table():
    state = _state(_hand(3, 4, 5, 9), _hand(1, 2, copy=1))
    shown = state.show(0, _ids(state, 0, 3, 4, 5))
    shown_ids = {c.id for c in shown}

    card = state.scout(1, 1)
    assert card.value == 4
    assert state.phase == Phase.SCOUT_PLACEMENT
    assert state.table is None
    assert state.pending_scout is card
    assert not state.can_scout

    state.place_scouted(1, 0)
    assert state.hands[1][0].id == "4-0"
    assert state.pending_scout is None
    assert state.current_seat == 0
    assert state.phase == Phase.AWAITING_TURN

    # 3 and 5 are gone for good: not on the table, not in any hand
    held = {c.id for h in state.hands for c in h}
    assert shown_ids - held == {"3-0", "5-0"}
    assert state.table_cards() == []
    assert sum(len(h) for h in state.hands) == 1 + 3


def test_scouted_card_orientation_chosen_on_placement():
    state = _state(_hand(2, 9), _hand(1, 5, copy=1), lock=False)
    state.toggle_flip("2-0")  # shows 9
    state.lock_in()
    state.show(0, ["2-0"])
    card = state.scout(1, 0)
    assert not card.flipped  # picked up normal side up
    state.place_scouted(1, 2, flipped=True)
    assert state.hands[1][2].id == "2-0"
    assert state.hands[1][2].effective_value() == 9
    assert state.moves[-1].detail == "9"


def test_scout_rules():
    state = _state(_hand(3, 4, 9), _hand(1, 2, 7, copy=1), _hand(5, 6, copy=2))
    with pytest.raises(IllegalAction):
        state.scout(0, 0)  # empty table
    state.show(0, _ids(state, 0, 3))
    with pytest.raises(IllegalAction):
        state.scout(2, 0)  # not seat 2's turn
    with pytest.raises(IllegalAction):
        state.scout(1, 3)  # no such table position
    state.scout(1, 0)
    with pytest.raises(IllegalAction):
        state.scout(1, 0)  # already scouted this turn
    with pytest.raises(IllegalAction):
        state.show(1, _ids(state, 1, 7))  # must place first
    with pytest.raises(IllegalAction):
        state.place_scouted(1, 4)  # hand has 3 cards: 0..3 allowed
    assert state.phase == Phase.SCOUT_PLACEMENT
    state.place_scouted(1, 3)
    assert state.current_seat == 2


def test_scout_own_play_is_illegal():
    state = _state(_hand(3, 4), _hand(1, 2, copy=1))
    state.table = TablePlay(cards=[make_card(8)], owner=0)
    with pytest.raises(IllegalAction):
        state.scout(0, 0)
    with pytest.raises(IllegalAction):
        state.pass_turn(0)


def test_scout_and_place_validates_before_mutating():
    state = _state(_hand(3, 4), _hand(1, 2, copy=1))
    state.show(0, _ids(state, 0, 4))
    with pytest.raises(IllegalAction):
        state.scout_and_place(1, 0, index=10)
    assert state.table is not None
    assert state.phase == Phase.AWAITING_TURN
    state.scout_and_place(1, 0)
    assert state.hands[1][-1].id == "4-0"


def test_pass_ends_round_and_owner_wins():
    state = _state(_hand(3, 4, 5, 8, 9, 10, 1), _hand(6, 7, 8, 2, copy=1))
    state.show(0, _ids(state, 0, 3, 4, 5))
    state.show(1, _ids(state, 1, 6, 7, 8))
    state.show(0, _ids(state, 0, 8, 9, 10))
    # Seat 1 holds a lone 2: nothing beats the table
    winner = state.pass_turn(1)
    assert winner == 0
    assert state.is_over
    assert state.outcome is not None
    assert state.outcome.hand_scores == (1, 2)
    assert state.outcome.points == (2, 0)
    assert state.moves[-1].action == "passed"
    with pytest.raises(IllegalAction):
        state.show(0, _ids(state, 0, 1))


def test_pass_on_empty_table_is_illegal():
    state = _state(_hand(3), _hand(1, copy=1))
    with pytest.raises(IllegalAction):
        state.pass_turn(0)
    assert not state.is_over


def test_empty_hand_show_wins_round():
    state = _state(_hand(2, 3), _hand(1, 9, 10, copy=1), _hand(4, 4, copy=2))
    state.show(0, _ids(state, 0, 2, 3))
    assert state.is_over
    assert state.outcome.winner == 0
    assert state.outcome.hand_scores == (0, 20, 8)
    assert state.outcome.points == (28, 0, 0)


def test_winner_own_hand_is_not_awarded():
    state = _state(_hand(10, 10), _hand(1, copy=1))
    state.show(0, ["10-0"])
    state.pass_turn(1)
    assert state.outcome.hand_scores == (10, 1)
    assert state.outcome.points == (1, 0)


def test_apply_move_dispatch():
    state = _state(_hand(3, 9), _hand(1, 5, copy=1))
    state.apply_move(0, Show(card_ids=("3-0",)))
    state.apply_move(1, Scout(position=0, insert_index=0, flipped=True))
    assert state.hands[1][0].effective_value() == 8
    state.apply_move(0, Show(card_ids=("9-0",)))
    assert state.is_over
    with pytest.raises(TypeError):
        _state(_hand(1), _hand(2, copy=1)).apply_move(0, "pass")

    state = _state(_hand(3, 9), _hand(1, copy=1))
    state.apply_move(0, Show(card_ids=("9-0",)))
    state.apply_move(1, Pass())
    assert state.outcome.winner == 0


def test_greedy_round_completes_and_awards_winner():
    rng = random.Random(2024)
    for num_players in (2, 3, 4):
        outcome, state = play_one_round(
            num_players, lambda s, seat: greedy_get_move(s, seat, rng), rng=rng
        )
        assert state.is_over
        assert len(outcome.hand_scores) == num_players
        others = sum(s for seat, s in enumerate(outcome.hand_scores) if seat != outcome.winner)
        assert outcome.points[outcome.winner] == others
        assert sum(outcome.points) == others
