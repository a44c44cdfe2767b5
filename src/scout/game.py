"""
Single round orchestration: deal -> orient hands -> turns (show / scout / pass) -> score.

``RoundState`` owns the hands and the table for one round. Every transition
checks the phase and the acting seat, validates the move, and only then
mutates, so a raised ``ScoutError`` leaves the round untouched.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from .deal import Deal, deal_hands, next_seat
from .deck import Card, cards_label
from .errors import IllegalAction, InvalidPlay, PlayTooWeak
from .moves import Move, MoveRecord, Pass, Scout, Show
from .play import beats, is_valid_play
from .scoring import hand_score, round_points

HUMAN_SEAT = 0


class Phase(str, Enum):
    ORIENTING_HANDS = "orientingHands"
    AWAITING_TURN = "awaitingTurn"
    SCOUT_PLACEMENT = "scoutChoosingPlacement"
    ROUND_ENDED = "roundEnded"


@dataclass
class TablePlay:
    """The most recent accepted show and the seat that made it."""

    cards: list[Card]
    owner: int


@dataclass(frozen=True)
class RoundOutcome:
    winner: int
    hand_scores: tuple[int, ...]
    points: tuple[int, ...]


class RoundState:
    """Mutable state for one round: hands, table play, turn, pending scout."""

    def __init__(self, deal: Deal, first_seat: int = HUMAN_SEAT):
        self.hands: list[list[Card]] = [list(h) for h in deal.hands]
        self.num_players = len(self.hands)
        self.phase = Phase.ORIENTING_HANDS
        self.current_seat = first_seat
        self.table: TablePlay | None = None
        self.pending_scout: Card | None = None
        # Cleared by a scout, restored by the next accepted show.
        self.can_scout = True
        self.moves: list[MoveRecord] = []
        self.last_action: str | None = None
        self.outcome: RoundOutcome | None = None

    # ---- Queries ----

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.ROUND_ENDED

    def table_cards(self) -> list[Card]:
        return list(self.table.cards) if self.table is not None else []

    def can_seat_scout(self, seat: int) -> bool:
        return self.table is not None and self.table.owner != seat and self.can_scout

    def can_seat_pass(self, seat: int) -> bool:
        return self.table is not None and self.table.owner != seat

    def find_card(self, seat: int, card_id: str) -> Card:
        for c in self.hands[seat]:
            if c.id == card_id:
                return c
        raise IllegalAction(f"Card {card_id} is not in seat {seat}'s hand")

    # ---- Orientation phase (human only) ----

    def toggle_flip(self, card_id: str, seat: int = HUMAN_SEAT) -> Card:
        self._require(Phase.ORIENTING_HANDS, seat)
        card = self.find_card(seat, card_id)
        card.flip()
        return card

    def lock_in(self, seat: int = HUMAN_SEAT) -> None:
        """Finish orienting hands; the seat holding the turn may now act."""
        self._require(Phase.ORIENTING_HANDS, seat)
        self.phase = Phase.AWAITING_TURN

    # ---- Turn actions ----

    def show(self, seat: int, card_ids: Sequence[str]) -> list[Card]:
        """Move the selected cards from hand to a new table play owned by ``seat``."""
        self._require(Phase.AWAITING_TURN, seat)
        if len(set(card_ids)) != len(card_ids):
            raise IllegalAction("The same card was selected twice")
        cards = [self.find_card(seat, card_id) for card_id in card_ids]
        if not is_valid_play(cards):
            raise InvalidPlay("Cards must be consecutive or matching ranks")
        current = self.table.cards if self.table is not None else None
        if not beats(cards, current):
            raise PlayTooWeak("The play must beat the current play")

        selected = set(card_ids)
        self.hands[seat] = [c for c in self.hands[seat] if c.id not in selected]
        self.table = TablePlay(cards=cards, owner=seat)
        self.can_scout = True
        self._log(seat, "show", "showed", cards_label(cards))

        if not self.hands[seat]:
            self._end_round(seat)
        else:
            self._advance()
        return cards

    def scout(self, seat: int, position: int) -> Card:
        """
        Take one card from the table play; the rest of the play is discarded.
        The card waits (normal side up) until ``place_scouted`` puts it in hand.
        """
        self._check_scout(seat, position)
        assert self.table is not None
        card = self.table.cards[position]
        card.flipped = False
        self.table = None
        self.can_scout = False
        self.pending_scout = card
        self.phase = Phase.SCOUT_PLACEMENT
        return card

    def place_scouted(self, seat: int, index: int, flipped: bool = False) -> Card:
        """Insert the pending scouted card into the hand at ``index`` and end the turn."""
        self._require(Phase.SCOUT_PLACEMENT, seat)
        self._check_insert_index(seat, index)
        card = self.pending_scout
        assert card is not None
        card.flipped = flipped
        self.hands[seat].insert(index, card)
        self.pending_scout = None
        self._log(seat, "scout", "scouted", card.effective_rank())
        self._advance()
        return card

    def scout_and_place(
        self,
        seat: int,
        position: int,
        index: int | None = None,
        flipped: bool | None = None,
    ) -> Card:
        """Scout and place in one step (computer seats)."""
        self._check_scout(seat, position)
        if index is None:
            index = len(self.hands[seat])
        self._check_insert_index(seat, index)
        assert self.table is not None
        if flipped is None:
            flipped = self.table.cards[position].flipped
        self.scout(seat, position)
        return self.place_scouted(seat, index, flipped)

    def pass_turn(self, seat: int) -> int:
        """Concede: the owner of the table play wins the round. Returns the winner."""
        self._require(Phase.AWAITING_TURN, seat)
        if self.table is None:
            raise IllegalAction("Cannot pass when the table is empty")
        if self.table.owner == seat:
            raise IllegalAction("Cannot pass on your own play")
        winner = self.table.owner
        self._log(seat, "pass", "passed", "—")
        self._end_round(winner)
        return winner

    def apply_move(self, seat: int, move: Move) -> None:
        if isinstance(move, Show):
            self.show(seat, move.card_ids)
        elif isinstance(move, Scout):
            self.scout_and_place(seat, move.position, move.insert_index, move.flipped)
        elif isinstance(move, Pass):
            self.pass_turn(seat)
        else:
            raise TypeError(f"Unknown move {move!r}")

    # ---- Internal helpers ----

    def _require(self, phase: Phase, seat: int) -> None:
        if self.phase != phase:
            raise IllegalAction(f"Not allowed during {self.phase.value}")
        if phase != Phase.ORIENTING_HANDS and seat != self.current_seat:
            raise IllegalAction(f"It is not seat {seat}'s turn")
        if phase == Phase.ORIENTING_HANDS and seat != HUMAN_SEAT:
            raise IllegalAction("Only the human seat orients its hand")

    def _check_scout(self, seat: int, position: int) -> None:
        self._require(Phase.AWAITING_TURN, seat)
        if self.table is None:
            raise IllegalAction("There is nothing on the table to scout")
        if self.table.owner == seat:
            raise IllegalAction("Cannot scout your own play")
        if not self.can_scout:
            raise IllegalAction("Already scouted this turn")
        if not 0 <= position < len(self.table.cards):
            raise IllegalAction(f"No card at table position {position}")

    def _check_insert_index(self, seat: int, index: int) -> None:
        if not 0 <= index <= len(self.hands[seat]):
            raise IllegalAction(f"Cannot insert at position {index}")

    def _log(self, seat: int, last_action: str, action: str, detail: str) -> None:
        self.moves.append(MoveRecord(seat=seat, action=action, detail=detail))
        self.last_action = last_action

    def _advance(self) -> None:
        self.current_seat = next_seat(self.current_seat, self.num_players)
        self.phase = Phase.AWAITING_TURN

    def _end_round(self, winner: int) -> None:
        scores = tuple(hand_score(h) for h in self.hands)
        self.outcome = RoundOutcome(
            winner=winner,
            hand_scores=scores,
            points=round_points(scores, winner),
        )
        self.phase = Phase.ROUND_ENDED


def run_round(
    state: RoundState,
    get_move: Callable[[RoundState, int], Move],
) -> RoundOutcome:
    """
    Play a round to the end with ``get_move(state, seat)`` choosing for every seat.
    The dealt orientation is locked in as is. Illegal moves raise.
    """
    if state.phase == Phase.ORIENTING_HANDS:
        state.lock_in()
    while not state.is_over:
        seat = state.current_seat
        state.apply_move(seat, get_move(state, seat))
    assert state.outcome is not None
    return state.outcome


def play_one_round(
    num_players: int,
    get_move: Callable[[RoundState, int], Move],
    rng: random.Random | None = None,
) -> tuple[RoundOutcome, RoundState]:
    """Deal and play one round."""
    state = RoundState(deal_hands(num_players, rng=rng))
    return run_round(state, get_move), state
