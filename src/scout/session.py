"""
Front door for a presentation layer: one human seat against computer seats.

Every input returns an ``ActionResult``. Rule violations come back as
``ok=False`` with the error attached; the state is left unchanged and nothing
is raised. Finished rounds are recorded on the match automatically.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from .ai import greedy_get_move
from .deck import Card
from .errors import IllegalAction, ScoutError
from .game import HUMAN_SEAT, Phase, RoundState
from .match import Match, MatchConfig, RoundRecord
from .moves import Move, MoveRecord, Pass, Scout, Show


@dataclass
class ActionResult:
    """Outcome of one input, accepted or rejected."""

    ok: bool
    message: str
    error: Optional[ScoutError] = None
    info: dict = field(default_factory=dict)


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of the round for rendering. Cards are copies."""

    round_number: int
    total_rounds: int
    phase: Phase
    current_seat: int
    table: tuple[Card, ...]
    table_owner: Optional[int]
    pending_scout: Optional[Card]
    can_scout: bool
    hand_sizes: tuple[int, ...]
    last_action: Optional[str]
    winner: Optional[int]


def seat_name(seat: int) -> str:
    return "You" if seat == HUMAN_SEAT else f"Player {seat + 1}"


class ScoutSession:
    """
    Owns one ``Match`` at a time and exposes the human inputs plus observers.

    ``get_ai_move(state, seat)`` decides for the computer seats; defaults to
    the greedy engine using the session's ``rng``.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        get_ai_move: Optional[Callable[[RoundState, int], Move]] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self._get_ai_move = get_ai_move or (lambda state, seat: greedy_get_move(state, seat, self.rng))
        self.match: Optional[Match] = None
        self.message: str = ""

    # ---- Match lifecycle ----

    def start_match(self, total_rounds: int = 5, num_players: int = 2) -> ActionResult:
        """Start (or restart) a match and deal its first round."""

        def action() -> str:
            config = MatchConfig(total_rounds=total_rounds, num_players=num_players)
            match = Match(config, rng=self.rng)
            match.start_round()
            self.match = match
            return "Flip any cards to set which value is active, then lock in your hand"

        return self._attempt(action)

    def next_round(self) -> ActionResult:
        def action() -> str:
            self._require_match().start_round()
            return "Flip any cards to set which value is active, then lock in your hand"

        return self._attempt(action)

    # ---- Human inputs ----

    def toggle_card_flip(self, card_id: str, seat: int = HUMAN_SEAT) -> ActionResult:
        def action() -> str:
            card = self._require_round().toggle_flip(card_id, seat)
            return f"Card now shows {card.effective_rank()}"

        return self._attempt(action)

    def lock_in_hand_orientation(self, seat: int = HUMAN_SEAT) -> ActionResult:
        def action() -> str:
            state = self._require_round()
            state.lock_in(seat)
            return self._turn_message(state)

        return self._attempt(action)

    def submit_show(self, card_ids: Iterable[str], seat: int = HUMAN_SEAT) -> ActionResult:
        ids = list(card_ids)

        def action() -> str:
            state = self._require_round()
            cards = state.show(seat, ids)
            return self._after_move(state, seat, f"{seat_name(seat)} played {len(cards)} card(s)")

        return self._attempt(action)

    def submit_scout(self, table_position: int, seat: int = HUMAN_SEAT) -> ActionResult:
        def action() -> str:
            self._require_round().scout(seat, table_position)
            return "Choose which side to use, then where in your hand to place it"

        return self._attempt(action)

    def confirm_scout_placement(
        self,
        hand_insert_index: int,
        flipped: bool = False,
        seat: int = HUMAN_SEAT,
    ) -> ActionResult:
        def action() -> str:
            state = self._require_round()
            state.place_scouted(seat, hand_insert_index, flipped)
            return self._after_move(state, seat, "Card placed!")

        return self._attempt(action)

    def submit_pass(self, seat: int = HUMAN_SEAT) -> ActionResult:
        def action() -> str:
            state = self._require_round()
            state.pass_turn(seat)
            return self._after_move(state, seat, f"{seat_name(seat)} passed.")

        return self._attempt(action)

    def submit_move(self, move: Move, seat: int = HUMAN_SEAT) -> ActionResult:
        """Apply a ``Move`` for ``seat``; scouts are placed in the same step."""
        if isinstance(move, Show):
            return self.submit_show(move.card_ids, seat)
        if isinstance(move, Pass):
            return self.submit_pass(seat)

        def action() -> str:
            state = self._require_round()
            state.scout_and_place(seat, move.position, move.insert_index, move.flipped)
            return self._after_move(state, seat, f"{seat_name(seat)} scouted a card")

        return self._attempt(action)

    # ---- Computer seats ----

    def is_ai_turn(self) -> bool:
        state = self.round
        return (
            state is not None
            and state.phase == Phase.AWAITING_TURN
            and state.current_seat != HUMAN_SEAT
        )

    def begin_ai_turn(self) -> int:
        """Announce the seat about to think (pacing hook)."""
        if not self.is_ai_turn():
            raise IllegalAction("It is not a computer seat's turn")
        seat = self._require_round().current_seat
        self.message = f"{seat_name(seat)} is thinking..."
        return seat

    def play_ai_turn(self) -> ActionResult:
        """Let the computer seat holding the turn make exactly one move."""
        if not self.is_ai_turn():
            return self._reject(IllegalAction("It is not a computer seat's turn"))
        state = self._require_round()
        seat = state.current_seat
        move = self._get_ai_move(state, seat)
        result = self.submit_move(move, seat)
        result.info["seat"] = seat
        result.info["move"] = move
        return result

    def play_ai_until_human(self) -> List[ActionResult]:
        results: List[ActionResult] = []
        while self.is_ai_turn():
            results.append(self.play_ai_turn())
        return results

    # ---- Observers ----

    @property
    def round(self) -> Optional[RoundState]:
        return self.match.round if self.match is not None else None

    @property
    def is_match_over(self) -> bool:
        return self.match is not None and self.match.is_over

    def snapshot(self) -> Optional[RoundSnapshot]:
        match = self.match
        state = self.round
        if match is None or state is None:
            return None
        return RoundSnapshot(
            round_number=match.round_number,
            total_rounds=match.config.total_rounds,
            phase=state.phase,
            current_seat=state.current_seat,
            table=tuple(c.copy() for c in state.table_cards()),
            table_owner=state.table.owner if state.table is not None else None,
            pending_scout=state.pending_scout.copy() if state.pending_scout is not None else None,
            can_scout=state.can_scout,
            hand_sizes=tuple(len(h) for h in state.hands),
            last_action=state.last_action,
            winner=state.outcome.winner if state.outcome is not None else None,
        )

    def hand(self, seat: int = HUMAN_SEAT) -> tuple[Card, ...]:
        state = self.round
        if state is None:
            return ()
        return tuple(c.copy() for c in state.hands[seat])

    def table(self) -> tuple[Card, ...]:
        state = self.round
        return tuple(c.copy() for c in state.table_cards()) if state is not None else ()

    def scores(self) -> tuple[int, ...]:
        return tuple(self.match.totals) if self.match is not None else ()

    def history(self) -> tuple[RoundRecord, ...]:
        return tuple(self.match.history) if self.match is not None else ()

    def move_log(self) -> tuple[MoveRecord, ...]:
        state = self.round
        return tuple(state.moves) if state is not None else ()

    def winners(self) -> List[int]:
        return self.match.winners() if self.match is not None else []

    # ---- Internal helpers ----

    def _require_match(self) -> Match:
        if self.match is None:
            raise IllegalAction("No match in progress")
        return self.match

    def _require_round(self) -> RoundState:
        state = self._require_match().round
        if state is None:
            raise IllegalAction("No round in progress")
        return state

    def _attempt(self, action: Callable[[], str]) -> ActionResult:
        try:
            message = action()
        except ScoutError as exc:
            return self._reject(exc)
        self.message = message
        return ActionResult(ok=True, message=message)

    def _reject(self, error: ScoutError) -> ActionResult:
        self.message = str(error)
        return ActionResult(ok=False, message=str(error), error=error)

    def _after_move(self, state: RoundState, seat: int, message: str) -> str:
        if not state.is_over:
            return message if seat != HUMAN_SEAT else self._turn_message(state, message)
        match = self._require_match()
        record = match.finish_round()
        if record.winner == HUMAN_SEAT:
            return f"{message} You won the round!"
        return f"{message} {seat_name(record.winner)} won the round!"

    def _turn_message(self, state: RoundState, prefix: str = "") -> str:
        if state.current_seat == HUMAN_SEAT:
            turn = "Your turn!"
        else:
            turn = f"{seat_name(state.current_seat)} is up"
        return f"{prefix} {turn}".strip()
