"""
Match orchestration: a fixed number of rounds, cumulative scores, round history.

``Match`` is the only writer of totals and history. Each finished round is
recorded exactly once, through ``finish_round``.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from .deal import MAX_PLAYERS, MIN_PLAYERS, deal_hands
from .errors import ConfigurationError, IllegalAction
from .game import RoundState, run_round
from .moves import Move
from .scoring import match_winners

SUPPORTED_ROUNDS = (1, 5, 10)
SUPPORTED_PLAYERS = tuple(range(MIN_PLAYERS, MAX_PLAYERS + 1))  # (2, 3, 4)


@dataclass(frozen=True)
class MatchConfig:
    """Number of rounds and seats (seat 0 human, the rest computer)."""

    total_rounds: int = 5
    num_players: int = 2

    def __post_init__(self) -> None:
        if self.total_rounds not in SUPPORTED_ROUNDS:
            raise ConfigurationError(
                f"Unsupported round count {self.total_rounds}; expected one of {SUPPORTED_ROUNDS}."
            )
        if self.num_players not in SUPPORTED_PLAYERS:
            raise ConfigurationError(
                f"Unsupported player count {self.num_players}; expected one of {SUPPORTED_PLAYERS}."
            )


@dataclass(frozen=True)
class RoundRecord:
    round_number: int
    winner: int
    hand_scores: tuple[int, ...]
    points: tuple[int, ...]


class Match:
    """Cross-round state for one match."""

    def __init__(self, config: MatchConfig, rng: random.Random | None = None):
        self.config = config
        self.rng = rng or random.Random()
        self.totals: list[int] = [0] * config.num_players
        self.history: list[RoundRecord] = []
        self.round_number = 0
        self.round: RoundState | None = None

    @property
    def num_players(self) -> int:
        return self.config.num_players

    @property
    def round_recorded(self) -> bool:
        return len(self.history) == self.round_number

    @property
    def is_over(self) -> bool:
        return self.round_number >= self.config.total_rounds and self.round_recorded

    def start_round(self) -> RoundState:
        """Deal the next round. The previous one must be finished and recorded."""
        if self.round is not None and not self.round_recorded:
            raise IllegalAction("The current round has not finished yet")
        if self.round_number >= self.config.total_rounds:
            raise IllegalAction("All rounds of the match have been played")
        deal = deal_hands(self.num_players, rng=self.rng)
        self.round_number += 1
        self.round = RoundState(deal)
        return self.round

    def finish_round(self) -> RoundRecord:
        """Append the round's record and add the winner's award to the totals."""
        if self.round is None or self.round.outcome is None:
            raise IllegalAction("No finished round to record")
        if self.round_recorded:
            raise IllegalAction(f"Round {self.round_number} is already recorded")
        outcome = self.round.outcome
        record = RoundRecord(
            round_number=self.round_number,
            winner=outcome.winner,
            hand_scores=outcome.hand_scores,
            points=outcome.points,
        )
        self.history.append(record)
        for seat, pts in enumerate(outcome.points):
            self.totals[seat] += pts
        return record

    def winners(self) -> list[int]:
        return match_winners(self.totals)


def run_match(
    config: MatchConfig,
    get_move: Callable[[RoundState, int], Move],
    rng: random.Random | None = None,
) -> tuple[tuple[int, ...], list[RoundRecord]]:
    """
    Play every round of a match with ``get_move`` choosing for all seats.
    Returns (totals, per-round records).
    """
    match = Match(config, rng=rng)
    while not match.is_over:
        state = match.start_round()
        run_round(state, get_move)
        match.finish_round()
    return tuple(match.totals), list(match.history)
