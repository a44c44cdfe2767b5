"""
Greedy single-ply decision engine for computer-controlled seats.

Priority: biggest matching-rank set, then a longer consecutive run (3+),
then the highest single card that beats the table, then a coin-flip scout,
then pass. No look-ahead.
"""
from __future__ import annotations

import random
from typing import Sequence

from .deck import Card
from .game import RoundState, TablePlay
from .moves import Move, Pass, Scout, Show
from .play import beats, is_valid_play

MIN_RUN_LENGTH = 3
SCOUT_PROBABILITY = 0.5


def best_matching_set(hand: Sequence[Card], table_cards: Sequence[Card] | None) -> list[Card] | None:
    """All copies of one rank (2+) that beat the table; the largest such set wins."""
    best: list[Card] | None = None
    for card in hand:
        matching = [c for c in hand if c.effective_value() == card.effective_value()]
        if len(matching) < 2:
            continue
        if is_valid_play(matching) and beats(matching, table_cards):
            if best is None or len(matching) > len(best):
                best = matching
    return best


def best_run(
    hand: Sequence[Card],
    table_cards: Sequence[Card] | None,
    current_best: list[Card] | None = None,
) -> list[Card] | None:
    """
    Windows of length 3+ over the hand sorted by value that form a run and
    beat the table. Replaces ``current_best`` only when strictly longer.
    """
    best = current_best
    ordered = sorted(hand, key=lambda c: c.effective_value())
    for length in range(MIN_RUN_LENGTH, len(ordered) + 1):
        for start in range(len(ordered) - length + 1):
            window = ordered[start:start + length]
            if is_valid_play(window) and beats(window, table_cards):
                if best is None or len(window) > len(best):
                    best = window
    return best


def best_single(hand: Sequence[Card], table_cards: Sequence[Card] | None) -> list[Card] | None:
    for card in sorted(hand, key=lambda c: c.effective_value(), reverse=True):
        if beats([card], table_cards):
            return [card]
    return None


def choose_ai_move(
    hand: Sequence[Card],
    table: TablePlay | None,
    can_scout: bool,
    seat: int,
    rng: random.Random | None = None,
) -> Move:
    """Pick a show, scout or pass for ``seat`` holding ``hand``."""
    if rng is None:
        rng = random.Random()
    table_cards = table.cards if table is not None else None

    play = best_matching_set(hand, table_cards)
    play = best_run(hand, table_cards, play)
    if play is None:
        play = best_single(hand, table_cards)
    if play is not None:
        return Show(card_ids=tuple(c.id for c in play))

    if table is None:
        # Any card beats an empty table, so only an empty hand gets here.
        raise RuntimeError(f"Seat {seat} has no move on an empty table")
    if table.owner == seat:
        raise RuntimeError(f"Seat {seat} is facing its own play")
    if can_scout and rng.random() < SCOUT_PROBABILITY:
        return Scout(position=rng.randrange(len(table.cards)))
    return Pass()


def greedy_get_move(state: RoundState, seat: int, rng: random.Random | None = None) -> Move:
    """``get_move`` callback for ``run_round`` / ``run_match``."""
    return choose_ai_move(state.hands[seat], state.table, state.can_scout, seat, rng)
