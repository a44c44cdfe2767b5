"""
Score calculation: hand value at round end, winner's award, match winners.
The round winner collects the sum of every other seat's hand; nobody else scores.
"""
from __future__ import annotations

from typing import Sequence

from .deck import Card


def hand_score(hand: Sequence[Card]) -> int:
    """Sum of the active face of every card (orientation at evaluation time)."""
    return sum(c.effective_value() for c in hand)


def round_points(hand_scores: Sequence[int], winner: int) -> tuple[int, ...]:
    """
    Per-seat points for a round: winner gets the sum of the other seats'
    hand scores, everyone else 0. The winner's own hand counts for nothing.
    """
    if not 0 <= winner < len(hand_scores):
        raise ValueError(f"Winner seat {winner} out of range for {len(hand_scores)} seats")
    award = sum(score for seat, score in enumerate(hand_scores) if seat != winner)
    return tuple(award if seat == winner else 0 for seat in range(len(hand_scores)))


def match_winners(totals: Sequence[int]) -> list[int]:
    """Seats with the highest cumulative score. Several seats on a tie."""
    if not totals:
        return []
    best = max(totals)
    return [seat for seat, total in enumerate(totals) if total == best]
