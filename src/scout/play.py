"""
Play validation: what counts as a show, and whether it beats the table.
A show is a single card, a set of equal ranks, or a run of consecutive values.
Only the active face of each card counts.
"""
from __future__ import annotations

from typing import Sequence

from .deck import Card


def effective_values(cards: Sequence[Card]) -> list[int]:
    return [c.effective_value() for c in cards]


def max_effective_value(cards: Sequence[Card]) -> int:
    return max(c.effective_value() for c in cards)


def is_same_rank(cards: Sequence[Card]) -> bool:
    return bool(cards) and all(c.effective_value() == cards[0].effective_value() for c in cards)


def is_run(cards: Sequence[Card]) -> bool:
    """True if the sorted values go up by exactly one (no repeats)."""
    values = sorted(effective_values(cards))
    return all(values[i] == values[i - 1] + 1 for i in range(1, len(values)))


def is_valid_play(cards: Sequence[Card]) -> bool:
    """
    Empty: invalid. One card: always valid.
    Two or more: valid iff all share the same rank or they form a consecutive run.
    """
    if not cards:
        return False
    if len(cards) == 1:
        return True
    return is_same_rank(cards) or is_run(cards)


def beats(new_cards: Sequence[Card], current_cards: Sequence[Card] | None) -> bool:
    """
    True if ``new_cards`` beats the current table play.

    Any valid play beats an empty table. Otherwise sizes must match and the
    highest value must be strictly greater (ties lose).
    """
    if not is_valid_play(new_cards):
        return False
    if not current_cards:
        return True
    if len(new_cards) != len(current_cards):
        return False
    return max_effective_value(new_cards) > max_effective_value(current_cards)
