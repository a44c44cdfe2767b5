"""
Observation encoding and legal-move enumeration for agents.

Observations are flat ``float32`` numpy vectors of constant size so that any
policy (random, scripted, learned) can consume them:

- 10 bins: effective-value histogram of the seat's hand
- 10 bins: effective-value histogram of the table play
- 1: table play size / 10
- 4: table owner one-hot, relative to the observing seat (all zeros if empty)
- 1: can-scout flag
- 4: hand size of each seat (relative order, / 20), zero-padded to 4 seats
- 3: player count one-hot for {2, 3, 4}

Legal moves are enumerated canonically: cards with the same active value are
interchangeable for the rules, so one representative set is listed per shape.
"""
from __future__ import annotations

from itertools import groupby
from typing import Iterable, List, Sequence

import numpy as np

from .deck import RANKS, Card
from .game import Phase, RoundState
from .moves import Move, Pass, Scout, Show
from .play import beats

NUM_VALUES: int = len(RANKS)
MAX_SEATS: int = 4
OBS_SIZE: int = NUM_VALUES + NUM_VALUES + 1 + MAX_SEATS + 1 + MAX_SEATS + 3  # 33

_HAND_SIZE_SCALE = 20.0


def value_histogram(cards: Iterable[Card]) -> np.ndarray:
    """Count of cards per active value (index 0 = value 1)."""
    hist = np.zeros(NUM_VALUES, dtype=np.float32)
    for c in cards:
        hist[c.effective_value() - 1] += 1.0
    return hist


def _one_hot(index: int | None, size: int) -> np.ndarray:
    vec = np.zeros(size, dtype=np.float32)
    if index is not None and 0 <= index < size:
        vec[index] = 1.0
    return vec


def encode_observation(state: RoundState, seat: int) -> np.ndarray:
    """Flat observation of ``state`` from ``seat``'s point of view."""
    n = state.num_players
    table_cards = state.table_cards()

    owner_rel = None
    if state.table is not None:
        owner_rel = (state.table.owner - seat) % n

    sizes = np.zeros(MAX_SEATS, dtype=np.float32)
    for offset in range(n):
        sizes[offset] = len(state.hands[(seat + offset) % n]) / _HAND_SIZE_SCALE

    obs = np.concatenate(
        [
            value_histogram(state.hands[seat]),
            value_histogram(table_cards),
            np.array([len(table_cards) / NUM_VALUES], dtype=np.float32),
            _one_hot(owner_rel, MAX_SEATS),
            np.array([1.0 if state.can_seat_scout(seat) else 0.0], dtype=np.float32),
            sizes,
            _one_hot(n - 2, 3),
        ]
    )
    assert obs.shape == (OBS_SIZE,)
    return obs


def _candidate_shows(hand: Sequence[Card]) -> List[List[Card]]:
    """One representative card set per same-value group size and per run."""
    ordered = sorted(hand, key=lambda c: c.effective_value())
    groups = {
        value: list(cards)
        for value, cards in groupby(ordered, key=lambda c: c.effective_value())
    }
    shows: List[List[Card]] = []
    for cards in groups.values():
        for size in range(1, len(cards) + 1):
            shows.append(cards[:size])

    values = sorted(groups)
    for start_idx, start in enumerate(values):
        run = [groups[start][0]]
        for v in values[start_idx + 1:]:
            if v != run[-1].effective_value() + 1:
                break
            run = run + [groups[v][0]]
            shows.append(run)
    return shows


def legal_moves(state: RoundState, seat: int) -> List[Move]:
    """All canonical legal moves for ``seat``; empty if it cannot act now."""
    if state.phase != Phase.AWAITING_TURN or state.current_seat != seat:
        return []
    table_cards = state.table.cards if state.table is not None else None
    moves: List[Move] = [
        Show(card_ids=tuple(c.id for c in cards))
        for cards in _candidate_shows(state.hands[seat])
        if beats(cards, table_cards)
    ]
    if state.can_seat_scout(seat):
        assert state.table is not None
        moves.extend(Scout(position=i) for i in range(len(state.table.cards)))
    if state.can_seat_pass(seat):
        moves.append(Pass())
    return moves


__all__ = [
    "NUM_VALUES",
    "OBS_SIZE",
    "value_histogram",
    "encode_observation",
    "legal_moves",
]
