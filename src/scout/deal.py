"""
Distribution (deal) for 2, 3 and 4 players.
9 cards each, contiguous slices of the shuffled pack in seat order 0..N-1.
Cards left over after dealing are out of the round.
"""
from __future__ import annotations

import random
from typing import NamedTuple

from .deck import Card, make_deck_40, shuffle_deck
from .errors import ConfigurationError

HAND_SIZE = 9
MIN_PLAYERS = 2
MAX_PLAYERS = 4


class Deal(NamedTuple):
    """Result of a deal. Hands are lists (mutated during the round)."""
    hands: tuple[list[Card], ...]  # index = seat
    undealt: list[Card]


def deal_hands(
    num_players: int,
    deck: list[Card] | None = None,
    rng: random.Random | None = None,
) -> Deal:
    """
    Shuffle and deal HAND_SIZE cards to each seat.
    Seat i receives pack[i*9:(i+1)*9]; the rest is discarded for the round.
    """
    if deck is None:
        deck = make_deck_40()
    if num_players < 1 or HAND_SIZE * num_players > len(deck):
        raise ConfigurationError(
            f"Cannot deal {HAND_SIZE} cards to {num_players} players from {len(deck)} cards"
        )
    pack = shuffle_deck(deck, rng)

    hands = tuple(
        pack[HAND_SIZE * seat: HAND_SIZE * (seat + 1)] for seat in range(num_players)
    )
    return Deal(hands=hands, undealt=pack[HAND_SIZE * num_players:])


def next_seat(seat: int, num_players: int) -> int:
    """Turns rotate 0 -> 1 -> ... -> N-1 -> 0."""
    return (seat + 1) % num_players
