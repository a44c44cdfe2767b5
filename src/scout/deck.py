"""
Scout deck: 40 dual-faced cards (ranks 1..10, four copies each, no suits).
Each card shows its rank on one face and the complementary rank (11 - value)
on the other; flipping changes which face is active for the rules.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

RANKS: tuple[str, ...] = ("1", "2", "3", "4", "5", "6", "7", "8", "9", "10")
COPIES_PER_RANK = 4
DECK_SIZE = len(RANKS) * COPIES_PER_RANK  # 40

# Sum of the two faces of every card.
FACE_SUM = len(RANKS) + 1  # 11


@dataclass
class Card:
    """
    A single card.

    ``value`` always equals the un-flipped numeric rank; ``flipped`` only
    selects which face is active. ``id`` is unique within a deck.
    """

    rank: str
    value: int
    id: str
    flipped: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.value <= len(RANKS):
            raise ValueError(f"Card value out of range: {self.value}")
        if RANKS[self.value - 1] != self.rank:
            raise ValueError(f"Rank {self.rank!r} does not match value {self.value}")

    def effective_value(self) -> int:
        """Numeric value of the active face."""
        return FACE_SUM - self.value if self.flipped else self.value

    def effective_rank(self) -> str:
        """Rank label of the active face."""
        return RANKS[self.effective_value() - 1]

    def flip(self) -> None:
        self.flipped = not self.flipped

    def copy(self) -> "Card":
        return Card(rank=self.rank, value=self.value, id=self.id, flipped=self.flipped)

    def __str__(self) -> str:
        if self.flipped:
            return f"{self.effective_rank()}/{self.rank}"
        return f"{self.rank}/{RANKS[FACE_SUM - self.value - 1]}"

    def __repr__(self) -> str:
        return f"Card({self.id}{', flipped' if self.flipped else ''})"


def make_card(value: int, copy: int = 0, flipped: bool = False) -> Card:
    rank = RANKS[value - 1]
    return Card(rank=rank, value=value, id=f"{rank}-{copy}", flipped=flipped)


def make_deck_40() -> list[Card]:
    """Build a fresh, ordered 40-card deck, every card in normal orientation."""
    deck: list[Card] = []
    for value in range(1, len(RANKS) + 1):
        for copy in range(COPIES_PER_RANK):
            deck.append(make_card(value, copy))
    return deck


def shuffle_deck(deck: list[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled copy of ``deck`` (Fisher-Yates via ``Random.shuffle``)."""
    if rng is None:
        rng = random.Random()
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def cards_label(cards: list[Card]) -> str:
    """Comma-separated effective rank labels, e.g. ``"3, 4, 5"``."""
    return ", ".join(c.effective_rank() for c in cards)
