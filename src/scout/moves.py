"""
Moves a seat can make on its turn, and the per-round move log entry.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Show:
    """Play the cards with these ids from hand onto the table."""

    card_ids: tuple[str, ...]


@dataclass(frozen=True)
class Scout:
    """
    Take the card at ``position`` from the table play.

    ``insert_index`` None means append to the end of the hand; ``flipped``
    None keeps the orientation the card had on the table.
    """

    position: int
    insert_index: int | None = None
    flipped: bool | None = None


@dataclass(frozen=True)
class Pass:
    """Concede the round to the owner of the table play."""


Move = Union[Show, Scout, Pass]


@dataclass(frozen=True)
class MoveRecord:
    seat: int
    action: str  # "showed" | "scouted" | "passed"
    detail: str  # effective rank labels, or "—" for a pass


__all__ = ["Show", "Scout", "Pass", "Move", "MoveRecord"]
