"""
Baseline agents and the generic policy interface.

The small ``Policy`` protocol is what ``ScoutEnv`` expects from whoever drives
seat 0: ``act(obs, legal_moves) -> index into legal_moves``.
``GreedyAgent`` plays seat 0 with the same engine the computer seats use.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from .ai import greedy_get_move
from .env import encode_observation, legal_moves
from .game import RoundState
from .moves import Move


class Policy(Protocol):
    """Stateless or stateful decision policy working on flat observations."""

    def act(self, obs: np.ndarray, legal_moves: Sequence[Move]) -> int:
        """Return an index into ``legal_moves``."""


@dataclass
class RandomAgent:
    """
    Baseline policy that picks uniformly among legal moves.

    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(obs, legal_moves)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, obs: np.ndarray, legal_moves: Sequence[Move]) -> int:
        if not legal_moves:
            raise ValueError("No legal moves available for RandomAgent")
        return self._rng.randrange(len(legal_moves))

    def get_move(self, state: RoundState, seat: int) -> Move:
        """``get_move`` callback form, for ``run_round`` / ``run_match``."""
        moves = legal_moves(state, seat)
        return moves[self.act(encode_observation(state, seat), moves)]


@dataclass
class GreedyAgent:
    """The computer-seat heuristic, usable wherever a callback is expected."""

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def get_move(self, state: RoundState, seat: int) -> Move:
        return greedy_get_move(state, seat, self._rng)


__all__ = ["Policy", "RandomAgent", "GreedyAgent"]
