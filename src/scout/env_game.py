"""
Environment wrapper around ``ScoutSession`` for scripted or learning agents.

Design:
- Single-agent view: seat 0 is driven by the caller, the other seats by the
  session's computer engine.
- Episode = one match. Reward is given only at the end of the match and
  equals seat 0's cumulative score.
- Each step exposes a decision point for seat 0: an observation and the list
  of legal moves. The action is an index into that list.
"""
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import List, Optional

import numpy as np

from .env import OBS_SIZE, encode_observation, legal_moves
from .game import HUMAN_SEAT, Phase
from .match import MatchConfig
from .moves import Move
from .session import ScoutSession


@dataclass
class StepResult:
    """Container returned by ScoutEnv.step/reset."""

    obs: np.ndarray
    reward: float
    done: bool
    info: dict
    legal_moves: List[Move]


class ScoutEnv:
    """
    Scout match environment (seat 0 learning, full match episodes).

    Public API (Gym-like, no external dependency):
      - reset() -> StepResult
      - step(action: int) -> StepResult
    """

    def __init__(
        self,
        num_rounds: int = 5,
        num_players: int = 2,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = MatchConfig(total_rounds=num_rounds, num_players=num_players)
        self.rng = rng or random.Random()
        self.session = ScoutSession(rng=self.rng)

    # ---- Public API ----

    def reset(self) -> StepResult:
        """Start a new match and return the first decision for seat 0."""
        self._expect(self.session.start_match(self.config.total_rounds, self.config.num_players))
        return self._advance_until_decision_or_match_end()

    def step(self, action: int) -> StepResult:
        """Apply ``legal_moves[action]`` for seat 0 and play on to its next decision."""
        if self.session.is_match_over:
            return self._terminal(reward=0.0)
        state = self.session.round
        assert state is not None
        moves = legal_moves(state, HUMAN_SEAT)
        if not 0 <= action < len(moves):
            raise ValueError(f"Invalid action {action}; {len(moves)} legal moves")
        self._expect(self.session.submit_move(moves[action]))
        return self._advance_until_decision_or_match_end()

    # ---- Internal helpers ----

    def _advance_until_decision_or_match_end(self) -> StepResult:
        while not self.session.is_match_over:
            state = self.session.round
            assert state is not None
            if state.phase == Phase.ROUND_ENDED:
                self._expect(self.session.next_round())
                continue
            if state.phase == Phase.ORIENTING_HANDS:
                self._expect(self.session.lock_in_hand_orientation())
                continue
            if self.session.is_ai_turn():
                self._expect(self.session.play_ai_turn())
                continue
            moves = legal_moves(state, HUMAN_SEAT)
            if not moves:
                raise RuntimeError("No legal moves available for seat 0")
            return StepResult(
                obs=encode_observation(state, HUMAN_SEAT),
                reward=0.0,
                done=False,
                info={
                    "phase": state.phase.value,
                    "round": self.session.match.round_number if self.session.match else 0,
                    "table_size": len(state.table_cards()),
                },
                legal_moves=moves,
            )
        return self._terminal()

    def _terminal(self, reward: Optional[float] = None) -> StepResult:
        totals = self.session.scores()
        if reward is None:
            reward = float(totals[HUMAN_SEAT])
        return StepResult(
            obs=np.zeros(OBS_SIZE, dtype=np.float32),
            reward=reward,
            done=True,
            info={
                "phase": "done",
                "totals": totals,
                "winners": self.session.winners(),
            },
            legal_moves=[],
        )

    @staticmethod
    def _expect(result) -> None:
        if not result.ok:
            raise RuntimeError(f"Environment transition rejected: {result.message}")
