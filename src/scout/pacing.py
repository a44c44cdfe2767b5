"""
Paced play on an asyncio event loop.

Computer seats "think" and pause after moving so observers can follow the
game. Pauses are plain ``asyncio.sleep`` steps; every state transition runs
under one ``asyncio.Lock`` so only one actor mutates the round at a time.
A computer move that has started always completes.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional

from .session import ActionResult, ScoutSession


@dataclass(frozen=True)
class PacingConfig:
    """Delays in seconds."""

    turn_delay: float = 1.0
    think_delay: float = 1.5
    show_delay: float = 1.0
    scout_delay: float = 1.0
    pass_delay: float = 1.5
    human_show_delay: float = 0.5
    human_scout_delay: float = 0.4

    @classmethod
    def instant(cls) -> "PacingConfig":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


class PacedSession:
    """
    Async wrapper around ``ScoutSession``.

    Human inputs apply immediately, pause, then let the computer seats play
    until the human is up again (or the round ends). The computer results are
    attached to the human result as ``info["ai_results"]``.
    ``on_update`` is called after every accepted or rejected transition.
    """

    def __init__(
        self,
        session: ScoutSession,
        pacing: Optional[PacingConfig] = None,
        on_update: Optional[Callable[[ActionResult], None]] = None,
    ) -> None:
        self.session = session
        self.pacing = pacing or PacingConfig()
        self.on_update = on_update
        self._lock = asyncio.Lock()

    async def start_match(self, total_rounds: int = 5, num_players: int = 2) -> ActionResult:
        return await self._human(self.session.start_match, total_rounds, num_players)

    async def next_round(self) -> ActionResult:
        return await self._human(self.session.next_round)

    async def toggle_card_flip(self, card_id: str) -> ActionResult:
        return await self._human(self.session.toggle_card_flip, card_id)

    async def lock_in_hand_orientation(self) -> ActionResult:
        return await self._human(self.session.lock_in_hand_orientation)

    async def submit_show(self, card_ids) -> ActionResult:
        return await self._human(
            self.session.submit_show, card_ids, delay=self.pacing.human_show_delay
        )

    async def submit_scout(self, table_position: int) -> ActionResult:
        return await self._human(self.session.submit_scout, table_position)

    async def confirm_scout_placement(self, hand_insert_index: int, flipped: bool = False) -> ActionResult:
        return await self._human(
            self.session.confirm_scout_placement,
            hand_insert_index,
            flipped,
            delay=self.pacing.human_scout_delay,
        )

    async def submit_pass(self) -> ActionResult:
        return await self._human(self.session.submit_pass, delay=self.pacing.pass_delay)

    async def run_ai_turns(self) -> List[ActionResult]:
        """Play computer seats one at a time, with pauses, until none is up."""
        results: List[ActionResult] = []
        while self.session.is_ai_turn():
            await asyncio.sleep(self.pacing.turn_delay)
            async with self._lock:
                if not self.session.is_ai_turn():
                    break
                self.session.begin_ai_turn()
            await asyncio.sleep(self.pacing.think_delay)
            async with self._lock:
                result = self.session.play_ai_turn()
            self._notify(result)
            results.append(result)
            await asyncio.sleep(self._post_move_delay(result))
        return results

    # ---- Internal helpers ----

    async def _human(self, method, *args, delay: float = 0.0) -> ActionResult:
        async with self._lock:
            result = method(*args)
        self._notify(result)
        if not result.ok:
            return result
        if delay:
            await asyncio.sleep(delay)
        ai_results = await self.run_ai_turns()
        if ai_results:
            result.info["ai_results"] = ai_results
        return result

    def _post_move_delay(self, result: ActionResult) -> float:
        state = self.session.round
        action = state.last_action if state is not None else None
        if not result.ok:
            return 0.0
        if action == "pass":
            return self.pacing.pass_delay
        if action == "scout":
            return self.pacing.scout_delay
        return self.pacing.show_delay

    def _notify(self, result: ActionResult) -> None:
        if self.on_update is not None:
            self.on_update(result)
