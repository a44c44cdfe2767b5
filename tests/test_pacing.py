"""Tests for the asyncio pacing wrapper (zero delays)."""
import asyncio
import random

from scout.deal import Deal
from scout.deck import make_card
from scout.errors import IllegalAction
from scout.game import HUMAN_SEAT, Phase, RoundState
from scout.pacing import PacedSession, PacingConfig
from scout.session import ScoutSession


def _paced(*hands, updates=None) -> PacedSession:
    session = ScoutSession(rng=random.Random(0))
    session.start_match(1, len(hands))
    dealt = tuple([make_card(v, seat) for v in values] for seat, values in enumerate(hands))
    session.match.round = RoundState(Deal(hands=dealt, undealt=[]))
    on_update = updates.append if updates is not None else None
    return PacedSession(session, PacingConfig.instant(), on_update=on_update)


def test_default_pacing_delays():
    pacing = PacingConfig()
    assert pacing.think_delay == 1.5
    assert pacing.pass_delay == 1.5
    assert pacing.human_scout_delay == 0.4
    assert set(vars(PacingConfig.instant()).values()) == {0.0}


def test_human_show_triggers_computer_turns():
    updates = []
    paced = _paced([1, 2, 3], [5, 6, 7, 8], [4, 9], updates=updates)

    async def scenario():
        await paced.lock_in_hand_orientation()
        return await paced.submit_show(["1-0"])

    result = asyncio.run(scenario())
    assert result.ok
    ai_results = result.info["ai_results"]
    assert [r.info["seat"] for r in ai_results] == [1, 2]
    assert all(r.ok for r in ai_results)
    assert paced.session.round.current_seat == HUMAN_SEAT
    # lock-in, human show, two computer moves
    assert len(updates) == 4
    assert [c.value for c in paced.session.table()] == [9]


def test_rejected_input_does_not_run_computer_turns():
    updates = []
    paced = _paced([1, 2, 3], [5, 6, 7, 8], updates=updates)

    async def scenario():
        await paced.lock_in_hand_orientation()
        return await paced.submit_show(["1-0", "3-0"])

    result = asyncio.run(scenario())
    assert not result.ok
    assert "ai_results" not in result.info
    assert paced.session.round.current_seat == HUMAN_SEAT
    assert not updates[-1].ok


def test_scout_waits_for_placement():
    paced = _paced([1, 2, 3], [5, 6, 7, 8])

    async def scenario():
        await paced.lock_in_hand_orientation()
        await paced.submit_show(["1-0"])
        scouted = await paced.submit_scout(0)
        assert paced.session.round.phase == Phase.SCOUT_PLACEMENT
        assert "ai_results" not in scouted.info
        return await paced.confirm_scout_placement(1, flipped=False)

    result = asyncio.run(scenario())
    assert result.ok
    assert result.info["ai_results"]
    assert [c.value for c in paced.session.hand()][:3] == [2, 8, 3]


def test_concurrent_passes_apply_once():
    paced = _paced([2, 4], [9, 1])

    async def scenario():
        await paced.lock_in_hand_orientation()
        paced.session.submit_show(["4-0"])
        paced.session.submit_show(["9-1"], seat=1)
        return await asyncio.gather(paced.submit_pass(), paced.submit_pass())

    first, second = asyncio.run(scenario())
    assert [first.ok, second.ok].count(True) == 1
    rejected = second if first.ok else first
    assert isinstance(rejected.error, IllegalAction)
    assert len(paced.session.history()) == 1
    assert paced.session.scores() == (0, 2)
