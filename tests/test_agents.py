"""Tests for baseline agents."""
import random

import pytest

from scout.agents import GreedyAgent, RandomAgent
from scout.deal import deal_hands
from scout.env import legal_moves
from scout.game import RoundState
from scout.moves import Pass, Show


def test_random_agent_picks_a_legal_index():
    agent = RandomAgent(seed=123)
    obs = [0.0, 1.0, 2.0]  # dummy; RandomAgent ignores obs content
    legal = [Show(card_ids=("1-0",)), Show(card_ids=("2-0",)), Pass()]

    picks = {agent.act(obs, legal) for _ in range(50)}
    assert picks <= {0, 1, 2}
    assert len(picks) > 1


def test_random_agent_without_moves_raises():
    with pytest.raises(ValueError):
        RandomAgent(seed=1).act([], [])


def test_agents_return_legal_moves_for_the_current_seat():
    state = RoundState(deal_hands(2, rng=random.Random(4)))
    state.lock_in()
    move = RandomAgent(seed=4).get_move(state, 0)
    assert move in legal_moves(state, 0)

    state.apply_move(0, move)
    greedy = GreedyAgent(seed=4).get_move(state, 1)
    state.apply_move(1, greedy)
    assert len(state.moves) == 2
