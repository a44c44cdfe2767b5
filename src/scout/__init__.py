"""Scout card game engine (one human seat vs computer seats)."""

__version__ = "0.1.0"

from .deck import Card, RANKS, make_card, make_deck_40, shuffle_deck
from .deal import Deal, deal_hands, HAND_SIZE
from .errors import ScoutError, InvalidPlay, PlayTooWeak, IllegalAction, ConfigurationError
from .play import is_valid_play, beats
from .scoring import hand_score, round_points, match_winners
from .moves import Show, Scout, Pass, Move, MoveRecord
from .game import (
    HUMAN_SEAT,
    Phase,
    TablePlay,
    RoundState,
    RoundOutcome,
    run_round,
    play_one_round,
)
from .ai import choose_ai_move, greedy_get_move
from .match import MatchConfig, RoundRecord, Match, run_match
from .session import ScoutSession, ActionResult, RoundSnapshot
from .pacing import PacingConfig, PacedSession
