"""
Command-line interface: play against the computer in a terminal, or run
simulated matches.

Usage examples (after installing in editable mode):

    python -m scout.cli play --rounds 5 --players 3
    python -m scout.cli simulate --agent random --matches 20 --players 4
"""
from __future__ import annotations

import argparse
import asyncio
import random
from typing import Optional, Sequence

from .agents import GreedyAgent, RandomAgent
from .deck import Card
from .env_game import ScoutEnv
from .game import HUMAN_SEAT
from .match import SUPPORTED_PLAYERS, SUPPORTED_ROUNDS, MatchConfig, run_match
from .pacing import PacedSession, PacingConfig
from .scoring import match_winners
from .session import ActionResult, ScoutSession, seat_name

PLAY_HELP = """Commands (positions are 1-based):
  flip N          flip card N of your hand (before lock)
  lock            lock in your hand orientation and start playing
  show N [N ...]  show the cards at these hand positions
  scout N         take card N from the table
  place N [flip]  put the scouted card before hand position N (len+1 = end)
  pass            concede the round to the table owner
  next            deal the next round
  help            show this text
  quit            leave the game"""


def _hand_line(cards: Sequence[Card]) -> str:
    return "  ".join(f"[{i + 1}] {c}" for i, c in enumerate(cards))


def _print_state(session: ScoutSession) -> None:
    snap = session.snapshot()
    if snap is None:
        return
    print()
    print(f"Round {snap.round_number}/{snap.total_rounds}  phase={snap.phase.value}  "
          f"scores={list(session.scores())}")
    if snap.table:
        owner = seat_name(snap.table_owner) if snap.table_owner is not None else "-"
        print(f"Table ({owner}): {_hand_line(snap.table)}")
    else:
        print("Table: empty")
    for seat, size in enumerate(snap.hand_sizes):
        if seat != HUMAN_SEAT:
            print(f"{seat_name(seat)}: {size} cards")
    print(f"Your hand: {_hand_line(session.hand())}")
    if snap.pending_scout is not None:
        print(f"Scouted card waiting for placement: {snap.pending_scout}")


def _print_result(result: ActionResult) -> None:
    print(("" if result.ok else "! ") + result.message)


async def _play_loop(paced: PacedSession) -> None:
    session = paced.session
    _print_state(session)
    while True:
        if session.is_match_over:
            winners = ", ".join(seat_name(s) for s in session.winners())
            print(f"\nMatch over. Final scores: {list(session.scores())}. Winner(s): {winners}")
            return
        line = (await asyncio.to_thread(input, "> ")).strip()
        if not line:
            continue
        cmd, *rest = line.split()
        try:
            numbers = [int(x) for x in rest if x != "flip"]
        except ValueError:
            print("! Positions must be numbers")
            continue

        if cmd == "quit":
            return
        if cmd == "help":
            print(PLAY_HELP)
            continue
        if cmd == "flip" and len(numbers) == 1:
            hand = session.hand()
            if not 1 <= numbers[0] <= len(hand):
                print("! No such card")
                continue
            await paced.toggle_card_flip(hand[numbers[0] - 1].id)
        elif cmd == "lock":
            await paced.lock_in_hand_orientation()
        elif cmd == "show" and numbers:
            hand = session.hand()
            if any(not 1 <= n <= len(hand) for n in numbers):
                print("! No such card")
                continue
            await paced.submit_show([hand[n - 1].id for n in numbers])
        elif cmd == "scout" and len(numbers) == 1:
            await paced.submit_scout(numbers[0] - 1)
        elif cmd == "place" and len(numbers) == 1:
            await paced.confirm_scout_placement(numbers[0] - 1, flipped="flip" in rest)
        elif cmd == "pass":
            await paced.submit_pass()
        elif cmd == "next":
            await paced.next_round()
        else:
            print("! Unknown command; type 'help'")
            continue
        _print_state(session)


def _add_play_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "play",
        help="Play a match against computer opponents in the terminal.",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        choices=SUPPORTED_ROUNDS,
        default=5,
        help="Number of rounds in the match.",
    )
    parser.add_argument(
        "--players",
        type=int,
        choices=SUPPORTED_PLAYERS,
        default=2,
        help="Number of seats including you.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the deal and the computer players.",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Skip the pauses between computer moves.",
    )
    parser.set_defaults(func=_cmd_play)


def _cmd_play(args: argparse.Namespace) -> None:
    session = ScoutSession(rng=random.Random(args.seed))
    pacing = PacingConfig.instant() if args.fast else PacingConfig()
    paced = PacedSession(session, pacing=pacing, on_update=_print_result)

    async def run() -> None:
        result = await paced.start_match(args.rounds, args.players)
        if not result.ok:
            return
        print(PLAY_HELP)
        await _play_loop(paced)

    asyncio.run(run())


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Run matches with an agent in seat 0 against the computer seats.",
    )
    parser.add_argument(
        "--agent",
        choices=["greedy", "random"],
        default="greedy",
        help="Policy for seat 0.",
    )
    parser.add_argument(
        "--matches",
        type=int,
        default=10,
        help="Number of matches to play.",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        choices=SUPPORTED_ROUNDS,
        default=5,
        help="Rounds per match.",
    )
    parser.add_argument(
        "--players",
        type=int,
        choices=SUPPORTED_PLAYERS,
        default=2,
        help="Number of seats.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _run_env_match(env: ScoutEnv, agent: RandomAgent) -> tuple[tuple[int, ...], list[int]]:
    step = env.reset()
    while not step.done:
        step = env.step(agent.act(step.obs, step.legal_moves))
    return tuple(step.info["totals"]), list(step.info["winners"])


def _cmd_simulate(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    config = MatchConfig(total_rounds=args.rounds, num_players=args.players)
    env = ScoutEnv(num_rounds=args.rounds, num_players=args.players, rng=rng)
    random_agent = RandomAgent(seed=args.seed)
    greedy_agent = GreedyAgent(seed=args.seed)

    total_return = 0.0
    wins = 0
    for match in range(1, args.matches + 1):
        if args.agent == "random":
            totals, winners = _run_env_match(env, random_agent)
        else:
            totals, _records = run_match(config, greedy_agent.get_move, rng=rng)
            winners = match_winners(totals)
        total_return += totals[HUMAN_SEAT]
        if HUMAN_SEAT in winners:
            wins += 1
        print(f"[match {match}/{args.matches}] return={totals[HUMAN_SEAT]} totals={list(totals)}")

    avg_return = total_return / float(args.matches)
    print(f"Average return over {args.matches} matches: {avg_return:.2f}; seat 0 won {wins}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scout", description="Scout card game CLI.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_play_parser(subparsers)
    _add_simulate_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
