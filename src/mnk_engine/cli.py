"""
Command-line interface for playing m,n,k games against the engine.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from mnk_engine.api import play_game
from mnk_engine.simulation import DEFAULT_WORKER_COUNT, MatchRunner, make_jobs, tally
from mnk_engine.utils.config import (
    DEFAULT_COLS,
    DEFAULT_K,
    DEFAULT_MAX_DEPTH,
    DEFAULT_POLICY,
    DEFAULT_ROWS,
    DEFAULT_TIME_BUDGET_MS,
    EXPANSION_POLICIES,
    Config,
    parse_marks,
)
from mnk_engine.utils.factory import create_searchers, create_state


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play generalized tic-tac-toe (m,n,k games) against a minimax engine"
    )
    parser.add_argument("--rows", "-m", type=int, default=DEFAULT_ROWS,
                        help=f"Board rows (default: {DEFAULT_ROWS})")
    parser.add_argument("--cols", "-n", type=int, default=DEFAULT_COLS,
                        help=f"Board columns (default: {DEFAULT_COLS})")
    parser.add_argument("-k", type=int, default=DEFAULT_K,
                        help=f"Marks in a row needed to win (default: {DEFAULT_K})")
    parser.add_argument("--players", "-p", type=str, default="X,O",
                        help="Comma-separated player marks in turn order (default: X,O)")
    parser.add_argument("--human", type=str, default=None,
                        help="Comma-separated marks played by humans (default: the first mark)")
    parser.add_argument("--self-play", action="store_true",
                        help="Engine plays for every player")
    parser.add_argument("--ai-first", action="store_true",
                        help="Human plays the second mark instead of the first")
    parser.add_argument("--time-ms", "-t", type=float, default=DEFAULT_TIME_BUDGET_MS,
                        help=f"Search time budget per move in ms (default: {DEFAULT_TIME_BUDGET_MS})")
    parser.add_argument("--depth", "-d", type=int, default=DEFAULT_MAX_DEPTH,
                        help=f"Maximum search depth (default: {DEFAULT_MAX_DEPTH})")
    parser.add_argument("--policy", choices=list(EXPANSION_POLICIES.keys()), default=DEFAULT_POLICY,
                        help=f"Move ordering policy (default: {DEFAULT_POLICY})")
    parser.add_argument("--no-cache", action="store_true",
                        help="Disable the transposition cache")
    parser.add_argument("--no-prune", action="store_true",
                        help="Disable alpha-beta pruning (plain minimax)")
    parser.add_argument("--games", "-g", type=int, default=0,
                        help="Play this many self-play games in parallel and print a tally")
    parser.add_argument("--opening-moves", type=int, default=1,
                        help="Random forced opening moves per self-play game (default: 1)")
    parser.add_argument("--workers", "-w", type=int, default=None,
                        help="Worker processes for --games (default: CPU count - 1)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    return parser.parse_args(argv)


def parse_human_players(
    human_str: str | None, marks: Sequence[str], self_play: bool, ai_first: bool
) -> List[str]:
    """Parse and validate the human players argument."""
    if self_play and human_str is None:
        return []

    if human_str is None:
        if ai_first and len(marks) > 1:
            return [marks[1]]
        return [marks[0]]

    humans = [m.strip() for m in human_str.split(",") if m.strip()]
    invalid = [m for m in humans if m not in marks]
    if invalid:
        raise ValueError(
            f"Unknown human player mark(s): {invalid}. Players are {', '.join(marks)}."
        )
    return humans


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = Config(
        rows=args.rows,
        cols=args.cols,
        k=args.k,
        marks=parse_marks(args.players),
        time_budget_ms=args.time_ms,
        max_depth=args.depth,
        policy=args.policy,
        use_cache=not args.no_cache,
        use_pruning=not args.no_prune,
    )
    state = create_state(config)

    if args.games > 0:
        jobs = make_jobs(config, args.games, opening_moves=args.opening_moves)
        with MatchRunner(args.workers or DEFAULT_WORKER_COUNT) as runner:
            results = runner.run(jobs)
        print(f"{args.games} games on {config.rows}x{config.cols}, k={config.k}:")
        for outcome, count in sorted(tally(results).items(), key=lambda kv: str(kv[0])):
            print(f"  {outcome}: {count}")
        return

    human_players = parse_human_players(args.human, config.marks, args.self_play, args.ai_first)
    play_game(state, create_searchers(config), human_players=human_players)


if __name__ == "__main__":
    main()
