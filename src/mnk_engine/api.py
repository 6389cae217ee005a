"""
Public API for playing m,n,k games against the search engine.

Usage:
    from mnk_engine import Config, create_state, create_searchers, play_game

    config = Config(rows=4, cols=4, k=3, time_budget_ms=2000)
    state = create_state(config)
    play_game(state, create_searchers(config), human_players=["X"])
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Dict, Hashable, Iterable, Optional

from mnk_engine.core.errors import IllegalActionError, InvalidConfigurationError
from mnk_engine.core.types import Action
from mnk_engine.games.mnk import MNKState
from mnk_engine.search.iterative import IterativeDeepening

logger = logging.getLogger(__name__)


def describe_result(state: MNKState) -> str:
    """Human-readable outcome: "Tie!", "<mark> wins!" or "In progress"."""
    if not state.is_terminal():
        return "In progress"
    winner = state.winner
    return "Tie!" if winner is None else f"{winner} wins!"


def parse_move(text: str, player: Hashable) -> Action:
    """Parse "row,col" (0-based) into an Action for `player`."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'row,col', got {text!r}")
    row, col = (int(p) for p in parts)
    return Action(player, row, col)


def _ai_turn(state: MNKState, searcher: IterativeDeepening) -> MNKState:
    """Engine selects and applies a move. Returns the new state."""
    result = searcher.analyse(state)
    if result.fallback:
        print("(engine ran out of time and played the first available move)")
    return state.take_action(result.action)


def _human_turn(state: MNKState) -> MNKState:
    """Prompt human for a move, apply it, return the new state."""
    print(f"\nYour turn (Player {state.current_player})")
    print("Format: row,col (0-based, e.g. 0,2)")

    while True:
        raw = input("Move: ").strip()
        try:
            action = parse_move(raw, state.current_player)
        except ValueError as e:
            print(f"Invalid input: {e}")
            continue
        try:
            return state.take_action(action)
        except IllegalActionError:
            print("Please pick an empty cell on the board.")


def play_game(
    state: MNKState,
    searchers: Dict[Hashable, IterativeDeepening],
    human_players: Optional[Iterable[Hashable]] = None,
) -> MNKState:
    """
    Play from `state` until the game ends and return the final state.

    Parameters
    ----------
    state : MNKState
        Starting position (usually an empty board).
    searchers : Dict[mark, IterativeDeepening]
        Driver for every engine-controlled mark.
    human_players : iterable of marks, optional
        Marks whose moves are typed in on stdin.
    """
    human_set = set(human_players or [])
    missing = [m for m in state.player_marks if m not in human_set and m not in searchers]
    if missing:
        raise InvalidConfigurationError(f"No searcher or human for player(s) {missing}")

    print(state.state_string())

    try:
        while not state.is_terminal():
            current = state.current_player
            if current in human_set:
                state = _human_turn(state)
                print(f"\nYou played: {state.last_action.row},{state.last_action.col}")
            else:
                state = _ai_turn(state, searchers[current])
                print(f"\nAI (Player {current}) played: {state.last_action.row},{state.last_action.col}")

            print(state.state_string())

        print("\n" + "=" * 40)
        print(f"GAME OVER - {describe_result(state)}")
        print("=" * 40)

    except KeyboardInterrupt:
        print("\nInterrupted - stopping game.")
    except Exception:
        logger.exception("Fatal error in play loop")
        raise

    return state


def search_in_background(
    searcher: IterativeDeepening,
    state: MNKState,
    executor: Optional[Executor] = None,
) -> "Future[Any]":
    """
    Run searcher.search(state) off the calling thread.

    Call searcher.cancel() to make it return early (the best action of the
    deepest completed depth, or the fallback action). A stale cancel is
    dropped here, before submitting, so a cancel issued while the job is
    still queued is honoured.
    """
    searcher.reset_cancel()
    if executor is not None:
        return executor.submit(searcher.search, state)

    own = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mnk-search")
    try:
        return own.submit(searcher.search, state)
    finally:
        own.shutdown(wait=False)


__all__ = [
    "play_game",
    "describe_result",
    "parse_move",
    "search_in_background",
]
