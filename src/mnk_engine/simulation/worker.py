"""
Worker process logic for parallel self-play.

Workers receive MatchJob objects and return MatchResult objects. Every
worker builds its own drivers, so no cache is ever shared between games.
"""

from __future__ import annotations

import signal

from mnk_engine.core.types import Action
from mnk_engine.simulation.jobs import MatchJob, MatchResult
from mnk_engine.utils.factory import create_searchers, create_state


def worker_init() -> None:
    """Workers ignore SIGINT; only the main process handles Ctrl+C."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)


def play_match(job: MatchJob) -> MatchResult:
    """Play a single game to the end."""
    state = create_state(job.config)
    moves = []

    for row, col in job.opening:
        if state.is_terminal():
            break
        action = Action(state.current_player, row, col)
        state = state.take_action(action)
        moves.append(action)

    searchers = create_searchers(job.config, job.engine_configs)
    fallbacks = 0

    while not state.is_terminal():
        result = searchers[state.current_player].analyse(state)
        if result.fallback:
            fallbacks += 1
        state = state.take_action(result.action)
        moves.append(result.action)

    return MatchResult(
        winner=state.winner,
        moves=moves,
        utility=state.get_utility(),
        fallbacks=fallbacks,
    )
