"""
MNK Engine - adversarial search for generalized tic-tac-toe (m,n,k games).

Depth-limited minimax with optional alpha-beta pruning, a bound-aware
transposition cache, and a time-bounded iterative-deepening driver, over a
bit-packed board with incremental win detection.

Quick Start:
    from mnk_engine import MNKState, IterativeDeepening, terminal_evaluation, cache_expansion

    state = MNKState(3, 3, 3, ["X", "O"])
    searcher = IterativeDeepening(
        time_budget_ms=1000, max_depth=9,
        evaluation_function=terminal_evaluation,
        expansion_policy=cache_expansion, use_cache=True,
    )
    state = state.take_action(searcher.search(state))

Modules:
    core       - Action, bound flags, errors, state signatures
    games      - GameState protocol, MNKState, win-line geometry
    search     - Minimax engine, transposition cache, move ordering, driver
    simulation - Parallel self-play between engine configurations
    debug      - Timing and cProfile helpers
"""

from mnk_engine.api import play_game, describe_result, search_in_background
from mnk_engine.core import (
    Action,
    BoundFlag,
    SearchResult,
    IllegalActionError,
    InvalidConfigurationError,
    CacheProtocolError,
)
from mnk_engine.games import GameState, MNKState
from mnk_engine.search import (
    Minimax,
    IterativeDeepening,
    TranspositionCache,
    linear_expansion,
    cache_expansion,
    terminal_evaluation,
)
from mnk_engine.utils.config import Config
from mnk_engine.utils.factory import create_state, create_searcher, create_searchers

__version__ = "1.0.0"

__all__ = [
    # Main API
    "play_game",
    "describe_result",
    "search_in_background",
    "create_state",
    "create_searcher",
    "create_searchers",
    "Config",
    # Games
    "GameState",
    "MNKState",
    # Search
    "Minimax",
    "IterativeDeepening",
    "TranspositionCache",
    "linear_expansion",
    "cache_expansion",
    "terminal_evaluation",
    # Types
    "Action",
    "BoundFlag",
    "SearchResult",
    # Errors
    "IllegalActionError",
    "InvalidConfigurationError",
    "CacheProtocolError",
]
