"""
Expansion policies: (state, depth, cache) -> ordered actions.

Policies are pure: they never mutate the state and never write the cache.
Ordering only affects how much alpha-beta can prune, never the value found.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from mnk_engine.games.game_base import GameState
from mnk_engine.search.cache import TranspositionCache

ExpansionPolicy = Callable[[GameState, int, Optional[TranspositionCache]], List[Any]]

# Score given to children with no cache entry (ordering only)
NEUTRAL_SCORE = 0.0


def linear_expansion(
    state: GameState, depth: int, cache: Optional[TranspositionCache] = None
) -> List[Any]:
    """Actions in the state's own (board scan) order."""
    return list(state.get_actions())


def cache_expansion(
    state: GameState, depth: int, cache: Optional[TranspositionCache] = None
) -> List[Any]:
    """
    Order actions by the cached value of the resulting child at depth + 1.

    Best-looking moves come first for the side to move: descending on the
    root mover's plies (every num_players-th ply, i.e. even depths with two
    players), ascending on the opponents'. The sort is stable, so ties keep
    board scan order. Falls back to linear order without cache data.
    """
    actions = list(state.get_actions())
    if not cache:
        return actions

    def score(action: Any) -> float:
        child = state.take_action(action)
        value = cache.value_hint(child.signature(), depth + 1)
        return NEUTRAL_SCORE if value is None else value

    maximizing = depth % len(state.turn_order) == 0
    return sorted(actions, key=score, reverse=maximizing)
