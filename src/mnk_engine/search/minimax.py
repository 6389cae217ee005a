"""
Depth-limited minimax with optional alpha-beta pruning and transposition cache.

Values are always from the root mover's point of view: nodes where the root
mover is to play maximize, every other node minimizes (with two players this
is plain depth parity).

    max_value(state, depth, alpha, beta):
        if terminal or depth == depth_limit:
            return evaluate(state, depth)          # never cached
        probe cache -> value, or narrowed (alpha, beta)
        for action in expansion_policy(state, depth, cache):
            value = max(value, min_value(child, depth + 1, alpha, beta))
            if value >= beta: break                # beta cutoff
            alpha = max(alpha, value)
        store (bound_flag(value, alpha_in, beta_in), value)
        return value

min_value is symmetric. With pruning disabled the window is (None, None):
no cutoffs happen and every stored value is EXACT.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Hashable, List, Optional, Tuple

from mnk_engine.core.errors import IllegalActionError, InvalidConfigurationError, SearchInterrupted
from mnk_engine.core.types import NEG_INF, POS_INF, BoundFlag, SearchResult, SearchStats
from mnk_engine.games.game_base import GameState
from mnk_engine.search.cache import TranspositionCache, bound_flag
from mnk_engine.search.evaluation import EvaluationFunction, root_player
from mnk_engine.search.expansion import ExpansionPolicy, linear_expansion

logger = logging.getLogger(__name__)

Window = Optional[float]


class Minimax:
    """
    Minimax / alpha-beta search to a fixed depth limit.

    The cache, when enabled, belongs to this instance alone and survives
    between calls unless the caller asks for a reset.
    """

    def __init__(
        self,
        depth_limit: int,
        evaluation_function: EvaluationFunction,
        expansion_policy: ExpansionPolicy = linear_expansion,
        use_cache: bool = False,
        use_pruning: bool = True,
    ):
        if depth_limit < 1:
            raise InvalidConfigurationError(f"depth_limit must be >= 1 (got {depth_limit})")

        self.depth_limit = depth_limit
        self.evaluation_function = evaluation_function
        self.expansion_policy = expansion_policy
        self.use_pruning = use_pruning
        self.cache: Optional[TranspositionCache] = TranspositionCache() if use_cache else None

        self.stats = SearchStats()
        # Checked inside every action loop; raising SearchInterrupted aborts the search
        self.should_stop: Optional[Callable[[], bool]] = None
        self._root_player: Optional[Hashable] = None

    @property
    def use_cache(self) -> bool:
        return self.cache is not None

    # ------------------------------------------------------------------
    # Root
    # ------------------------------------------------------------------

    def search(self, state: GameState, reset_cache: bool = True) -> Any:
        """Best action for the player to move (first one on ties)."""
        return self.analyse(state, reset_cache).action

    def analyse(self, state: GameState, reset_cache: bool = True) -> SearchResult:
        """
        Search from `state` and report every root action's value.

        With pruning, values of root actions after the first are bounds
        (a value at or below the running best means "no better than").
        """
        if state.is_terminal():
            raise IllegalActionError("Cannot search from a terminal state")
        if reset_cache and self.cache is not None:
            self.cache.clear()

        start = time.perf_counter()
        self.stats.reset()
        self._root_player = state.current_player

        alpha: Window
        beta: Window
        if self.use_pruning:
            alpha, beta = NEG_INF, POS_INF
        else:
            alpha = beta = None

        actions = self.expansion_policy(state, 0, self.cache)
        if not actions:
            raise IllegalActionError("No legal actions to search")

        self.stats.nodes += 1
        best_value = NEG_INF
        best_action = actions[0]
        action_values: List[Tuple[Any, float]] = []

        for action in actions:
            self._checkpoint()
            value = self._value(state.take_action(action), 1, alpha, beta)
            action_values.append((action, value))
            if value > best_value:
                best_value, best_action = value, action
            if alpha is not None and beta is not None:
                if best_value >= beta:
                    break
                alpha = max(alpha, best_value)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "depth %d: %s = %s (%d nodes, %.1f ms)",
            self.depth_limit, best_action, best_value, self.stats.nodes, elapsed_ms,
        )
        return SearchResult(
            action=best_action,
            value=best_value,
            depth=self.depth_limit,
            action_values=action_values,
            nodes=self.stats.nodes,
            elapsed_ms=elapsed_ms,
        )

    # ------------------------------------------------------------------
    # Recursive evaluation
    # ------------------------------------------------------------------

    def evaluate(
        self,
        state: GameState,
        depth: int,
        alpha: Window = None,
        beta: Window = None,
    ) -> Tuple[float, BoundFlag]:
        """
        Value of `state`, reached `depth` plies below the root, and how it
        relates to the true minimax value given the window (alpha, beta).
        """
        self._root_player = root_player(state, depth)
        is_leaf = state.is_terminal() or depth >= self.depth_limit
        value = self._value(state, depth, alpha, beta)
        if is_leaf:
            return value, BoundFlag.EXACT
        return value, bound_flag(value, alpha, beta)

    def _value(self, state: GameState, depth: int, alpha: Window, beta: Window) -> float:
        if state.current_player == self._root_player:
            return self._max_value(state, depth, alpha, beta)
        return self._min_value(state, depth, alpha, beta)

    def _max_value(self, state: GameState, depth: int, alpha: Window, beta: Window) -> float:
        self.stats.nodes += 1
        if state.is_terminal() or depth >= self.depth_limit:
            return self._leaf(state, depth)

        key = None
        if self.cache is not None:
            key = state.signature()
            probe = self.cache.probe(key, depth, alpha, beta, self.depth_limit)
            if probe.value is not None:
                self.stats.cache_hits += 1
                return probe.value
            alpha, beta = probe.alpha, probe.beta

        alpha_in, beta_in = alpha, beta
        value = NEG_INF
        for action in self.expansion_policy(state, depth, self.cache):
            self._checkpoint()
            value = max(value, self._value(state.take_action(action), depth + 1, alpha, beta))
            if alpha is not None and beta is not None:
                if value >= beta:
                    self.stats.cutoffs += 1
                    break
                alpha = max(alpha, value)

        if key is not None:
            self.cache.store(key, depth, bound_flag(value, alpha_in, beta_in), value, self.depth_limit)
        return value

    def _min_value(self, state: GameState, depth: int, alpha: Window, beta: Window) -> float:
        self.stats.nodes += 1
        if state.is_terminal() or depth >= self.depth_limit:
            return self._leaf(state, depth)

        key = None
        if self.cache is not None:
            key = state.signature()
            probe = self.cache.probe(key, depth, alpha, beta, self.depth_limit)
            if probe.value is not None:
                self.stats.cache_hits += 1
                return probe.value
            alpha, beta = probe.alpha, probe.beta

        alpha_in, beta_in = alpha, beta
        value = POS_INF
        for action in self.expansion_policy(state, depth, self.cache):
            self._checkpoint()
            value = min(value, self._value(state.take_action(action), depth + 1, alpha, beta))
            if alpha is not None and beta is not None:
                if value <= alpha:
                    self.stats.cutoffs += 1
                    break
                beta = min(beta, value)

        if key is not None:
            self.cache.store(key, depth, bound_flag(value, alpha_in, beta_in), value, self.depth_limit)
        return value

    def _leaf(self, state: GameState, depth: int) -> float:
        self.stats.leaves += 1
        if not state.is_terminal():
            self.stats.horizon_leaves += 1
        return self.evaluation_function(state, depth)

    def _checkpoint(self) -> None:
        if self.should_stop is not None and self.should_stop():
            raise SearchInterrupted(f"Search stopped at depth limit {self.depth_limit}")
