"""
Time-bounded iterative deepening over the Minimax engine.

Searches depth 1, 2, 3, ... and keeps the best action of the deepest depth
that completed. The time budget and the cancel flag are checked before each
depth and inside every action loop; a depth interrupted halfway is thrown
away. A single action loop iteration is never preempted, so one deep
sub-search can overrun the deadline.

The cache (when enabled) persists across depths of one call: shallower
results order the moves of deeper iterations.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from mnk_engine.core.errors import IllegalActionError, InvalidConfigurationError, SearchInterrupted
from mnk_engine.core.signature import signature_digest
from mnk_engine.core.types import SearchResult
from mnk_engine.games.game_base import GameState
from mnk_engine.search.evaluation import EvaluationFunction
from mnk_engine.search.expansion import ExpansionPolicy, linear_expansion
from mnk_engine.search.minimax import Minimax

logger = logging.getLogger(__name__)


class IterativeDeepening:
    """
    Anytime search driver.

    Always returns a legal action for a non-terminal state: if not even
    depth 1 finishes in time, the first action of the expansion policy is
    returned and the result is flagged as a fallback.
    """

    def __init__(
        self,
        time_budget_ms: float,
        max_depth: int,
        evaluation_function: EvaluationFunction,
        expansion_policy: ExpansionPolicy = linear_expansion,
        use_cache: bool = False,
        use_pruning: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        if time_budget_ms < 0:
            raise InvalidConfigurationError(f"time_budget_ms must be >= 0 (got {time_budget_ms})")
        if max_depth < 1:
            raise InvalidConfigurationError(f"max_depth must be >= 1 (got {max_depth})")

        self.time_budget_ms = time_budget_ms
        self.max_depth = max_depth
        self.engine = Minimax(
            depth_limit=1,
            evaluation_function=evaluation_function,
            expansion_policy=expansion_policy,
            use_cache=use_cache,
            use_pruning=use_pruning,
        )
        self._clock = clock
        self._cancelled = threading.Event()
        self._deadline = 0.0
        self.last_result: Optional[SearchResult] = None

    @property
    def cache(self):
        return self.engine.cache

    @property
    def expansion_policy(self) -> ExpansionPolicy:
        return self.engine.expansion_policy

    def cancel(self) -> None:
        """
        Ask the current or next search to stop at its next checkpoint (thread-safe).

        The request holds until a search consumes it, so a cancel that lands
        before a queued search starts still stops that search.
        """
        self._cancelled.set()

    def reset_cancel(self) -> None:
        """Drop a pending cancel request that no search has consumed yet."""
        self._cancelled.clear()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def _out_of_time(self) -> bool:
        return self._cancelled.is_set() or self._clock() >= self._deadline

    def search(self, state: GameState, reset_cache: bool = True) -> Any:
        return self.analyse(state, reset_cache).action

    def analyse(self, state: GameState, reset_cache: bool = True) -> SearchResult:
        """Run iterative deepening from `state` and return the deepest completed result."""
        if state.is_terminal():
            raise IllegalActionError("Cannot search from a terminal state")

        start = self._clock()
        self._deadline = start + self.time_budget_ms / 1000
        if reset_cache and self.engine.cache is not None:
            self.engine.cache.clear()

        root = signature_digest(state.signature()) if logger.isEnabledFor(logging.DEBUG) else ""
        best: Optional[SearchResult] = None
        self.engine.should_stop = self._out_of_time
        try:
            depth = 1
            while depth <= self.max_depth and not self._out_of_time():
                self.engine.depth_limit = depth
                try:
                    result = self.engine.analyse(state, reset_cache=False)
                except SearchInterrupted:
                    logger.debug("root %s: depth %d interrupted", root, depth)
                    break

                best = result
                logger.debug(
                    "root %s: depth %d -> %s value=%s nodes=%d (%.1f ms)",
                    root, depth, result.action, result.value, result.nodes, result.elapsed_ms,
                )
                if self.engine.stats.resolved:
                    # every line ended in a finished game: deeper search is identical
                    break
                depth += 1
        finally:
            self.engine.should_stop = None
            self._cancelled.clear()

        elapsed_ms = (self._clock() - start) * 1000
        if best is None:
            logger.warning(
                "No search depth completed within %.0f ms; returning first available action",
                self.time_budget_ms,
            )
            actions = self.engine.expansion_policy(state, 0, self.engine.cache)
            if not actions:
                raise IllegalActionError("No legal actions to search")
            best = SearchResult(action=actions[0], value=None, depth=0, fallback=True)

        best.elapsed_ms = elapsed_ms
        self.last_result = best
        return best
