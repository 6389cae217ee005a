"""
Factory functions for creating game states and search drivers.
"""

from typing import Dict, Hashable, Optional

from mnk_engine.games.mnk import MNKState
from mnk_engine.search.iterative import IterativeDeepening
from mnk_engine.utils.config import DEFAULT_CONFIG, Config


def create_state(config: Config = DEFAULT_CONFIG) -> MNKState:
    """
    Create an empty board for the configured geometry and players.

    Raises:
        InvalidConfigurationError: if k > max(rows, cols) or the marks clash
    """
    return MNKState(config.rows, config.cols, config.k, config.marks, config.empty_mark)


def create_searcher(config: Config = DEFAULT_CONFIG) -> IterativeDeepening:
    """Create an iterative-deepening driver from the engine settings."""
    return IterativeDeepening(
        time_budget_ms=config.time_budget_ms,
        max_depth=config.max_depth,
        evaluation_function=config.evaluation_function,
        expansion_policy=config.expansion_policy,
        use_cache=config.use_cache,
        use_pruning=config.use_pruning,
    )


def create_searchers(
    config: Config,
    engine_configs: Optional[Dict[Hashable, Config]] = None,
) -> Dict[Hashable, IterativeDeepening]:
    """
    One driver per player mark.

    Args:
        config: Board configuration (also the default engine settings)
        engine_configs: Optional per-mark overrides of the engine settings

    Returns:
        Dict mapping player mark to its own driver (caches are never shared)
    """
    engine_configs = engine_configs or {}
    return {
        mark: create_searcher(engine_configs.get(mark, config))
        for mark in config.marks
    }
