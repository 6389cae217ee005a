"""
Search module - minimax / alpha-beta, transposition cache, move ordering,
and the iterative-deepening driver.
"""

from mnk_engine.search.cache import TranspositionCache, CacheProbe, bound_flag
from mnk_engine.search.evaluation import (
    EvaluationFunction,
    root_player,
    terminal_evaluation,
    zero_evaluation,
)
from mnk_engine.search.expansion import ExpansionPolicy, linear_expansion, cache_expansion
from mnk_engine.search.minimax import Minimax
from mnk_engine.search.iterative import IterativeDeepening

__all__ = [
    "TranspositionCache",
    "CacheProbe",
    "bound_flag",
    "EvaluationFunction",
    "root_player",
    "terminal_evaluation",
    "zero_evaluation",
    "ExpansionPolicy",
    "linear_expansion",
    "cache_expansion",
    "Minimax",
    "IterativeDeepening",
]
