"""
Profiling utility for search performance analysis.

Usage:
    from mnk_engine.debug.profiler import (
        profile_search,
        compare_engines,
        profiled,
        print_profile_summary,
    )

    # cProfile breakdown of one driver call
    print(profile_search(searcher, state))

    # Node counts for plain minimax vs alpha-beta vs alpha-beta + cache
    compare_engines(state, depth=4, evaluation_function=terminal_evaluation)

    # Accumulate counters of repeated engine runs under one label
    with profiled("ab/depth4", engine):
        engine.analyse(state)
    print_profile_summary()
"""

import cProfile
import io
import pstats
import re
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional

from mnk_engine.core.types import SearchStats
from mnk_engine.games.game_base import GameState
from mnk_engine.search.evaluation import EvaluationFunction
from mnk_engine.search.expansion import ExpansionPolicy, cache_expansion, linear_expansion
from mnk_engine.search.iterative import IterativeDeepening
from mnk_engine.search.minimax import Minimax


# ---------------------------------------------------------------------------
# Per-engine search counters
# ---------------------------------------------------------------------------

@dataclass
class EngineProfile:
    """Search counters summed over every run recorded under one label."""
    runs: int = 0
    total_ms: float = 0.0
    nodes: int = 0
    cutoffs: int = 0
    cache_hits: int = 0

    @property
    def nodes_per_ms(self) -> float:
        return self.nodes / self.total_ms if self.total_ms else 0.0

    def record(self, stats: SearchStats, elapsed_ms: float) -> None:
        self.runs += 1
        self.total_ms += elapsed_ms
        self.nodes += stats.nodes
        self.cutoffs += stats.cutoffs
        self.cache_hits += stats.cache_hits


_profiles: Dict[str, EngineProfile] = {}


@contextmanager
def profiled(label: str, engine: Minimax):
    """
    Time the block and add `engine.stats` to the profile named `label`.

    The engine resets its stats at every root search, so the block should
    run exactly one search.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        _profiles.setdefault(label, EngineProfile()).record(engine.stats, elapsed_ms)


def print_profile_summary():
    """Print the accumulated counters, slowest label first."""
    if not _profiles:
        print("No search profiles collected.")
        return

    print("\n" + "=" * 85)
    print(f"{'SEARCH PROFILE':^85}")
    print("=" * 85)
    print(f"{'Engine':<28} {'Runs':>5} {'Nodes':>10} {'Cutoffs':>9} {'Hits':>8} {'Total':>11} {'Nodes/ms':>9}")
    print("-" * 85)

    for label, prof in sorted(_profiles.items(), key=lambda x: x[1].total_ms, reverse=True):
        print(
            f"{label:<28} "
            f"{prof.runs:>5} "
            f"{prof.nodes:>10} "
            f"{prof.cutoffs:>9} "
            f"{prof.cache_hits:>8} "
            f"{prof.total_ms:>9.1f}ms "
            f"{prof.nodes_per_ms:>9.1f}"
        )

    print("=" * 85)


def clear_profiles():
    _profiles.clear()


def get_profiles() -> Dict[str, EngineProfile]:
    return _profiles.copy()


# ---------------------------------------------------------------------------
# cProfile-based Profiling
# ---------------------------------------------------------------------------

def _strip_paths(text: str) -> str:
    """Collapse site-packages and stdlib paths in cProfile output."""
    text = re.sub(r'[^\s(]*/site-packages/', '', text)
    return re.sub(r'/[^\s(]*/lib/python[\d.]*/(?!site-packages)', '', text)


def profile_search(
    searcher: IterativeDeepening,
    state: GameState,
    top_n: int = 20,
    sort_by: str = "cumulative",
) -> str:
    """Run one driver search under cProfile and return the formatted report."""
    pr = cProfile.Profile()
    pr.enable()
    start = time.perf_counter()
    result = searcher.analyse(state)
    elapsed = time.perf_counter() - start
    pr.disable()

    out = io.StringIO()
    out.write(
        f"search: {result.action} value={result.value} depth={result.depth} "
        f"wall={elapsed*1000:.1f}ms\n"
    )
    pstats.Stats(pr, stream=out).sort_stats(sort_by).print_stats(top_n)
    return _strip_paths(out.getvalue())


def compare_engines(
    state: GameState,
    depth: int,
    evaluation_function: EvaluationFunction,
    policies: Optional[Dict[str, ExpansionPolicy]] = None,
) -> List[dict]:
    """
    Search `state` at a fixed depth with every engine variant and print
    value, node count, cutoffs and cache hits side by side.

    The value column must be identical on every row. Each run is also
    recorded in the profile registry under "<engine>/<policy>".
    """
    policies = policies or {"linear": linear_expansion, "cache": cache_expansion}
    variants = [("minimax", False, False), ("alpha-beta", False, True), ("alpha-beta+cache", True, True)]

    rows = []
    for policy_name, policy in policies.items():
        for label, use_cache, use_pruning in variants:
            engine = Minimax(depth, evaluation_function, policy, use_cache, use_pruning)
            with profiled(f"{label}/{policy_name}", engine):
                result = engine.analyse(state)
            rows.append({
                "engine": label,
                "policy": policy_name,
                "value": result.value,
                "action": result.action,
                "nodes": engine.stats.nodes,
                "cutoffs": engine.stats.cutoffs,
                "cache_hits": engine.stats.cache_hits,
                "ms": result.elapsed_ms,
            })

    print(f"\n{'Engine':<20} {'Policy':<8} {'Value':>12} {'Nodes':>10} {'Cutoffs':>8} {'Hits':>7} {'ms':>9}  Action")
    print("-" * 92)
    for row in rows:
        print(
            f"{row['engine']:<20} {row['policy']:<8} {row['value']:>12} "
            f"{row['nodes']:>10} {row['cutoffs']:>8} {row['cache_hits']:>7} "
            f"{row['ms']:>9.1f}  {row['action']}"
        )
    return rows
