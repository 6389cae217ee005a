"""
Core types, constants, and data structures.

This module contains the fundamental types used throughout the engine:
- Action: a mark placed on a cell
- BoundFlag: how a cached search value relates to the true minimax value
- CacheEntry: one transposition cache record
- SearchResult / SearchStats: what a root search reports back
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, List, NamedTuple, Optional, Tuple


# ╔═════════════════════════════════════════════════════════════════════════════╗
# ║                          SCORE SENTINELS                                    ║
# ║                                                                             ║
# ║  Evaluation functions return finite scores. A proven win for the root       ║
# ║  mover scores WIN_SCORE minus the ply it happens at (faster wins first),    ║
# ║  a proven loss the negation. Anything with |score| >= WIN_THRESHOLD is      ║
# ║  a decided game.                                                            ║
# ╚═════════════════════════════════════════════════════════════════════════════╝

WIN_SCORE = 1_000_000.0
LOSS_SCORE = -WIN_SCORE
DRAW_SCORE = 0.0
WIN_THRESHOLD = WIN_SCORE / 2

# Root window for alpha-beta (no bound yet)
NEG_INF = -math.inf
POS_INF = math.inf

# Default mark for an empty cell
EMPTY_MARK = "-"


class Action(NamedTuple):
    """A player's mark placed at (row, col). Equal iff all three fields match."""

    player: Hashable
    row: int
    col: int

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"{self.player}@({self.row}, {self.col})"


class BoundFlag(Enum):
    """Relation between a cached value and the true minimax value."""

    EXACT = "exact"              # searched without a cutoff: the true value
    LOWER_BOUND = "lower_bound"  # beta cutoff: true value >= stored value
    UPPER_BOUND = "upper_bound"  # alpha cutoff: true value <= stored value


class CacheEntry(NamedTuple):
    """A transposition cache record.

    depth_limit is the horizon the value was searched under; entries from a
    different horizon are only ordering hints.
    """

    flag: BoundFlag
    value: float
    depth_limit: int


@dataclass
class SearchStats:
    """Counters accumulated over one root search."""

    nodes: int = 0
    leaves: int = 0
    horizon_leaves: int = 0  # leaves cut by the depth limit, not by game end
    cutoffs: int = 0
    cache_hits: int = 0

    def reset(self) -> None:
        self.nodes = 0
        self.leaves = 0
        self.horizon_leaves = 0
        self.cutoffs = 0
        self.cache_hits = 0

    @property
    def resolved(self) -> bool:
        """True if every leaf was a finished game (deeper search changes nothing)."""
        return self.leaves > 0 and self.horizon_leaves == 0


@dataclass
class SearchResult:
    """Outcome of a root search."""

    action: Action
    value: Optional[float]
    depth: int
    action_values: List[Tuple[Action, float]] = field(default_factory=list)
    nodes: int = 0
    elapsed_ms: float = 0.0
    fallback: bool = False

    @property
    def is_decided(self) -> bool:
        """True if the value is a proven win or loss for the root mover."""
        return self.value is not None and abs(self.value) >= WIN_THRESHOLD
