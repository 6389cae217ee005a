"""
Job data structures for parallel self-play.

Defines the input (MatchJob) and output (MatchResult) types used
by worker processes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple, TYPE_CHECKING

from mnk_engine.core.types import Action

if TYPE_CHECKING:
    from mnk_engine.utils.config import Config


@dataclass(frozen=True)
class MatchJob:
    """
    Self-contained job for a worker process.

    Contains everything needed to play one game without shared state.
    Configs carry strategy names, so jobs pickle cleanly.
    """
    config: "Config"
    engine_configs: Dict[Hashable, "Config"] = field(default_factory=dict)  # mark -> engine settings
    opening: Tuple[Tuple[int, int], ...] = ()  # forced first moves, (row, col)


@dataclass
class MatchResult:
    """
    Result of one finished game.
    """
    winner: Optional[Hashable]
    moves: List[Action]
    utility: Tuple[int, ...]
    fallbacks: int = 0  # engine moves that fell back to the first action

    @property
    def is_tie(self) -> bool:
        return self.winner is None
