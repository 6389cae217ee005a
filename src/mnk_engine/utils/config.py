"""
Configuration and strategy registries.
"""

from typing import Hashable, Sequence, Tuple

from mnk_engine.core.errors import InvalidConfigurationError
from mnk_engine.core.types import EMPTY_MARK
from mnk_engine.games.mnk import validate_board
from mnk_engine.search.evaluation import EvaluationFunction, terminal_evaluation, zero_evaluation
from mnk_engine.search.expansion import ExpansionPolicy, cache_expansion, linear_expansion


# ---------------------------------------------------------------------------
# Board Defaults (classic tic-tac-toe)
# ---------------------------------------------------------------------------

DEFAULT_ROWS = 3
DEFAULT_COLS = 3
DEFAULT_K = 3
DEFAULT_MARKS: Tuple[str, ...] = ("X", "O")


# ---------------------------------------------------------------------------
# Engine Defaults
# ---------------------------------------------------------------------------

DEFAULT_TIME_BUDGET_MS = 5000
DEFAULT_MAX_DEPTH = 9
DEFAULT_POLICY = "cache"
DEFAULT_EVALUATION = "terminal"


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

EXPANSION_POLICIES = {
    "linear": linear_expansion,
    "cache": cache_expansion,
}

EVALUATIONS = {
    "terminal": terminal_evaluation,
    "zero": zero_evaluation,
}


def parse_marks(text: str) -> Tuple[str, ...]:
    """Split a comma-separated mark list ("X,O,Z") into a tuple."""
    marks = tuple(part.strip() for part in text.split(",") if part.strip())
    if not marks:
        raise InvalidConfigurationError(f"No player marks in {text!r}")
    return marks


class Config:
    """Board and engine settings with sensible defaults.

    Stores strategy names rather than callables so instances pickle cleanly
    into worker processes.
    """

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        k: int = DEFAULT_K,
        marks: Sequence[Hashable] = DEFAULT_MARKS,
        time_budget_ms: float = DEFAULT_TIME_BUDGET_MS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        policy: str = DEFAULT_POLICY,
        evaluation: str = DEFAULT_EVALUATION,
        use_cache: bool = True,
        use_pruning: bool = True,
    ):
        self.rows = rows
        self.cols = cols
        self.k = k
        self.marks = tuple(marks)
        self.empty_mark = EMPTY_MARK
        self.time_budget_ms = time_budget_ms
        self.max_depth = max_depth
        self.policy = policy
        self.evaluation = evaluation
        self.use_cache = use_cache
        self.use_pruning = use_pruning

        self._validate()

    def _validate(self) -> None:
        validate_board(self.rows, self.cols, self.k, self.marks, self.empty_mark)
        if self.policy not in EXPANSION_POLICIES:
            available = ", ".join(EXPANSION_POLICIES)
            raise InvalidConfigurationError(f"Unknown policy: {self.policy}. Available: {available}")
        if self.evaluation not in EVALUATIONS:
            available = ", ".join(EVALUATIONS)
            raise InvalidConfigurationError(
                f"Unknown evaluation: {self.evaluation}. Available: {available}"
            )
        if self.max_depth < 1:
            raise InvalidConfigurationError(f"max_depth must be >= 1 (got {self.max_depth})")
        if self.time_budget_ms < 0:
            raise InvalidConfigurationError(
                f"time_budget_ms must be >= 0 (got {self.time_budget_ms})"
            )

    @property
    def expansion_policy(self) -> ExpansionPolicy:
        return EXPANSION_POLICIES[self.policy]

    @property
    def evaluation_function(self) -> EvaluationFunction:
        return EVALUATIONS[self.evaluation]

    @property
    def num_players(self) -> int:
        return len(self.marks)

    def __repr__(self) -> str:
        return (
            f"Config({self.rows}x{self.cols}, k={self.k}, marks={self.marks}, "
            f"time={self.time_budget_ms}ms, depth<={self.max_depth}, policy={self.policy}, "
            f"cache={self.use_cache}, pruning={self.use_pruning})"
        )


# Default configuration
DEFAULT_CONFIG = Config()
