"""
Shared test fixtures for mnk_engine tests.

Design principles:
- Small boards so exhaustive searches stay fast
- Clean imports at module level
- Minimal, focused fixtures
"""

from typing import Callable, Iterable, List, Tuple

import pytest

from mnk_engine.core.types import Action
from mnk_engine.games.mnk import MNKState
from mnk_engine.search.evaluation import terminal_evaluation


Cells = Iterable[Tuple[int, int]]


def _play(state: MNKState, cells: Cells) -> MNKState:
    """Apply (row, col) moves in turn order, each for the player to move."""
    for row, col in cells:
        state = state.take_action(Action(state.current_player, row, col))
    return state


# =============================================================================
# Helpers
# =============================================================================

@pytest.fixture
def play() -> Callable[[MNKState, Cells], MNKState]:
    """Play a sequence of cells from a state."""
    return _play


# =============================================================================
# State Fixtures
# =============================================================================

@pytest.fixture
def tic_tac_toe() -> MNKState:
    """Empty 3x3, k=3 board for X and O."""
    return MNKState(3, 3, 3, ("X", "O"))


@pytest.fixture
def three_players() -> MNKState:
    """Empty 4x4, k=3 board for three players."""
    return MNKState(4, 4, 3, ("X", "O", "Z"))


@pytest.fixture
def midgame_states() -> List[MNKState]:
    """Assorted reachable non-terminal positions on small boards."""
    ttt = MNKState(3, 3, 3, ("X", "O"))
    wide = MNKState(3, 4, 3, ("X", "O"))
    trio = MNKState(3, 3, 3, ("X", "O", "Z"))
    return [
        ttt,
        _play(ttt, [(1, 1)]),
        _play(ttt, [(0, 0), (1, 1)]),
        _play(ttt, [(0, 0), (1, 1), (2, 2)]),
        _play(ttt, [(0, 0), (0, 1), (1, 1), (2, 2)]),    # X threatens nothing, O must react
        _play(ttt, [(0, 0), (2, 0), (0, 1)]),            # O must block (0, 2)
        _play(wide, [(1, 1), (0, 0), (1, 2)]),
        _play(trio, [(1, 1), (0, 0)]),
    ]


# =============================================================================
# Evaluation Fixtures
# =============================================================================

@pytest.fixture
def evaluation():
    """Terminal-outcome evaluation (exact on fully searched trees)."""
    return terminal_evaluation


@pytest.fixture
def center_evaluation():
    """
    Heuristic with many distinct values: root mover's stones near the
    centre count positive, everyone else's negative.
    """
    def evaluate(state: MNKState, depth: int) -> float:
        score = terminal_evaluation(state, depth)
        if score:
            return score
        grid = state.board()
        root = state.turn_order[-depth % len(state.turn_order)]
        mid_r, mid_c = (state.m - 1) / 2, (state.n - 1) / 2
        total = 0.0
        for r in range(state.m):
            for c in range(state.n):
                mark = grid[r, c]
                if mark == state.empty_mark:
                    continue
                weight = 3 - abs(r - mid_r) - abs(c - mid_c)
                total += weight if mark == root else -weight
        return total

    return evaluate
