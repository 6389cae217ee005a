"""
Evaluation functions: (state, depth) -> score from the root mover's view.

The engine treats evaluation as a black box. Scores must be finite; a
proven result scores at the WIN_SCORE sentinel, shifted by the ply so that
quicker wins (and slower losses) are preferred.
"""

from __future__ import annotations

from typing import Callable, Hashable

from mnk_engine.core.types import DRAW_SCORE, WIN_SCORE
from mnk_engine.games.game_base import GameState

EvaluationFunction = Callable[[GameState, int], float]


def root_player(state: GameState, depth: int) -> Hashable:
    """
    Mark of the player who moved at the root, `depth` plies above `state`.

    With round-robin turns the root mover sits `depth` places from the
    head of turn_order, counting backwards.
    """
    order = state.turn_order
    return order[-depth % len(order)]


def terminal_evaluation(state: GameState, depth: int) -> float:
    """Win/loss sentinels for finished games, 0 for everything else."""
    if not state.is_terminal():
        return DRAW_SCORE

    utility = state.get_utility()
    payoff = utility[state.player_marks.index(root_player(state, depth))]
    if payoff > 0:
        return WIN_SCORE - depth
    if payoff < 0:
        return -(WIN_SCORE - depth)
    return DRAW_SCORE


def zero_evaluation(state: GameState, depth: int) -> float:
    """Symmetric evaluation: every position scores 0."""
    return 0.0
