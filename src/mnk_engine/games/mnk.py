"""
MNKState - generalized tic-tac-toe state (m x n board, k in a row).

Bit-packed representation:
    one int occupancy mask per player mark, bit ``row * n + col``
    turn_order tuple, head = player to move (round-robin)

Win detection is incremental: only the precomputed win masks passing
through the last move's cell are tested, once per state, on demand.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Hashable, List, Optional, Sequence, Tuple

import numpy as np

from mnk_engine.core.errors import IllegalActionError, InvalidConfigurationError
from mnk_engine.core.signature import Signature, popcount
from mnk_engine.core.types import Action, EMPTY_MARK
from mnk_engine.games.geometry import BoardGeometry, cell_bit, cells_of, get_geometry, in_bounds


class MNKState:
    """m,n,k game state. Immutable once terminal."""

    __slots__ = (
        "m", "n", "k",
        "player_marks", "empty_mark", "turn_order",
        "remaining_moves", "last_action",
        "_geometry", "_index", "_occupancy",
        "_terminal", "_utility", "_winning_cells",
    )

    def __init__(
        self,
        m: int,
        n: int,
        k: int,
        player_marks: Sequence[Hashable] = ("X", "O"),
        empty_mark: Hashable = EMPTY_MARK,
    ):
        marks = tuple(player_marks)
        validate_board(m, n, k, marks, empty_mark)

        self.m = m
        self.n = n
        self.k = k
        self.player_marks = marks
        self.empty_mark = empty_mark
        self.turn_order = marks
        self.remaining_moves = m * n
        self.last_action: Optional[Action] = None

        self._geometry: BoardGeometry = get_geometry(m, n, k)
        self._index: Dict[Hashable, int] = {mark: i for i, mark in enumerate(marks)}
        self._occupancy: List[int] = [0] * len(marks)

        # Terminal cache: None = not computed yet
        self._terminal: Optional[bool] = None
        self._utility: Tuple[int, ...] = (0,) * len(marks)
        self._winning_cells: FrozenSet[Tuple[int, int]] = frozenset()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def current_player(self) -> Hashable:
        return self.turn_order[0]

    @property
    def geometry(self) -> BoardGeometry:
        return self._geometry

    @property
    def occupancy(self) -> Tuple[int, ...]:
        """Per-player bitmasks in player_marks order."""
        return tuple(self._occupancy)

    def occupancy_of(self, mark: Hashable) -> int:
        return self._occupancy[self._index[mark]]

    def signature(self) -> Signature:
        return Signature(self.remaining_moves, self.turn_order, tuple(self._occupancy))

    def _combined(self) -> int:
        combined = 0
        for occ in self._occupancy:
            combined |= occ
        return combined

    def copy(self) -> "MNKState":
        """Independent copy sharing only the (immutable) geometry."""
        state = MNKState.__new__(MNKState)
        state.m = self.m
        state.n = self.n
        state.k = self.k
        state.player_marks = self.player_marks
        state.empty_mark = self.empty_mark
        state.turn_order = self.turn_order
        state.remaining_moves = self.remaining_moves
        state.last_action = self.last_action
        state._geometry = self._geometry
        state._index = self._index
        state._occupancy = list(self._occupancy)
        state._terminal = self._terminal
        state._utility = self._utility
        state._winning_cells = self._winning_cells
        return state

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def get_actions(self) -> List[Action]:
        """Every empty cell for the current mover, in row-major order."""
        free = self._geometry.full_mask & ~self._combined()
        mover = self.current_player
        n = self.n
        return [
            Action(mover, *divmod(i, n))
            for i in range(self._geometry.num_cells)
            if free >> i & 1
        ]

    def is_legal_action(self, action: Action) -> bool:
        if action.player != self.current_player:
            return False
        if not in_bounds(self.m, self.n, action.row, action.col):
            return False
        return not self._combined() & cell_bit(self.n, action.row, action.col)

    def take_action(self, action: Action, preserve: bool = True) -> "MNKState":
        """
        Apply an action and return the resulting state.

        preserve=True (default) leaves the receiver untouched. preserve=False
        mutates and returns the receiver; only for callers that own it.
        """
        if self.is_terminal():
            raise IllegalActionError("Cannot take actions in a terminal state")
        if not self.is_legal_action(action):
            raise IllegalActionError(
                f"Illegal action {action!r} (to move: {self.current_player!r})"
            )

        state = self.copy() if preserve else self
        state._occupancy[state._index[action.player]] |= cell_bit(state.n, action.row, action.col)
        state.turn_order = state.turn_order[1:] + (action.player,)
        state.remaining_moves -= 1
        state.last_action = action

        state._terminal = None
        state._utility = (0,) * len(state.player_marks)
        state._winning_cells = frozenset()
        return state

    # ------------------------------------------------------------------
    # Terminal status
    # ------------------------------------------------------------------

    def is_terminal(self) -> bool:
        if self._terminal is None:
            self._terminal = self._compute_terminal()
        return self._terminal

    def _compute_terminal(self) -> bool:
        action = self.last_action
        if action is not None:
            occ = self._occupancy[self._index[action.player]]
            index = action.row * self.n + action.col
            for mask in self._geometry.masks_through[index]:
                if occ & mask == mask:
                    self._utility = tuple(
                        1 if mark == action.player else -1 for mark in self.player_marks
                    )
                    self._winning_cells = cells_of(mask, self.n)
                    return True
        return self.remaining_moves <= 0

    def get_utility(self) -> Tuple[int, ...]:
        """Per-player payoff in player_marks order: +1 win, -1 loss, 0 draw/ongoing."""
        self.is_terminal()
        return self._utility

    @property
    def winning_cells(self) -> FrozenSet[Tuple[int, int]]:
        self.is_terminal()
        return self._winning_cells

    @property
    def winner(self) -> Optional[Hashable]:
        """Winning mark, or None for a draw or an unfinished game."""
        for mark, payoff in zip(self.player_marks, self.get_utility()):
            if payoff == 1:
                return mark
        return None

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def board(self) -> np.ndarray:
        """m x n object array of marks (a fresh copy every call)."""
        grid = np.full((self.m, self.n), self.empty_mark, dtype=object)
        for mark, occ in zip(self.player_marks, self._occupancy):
            for row, col in cells_of(occ, self.n):
                grid[row, col] = mark
        return grid

    def state_string(self) -> str:
        """Boxed text board; winning cells are bracketed."""
        grid = self.board()
        width = max(len(str(x)) for x in (*self.player_marks, self.empty_mark))
        bar = "─" * (width + 2)
        winning = self.winning_cells

        lines = ["╭" + "┬".join([bar] * self.n) + "╮"]
        for r in range(self.m):
            cells = []
            for c in range(self.n):
                text = f"{str(grid[r, c]):^{width}}"
                cells.append(f"[{text}]" if (r, c) in winning else f" {text} ")
            lines.append("│" + "│".join(cells) + "│")
            if r < self.m - 1:
                lines.append("├" + "┼".join([bar] * self.n) + "┤")
        lines.append("╰" + "┴".join([bar] * self.n) + "╯")
        return "\n".join(lines)

    def __str__(self) -> str:
        grid = self.board()
        return "\n".join(" ".join(str(x) for x in row) for row in grid)

    def __repr__(self) -> str:
        return (
            f"MNKState(m={self.m}, n={self.n}, k={self.k}, "
            f"to_move={self.current_player!r}, remaining={self.remaining_moves})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MNKState):
            return NotImplemented
        return (
            (self.m, self.n, self.k, self.player_marks) == (other.m, other.n, other.k, other.player_marks)
            and self.signature() == other.signature()
        )

    def __hash__(self) -> int:
        return hash((self.m, self.n, self.k, self.player_marks, self.signature()))

    def stones(self) -> int:
        """Number of occupied cells."""
        return popcount(self._combined())


def validate_board(m: int, n: int, k: int, marks: Tuple[Hashable, ...], empty_mark: Hashable) -> None:
    """Raise InvalidConfigurationError for a board or mark set no game can be played on."""
    if m < 1 or n < 1 or k < 1:
        raise InvalidConfigurationError(f"m, n and k must be positive (got {m}, {n}, {k})")
    if k > max(m, n):
        raise InvalidConfigurationError(f"k ({k}) has to be <= max(m, n) ({max(m, n)})")
    if not marks:
        raise InvalidConfigurationError("At least one player mark is required")
    if len(set(marks)) != len(marks):
        raise InvalidConfigurationError(f"Player marks must be distinct: {marks!r}")
    if empty_mark in marks:
        raise InvalidConfigurationError(
            f"Player marks must differ from the empty-cell mark {empty_mark!r}"
        )
