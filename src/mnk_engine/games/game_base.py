"""
GameState - the capability set the search engine needs from a game.

IMPORTANT ARCHITECTURE NOTE:
-----------------------------
- This is a structural Protocol, not a base class. Any turn-based,
  perfect-information game whose state provides these members can be
  searched; MNKState is one implementation.
- Turn order is round-robin: after a move the mover goes to the back of
  turn_order. The engine and the bundled evaluation rely on this to
  recover the root mover at any ply.
- take_action(preserve=True) must never mutate the receiver.
"""

from __future__ import annotations

from typing import Any, Hashable, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class GameState(Protocol):
    """State contract consumed by the search engine."""

    @property
    def current_player(self) -> Hashable:
        """Mark of the player to move."""
        ...

    @property
    def player_marks(self) -> Tuple[Hashable, ...]:
        """All player marks, in utility-vector order."""
        ...

    @property
    def turn_order(self) -> Tuple[Hashable, ...]:
        """Circular turn order; the head is the player to move."""
        ...

    def get_actions(self) -> Sequence[Any]:
        """All legal actions for the current mover, in a stable order."""
        ...

    def is_legal_action(self, action: Any) -> bool:
        """True iff the action can be applied to this state."""
        ...

    def take_action(self, action: Any, preserve: bool = True) -> "GameState":
        """
        Return the successor state.

        Raises IllegalActionError if the state is terminal or the action
        is illegal. With preserve=False the receiver may be updated in
        place and returned.
        """
        ...

    def is_terminal(self) -> bool:
        """Return True if the game has ended (memoized)."""
        ...

    def get_utility(self) -> Tuple[int, ...]:
        """Per-player payoff in player_marks order."""
        ...

    def signature(self) -> Hashable:
        """Canonical, hashable transposition key."""
        ...
