"""
Canonical state signatures - the transposition cache key type.

A signature is exact for a fixed board geometry: two positions share one
only if they have the same occupancy, the same turn order and the same
move count.
"""

import hashlib
from typing import Hashable, Iterable, NamedTuple, Tuple


class Signature(NamedTuple):
    remaining_moves: int
    turn_order: Tuple[Hashable, ...]
    occupancy: Tuple[int, ...]  # one bitmask per player, in player_marks order


def make_signature(
    remaining_moves: int,
    turn_order: Iterable[Hashable],
    occupancy: Iterable[int],
) -> Signature:
    """Build a signature from raw state fields."""
    return Signature(remaining_moves, tuple(turn_order), tuple(occupancy))


def signature_digest(signature: Signature) -> str:
    """
    Short, stable hex digest of a signature.

    Used for log lines and debugging output; the cache itself keys on the
    full tuple.
    """
    data = repr(tuple(signature)).encode()
    return hashlib.sha256(data).hexdigest()[:16]


def popcount(mask: int) -> int:
    """Number of set bits in a non-negative bitmask."""
    return bin(mask).count("1")
