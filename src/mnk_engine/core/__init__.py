"""
Core module - fundamental types, errors, and state signatures.

This module provides the building blocks used throughout the engine.
"""

from mnk_engine.core.types import (
    Action,
    BoundFlag,
    CacheEntry,
    SearchResult,
    SearchStats,
    WIN_SCORE,
    LOSS_SCORE,
    DRAW_SCORE,
    WIN_THRESHOLD,
    EMPTY_MARK,
)
from mnk_engine.core.errors import (
    MNKEngineError,
    IllegalActionError,
    InvalidConfigurationError,
    CacheProtocolError,
    SearchInterrupted,
)
from mnk_engine.core.signature import Signature, make_signature, signature_digest, popcount

__all__ = [
    # Types
    "Action",
    "BoundFlag",
    "CacheEntry",
    "SearchResult",
    "SearchStats",
    "Signature",
    # Constants
    "WIN_SCORE",
    "LOSS_SCORE",
    "DRAW_SCORE",
    "WIN_THRESHOLD",
    "EMPTY_MARK",
    # Errors
    "MNKEngineError",
    "IllegalActionError",
    "InvalidConfigurationError",
    "CacheProtocolError",
    "SearchInterrupted",
    # Functions
    "make_signature",
    "signature_digest",
    "popcount",
]
