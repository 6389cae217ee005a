"""
Engine exceptions.

IllegalActionError and InvalidConfigurationError are caller bugs and are
never recovered. SearchInterrupted is internal control flow between the
search engine and the iterative-deepening driver.
"""


class MNKEngineError(Exception):
    """Base class for all engine errors."""


class IllegalActionError(MNKEngineError, ValueError):
    """Action is out of bounds, targets an occupied cell, is played out of
    turn, or is applied to (or searched from) a terminal state."""


class InvalidConfigurationError(MNKEngineError, ValueError):
    """Board or engine configuration is inconsistent (e.g. k > max(m, n))."""


class CacheProtocolError(MNKEngineError, RuntimeError):
    """Transposition cache holds an entry with an impossible bound flag."""


class SearchInterrupted(MNKEngineError):
    """Raised at a checkpoint when the deadline passed or cancel was requested."""
