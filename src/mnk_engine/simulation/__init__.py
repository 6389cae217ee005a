"""
Simulation module - parallel self-play between engine configurations.

Provides the infrastructure for playing many games in worker processes
and tallying the outcomes.
"""

from mnk_engine.simulation.jobs import MatchJob, MatchResult
from mnk_engine.simulation.runner import MatchRunner, DEFAULT_WORKER_COUNT, TIE, make_jobs, tally
from mnk_engine.simulation.worker import play_match

__all__ = [
    "MatchJob",
    "MatchResult",
    "MatchRunner",
    "DEFAULT_WORKER_COUNT",
    "TIE",
    "make_jobs",
    "tally",
    "play_match",
]
