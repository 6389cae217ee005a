"""
Parallel self-play runner.

Games are independent: each job is played start to finish in a worker
process and the results are collected in job order.
"""

from __future__ import annotations

import atexit
import logging
import multiprocessing as mp
import random
from collections import Counter
from multiprocessing.pool import Pool
from typing import Dict, Hashable, Iterable, List, Optional

from mnk_engine.simulation.jobs import MatchJob, MatchResult
from mnk_engine.simulation.worker import worker_init, play_match
from mnk_engine.utils.config import Config

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = max(1, mp.cpu_count() - 1)

TIE = "tie"

# ---------------------------------------------------------------------------
# Process cleanup
# ---------------------------------------------------------------------------

_active_runners: List["MatchRunner"] = []


def _shutdown_all():
    for runner in _active_runners[:]:
        runner.shutdown(force=True)


atexit.register(_shutdown_all)


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------

def make_jobs(
    config: Config,
    games: int,
    engine_configs: Optional[Dict[Hashable, Config]] = None,
    opening_moves: int = 0,
    seed: Optional[int] = None,
) -> List[MatchJob]:
    """
    Build `games` jobs on the configured board.

    Deterministic engines replay the same game, so variety comes from
    `opening_moves` random forced moves per game (seeded).
    """
    rng = random.Random(seed)
    cells = [(r, c) for r in range(config.rows) for c in range(config.cols)]
    opening_moves = min(opening_moves, len(cells))

    return [
        MatchJob(
            config=config,
            engine_configs=dict(engine_configs or {}),
            opening=tuple(rng.sample(cells, opening_moves)),
        )
        for _ in range(games)
    ]


def tally(results: Iterable[MatchResult]) -> Dict[Hashable, int]:
    """Count wins per mark; ties are counted under TIE."""
    counts: Counter = Counter()
    for result in results:
        counts[TIE if result.is_tie else result.winner] += 1
    return dict(counts)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class MatchRunner:
    """
    Plays batches of self-play games on a process pool.

    Use as a context manager so the pool is always torn down.
    """

    def __init__(self, num_workers: int = DEFAULT_WORKER_COUNT):
        self.num_workers = num_workers
        self._pool: Optional[Pool] = None

        _active_runners.append(self)

    def __enter__(self):
        self._ensure_pool()
        return self

    def __exit__(self, exc_type, *_):
        self.shutdown(force=exc_type is not None)

    def _ensure_pool(self) -> Pool:
        if self._pool is None:
            self._pool = Pool(processes=self.num_workers, initializer=worker_init)
        return self._pool

    def shutdown(self, force: bool = False) -> None:
        if self in _active_runners:
            _active_runners.remove(self)

        if self._pool is None:
            return

        pool, self._pool = self._pool, None
        pool.terminate() if force else pool.close()
        pool.join()

    def run(self, jobs: List[MatchJob]) -> List[MatchResult]:
        """Play every job; results come back in job order."""
        if not jobs:
            return []

        pool = self._ensure_pool()
        try:
            results = pool.map(play_match, jobs)
        except KeyboardInterrupt:
            logger.info("Interrupted - discarding unfinished games")
            raise

        logger.debug("Finished %d games on %d workers", len(results), self.num_workers)
        return results
