"""
Parallel game runner.

Games are independent, so they are spread over a multiprocessing pool;
each worker process builds its own player, tables and transposition
cache. With a single worker, games run in the calling process.
"""

from __future__ import annotations

import atexit
import logging
import multiprocessing as mp
import signal
from multiprocessing.pool import Pool
from typing import Iterator, List, Optional, Sequence, TYPE_CHECKING

from solve2048.simulation.jobs import GameJob, GameResult
from solve2048.simulation.worker import worker_init, run_game

if TYPE_CHECKING:
    from solve2048.utils.config import Config

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = max(1, mp.cpu_count() - 1)

# ---------------------------------------------------------------------------
# Process cleanup
# ---------------------------------------------------------------------------

_active_runners: List["SimulationRunner"] = []


def _shutdown_all():
    for runner in _active_runners[:]:
        runner.shutdown(force=True)


def _worker_init_wrapper(config: "Config"):
    """Workers ignore SIGINT; only the main process handles Ctrl+C."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    worker_init(config)


if mp.current_process().name == 'MainProcess':
    atexit.register(_shutdown_all)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class SimulationRunner:
    """
    Runs batches of games for one Config.

    Use as a context manager so the pool is always closed.
    """

    def __init__(self, config: "Config", num_workers: Optional[int] = None):
        self.config = config
        self.num_workers = max(1, num_workers or config.num_workers)
        self._pool: Optional[Pool] = None
        self._local_ready = False

        _active_runners.append(self)

    def __enter__(self):
        if self.num_workers > 1:
            self._ensure_pool()
        return self

    def __exit__(self, exc_type, *_):
        self.shutdown(force=exc_type is not None)

    def _ensure_pool(self) -> Pool:
        if self._pool is None:
            self._pool = Pool(
                processes=self.num_workers,
                initializer=_worker_init_wrapper,
                initargs=(self.config,),
            )
        return self._pool

    def shutdown(self, force: bool = False) -> None:
        if self in _active_runners:
            _active_runners.remove(self)

        if self._pool is None:
            return

        pool, self._pool = self._pool, None
        pool.terminate() if force else pool.close()
        pool.join()

    def make_jobs(self, count: int) -> List[GameJob]:
        """One job per game; seeds are consecutive from config.seed when set."""
        seed = self.config.seed
        return [
            GameJob(
                index=i,
                seed=None if seed is None else seed + i,
                max_moves=self.config.max_moves,
                show_moves=self.config.show_moves,
            )
            for i in range(count)
        ]

    def run(self, jobs: Sequence[GameJob]) -> Iterator[GameResult]:
        """Yield results in job order as games finish."""
        if not jobs:
            return

        logger.debug("Running %d game(s) on %d worker(s)", len(jobs), self.num_workers)
        try:
            if self.num_workers == 1:
                if not self._local_ready:
                    worker_init(self.config)
                    self._local_ready = True
                for job in jobs:
                    yield run_game(job)
            else:
                yield from self._ensure_pool().imap(run_game, jobs)
        except KeyboardInterrupt:
            logger.info("Interrupted, finished games already reported")
            raise
        logger.debug("Batch of %d game(s) finished", len(jobs))

    def run_batch(self, count: int) -> List[GameResult]:
        return list(self.run(self.make_jobs(count)))
