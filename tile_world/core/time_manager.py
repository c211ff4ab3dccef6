"""Fixed-period job scheduling for the logic, draw and spawn phases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List
import logging
import time

logger = logging.getLogger(__name__)


@dataclass
class Job:
    """A callback run every ``interval`` seconds."""

    name: str
    interval: float
    callback: Callable[[], None]
    next_due: float
    runs: int = 0


class Scheduler:
    """Run periodic jobs from a single thread.

    ``clock`` and ``sleep`` are injectable so tests can drive time by hand.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._jobs: Dict[str, Job] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_job(
        self, name: str, interval: float, callback: Callable[[], None], *, run_now: bool = False
    ) -> Job:
        """Schedule ``callback`` every ``interval`` seconds under ``name``."""

        if interval <= 0:
            raise ValueError(f"interval for job {name!r} must be positive, got {interval}")
        now = self._clock()
        job = Job(name, float(interval), callback, now if run_now else now + interval)
        self._jobs[name] = job
        return job

    def remove_job(self, name: str) -> None:
        self._jobs.pop(name, None)

    def job(self, name: str) -> Job | None:
        return self._jobs.get(name)

    @property
    def jobs(self) -> List[Job]:
        return list(self._jobs.values())

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------
    def run_pending(self) -> List[str]:
        """Run every due job in registration order; return their names.

        A job that fell several periods behind runs once and is rescheduled
        from the current time, so missed periods are skipped rather than
        replayed in a burst.
        """

        ran: List[str] = []
        for job in list(self._jobs.values()):
            now = self._clock()
            if now < job.next_due:
                continue
            job.callback()
            job.runs += 1
            ran.append(job.name)
            job.next_due += job.interval
            if job.next_due <= now:
                logger.debug("Scheduler: job %s is behind schedule; skipping missed periods", job.name)
                job.next_due = now + job.interval
        return ran

    def time_until_next(self) -> float:
        if not self._jobs:
            return 0.0
        soonest = min(job.next_due for job in self._jobs.values())
        return max(0.0, soonest - self._clock())

    def sleep_until_next(self, max_wait: float | None = None) -> None:
        """Block until the next job is due, or at most ``max_wait`` seconds."""

        remaining = self.time_until_next()
        if max_wait is not None:
            remaining = min(remaining, max_wait)
        if remaining > 0:
            self._sleep(remaining)


__all__ = ["Job", "Scheduler"]
