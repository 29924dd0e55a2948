"""Lightweight in-process scheduler for daily recurring jobs.

Each registered job runs once per day at a fixed wall-clock time in the
application timezone. ``start`` spawns one asyncio task per job on the running
event loop; the job body itself executes in a worker thread so blocking
database work never stalls request handling. ``run_job`` executes a job
immediately in the caller's thread, which is how tests and the manual trigger
endpoint drive the jobs without waiting for the clock.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable

from yumix.config import parse_clock
from yumix.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def _summary_line(func: Callable) -> str:
    doc = (func.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else ""


@dataclass
class ScheduledJob:
    """A named callable fired daily at ``hour:minute``."""

    name: str
    func: Callable[[], Any]
    hour: int
    minute: int
    description: str = ""
    last_run: dict[str, Any] | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def at(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class Scheduler:
    """Own a set of named daily jobs and the tasks that fire them."""

    def __init__(self, *, clock: Callable[[], datetime] = now_in_app_timezone) -> None:
        self._clock = clock
        self._jobs: dict[str, ScheduledJob] = {}
        self._tasks: dict[str, asyncio.Task] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._jobs

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    @property
    def jobs(self) -> list[ScheduledJob]:
        return list(self._jobs.values())

    def register(
        self,
        name: str,
        func: Callable[[], Any],
        *,
        at: str = "00:00",
        description: str | None = None,
    ) -> ScheduledJob:
        """Register ``func`` to run daily at ``at`` (``HH:MM``)."""

        if name in self._jobs:
            raise ValueError(f"Job {name!r} is already registered")
        hour, minute = parse_clock(at)
        job = ScheduledJob(
            name=name,
            func=func,
            hour=hour,
            minute=minute,
            description=description or _summary_line(func) or f"Scheduled job: {name}",
        )
        self._jobs[name] = job
        return job

    def job(self, name: str, *, at: str = "00:00") -> Callable:
        """Decorator form of :meth:`register`."""

        def decorator(func: Callable[[], Any]) -> Callable[[], Any]:
            self.register(name, func, at=at)
            return func

        return decorator

    def next_run(self, name: str, *, now: datetime | None = None) -> datetime:
        """Return the next instant strictly after ``now`` at which ``name`` fires."""

        job = self._jobs[name]
        current = now or self._clock()
        candidate = current.replace(
            hour=job.hour, minute=job.minute, second=0, microsecond=0
        )
        if candidate <= current:
            candidate += timedelta(days=1)
        return candidate

    def run_job(self, name: str) -> dict[str, Any]:
        """Execute ``name`` now and return a summary of the run.

        Raises ``KeyError`` for unknown jobs. Failures inside the job are
        logged and reported in the summary instead of being raised. A job runs
        at most once at a time; a call made while it is running returns a
        ``skipped`` summary without executing it.
        """

        job = self._jobs[name]
        if not job.lock.acquire(blocking=False):
            logger.warning("Job %s is already running; run skipped", name)
            return {
                "job_name": name,
                "status": "skipped",
                "duration_ms": 0,
                "result": None,
                "error": "Job is already running",
                "finished_at": self._clock().isoformat(),
            }
        try:
            return self._execute(job)
        finally:
            job.lock.release()

    def _execute(self, job: ScheduledJob) -> dict[str, Any]:
        name = job.name
        start = time.monotonic()
        result: Any = None
        error: str | None = None
        status = "success"

        try:
            result = job.func()
        except Exception as exc:
            status = "failed"
            error = str(exc)
            logger.exception("Job %s failed", name)

        duration_ms = int((time.monotonic() - start) * 1000)
        summary = {
            "job_name": name,
            "status": status,
            "duration_ms": duration_ms,
            "result": result,
            "error": error,
            "finished_at": self._clock().isoformat(),
        }
        job.last_run = summary
        logger.info("Job %s finished with status %s in %d ms", name, status, duration_ms)
        return summary

    def start(self) -> None:
        """Start one timer task per job on the running event loop."""

        if self._tasks:
            logger.warning("Scheduler already running; start ignored")
            return
        loop = asyncio.get_running_loop()
        for job in self._jobs.values():
            self._tasks[job.name] = loop.create_task(
                self._run_forever(job.name), name=f"scheduler:{job.name}"
            )
        logger.info("Scheduler started with %d jobs", len(self._tasks))

    async def stop(self) -> None:
        """Cancel the timer tasks and wait for them to finish."""

        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Scheduler stopped")

    async def _run_forever(self, name: str) -> None:
        while True:
            delay = (self.next_run(name) - self._clock()).total_seconds()
            logger.debug("Job %s sleeping %.0f seconds", name, delay)
            await asyncio.sleep(max(delay, 0))
            await asyncio.to_thread(self.run_job, name)


__all__ = ["ScheduledJob", "Scheduler"]
