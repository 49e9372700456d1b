"""
Bounded worker pool for fire-and-forget units of work.

A fixed set of long-lived threads consume one shared FIFO queue. Submission
never waits for completion; results travel through a channel owned by the
caller (see ``simdist.parallel.channel``).
"""

import logging
import os
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..errors import PoolShutdownError

logger = logging.getLogger(__name__)

WorkUnit = Callable[[], None]

_STOP = object()


def default_worker_count() -> int:
    """Number of logical CPUs, at least one."""
    return os.cpu_count() or 1


@dataclass
class TaskFailure:
    """A unit of work that raised."""

    worker: str
    error: Exception
    duration: float


class WorkerPool:
    """
    Fixed-size pool of worker threads over a shared task queue.

    Tasks are started in submission order, but completion order across
    workers is unspecified. ``shutdown`` queues one stop signal per worker
    behind any pending tasks and joins every worker, so everything submitted
    before shutdown runs to completion.

    A task that raises is logged and recorded in ``failures``; its worker
    keeps serving the queue.
    """

    def __init__(self, size: Optional[int] = None, name: str = "simdist-worker"):
        """
        Start the pool.

        Args:
            size: Number of workers (default: logical CPU count)
            name: Thread name prefix
        """
        if size is None:
            size = default_worker_count()
        if size < 1:
            raise ValueError(f"pool size must be at least 1, got {size}")

        self.size = size
        self.failures: List[TaskFailure] = []

        self._tasks: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._shutdown = False
        self._workers: List[threading.Thread] = []

        for i in range(size):
            worker = threading.Thread(
                target=self._worker,
                name=f"{name}-{i}"
            )
            worker.daemon = True
            worker.start()
            self._workers.append(worker)

        logger.debug(f"Started worker pool with {size} workers")

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def execute(self, task: WorkUnit) -> None:
        """Queue a unit of work and return immediately."""
        with self._lock:
            if self._shutdown:
                raise PoolShutdownError("cannot execute work on a pool that has been shut down")
            self._tasks.put(task)

    def shutdown(self, wait: bool = True) -> None:
        """Signal every worker to stop after the queued tasks and join them."""
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
            for _ in self._workers:
                self._tasks.put(_STOP)

        if wait:
            for worker in self._workers:
                worker.join()
            logger.debug(f"Worker pool stopped ({len(self.failures)} failed tasks)")

    def _worker(self) -> None:
        """Worker thread loop."""
        name = threading.current_thread().name
        while True:
            task = self._tasks.get()
            if task is _STOP:
                break

            start_time = time.perf_counter()
            try:
                task()
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.exception(f"Task failed in {name}: {e}")
                with self._lock:
                    self.failures.append(TaskFailure(worker=name, error=e, duration=duration))
