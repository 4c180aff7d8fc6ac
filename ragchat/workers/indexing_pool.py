"""
Supervised asyncio worker pool for indexing jobs.

Jobs are queued on an asyncio.Queue and consumed by N worker tasks.
A failing job is logged and counted; the worker moves on to the next job.
A worker task that dies is replaced by the supervisor callback.

Dependencies: asyncio (stdlib), prometheus_client
System role: Executor for document and chat-message indexing
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ragchat.observability.log_utils import log_exception_with_context
from ragchat.observability.metrics import INDEXING_FAILURES, WORKER_RESTARTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexingJob:
    """
    Unit of queued work.

    Attributes:
        name: Human-readable job label for logs
        kind: Metric label (document, chat-message)
        run: Coroutine factory executed by a worker
    """

    name: str
    kind: str
    run: Callable[[], Awaitable[None]]


class IndexingWorkerPool:
    """
    Fixed-size pool of asyncio worker tasks.

    Workers start lazily on first submit (or explicitly via start) and are
    bound to the running event loop.

    Usage:
        pool = IndexingWorkerPool(size=2)
        await pool.start()
        await pool.submit(IndexingJob(name="doc-1", kind="document", run=job))
        await pool.join()
        await pool.stop()
    """

    def __init__(self, size: int = 2, max_queue_size: int = 0) -> None:
        """
        Initialize pool.

        Args:
            size: Number of worker tasks
            max_queue_size: Queue bound, 0 for unbounded
        """
        if size < 1:
            raise ValueError("Worker pool size must be at least 1")
        self._size = size
        self._max_queue_size = max_queue_size
        self._queue: asyncio.Queue[IndexingJob] | None = None
        self._workers: dict[int, asyncio.Task] = {}
        self._stopping = False

    @property
    def is_running(self) -> bool:
        return bool(self._workers) and not self._stopping

    @property
    def pending(self) -> int:
        """Jobs waiting in the queue."""
        return self._queue.qsize() if self._queue is not None else 0

    async def start(self) -> None:
        """Create the queue and spawn the worker tasks."""
        if self.is_running:
            return
        self._stopping = False
        self._queue = asyncio.Queue(maxsize=self._max_queue_size)
        for worker_id in range(self._size):
            self._spawn(worker_id)
        logger.info(f"{__name__}:start - Started {self._size} indexing workers")

    async def submit(self, job: IndexingJob) -> None:
        """
        Queue a job, starting the pool if needed.

        Waits for room when the queue is bounded and full.

        Args:
            job: Job to run
        """
        if not self.is_running:
            await self.start()
        await self._queue.put(job)
        logger.debug(f"{__name__}:submit - Queued {job.kind} job {job.name}")

    async def join(self) -> None:
        """Wait until every queued job has finished."""
        if self._queue is not None:
            await self._queue.join()

    async def stop(self) -> None:
        """Cancel all workers. Jobs still queued are dropped."""
        self._stopping = True
        workers = list(self._workers.values())
        self._workers.clear()
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        if self._queue is not None and not self._queue.empty():
            logger.warning(
                f"{__name__}:stop - Dropping {self._queue.qsize()} queued indexing jobs"
            )
        self._queue = None
        logger.info(f"{__name__}:stop - Indexing workers stopped")

    def _spawn(self, worker_id: int) -> None:
        task = asyncio.create_task(self._worker(worker_id), name=f"indexing-worker-{worker_id}")
        task.add_done_callback(lambda t, wid=worker_id: self._on_worker_done(wid, t))
        self._workers[worker_id] = task

    def _on_worker_done(self, worker_id: int, task: asyncio.Task) -> None:
        """Supervisor: replace workers that exit while the pool is running."""
        if self._stopping or task.cancelled():
            return
        exc = task.exception()
        logger.error(f"{__name__}:_on_worker_done - Worker {worker_id} died: {exc!r}, restarting")
        WORKER_RESTARTS.inc()
        self._spawn(worker_id)

    async def _worker(self, worker_id: int) -> None:
        queue = self._queue
        logger.debug(f"{__name__}:_worker - Worker {worker_id} started")
        while True:
            job = await queue.get()
            try:
                await job.run()
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:_worker - Indexing job failed",
                    e,
                    worker_id=worker_id,
                    job=job.name,
                    kind=job.kind,
                )
                INDEXING_FAILURES.labels(kind=job.kind).inc()
            finally:
                queue.task_done()
