"""
Background job runner for the export and import engines.

Each engine instance owns one runner with a single worker thread. Submitting
a new job cancels the previous one if it is still pending or running; the new
job is queued behind it on the same worker, so two codecs of one engine never
touch their destinations at the same time.
"""
import logging
import threading
import uuid
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from .enums import JobStatus
from .exceptions import JobCancelledError

logger = logging.getLogger(__name__)


class Job:
    """Handle for one background codec run."""

    def __init__(self, future: Optional[Future], cancel_event: threading.Event, description: str = ""):
        self.job_id = str(uuid.uuid4())
        self.description = description
        self._future = future
        self._cancel_event = cancel_event
        self.created_at = datetime.now(timezone.utc)
        self.started_at: Optional[datetime] = None
        self.completed_at: Optional[datetime] = None

    @property
    def status(self) -> JobStatus:
        if self._future.cancelled():
            return JobStatus.CANCELLED
        if not self._future.done():
            return JobStatus.RUNNING if self.started_at else JobStatus.QUEUED
        error = self._future.exception()
        if isinstance(error, JobCancelledError):
            return JobStatus.CANCELLED
        return JobStatus.FAILED if error else JobStatus.SUCCESS

    def cancel(self) -> bool:
        """
        Request cancellation.

        A queued job never starts; a running job stops at its next record
        boundary. Returns False if the job had already finished.
        """
        if self._future.done():
            return False
        self._cancel_event.set()
        self._future.cancel()
        return True

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> Any:
        """Block until the job finishes and return the codec's result."""
        try:
            return self._future.result(timeout)
        except CancelledError as e:
            raise JobCancelledError(f"Job {self.job_id} was cancelled") from e

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        try:
            return self._future.exception(timeout)
        except CancelledError:
            return JobCancelledError(f"Job {self.job_id} was cancelled")

    def to_dict(self) -> dict:
        """Convert job to dictionary."""
        return {
            "job_id": self.job_id,
            "description": self.description,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


class BackgroundRunner:
    """Single-slot worker owned by one engine instance."""

    def __init__(self, name: str = "tabulario"):
        self.name = name
        self._executor: Optional[ThreadPoolExecutor] = None
        self._current: Optional[Job] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[Job]:
        return self._current

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=self.name)
        return self._executor

    def submit(
        self,
        task_func: Callable[..., Any],
        cancel_event: threading.Event,
        description: str = "",
        **kwargs
    ) -> Job:
        """
        Queue `task_func(**kwargs)` on the worker thread.

        Args:
            task_func: Codec entry point
            cancel_event: Token the codec checks between records
            description: Label used in logs
            **kwargs: Arguments to pass to the task function

        Returns:
            Job handle
        """
        with self._lock:
            previous = self._current
            if previous is not None and previous.cancel():
                logger.warning(f"Cancelled previous job {previous.job_id} ({previous.description})")

            job = Job(None, cancel_event, description)

            def _task_wrapper():
                job.started_at = datetime.now(timezone.utc)
                logger.info(f"Job {job.job_id} started: {description}")
                try:
                    return task_func(**kwargs)
                finally:
                    job.completed_at = datetime.now(timezone.utc)
                    logger.info(f"Job {job.job_id} finished: {description}")

            job._future = self._get_executor().submit(_task_wrapper)
            self._current = job
            return job

    def shutdown(self, wait: bool = True):
        with self._lock:
            if self._current is not None and not wait:
                self._current.cancel()
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None
