"""Per-file job dispatch.

Every qualifying path becomes one TranscodeJob running on its own thread:
settle delay first, then the encoder. The dispatch loop never waits for a
job, and a failing job never affects the loop or other jobs.

With `max_concurrent_jobs=None` (the default) there is no bound at all: a
burst of N files runs N encoders at once. Setting a limit makes jobs queue on
a semaphore before invoking the encoder; dispatching still does not block.
"""

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional
from dashwatch.domain.events import JobCompleted, JobDetected, JobFailed, JobStarted
from dashwatch.domain.exceptions import TranscodeError
from dashwatch.domain.models import JobState, TranscodeJob
from dashwatch.infrastructure.event_bus import EventBus
from dashwatch.pipeline.invoker import TranscodeInvoker
from dashwatch.pipeline.stability import StabilityCheck


class JobDispatcher:
    def __init__(
        self,
        event_bus: EventBus,
        stability_check: StabilityCheck,
        invoker: TranscodeInvoker,
        max_concurrent_jobs: Optional[int] = None,
    ):
        self.event_bus = event_bus
        self.stability_check = stability_check
        self.invoker = invoker
        self.max_concurrent_jobs = max_concurrent_jobs
        self._slots = threading.BoundedSemaphore(max_concurrent_jobs) if max_concurrent_jobs else None
        self.logger = logging.getLogger(__name__)

    def dispatch(self, path: Path) -> threading.Thread:
        """Starts a job for path and returns its thread without waiting for it."""
        job = TranscodeJob(input_path=path)
        self.event_bus.publish(JobDetected(job=job))

        thread = threading.Thread(
            target=self._run_job,
            args=(job,),
            name=f"job-{path.name}",
            daemon=True,
        )
        thread.start()
        return thread

    def run(self, paths: Iterable[Path]) -> int:
        """Dispatches every path until the iterable ends. Returns the number of jobs started."""
        dispatched = 0
        for path in paths:
            self.dispatch(path)
            dispatched += 1
        self.logger.info(f"Event stream closed after {dispatched} jobs")
        return dispatched

    def _run_job(self, job: TranscodeJob) -> None:
        try:
            job.transition(JobState.DEBOUNCING)
            self.stability_check.wait_until_stable(job.input_path)

            if self._slots is not None:
                self._slots.acquire()
            try:
                job.transition(JobState.INVOKING)
                self.event_bus.publish(JobStarted(job=job))
                manifest_path = self.invoker.invoke(job)
            finally:
                if self._slots is not None:
                    self._slots.release()

            job.transition(JobState.SUCCEEDED)
            self.event_bus.publish(JobCompleted(job=job, manifest_path=manifest_path))
        except TranscodeError as e:
            self._fail(job, str(e))
        except Exception as e:
            self.logger.exception(f"Unexpected error processing {job.input_path}")
            self._fail(job, f"{type(e).__name__}: {e}")

    def _fail(self, job: TranscodeJob, message: str) -> None:
        job.error_message = message
        if not job.is_terminal:
            job.transition(JobState.FAILED)
        self.event_bus.publish(JobFailed(job=job, error_message=message))
