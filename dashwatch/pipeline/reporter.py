import logging
import threading
import time
from typing import Dict
from dashwatch.domain.events import JobCompleted, JobDetected, JobFailed, JobStarted
from dashwatch.infrastructure.event_bus import EventBus

class JobLogReporter:
    """Logs job lifecycle events and keeps running totals."""

    def __init__(self, event_bus: EventBus):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self.succeeded = 0
        self.failed = 0
        self._started_at: Dict[int, float] = {}

        event_bus.subscribe(JobDetected, self._on_detected)
        event_bus.subscribe(JobStarted, self._on_started)
        event_bus.subscribe(JobCompleted, self._on_completed)
        event_bus.subscribe(JobFailed, self._on_failed)

    def _on_detected(self, event: JobDetected):
        self.logger.info(f"New video file detected: {event.job.input_path}")

    def _on_started(self, event: JobStarted):
        with self._lock:
            self._started_at[id(event.job)] = time.monotonic()
        self.logger.info(f"JOB_START: {event.job.input_path.name}")

    def _elapsed(self, event) -> str:
        with self._lock:
            started = self._started_at.pop(id(event.job), None)
        if started is None:
            return ""
        return f" elapsed={time.monotonic() - started:.2f}s"

    def _on_completed(self, event: JobCompleted):
        elapsed = self._elapsed(event)
        with self._lock:
            self.succeeded += 1
        self.logger.info(f"JOB_END: {event.job.input_path.name} status=succeeded manifest={event.manifest_path}{elapsed}")

    def _on_failed(self, event: JobFailed):
        elapsed = self._elapsed(event)
        with self._lock:
            self.failed += 1
        self.logger.error(f"Error processing {event.job.input_path}: {event.error_message}")
        self.logger.info(f"JOB_END: {event.job.input_path.name} status=failed{elapsed}")
