"""Domain events for the transcode pipeline.

Events flow through the EventBus from the dispatcher to subscribers such as
the job log reporter, so the pipeline does not need to know who listens.

See `infrastructure/event_bus.py` for the pub/sub mechanism.
"""

from pathlib import Path
from pydantic import BaseModel
from .models import TranscodeJob


class Event(BaseModel):
    """Base class for all domain events.

    Events are validated Pydantic models. They are not frozen by default.
    """

    pass


class JobEvent(Event):
    """Base class for events related to a specific transcode job."""

    job: TranscodeJob


class JobDetected(JobEvent):
    """Emitted when a qualifying path has produced a new job."""

    pass


class JobStarted(JobEvent):
    """Emitted when the settle delay has elapsed and the encoder is about to run."""

    pass


class JobCompleted(JobEvent):
    """Emitted when the encoder exited with status zero."""

    manifest_path: Path


class JobFailed(JobEvent):
    """Emitted when a job ends in the FAILED state, for any reason."""

    error_message: str
