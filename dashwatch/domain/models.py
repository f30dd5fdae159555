from enum import Enum
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field

class ChangeKind(str, Enum):
    CREATE = "create"
    MODIFY = "modify"
    REMOVE = "remove"
    OTHER = "other"

class ChangeEvent(BaseModel):
    """One filesystem notification as delivered by the watcher."""

    kind: ChangeKind
    paths: List[Path] = Field(min_length=1)

class JobState(str, Enum):
    DETECTED = "DETECTED"
    DEBOUNCING = "DEBOUNCING"
    INVOKING = "INVOKING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

_TRANSITIONS = {
    JobState.DETECTED: {JobState.DEBOUNCING, JobState.FAILED},
    JobState.DEBOUNCING: {JobState.INVOKING, JobState.FAILED},
    JobState.INVOKING: {JobState.SUCCEEDED, JobState.FAILED},
    JobState.SUCCEEDED: set(),
    JobState.FAILED: set(),
}

class TranscodeJob(BaseModel):
    input_path: Path
    state: JobState = JobState.DETECTED
    output_dir: Optional[Path] = None
    manifest_path: Optional[Path] = None
    error_message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self.state]

    def transition(self, new_state: JobState) -> None:
        """Moves the job to new_state, rejecting moves the lifecycle does not allow."""
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Invalid job transition {self.state.value} -> {new_state.value}")
        self.state = new_state
