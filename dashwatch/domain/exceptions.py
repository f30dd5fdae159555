"""
Exception types for the dashwatch service.

`WatchSetupError` is fatal to the process. Everything under `TranscodeError`
is scoped to a single job: the dispatcher catches it, marks the job FAILED and
keeps watching.
"""

from pathlib import Path


class DashWatchError(Exception):
    """Base class for all dashwatch errors."""

    pass


class WatchSetupError(DashWatchError):
    """Raised when the watch folder cannot be created or subscribed to."""

    pass


class TranscodeError(DashWatchError):
    """Base class for failures of one transcode job."""

    pass


class PathDerivationError(TranscodeError):
    """Raised when no output location can be derived from the input file name."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path


class OutputDirectoryError(TranscodeError):
    """Raised when the per-file output directory cannot be created."""

    pass


class EncoderSpawnError(TranscodeError):
    """Raised when the encoder process cannot be started at all."""

    pass


class EncoderExitError(TranscodeError):
    """
    Raised when the encoder exits with a non-zero status.

    Carries the return code and the captured standard error so the failure
    can be logged with the encoder's own diagnostics.
    """

    def __init__(self, returncode: int, stderr: str):
        super().__init__(f"ffmpeg exited with code {returncode}: {stderr.strip()}")
        self.returncode = returncode
        self.stderr = stderr
