import os
import queue
import logging
from pathlib import Path
from typing import Iterator, Optional
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from dashwatch.domain.exceptions import WatchSetupError
from dashwatch.domain.models import ChangeEvent, ChangeKind

_KIND_BY_EVENT_TYPE = {
    "created": ChangeKind.CREATE,
    "modified": ChangeKind.MODIFY,
    "deleted": ChangeKind.REMOVE,
    "moved": ChangeKind.MODIFY,
}

def _to_path(raw) -> Path:
    return Path(os.fsdecode(raw))

class _QueueingHandler(FileSystemEventHandler):
    """Translates watchdog callbacks into ChangeEvents on a queue.

    Runs on the observer thread; the queue hands events to the consumer in
    delivery order.
    """

    def __init__(self, events: "queue.Queue[Optional[ChangeEvent]]"):
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        kind = ChangeKind.OTHER
        if not event.is_directory:
            kind = _KIND_BY_EVENT_TYPE.get(event.event_type, ChangeKind.OTHER)

        # A rename into the folder is reported against its new name
        if event.event_type == "moved" and getattr(event, "dest_path", None):
            raw_path = event.dest_path
        else:
            raw_path = event.src_path

        self._events.put(ChangeEvent(kind=kind, paths=[_to_path(raw_path)]))

class DirectoryWatcher:
    """Non-recursive watch on a single directory.

    Use as a context manager: entering creates the directory if needed and
    starts the subscription, leaving releases it on every path.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory).absolute()
        self.logger = logging.getLogger(__name__)
        self._events: "queue.Queue[Optional[ChangeEvent]]" = queue.Queue()
        self._observer: Optional[Observer] = None

    def start(self) -> None:
        if not self.directory.exists():
            self.logger.warning(f"Watch folder doesn't exist, creating: {self.directory}")
            try:
                self.directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise WatchSetupError(f"Failed to create watch folder {self.directory}: {e}") from e
        if not self.directory.is_dir():
            raise WatchSetupError(f"Watch folder is not a directory: {self.directory}")

        observer = Observer()
        try:
            observer.schedule(_QueueingHandler(self._events), str(self.directory), recursive=False)
            observer.start()
        except OSError as e:
            self._stop_observer(observer)
            raise WatchSetupError(f"Failed to watch {self.directory}: {e}") from e

        self._observer = observer
        self.logger.info(f"WATCH_START: {self.directory}")

    def stop(self) -> None:
        """Releases the subscription and ends the event stream."""
        if self._observer is not None:
            self._stop_observer(self._observer)
            self._observer = None
            self.logger.info(f"WATCH_STOP: {self.directory}")
        self._events.put(None)

    @staticmethod
    def _stop_observer(observer: Observer) -> None:
        observer.stop()
        if observer.is_alive():
            observer.join()

    def events(self) -> Iterator[ChangeEvent]:
        """Yields change events in delivery order until the watcher is stopped."""
        while True:
            event = self._events.get()
            if event is None:
                return
            yield event

    def __enter__(self) -> "DirectoryWatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.stop()
        return False
