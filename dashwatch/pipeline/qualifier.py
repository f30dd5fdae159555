import logging
from pathlib import Path
from typing import Iterable, Iterator, List
from dashwatch.domain.models import ChangeEvent, ChangeKind

_ACCEPTED_KINDS = {ChangeKind.CREATE, ChangeKind.MODIFY}

class EventQualifier:
    """Keeps create/modify paths whose extension is in the allow-list."""

    def __init__(self, extensions: Iterable[str]):
        self.extensions = {ext.strip().lstrip(".").lower() for ext in extensions if ext.strip()}
        self.logger = logging.getLogger(__name__)

    def is_video_file(self, path: Path) -> bool:
        name = path.name
        try:
            name.encode("utf-8")
        except UnicodeEncodeError:
            # Undecodable bytes survive as lone surrogates
            self.logger.debug(f"SKIP: non-text file name {name!r}")
            return False

        suffix = path.suffix
        if not suffix:
            return False
        return suffix[1:].lower() in self.extensions

    def qualify(self, event: ChangeEvent) -> List[Path]:
        if event.kind not in _ACCEPTED_KINDS:
            return []
        return [path for path in event.paths if self.is_video_file(path)]

    def filter(self, events: Iterable[ChangeEvent]) -> Iterator[Path]:
        """Lazily yields qualifying paths in the order events arrive."""
        for event in events:
            yield from self.qualify(event)
