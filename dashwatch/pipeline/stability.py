import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

DEFAULT_SETTLE_DELAY_S = 2.0

class StabilityCheck(ABC):
    """Decides when a detected file is safe to hand to the encoder."""

    @abstractmethod
    def wait_until_stable(self, path: Path) -> None:
        ...

class SettleDelay(StabilityCheck):
    """Waits a fixed time and assumes the producer has finished writing.

    Does not look at the file at all; a producer that writes for longer than
    the delay leaves the encoder reading a partial file.
    """

    def __init__(self, delay_s: float = DEFAULT_SETTLE_DELAY_S, sleep: Callable[[float], None] = time.sleep):
        if delay_s < 0:
            raise ValueError("delay_s must be >= 0")
        self.delay_s = delay_s
        self._sleep = sleep
        self.logger = logging.getLogger(__name__)

    def wait_until_stable(self, path: Path) -> None:
        self.logger.debug(f"SETTLE: {path.name} ({self.delay_s:.1f}s)")
        self._sleep(self.delay_s)
