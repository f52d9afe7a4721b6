from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    """Port for time-related operations (chunk timestamps)."""

    @abstractmethod
    def now(self) -> datetime:
        """Return current UTC datetime."""
        ...

    def timestamp(self) -> int:
        """Current time as unix seconds, the unit stored on chunks."""
        return int(self.now().timestamp())
