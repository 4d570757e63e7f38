import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


@dataclass(frozen=True)
class AnalysisRequest:
    raw_text: str
    target_language: str = "English"


@dataclass(frozen=True)
class AnalysisRecord:
    """
    Stable contract for a stored analysis.

    ``formatted_output`` is the generator output exactly as returned;
    it is parsed again on every render.
    """

    id: str
    raw_text: str
    formatted_output: str
    timestamp: int              # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "rawText": self.raw_text,
            "formattedOutput": self.formatted_output,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisRecord":
        return cls(
            id=str(data["id"]),
            raw_text=str(data["rawText"]),
            formatted_output=str(data["formattedOutput"]),
            timestamp=int(data["timestamp"]),
        )


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class RecordIdFactory:
    """
    Time-derived record ids, unique within one process.

    Two records created in the same millisecond get consecutive values.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._clock = clock
        self._last: Optional[int] = None

    def next(self) -> tuple[str, int]:
        """Return ``(id, timestamp_ms)`` for a new record."""
        timestamp = self._clock()
        value = timestamp
        if self._last is not None and value <= self._last:
            value = self._last + 1
        self._last = value
        return str(value), timestamp
