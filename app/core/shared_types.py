from dataclasses import dataclass

from app.core.errors import InvalidRangeError


@dataclass(frozen=True)
class TimeRange:
    """
    Value Object representing a valid span of time.
    Enforces that start_time is strictly before end_time.
    """
    start_seconds: float
    end_seconds: float

    def __post_init__(self):
        if self.start_seconds < 0 or self.end_seconds < 0:
            raise InvalidRangeError("Timestamps cannot be negative.")
        if self.end_seconds <= self.start_seconds:
            raise InvalidRangeError("end must be greater than start")

    @property
    def duration(self) -> float:
        return self.end_seconds - self.start_seconds
