import math
import re

from app.core.errors import TimeFormatError

_PLAIN_SECONDS = re.compile(r"^\d+(?:\.\d+)?$")
# 1h2m3s, 2m10s, 45s, 1h
_UNITS = re.compile(
    r"^(?:(\d+(?:\.\d+)?)h)?(?:(\d+(?:\.\d+)?)m)?(?:(\d+(?:\.\d+)?)s)?$",
    re.IGNORECASE,
)


def _clock_field(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise TimeFormatError("Invalid time format")
    if not math.isfinite(value) or value < 0:
        raise TimeFormatError("Invalid time format")
    return value


def parse_time_to_seconds(text: str) -> float:
    """
    Converts a human time expression to seconds.

    Accepted, in order: plain seconds ("90", "12.5"), unit form ("1h2m3s"),
    clock form ("2:10", "1:02:03").

    Raises:
        TimeFormatError: If the input is empty or matches none of the forms.
    """
    trimmed = text.strip()
    if not trimmed:
        raise TimeFormatError("Time is empty")

    if _PLAIN_SECONDS.match(trimmed):
        return float(trimmed)

    unit_match = _UNITS.match(trimmed)
    if unit_match:
        hours, minutes, seconds = (float(g) if g else 0.0 for g in unit_match.groups())
        total = hours * 3600 + minutes * 60 + seconds
        # A zero total is indistinguishable from "no unit matched"
        if total > 0:
            return total

    if ":" in trimmed:
        parts = [p.strip() for p in trimmed.split(":")]
        if any(p == "" for p in parts):
            raise TimeFormatError("Invalid time format")
        if len(parts) == 2:
            mm, ss = (_clock_field(p) for p in parts)
            return mm * 60 + ss
        if len(parts) == 3:
            hh, mm, ss = (_clock_field(p) for p in parts)
            return hh * 3600 + mm * 60 + ss

    raise TimeFormatError(f"Unsupported time format: {text}")


def seconds_to_hms(seconds: float) -> str:
    """Lossy HH:MM:SS formatter; negatives clamp to zero, fractions are floored."""
    total = max(0, math.floor(seconds))
    h, rest = divmod(total, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"
