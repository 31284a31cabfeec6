"""Time helpers and display formatting."""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the stored columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_duration(minutes: float) -> str:
    """
    Format a duration in minutes for display.

    Hours are floored and the remaining minutes rounded, so 150 gives
    "2 hours 30 min", 120 gives "2 hours" and 45 gives "45 min".
    """
    minutes = float(minutes or 0)
    hours = int(minutes // 60)
    rest = int(round(minutes % 60))
    if rest == 60:
        hours, rest = hours + 1, 0

    hour_part = f"{hours} hour" if hours == 1 else f"{hours} hours"
    if hours > 0 and rest > 0:
        return f"{hour_part} {rest} min"
    if hours > 0:
        return hour_part
    return f"{rest} min"
