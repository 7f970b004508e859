"""
Duration formatting for the time utilization display.
"""

from typing import Optional


def format_duration(total_seconds: Optional[int]) -> str:
    """
    Render a count of seconds as a compact duration string.

    Zero or missing renders as "00s". Leading zero components are omitted,
    inner ones are kept: 45 -> "45s", 90 -> "1m 30s", 3665 -> "1h 1m 5s",
    3600 -> "1h 0m 0s".
    """
    if not total_seconds:
        return "00s"

    hours, remainder = divmod(int(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def format_limit(limit_seconds: int) -> str:
    """Render a soft limit label in whole units: 1200 -> "20m", 57600 -> "16h"."""
    if limit_seconds % 3600 == 0 and limit_seconds >= 3600:
        return f"{limit_seconds // 3600}h"
    if limit_seconds % 60 == 0 and limit_seconds >= 60:
        return f"{limit_seconds // 60}m"
    return f"{limit_seconds}s"
