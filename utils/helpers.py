"""
Helper utility functions
"""
import time
from typing import Optional


def monotonic_clock() -> float:
    """
    Default clock for the session store.

    Returns:
        Monotonic time in seconds
    """
    return time.monotonic()


def mask_session_id(session_id: Optional[str], visible: int = 6) -> str:
    """
    Shorten a session ID for log output.

    Args:
        session_id: Session identifier (may be empty)
        visible: Number of leading characters to keep

    Returns:
        Masked identifier such as "3f9a1c…"
    """
    if not session_id:
        return "<none>"
    if len(session_id) <= visible:
        return session_id
    return f"{session_id[:visible]}…"


def format_seconds(seconds: float) -> str:
    """
    Format a duration for log messages.

    Args:
        seconds: Duration in seconds

    Returns:
        Human-readable string (e.g., "1.5h", "30m", "45s")
    """
    if seconds >= 3600:
        return f"{seconds / 3600:g}h"
    if seconds >= 60:
        return f"{seconds / 60:g}m"
    return f"{seconds:g}s"
