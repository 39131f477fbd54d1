"""Timing utilities for monotonic timestamps."""
import time


def now_ms() -> float:
    """Monotonic, process-wide clock in milliseconds."""
    return time.monotonic() * 1000.0
