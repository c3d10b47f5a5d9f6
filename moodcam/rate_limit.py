"""
Detection cadence gate for continuous streams.
"""
from moodcam.config import RATE_LIMIT_MS


def should_process(now: float, last_processed_at: float, min_interval_ms: float = RATE_LIMIT_MS) -> bool:
    """True once at least `min_interval_ms` has passed since the last detection (times in ms)."""
    return (now - last_processed_at) >= min_interval_ms
