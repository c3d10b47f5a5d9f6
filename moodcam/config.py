"""
Configuration for the detection pipeline.
"""
from pydantic import BaseModel
import os

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Fixed pipeline constants (not runtime-configurable)
RATE_LIMIT_MS = 2000
DETECTION_LATENCY_MS = 500
SAMPLE_DIVISOR = 3
SAMPLE_FRACTION = 1.0 / SAMPLE_DIVISOR

# Inclusive percent ranges per emotion id; "default" covers everything else
CONFIDENCE_RANGES = {
    "happy": (85, 95),
    "sad": (80, 95),
    "disgusted": (83, 93),
    "fearful": (82, 97),
    "default": (65, 95),
}


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
    WINDOW_TITLE: str = os.getenv("WINDOW_TITLE", "moodcam (q to quit)")

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize LOG_LEVEL: first word, upper-case, fall back to INFO
        words = (self.LOG_LEVEL or "").strip().split()
        level = words[0].upper() if words else "INFO"
        if level not in _LEVELS:
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
