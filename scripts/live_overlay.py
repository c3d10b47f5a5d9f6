"""Run live camera overlay.

Usage:
    uvicorn api.main:app --reload  # (separate, for API)
    python scripts/live_overlay.py  # (to see camera overlay window)

Press 'q' to quit the window.
"""
import logging
import sys

from moodcam.config import Settings
from moodcam.errors import CaptureUnavailable
from moodcam.live import run_live_overlay

if __name__ == '__main__':
    s = Settings()
    logging.basicConfig(level=s.LOG_LEVEL)
    try:
        run_live_overlay(s)
    except CaptureUnavailable as e:
        print(f"Unable to access camera: {e}", file=sys.stderr)
        sys.exit(1)
