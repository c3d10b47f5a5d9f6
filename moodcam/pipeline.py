# moodcam/pipeline.py
from __future__ import annotations
from datetime import datetime
from typing import Callable, Optional
import asyncio
import logging
import random
import time

from moodcam.classifier import classify
from moodcam.confidence import confidence_for
from moodcam.config import DETECTION_LATENCY_MS
from moodcam.emotions import Emotion
from moodcam.errors import SurfaceUnavailable
from moodcam.models import DetectionResult, SourceKind
from moodcam.sampler import sample

logger = logging.getLogger(__name__)


def now_ms() -> float:
    return time.time() * 1000.0


def detect_now(frame,
               source_kind: SourceKind,
               now: Optional[datetime] = None,
               rng: Optional[random.Random] = None) -> DetectionResult:
    """
    Synchronous detection: sample, classify, synthesize confidence.

    A frame that cannot be turned into a pixel buffer resolves to neutral
    instead of raising.
    """
    kind = SourceKind(source_kind)
    try:
        stats = sample(frame)
        emotion = classify(stats, kind, now=now)
    except SurfaceUnavailable as e:
        logger.warning(f"[pipeline] surface unavailable ({e}); falling back to neutral")
        emotion = Emotion.NEUTRAL

    result = DetectionResult(
        emotion=emotion,
        confidence=confidence_for(emotion, rng=rng),
        observed_at=now.timestamp() * 1000.0 if now else now_ms(),
    )
    logger.debug(f"[pipeline] {kind.value} -> {result.emotion.value} ({result.confidence}%)")
    return result


async def detect(frame,
                 source_kind: SourceKind,
                 latency_s: float = DETECTION_LATENCY_MS / 1000.0,
                 now: Optional[datetime] = None,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None) -> DetectionResult:
    """
    Asynchronous detection with a fixed simulated inference latency.

    Args:
        frame: OpenCV image array (camera frame or decoded upload)
        source_kind: SourceKind.CAMERA or SourceKind.UPLOAD
        latency_s: simulated latency in seconds
        now: clock override for the camera rotation
        rng: random source for the confidence draw
        clock: read once the latency has elapsed, when `now` is not given
    """
    if latency_s > 0:
        await asyncio.sleep(latency_s)
    if now is None and clock is not None:
        now = clock()
    return detect_now(frame, source_kind, now=now, rng=rng)
