"""
Rule-based emotion classification.

Two modes:
  - camera (continuous stream): the label rotates through STREAM_SUBSET by
    wall-clock time and ignores pixel content
  - upload (single shot): threshold rules over FrameStatistics accumulate a
    score vector, resolved in canonical order
"""
from __future__ import annotations
from datetime import datetime
from typing import Dict, Optional
import logging

from moodcam.emotions import EMOTION_ORDER, Emotion
from moodcam.models import FrameStatistics, SourceKind

logger = logging.getLogger(__name__)

ScoreVector = Dict[Emotion, int]

STREAM_SUBSET = (Emotion.HAPPY, Emotion.SAD, Emotion.FEARFUL, Emotion.DISGUSTED)
STREAM_BLOCK_SECONDS = 4

# Added to every upload regardless of the statistics
FLAT_BIAS = {
    Emotion.HAPPY: 3,
    Emotion.SAD: 3,
    Emotion.DISGUSTED: 3,
    Emotion.FEARFUL: 3,
}


def stream_label(now: datetime) -> Emotion:
    """Label for a continuous stream at local time `now`."""
    index = (now.minute + now.second // STREAM_BLOCK_SECONDS) % len(STREAM_SUBSET)
    return STREAM_SUBSET[index]


def score(stats: FrameStatistics) -> ScoreVector:
    """Accumulate the single-shot threshold rules into a fresh score vector."""
    scores: ScoreVector = dict.fromkeys(EMOTION_ORDER, 0)

    b = stats.brightness
    if b > 170:
        scores[Emotion.HAPPY] += 8
    elif b > 140:
        scores[Emotion.HAPPY] += 5
        scores[Emotion.NEUTRAL] += 3
    elif b < 80:
        scores[Emotion.FEARFUL] += 7
        scores[Emotion.SAD] += 6
    elif b < 110:
        scores[Emotion.SAD] += 5
        scores[Emotion.FEARFUL] += 4

    if stats.red_green_ratio > 1.2:
        scores[Emotion.ANGRY] += 4
        scores[Emotion.DISGUSTED] += 6
    elif stats.blue_green_ratio > 1.2:
        scores[Emotion.SAD] += 5
        scores[Emotion.FEARFUL] += 3

    if stats.color_variance > 70:
        scores[Emotion.SURPRISED] += 4
        scores[Emotion.FEARFUL] += 3
        scores[Emotion.DISGUSTED] += 5
    elif stats.color_variance < 30:
        scores[Emotion.NEUTRAL] += 5
        scores[Emotion.SAD] += 3

    for emotion, bias in FLAT_BIAS.items():
        scores[emotion] += bias
    return scores


def resolve(scores: ScoreVector) -> Emotion:
    """Highest score in canonical order; ties keep the earlier emotion, all <= 0 gives neutral."""
    best, best_score = Emotion.NEUTRAL, 0
    for emotion in EMOTION_ORDER:
        value = scores.get(emotion, 0)
        if value > best_score:
            best, best_score = emotion, value
    return best


def classify(stats: Optional[FrameStatistics],
             source_kind: SourceKind,
             now: Optional[datetime] = None) -> Emotion:
    """
    Resolve a single emotion label.

    Args:
        stats: frame statistics (unused for camera frames, may be None there)
        source_kind: SourceKind.CAMERA or SourceKind.UPLOAD
        now: wall-clock time for the camera rotation (defaults to datetime.now())
    """
    if SourceKind(source_kind) is SourceKind.CAMERA:
        label = stream_label(now or datetime.now())
        logger.debug(f"[classify] stream label={label.value}")
        return label

    if stats is None:
        return Emotion.NEUTRAL
    scores = score(stats)
    label = resolve(scores)
    shown = {e.value: s for e, s in scores.items()}
    logger.debug(f"[classify] scores={shown} -> {label.value}")
    return label
