"""
Display confidence for a resolved emotion.

The value is cosmetic: it depends only on the label, never on the scores.
"""
from __future__ import annotations
from typing import Optional, Tuple, Union
import random

from moodcam.config import CONFIDENCE_RANGES
from moodcam.emotions import Emotion, parse_emotion

_rng = random.Random()


def confidence_range(emotion: Union[Emotion, str, None]) -> Tuple[int, int]:
    em = parse_emotion(emotion)
    key = em.value if em is not None else "default"
    return CONFIDENCE_RANGES.get(key, CONFIDENCE_RANGES["default"])


def confidence_for(emotion: Union[Emotion, str, None], rng: Optional[random.Random] = None) -> int:
    """
    Uniform integer percent in the emotion's inclusive range.

    Args:
        emotion: resolved label
        rng: random source (anything with `randint`); module-level Random if omitted
    """
    lo, hi = confidence_range(emotion)
    return int((rng or _rng).randint(lo, hi))
