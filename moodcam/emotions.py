"""
Emotion labels, their canonical order and display details.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, Tuple, Union

from pydantic import BaseModel, ConfigDict


class Emotion(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    SURPRISED = "surprised"
    FEARFUL = "fearful"
    DISGUSTED = "disgusted"
    NEUTRAL = "neutral"


# Canonical order; tie-breaking depends on it
EMOTION_ORDER: Tuple[Emotion, ...] = (
    Emotion.HAPPY,
    Emotion.SAD,
    Emotion.ANGRY,
    Emotion.SURPRISED,
    Emotion.FEARFUL,
    Emotion.DISGUSTED,
    Emotion.NEUTRAL,
)


class EmotionDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Emotion
    label: str
    glyph: str


EMOTION_DETAILS: Dict[Emotion, EmotionDetails] = {
    Emotion.HAPPY: EmotionDetails(id=Emotion.HAPPY, label="Happy", glyph="😊"),
    Emotion.SAD: EmotionDetails(id=Emotion.SAD, label="Sad", glyph="😢"),
    Emotion.ANGRY: EmotionDetails(id=Emotion.ANGRY, label="Angry", glyph="😠"),
    Emotion.SURPRISED: EmotionDetails(id=Emotion.SURPRISED, label="Surprised", glyph="😲"),
    Emotion.FEARFUL: EmotionDetails(id=Emotion.FEARFUL, label="Fearful", glyph="😨"),
    Emotion.DISGUSTED: EmotionDetails(id=Emotion.DISGUSTED, label="Disgusted", glyph="🤢"),
    Emotion.NEUTRAL: EmotionDetails(id=Emotion.NEUTRAL, label="Neutral", glyph="😐"),
}


def parse_emotion(value: Union[Emotion, str, None]) -> Emotion | None:
    """Map a label (case-insensitive) to an Emotion; None if it is not one."""
    if isinstance(value, Emotion):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Emotion(value.strip().lower())
    except ValueError:
        return None


def describe(emotion: Union[Emotion, str, None]) -> EmotionDetails:
    """
    Display details for an emotion. Never fails: anything unknown maps to neutral.
    """
    return EMOTION_DETAILS[parse_emotion(emotion) or Emotion.NEUTRAL]
