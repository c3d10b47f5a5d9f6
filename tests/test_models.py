
import math
import pytest
from pydantic import ValidationError

from moodcam.emotions import EMOTION_ORDER, Emotion, describe, parse_emotion
from moodcam.models import DetectionResult, PipelineState

def test_canonical_order():
    assert [e.value for e in EMOTION_ORDER] == [
        "happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral"
    ]

def test_describe():
    assert describe(Emotion.HAPPY).label == "Happy"
    assert describe("SAD ").glyph == "😢"
    assert describe("unknown-id") == describe(Emotion.NEUTRAL)
    assert describe(None).id is Emotion.NEUTRAL
    assert describe(42).label == "Neutral"

def test_parse_emotion():
    assert parse_emotion("Fearful") is Emotion.FEARFUL
    assert parse_emotion("nope") is None
    assert parse_emotion(None) is None

def test_detection_result_bounds_and_frozen():
    r = DetectionResult(emotion=Emotion.SAD, confidence=88, observed_at=1.0)
    with pytest.raises(ValidationError):
        DetectionResult(emotion=Emotion.SAD, confidence=101, observed_at=1.0)
    with pytest.raises(ValidationError):
        r.confidence = 50

def test_pipeline_state_defaults():
    st = PipelineState()
    assert st.current_emotion is None and st.is_processing is False
    assert math.isinf(st.last_processed_at) and st.last_processed_at < 0
