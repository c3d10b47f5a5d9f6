"""
Pydantic data models shared by the pipeline, the API and the CLI.
"""
from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from moodcam.emotions import Emotion


class SourceKind(str, Enum):
    CAMERA = "camera"   # continuous stream
    UPLOAD = "upload"   # single shot


class FrameStatistics(BaseModel):
    """Pixel statistics of the central sample region of one frame."""
    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    avg_r: float
    avg_g: float
    avg_b: float
    std_r: float
    std_g: float
    std_b: float
    brightness: float
    red_green_ratio: float
    blue_green_ratio: float
    color_variance: float
    vertical_brightness_ratio: float


class DetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    emotion: Emotion
    confidence: int = Field(ge=0, le=100)
    observed_at: float  # epoch milliseconds


class PipelineState(BaseModel):
    current_emotion: Optional[Emotion] = None
    is_processing: bool = False
    last_processed_at: float = float("-inf")
