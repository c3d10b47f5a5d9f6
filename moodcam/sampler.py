"""
Region sampling: pixel statistics over sub-rectangles of a frame.

Frames are OpenCV images (BGR, BGRA or single-channel `numpy` arrays). They are
copied into an RGB pixel buffer at their natural size, then summarised over:
  - a central square of side min(width, height) / SAMPLE_DIVISOR
  - an upper band (forehead proxy) and a lower band (mouth proxy)
Every rectangle is clamped to the frame before it is read.
"""
from __future__ import annotations
from typing import NamedTuple, Optional, Tuple
import logging

import cv2
import numpy as np

from moodcam.config import SAMPLE_DIVISOR
from moodcam.errors import SurfaceUnavailable
from moodcam.models import FrameStatistics

logger = logging.getLogger(__name__)


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int


def to_pixel_buffer(frame) -> np.ndarray:
    """Copy `frame` into an RGB uint8 buffer (H x W x 3).

    Raises:
        SurfaceUnavailable: frame is missing, empty or not an image array.
    """
    if not isinstance(frame, np.ndarray) or frame.size == 0:
        raise SurfaceUnavailable("frame is empty or not an image array")
    if frame.ndim not in (2, 3) or frame.shape[0] == 0 or frame.shape[1] == 0:
        raise SurfaceUnavailable(f"unsupported frame shape {frame.shape}")

    img = frame
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    try:
        if img.ndim == 2 or img.shape[2] == 1:
            return cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
        if img.shape[2] == 3:
            return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
        if img.shape[2] == 4:
            return cv2.cvtColor(img, cv2.COLOR_BGRA2RGB)
    except cv2.error as e:
        raise SurfaceUnavailable(f"could not convert frame: {e}") from e
    raise SurfaceUnavailable(f"unsupported channel count {img.shape[2]}")


def clamp_rect(rect: Rect, width: int, height: int) -> Rect:
    """Keep `rect` inside a width x height frame (size first, then origin)."""
    w = max(1, min(int(rect.w), width))
    h = max(1, min(int(rect.h), height))
    x = max(0, min(int(rect.x), width - w))
    y = max(0, min(int(rect.y), height - h))
    return Rect(x, y, w, h)


def central_rect(width: int, height: int) -> Rect:
    side = max(1, min(width, height) // SAMPLE_DIVISOR)
    cx, cy = width // 2, height // 2
    return clamp_rect(Rect(int(cx - side / 2), int(cy - side / 2), side, side), width, height)


def upper_rect(width: int, height: int) -> Rect:
    band = max(1, height // 3)
    cy = height / 2.0 - height / 6.0
    return clamp_rect(Rect(0, int(cy - band / 2), width, band), width, height)


def lower_rect(width: int, height: int) -> Rect:
    band = max(1, height // 3)
    cy = height / 2.0 + height / 6.0
    return clamp_rect(Rect(0, int(cy - band / 2), width, band), width, height)


def _channel_stats(pixels: np.ndarray, rect: Rect) -> Tuple[np.ndarray, np.ndarray]:
    h, w = pixels.shape[:2]
    x, y, rw, rh = clamp_rect(rect, w, h)
    region = pixels[y:y + rh, x:x + rw].reshape(-1, 3).astype(np.float64)
    means = region.mean(axis=0)
    # population deviation (divide by N)
    stds = np.sqrt(((region - means) ** 2).mean(axis=0))
    return means, stds


def _brightness(pixels: np.ndarray, rect: Rect) -> float:
    means, _ = _channel_stats(pixels, rect)
    return float(means.mean())


def sample(frame, rect: Optional[Rect] = None) -> FrameStatistics:
    """
    Compute FrameStatistics for `frame`.

    Args:
        frame: OpenCV image array.
        rect: region to summarise; defaults to the central square.

    Returns:
        FrameStatistics (clamped region; ratios floor their denominator at 1)
    """
    pixels = to_pixel_buffer(frame)
    height, width = pixels.shape[:2]
    region = clamp_rect(rect, width, height) if rect is not None else central_rect(width, height)

    (avg_r, avg_g, avg_b), (std_r, std_g, std_b) = _channel_stats(pixels, region)
    upper = _brightness(pixels, upper_rect(width, height))
    lower = _brightness(pixels, lower_rect(width, height))

    stats = FrameStatistics(
        width=width,
        height=height,
        avg_r=float(avg_r),
        avg_g=float(avg_g),
        avg_b=float(avg_b),
        std_r=float(std_r),
        std_g=float(std_g),
        std_b=float(std_b),
        brightness=float((avg_r + avg_g + avg_b) / 3.0),
        red_green_ratio=float(avg_r / max(avg_g, 1.0)),
        blue_green_ratio=float(avg_b / max(avg_g, 1.0)),
        color_variance=float((std_r + std_g + std_b) / 3.0),
        vertical_brightness_ratio=float(upper / max(lower, 1.0)),
    )
    logger.debug(f"[sampler] {width}x{height} region={tuple(region)} "
                 f"brightness={stats.brightness:.1f} variance={stats.color_variance:.1f}")
    return stats
