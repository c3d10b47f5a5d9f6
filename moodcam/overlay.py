"""Procedural face overlay keyed by emotion label.

- Canvas: transparent BGRA drawing surface sized to the frame
- draw: resize + clear the canvas, then draw a face for the emotion (nothing for None)
- composite / annotate: blend a canvas onto a BGR frame for display or export

Geometry is derived only from the frame size; no landmarks are tracked.
"""
from __future__ import annotations
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from moodcam.emotions import Emotion, describe, parse_emotion

STROKE = (229, 87, 130, 179)   # rgba(130, 87, 229, 0.7) as BGRA
FAINT = (229, 87, 130, 102)    # same hue at alpha 0.4
LABEL_COLOR = (229, 87, 130)

_WIDE_EYES = (Emotion.SURPRISED, Emotion.FEARFUL)
_ANGLED_EYES = (Emotion.ANGRY, Emotion.DISGUSTED)


class Canvas:
    """Transparent BGRA surface the overlay is drawn on."""

    def __init__(self, width: int = 0, height: int = 0):
        self.image = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    def resize(self, width: int, height: int) -> None:
        width, height = max(0, int(width)), max(0, int(height))
        if (width, height) != (self.width, self.height):
            self.image = np.zeros((height, width, 4), dtype=np.uint8)

    def clear(self) -> None:
        self.image[:] = 0

    def is_blank(self) -> bool:
        return not self.image.any()


def _pt(x: float, y: float) -> Tuple[int, int]:
    return int(round(x)), int(round(y))


def _quad(img: np.ndarray, p0, ctrl, p1, color, thickness: int, steps: int = 24) -> None:
    """Stroke a quadratic Bezier curve as a polyline."""
    t = np.linspace(0.0, 1.0, steps)[:, None]
    p0, ctrl, p1 = (np.asarray(p, dtype=np.float64) for p in (p0, ctrl, p1))
    pts = (1 - t) ** 2 * p0 + 2 * (1 - t) * t * ctrl + t ** 2 * p1
    cv2.polylines(img, [np.round(pts).astype(np.int32)], False, color, thickness, cv2.LINE_AA)


def _draw_eyes(img, emotion, cx, cy, eye, dx, dy) -> None:
    left, right = _pt(cx - dx, cy - dy), _pt(cx + dx, cy - dy)
    if emotion in _WIDE_EYES:
        r = int(round(eye * 1.2))
        cv2.circle(img, left, r, STROKE, cv2.FILLED, cv2.LINE_AA)
        cv2.circle(img, right, r, STROKE, cv2.FILLED, cv2.LINE_AA)
    elif emotion in _ANGLED_EYES:
        axes = _pt(eye, eye * 0.7)
        cv2.ellipse(img, left, axes, 30, 0, 360, STROKE, cv2.FILLED, cv2.LINE_AA)
        cv2.ellipse(img, right, axes, -30, 0, 360, STROKE, cv2.FILLED, cv2.LINE_AA)
    else:
        r = int(round(eye))
        cv2.circle(img, left, r, STROKE, cv2.FILLED, cv2.LINE_AA)
        cv2.circle(img, right, r, STROKE, cv2.FILLED, cv2.LINE_AA)


def _brow_lift(emotion: Emotion, eye: float) -> Tuple[float, float, float, float]:
    """(left outer, left inner, right inner, right outer) lift above the brow line."""
    if emotion in _ANGLED_EYES:
        return 0.0, eye / 2, eye / 2, 0.0
    if emotion in _WIDE_EYES:
        return eye, eye, eye, eye
    if emotion is Emotion.SAD:
        return eye / 2, 0.0, 0.0, eye / 2
    return 0.0, 0.0, 0.0, 0.0


def _draw_brows(img, emotion, cx, cy, eye, dx, dy) -> None:
    brow_y = cy - dy * 1.7
    half = eye  # brow length is 2 * eye
    lo, li, ri, ro = _brow_lift(emotion, eye)
    cv2.line(img, _pt(cx - dx - half, brow_y - lo), _pt(cx - dx + half, brow_y - li), STROKE, 3, cv2.LINE_AA)
    cv2.line(img, _pt(cx + dx - half, brow_y - ri), _pt(cx + dx + half, brow_y - ro), STROKE, 3, cv2.LINE_AA)


def _draw_mouth(img, emotion, cx, cy, face) -> None:
    if emotion is Emotion.HAPPY:
        r = int(round(face * 0.4))
        cv2.ellipse(img, _pt(cx, cy + face * 0.2), (r, r), 0, 0, 180, STROKE, 3, cv2.LINE_AA)
    elif emotion is Emotion.SAD:
        r = int(round(face * 0.4))
        cv2.ellipse(img, _pt(cx, cy + face * 0.6), (r, r), 0, 180, 360, STROKE, 3, cv2.LINE_AA)
    elif emotion in _WIDE_EYES:
        cv2.circle(img, _pt(cx, cy + face * 0.3), int(round(face * 0.2)), STROKE, 3, cv2.LINE_AA)
    elif emotion is Emotion.ANGRY:
        pts = np.array([
            _pt(cx - face * 0.3, cy + face * 0.3),
            _pt(cx, cy + face * 0.4),
            _pt(cx + face * 0.3, cy + face * 0.3),
        ], dtype=np.int32)
        cv2.polylines(img, [pts], False, STROKE, 3, cv2.LINE_AA)
    elif emotion is Emotion.DISGUSTED:
        _quad(img,
              (cx - face * 0.3, cy + face * 0.3),
              (cx, cy + face * 0.5),
              (cx + face * 0.3, cy + face * 0.2),
              STROKE, 3)
    else:
        cv2.line(img, _pt(cx - face * 0.3, cy + face * 0.3), _pt(cx + face * 0.3, cy + face * 0.3),
                 STROKE, 3, cv2.LINE_AA)


def _draw_wrinkles(img, cx, cy, eye, dx, dy) -> None:
    for side in (-1, 1):
        ex = cx + side * dx
        _quad(img,
              (ex - eye, cy - dy - eye * 1.5),
              (ex, cy - dy - eye * 2),
              (ex + eye, cy - dy - eye * 1.5),
              FAINT, 1)


def draw(canvas: Canvas, frame_width: int, frame_height: int,
         emotion: Union[Emotion, str, None]) -> Canvas:
    """Draw the overlay for `emotion` on `canvas`.

    The canvas is resized to frame_width x frame_height and cleared first. With
    no emotion the canvas is left blank.

    Returns:
        The same canvas, for chaining.
    """
    canvas.resize(frame_width, frame_height)
    canvas.clear()

    em = parse_emotion(emotion) if emotion is not None else None
    if em is None or canvas.width == 0 or canvas.height == 0:
        return canvas

    img = canvas.image
    cx, cy = canvas.width / 2.0, canvas.height / 2.0
    face = min(canvas.width, canvas.height) * 0.3
    eye = face * 0.15
    dx, dy = face * 0.3, face * 0.1

    cv2.circle(img, _pt(cx, cy), int(round(face)), STROKE, 2, cv2.LINE_AA)
    _draw_eyes(img, em, cx, cy, eye, dx, dy)
    _draw_brows(img, em, cx, cy, eye, dx, dy)
    _draw_mouth(img, em, cx, cy, face)
    if em in _WIDE_EYES:
        _draw_wrinkles(img, cx, cy, eye, dx, dy)
    return canvas


def draw_for_frame(canvas: Canvas, frame: np.ndarray, emotion: Union[Emotion, str, None]) -> Canvas:
    """draw() sized from a frame's native dimensions."""
    h, w = frame.shape[:2]
    return draw(canvas, w, h, emotion)


def composite(frame: np.ndarray, canvas: Canvas) -> np.ndarray:
    """Alpha-blend `canvas` over a BGR (or gray) frame; returns a new BGR image."""
    out = frame.copy()
    if out.ndim == 2:
        out = cv2.cvtColor(out, cv2.COLOR_GRAY2BGR)
    elif out.shape[2] == 4:
        out = cv2.cvtColor(out, cv2.COLOR_BGRA2BGR)

    h, w = out.shape[:2]
    layer = canvas.image
    if layer.shape[:2] != (h, w):
        if layer.size == 0:
            return out
        layer = cv2.resize(layer, (w, h), interpolation=cv2.INTER_LINEAR)

    alpha = layer[:, :, 3:4].astype(np.float32) / 255.0
    blended = out.astype(np.float32) * (1.0 - alpha) + layer[:, :, :3].astype(np.float32) * alpha
    return np.clip(blended, 0, 255).astype(np.uint8)


def annotate(frame: np.ndarray,
             emotion: Union[Emotion, str, None],
             confidence: Optional[int] = None,
             canvas: Optional[Canvas] = None) -> np.ndarray:
    """Frame with the overlay composited and a "Label NN%" caption (no caption for None)."""
    canvas = draw_for_frame(canvas or Canvas(), frame, emotion)
    return put_caption(composite(frame, canvas), emotion, confidence)


def put_caption(out: np.ndarray, emotion: Union[Emotion, str, None], confidence: Optional[int] = None) -> np.ndarray:
    """Write "Label NN%" in the top-left corner of `out` (in place)."""
    if emotion is None:
        return out
    text = describe(emotion).label
    if confidence is not None:
        text = f"{text} {int(confidence)}%"
    cv2.putText(out, text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, LABEL_COLOR, 2, cv2.LINE_AA)
    return out
