# moodcam/live.py
"""
Live (real-time) orchestration.

EmotionOrchestrator owns the pipeline state for the active input source:
- camera frames are rate limited (RATE_LIMIT_MS) and dropped while a detection is in flight
- uploads always run exactly one detection
- every display tick redraws the overlay for the last resolved emotion

Detections run as asyncio tasks tagged with the source generation; switching
source cancels the pending task and any late result is discarded. Leaving the
camera source (or closing) releases the attached capture.

run_live_overlay opens the camera in an OpenCV window and drives the loop.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional
import asyncio
import logging
import random

import cv2
import numpy as np

from moodcam.capture import CameraCapture
from moodcam.config import DETECTION_LATENCY_MS, RATE_LIMIT_MS, Settings
from moodcam.models import DetectionResult, PipelineState, SourceKind
from moodcam.overlay import Canvas, composite, draw_for_frame, put_caption
from moodcam.pipeline import detect, now_ms
from moodcam.rate_limit import should_process

logger = logging.getLogger(__name__)


class EmotionOrchestrator:
    """Routes frames through detection and keeps the current emotion."""

    def __init__(self,
                 source: SourceKind = SourceKind.CAMERA,
                 latency_s: float = DETECTION_LATENCY_MS / 1000.0,
                 rate_limit_ms: float = RATE_LIMIT_MS,
                 clock: Optional[Callable[[], datetime]] = None,
                 rng: Optional[random.Random] = None,
                 capture: Optional[CameraCapture] = None):
        self.source = SourceKind(source)
        self.capture = capture
        self.latency_s = latency_s
        self.rate_limit_ms = rate_limit_ms
        self.state = PipelineState()
        self._clock = clock
        self._rng = rng
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._latest: Optional[DetectionResult] = None

    # ---- read side ----
    @property
    def generation(self) -> int:
        return self._generation

    def latest(self) -> Optional[DetectionResult]:
        return self._latest

    # ---- lifecycle ----
    def switch_source(self, source: SourceKind) -> None:
        """Activate another input source; state resets even if the kind is unchanged.

        Leaving the camera releases the attached capture.
        """
        self._cancel_pending()
        if self.source is SourceKind.CAMERA and SourceKind(source) is not SourceKind.CAMERA:
            self._stop_capture()
        self.source = SourceKind(source)
        self._generation += 1
        self.state = PipelineState()
        self._latest = None
        logger.debug(f"[live] source -> {self.source.value} (generation {self._generation})")

    def close(self) -> None:
        self._cancel_pending()
        self._stop_capture()
        self._generation += 1

    def _stop_capture(self) -> None:
        if self.capture is not None:
            self.capture.stop()

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.state.is_processing = False

    # ---- frame delivery ----
    def submit_frame(self, frame: np.ndarray, now: float) -> Optional[asyncio.Task]:
        """
        Continuous-stream frame at time `now` (ms). Returns the detection task,
        or None when the frame was dropped.
        """
        if self.source is not SourceKind.CAMERA:
            self.switch_source(SourceKind.CAMERA)
        if self.state.is_processing:
            return None
        if not should_process(now, self.state.last_processed_at, self.rate_limit_ms):
            return None
        self.state.last_processed_at = now
        return self._start(frame, SourceKind.CAMERA)

    def submit_image(self, frame: np.ndarray) -> asyncio.Task:
        """Single-shot image: always detects, replacing a pending upload detection."""
        if self.source is not SourceKind.UPLOAD:
            self.switch_source(SourceKind.UPLOAD)
        self._cancel_pending()
        self.state.last_processed_at = now_ms()
        return self._start(frame, SourceKind.UPLOAD)

    def _start(self, frame: np.ndarray, kind: SourceKind) -> asyncio.Task:
        self.state.is_processing = True
        task = asyncio.get_running_loop().create_task(self._run(frame, kind, self._generation))
        self._task = task
        return task

    async def _run(self, frame: np.ndarray, kind: SourceKind, generation: int) -> Optional[DetectionResult]:
        try:
            result = await detect(
                frame,
                kind,
                latency_s=self.latency_s,
                rng=self._rng,
                clock=self._clock or datetime.now,
            )
        except asyncio.CancelledError:
            logger.debug(f"[live] detection cancelled (generation {generation})")
            raise
        except Exception:
            logger.exception("[live] detection failed; cycle skipped")
            if generation == self._generation:
                self.state.is_processing = False
                self._task = None
            return None

        if generation != self._generation:
            logger.debug(f"[live] stale result {result.emotion.value} discarded "
                         f"(generation {generation} != {self._generation})")
            return None

        self.state.current_emotion = result.emotion
        self.state.is_processing = False
        self._latest = result
        self._task = None
        return result

    # ---- rendering ----
    def render(self, canvas: Canvas, frame: np.ndarray) -> Canvas:
        """Overlay for the current emotion; called on every display tick."""
        return draw_for_frame(canvas, frame, self.state.current_emotion)


# -----------------------------------------------------------------------------
# Live camera window
# -----------------------------------------------------------------------------
async def _live_loop(orchestrator: EmotionOrchestrator, capture: CameraCapture, title: str) -> None:
    canvas = Canvas()
    capture.on_frame(lambda f: orchestrator.submit_frame(f, now_ms()))
    try:
        while True:
            frame = capture.read()
            if frame is None:
                break
            orchestrator.render(canvas, frame)
            latest = orchestrator.latest()
            annotated = put_caption(
                composite(frame, canvas),
                orchestrator.state.current_emotion,
                latest.confidence if latest else None,
            )
            cv2.imshow(title, annotated)
            if (cv2.waitKey(1) & 0xFF) == ord("q"):
                break
            # yield so pending detections can progress
            await asyncio.sleep(0)
    finally:
        orchestrator.close()


def run_live_overlay(settings: Settings, camera_index: Optional[int] = None) -> None:
    """
    Open the webcam, detect on a 2 s cadence and draw the emotion overlay every frame.

    Press 'q' to quit.

    Raises:
        CaptureUnavailable: camera could not be opened.
    """
    cam_idx = settings.CAMERA_INDEX if camera_index is None else camera_index
    try:
        with CameraCapture(cam_idx) as capture:
            orchestrator = EmotionOrchestrator(source=SourceKind.CAMERA, capture=capture)
            asyncio.run(_live_loop(orchestrator, capture, settings.WINDOW_TITLE))
    finally:
        cv2.destroyAllWindows()
