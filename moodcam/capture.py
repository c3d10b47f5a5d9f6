"""
Camera capture as a scoped resource.

`CameraCapture` wraps `cv2.VideoCapture`: `start()` acquires the device,
`stop()` releases it, and the context-manager form releases on every exit path.
A failed start leaves the capture disabled (`available = False`) until the
caller explicitly tries `start()` again.
"""
from __future__ import annotations
from typing import Callable, Iterator, List, Optional
import logging

import cv2
import numpy as np

from moodcam.errors import CaptureUnavailable

logger = logging.getLogger(__name__)

FrameCallback = Callable[[np.ndarray], None]


class CameraCapture:
    def __init__(self, camera_index: int = 0, factory: Optional[Callable] = None):
        self.camera_index = camera_index
        self._factory = factory or cv2.VideoCapture
        self._cap = None
        self._callbacks: List[FrameCallback] = []
        self.available = True
        self.error: Optional[str] = None

    @property
    def is_streaming(self) -> bool:
        return self._cap is not None

    # ---- lifecycle ----
    def start(self):
        """Open the camera; returns the underlying capture.

        Raises:
            CaptureUnavailable: device missing or access denied.
        """
        if self._cap is not None:
            return self._cap

        cap = None
        try:
            cap = self._factory(self.camera_index)
            if cap is None or not cap.isOpened():
                raise CaptureUnavailable(f"Could not open camera index {self.camera_index}")
        except Exception as e:
            self._release(cap)
            self.available = False
            self.error = str(e) or "Unable to access camera"
            logger.error(f"[capture] start failed: {self.error}")
            if isinstance(e, CaptureUnavailable):
                raise
            raise CaptureUnavailable(self.error) from e

        self._cap = cap
        self.available = True
        self.error = None
        logger.debug(f"[capture] camera {self.camera_index} started")
        return cap

    def stop(self) -> None:
        if self._cap is None:
            return
        cap, self._cap = self._cap, None
        self._release(cap)
        logger.debug(f"[capture] camera {self.camera_index} stopped")

    @staticmethod
    def _release(cap) -> None:
        if cap is None:
            return
        try:
            cap.release()
        except Exception:
            logger.exception("[capture] release failed")

    def __enter__(self) -> "CameraCapture":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    # ---- frames ----
    def on_frame(self, callback: FrameCallback) -> FrameCallback:
        self._callbacks.append(callback)
        return callback

    def read(self) -> Optional[np.ndarray]:
        """Read one frame and hand it to every on_frame callback; None when the stream ends."""
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None:
            return None
        for cb in self._callbacks:
            cb(frame)
        return frame

    def frames(self) -> Iterator[np.ndarray]:
        while self._cap is not None:
            frame = self.read()
            if frame is None:
                break
            yield frame
