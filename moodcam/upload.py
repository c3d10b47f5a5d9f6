"""
Upload gate: only decodable images reach the pipeline.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging
import mimetypes

import cv2
import numpy as np

from moodcam.errors import InvalidUpload

logger = logging.getLogger(__name__)


def check_content_type(content_type: Optional[str], filename: Optional[str] = None) -> None:
    """
    Reject anything that does not declare itself an image.

    Falls back to guessing from `filename` when no content type is given.
    """
    ctype = (content_type or "").split(";")[0].strip().lower()
    if not ctype or ctype == "application/octet-stream":
        ctype = (mimetypes.guess_type(filename or "")[0] or "").lower()
    if not ctype.startswith("image/"):
        raise InvalidUpload("Please select an image file", status_code=415)


def decode_image(raw: bytes, max_bytes: Optional[int] = None) -> np.ndarray:
    """Decode encoded image bytes into a BGR array."""
    if not raw:
        raise InvalidUpload("Empty upload")
    if max_bytes is not None and len(raw) > max_bytes:
        raise InvalidUpload(f"Upload exceeds {max_bytes} bytes", status_code=413)
    img = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise InvalidUpload("Invalid image file")
    return img


def load_upload(raw: bytes,
                content_type: Optional[str] = None,
                filename: Optional[str] = None,
                max_bytes: Optional[int] = None) -> np.ndarray:
    """Content-type gate, then decode. Raises InvalidUpload before any processing."""
    check_content_type(content_type, filename)
    img = decode_image(raw, max_bytes=max_bytes)
    logger.debug(f"[upload] accepted {filename or '<bytes>'} shape={img.shape}")
    return img


def load_image_file(path: str, max_bytes: Optional[int] = None) -> np.ndarray:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    return load_upload(p.read_bytes(), filename=p.name, max_bytes=max_bytes)
