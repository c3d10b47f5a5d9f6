"""
REST endpoints for emotion detection on uploaded images.
"""
from typing import Optional
import logging

import cv2
from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from moodcam.config import DETECTION_LATENCY_MS, Settings
from moodcam.emotions import EMOTION_ORDER, EmotionDetails, describe, parse_emotion
from moodcam.errors import InvalidUpload
from moodcam.models import DetectionResult, SourceKind
from moodcam.overlay import annotate
from moodcam.pipeline import detect
from moodcam.upload import load_upload

router = APIRouter()
settings = Settings()
logger = logging.getLogger(__name__)

detect_latency_s = DETECTION_LATENCY_MS / 1000.0


async def _read_image(file: UploadFile):
    raw = await file.read()
    try:
        return load_upload(raw, file.content_type, file.filename, max_bytes=settings.MAX_UPLOAD_BYTES)
    except InvalidUpload as e:
        logger.debug(f"[api] rejected upload filename={file.filename}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/emotions", response_model=list[EmotionDetails])
async def list_emotions():
    """All emotions in canonical order."""
    return [describe(e) for e in EMOTION_ORDER]


@router.get("/emotions/{emotion_id}", response_model=EmotionDetails)
async def get_emotion(emotion_id: str):
    """Details for one emotion; unknown ids answer with neutral."""
    return describe(emotion_id)


@router.post("/detect", response_model=DetectionResult)
async def detect_image(file: UploadFile = File(...)):
    """
    Detect the emotion of an uploaded image (single-shot mode).

    Args:
        file: Uploaded image file.

    Returns:
        DetectionResult: emotion, confidence percent and observation time.
    """
    logger.debug(f"[api] /detect filename={file.filename} content_type={file.content_type}")
    img = await _read_image(file)
    try:
        result = await detect(img, SourceKind.UPLOAD, latency_s=detect_latency_s)
    except Exception as e:
        logger.exception("[api] detection failed")
        raise HTTPException(status_code=500, detail=str(e))
    logger.debug(f"[api] /detect -> {result.emotion.value} ({result.confidence}%)")
    return result


@router.post("/overlay")
async def overlay_image(
    file: UploadFile = File(...),
    emotion: Optional[str] = Form(None),
):
    """
    Render the emotion overlay onto an uploaded image and return it as PNG.

    Args:
        file: Uploaded image file.
        emotion: Optional label to draw; detected from the image when omitted.
    """
    img = await _read_image(file)

    confidence = None
    if emotion:
        label = parse_emotion(emotion)
        if label is None:
            raise HTTPException(status_code=422, detail=f"Unknown emotion: {emotion}")
    else:
        result = await detect(img, SourceKind.UPLOAD, latency_s=detect_latency_s)
        label, confidence = result.emotion, result.confidence

    ok, png = cv2.imencode(".png", annotate(img, label, confidence))
    if not ok:
        logger.error("[api] png encoding failed")
        raise HTTPException(status_code=500, detail="Could not encode overlay")

    headers = {"X-Emotion": label.value}
    if confidence is not None:
        headers["X-Confidence"] = str(confidence)
    return Response(content=png.tobytes(), media_type="image/png", headers=headers)
