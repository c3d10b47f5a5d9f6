import cv2
import numpy as np
import pytest


def solid(bgr, h=60, w=80):
    frame = np.zeros((h, w, 3), dtype=np.uint8)
    frame[:] = bgr
    return frame


@pytest.fixture
def gray_frame():
    return solid((128, 128, 128))


@pytest.fixture
def bright_frame():
    return solid((220, 220, 220))


@pytest.fixture
def dark_checker_frame():
    # alternating 0 / 150 pixels: brightness 75, per-channel std 75
    frame = np.zeros((60, 60, 3), dtype=np.uint8)
    frame[::2, ::2] = 150
    frame[1::2, 1::2] = 150
    return frame


@pytest.fixture
def png_bytes(bright_frame):
    ok, buf = cv2.imencode(".png", bright_frame)
    assert ok
    return buf.tobytes()


@pytest.fixture
def make_frame():
    return solid
