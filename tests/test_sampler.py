
import numpy as np
import pytest

from moodcam.errors import SurfaceUnavailable
from moodcam.sampler import Rect, central_rect, clamp_rect, sample, to_pixel_buffer

def test_uniform_gray_statistics(gray_frame):
    st = sample(gray_frame)
    assert st.width == 80 and st.height == 60
    assert st.brightness == pytest.approx(128.0)
    assert st.color_variance == 0.0
    assert st.red_green_ratio == pytest.approx(1.0)
    assert st.blue_green_ratio == pytest.approx(1.0)
    assert st.vertical_brightness_ratio == pytest.approx(1.0)

def test_channels_are_rgb_and_population_std(make_frame, dark_checker_frame):
    st = sample(make_frame((10, 20, 200)))  # BGR
    assert st.avg_r == pytest.approx(200) and st.avg_b == pytest.approx(10)
    checker = sample(dark_checker_frame)
    assert checker.brightness == pytest.approx(75.0)
    assert checker.std_r == pytest.approx(75.0)  # N, not N-1
    assert checker.color_variance == pytest.approx(75.0)

def test_zero_green_is_guarded(make_frame):
    st = sample(make_frame((100, 0, 200)))
    assert st.red_green_ratio == pytest.approx(200.0)
    assert st.blue_green_ratio == pytest.approx(100.0)

def test_vertical_brightness_ratio():
    frame = np.zeros((60, 40, 3), dtype=np.uint8)
    frame[:30] = 255
    st = sample(frame)
    assert st.vertical_brightness_ratio == pytest.approx(255.0)

def test_rects_are_clamped():
    assert clamp_rect(Rect(-10, -5, 50, 50), 40, 30) == Rect(0, 0, 40, 30)
    assert clamp_rect(Rect(35, 25, 10, 10), 40, 30) == Rect(30, 20, 10, 10)
    assert central_rect(90, 60) == Rect(35, 20, 20, 20)
    assert central_rect(1, 1) == Rect(0, 0, 1, 1)

def test_explicit_rect_out_of_bounds(make_frame):
    frame = make_frame((0, 0, 0), h=20, w=20)
    frame[:, 15:] = (0, 0, 255)  # red right edge
    st = sample(frame, Rect(18, 18, 5, 5))  # clamped to (15, 15, 5, 5)
    assert st.avg_r == pytest.approx(255.0)

def test_pixel_buffer_formats():
    gray = np.full((4, 4), 90, dtype=np.uint8)
    assert to_pixel_buffer(gray).shape == (4, 4, 3)
    bgra = np.zeros((4, 4, 4), dtype=np.uint8)
    assert to_pixel_buffer(bgra).shape == (4, 4, 3)
    for bad in (None, np.zeros((0, 0, 3), dtype=np.uint8), np.zeros((2, 2, 2), dtype=np.uint8), "img"):
        with pytest.raises(SurfaceUnavailable):
            to_pixel_buffer(bad)
