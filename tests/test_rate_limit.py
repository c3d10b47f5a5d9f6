
import pytest

from moodcam.config import RATE_LIMIT_MS
from moodcam.rate_limit import should_process

T0 = 1_700_000_000_000.0


def test_should_process_boundary():
    assert should_process(T0 + 1999, T0, 2000) is False
    assert should_process(T0 + 2000, T0, 2000) is True

def test_first_frame_always_passes():
    assert should_process(T0, float("-inf")) is True

@pytest.mark.parametrize("elapsed,expected", [(0, False), (RATE_LIMIT_MS - 1, False), (RATE_LIMIT_MS, True), (10_000, True)])
def test_default_interval(elapsed, expected):
    assert should_process(T0 + elapsed, T0) is expected
