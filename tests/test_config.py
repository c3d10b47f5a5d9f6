
from moodcam import config
from moodcam.config import Settings

def test_Settings():
    s = Settings()
    assert s.CAMERA_INDEX >= 0
    assert s.MAX_UPLOAD_BYTES > 0
    # override via env-like behavior (construct new instance)
    s2 = Settings(CAMERA_INDEX=2)
    assert s2.CAMERA_INDEX == 2

def test_log_level_normalized():
    assert Settings(LOG_LEVEL="debug  # verbose").LOG_LEVEL == "DEBUG"
    assert Settings(LOG_LEVEL="chatty").LOG_LEVEL == "INFO"
    assert Settings(LOG_LEVEL="").LOG_LEVEL == "INFO"

def test_pipeline_constants():
    assert config.RATE_LIMIT_MS == 2000
    assert config.DETECTION_LATENCY_MS == 500
    assert abs(config.SAMPLE_FRACTION - 1 / 3) < 1e-12
    assert config.CONFIDENCE_RANGES["fearful"] == (82, 97)
