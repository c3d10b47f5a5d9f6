"""
Exception taxonomy for the pipeline and its collaborators.
"""


class MoodcamError(Exception):
    """Base class for every error raised by moodcam."""


class SurfaceUnavailable(MoodcamError):
    """The off-screen pixel buffer for a frame could not be created."""


class CaptureUnavailable(MoodcamError):
    """Camera missing, busy, or permission denied."""


class InvalidUpload(MoodcamError):
    """An uploaded file is not a decodable image.

    `status_code` mirrors the HTTP status the API answers with.
    """
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code
