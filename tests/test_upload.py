
import pytest

from moodcam.errors import InvalidUpload
from moodcam.upload import check_content_type, decode_image, load_image_file, load_upload

def test_content_type_gate():
    check_content_type("image/png")
    check_content_type("image/jpeg; charset=binary")
    check_content_type(None, "face.JPG")
    check_content_type("application/octet-stream", "face.png")
    for ctype, name in (("text/plain", "a.txt"), ("video/mp4", "clip.mp4"), (None, "notes")):
        with pytest.raises(InvalidUpload) as ei:
            check_content_type(ctype, name)
        assert ei.value.status_code == 415

def test_decode(png_bytes):
    img = decode_image(png_bytes)
    assert img.shape == (60, 80, 3)
    with pytest.raises(InvalidUpload):
        decode_image(b"")
    with pytest.raises(InvalidUpload) as ei:
        decode_image(b"definitely not an image")
    assert ei.value.status_code == 400
    with pytest.raises(InvalidUpload) as ei:
        decode_image(png_bytes, max_bytes=10)
    assert ei.value.status_code == 413

def test_load_upload_and_file(tmp_path, png_bytes):
    assert load_upload(png_bytes, "image/png", "x.png").shape[:2] == (60, 80)
    with pytest.raises(InvalidUpload):
        load_upload(png_bytes, "text/html", "x.html")
    p = tmp_path / "face.png"
    p.write_bytes(png_bytes)
    assert load_image_file(str(p)).shape == (60, 80, 3)
    with pytest.raises(FileNotFoundError):
        load_image_file(str(tmp_path / "missing.png"))
