import json

import cv2

import scripts.cli as cli


def test_cli_writes_json_and_overlay(tmp_path, bright_frame, capsys):
    src = tmp_path / "face.png"
    assert cv2.imwrite(str(src), bright_frame)
    out_json = tmp_path / "out" / "result.json"
    out_png = tmp_path / "out" / "overlay.png"

    rc = cli.main(["--image", str(src), "--out", str(out_json), "--overlay", str(out_png)])
    assert rc == 0

    printed = json.loads(capsys.readouterr().out)
    assert printed["emotion"] == "happy" and printed["label"] == "Happy"
    assert 85 <= printed["confidence"] <= 95
    assert json.loads(out_json.read_text(encoding="utf-8")) == printed

    overlay = cv2.imread(str(out_png))
    assert overlay.shape == bright_frame.shape
    assert (overlay != bright_frame).any()


def test_cli_missing_image(tmp_path, capsys):
    rc = cli.main(["--image", str(tmp_path / "nope.png")])
    assert rc == 2
    assert "error" in capsys.readouterr().err


def test_cli_rejects_non_image(tmp_path):
    p = tmp_path / "notes.txt"
    p.write_text("hello")
    assert cli.main(["--image", str(p)]) == 2
