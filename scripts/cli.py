"""
CLI to detect the emotion of an image -> JSON (and optionally an overlay PNG).
"""
from __future__ import annotations
import argparse, asyncio, json, logging, os, sys

import cv2

from moodcam.config import Settings
from moodcam.emotions import describe
from moodcam.errors import InvalidUpload
from moodcam.models import SourceKind
from moodcam.overlay import annotate
from moodcam.pipeline import detect
from moodcam.upload import load_image_file

logger = logging.getLogger("moodcam.cli")


def main(argv=None) -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--image", required=True, help="Path to input image")
    p.add_argument("--out", default=None, help="Optional path to output JSON")
    p.add_argument("--overlay", default=None, help="Optional path to write the annotated PNG")
    args = p.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    try:
        img = load_image_file(args.image, max_bytes=settings.MAX_UPLOAD_BYTES)
    except (FileNotFoundError, InvalidUpload) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = asyncio.run(detect(img, SourceKind.UPLOAD))
    details = describe(result.emotion)
    payload = {**result.model_dump(mode="json"), "label": details.label, "glyph": details.glyph}
    print(json.dumps(payload, indent=2, ensure_ascii=False))

    if args.out:
        os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.info(f"[cli] result written to {args.out}")

    if args.overlay:
        os.makedirs(os.path.dirname(args.overlay) or ".", exist_ok=True)
        if not cv2.imwrite(args.overlay, annotate(img, result.emotion, result.confidence)):
            print(f"error: could not write {args.overlay}", file=sys.stderr)
            return 1
        logger.info(f"[cli] overlay written to {args.overlay}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
