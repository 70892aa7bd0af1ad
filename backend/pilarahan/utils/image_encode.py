from io import BytesIO
from typing import Tuple

from PIL import Image

MODEL_MAX_SIDE = 1024


def encode_for_model(img: Image.Image, *, max_side: int = MODEL_MAX_SIDE, format: str = "JPEG") -> Tuple[bytes, str]:
    """Downscale (never upscale) and re-encode an image for a remote model call."""
    out = img.convert("RGB") if format.upper() == "JPEG" else img.copy()
    out.thumbnail((max_side, max_side))
    buf = BytesIO()
    out.save(buf, format=format)
    return buf.getvalue(), f"image/{format.lower()}"
