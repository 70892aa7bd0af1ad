from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError

from pilarahan.core.config import settings


class InvalidImageError(ValueError):
    pass


class ImageTooLargeError(ValueError):
    pass


@dataclass
class UploadDimensions:
    """Displayed size as reported by the client, natural size as decoded."""

    width: Optional[int]
    height: Optional[int]
    natural_width: Optional[int]
    natural_height: Optional[int]


@dataclass
class IngestedImage:
    image: Image.Image
    width: int
    height: int

    def dimensions(
        self,
        *,
        display_width: Optional[int] = None,
        display_height: Optional[int] = None,
    ) -> UploadDimensions:
        return UploadDimensions(
            width=display_width or self.width,
            height=display_height or self.height,
            natural_width=self.width,
            natural_height=self.height,
        )


def read_image(file_bytes: bytes, *, max_megapixels: Optional[float] = None) -> IngestedImage:
    """Decode just enough of the upload to know what it is and how big it is."""
    limit = float(max_megapixels if max_megapixels is not None else settings.MAX_IMAGE_MEGAPIXELS)
    try:
        img = Image.open(io.BytesIO(file_bytes))
        img.verify()
        # verify() leaves the image unusable; reopen for the caller.
        img = Image.open(io.BytesIO(file_bytes))
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(str(e)) from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError(f"Unsupported or corrupt image: {e}") from e

    w, h = img.size
    if w <= 0 or h <= 0:
        raise InvalidImageError("Image has no pixels")
    if (w * h) / 1_000_000 > limit:
        raise ImageTooLargeError(f"Image is {w}x{h}, above the {limit:g} MP limit")

    return IngestedImage(image=img, width=w, height=h)
