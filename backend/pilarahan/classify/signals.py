"""Simulated image feature extraction.

The signals produced here are NOT derived from pixel content. Each one is a
modulo hash of the image's displayed and natural dimensions, with a distinct
prime per field so the fields do not move together. They stand in for a real
vision model and exist so the scorer and knowledge base have deterministic
input in the absence of one.

A real extractor (local inference or a remote model) should implement
`FeatureSource` and be passed to `classify()`; nothing downstream changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

DEFAULT_DIMENSION = 100


class ImageDimensions(Protocol):
    width: Optional[int]
    height: Optional[int]
    natural_width: Optional[int]
    natural_height: Optional[int]


@dataclass(frozen=True)
class ImageSignals:
    brightness: float
    colorfulness: float
    sharpness: float
    greenness: float
    complexity: float
    transparency: float
    reflectivity: float
    texture: float


class FeatureSource(Protocol):
    def extract(self, image: ImageDimensions) -> ImageSignals:
        ...


def _dim(value: Any, default: int) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return default
    return v if v > 0 else default


def extract_signals(image: ImageDimensions) -> ImageSignals:
    """Deterministic signals from the four dimensions (defaults: 100, then displayed size)."""
    w = _dim(getattr(image, "width", None), DEFAULT_DIMENSION)
    h = _dim(getattr(image, "height", None), DEFAULT_DIMENSION)
    nw = _dim(getattr(image, "natural_width", None), w)
    nh = _dim(getattr(image, "natural_height", None), h)

    return ImageSignals(
        brightness=((w * 17) % 255) / 255,
        colorfulness=((h * 23) % 255) / 255,
        sharpness=(((w + h) * 31) % 100) / 100,
        greenness=((nw * 29) % 255) / 255,
        complexity=(((nh + w) * 41) % 100) / 100,
        transparency=((nw * 37) % 100) / 100,
        reflectivity=((nh * 43) % 100) / 100,
        texture=(((w + nh) * 47) % 100) / 100,
    )


class SimulatedFeatureSource:
    """FeatureSource backed by extract_signals()."""

    name = "simulated"

    def extract(self, image: ImageDimensions) -> ImageSignals:
        return extract_signals(image)
