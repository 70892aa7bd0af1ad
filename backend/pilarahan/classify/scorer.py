from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from pilarahan.classify.categories import (
    BATTERY,
    ELECTRONIC,
    GLASS,
    METAL,
    ORGANIC,
    OTHER,
    PAPER,
    PLASTIC,
    TEXTILE,
)
from pilarahan.classify.signals import ImageSignals

CONFIDENCE_FLOOR = 0.65
CONFIDENCE_CEILING = 0.90
MARGIN_GAIN = 0.5
LOW_CONFIDENCE_FACTOR = 0.8
DEFAULT_CATEGORY = ORGANIC


@dataclass(frozen=True)
class CategoryScore:
    category: str
    confidence: float
    weights: Dict[str, float] = field(default_factory=dict)


def category_weights(signals: ImageSignals, *, low_confidence: bool = False) -> Dict[str, float]:
    """One linear weight per category, in closed-set order.

    Textile, Battery and Other have no visual formula; only a real predictor
    proposes them.
    """
    s = signals
    return {
        PLASTIC: s.colorfulness * 1.8 + s.sharpness * 0.6 + (-0.2 if low_confidence else 0.0),
        PAPER: (1 - s.colorfulness) * 0.9 + s.brightness * 0.8,
        GLASS: s.brightness * 1.4 + s.sharpness * 0.9 + s.transparency * 0.5,
        METAL: s.sharpness * 1.7 + (1 - s.brightness) * 0.6 + s.reflectivity * 0.4,
        ORGANIC: s.greenness * 2.2 + (1 - s.brightness) * 0.9 + s.texture * 0.3,
        ELECTRONIC: s.complexity * 1.8 + s.sharpness * 0.7 + (-0.1 if low_confidence else 0.0),
        TEXTILE: 0.0,
        BATTERY: 0.0,
        OTHER: 0.0,
    }


def score(signals: ImageSignals, *, low_confidence: bool = False) -> CategoryScore:
    """Pick the heaviest category and derive confidence from its margin.

    A category only wins by being strictly heavier than everything before it,
    so ties keep the earlier one and all-zero weights keep DEFAULT_CATEGORY.
    """
    weights = category_weights(signals, low_confidence=low_confidence)

    primary = DEFAULT_CATEGORY
    highest = 0.0
    for category, weight in weights.items():
        if weight > highest:
            highest = weight
            primary = category

    secondary = 0.0
    for category, weight in weights.items():
        if category != primary and weight > secondary:
            secondary = weight

    confidence = min(CONFIDENCE_CEILING, max(CONFIDENCE_FLOOR, CONFIDENCE_FLOOR + (highest - secondary) * MARGIN_GAIN))
    if low_confidence:
        confidence *= LOW_CONFIDENCE_FACTOR

    return CategoryScore(category=primary, confidence=confidence, weights=weights)
