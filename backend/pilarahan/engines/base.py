from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class PredictionError(Exception):
    """A predictor could not produce a usable (category, confidence)."""


@dataclass
class Prediction:
    category: str
    confidence: float
    engine: str = ""


class CategoryPredictor(Protocol):
    name: str

    async def predict(self, content: bytes, mime_type: str) -> Prediction:
        ...
