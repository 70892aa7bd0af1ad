from __future__ import annotations

import io
import json
from typing import Callable, List

import pytest
from PIL import Image

from pilarahan.core.config import settings
from pilarahan.engines.base import Prediction, PredictionError


@pytest.fixture(autouse=True)
def event_log(tmp_path, monkeypatch):
    """Route the JSONL event log into the test's tmp dir."""
    path = tmp_path / "events.jsonl"
    monkeypatch.setattr(settings, "TELEMETRY_ENABLED", True)
    monkeypatch.setattr(settings, "LOG_JSONL_PATH", str(path))
    return path


@pytest.fixture
def read_events(event_log) -> Callable[[], List[dict]]:
    def _read() -> List[dict]:
        if not event_log.exists():
            return []
        return [json.loads(line) for line in event_log.read_text(encoding="utf-8").splitlines() if line.strip()]

    return _read


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    def _make(width: int = 100, height: int = 100, color: str = "green", format: str = "PNG") -> bytes:
        buf = io.BytesIO()
        Image.new("RGB", (width, height), color).save(buf, format=format)
        return buf.getvalue()

    return _make


class FakePredictor:
    name = "fake"

    def __init__(self, category: str = "Metal", confidence: float = 0.9) -> None:
        self.category = category
        self.confidence = confidence
        self.calls: List[tuple] = []

    async def predict(self, content: bytes, mime_type: str) -> Prediction:
        self.calls.append((len(content), mime_type))
        return Prediction(self.category, self.confidence, self.name)


class FailingPredictor:
    name = "broken"

    async def predict(self, content: bytes, mime_type: str) -> Prediction:
        raise PredictionError("model unreachable")


@pytest.fixture
def fake_predictor() -> Callable[..., FakePredictor]:
    return FakePredictor


@pytest.fixture
def failing_predictor() -> FailingPredictor:
    return FailingPredictor()
