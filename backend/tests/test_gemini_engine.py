import asyncio
import json

import httpx
import pytest

from pilarahan.engines.base import PredictionError
from pilarahan.engines.gemini_engine import GeminiCategoryPredictor
from pilarahan.services.gemini_client import GeminiClient


def predict_with(handler):
    async def _go():
        client = GeminiClient("k", transport=httpx.MockTransport(handler))
        try:
            return await GeminiCategoryPredictor(client).predict(b"jpeg-bytes", "image/jpeg")
        finally:
            await client.aclose()

    return asyncio.run(_go())


def replying(text, status=200):
    def handler(request):
        return httpx.Response(status, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})

    return handler


def test_fenced_answer_becomes_prediction():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return replying('```json\n{"category": "plastic", "confidence": 0.92}\n```')(request)

    prediction = predict_with(handler)

    assert prediction.category == "Plastic"
    assert prediction.confidence == 0.92
    assert prediction.engine == "gemini"
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "Electronic" in prompt and "Battery" in prompt
    assert seen["body"]["generationConfig"]["temperature"] == 0.1


def test_unknown_category_maps_to_other_and_confidence_clamped():
    prediction = predict_with(replying('{"category": "Styrofoam", "confidence": 3}'))
    assert prediction.category == "Other"
    assert prediction.confidence == 1.0


def test_prose_answer_is_prediction_error():
    with pytest.raises(PredictionError):
        predict_with(replying("I think it is a bottle."))


def test_missing_confidence_is_prediction_error():
    with pytest.raises(PredictionError):
        predict_with(replying('{"category": "Glass"}'))


def test_upstream_failure_is_prediction_error():
    with pytest.raises(PredictionError, match="GeminiUnavailableError"):
        predict_with(replying("", status=503))
