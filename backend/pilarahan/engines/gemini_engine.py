from __future__ import annotations

from pilarahan.classify.categories import CATEGORIES, normalize_category
from pilarahan.engines.base import Prediction, PredictionError
from pilarahan.services.gemini_client import GeminiClient, GeminiError, extract_json_object

CLASSIFY_PROMPT = (
    "You are a waste sorting assistant. Classify the item in this photo into exactly one of "
    "these categories: {categories}. Reply with JSON only, in the form "
    '{{"category": "<one category>", "confidence": <number between 0 and 1>}}.'
)

# Deterministic answers for classification.
CLASSIFY_GENERATION_CONFIG = {"temperature": 0.1, "maxOutputTokens": 128}


class GeminiCategoryPredictor:
    """Asks the generative model for a category/confidence pair."""

    name = "gemini"

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def predict(self, content: bytes, mime_type: str) -> Prediction:
        prompt = CLASSIFY_PROMPT.format(categories=", ".join(CATEGORIES))
        try:
            text = await self.client.generate(
                prompt,
                image=content,
                mime_type=mime_type,
                generation_config=CLASSIFY_GENERATION_CONFIG,
            )
            payload = extract_json_object(text)
        except GeminiError as e:
            raise PredictionError(f"{type(e).__name__}: {e}") from e

        try:
            confidence = float(payload.get("confidence"))
        except (TypeError, ValueError) as e:
            raise PredictionError("Gemini answer has no numeric confidence") from e

        return Prediction(
            category=normalize_category(payload.get("category")),
            confidence=min(1.0, max(0.0, confidence)),
            engine=self.name,
        )
