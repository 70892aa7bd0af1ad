from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pilarahan.classify.pipeline import (
    SOURCE_SIMULATED_FALLBACK,
    SOURCE_SIMULATED_LOW_CONFIDENCE,
    ClassificationResult,
    build_result,
    classify,
)
from pilarahan.classify.signals import FeatureSource, ImageDimensions, SimulatedFeatureSource
from pilarahan.core.config import Settings
from pilarahan.core.telemetry import log_event
from pilarahan.engines.base import CategoryPredictor, Prediction, PredictionError
from pilarahan.engines.gemini_engine import GeminiCategoryPredictor
from pilarahan.pipeline.ingest import InvalidImageError, read_image
from pilarahan.services.gemini_client import GeminiClient
from pilarahan.utils.image_encode import encode_for_model

SOURCE_CLIENT_MODEL = "client_model"


@dataclass
class ClassifierContext:
    """Application-scoped classifier state: built at startup, passed explicitly."""

    predictor: Optional[CategoryPredictor] = None
    feature_source: FeatureSource = field(default_factory=SimulatedFeatureSource)
    threshold: float = 0.75

    @classmethod
    def from_settings(cls, settings: Settings, gemini: Optional[GeminiClient]) -> "ClassifierContext":
        predictor = None
        if gemini is not None and settings.ENABLE_AI_CLASSIFIER:
            predictor = GeminiCategoryPredictor(gemini)
        return cls(predictor=predictor, threshold=float(settings.MODEL_CONFIDENCE_THRESHOLD))


@dataclass
class BatchItem:
    filename: str
    result: Optional[ClassificationResult] = None
    error: Optional[str] = None


def resolve(
    dims: ImageDimensions,
    prediction: Prediction,
    *,
    ctx: ClassifierContext,
    request_id: Optional[str] = None,
) -> ClassificationResult:
    """Trust a prediction at or above threshold, otherwise re-score heuristically."""
    if prediction.confidence >= ctx.threshold:
        return build_result(prediction.category, prediction.confidence, source=prediction.engine)

    log_event(
        "classification_low_confidence",
        request_id=request_id,
        engine=prediction.engine,
        category=prediction.category,
        confidence=prediction.confidence,
        threshold=ctx.threshold,
    )
    return classify(
        dims,
        feature_source=ctx.feature_source,
        low_confidence=True,
        source=SOURCE_SIMULATED_LOW_CONFIDENCE,
    )


async def classify_upload(
    ctx: ClassifierContext,
    content: bytes,
    filename: str,
    *,
    display_width: Optional[int] = None,
    display_height: Optional[int] = None,
    client_category: Optional[str] = None,
    client_confidence: Optional[float] = None,
    request_id: Optional[str] = None,
) -> ClassificationResult:
    """Classify one upload.

    Order: client-side model output, then the configured predictor, then the
    dimension heuristic. A predictor failure falls back to the heuristic with
    the reason recorded on the result and in the event log.
    """
    ingested = read_image(content)
    dims = ingested.dimensions(display_width=display_width, display_height=display_height)

    if client_category is not None and client_confidence is not None:
        prediction = Prediction(client_category, float(client_confidence), SOURCE_CLIENT_MODEL)
        result = resolve(dims, prediction, ctx=ctx, request_id=request_id)
    elif ctx.predictor is not None:
        try:
            payload, mime_type = encode_for_model(ingested.image)
        except OSError as e:
            raise InvalidImageError(f"Could not decode image: {e}") from e
        try:
            prediction = await ctx.predictor.predict(payload, mime_type)
        except PredictionError as e:
            log_event(
                "classification_fallback",
                request_id=request_id,
                filename=filename,
                engine=getattr(ctx.predictor, "name", None),
                error=str(e),
            )
            result = classify(
                dims,
                feature_source=ctx.feature_source,
                source=SOURCE_SIMULATED_FALLBACK,
                fallback_reason=str(e),
            )
        else:
            result = resolve(dims, prediction, ctx=ctx, request_id=request_id)
    else:
        result = classify(dims, feature_source=ctx.feature_source)

    log_event(
        "classification_done",
        request_id=request_id,
        filename=filename,
        width=ingested.width,
        height=ingested.height,
        type=result.type,
        confidence=result.confidence,
        source=result.source,
    )
    return result


async def classify_batch(
    ctx: ClassifierContext,
    files: List[tuple],
    *,
    request_id: Optional[str] = None,
) -> List[BatchItem]:
    """files: [(filename, content)]. One bad file does not fail the batch."""
    items: List[BatchItem] = []
    for filename, content in files:
        try:
            result = await classify_upload(ctx, content, filename, request_id=request_id)
            items.append(BatchItem(filename=filename, result=result))
        except ValueError as e:
            items.append(BatchItem(filename=filename, error=str(e)))
    return items
