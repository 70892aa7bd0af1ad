from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pilarahan.classify.knowledge_base import EnvironmentalImpact, lookup, prediction_quality
from pilarahan.classify.scorer import score
from pilarahan.classify.signals import FeatureSource, ImageDimensions, SimulatedFeatureSource

SOURCE_SIMULATED = "simulated"
SOURCE_SIMULATED_LOW_CONFIDENCE = "simulated_low_confidence"
SOURCE_SIMULATED_FALLBACK = "simulated_fallback"

_DEFAULT_FEATURE_SOURCE = SimulatedFeatureSource()


@dataclass(frozen=True)
class ClassificationResult:
    type: str
    confidence: float
    is_recyclable: bool
    recyclability_score: int
    recyclability_details: str
    disposal_method: str
    material_composition: List[str] = field(default_factory=list)
    environmental_impact: Optional[EnvironmentalImpact] = None
    prediction_quality: str = "low"
    label: str = ""
    source: str = SOURCE_SIMULATED
    fallback_reason: Optional[str] = None


def _clamp_unit(v: float) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return 0.0
    if f != f:  # NaN
        return 0.0
    return min(1.0, max(0.0, f))


def build_result(
    category: str,
    confidence: float,
    *,
    source: str,
    fallback_reason: Optional[str] = None,
) -> ClassificationResult:
    """Attach knowledge-base guidance to a (category, confidence) pair."""
    conf = _clamp_unit(confidence)
    record = lookup(category, conf)
    return ClassificationResult(
        type=record.category,
        confidence=conf,
        is_recyclable=record.is_recyclable,
        recyclability_score=record.recyclability_score,
        recyclability_details=record.recyclability_details,
        disposal_method=record.disposal_method,
        material_composition=record.material_composition,
        environmental_impact=record.environmental_impact,
        prediction_quality=prediction_quality(conf),
        label=record.label,
        source=source,
        fallback_reason=fallback_reason,
    )


def classify(
    image: ImageDimensions,
    *,
    feature_source: Optional[FeatureSource] = None,
    low_confidence: bool = False,
    source: Optional[str] = None,
    fallback_reason: Optional[str] = None,
) -> ClassificationResult:
    """Feature extraction -> scoring -> knowledge base. Pure; never raises."""
    extractor = feature_source or _DEFAULT_FEATURE_SOURCE
    signals = extractor.extract(image)
    picked = score(signals, low_confidence=low_confidence)

    if source is None:
        source = SOURCE_SIMULATED_LOW_CONFIDENCE if low_confidence else SOURCE_SIMULATED

    return build_result(
        picked.category,
        picked.confidence,
        source=source,
        fallback_reason=fallback_reason,
    )
