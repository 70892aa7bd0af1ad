from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pilarahan.classify.knowledge_base import DisposalRecord
from pilarahan.classify.pipeline import ClassificationResult


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EnvironmentalImpactOut(ApiModel):
    carbon_footprint_kg: float
    energy_recovery_potential_mj: float = Field(serialization_alias="energyRecoveryPotentialMJ")


class ClassificationResponse(ApiModel):
    type: str
    confidence: float
    is_recyclable: bool
    recyclability_score: int
    recyclability_details: str
    disposal_method: str
    material_composition: List[str] = Field(default_factory=list)
    environmental_impact: Optional[EnvironmentalImpactOut] = None
    prediction_quality: str
    label: str = ""
    source: str
    fallback_reason: Optional[str] = None

    @classmethod
    def from_result(cls, r: ClassificationResult) -> "ClassificationResponse":
        impact = None
        if r.environmental_impact is not None:
            impact = EnvironmentalImpactOut(
                carbon_footprint_kg=r.environmental_impact.carbon_footprint_kg,
                energy_recovery_potential_mj=r.environmental_impact.energy_recovery_potential_mj,
            )
        return cls(
            type=r.type,
            confidence=r.confidence,
            is_recyclable=r.is_recyclable,
            recyclability_score=r.recyclability_score,
            recyclability_details=r.recyclability_details,
            disposal_method=r.disposal_method,
            material_composition=list(r.material_composition),
            environmental_impact=impact,
            prediction_quality=r.prediction_quality,
            label=r.label,
            source=r.source,
            fallback_reason=r.fallback_reason,
        )


class ClassificationBatchItem(ApiModel):
    filename: str
    result: Optional[ClassificationResponse] = None
    error: Optional[str] = None


class ClassificationBatchResponse(ApiModel):
    status: str
    max_files_allowed: int
    results: List[ClassificationBatchItem]


class DisposalRecordOut(ApiModel):
    category: str
    label: str
    is_recyclable: bool
    disposal_method: str
    material_composition: List[str]
    recyclability_score: int
    recyclability_details: str
    environmental_impact: EnvironmentalImpactOut

    @classmethod
    def from_record(cls, r: DisposalRecord) -> "DisposalRecordOut":
        return cls(
            category=r.category,
            label=r.label,
            is_recyclable=r.is_recyclable,
            disposal_method=r.disposal_method,
            material_composition=list(r.material_composition),
            recyclability_score=r.recyclability_score,
            recyclability_details=r.recyclability_details,
            environmental_impact=EnvironmentalImpactOut(
                carbon_footprint_kg=r.environmental_impact.carbon_footprint_kg,
                energy_recovery_potential_mj=r.environmental_impact.energy_recovery_potential_mj,
            ),
        )


# Assistant

class RecommendationRequest(ApiModel):
    waste_type: Optional[str] = None
    image_description: Optional[str] = None


class RecommendationResponse(ApiModel):
    recommendation: str
    environmental_impact: List[str] = Field(default_factory=list)
    source: str


class RecyclingTipsResponse(ApiModel):
    waste_type: str
    tips: List[str] = Field(default_factory=list)
    source: str


class ChatRequest(ApiModel):
    message: Optional[str] = None


class ChatResponse(ApiModel):
    message: str
    environmental_tips: List[str] = Field(default_factory=list)
    fallback: bool = False


# Reference data

class WasteType(ApiModel):
    id: int
    name: str
    description: str
    is_recyclable: bool
    disposal_instructions: str
    category: str
    color_class: str


class LearningResource(ApiModel):
    id: int
    title: str
    description: str
    content: str
    image: str
    category: str
    category_color: str
    created_at: str


class RecyclingCenter(ApiModel):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    phone: Optional[str] = None
    website: Optional[str] = None
    hours_of_operation: Optional[str] = None
    waste_types: List[WasteType] = Field(default_factory=list)


class CenterWasteType(ApiModel):
    name: str
    color: str


class NearbyRecyclingCenter(ApiModel):
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    distance: float
    waste_types: List[CenterWasteType] = Field(default_factory=list)
