"""Disposal knowledge base.

A single table keyed by category holds all static guidance; the only
computation is the recyclability score. Unknown categories resolve to the
Other entry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from pilarahan.classify.categories import (
    BATTERY,
    CATEGORIES,
    COMPOSTABLE,
    ELECTRONIC,
    GLASS,
    METAL,
    ORGANIC,
    OTHER,
    PAPER,
    PLASTIC,
    SPECIAL_HANDLING,
    TEXTILE,
    is_recyclable,
    normalize_category,
)

MAX_RECYCLABILITY_SCORE = 98
COMPOSTABLE_SCORE = 90
SPECIAL_HANDLING_SCORE = 75
GENERAL_WASTE_SCORE = 20

# Per-category score nudges applied on top of round(confidence * 100).
_RECYCLABLE_ADJUSTMENT = {PAPER: -5, GLASS: 5, METAL: 5}


@dataclass(frozen=True)
class EnvironmentalImpact:
    carbon_footprint_kg: float
    energy_recovery_potential_mj: float


@dataclass(frozen=True)
class CategoryEntry:
    label: str
    disposal_method: str
    material_composition: Tuple[str, ...]
    recyclability_details: str
    environmental_impact: EnvironmentalImpact


@dataclass(frozen=True)
class DisposalRecord:
    category: str
    label: str
    is_recyclable: bool
    disposal_method: str
    material_composition: List[str]
    recyclability_score: int
    recyclability_details: str
    environmental_impact: EnvironmentalImpact


KNOWLEDGE_BASE: Dict[str, CategoryEntry] = {
    PLASTIC: CategoryEntry(
        label="Plastik",
        disposal_method=(
            "Clean thoroughly, check recycling code, place in plastics recycling bin. "
            "Remove caps and labels if required."
        ),
        material_composition=("Polymer-based", "Petroleum-derived", "Non-biodegradable", "Lightweight"),
        recyclability_details=(
            "Recyclable at most facilities, but check the recycling code for local compatibility."
        ),
        environmental_impact=EnvironmentalImpact(6.0, 38.0),
    ),
    PAPER: CategoryEntry(
        label="Kertas",
        disposal_method=(
            "Keep dry and clean, remove non-paper attachments, place in paper recycling bin. "
            "Shred sensitive documents."
        ),
        material_composition=("Cellulose fiber", "Biodegradable", "Recycled pulp", "Plant-based"),
        recyclability_details="Highly recyclable, but avoid contamination with food or liquids.",
        environmental_impact=EnvironmentalImpact(1.1, 16.0),
    ),
    GLASS: CategoryEntry(
        label="Kaca",
        disposal_method=(
            "Rinse thoroughly, remove lids, place in glass recycling bin. "
            "Separate by color if required locally."
        ),
        material_composition=("Silica-based", "Inert material", "Infinitely recyclable", "Heat-resistant"),
        recyclability_details="100% recyclable indefinitely without loss of quality.",
        environmental_impact=EnvironmentalImpact(0.9, 8.0),
    ),
    METAL: CategoryEntry(
        label="Logam",
        disposal_method=(
            "Clean thoroughly, remove non-metal components, place in metal recycling bin. "
            "Crush cans if possible."
        ),
        material_composition=("Conductive", "Malleable", "High recycling value", "Elemental composition"),
        recyclability_details="Highly valuable to recycle and can be reprocessed repeatedly.",
        environmental_impact=EnvironmentalImpact(4.0, 24.0),
    ),
    ORGANIC: CategoryEntry(
        label="Organik",
        disposal_method=(
            "Place in compost or green waste collection. Avoid meat/dairy in home compost. "
            "Consider worm composting."
        ),
        material_composition=("Biodegradable", "Compostable", "Carbon-rich", "Natural material"),
        recyclability_details="Fully compostable and returns nutrients to the soil.",
        environmental_impact=EnvironmentalImpact(0.5, 5.0),
    ),
    ELECTRONIC: CategoryEntry(
        label="Elektronik",
        disposal_method=(
            "Take to e-waste collection center. Do not place in regular trash due to hazardous materials."
        ),
        material_composition=("Circuit boards", "Mixed materials", "Rare elements", "Complex assembly"),
        recyclability_details=(
            "Requires specialized recycling to recover precious metals and handle hazardous materials."
        ),
        environmental_impact=EnvironmentalImpact(12.0, 32.0),
    ),
    TEXTILE: CategoryEntry(
        label="Tekstil",
        disposal_method=(
            "Donate if still in good condition, or take to a textile recycling center. "
            "Some clothing stores accept used textiles for recycling."
        ),
        material_composition=("Fabric fibers", "Variable biodegradability", "Often mixed materials"),
        recyclability_details="Can be recycled or reused, but requires dedicated facilities.",
        environmental_impact=EnvironmentalImpact(3.0, 18.0),
    ),
    BATTERY: CategoryEntry(
        label="Baterai",
        disposal_method=(
            "Do not throw in regular trash. Take to a battery collection point or an electronics "
            "store that accepts used batteries."
        ),
        material_composition=("Contains heavy metals", "Potentially toxic", "Requires special handling"),
        recyclability_details=(
            "Must be recycled through dedicated programs to prevent environmental contamination."
        ),
        environmental_impact=EnvironmentalImpact(8.0, 10.0),
    ),
    OTHER: CategoryEntry(
        label="Lainnya",
        disposal_method="Check local waste authority guidelines for proper disposal.",
        material_composition=("Unclassified materials", "Specialized processing may be required"),
        recyclability_details="Likely not recyclable in current systems; consider alternatives.",
        environmental_impact=EnvironmentalImpact(2.0, 12.0),
    ),
}


def recyclability_score(category: str, confidence: float) -> int:
    """0..98 ease-of-recycling figure for a category/confidence pair."""
    if is_recyclable(category):
        # half-up rounding, not round()'s banker's rounding
        base = math.floor(confidence * 100 + 0.5) + _RECYCLABLE_ADJUSTMENT.get(category, 0)
    elif category in COMPOSTABLE:
        base = COMPOSTABLE_SCORE
    elif category in SPECIAL_HANDLING:
        base = SPECIAL_HANDLING_SCORE
    else:
        base = GENERAL_WASTE_SCORE
    return max(0, min(MAX_RECYCLABILITY_SCORE, int(base)))


def prediction_quality(confidence: float) -> str:
    if confidence > 0.95:
        return "high"
    if confidence > 0.85:
        return "medium"
    return "low"


def lookup(category: str, confidence: float = 1.0) -> DisposalRecord:
    key = normalize_category(category)
    entry = KNOWLEDGE_BASE[key]
    return DisposalRecord(
        category=key,
        label=entry.label,
        is_recyclable=is_recyclable(key),
        disposal_method=entry.disposal_method,
        material_composition=list(entry.material_composition),
        recyclability_score=recyclability_score(key, confidence),
        recyclability_details=entry.recyclability_details,
        environmental_impact=entry.environmental_impact,
    )


def all_records(confidence: float = 1.0) -> List[DisposalRecord]:
    return [lookup(c, confidence) for c in CATEGORIES]
