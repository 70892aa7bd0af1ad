"""Closed set of waste categories and their handling groups.

Every stage of the classifier (scorer, knowledge base, predictors) keys off
these names, so the order of CATEGORIES is also the scorer's tie-break order.
"""

from __future__ import annotations

from typing import Optional, Tuple

PLASTIC = "Plastic"
PAPER = "Paper"
GLASS = "Glass"
METAL = "Metal"
ORGANIC = "Organic"
ELECTRONIC = "Electronic"
TEXTILE = "Textile"
BATTERY = "Battery"
OTHER = "Other"

CATEGORIES: Tuple[str, ...] = (
    PLASTIC,
    PAPER,
    GLASS,
    METAL,
    ORGANIC,
    ELECTRONIC,
    TEXTILE,
    BATTERY,
    OTHER,
)

RECYCLABLE = frozenset({PLASTIC, PAPER, GLASS, METAL})
COMPOSTABLE = frozenset({ORGANIC})
SPECIAL_HANDLING = frozenset({ELECTRONIC, BATTERY})

_BY_LOWER = {c.lower(): c for c in CATEGORIES}


def normalize_category(name: Optional[str]) -> str:
    """Case-insensitive match into the closed set; anything else is Other."""
    if not name:
        return OTHER
    return _BY_LOWER.get(str(name).strip().lower(), OTHER)


def is_recyclable(category: str) -> bool:
    return category in RECYCLABLE
