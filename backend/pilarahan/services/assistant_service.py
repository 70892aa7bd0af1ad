"""Generative-AI assistant features with offline fallbacks.

Every call works without the AI collaborator: a missing client or any
GeminiError returns the static text below and marks the result as offline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pilarahan.core.telemetry import log_event
from pilarahan.services.gemini_client import (
    GeminiAuthError,
    GeminiClient,
    GeminiError,
    GeminiResponseError,
    GeminiUnavailableError,
    extract_json_object,
    split_numbered_list,
)

SOURCE_AI = "ai"
SOURCE_OFFLINE = "offline"

RECOMMENDATION_PROMPT = """You are a waste management and recycling expert. Please provide a specific, detailed recycling recommendation for the following waste type: {waste_type}. {description}

Return the following JSON format:
{{
  "recommendation": "A detailed explanation of how to properly dispose of this item including any preparation steps (cleaning, disassembly, etc.)",
  "environmentalImpact": ["3-4 bullet points about the environmental impact of properly recycling this item"]
}}"""

TIPS_PROMPT = (
    'Give 3-5 practical recommendations for recycling or managing "{waste_type}" waste '
    "(classification confidence {confidence:.2f}). Answer as a short numbered list."
)

CHAT_PROMPT = """You are the AI assistant of PilaRahan, a smart waste management app.
Give accurate and useful information about:
- How to recycle different kinds of waste
- The environmental impact of waste
- Sustainable waste management practices
- Tips for reducing everyday waste

User question: {message}"""


@dataclass
class Recommendation:
    recommendation: str
    environmental_impact: List[str] = field(default_factory=list)
    source: str = SOURCE_OFFLINE


@dataclass
class RecyclingTips:
    waste_type: str
    tips: List[str] = field(default_factory=list)
    source: str = SOURCE_OFFLINE


@dataclass
class ChatReply:
    message: str
    environmental_tips: List[str] = field(default_factory=list)
    fallback: bool = False


DEFAULT_RECOMMENDATIONS: Dict[str, Dict[str, object]] = {
    "Plastic": {
        "recommendation": "Clean the plastic item and check for a recycling symbol (1-7). Place it in your recycling bin if accepted by your local program. Remove any non-plastic parts or labels if possible.",
        "environmentalImpact": [
            "Recycling one plastic bottle saves enough energy to power a 60W light bulb for 6 hours",
            "Prevents harmful chemicals from leaching into soil and waterways",
            "Reduces dependence on petroleum for new plastic production",
            "Keeps plastic out of oceans where it can harm marine life",
        ],
    },
    "Paper": {
        "recommendation": "Unfold or flatten paper items and place in your paper recycling bin. Remove any plastic sleeves, windows, or non-paper elements. For shredded paper, check local guidelines as it may need to be bagged separately.",
        "environmentalImpact": [
            "Recycling one ton of paper saves 17 trees and 7,000 gallons of water",
            "Reduces greenhouse gas emissions from paper decomposing in landfills",
            "Saves energy compared to making paper from virgin wood pulp",
            "Decreases the demand for tree harvesting and deforestation",
        ],
    },
    "Glass": {
        "recommendation": "Rinse glass containers to remove food residue. Remove and separate caps and lids (these are often made of different materials). Place clean glass in your recycling bin.",
        "environmentalImpact": [
            "Glass can be recycled indefinitely without loss of quality",
            "Recycling glass reduces mining of raw materials like sand and limestone",
            "Uses 40% less energy than making new glass from raw materials",
            "Reduces CO2 emissions associated with glass production",
        ],
    },
    "Metal": {
        "recommendation": "Rinse metal items to remove food residue. For aluminum cans, don't crush them as this can make them harder to sort. For steel cans, remove paper labels if possible.",
        "environmentalImpact": [
            "Recycling aluminum uses 95% less energy than producing new aluminum",
            "Metal can be recycled indefinitely without degrading in quality",
            "Reduces mining of raw ore and associated environmental damage",
            "Saves significant amounts of water compared to primary production",
        ],
    },
    "Organic": {
        "recommendation": "Compost food scraps, yard waste, and other organic materials in a home compost bin or through municipal composting programs. Avoid composting meat, dairy, and oils in home systems.",
        "environmentalImpact": [
            "Diverts waste from landfills where it would produce methane, a potent greenhouse gas",
            "Creates nutrient-rich soil amendment that reduces need for chemical fertilizers",
            "Improves soil health and water retention in gardens and agriculture",
            "Completes the natural nutrient cycle, returning organic matter to the soil",
        ],
    },
    "Electronic": {
        "recommendation": "Never dispose of electronics in regular trash. Take them to designated e-waste collection centers, retailer take-back programs, or community e-waste events. Back up and wipe personal data before recycling.",
        "environmentalImpact": [
            "Prevents toxic materials like lead, mercury, and cadmium from entering landfills",
            "Allows recovery of valuable metals like gold, silver, and copper",
            "Reduces environmental damage from mining raw materials for new electronics",
            "Proper e-waste handling prevents hazardous materials from contaminating soil and water",
        ],
    },
    "Textile": {
        "recommendation": "Donate clothing and fabrics that are still wearable. Worn-out textiles can go to textile collection bins or recycling programs; keep them clean and dry in a closed bag.",
        "environmentalImpact": [
            "Extends the life of garments and reduces demand for new fiber production",
            "Keeps synthetic fibers out of landfills where they persist for decades",
            "Saves the water and dyes used in manufacturing new textiles",
        ],
    },
    "Battery": {
        "recommendation": "Never put batteries in household trash. Tape the terminals of lithium batteries and take them to a battery collection point or an electronics retailer that accepts used batteries.",
        "environmentalImpact": [
            "Prevents heavy metals from leaching into soil and groundwater",
            "Reduces fire risk in waste trucks and sorting facilities",
            "Allows recovery of lithium, cobalt, nickel and other valuable metals",
        ],
    },
    "Hazardous": {
        "recommendation": "Never dispose of hazardous waste in regular trash or down drains. Take items like batteries, paint, chemicals, and fluorescent bulbs to hazardous waste collection facilities or special collection events.",
        "environmentalImpact": [
            "Prevents toxic substances from contaminating soil, water, and air",
            "Protects waste workers from exposure to dangerous chemicals",
            "Allows for proper neutralization or safe storage of harmful materials",
            "Many hazardous materials can be recycled or repurposed when properly collected",
        ],
    },
    "Other": {
        "recommendation": "Check with your local waste management authority for specific guidelines on this item. If it cannot be recycled or composted, place it in general waste.",
        "environmentalImpact": [
            "Proper sorting prevents contamination of recycling streams",
            "Following local guidelines ensures the most environmentally appropriate disposal",
            "Some items may have special take-back or recycling programs",
            "When in doubt, research before throwing out to ensure proper disposal",
        ],
    },
}

FALLBACK_RECYCLING_TIPS: Dict[str, List[str]] = {
    "Plastic": [
        "Separate plastics by type (PET, HDPE, etc.)",
        "Clean food residue off plastic before recycling",
        "Cut down on single-use plastics",
    ],
    "Paper": [
        "Remove staples and plastic from paper",
        "Keep used paper dry before recycling",
        "Use both sides of the paper to reduce consumption",
    ],
    "Glass": [
        "Sort glass by color (clear, green, brown)",
        "Rinse food or drink residue from glass",
        "Handle broken glass carefully",
    ],
    "Metal": [
        "Separate metals by type (aluminum, steel, etc.)",
        "Rinse food residue out of cans",
        "Flatten cans to save space",
    ],
    "Organic": [
        "Compost organic waste into fertilizer",
        "Keep organic waste separate from non-organic materials",
        "Use kitchen scraps for home composting",
    ],
    "Electronic": [
        "Take devices to an official e-waste recycling center",
        "Wipe personal data before recycling a device",
        "Never throw electronics in regular trash",
    ],
    "Battery": [
        "Take used batteries to a battery drop-off point",
        "Tape lithium battery terminals before storage",
        "Prefer rechargeable batteries",
    ],
    "Hazardous": [
        "Take to a hazardous waste disposal facility",
        "Never mix with regular household waste",
        "Store in a closed, labeled container",
    ],
    "Textile": [
        "Donate clothes that are still wearable",
        "Reuse old fabric as rags or for crafts",
        "Look for textile recycling programs in your area",
    ],
    "Mixed": [
        "Separate waste by type before disposal",
        "Look for recycling centers that accept mixed waste",
        "Avoid products with mixed-material packaging",
    ],
}

GENERIC_RECYCLING_TIPS = [
    "Separate waste by type",
    "Find the nearest recycling center",
    "Reduce the use of single-use materials",
]

# (keywords, tips); first match wins.
CHAT_TIP_RULES = [
    (
        ("plastic", "plastik"),
        [
            "Cut down on single-use plastics",
            "Choose products with recyclable packaging",
            "Bring your own shopping bag",
        ],
    ),
    (
        ("paper", "kertas"),
        [
            "Print on both sides of the paper",
            "Choose paper products from sustainable sources",
            "Recycle used paper to reduce tree felling",
        ],
    ),
    (
        ("electronic", "elektronik", "gadget"),
        [
            "Never throw old electronics in regular trash",
            "Find the nearest electronics recycling center",
            "Consider repairing devices instead of replacing them",
        ],
    ),
    (
        ("organic", "organik", "food", "makanan"),
        [
            "Compost food scraps to reduce waste",
            "Plan meals well to reduce food waste",
            "Store food properly so it lasts longer",
        ],
    ),
]

GENERAL_CHAT_TIPS = [
    "Apply the 3R principle: Reduce, Reuse, Recycle",
    "Separate waste by type to make recycling easier",
    "Teach others why good waste management matters",
]

CHAT_FALLBACK_AUTH = (
    "Sorry, I can't process your request right now because of an API key problem. "
    "Please ask the administrator to configure the Gemini API key."
)
CHAT_FALLBACK_CONNECTION = (
    "Sorry, I can't reach the AI service right now. Please check your connection and try again later."
)
CHAT_FALLBACK_GENERIC = "Sorry, I can't process your request right now. Please try again later."


def default_recommendation(waste_type: str) -> Recommendation:
    entry = DEFAULT_RECOMMENDATIONS.get(waste_type) or DEFAULT_RECOMMENDATIONS["Other"]
    return Recommendation(
        recommendation=str(entry["recommendation"]),
        environmental_impact=list(entry["environmentalImpact"]),  # type: ignore[arg-type]
        source=SOURCE_OFFLINE,
    )


def environmental_tips_for(message: str) -> List[str]:
    lower = (message or "").lower()
    for keywords, tips in CHAT_TIP_RULES:
        if any(k in lower for k in keywords):
            return list(tips)
    return list(GENERAL_CHAT_TIPS)


async def get_recommendations(
    client: Optional[GeminiClient],
    waste_type: str,
    image_description: Optional[str] = None,
    *,
    request_id: Optional[str] = None,
) -> Recommendation:
    if client is None:
        return default_recommendation(waste_type)

    description = f"The item appears to be: {image_description}." if image_description else ""
    prompt = RECOMMENDATION_PROMPT.format(waste_type=waste_type, description=description)
    try:
        payload = extract_json_object(await client.generate(prompt))
        text = payload.get("recommendation")
        impact = payload.get("environmentalImpact") or []
        if not isinstance(text, str) or not text.strip():
            raise GeminiResponseError("Gemini answer has no recommendation text")
        if isinstance(impact, str):
            impact = [impact]
        if not isinstance(impact, list):
            raise GeminiResponseError("Gemini environmentalImpact is not a list")
    except GeminiError as e:
        log_event("assistant_fallback", request_id=request_id, feature="recommendations", error=str(e))
        return default_recommendation(waste_type)

    return Recommendation(
        recommendation=text.strip(),
        environmental_impact=[str(i) for i in impact],
        source=SOURCE_AI,
    )


async def get_recycling_tips(
    client: Optional[GeminiClient],
    waste_type: str,
    confidence: float,
    *,
    request_id: Optional[str] = None,
) -> RecyclingTips:
    fallback = FALLBACK_RECYCLING_TIPS.get(waste_type, GENERIC_RECYCLING_TIPS)
    if client is None:
        return RecyclingTips(waste_type=waste_type, tips=list(fallback))

    try:
        tips = split_numbered_list(await client.generate(TIPS_PROMPT.format(waste_type=waste_type, confidence=confidence)))
    except GeminiError as e:
        log_event("assistant_fallback", request_id=request_id, feature="recycling_tips", error=str(e))
        return RecyclingTips(waste_type=waste_type, tips=list(fallback))

    if not tips:
        return RecyclingTips(waste_type=waste_type, tips=list(fallback))
    return RecyclingTips(waste_type=waste_type, tips=tips, source=SOURCE_AI)


def _chat_fallback_message(error: Optional[GeminiError]) -> str:
    if isinstance(error, GeminiAuthError) or error is None:
        return CHAT_FALLBACK_AUTH
    if isinstance(error, GeminiUnavailableError):
        return CHAT_FALLBACK_CONNECTION
    return CHAT_FALLBACK_GENERIC


async def chat(
    client: Optional[GeminiClient],
    message: str,
    *,
    request_id: Optional[str] = None,
) -> ChatReply:
    tips = environmental_tips_for(message)
    if client is None:
        return ChatReply(message=_chat_fallback_message(None), environmental_tips=tips, fallback=True)

    try:
        text = await client.generate(CHAT_PROMPT.format(message=message))
    except GeminiError as e:
        log_event("assistant_fallback", request_id=request_id, feature="chat", error=str(e))
        return ChatReply(message=_chat_fallback_message(e), environmental_tips=tips, fallback=True)

    return ChatReply(message=text.strip(), environmental_tips=tips)
