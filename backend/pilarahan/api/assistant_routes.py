from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from pilarahan.core.telemetry import request_id_of
from pilarahan.models.schemas import (
    ChatRequest,
    ChatResponse,
    RecommendationRequest,
    RecommendationResponse,
    RecyclingTipsResponse,
)
from pilarahan.services import assistant_service
from pilarahan.services.context import ServiceContext, get_services


router = APIRouter(tags=["assistant"])


@router.post("/recommendations", response_model=RecommendationResponse)
async def recommendations(
    request: Request,
    body: RecommendationRequest,
    services: ServiceContext = Depends(get_services),
):
    waste_type = (body.waste_type or "").strip()
    if not waste_type:
        raise HTTPException(status_code=400, detail={"error": "waste_type_required"})

    rec = await assistant_service.get_recommendations(
        services.gemini,
        waste_type,
        body.image_description,
        request_id=request_id_of(request),
    )
    return RecommendationResponse(
        recommendation=rec.recommendation,
        environmental_impact=rec.environmental_impact,
        source=rec.source,
    )


@router.get("/recycling-tips", response_model=RecyclingTipsResponse)
async def recycling_tips(
    request: Request,
    waste_type: str = Query(..., alias="wasteType", min_length=1),
    confidence: float = Query(0.8, ge=0.0, le=1.0),
    services: ServiceContext = Depends(get_services),
):
    tips = await assistant_service.get_recycling_tips(
        services.gemini,
        waste_type,
        confidence,
        request_id=request_id_of(request),
    )
    return RecyclingTipsResponse(waste_type=tips.waste_type, tips=tips.tips, source=tips.source)


@router.post("/ai-chat", response_model=ChatResponse)
async def ai_chat(
    request: Request,
    body: ChatRequest,
    services: ServiceContext = Depends(get_services),
):
    message = (body.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail={"error": "message_required"})

    reply = await assistant_service.chat(services.gemini, message, request_id=request_id_of(request))
    return ChatResponse(
        message=reply.message,
        environmental_tips=reply.environmental_tips,
        fallback=reply.fallback,
    )
