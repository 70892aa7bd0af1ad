from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from pilarahan.core.config import settings
from pilarahan.models.schemas import (
    LearningResource,
    NearbyRecyclingCenter,
    RecyclingCenter,
    WasteType,
)
from pilarahan.services.context import ServiceContext, get_services


router = APIRouter(tags=["reference"])


def _not_found(kind: str, ident: int) -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "not_found", "kind": kind, "id": ident})


@router.get("/learning-resources", response_model=List[LearningResource])
def learning_resources(services: ServiceContext = Depends(get_services)):
    return services.store.list_learning_resources()


@router.get("/learning-resources/{resource_id}", response_model=LearningResource)
def learning_resource(resource_id: int, services: ServiceContext = Depends(get_services)):
    resource = services.store.get_learning_resource(resource_id)
    if resource is None:
        raise _not_found("learning_resource", resource_id)
    return resource


@router.get("/waste-types", response_model=List[WasteType])
def waste_types(services: ServiceContext = Depends(get_services)):
    return services.store.list_waste_types()


@router.get("/recycling-centers", response_model=List[NearbyRecyclingCenter])
def recycling_centers(
    latitude: Optional[float] = Query(None, ge=-90.0, le=90.0),
    longitude: Optional[float] = Query(None, ge=-180.0, le=180.0),
    type: Optional[str] = Query(None),
    services: ServiceContext = Depends(get_services),
):
    lat = latitude if latitude is not None else settings.DEFAULT_LATITUDE
    lng = longitude if longitude is not None else settings.DEFAULT_LONGITUDE
    return services.store.nearby_recycling_centers(lat, lng, type)


@router.get("/recycling-centers/{center_id}", response_model=RecyclingCenter)
def recycling_center(center_id: int, services: ServiceContext = Depends(get_services)):
    center = services.store.get_recycling_center(center_id)
    if center is None:
        raise _not_found("recycling_center", center_id)
    return center
