"""Read-only reference data (learning resources, waste types, recycling centers).

The production deployment keeps these rows in a relational database owned by
another service; the API only depends on the ReferenceStore protocol. The
in-memory store is seeded from `pilarahan.data.seed`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from pilarahan.data import seed
from pilarahan.models.schemas import (
    CenterWasteType,
    LearningResource,
    NearbyRecyclingCenter,
    RecyclingCenter,
    WasteType,
)
from pilarahan.utils.geo import calculate_distance


class ReferenceStore(Protocol):
    def list_learning_resources(self) -> List[LearningResource]: ...

    def get_learning_resource(self, resource_id: int) -> Optional[LearningResource]: ...

    def list_waste_types(self) -> List[WasteType]: ...

    def get_waste_type(self, name: str) -> Optional[WasteType]: ...

    def nearby_recycling_centers(
        self, latitude: float, longitude: float, waste_category: Optional[str] = None
    ) -> List[NearbyRecyclingCenter]: ...

    def get_recycling_center(self, center_id: int) -> Optional[RecyclingCenter]: ...


class InMemoryReferenceStore:
    def __init__(
        self,
        *,
        waste_types: Optional[List[Dict[str, Any]]] = None,
        learning_resources: Optional[List[Dict[str, Any]]] = None,
        recycling_centers: Optional[List[Dict[str, Any]]] = None,
        center_waste_types: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        # ids are 1-based in insertion order, like serial primary keys
        self._waste_types = [
            WasteType(id=i, **row)
            for i, row in enumerate(waste_types if waste_types is not None else seed.WASTE_TYPES, start=1)
        ]
        self._resources = [
            LearningResource(id=i, created_at=row.get("created_at", seed.SEED_CREATED_AT), **{k: v for k, v in row.items() if k != "created_at"})
            for i, row in enumerate(learning_resources if learning_resources is not None else seed.LEARNING_RESOURCES, start=1)
        ]
        centers = recycling_centers if recycling_centers is not None else seed.RECYCLING_CENTERS
        links = center_waste_types if center_waste_types is not None else seed.CENTER_WASTE_TYPES

        by_name = {wt.name: wt for wt in self._waste_types}
        self._centers: List[RecyclingCenter] = []
        for i, row in enumerate(centers, start=1):
            accepted = [by_name[n] for n in links.get(row["name"], []) if n in by_name]
            self._centers.append(RecyclingCenter(id=i, waste_types=accepted, **row))

    def list_learning_resources(self) -> List[LearningResource]:
        return sorted(self._resources, key=lambda r: r.id)

    def get_learning_resource(self, resource_id: int) -> Optional[LearningResource]:
        return next((r for r in self._resources if r.id == resource_id), None)

    def list_waste_types(self) -> List[WasteType]:
        return sorted(self._waste_types, key=lambda w: w.name)

    def get_waste_type(self, name: str) -> Optional[WasteType]:
        return next((w for w in self._waste_types if w.name == name), None)

    def nearby_recycling_centers(
        self, latitude: float, longitude: float, waste_category: Optional[str] = None
    ) -> List[NearbyRecyclingCenter]:
        """Centers sorted by distance; optionally only those accepting a waste-type category."""
        wanted = (waste_category or "").strip().lower()
        centers = self._centers
        if wanted and wanted != "all":
            centers = [c for c in centers if any(wt.category.lower() == wanted for wt in c.waste_types)]

        out = [
            NearbyRecyclingCenter(
                id=c.id,
                name=c.name,
                address=c.address,
                latitude=c.latitude,
                longitude=c.longitude,
                distance=calculate_distance(latitude, longitude, c.latitude, c.longitude),
                waste_types=[CenterWasteType(name=wt.name, color=wt.color_class) for wt in c.waste_types],
            )
            for c in centers
        ]
        return sorted(out, key=lambda c: c.distance)

    def get_recycling_center(self, center_id: int) -> Optional[RecyclingCenter]:
        return next((c for c in self._centers if c.id == center_id), None)
