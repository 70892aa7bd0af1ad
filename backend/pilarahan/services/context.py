from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fastapi import Request

from pilarahan.core.config import Settings
from pilarahan.services.classification_service import ClassifierContext
from pilarahan.services.gemini_client import GeminiClient
from pilarahan.services.reference_store import InMemoryReferenceStore, ReferenceStore


@dataclass
class ServiceContext:
    """Everything request handlers share. Owned by the app lifespan, not by modules."""

    classifier: ClassifierContext
    store: ReferenceStore = field(default_factory=InMemoryReferenceStore)
    gemini: Optional[GeminiClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        gemini = GeminiClient.from_settings(settings)
        return cls(
            classifier=ClassifierContext.from_settings(settings, gemini),
            store=InMemoryReferenceStore(),
            gemini=gemini,
        )

    async def aclose(self) -> None:
        if self.gemini is not None:
            await self.gemini.aclose()


def get_services(request: Request) -> ServiceContext:
    return request.app.state.services
