from __future__ import annotations

import platform
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from pilarahan.classify.categories import CATEGORIES, COMPOSTABLE, RECYCLABLE, SPECIAL_HANDLING
from pilarahan.core.config import settings
from pilarahan.services.context import ServiceContext, get_services


router = APIRouter(tags=["meta"])


@router.get("/version")
def version() -> dict:
    now_utc = datetime.now(timezone.utc).isoformat()
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION,
        "build": {"commit": settings.BUILD_COMMIT, "date": settings.BUILD_DATE},
        "runtime": {
            "python": platform.python_version(),
            "platform": platform.platform(),
            "timestamp_utc": now_utc,
        },
    }


@router.get("/capabilities")
def capabilities(services: ServiceContext = Depends(get_services)) -> dict:
    predictor = services.classifier.predictor
    return {
        "categories": list(CATEGORIES),
        "groups": {
            "recyclable": sorted(RECYCLABLE),
            "compostable": sorted(COMPOSTABLE),
            "special_handling": sorted(SPECIAL_HANDLING),
        },
        "features": {
            "batch": True,
            "ai_classifier": predictor is not None,
            "ai_assistant": services.gemini is not None,
            "client_model_override": True,
        },
        "defaults": {
            "api_prefix": settings.API_PREFIX,
            "max_file_size_mb": int(settings.MAX_FILE_SIZE_MB),
            "max_files_per_batch": int(settings.MAX_FILES_PER_BATCH),
            "model_confidence_threshold": float(services.classifier.threshold),
        },
        "engine": {
            "predictor": getattr(predictor, "name", None),
            "model": services.gemini.model if services.gemini is not None else None,
            "feature_source": getattr(services.classifier.feature_source, "name", None),
        },
    }
