from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile

from pilarahan.classify.knowledge_base import all_records, lookup
from pilarahan.core.config import settings
from pilarahan.core.telemetry import log_event, request_id_of
from pilarahan.models.schemas import (
    ClassificationBatchItem,
    ClassificationBatchResponse,
    ClassificationResponse,
    DisposalRecordOut,
)
from pilarahan.pipeline.ingest import ImageTooLargeError, InvalidImageError
from pilarahan.services.classification_service import classify_batch, classify_upload
from pilarahan.services.context import ServiceContext, get_services


router = APIRouter(tags=["classification"])


def _enforce_max_file_size(filename: str, content: bytes) -> None:
    max_bytes = int(settings.MAX_FILE_SIZE_MB) * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail={
                "error": "file_too_large",
                "filename": filename,
                "max_file_size_mb": int(settings.MAX_FILE_SIZE_MB),
            },
        )


@router.post("/classify", response_model=ClassificationResponse)
async def classify_single(
    request: Request,
    file: UploadFile = File(...),
    display_width: Optional[int] = Form(None, ge=1),
    display_height: Optional[int] = Form(None, ge=1),
    client_category: Optional[str] = Form(None),
    client_confidence: Optional[float] = Form(None, ge=0.0, le=1.0),
    services: ServiceContext = Depends(get_services),
):
    """Classify one photo.

    `display_*` are the size the client rendered the image at; `client_*`
    carry a browser-side model's answer when it has one.
    """
    request_id = request_id_of(request)
    filename = file.filename or "upload"
    content = await file.read()
    _enforce_max_file_size(filename, content)

    log_event("classify_start", request_id=request_id, filename=filename, bytes=len(content))

    try:
        result = await classify_upload(
            services.classifier,
            content,
            filename,
            display_width=display_width,
            display_height=display_height,
            client_category=client_category,
            client_confidence=client_confidence,
            request_id=request_id,
        )
    except ImageTooLargeError as e:
        raise HTTPException(status_code=400, detail={"error": "image_too_large", "filename": filename, "message": str(e)})
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail={"error": "invalid_image", "filename": filename, "message": str(e)})

    return ClassificationResponse.from_result(result)


@router.post("/classify/batch", response_model=ClassificationBatchResponse)
async def classify_many(
    request: Request,
    files: List[UploadFile] = File(...),
    services: ServiceContext = Depends(get_services),
):
    request_id = request_id_of(request)

    max_files = int(settings.MAX_FILES_PER_BATCH)
    if len(files) > max_files:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "too_many_files",
                "max_files_allowed": max_files,
                "received": len(files),
            },
        )

    uploads = []
    for f in files:
        filename = f.filename or "upload"
        content = await f.read()
        _enforce_max_file_size(filename, content)
        uploads.append((filename, content))

    items = await classify_batch(services.classifier, uploads, request_id=request_id)
    return ClassificationBatchResponse(
        status="success",
        max_files_allowed=max_files,
        results=[
            ClassificationBatchItem(
                filename=item.filename,
                result=ClassificationResponse.from_result(item.result) if item.result else None,
                error=item.error,
            )
            for item in items
        ],
    )


@router.get("/categories", response_model=List[DisposalRecordOut])
def list_categories(confidence: float = Query(0.9, ge=0.0, le=1.0)):
    return [DisposalRecordOut.from_record(r) for r in all_records(confidence)]


@router.get("/categories/{name}", response_model=DisposalRecordOut)
def category_detail(name: str, confidence: float = Query(0.9, ge=0.0, le=1.0)):
    """Unknown names resolve to the Other entry rather than 404."""
    return DisposalRecordOut.from_record(lookup(name, confidence))
