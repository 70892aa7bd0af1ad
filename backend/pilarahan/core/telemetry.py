from __future__ import annotations

import json
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from pilarahan.core.config import settings


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_jsonl(event: Dict[str, Any], *, path: Optional[str] = None) -> None:
    """Append a single JSON object to a JSONL file."""
    if not settings.TELEMETRY_ENABLED:
        return
    log_path = path or settings.LOG_JSONL_PATH
    _ensure_parent_dir(log_path)
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")


def log_event(event: str, *, request_id: Optional[str] = None, **fields: Any) -> None:
    """Write a named service event, stamped with UTC time and the request id."""
    record: Dict[str, Any] = {
        "event": event,
        "ts": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
    }
    record.update(fields)
    write_jsonl(record)


def request_id_of(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


class RequestTelemetryMiddleware(BaseHTTPMiddleware):
    """Tags every request with an x-request-id and logs one http_request event for it."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id

        started = time.perf_counter()
        status_code = 500
        error: Optional[str] = None

        try:
            response: Response = await call_next(request)
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            raise
        else:
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            log_event(
                "http_request",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                query=request.url.query or None,
                status_code=status_code,
                latency_ms=round((time.perf_counter() - started) * 1000, 1),
                client=request.client.host if request.client else None,
                error=error,
            )
