"""Thin async client for the Gemini `generateContent` REST endpoint.

Only what the backend needs: a text prompt, optionally with one inline image,
returning the first candidate's text. Failures are raised as GeminiError
subclasses so callers can pick a fallback by kind.
"""

from __future__ import annotations

import base64
import json
import re
from typing import Any, Dict, List, Optional

import httpx

from pilarahan.core.config import Settings

DEFAULT_GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1000,
}

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n([\s\S]*?)\n?```")
_BRACED = re.compile(r"\{[\s\S]*\}")
_NUMBERED = re.compile(r"(?:^|\s)\d+[.)]\s+")


class GeminiError(Exception):
    pass


class GeminiAuthError(GeminiError):
    """Key missing, invalid, or not enabled for the model."""


class GeminiUnavailableError(GeminiError):
    """Network failure, timeout, rate limit or upstream 5xx."""


class GeminiResponseError(GeminiError):
    """Upstream answered, but not with anything usable."""


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_s: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise GeminiAuthError("Gemini API key is not configured")
        self.model = model
        self._api_key = api_key.strip()
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_s,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> Optional["GeminiClient"]:
        """None when no key is configured; callers then use offline fallbacks."""
        if not settings.GEMINI_API_KEY:
            return None
        return cls(
            settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout_s=settings.GEMINI_TIMEOUT_S,
            **kwargs,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def generate(
        self,
        prompt: str,
        *,
        image: Optional[bytes] = None,
        mime_type: str = "image/jpeg",
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        if image is not None:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": mime_type,
                        "data": base64.b64encode(image).decode("ascii"),
                    }
                }
            )
        body = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": generation_config or DEFAULT_GENERATION_CONFIG,
        }

        try:
            resp = await self._http.post(
                f"/models/{self.model}:generateContent",
                params={"key": self._api_key},
                json=body,
            )
        except httpx.TimeoutException as e:
            raise GeminiUnavailableError(f"Gemini request timed out: {e}") from e
        except httpx.TransportError as e:
            raise GeminiUnavailableError(f"Could not reach Gemini: {e}") from e
        except httpx.HTTPError as e:
            # undecodable body, redirect loops
            raise GeminiUnavailableError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        if resp.status_code in (401, 403):
            raise GeminiAuthError(f"Gemini rejected the API key (HTTP {resp.status_code})")
        if resp.status_code == 429 or resp.status_code >= 500:
            raise GeminiUnavailableError(f"Gemini unavailable (HTTP {resp.status_code})")
        if resp.status_code >= 400:
            raise GeminiResponseError(f"Gemini error (HTTP {resp.status_code}): {resp.text[:200]}")

        try:
            data = resp.json()
        except ValueError as e:
            raise GeminiResponseError("Gemini returned a non-JSON body") from e
        return candidate_text(data)


def candidate_text(data: Dict[str, Any]) -> str:
    """First candidate's first text part."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise GeminiResponseError("Gemini response has no candidate text") from e


def extract_json_object(text: str) -> Dict[str, Any]:
    """Pull a JSON object out of a model answer (fenced block first, then outer braces)."""
    m = _FENCED_JSON.search(text or "")
    raw = m.group(1) if m else None
    if raw is None:
        m = _BRACED.search(text or "")
        raw = m.group(0) if m else None
    if raw is None:
        raise GeminiResponseError("No JSON object in Gemini response")
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise GeminiResponseError(f"Malformed JSON in Gemini response: {e}") from e
    if not isinstance(obj, dict):
        raise GeminiResponseError("Gemini JSON is not an object")
    return obj


def split_numbered_list(text: str) -> List[str]:
    """'1. a 2. b' / one-per-line numbered answers -> ['a', 'b']."""
    parts = _NUMBERED.split(text or "")
    if len(parts) > 1:
        parts = parts[1:]  # drop any preamble before "1."
    items = [p.strip() for p in parts]
    return [i for i in items if i]
