import asyncio
import base64
import json

import httpx
import pytest

from pilarahan.core.config import Settings
from pilarahan.services.gemini_client import (
    GeminiAuthError,
    GeminiClient,
    GeminiResponseError,
    GeminiUnavailableError,
    candidate_text,
    extract_json_object,
    split_numbered_list,
)


def answer(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def call(handler, **kwargs):
    async def _go():
        client = GeminiClient("secret", model="test-model", transport=httpx.MockTransport(handler))
        try:
            return await client.generate("hello", **kwargs)
        finally:
            await client.aclose()

    return asyncio.run(_go())


def test_generate_posts_prompt_and_image():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=answer("ok"))

    assert call(handler, image=b"\x01\x02", mime_type="image/png") == "ok"

    assert seen["url"].path.endswith("/models/test-model:generateContent")
    assert seen["url"].params["key"] == "secret"
    parts = seen["body"]["contents"][0]["parts"]
    assert parts[0] == {"text": "hello"}
    assert parts[1]["inline_data"]["mime_type"] == "image/png"
    assert base64.b64decode(parts[1]["inline_data"]["data"]) == b"\x01\x02"
    assert seen["body"]["generationConfig"]["maxOutputTokens"] == 1000


def test_generate_text_only_has_single_part():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=answer("ok"))

    call(handler, generation_config={"temperature": 0.1})
    assert len(seen["body"]["contents"][0]["parts"]) == 1
    assert seen["body"]["generationConfig"] == {"temperature": 0.1}


@pytest.mark.parametrize(
    "status,exc",
    [
        (401, GeminiAuthError),
        (403, GeminiAuthError),
        (429, GeminiUnavailableError),
        (503, GeminiUnavailableError),
        (400, GeminiResponseError),
    ],
)
def test_http_errors_map_to_kinds(status, exc):
    with pytest.raises(exc):
        call(lambda request: httpx.Response(status, text="nope"))


def test_transport_error_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GeminiUnavailableError):
        call(handler)


def test_non_json_body_is_response_error():
    with pytest.raises(GeminiResponseError):
        call(lambda request: httpx.Response(200, text="<html>"))


def test_missing_candidates_is_response_error():
    with pytest.raises(GeminiResponseError):
        candidate_text({"candidates": []})


def test_empty_key_rejected():
    with pytest.raises(GeminiAuthError):
        GeminiClient("   ")


def test_from_settings_without_key_is_none():
    assert GeminiClient.from_settings(Settings(GEMINI_API_KEY=None)) is None


def test_extract_json_prefers_fenced_block():
    text = 'Sure!\n```json\n{"category": "Glass", "confidence": 0.9}\n```\nAnything else?'
    assert extract_json_object(text) == {"category": "Glass", "confidence": 0.9}


def test_extract_json_from_bare_braces():
    assert extract_json_object('result: {"a": 1} done') == {"a": 1}


@pytest.mark.parametrize("text", ["no json here", "{not: json}", "", None])
def test_extract_json_failures(text):
    with pytest.raises(GeminiResponseError):
        extract_json_object(text)


def test_split_numbered_list_drops_preamble():
    text = "Here are some tips:\n1. Rinse the bottle\n2. Remove the cap\n3) Flatten it"
    assert split_numbered_list(text) == ["Rinse the bottle", "Remove the cap", "Flatten it"]


def test_split_numbered_list_inline_and_unnumbered():
    assert split_numbered_list("1. a 2. b") == ["a", "b"]
    assert split_numbered_list("just one tip") == ["just one tip"]
    assert split_numbered_list("") == []


def corrupt_gzip(request):
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"definitely not gzip")


def test_undecodable_body_is_unavailable():
    with pytest.raises(GeminiUnavailableError, match="DecodingError"):
        call(corrupt_gzip)
