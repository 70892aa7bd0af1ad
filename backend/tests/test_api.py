import pytest
from fastapi.testclient import TestClient

from pilarahan.core.config import settings
from pilarahan.main import create_app
from pilarahan.services.classification_service import ClassifierContext
from pilarahan.services.context import ServiceContext
from pilarahan.services.reference_store import InMemoryReferenceStore

API = settings.API_PREFIX


def offline_services(**classifier_kwargs) -> ServiceContext:
    return ServiceContext(
        classifier=ClassifierContext(**classifier_kwargs),
        store=InMemoryReferenceStore(),
        gemini=None,
    )


@pytest.fixture
def client():
    with TestClient(create_app(services=offline_services())) as c:
        yield c


def png(make_image, **kwargs):
    return ("photo.png", make_image(**kwargs), "image/png")


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_classify_single_camel_case(client, make_image):
    r = client.post(f"{API}/classify", files={"file": png(make_image)})

    assert r.status_code == 200
    body = r.json()
    assert body["type"] == "Paper"
    assert body["isRecyclable"] is True
    assert body["recyclabilityScore"] == 75
    assert body["predictionQuality"] == "low"
    assert body["source"] == "simulated"
    assert body["fallbackReason"] is None
    assert body["environmentalImpact"] == {"carbonFootprintKg": 1.1, "energyRecoveryPotentialMJ": 16.0}
    assert body["materialComposition"]


def test_classify_uses_display_size_and_client_model(client, make_image):
    r = client.post(
        f"{API}/classify",
        files={"file": png(make_image)},
        data={"display_width": "640", "display_height": "480", "client_category": "glass", "client_confidence": "0.97"},
    )

    body = r.json()
    assert body["type"] == "Glass"
    assert body["source"] == "client_model"
    assert body["predictionQuality"] == "high"
    assert body["recyclabilityScore"] == 98


def test_classify_with_predictor(make_image, fake_predictor):
    with TestClient(create_app(services=offline_services(predictor=fake_predictor("Organic", 0.95)))) as c:
        body = c.post(f"{API}/classify", files={"file": png(make_image)}).json()

    assert body["type"] == "Organic"
    assert body["source"] == "fake"
    assert body["recyclabilityScore"] == 90


def test_classify_predictor_failure_is_visible(make_image, failing_predictor):
    with TestClient(create_app(services=offline_services(predictor=failing_predictor))) as c:
        body = c.post(f"{API}/classify", files={"file": png(make_image)}).json()

    assert body["source"] == "simulated_fallback"
    assert body["fallbackReason"] == "model unreachable"


def test_classify_rejects_non_image(client):
    r = client.post(f"{API}/classify", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "invalid_image"
    assert r.json()["detail"]["filename"] == "notes.txt"


def test_classify_rejects_oversized_file(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE_MB", 1)
    r = client.post(f"{API}/classify", files={"file": ("big.png", b"x" * (1024 * 1024 + 1), "image/png")})

    assert r.status_code == 413
    assert r.json()["detail"]["error"] == "file_too_large"


def test_classify_rejects_too_many_pixels(client, make_image, monkeypatch):
    monkeypatch.setattr(settings, "MAX_IMAGE_MEGAPIXELS", 1.0)
    r = client.post(f"{API}/classify", files={"file": png(make_image, width=1200, height=1000)})

    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "image_too_large"


def test_classify_batch(client, make_image):
    files = [
        ("files", ("a.png", make_image(), "image/png")),
        ("files", ("b.txt", b"nope", "text/plain")),
    ]
    r = client.post(f"{API}/classify/batch", files=files)

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    assert body["maxFilesAllowed"] == settings.MAX_FILES_PER_BATCH
    first, second = body["results"]
    assert first["filename"] == "a.png" and first["result"]["type"] == "Paper"
    assert second["result"] is None and second["error"]


def test_classify_batch_limit(client, make_image, monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILES_PER_BATCH", 2)
    files = [("files", (f"{i}.png", make_image(), "image/png")) for i in range(3)]

    r = client.post(f"{API}/classify/batch", files=files)

    assert r.status_code == 400
    assert r.json()["detail"] == {"error": "too_many_files", "max_files_allowed": 2, "received": 3}


def test_categories(client):
    body = client.get(f"{API}/categories").json()

    assert [c["category"] for c in body] == [
        "Plastic", "Paper", "Glass", "Metal", "Organic", "Electronic", "Textile", "Battery", "Other",
    ]
    assert body[0]["recyclabilityScore"] == 90
    assert body[0]["environmentalImpact"]["energyRecoveryPotentialMJ"] == 38.0


def test_category_detail(client):
    assert client.get(f"{API}/categories/metal", params={"confidence": 0.5}).json()["recyclabilityScore"] == 55
    assert client.get(f"{API}/categories/unknown-thing").json()["category"] == "Other"
    assert client.get(f"{API}/categories/glass", params={"confidence": 2}).status_code == 422


def test_recommendations_offline(client):
    r = client.post(f"{API}/recommendations", json={"wasteType": "Paper", "imageDescription": "a box"})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "offline"
    assert body["recommendation"].startswith("Unfold or flatten")
    assert len(body["environmentalImpact"]) == 4


def test_recommendations_requires_type(client):
    r = client.post(f"{API}/recommendations", json={"wasteType": "  "})
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "waste_type_required"


def test_recycling_tips(client):
    body = client.get(f"{API}/recycling-tips", params={"wasteType": "Glass"}).json()

    assert body["wasteType"] == "Glass"
    assert body["source"] == "offline"
    assert body["tips"][0] == "Sort glass by color (clear, green, brown)"
    assert client.get(f"{API}/recycling-tips").status_code == 422


def test_ai_chat_offline(client):
    body = client.post(f"{API}/ai-chat", json={"message": "What do I do with old paper?"}).json()

    assert body["fallback"] is True
    assert body["environmentalTips"][0] == "Print on both sides of the paper"

    r = client.post(f"{API}/ai-chat", json={})
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "message_required"


def test_learning_resources(client):
    body = client.get(f"{API}/learning-resources").json()
    assert len(body) == 6
    assert {"id", "title", "categoryColor", "createdAt"} <= set(body[0])

    assert client.get(f"{API}/learning-resources/3").json()["title"] == "E-Waste Management"
    missing = client.get(f"{API}/learning-resources/99")
    assert missing.status_code == 404
    assert missing.json()["detail"]["error"] == "not_found"


def test_waste_types(client):
    body = client.get(f"{API}/waste-types").json()
    assert body[0]["name"] == "Batteries"
    assert {"isRecyclable", "disposalInstructions", "colorClass"} <= set(body[0])


def test_recycling_centers_default_origin(client):
    body = client.get(f"{API}/recycling-centers").json()

    assert body[0]["name"] == "EcoCycle Recycling Center"
    assert body[0]["distance"] == 0.0
    assert body[0]["wasteTypes"][0] == {"name": "Plastic", "color": "primary"}


def test_recycling_centers_filter(client):
    body = client.get(
        f"{API}/recycling-centers",
        params={"latitude": 37.7749, "longitude": -122.4194, "type": "Composting"},
    ).json()
    assert [c["name"] for c in body] == ["GreenTech Composting"]


def test_recycling_center_detail(client):
    body = client.get(f"{API}/recycling-centers/4").json()
    assert body["name"] == "Metro Hazardous Waste Facility"
    assert body["hoursOfOperation"].startswith("Tuesday")
    assert [w["name"] for w in body["wasteTypes"]] == ["Hazardous", "Electronic", "Batteries"]
    assert client.get(f"{API}/recycling-centers/77").status_code == 404


def test_capabilities_offline(client):
    body = client.get("/capabilities").json()

    assert body["categories"][-1] == "Other"
    assert body["features"]["ai_classifier"] is False
    assert body["features"]["ai_assistant"] is False
    assert body["engine"]["feature_source"] == "simulated"
    assert body["groups"]["recyclable"] == ["Glass", "Metal", "Paper", "Plastic"]


def test_version(client):
    body = client.get("/version").json()
    assert body["service"] == settings.PROJECT_NAME
    assert "python" in body["runtime"]


def test_request_id_round_trip(client, read_events):
    r = client.get("/health", headers={"x-request-id": "req-123"})

    assert r.headers["x-request-id"] == "req-123"
    http_events = [e for e in read_events() if e["event"] == "http_request"]
    assert http_events[-1]["request_id"] == "req-123"
    assert http_events[-1]["status_code"] == 200


def test_classify_events_carry_request_id(client, make_image, read_events):
    client.post(f"{API}/classify", files={"file": png(make_image)}, headers={"x-request-id": "req-9"})

    events = {e["event"]: e for e in read_events()}
    assert events["classify_start"]["request_id"] == "req-9"
    assert events["classification_done"]["request_id"] == "req-9"
    assert events["classification_done"]["source"] == "simulated"
