"""HTTP gateway endpoint tests."""

from http import HTTPStatus
from unittest.mock import Mock

from fastapi.testclient import TestClient

from ld_proto.app.services.detector import WordListDetector


def test_root_endpoint(client: TestClient) -> None:
    response = client.get("/api/v1/")
    assert response.status_code == HTTPStatus.OK
    assert response.json()["status"] == "ok"


def test_health_check(client: TestClient) -> None:
    response = client.get("/api/v1/health")
    assert response.status_code == HTTPStatus.OK
    assert response.json()["status"] == "healthy"


def test_detect_endpoint_success(client: TestClient) -> None:
    """Test detection of an English document.

    Args:
        client: FastAPI test client for making requests.
    """
    response = client.post(
        "/api/v1/detect",
        json={
            "text": "This is the document and it is in English",
            "document_id": "doc-1",
            "metadata": {"source": "tests"},
        },
    )
    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["language_code"] == "en"
    assert 0.0 < data["confidence"] <= 1.0
    assert data["document_id"] == "doc-1"
    assert data["metadata"]["service_version"] == "1.0.0"
    assert data["metadata"]["model_version"] == "simple-word-based-v1.0"
    assert data["metadata"]["provider"] == "ld_proto_example"
    assert data["metadata"]["processing_time_ms"] >= 0
    assert "en" not in [alt["language_code"] for alt in data["alternatives"]]


def test_detect_endpoint_empty_text(client: TestClient) -> None:
    response = client.post("/api/v1/detect", json={"text": ""})
    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["language_code"] == "unknown"
    assert data["confidence"] == 0.0
    assert data["alternatives"] == []
    assert data["document_id"] == ""


def test_detect_endpoint_validation(client: TestClient) -> None:
    response = client.post("/api/v1/detect", json={"document_id": "missing-text"})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    response = client.post("/api/v1/detect", json={"text": "x", "metadata": {"k": ["v"]}})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_detect_batch_endpoint(client: TestClient) -> None:
    response = client.post(
        "/api/v1/detect/batch",
        json={
            "documents": [
                {"text": "der die und das", "document_id": "a"},
                {"text": "", "document_id": "b"},
                {"text": "il gatto e la casa", "document_id": "c"},
            ]
        },
    )
    assert response.status_code == HTTPStatus.OK
    results = response.json()["results"]
    assert [r["document_id"] for r in results] == ["a", "b", "c"]
    assert [r["language_code"] for r in results] == ["de", "unknown", "it"]


def test_detect_endpoint_detector_unavailable(client: TestClient) -> None:
    client.app.state.detector = None
    response = client.post("/api/v1/detect", json={"text": "the"})
    assert response.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert response.json()["detail"] == "Detector service not available"


def test_detect_endpoint_unexpected_error(client: TestClient) -> None:
    broken = Mock(spec=WordListDetector)
    broken.detect.side_effect = RuntimeError("boom")
    client.app.state.detector = broken

    response = client.post("/api/v1/detect", json={"text": "the"})
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Internal server error occurred"

    response = client.post("/api/v1/detect/batch", json={"documents": [{"text": "the"}]})
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR


def test_metrics_endpoint(client: TestClient) -> None:
    client.post("/api/v1/detect", json={"text": "the cat"})
    response = client.get("/api/v1/metrics")
    assert response.status_code == HTTPStatus.OK
    assert "ld_languages_detected_total" in response.text
    assert 'endpoint="/api/v1/detect"' in response.text
