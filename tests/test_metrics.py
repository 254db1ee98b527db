from fastapi.testclient import TestClient
from prometheus_client import CONTENT_TYPE_LATEST

from chatbot_service.api.metrics import RequestMetrics
from tests.conftest import register


def test_metrics_exposition(client: TestClient, metrics: RequestMetrics) -> None:
    register(client)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
    assert "http_request_duration_seconds_bucket" in response.text
    assert metrics.registry.get_sample_value(
        "http_requests_total", {"method": "POST", "route": "/api/register", "code": "201"}
    ) == 1.0
    assert metrics.registry.get_sample_value(
        "http_request_duration_seconds_count", {"method": "POST", "route": "/api/register", "code": "201"}
    ) == 1.0


def test_unmatched_routes_are_labelled_unknown(client: TestClient, metrics: RequestMetrics) -> None:
    client.get("/does-not-exist")

    assert metrics.registry.get_sample_value(
        "http_requests_total", {"method": "GET", "route": "unknown", "code": "404"}
    ) == 1.0


def test_registries_are_independent() -> None:
    first, second = RequestMetrics(), RequestMetrics()

    first.observe("GET", "/api/users", 200, 0.05)

    assert first.registry.get_sample_value(
        "http_requests_total", {"method": "GET", "route": "/api/users", "code": "200"}
    ) == 1.0
    assert second.registry.get_sample_value(
        "http_requests_total", {"method": "GET", "route": "/api/users", "code": "200"}
    ) is None
