from consultations.main import app
from consultations.services import booking_service


def test_error_response_has_unified_shape(client):
    response = client.get("/bookings")
    assert response.status_code == 401
    body = response.json()
    assert "error" in body
    assert "code" in body["error"]
    assert "message" in body["error"]
    assert "detail" in body
    assert "request_id" in body


def test_domain_error_carries_stable_code(client):
    response = client.get("/availability", params={"date": "2026-13-45"})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "invalid_input",
        "message": "Invalid date format. Use YYYY-MM-DD",
        "detail": "Invalid date format. Use YYYY-MM-DD",
    }


def test_validation_error_shape(client, admin_headers):
    response = client.get("/bookings", params={"limit": 0}, headers=admin_headers)

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "validation_error"
    assert isinstance(body["detail"], list)


def test_unexpected_error_returns_generic_500_with_request_id(monkeypatch, caplog):
    from fastapi.testclient import TestClient

    def boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(booking_service, "parse_booking_date", boom)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get(
            "/availability",
            params={"date": "2030-01-01"},
            headers={"X-Request-ID": "req-500"},
        )

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["code"] == "internal_error"
    assert body["request_id"] == "req-500"
    assert response.headers["X-Request-ID"] == "req-500"
    assert "database exploded" not in response.text
    tracebacks = [record for record in caplog.records if record.exc_info]
    assert len(tracebacks) == 1


def test_health_endpoint_returns_ok_and_request_id(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "x-request-id" in response.headers
