from consultations.core.config import settings
from consultations.core.rate_limiter import login_throttle


def test_login_rate_limit_returns_429(client, admin_account):
    original_limit = settings.auth_login_max_attempts
    original_window = settings.auth_rate_limit_window_seconds
    settings.auth_login_max_attempts = 2
    settings.auth_rate_limit_window_seconds = 60
    login_throttle.reset()
    try:
        first = client.post("/auth/login", json={"username": "admin", "password": "WrongPass123"})
        second = client.post("/auth/login", json={"username": "admin", "password": "WrongPass123"})
        third = client.post("/auth/login", json={"username": "admin", "password": "StrongPass123"})

        assert first.status_code == 401
        assert second.status_code == 401
        assert third.status_code == 429
        assert third.json()["error"]["code"] == "http_429"
        assert third.headers.get("Retry-After")
    finally:
        settings.auth_login_max_attempts = original_limit
        settings.auth_rate_limit_window_seconds = original_window
        login_throttle.reset()
