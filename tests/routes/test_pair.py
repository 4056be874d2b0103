"""
Tests for POST /api/pair.

Covers:
- Happy path -> 200 {"ok": true}
- Validation: missing / blank fields -> 400, automation not invoked
- Rate limiting: 6th request within the window -> 429, automation not invoked
- Capacity: all browser slots busy -> 503
- Reported failure -> 400 with the result's error
- Unexpected fault -> 500 without internal detail
- End-to-end scenarios through a simulated site
"""

import functools
import logging
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from pairing.automation import pair_device
from pairing.config import get_settings
from pairing.main import app
from pairing.routes.pairing import get_rate_limiter, get_session_slots
from pairing.services import FixedWindowRateLimiter, SessionSlots
from tests.fakes import FakeSessionFactory, build_site

VALID_BODY = {"otp": "123456", "label": "Kitchen TV"}


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def slots():
    return SessionSlots(capacity=2)


@pytest.fixture
def limiter():
    return FixedWindowRateLimiter(points=5, window_seconds=60)


@pytest.fixture(autouse=True)
def override_dependencies(test_settings, limiter, slots):
    """Fresh limiter, slots and settings for every test."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_session_slots] = lambda: slots

    yield

    app.dependency_overrides.clear()


@pytest.fixture
def mock_pair_device_success():
    with patch("pairing.routes.pairing.pair_device", new_callable=AsyncMock) as mock:
        mock.return_value = {"ok": True, "error": None}
        yield mock


@pytest.fixture
def mock_pair_device_failure():
    with patch("pairing.routes.pairing.pair_device", new_callable=AsyncMock) as mock:
        mock.return_value = {"ok": False, "error": "FieldNotFound: could not find the OTP / Quickcode field"}
        yield mock


def use_simulated_site(page):
    """Route the endpoint's pair_device through a simulated site."""
    factory = FakeSessionFactory(page)
    return factory, patch(
        "pairing.routes.pairing.pair_device",
        functools.partial(pair_device, open_session=factory),
    )


class TestPairEndpoint:
    """Tests for POST /api/pair with the automation mocked."""

    def test_happy_path_returns_ok(self, client, mock_pair_device_success, test_settings):
        response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        mock_pair_device_success.assert_awaited_once()
        call_args = mock_pair_device_success.call_args
        assert call_args.args[0] is test_settings
        assert call_args.kwargs == {"otp": "123456", "label": "Kitchen TV"}

    def test_label_is_logged_escaped(self, client, mock_pair_device_success, caplog):
        caplog.set_level(logging.INFO, logger="pairing.routes.pairing")

        client.post("/api/pair", json={"otp": "123456", "label": "TV\nERROR forged entry"})

        messages = [record.getMessage() for record in caplog.records]
        assert any("label='TV\\nERROR forged entry'" in message for message in messages)
        assert not any("\n" in message for message in messages)

    def test_fields_are_trimmed_and_numeric_otp_accepted(self, client, mock_pair_device_success):
        response = client.post("/api/pair", json={"otp": 123456, "label": "  Kitchen TV  "})

        assert response.status_code == 200
        assert mock_pair_device_success.call_args.kwargs == {"otp": "123456", "label": "Kitchen TV"}

    @pytest.mark.parametrize(
        "body",
        [
            {"label": "Kitchen TV"},
            {"otp": "123456"},
            {"otp": "   ", "label": "Kitchen TV"},
            {"otp": "123456", "label": ""},
            {},
        ],
    )
    def test_missing_fields_return_400(self, client, mock_pair_device_success, body):
        response = client.post("/api/pair", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "otp and label are required."}
        mock_pair_device_success.assert_not_called()

    def test_malformed_body_returns_400(self, client, mock_pair_device_success):
        response = client.post(
            "/api/pair",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        mock_pair_device_success.assert_not_called()

    def test_reported_failure_returns_400_with_reason(self, client, mock_pair_device_failure):
        response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 400
        assert response.json() == {"error": "FieldNotFound: could not find the OTP / Quickcode field"}

    def test_unexpected_fault_returns_generic_500(self, client):
        with patch("pairing.routes.pairing.pair_device", new_callable=AsyncMock) as mock:
            mock.side_effect = RuntimeError("secret internal detail")

            response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "Server error."}
        assert "secret" not in response.text

    def test_all_slots_busy_returns_503(self, client, slots, mock_pair_device_success):
        slots.in_use = slots.capacity

        response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 503
        assert "busy" in response.json()["error"]
        mock_pair_device_success.assert_not_called()


class TestPairRateLimit:
    """Rate limiting on POST /api/pair."""

    def test_sixth_request_is_rate_limited(self, client, mock_pair_device_success):
        statuses = [client.post("/api/pair", json=VALID_BODY).status_code for _ in range(6)]

        assert statuses == [200, 200, 200, 200, 200, 429]
        assert mock_pair_device_success.await_count == 5

    def test_rate_limited_response_body(self, client, mock_pair_device_success):
        for _ in range(5):
            client.post("/api/pair", json=VALID_BODY)

        response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 429
        assert response.json() == {"error": "Too many attempts, try again in 1 minute."}
        assert int(response.headers["Retry-After"]) > 0

    def test_invalid_requests_count_against_the_limit(self, client, mock_pair_device_success):
        for _ in range(5):
            client.post("/api/pair", json={})

        response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 429
        mock_pair_device_success.assert_not_called()


class TestPairEndToEnd:
    """Full workflow through the endpoint with a simulated site."""

    def test_site_confirms_pairing(self, client):
        factory, patcher = use_simulated_site(build_site(toast="Added"))

        with patcher:
            response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert factory.opened == 1
        assert factory.closed == 1

    def test_site_rejects_code(self, client):
        factory, patcher = use_simulated_site(build_site(toast="Invalid code"))

        with patcher:
            response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 400
        assert "not confirmed" in response.json()["error"]
        assert factory.closed == 1

    def test_dashboard_never_loads(self, client):
        factory, patcher = use_simulated_site(build_site(dashboard_loads=False))

        with patcher:
            response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 400
        assert response.json()["error"].startswith("NavigationTimeout")
        assert factory.closed == 1

    def test_missing_credentials_fail_without_browser(self, client, unconfigured_settings):
        app.dependency_overrides[get_settings] = lambda: unconfigured_settings
        factory, patcher = use_simulated_site(build_site())

        with patcher:
            response = client.post("/api/pair", json=VALID_BODY)

        assert response.status_code == 400
        assert response.json()["error"].startswith("ConfigurationError")
        assert factory.opened == 0
