"""Tests for client.py: TrackingClient SDK with resilience."""

import json
import pytest
from unittest.mock import MagicMock, patch

import httpx

from little_bell.client import ClientEmail, ClientStats, TrackingClient


def _mock_response(data: dict, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


class TestTrackingClientInit:
    def test_defaults(self):
        client = TrackingClient("acme")
        assert client.server_url == "http://localhost:3000"
        assert client.tenant_id == "acme"
        assert client.max_retries == 3
        client.close()

    def test_trailing_slash_stripped(self):
        client = TrackingClient("acme", server_url="http://track:9090/", max_retries=5)
        assert client.server_url == "http://track:9090"
        assert client.max_retries == 5
        client.close()


class TestCreateEmail:
    def test_success(self):
        client = TrackingClient("acme")
        client._http = MagicMock()
        client._http.post.return_value = _mock_response({
            "email_id": 12,
            "tracking_pixel_url": "http://localhost:3000/acme/pixel/12.gif",
        }, status_code=201)

        result = client.create_email(subject="Hi", recipient="a@example.com")
        assert isinstance(result, ClientEmail)
        assert result.success is True
        assert result.email_id == 12
        assert result.tracking_pixel_url.endswith("/acme/pixel/12.gif")
        client._http.post.assert_called_once_with(
            "/acme/emails", json={"subject": "Hi", "recipient": "a@example.com"},
        )

    def test_client_error(self):
        client = TrackingClient("acme")
        client._http = MagicMock()
        client._http.post.return_value = _mock_response({}, status_code=422)

        result = client.create_email()
        assert result.success is False
        assert result.code == "CLIENT_ERROR"


class TestClickUrl:
    def test_success(self):
        client = TrackingClient("acme")
        client._http = MagicMock()
        client._http.get.return_value = _mock_response({
            "click_url": "http://localhost:3000/acme/click/3?url=https%3A%2F%2Fexample.com",
            "original_url": "https://example.com",
        })

        url = client.click_url(3, "https://example.com")
        assert url.startswith("http://localhost:3000/acme/click/3")
        client._http.get.assert_called_once_with(
            "/acme/click-url/3", params={"url": "https://example.com"},
        )

    def test_not_found(self):
        client = TrackingClient("acme")
        client._http = MagicMock()
        client._http.get.return_value = _mock_response({}, status_code=404)

        assert client.click_url(999, "https://example.com") is None


class TestGetStats:
    def test_parses_stats(self):
        client = TrackingClient("acme")
        client._http = MagicMock()
        client._http.get.return_value = _mock_response({
            "tenant": {"id": "acme", "name": "acme", "created_at": "2026-01-01T00:00:00Z"},
            "stats": {
                "total_opens": 3, "total_clicks": 2,
                "unique_opens": 1, "unique_clicks": 1,
                "recent_events": [
                    {
                        "id": 5, "email_id": 1, "event_type": "click",
                        "timestamp": "2026-01-01T10:00:00+00:00",
                        "user_agent": "UA", "ip_address": "203.0.113.5",
                    },
                ],
            },
        })

        stats = client.get_stats()
        assert isinstance(stats, ClientStats)
        assert stats.success is True
        assert stats.total_opens == 3
        assert stats.unique_clicks == 1
        assert len(stats.recent_events) == 1
        assert stats.recent_events[0].ip_address == "203.0.113.5"
        assert stats.recent_events[0].timestamp.year == 2026

    def test_bad_timestamp_tolerated(self):
        event = TrackingClient._parse_event({"id": 1, "email_id": 1, "event_type": "open", "timestamp": "nope"})
        assert event.timestamp is None


class TestRetries:
    @patch("little_bell.client.time.sleep")
    def test_retries_server_errors(self, mock_sleep):
        client = TrackingClient("acme", max_retries=3)
        client._http = MagicMock()
        client._http.get.side_effect = [
            _mock_response({}, status_code=503),
            _mock_response({}, status_code=500),
            _mock_response({"status": "healthy", "version": "0.1.0"}),
        ]

        assert client.health()["status"] == "healthy"
        assert client._http.get.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("little_bell.client.time.sleep")
    def test_timeouts_exhaust_retries(self, mock_sleep):
        client = TrackingClient("acme", max_retries=2)
        client._http = MagicMock()
        client._http.get.side_effect = httpx.TimeoutException("slow")

        result = client.health()
        assert result["code"] == "CONNECTION_ERROR"
        assert "timeout" in result["error"]

    def test_no_retry_on_client_error(self):
        client = TrackingClient("acme")
        client._http = MagicMock()
        client._http.get.return_value = _mock_response({}, status_code=400)

        result = client.get_stats()
        assert result.success is False
        assert client._http.get.call_count == 1

    def test_invalid_json(self):
        client = TrackingClient("acme")
        resp = _mock_response({})
        resp.json.side_effect = json.JSONDecodeError("bad", "", 0)
        client._http = MagicMock()
        client._http.get.return_value = resp

        assert client.health()["code"] == "JSON_ERROR"


class TestTenantPaths:
    def test_tenant_id_is_quoted(self):
        client = TrackingClient("team a/b?x#y")
        client._http = MagicMock()
        client._http.get.return_value = _mock_response({}, status_code=404)

        client.click_url(3, "https://example.com")
        client.get_stats()
        paths = [c.args[0] for c in client._http.get.call_args_list]
        assert paths == [
            "/team%20a%2Fb%3Fx%23y/click-url/3",
            "/team%20a%2Fb%3Fx%23y/stats",
        ]

    def test_create_email_quotes_tenant(self):
        client = TrackingClient("acme/eu")
        client._http = MagicMock()
        client._http.post.return_value = _mock_response({"email_id": 1}, status_code=201)

        client.create_email()
        assert client._http.post.call_args.args[0] == "/acme%2Feu/emails"
