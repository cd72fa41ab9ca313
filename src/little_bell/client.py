"""
TrackingClient SDK: sync client for Little Bell.

Used by sending services to register emails, build click-tracking links
and read a tenant's engagement statistics.
"""

import json
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from urllib.parse import quote

import httpx


@dataclass
class ClientEmail:
    """Result of create_email() call."""

    success: bool
    email_id: Optional[int] = None
    tracking_pixel_url: str = ""
    code: str = ""
    message: str = ""


@dataclass
class ClientEvent:
    """One entry of the recent event feed."""

    id: int
    email_id: int
    event_type: str
    timestamp: Optional[datetime] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None


@dataclass
class ClientStats:
    """Result of get_stats() call."""

    success: bool
    tenant_id: str = ""
    total_opens: int = 0
    total_clicks: int = 0
    unique_opens: int = 0
    unique_clicks: int = 0
    recent_events: list[ClientEvent] = field(default_factory=list)
    code: str = ""


class TrackingClient:
    """
    Synchronous HTTP client for one tenant of a Little Bell server.

    Can be wrapped in async by consumers; designed for simplicity in sync contexts.
    """

    def __init__(
        self,
        tenant_id: str,
        server_url: str = "http://localhost:3000",
        timeout: int = 30,
        max_retries: int = 3,
        retry_backoff_base: float = 0.5,
    ):
        self.tenant_id = tenant_id
        # Path segment form; ids may contain "/", "?" or "#"
        self._tenant_path = quote(tenant_id, safe="")
        self.server_url = server_url.rstrip("/")
        self.max_retries = max_retries
        self.retry_backoff_base = retry_backoff_base
        self._http = httpx.Client(
            base_url=self.server_url,
            timeout=timeout,
        )

    def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Central HTTP method with retry and structured error handling.

        Retries on:
        - httpx.TimeoutException
        - 5xx status codes
        - 429 (rate limit)

        No retry on other 4xx errors.

        Returns parsed JSON on success, or structured error dict on failure.
        """
        last_error = None
        for attempt in range(self.max_retries):
            try:
                resp = getattr(self._http, method)(path, **kwargs)
                if resp.status_code >= 500 or resp.status_code == 429:
                    last_error = f"HTTP {resp.status_code}"
                    if attempt < self.max_retries - 1:
                        time.sleep(self.retry_backoff_base * (2 ** attempt))
                        continue
                    return {
                        "error": f"Server error: {resp.status_code}",
                        "code": "SERVER_ERROR",
                    }
                if resp.status_code == 404:
                    return {"error": "Not found", "code": "NOT_FOUND"}
                if resp.status_code >= 400:
                    return {
                        "error": f"Client error: {resp.status_code}",
                        "code": "CLIENT_ERROR",
                    }
                return resp.json()
            except httpx.TimeoutException:
                last_error = "timeout"
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_backoff_base * (2 ** attempt))
                    continue
            except httpx.HTTPError as e:
                last_error = str(e)
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_backoff_base * (2 ** attempt))
                    continue
            except json.JSONDecodeError:
                return {"error": "Invalid JSON response", "code": "JSON_ERROR"}

        return {"error": f"All {self.max_retries} retries exhausted: {last_error}", "code": "CONNECTION_ERROR"}

    @staticmethod
    def _parse_event(data: dict) -> ClientEvent:
        timestamp = None
        if data.get("timestamp"):
            try:
                timestamp = datetime.fromisoformat(data["timestamp"])
            except (ValueError, TypeError):
                pass

        return ClientEvent(
            id=data.get("id", 0),
            email_id=data.get("email_id", 0),
            event_type=data.get("event_type", ""),
            timestamp=timestamp,
            user_agent=data.get("user_agent"),
            ip_address=data.get("ip_address"),
        )

    # ── Emails ──

    def create_email(
        self,
        subject: str | None = None,
        recipient: str | None = None,
    ) -> ClientEmail:
        """Register an email and get its tracking pixel URL."""
        body = {"subject": subject, "recipient": recipient}
        data = self._request("post", f"/{self._tenant_path}/emails", json=body)

        if "error" in data:
            return ClientEmail(
                success=False, code=data.get("code", "ERROR"),
                message=data.get("error", ""),
            )

        return ClientEmail(
            success=True,
            email_id=data.get("email_id"),
            tracking_pixel_url=data.get("tracking_pixel_url", ""),
            code="CREATED",
        )

    def click_url(self, email_id: int, target_url: str) -> Optional[str]:
        """Return the click-tracking URL wrapping ``target_url``, or None on failure."""
        data = self._request(
            "get", f"/{self._tenant_path}/click-url/{email_id}",
            params={"url": target_url},
        )
        if "error" in data:
            return None
        return data.get("click_url")

    # ── Stats ──

    def get_stats(self) -> ClientStats:
        """Fetch the tenant's engagement statistics."""
        data = self._request("get", f"/{self._tenant_path}/stats")

        if "error" in data:
            return ClientStats(
                success=False, tenant_id=self.tenant_id,
                code=data.get("code", "ERROR"),
            )

        stats = data.get("stats", {})
        return ClientStats(
            success=True,
            tenant_id=data.get("tenant", {}).get("id", self.tenant_id),
            total_opens=stats.get("total_opens", 0),
            total_clicks=stats.get("total_clicks", 0),
            unique_opens=stats.get("unique_opens", 0),
            unique_clicks=stats.get("unique_clicks", 0),
            recent_events=[self._parse_event(e) for e in stats.get("recent_events", [])],
            code="OK",
        )

    def health(self) -> dict[str, Any]:
        return self._request("get", "/health")

    # ── Lifecycle ──

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()
