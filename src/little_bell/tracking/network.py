"""Request metadata extraction shared by the tracking endpoints."""

from typing import Mapping, Optional

FORWARDED_FOR_HEADER = "x-forwarded-for"
REAL_IP_HEADER = "x-real-ip"
USER_AGENT_HEADER = "user-agent"


def client_ip(headers: Mapping[str, str]) -> Optional[str]:
    """
    Resolve the client address from proxy headers.

    "203.0.113.5, 70.41.3.18" → "203.0.113.5"
    Falls back to X-Real-IP when X-Forwarded-For is absent.
    """
    value = headers.get(FORWARDED_FOR_HEADER)
    if value is None:
        value = headers.get(REAL_IP_HEADER)
    if value is None:
        return None
    first = value.split(",", 1)[0].strip()
    return first or None


def user_agent(headers: Mapping[str, str]) -> Optional[str]:
    return headers.get(USER_AGENT_HEADER)
