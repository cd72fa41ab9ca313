"""Little Bell: multi-tenant email open and click tracking."""

from little_bell.client import TrackingClient
from little_bell.common.exceptions import (
    InvalidInputError,
    LittleBellError,
    NotFoundError,
    StorageFault,
)
from little_bell.tracking.network import client_ip
from little_bell.tracking.pixel import TRACKING_PIXEL

__all__ = [
    "TrackingClient",
    "LittleBellError",
    "StorageFault",
    "NotFoundError",
    "InvalidInputError",
    "client_ip",
    "TRACKING_PIXEL",
]
__version__ = "0.1.0"
