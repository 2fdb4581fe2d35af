"""BLE transport layer."""

from .base import DisconnectedCallback, NotificationCallback, Transport
from .connection import BLEConnection, select_characteristics

__all__ = [
    "BLEConnection",
    "DisconnectedCallback",
    "NotificationCallback",
    "Transport",
    "select_characteristics",
]
