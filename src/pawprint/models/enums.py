from __future__ import annotations

from enum import Enum, IntEnum


class ColorId(IntEnum):
    """LED colors understood by the firmware.

    The same table is used for the internal and the external LED.
    """
    OFF = 0x00
    YELLOW = 0x01
    RED = 0x02
    VIOLET = 0x03
    BLUE = 0x04
    CYAN = 0x05
    GREEN = 0x06


class ButtonId(IntEnum):
    """Physical buttons."""
    B1 = 1  # Top/left
    B2 = 2  # Middle
    B3 = 3  # Bottom/right


class ConnectionState(IntEnum):
    """Session lifecycle states."""
    DISCONNECTED = 0
    CONNECTING = 1
    CONNECTED = 2
    DISCONNECTING = 3


class EventType(str, Enum):
    """Tags carried by session events."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    BUTTON_DOWN = "buttondown"
    BUTTON_UP = "buttonup"
    DATA = "data"
