"""PawPrint BLE Protocol Package.

  Pure Python package for driving PawPrint wearable BLE controllers.
  """

from .blink import BlinkScheduler
from .device import PawPrintDevice
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    CharacteristicNotFoundError,
    InvalidFrameError,
    NoDeviceSelectedError,
    NotConnectedError,
    PawPrintError,
    ProtocolError,
    WriteFailureError,
)
from .models.enums import ButtonId, ColorId, ConnectionState, EventType
from .models.events import (
    ButtonDownEvent,
    ButtonUpEvent,
    ConnectedEvent,
    DataEvent,
    DisconnectedEvent,
    PawPrintEvent,
)
from .models.state import SessionState
from .models.telemetry import AccelerometerSample, ButtonState, TiltAngles, compute_tilt
from .protocol import (
    SERVICE_UUID,
    TelemetryDecoder,
    build_external_led_command,
    build_internal_led_command,
)
from .transport import BLEConnection, Transport

__version__ = "0.1.0"

__all__ = [
    # Main API
    "PawPrintDevice",
    "BlinkScheduler",
    "TelemetryDecoder",
    # Transport
    "BLEConnection",
    "Transport",
    # Exceptions
    "PawPrintError",
    "BLEConnectionError",
    "BLETimeoutError",
    "CharacteristicNotFoundError",
    "WriteFailureError",
    "NoDeviceSelectedError",
    "NotConnectedError",
    "ProtocolError",
    "InvalidFrameError",
    # Models
    "AccelerometerSample",
    "ButtonState",
    "TiltAngles",
    "SessionState",
    # Events
    "PawPrintEvent",
    "ConnectedEvent",
    "DisconnectedEvent",
    "ButtonDownEvent",
    "ButtonUpEvent",
    "DataEvent",
    # Enums
    "ColorId",
    "ButtonId",
    "ConnectionState",
    "EventType",
    # Utilities
    "build_internal_led_command",
    "build_external_led_command",
    "compute_tilt",
    # Constants
    "SERVICE_UUID",
]
