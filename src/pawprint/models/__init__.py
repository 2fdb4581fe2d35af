"""Data models for PawPrint devices."""

from .enums import ButtonId, ColorId, ConnectionState, EventType
from .events import (
    ButtonDownEvent,
    ButtonUpEvent,
    ConnectedEvent,
    DataEvent,
    DisconnectedEvent,
    PawPrintEvent,
    TelemetryEvent,
)
from .state import SessionState
from .telemetry import AccelerometerSample, ButtonState, TiltAngles, compute_tilt

__all__ = [
    "AccelerometerSample",
    "ButtonDownEvent",
    "ButtonId",
    "ButtonState",
    "ButtonUpEvent",
    "ColorId",
    "ConnectedEvent",
    "ConnectionState",
    "DataEvent",
    "DisconnectedEvent",
    "EventType",
    "PawPrintEvent",
    "SessionState",
    "TelemetryEvent",
    "TiltAngles",
    "compute_tilt",
]
