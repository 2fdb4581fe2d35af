"""Events emitted by a PawPrint session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .enums import ButtonId, EventType
from .telemetry import AccelerometerSample, ButtonState


@dataclass(frozen=True)
class ConnectedEvent:
    """Session reached the connected state."""

    event_type: EventType = field(default=EventType.CONNECTED, init=False)


@dataclass(frozen=True)
class DisconnectedEvent:
    """Session is gone, either requested or by link loss."""

    event_type: EventType = field(default=EventType.DISCONNECTED, init=False)


@dataclass(frozen=True)
class ButtonDownEvent:
    """Button went from released to pressed."""

    button: ButtonId
    event_type: EventType = field(default=EventType.BUTTON_DOWN, init=False)


@dataclass(frozen=True)
class ButtonUpEvent:
    """Button went from pressed to released."""

    button: ButtonId
    event_type: EventType = field(default=EventType.BUTTON_UP, init=False)


@dataclass(frozen=True)
class DataEvent:
    """Telemetry from one frame carrying accelerometer data.

    Attributes:
        accel: New accelerometer sample
        buttons: Full button state after this frame
        shake: Delta magnitude against the previous sample
    """

    accel: AccelerometerSample
    buttons: ButtonState
    shake: float
    event_type: EventType = field(default=EventType.DATA, init=False)


TelemetryEvent = Union[ButtonDownEvent, ButtonUpEvent, DataEvent]
PawPrintEvent = Union[ConnectedEvent, DisconnectedEvent, ButtonDownEvent, ButtonUpEvent, DataEvent]
