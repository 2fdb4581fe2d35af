"""Sensor telemetry data structures."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .enums import ButtonId

RAD_TO_DEG = 180 / math.pi


@dataclass(frozen=True, slots=True)
class AccelerometerSample:
    """Raw accelerometer reading (signed 16-bit sensor units)."""

    x: int = 0
    y: int = 0
    z: int = 0

    def delta_magnitude(self, previous: AccelerometerSample) -> float:
        """Euclidean norm of the per-axis change from ``previous``."""
        dx = self.x - previous.x
        dy = self.y - previous.y
        dz = self.z - previous.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def tilt(self) -> TiltAngles:
        """Tilt angles of this sample in degrees."""
        return compute_tilt(self)


@dataclass(frozen=True, slots=True)
class TiltAngles:
    """Tilt derived from one accelerometer sample, in degrees.

    Attributes:
        roll: Rotation around the Y axis, atan2(x, z)
        pitch: Rotation around the X axis, limited to +/-90
        pitch360: Full-circle pitch alternative, atan2(y, z)
    """

    roll: float
    pitch: float
    pitch360: float


@dataclass(frozen=True, slots=True)
class ButtonState:
    """Pressed state of the three buttons (True = pressed)."""

    b1: bool = False
    b2: bool = False
    b3: bool = False

    def is_pressed(self, button: ButtonId | int) -> bool:
        return getattr(self, _BUTTON_FIELDS[ButtonId(button)])

    def __getitem__(self, button: ButtonId | int) -> bool:
        return self.is_pressed(button)

    def with_button(self, button: ButtonId, pressed: bool) -> ButtonState:
        """Return a copy with one button changed."""
        values = {name: getattr(self, name) for name in _BUTTON_FIELDS.values()}
        values[_BUTTON_FIELDS[button]] = pressed
        return ButtonState(**values)


_BUTTON_FIELDS: dict[ButtonId, str] = {
    ButtonId.B1: "b1",
    ButtonId.B2: "b2",
    ButtonId.B3: "b3",
}


def compute_tilt(sample: AccelerometerSample) -> TiltAngles:
    """Compute roll/pitch angles from a raw sample.

    atan2 is defined for every input (including all-zero), so this never fails.
    """
    x, y, z = sample.x, sample.y, sample.z
    roll = math.atan2(x, z) * RAD_TO_DEG
    pitch = math.atan2(y, math.sqrt(x * x + z * z)) * RAD_TO_DEG
    pitch360 = math.atan2(y, z) * RAD_TO_DEG
    return TiltAngles(roll=roll, pitch=pitch, pitch360=pitch360)
