"""Inbound telemetry frame parsing and decoding."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from ..exceptions import InvalidFrameError
from ..models.enums import ButtonId
from ..models.events import ButtonDownEvent, ButtonUpEvent, DataEvent, TelemetryEvent
from ..models.telemetry import AccelerometerSample, ButtonState
from .commands import ACK_MARKER

_LOGGER = logging.getLogger(__name__)

MIN_FRAME_LENGTH = 3
ACCEL_FRAME_LENGTH = 13
ACCEL_OFFSETS = (7, 9, 11)  # x, y, z

# Button byte positions in the frame: [B3][B2][B1]...
BUTTON_OFFSETS: dict[ButtonId, int] = {
    ButtonId.B1: 2,
    ButtonId.B2: 1,
    ButtonId.B3: 0,
}


@dataclass(frozen=True)
class TelemetryFrame:
    """One parsed inbound frame.

    Attributes:
        is_ack: Frame is a command acknowledgement (no sensor content)
        buttons: Button state encoded in the frame (None for ACKs)
        sample: Accelerometer sample, present when the frame is long enough
    """

    is_ack: bool
    buttons: ButtonState | None = None
    sample: AccelerometerSample | None = None


def unpack_int16_be(data: bytes, offset: int) -> int:
    """Read a big-endian signed 16-bit integer."""
    return struct.unpack_from(">h", data, offset)[0]


def parse_frame(data: bytes) -> TelemetryFrame:
    """Parse a raw notification frame.

    Format:
        [B3:1][B2:1][B1:1][?:4][x:2][y:2][z:2]
        - Button bytes are active low: 0x00 means pressed
        - x, y, z: big-endian int16, only when the frame has 13+ bytes
        - A first byte of 0x51 marks an ACK frame

    Args:
        data: Raw notification bytes

    Returns:
        Parsed TelemetryFrame

    Raises:
        InvalidFrameError: If the frame is shorter than 3 bytes
    """
    if len(data) < MIN_FRAME_LENGTH:
        raise InvalidFrameError(
            f"Frame too short: {len(data)} bytes (need at least {MIN_FRAME_LENGTH})"
        )

    if data[0] == ACK_MARKER:
        return TelemetryFrame(is_ack=True)

    buttons = ButtonState(
        b1=data[BUTTON_OFFSETS[ButtonId.B1]] == 0x00,
        b2=data[BUTTON_OFFSETS[ButtonId.B2]] == 0x00,
        b3=data[BUTTON_OFFSETS[ButtonId.B3]] == 0x00,
    )

    sample = None
    if len(data) >= ACCEL_FRAME_LENGTH:
        x, y, z = (unpack_int16_be(data, offset) for offset in ACCEL_OFFSETS)
        sample = AccelerometerSample(x=x, y=y, z=z)

    return TelemetryFrame(is_ack=False, buttons=buttons, sample=sample)


class TelemetryDecoder:
    """Turn notification frames into button edges and telemetry events.

    Keeps the last accelerometer sample (for the shake delta) and the last
    button state (for edge detection) between frames.
    """

    def __init__(self) -> None:
        self.sample = AccelerometerSample()
        self.buttons = ButtonState()
        self.shake = 0.0

    def reset(self) -> None:
        """Forget previous sample and button state."""
        self.sample = AccelerometerSample()
        self.buttons = ButtonState()
        self.shake = 0.0

    def decode(self, data: bytes) -> list[TelemetryEvent]:
        """Decode one frame.

        Short and garbled frames are expected on a lossy link, so they are
        dropped here instead of raised.

        Args:
            data: Raw notification bytes

        Returns:
            Button edge events (B1, B2, B3 order) followed by a DataEvent
            when the frame carried accelerometer data
        """
        try:
            frame = parse_frame(data)
        except InvalidFrameError as e:
            _LOGGER.debug("Discarding frame %s: %s", data.hex(), e)
            return []

        if frame.is_ack:
            _LOGGER.debug("ACK frame: %s", data.hex())
            return []

        events: list[TelemetryEvent] = []

        for button in ButtonId:
            pressed = frame.buttons.is_pressed(button)
            if self.buttons.is_pressed(button) == pressed:
                continue
            self.buttons = self.buttons.with_button(button, pressed)
            events.append(ButtonDownEvent(button) if pressed else ButtonUpEvent(button))

        if frame.sample is not None:
            self.shake = frame.sample.delta_magnitude(self.sample)
            self.sample = frame.sample
            events.append(DataEvent(accel=self.sample, buttons=self.buttons, shake=self.shake))

        return events
