"""Test inbound telemetry parsing and decoding."""

from __future__ import annotations

import struct

import pytest

from pawprint.exceptions import InvalidFrameError
from pawprint.models.enums import ButtonId, EventType
from pawprint.models.events import ButtonDownEvent, ButtonUpEvent, DataEvent
from pawprint.models.telemetry import AccelerometerSample, ButtonState
from pawprint.protocol.telemetry import TelemetryDecoder, parse_frame, unpack_int16_be

RELEASED = 0x01
PRESSED = 0x00


def _frame(
    x: int = 0,
    y: int = 0,
    z: int = 0,
    *,
    b1: int = RELEASED,
    b2: int = RELEASED,
    b3: int = RELEASED,
) -> bytes:
    return bytes([b3, b2, b1, 0, 0, 0, 0]) + struct.pack(">hhh", x, y, z)


class TestUnpackInt16:
    """Test big-endian signed 16-bit extraction."""

    def test_positive(self):
        assert unpack_int16_be(b'\x03\xe8', 0) == 1000

    def test_sign_extension(self):
        assert unpack_int16_be(b'\xff\xff', 0) == -1
        assert unpack_int16_be(b'\x80\x00', 0) == -32768
        assert unpack_int16_be(b'\x7f\xff', 0) == 32767

    def test_offset(self):
        assert unpack_int16_be(b'\x00\x00\xfc\x18', 2) == -1000


class TestParseFrame:
    """Test strict frame parsing."""

    def test_too_short(self):
        with pytest.raises(InvalidFrameError, match="too short"):
            parse_frame(b'\x00\x01')

    def test_ack(self):
        frame = parse_frame(b'\x51\x00\x00')
        assert frame.is_ack is True
        assert frame.buttons is None
        assert frame.sample is None

    def test_button_positions_are_active_low(self):
        frame = parse_frame(bytes([PRESSED, RELEASED, RELEASED]))
        assert frame.buttons == ButtonState(b1=False, b2=False, b3=True)

        frame = parse_frame(bytes([RELEASED, RELEASED, PRESSED]))
        assert frame.buttons == ButtonState(b1=True, b2=False, b3=False)

    def test_any_nonzero_byte_is_released(self):
        frame = parse_frame(bytes([0xFF, 0x02, 0x80]))
        assert frame.buttons == ButtonState()

    def test_short_frame_has_no_sample(self):
        frame = parse_frame(bytes([RELEASED] * 12))
        assert frame.sample is None

    def test_accelerometer_offsets(self):
        frame = parse_frame(_frame(1, -2, 1000))
        assert frame.sample == AccelerometerSample(1, -2, 1000)


class TestTelemetryDecoder:
    """Test edge detection and shake computation."""

    def test_short_frame_discarded(self):
        decoder = TelemetryDecoder()
        assert decoder.decode(b'') == []
        assert decoder.decode(b'\x00\x00') == []
        assert decoder.buttons == ButtonState()

    @pytest.mark.parametrize("payload", [b'\x51\x00\x00', b'\x51\x01\x01', b'\x51' + b'\x00' * 12])
    def test_ack_yields_no_events(self, payload):
        decoder = TelemetryDecoder()
        assert decoder.decode(payload) == []
        assert decoder.buttons == ButtonState()

    def test_button_down_then_steady_state(self):
        decoder = TelemetryDecoder()

        events = decoder.decode(bytes([0x00, 0x01, 0x01]))
        assert events == [ButtonDownEvent(ButtonId.B3)]
        assert events[0].event_type is EventType.BUTTON_DOWN

        assert decoder.decode(bytes([0x00, 0x01, 0x01])) == []
        assert decoder.buttons.b3 is True

    def test_button_up(self):
        decoder = TelemetryDecoder()
        decoder.decode(bytes([0x01, 0x01, 0x00]))

        events = decoder.decode(bytes([0x01, 0x01, 0x01]))
        assert events == [ButtonUpEvent(ButtonId.B1)]
        assert decoder.buttons == ButtonState()

    def test_multiple_edges_in_button_order(self):
        decoder = TelemetryDecoder()
        events = decoder.decode(bytes([0x00, 0x00, 0x00]))
        assert [e.button for e in events] == [ButtonId.B1, ButtonId.B2, ButtonId.B3]

        events = decoder.decode(bytes([0x01, 0x00, 0x01]))
        assert events == [ButtonUpEvent(ButtonId.B1), ButtonUpEvent(ButtonId.B3)]

    def test_short_frame_edges_without_data_event(self):
        decoder = TelemetryDecoder()
        events = decoder.decode(bytes([0x01, 0x00, 0x01, 0, 0]))
        assert events == [ButtonDownEvent(ButtonId.B2)]

    def test_shake_against_previous_sample(self):
        decoder = TelemetryDecoder()

        events = decoder.decode(_frame(0, 0, 1000))
        assert len(events) == 1
        assert isinstance(events[0], DataEvent)
        assert events[0].shake == 1000
        assert events[0].accel == AccelerometerSample(0, 0, 1000)

        events = decoder.decode(_frame(0, 0, 1000))
        assert events[0].shake == 0

    def test_shake_is_euclidean_norm(self):
        decoder = TelemetryDecoder()
        decoder.decode(_frame(100, 100, 100))
        events = decoder.decode(_frame(103, 104, 100))
        assert events[0].shake == pytest.approx(5.0)
        assert decoder.shake == pytest.approx(5.0)
        assert decoder.sample == AccelerometerSample(103, 104, 100)

    def test_data_event_follows_button_edges(self):
        decoder = TelemetryDecoder()
        events = decoder.decode(_frame(0, 0, 1000, b2=PRESSED))

        assert events[0] == ButtonDownEvent(ButtonId.B2)
        assert isinstance(events[1], DataEvent)
        assert events[1].buttons == ButtonState(b2=True)

    def test_ack_does_not_touch_sample(self):
        decoder = TelemetryDecoder()
        decoder.decode(_frame(0, 0, 1000))
        decoder.decode(b'\x51' + b'\x00' * 12)
        assert decoder.sample == AccelerometerSample(0, 0, 1000)

    def test_reset(self):
        decoder = TelemetryDecoder()
        decoder.decode(_frame(5, 5, 5, b1=PRESSED))
        decoder.reset()
        assert decoder.sample == AccelerometerSample()
        assert decoder.buttons == ButtonState()
        assert decoder.shake == 0.0
