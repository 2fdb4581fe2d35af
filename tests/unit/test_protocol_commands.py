import pytest

from pawprint.models.enums import ColorId
from pawprint.protocol.commands import (
    ACK_MARKER,
    SERVICE_UUID,
    CommandCode,
    build_external_led_command,
    build_internal_led_command,
)


class TestCommandBuilders:
    """Test command builder functions against the device wire format."""

    @pytest.mark.parametrize("color", list(ColorId))
    @pytest.mark.parametrize(("data_enabled", "flag"), [(True, 0xFF), (False, 0x00)])
    def test_build_internal_led_command(self, color, data_enabled, flag):
        """Internal LED frame carries color and data flag."""
        cmd = build_internal_led_command(color, data_enabled)
        assert len(cmd) == 3
        assert cmd == bytes([0x53, color, flag])

    @pytest.mark.parametrize("color", list(ColorId))
    def test_build_external_led_command(self, color):
        """External LED frame is command + color."""
        cmd = build_external_led_command(color)
        assert cmd == bytes([0x70, color])

    def test_known_frames(self):
        """Spot-check literal frames."""
        assert build_internal_led_command(ColorId.YELLOW, False) == b'\x53\x01\x00'
        assert build_internal_led_command(ColorId.GREEN, True) == b'\x53\x06\xff'
        assert build_external_led_command(ColorId.OFF) == b'\x70\x00'
        assert build_external_led_command(ColorId.VIOLET) == b'\x70\x03'

    def test_builders_accept_plain_ints(self):
        """Color is not validated at runtime."""
        assert build_external_led_command(0x04) == b'\x70\x04'


class TestCommandCode:
    """Test CommandCode enum values."""

    def test_command_code_values(self):
        assert CommandCode.INTERNAL_LED == 0x53
        assert CommandCode.EXTERNAL_LED == 0x70

    def test_protocol_constants(self):
        assert ACK_MARKER == 0x51
        assert SERVICE_UUID == "0000180c-0000-1000-8000-00805f9b34fb"
