"""BLE protocol implementation."""

from .commands import (
    ACK_MARKER,
    NOTIFY_CHARACTERISTIC_MARKER,
    SERVICE_UUID,
    WRITE_CHARACTERISTIC_MARKER,
    CommandCode,
    build_external_led_command,
    build_internal_led_command,
)
from .telemetry import TelemetryDecoder, TelemetryFrame, parse_frame, unpack_int16_be

__all__ = [
    "CommandCode",
    "SERVICE_UUID",
    "WRITE_CHARACTERISTIC_MARKER",
    "NOTIFY_CHARACTERISTIC_MARKER",
    "ACK_MARKER",
    "build_internal_led_command",
    "build_external_led_command",
    "TelemetryDecoder",
    "TelemetryFrame",
    "parse_frame",
    "unpack_int16_be",
]
