"""BLE protocol commands for PawPrint devices."""

from __future__ import annotations

from enum import IntEnum


class CommandCode(IntEnum):
    """Leading byte of outbound command frames."""

    INTERNAL_LED = 0x53   # Internal LED color + data streaming flag
    EXTERNAL_LED = 0x70   # External LED color


# Protocol constants
SERVICE_UUID = "0000180c-0000-1000-8000-00805f9b34fb"
WRITE_CHARACTERISTIC_MARKER = "150a"   # Substring of the command characteristic UUID
NOTIFY_CHARACTERISTIC_MARKER = "150b"  # Substring of the telemetry characteristic UUID

# Inbound frames starting with this byte acknowledge a command
ACK_MARKER = 0x51

DATA_ENABLED = 0xFF
DATA_DISABLED = 0x00


def build_internal_led_command(color: int, data_enabled: bool) -> bytes:
    """Build command to set the internal LED color.

    The same frame also switches sensor streaming on or off, so the data flag
    has to be re-sent with every internal color change.

    Args:
        color: ColorId value
        data_enabled: Whether the device should stream sensor notifications

    Returns:
        Command bytes: [0x53][color][0xFF or 0x00]
    """
    flag = DATA_ENABLED if data_enabled else DATA_DISABLED
    return bytes([CommandCode.INTERNAL_LED, color, flag])


def build_external_led_command(color: int) -> bytes:
    """Build command to set the external LED color.

    Args:
        color: ColorId value

    Returns:
        Command bytes: [0x70][color]
    """
    return bytes([CommandCode.EXTERNAL_LED, color])
