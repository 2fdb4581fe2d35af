"""Exceptions raised by the PawPrint driver."""


class PawPrintError(Exception):
    """Base exception for all PawPrint errors."""


class BLEConnectionError(PawPrintError):
    """BLE connection could not be established or was lost."""


class BLETimeoutError(BLEConnectionError):
    """BLE operation timed out."""


class CharacteristicNotFoundError(BLEConnectionError):
    """Required GATT characteristic is missing from the PawPrint service."""


class WriteFailureError(BLEConnectionError):
    """Command frame could not be written. The frame is dropped."""


class NoDeviceSelectedError(PawPrintError):
    """Connect was requested without a device or transport."""


class NotConnectedError(PawPrintError):
    """Command issued while the session is not connected."""


class ProtocolError(PawPrintError):
    """Wire-level protocol problem."""


class InvalidFrameError(ProtocolError):
    """Inbound frame is too short or malformed."""
