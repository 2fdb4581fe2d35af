"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from bleak import BleakClient, BleakScanner
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    CharacteristicNotFoundError,
    WriteFailureError,
)
from ..protocol import NOTIFY_CHARACTERISTIC_MARKER, SERVICE_UUID, WRITE_CHARACTERISTIC_MARKER
from .base import DisconnectedCallback, NotificationCallback

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic
    from bleak.backends.device import BLEDevice
    from bleak.backends.service import BleakGATTService

_LOGGER = logging.getLogger(__name__)


def _find_characteristic(
        characteristics: Iterable[BleakGATTCharacteristic],
        marker: str,
) -> BleakGATTCharacteristic | None:
    for characteristic in characteristics:
        if marker in characteristic.uuid.lower():
            return characteristic
    return None


def select_characteristics(
        service: BleakGATTService,
) -> tuple[BleakGATTCharacteristic, BleakGATTCharacteristic | None]:
    """Pick the command and telemetry characteristics of the PawPrint service.

    Args:
        service: Discovered PawPrint GATT service

    Returns:
        (write characteristic, notify characteristic or None)

    Raises:
        CharacteristicNotFoundError: If no write characteristic exists
    """
    characteristics = list(service.characteristics)

    write_char = _find_characteristic(characteristics, WRITE_CHARACTERISTIC_MARKER)
    if write_char is None:
        raise CharacteristicNotFoundError(
            f"Write characteristic (*{WRITE_CHARACTERISTIC_MARKER}*) not found"
        )

    notify_char = _find_characteristic(characteristics, NOTIFY_CHARACTERISTIC_MARKER)
    return write_char, notify_char


class BLEConnection:
    """Manages BLE connection to a PawPrint device.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Context manager for automatic cleanup
    - Notification and link-loss callbacks for the session
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a scanner or Home Assistant
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
        """
        self.mac_address = mac_address
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache

        self._client: BleakClient | None = None
        self._write_characteristic: BleakGATTCharacteristic | None = None
        self._notify_characteristic: BleakGATTCharacteristic | None = None
        self._notification_callback: NotificationCallback | None = None
        self._disconnected_callback: DisconnectedCallback | None = None

    async def __aenter__(self) -> BLEConnection:
        """Connect to device (context manager entry)."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device (context manager exit)."""
        await self.disconnect()

    async def connect(
            self,
            notification_callback: NotificationCallback | None = None,
            disconnected_callback: DisconnectedCallback | None = None,
    ) -> None:
        """Establish BLE connection to device.

        Uses bleak-retry-connector for automatic retry logic and service caching.

        Args:
            notification_callback: Called with every telemetry frame
            disconnected_callback: Called when the link drops

        Raises:
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
            CharacteristicNotFoundError: If the command characteristic is missing
        """
        if self._client and self._client.is_connected:
            return  # Already connected

        self._notification_callback = notification_callback
        self._disconnected_callback = disconnected_callback

        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts
            )

            # Resolve MAC to BLEDevice if not provided
            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )

            if device.name == "47L121000":
                _LOGGER.warning(
                    "Device %s is named %s and may be a Coyote, not a PawPrint",
                    self.mac_address,
                    device.name,
                )

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                disconnected_callback=self._on_disconnected,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

            _LOGGER.debug("Connected to %s", self.mac_address)

            await self._setup_characteristics()

        except BLEConnectionError:
            await self._abort()
            raise
        except asyncio.TimeoutError as e:
            await self._abort()
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except Exception as e:
            await self._abort()
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Disconnect from device."""
        if self._client and self._client.is_connected:
            try:
                _LOGGER.debug("Disconnecting from %s", self.mac_address)
                await self._client.disconnect()
            except Exception as e:
                _LOGGER.warning("Error during disconnect: %s", e)
        self._reset()

    async def _abort(self) -> None:
        """Drop a half-established connection without reporting link loss."""
        self._disconnected_callback = None
        await self.disconnect()

    def _reset(self) -> None:
        self._client = None
        self._write_characteristic = None
        self._notify_characteristic = None

    async def _setup_characteristics(self) -> None:
        """Find command/telemetry characteristics and start notifications.

        Raises:
            BLEConnectionError: If service not found
            CharacteristicNotFoundError: If write characteristic not found
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        service = self._client.services.get_service(SERVICE_UUID)
        if not service:
            raise BLEConnectionError(
                f"Service {SERVICE_UUID} not found"
            )

        self._write_characteristic, self._notify_characteristic = select_characteristics(service)

        if self._notify_characteristic is None:
            _LOGGER.warning(
                "Notify characteristic (*%s*) not found, telemetry disabled",
                NOTIFY_CHARACTERISTIC_MARKER,
            )
            return

        await self._client.start_notify(
            self._notify_characteristic,
            self._on_notification,
        )

        _LOGGER.debug("Notifications started")

    def _on_notification(self, sender, data: bytearray) -> None:
        """Handle incoming BLE notifications.

        Args:
            sender: Characteristic that sent notification
            data: Notification data
        """
        if self._notification_callback is not None:
            self._notification_callback(bytes(data))

    def _on_disconnected(self, client: BleakClient) -> None:
        _LOGGER.debug("Link to %s lost", self.mac_address)
        if self._disconnected_callback is not None:
            self._disconnected_callback()

    async def write_command(self, data: bytes) -> None:
        """Write command to device.

        Args:
            data: Command bytes to write

        Raises:
            BLEConnectionError: If not connected
            WriteFailureError: If the write fails
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        if self._write_characteristic is None:
            raise BLEConnectionError("Write characteristic not set up")

        try:
            await self._client.write_gatt_char(
                self._write_characteristic,
                data,
                response=True,  # Wait for write confirmation
            )
        except Exception as e:
            raise WriteFailureError(f"Write failed: {e}") from e

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected

    @property
    def notifications_enabled(self) -> bool:
        """Check if the telemetry characteristic is subscribed."""
        return self.is_connected and self._notify_characteristic is not None
