"""Main PawPrint BLE device class."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .blink import BlinkScheduler, blink_interval
from .exceptions import BLEConnectionError, NoDeviceSelectedError, NotConnectedError, PawPrintError
from .models.enums import ColorId, ConnectionState, EventType
from .models.events import ConnectedEvent, DisconnectedEvent, PawPrintEvent
from .models.state import SessionState
from .models.telemetry import AccelerometerSample, ButtonState, TiltAngles
from .protocol import TelemetryDecoder, build_external_led_command, build_internal_led_command
from .transport import BLEConnection, Transport

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)

EventCallback = Callable[[PawPrintEvent], None]


class PawPrintDevice:
    """PawPrint BLE controller session.

    Main API for driving the LEDs and reading buttons/accelerometer.

    Usage:
        async with PawPrintDevice("AA:BB:CC:DD:EE:FF") as device:
            device.subscribe(print)
            await device.start_data()
            await device.blink_external(ColorId.RED, ColorId.BLUE, hz=2)

    All methods must be called from the event loop that owns the session;
    bleak delivers notification and disconnect callbacks on that loop too.
    """

    def __init__(
            self,
            mac_address: str | None = None,
            ble_device: BLEDevice | None = None,
            *,
            connection: Transport | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize PawPrint device.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a scanner or HA bluetooth integration
            connection: Optional transport to use instead of a BLEConnection
            timeout: BLE connection timeout in seconds (default: 10)
            max_attempts: Connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching (default: True)
        """
        if mac_address is None and ble_device is not None:
            mac_address = ble_device.address
        self.mac_address = mac_address

        if connection is None and mac_address is not None:
            connection = BLEConnection(
                mac_address,
                ble_device,
                timeout=timeout,
                max_attempts=max_attempts,
                use_services_cache=use_services_cache,
            )
        self._connection = connection

        self._connection_state = ConnectionState.DISCONNECTED
        self._state = SessionState()
        self._decoder = TelemetryDecoder()
        self._listeners: list[tuple[EventType | None, EventCallback]] = []
        self._write_lock = asyncio.Lock()
        self._blink = BlinkScheduler(self._send)

    async def __aenter__(self) -> PawPrintDevice:
        """Connect to device."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device."""
        await self.disconnect()

    # --- State ---

    @property
    def connection_state(self) -> ConnectionState:
        return self._connection_state

    @property
    def is_connected(self) -> bool:
        return self._connection_state == ConnectionState.CONNECTED

    @property
    def state(self) -> SessionState:
        """Snapshot of the LED and data-mode state."""
        return dataclasses.replace(self._state)

    @property
    def accel(self) -> AccelerometerSample:
        """Most recent accelerometer sample."""
        return self._decoder.sample

    @property
    def buttons(self) -> ButtonState:
        """Current button state."""
        return self._decoder.buttons

    @property
    def shake(self) -> float:
        """Shake intensity computed from the last two samples."""
        return self._decoder.shake

    @property
    def tilt(self) -> TiltAngles:
        """Tilt angles of the most recent sample, in degrees."""
        return self._decoder.sample.tilt()

    # --- Events ---

    def subscribe(
            self,
            callback: EventCallback,
            event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """Register an event listener.

        Args:
            callback: Called with every matching event
            event_type: Only deliver events of this type (default: all)

        Returns:
            Function that removes the listener
        """
        entry = (event_type, callback)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def _emit(self, event: PawPrintEvent) -> None:
        for event_type, callback in list(self._listeners):
            if event_type is not None and event_type != event.event_type:
                continue
            try:
                callback(event)
            except Exception:
                _LOGGER.exception("Error in %s listener", event.event_type.value)

    # --- Lifecycle ---

    async def connect(self) -> None:
        """Connect to the device and reset the session state.

        Raises:
            NoDeviceSelectedError: If no MAC address, BLEDevice or transport was given
            BLEConnectionError: If the transport fails to connect
        """
        if self._connection is None:
            raise NoDeviceSelectedError("No device selected - pass a MAC address, BLEDevice or connection")

        if self._connection_state == ConnectionState.CONNECTED:
            _LOGGER.debug("Already connected to %s", self.mac_address)
            return
        if self._connection_state != ConnectionState.DISCONNECTED:
            raise BLEConnectionError(
                f"Cannot connect while {self._connection_state.name.lower()}"
            )

        self._connection_state = ConnectionState.CONNECTING
        _LOGGER.info("Connecting to %s", self.mac_address)

        try:
            await self._connection.connect(self._handle_notification, self._handle_link_lost)
        except BaseException:
            self._connection_state = ConnectionState.DISCONNECTED
            raise

        if self._connection_state != ConnectionState.CONNECTING:
            raise BLEConnectionError("Link lost while connecting")

        self._state = SessionState()
        self._decoder.reset()
        self._connection_state = ConnectionState.CONNECTED

        if not self._connection.notifications_enabled:
            _LOGGER.info("Connected to %s without telemetry", self.mac_address)
        else:
            _LOGGER.info("Connected to %s", self.mac_address)

        self._emit(ConnectedEvent())

    async def disconnect(self) -> None:
        """Turn the LEDs off and data mode off, then disconnect.

        LED/data teardown is best-effort; failures are logged and the
        disconnect still happens.
        """
        if self._connection_state != ConnectionState.CONNECTED:
            return

        self._connection_state = ConnectionState.DISCONNECTING
        _LOGGER.info("Disconnecting from %s", self.mac_address)

        self._state.data_enabled = False
        await self._send_best_effort(
            build_internal_led_command(self._state.internal_color, False),
            "stop data",
        )

        self._stop_blink()

        self._state.external_color = ColorId.OFF
        await self._send_best_effort(build_external_led_command(ColorId.OFF), "external LED off")

        try:
            await self._connection.disconnect()
        finally:
            self._finish_disconnect()

    def _handle_link_lost(self) -> None:
        if self._connection_state == ConnectionState.DISCONNECTING:
            # Our own disconnect; disconnect() finishes the teardown
            return
        if self._connection_state == ConnectionState.DISCONNECTED:
            return
        _LOGGER.info("Link to %s lost", self.mac_address)
        self._finish_disconnect()

    def _finish_disconnect(self) -> None:
        if self._connection_state == ConnectionState.DISCONNECTED:
            return
        self._stop_blink()
        self._decoder.reset()
        self._connection_state = ConnectionState.DISCONNECTED
        self._emit(DisconnectedEvent())

    def _handle_notification(self, data: bytes) -> None:
        if self._connection_state != ConnectionState.CONNECTED:
            _LOGGER.debug("Dropping notification in state %s", self._connection_state.name)
            return
        for event in self._decoder.decode(data):
            self._emit(event)

    # --- Commands ---

    def _require_connected(self) -> None:
        if self._connection_state != ConnectionState.CONNECTED:
            raise NotConnectedError(
                f"Device not connected (state: {self._connection_state.name})"
            )

    async def _send(self, frame: bytes) -> None:
        """Write one frame. Frames go out strictly in call order.

        Raises:
            WriteFailureError: If the transport write fails
        """
        async with self._write_lock:
            _LOGGER.debug("TX %s", frame.hex())
            await self._connection.write_command(frame)

    async def _send_best_effort(self, frame: bytes, step: str) -> None:
        try:
            await self._send(frame)
        except PawPrintError as e:
            _LOGGER.warning("Teardown step '%s' failed: %s", step, e)

    def _stop_blink(self) -> None:
        self._blink.stop()
        self._state.blinking = False

    async def set_internal_color(self, color: ColorId) -> None:
        """Set the internal LED color (re-sends the current data flag)."""
        self._require_connected()
        self._state.internal_color = color
        await self._send(build_internal_led_command(color, self._state.data_enabled))

    async def set_external_color(self, color: ColorId) -> None:
        """Set the external LED color, cancelling any blink pattern."""
        self._require_connected()
        self._stop_blink()
        self._state.external_color = color
        await self._send(build_external_led_command(color))

    async def start_data(self) -> None:
        """Enable sensor streaming."""
        self._require_connected()
        self._state.data_enabled = True
        await self.set_internal_color(self._state.internal_color)

    async def stop_data(self) -> None:
        """Disable sensor streaming."""
        self._require_connected()
        self._state.data_enabled = False
        await self.set_internal_color(self._state.internal_color)

    async def blink_external(self, color1: ColorId, color2: ColorId, hz: float) -> None:
        """Blink the external LED between two colors.

        Args:
            color1: Color shown first
            color2: Alternate color
            hz: Full cycles per second, must be positive and finite

        Raises:
            ValueError: If hz is not a positive finite number
        """
        self._require_connected()
        blink_interval(hz)
        self._state.external_color = None
        self._state.blinking = True
        await self._blink.start(color1, color2, hz)

    async def stop_blink(self) -> None:
        """Stop the blink pattern. The LED keeps its last color."""
        self._require_connected()
        self._stop_blink()
