"""Interface the session needs from a transport."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

NotificationCallback = Callable[[bytes], None]
DisconnectedCallback = Callable[[], None]


class Transport(Protocol):
    """Byte-level link to one PawPrint device."""

    @property
    def is_connected(self) -> bool: ...

    @property
    def notifications_enabled(self) -> bool: ...

    async def connect(
            self,
            notification_callback: NotificationCallback,
            disconnected_callback: DisconnectedCallback,
    ) -> None:
        """Connect and start notifications.

        Raises:
            BLEConnectionError: If connection or service discovery fails
            CharacteristicNotFoundError: If the command characteristic is missing
        """
        ...

    async def disconnect(self) -> None: ...

    async def write_command(self, data: bytes) -> None:
        """Write one command frame.

        Raises:
            BLEConnectionError: If not connected
            WriteFailureError: If the write fails
        """
        ...
