"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import pytest

from pawprint.exceptions import WriteFailureError


async def settle(rounds: int = 10) -> None:
    """Give pending tasks a chance to run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class ManualSleep:
    """Stand-in for asyncio.sleep that only returns when told to."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self._pending: list[asyncio.Future[None]] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        await future

    @property
    def waiting(self) -> int:
        return sum(1 for future in self._pending if not future.done())

    def release(self) -> bool:
        """Finish the oldest live sleep without running the loop."""
        while self._pending:
            future = self._pending.pop(0)
            if not future.done():
                future.set_result(None)
                return True
        return False

    async def advance(self) -> bool:
        """Finish the oldest live sleep and let the tick run."""
        await settle()
        released = self.release()
        await settle()
        return released


class FakeConnection:
    """In-memory transport recording written frames."""

    def __init__(self) -> None:
        self.written: list[bytes] = []
        self.connected = False
        self.notifications = True
        self.connect_error: Exception | None = None
        self.fail_writes = False
        self.drop_link_on_disconnect = False
        self.drop_link_during_connect = False
        self.connect_gate: asyncio.Event | None = None
        self.write_gate: asyncio.Event | None = None
        self.disconnect_calls = 0
        self.notification_callback = None
        self.disconnected_callback = None

    @property
    def is_connected(self) -> bool:
        return self.connected

    @property
    def notifications_enabled(self) -> bool:
        return self.connected and self.notifications

    async def connect(self, notification_callback, disconnected_callback) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.notification_callback = notification_callback
        self.disconnected_callback = disconnected_callback
        if self.connect_gate is not None:
            await self.connect_gate.wait()
        if self.drop_link_during_connect:
            self.disconnected_callback()
            return
        self.connected = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False
        if self.drop_link_on_disconnect:
            self.disconnected_callback()

    async def write_command(self, data: bytes) -> None:
        if self.fail_writes:
            raise WriteFailureError("Write failed: simulated")
        if self.write_gate is not None:
            await self.write_gate.wait()
        self.written.append(data)

    def notify(self, data: bytes) -> None:
        self.notification_callback(data)

    def drop_link(self) -> None:
        self.connected = False
        self.disconnected_callback()


@pytest.fixture
def manual_sleep() -> ManualSleep:
    return ManualSleep()


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()
