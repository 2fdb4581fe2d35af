"""Software blink pattern for the external LED."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable

from .exceptions import PawPrintError
from .models.enums import ColorId
from .protocol import build_external_led_command

_LOGGER = logging.getLogger(__name__)

FrameWriter = Callable[[bytes], Awaitable[None]]
Sleeper = Callable[[float], Awaitable[None]]


def blink_interval(hz: float) -> float:
    """Seconds each color stays on for a blink at ``hz`` (half a cycle).

    Raises:
        ValueError: If hz is not a positive finite number
    """
    if not math.isfinite(hz) or hz <= 0:
        raise ValueError(f"Blink frequency must be positive and finite, got {hz}")
    return 0.5 / hz


class BlinkScheduler:
    """Alternates the external LED between two colors.

    stop() is synchronous: it bumps a generation counter that every tick
    checks and cancels the running task, so once it returns no further frame
    from the old pattern reaches the writer.
    """

    def __init__(self, write: FrameWriter, *, sleep: Sleeper = asyncio.sleep):
        """Initialize scheduler.

        Args:
            write: Coroutine function sending one frame to the device
            sleep: Coroutine function used to wait between ticks
        """
        self._write = write
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._generation = 0

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, color1: ColorId, color2: ColorId, hz: float) -> None:
        """Start blinking, replacing any running pattern.

        color1 is written immediately, then color2, color1, ... every
        ``0.5 / hz`` seconds.

        Raises:
            ValueError: If hz is not positive
            WriteFailureError: If the initial color1 write fails (the
                pattern keeps running)
        """
        interval = blink_interval(hz)
        self.stop()

        generation = self._generation
        self._task = asyncio.create_task(
            self._run(generation, color1, color2, interval)
        )
        _LOGGER.debug(
            "Blink started: 0x%02x/0x%02x every %.3fs", color1, color2, interval
        )

        await self._write(build_external_led_command(color1))

    def stop(self) -> None:
        """Cancel the pattern. Safe to call when not blinking."""
        self._generation += 1
        if self._task is not None:
            if not self._task.done():
                _LOGGER.debug("Blink stopped")
            self._task.cancel()
            self._task = None

    async def _run(self, generation: int, color1: ColorId, color2: ColorId, interval: float) -> None:
        frames = (build_external_led_command(color2), build_external_led_command(color1))
        index = 0

        while True:
            await self._sleep(interval)
            if generation != self._generation:
                return

            try:
                await self._write(frames[index])
            except PawPrintError as e:
                _LOGGER.warning("Blink write failed: %s", e)

            index ^= 1
