"""Connect to a PawPrint, stream telemetry and blink the external LED.

Usage:
    uv run python examples/monitor_pawprint.py AA:BB:CC:DD:EE:FF --duration 30
    uv run python examples/monitor_pawprint.py AA:BB:CC:DD:EE:FF --blink red blue --hz 2
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime

from pawprint import (
    ButtonDownEvent,
    ButtonUpEvent,
    ColorId,
    DataEvent,
    PawPrintDevice,
    PawPrintEvent,
)


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _color(name: str) -> ColorId:
    try:
        return ColorId[name.upper()]
    except KeyError as e:
        raise argparse.ArgumentTypeError(
            f"unknown color {name!r} (choose from {', '.join(c.name.lower() for c in ColorId)})"
        ) from e


def _make_printer(device: PawPrintDevice, min_shake: float):
    def _print_event(event: PawPrintEvent) -> None:
        if isinstance(event, (ButtonDownEvent, ButtonUpEvent)):
            print(f"[{_timestamp()}] {event.event_type.value} {event.button.name}")
        elif isinstance(event, DataEvent):
            if event.shake < min_shake:
                return
            tilt = device.tilt
            print(
                f"[{_timestamp()}] accel=({event.accel.x}, {event.accel.y}, {event.accel.z}) "
                f"shake={event.shake:.0f} roll={tilt.roll:.1f} pitch={tilt.pitch:.1f}"
            )
        else:
            print(f"[{_timestamp()}] {event.event_type.value}")

    return _print_event


async def _run(args: argparse.Namespace) -> None:
    async with PawPrintDevice(args.address, timeout=args.timeout) as device:
        device.subscribe(_make_printer(device, args.min_shake))

        await device.set_internal_color(args.internal)
        await device.start_data()
        if args.blink:
            await device.blink_external(args.blink[0], args.blink[1], args.hz)

        await asyncio.sleep(args.duration)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("address", help="PawPrint MAC address")
    parser.add_argument("--duration", type=float, default=30.0, help="Seconds to stay connected")
    parser.add_argument("--timeout", type=float, default=10.0, help="Connection timeout in seconds")
    parser.add_argument("--internal", type=_color, default=ColorId.YELLOW, help="Internal LED color")
    parser.add_argument("--blink", type=_color, nargs=2, metavar=("COLOR1", "COLOR2"))
    parser.add_argument("--hz", type=float, default=2.0, help="Blink frequency")
    parser.add_argument("--min-shake", type=float, default=0.0, help="Hide samples below this shake")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
