"""Per-connection LED/mode state."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ColorId


@dataclass
class SessionState:
    """LED and data-mode state tracked by a connected session.

    ``external_color`` is None while a blink pattern owns the external LED;
    the two are never set at the same time.
    """

    internal_color: ColorId = ColorId.YELLOW
    external_color: ColorId | None = ColorId.OFF
    data_enabled: bool = False
    blinking: bool = False
