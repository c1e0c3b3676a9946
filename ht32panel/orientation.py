"""Display orientation and panel constants.

The hardware supports only landscape (0x01) and portrait (0x02); the
upside-down variants are produced by rotating pixel data in software.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from enum import Enum

from .errors import InvalidOrientationError

LCD_WIDTH = 320
LCD_HEIGHT = 170

LCD_VID = 0x04D9
LCD_PID = 0xFD01

_ALIASES = {
    "landscape": "landscape",
    "portrait": "portrait",
    "landscape-upside-down": "landscape-upside-down",
    "landscape_upside_down": "landscape-upside-down",
    "portrait-upside-down": "portrait-upside-down",
    "portrait_upside_down": "portrait-upside-down",
}


class Orientation(Enum):
    """Logical display orientation; LANDSCAPE is the default."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    LANDSCAPE_UPSIDE_DOWN = "landscape-upside-down"
    PORTRAIT_UPSIDE_DOWN = "portrait-upside-down"

    def hardware_byte(self) -> int:
        """Byte sent to the device to select this orientation."""
        return 0x02 if self.is_portrait() else 0x01

    def needs_rotation(self) -> bool:
        """True if the frame must be rotated 180 degrees in software."""
        return self in (Orientation.LANDSCAPE_UPSIDE_DOWN, Orientation.PORTRAIT_UPSIDE_DOWN)

    def is_portrait(self) -> bool:
        return self in (Orientation.PORTRAIT, Orientation.PORTRAIT_UPSIDE_DOWN)

    def dimensions(self) -> tuple[int, int]:
        """(width, height) of the display in this orientation."""
        if self.is_portrait():
            return (LCD_HEIGHT, LCD_WIDTH)
        return (LCD_WIDTH, LCD_HEIGHT)

    @staticmethod
    def rotate_180(buffer: MutableSequence[int], width: int, height: int) -> None:
        """Rotate a row-major buffer 180 degrees in place."""
        buffer.reverse()

    @classmethod
    def parse(cls, text: str) -> Orientation:
        """Parse an orientation name, case-insensitively."""
        canonical = _ALIASES.get(text.lower())
        if canonical is None:
            raise InvalidOrientationError(text)
        return cls(canonical)

    def __str__(self) -> str:
        return self.value