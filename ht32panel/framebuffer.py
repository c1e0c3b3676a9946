"""RGB565 framebuffer for the panel LCD."""

from __future__ import annotations

import string
from collections.abc import Sequence

from .errors import FramebufferSizeError
from .orientation import LCD_HEIGHT, LCD_WIDTH

PIXEL_COUNT = LCD_WIDTH * LCD_HEIGHT


def rgb888_to_rgb565(r: int, g: int, b: int) -> int:
    """Pack 8-bit RGB components into an RGB565 value."""
    return ((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)


def rgb565_to_rgb888(pixel: int) -> tuple[int, int, int]:
    """Expand an RGB565 value into 8-bit RGB components."""
    r = (pixel >> 11) & 0x1F
    g = (pixel >> 5) & 0x3F
    b = pixel & 0x1F
    return (
        ((r << 3) | (r >> 2)) & 0xFF,
        ((g << 2) | (g >> 4)) & 0xFF,
        ((b << 3) | (b >> 2)) & 0xFF,
    )


def parse_hex_color(text: str) -> int | None:
    """Parse "#RRGGBB" or "RRGGBB" into RGB565, or None if malformed."""
    digits = text.lstrip("#")
    if len(digits) != 6 or not all(c in string.hexdigits for c in digits):
        return None
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return rgb888_to_rgb565(r, g, b)


class Framebuffer:
    """Row-major RGB565 pixel buffer, 320x170 by default, initialised to black."""

    def __init__(self, width: int = LCD_WIDTH, height: int = LCD_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.data: list[int] = [0] * (width * height)

    def __repr__(self) -> str:
        return f"Framebuffer(width={self.width}, height={self.height})"

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def resize(self, width: int, height: int) -> None:
        """Change dimensions; the contents are reset to black if they change."""
        if (width, height) != (self.width, self.height):
            self.data = [0] * (width * height)
            self.width = width
            self.height = height

    def clear(self, color: int) -> None:
        self.data[:] = [color] * len(self.data)

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the buffer are ignored."""
        if self._in_bounds(x, y):
            self.data[y * self.width + x] = color

    def get_pixel(self, x: int, y: int) -> int | None:
        """Return one pixel, or None outside the buffer."""
        if self._in_bounds(x, y):
            return self.data[y * self.width + x]
        return None

    def fill_rect(self, x: int, y: int, width: int, height: int, color: int) -> None:
        for py in range(y, y + height):
            for px in range(x, x + width):
                self.set_pixel(px, py, color)

    def copy_from_rgb565(self, data: Sequence[int]) -> None:
        if len(data) != len(self.data):
            raise FramebufferSizeError(len(self.data), len(data))
        self.data[:] = list(data)

    def _copy_from_bytes(self, data: bytes, step: int) -> None:
        expected = len(self.data) * step
        if len(data) != expected:
            raise FramebufferSizeError(expected, len(data))
        raw = bytes(data)
        self.data[:] = [
            rgb888_to_rgb565(raw[i], raw[i + 1], raw[i + 2]) for i in range(0, len(raw), step)
        ]

    def copy_from_rgba8(self, data: bytes) -> None:
        """Load RGBA8 bytes, dropping alpha and converting to RGB565."""
        self._copy_from_bytes(data, 4)

    def copy_from_rgb8(self, data: bytes) -> None:
        """Load RGB8 bytes, converting to RGB565."""
        self._copy_from_bytes(data, 3)

    def extract_region(self, x: int, y: int, width: int, height: int) -> list[int]:
        """Copy a rectangle out; pixels outside the buffer come back as 0."""
        return [
            self.data[py * self.width + px] if self._in_bounds(px, py) else 0
            for py in range(y, y + height)
            for px in range(x, x + width)
        ]

    def rotate_180(self) -> None:
        self.data.reverse()

    def to_rgba8(self) -> bytes:
        """Convert to opaque RGBA8 bytes."""
        out = bytearray()
        for pixel in self.data:
            out.extend(rgb565_to_rgb888(pixel))
            out.append(255)
        return bytes(out)