"""Exceptions raised by the HT32 panel hardware layer."""

from __future__ import annotations


class Ht32Error(Exception):
    """Base class for all panel hardware errors."""


class LcdNotFoundError(Ht32Error):
    """The LCD device was not found or could not be opened."""

    def __str__(self) -> str:
        return "LCD device not found (VID:PID 04D9:FD01)"


class LedNotFoundError(Ht32Error):
    """The LED serial device does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"LED device not found at {self.path}"


class HidError(Ht32Error):
    """USB HID communication failed."""

    def __str__(self) -> str:
        detail = self.args[0] if self.args else ""
        return f"USB HID error: {detail}"


class SerialError(Ht32Error):
    """Serial port communication failed."""

    def __str__(self) -> str:
        detail = self.args[0] if self.args else ""
        return f"Serial port error: {detail}"


class InvalidOrientationError(Ht32Error, ValueError):
    """An orientation name could not be recognised."""

    def __init__(self, value: str) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"Invalid orientation: {self.value}"


class InvalidThemeError(Ht32Error, ValueError):
    """An LED theme value could not be recognised."""

    def __init__(self, value: int) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"Invalid LED theme: {self.value}"


class InvalidLedValueError(Ht32Error, ValueError):
    """An LED intensity or speed was outside 1-5."""

    def __init__(self, value: int) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"Invalid LED value (must be 1-5): {self.value}"


class FramebufferSizeError(Ht32Error, ValueError):
    """Pixel data did not match the framebuffer size."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(expected, actual)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        return f"Framebuffer size mismatch: expected {self.expected}, got {self.actual}"


class ImageError(Ht32Error):
    """Image processing failed."""

    def __str__(self) -> str:
        detail = self.args[0] if self.args else ""
        return f"Image error: {detail}"