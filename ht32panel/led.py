"""LED strip control over a serial port."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Sequence
from enum import IntEnum

import serial

from .errors import InvalidLedValueError, InvalidThemeError, LedNotFoundError, SerialError

log = logging.getLogger(__name__)

SIGNATURE_BYTE = 0xFA
BAUD_RATE = 10000
# The device needs bytes written one at a time with a pause between them.
BYTE_DELAY = 0.005


class LedTheme(IntEnum):
    """LED effect; BREATHING is the default."""

    RAINBOW = 0x01
    BREATHING = 0x02
    COLORS = 0x03
    OFF = 0x04
    AUTO = 0x05

    @classmethod
    def from_byte(cls, value: int) -> LedTheme:
        try:
            return cls(value)
        except ValueError:
            raise InvalidThemeError(value) from None

    @classmethod
    def parse(cls, text: str) -> LedTheme:
        """Parse a theme name, case-insensitively."""
        try:
            return cls[text.upper()]
        except KeyError:
            raise InvalidThemeError(0) from None

    def __str__(self) -> str:
        return self.name.lower()


class LedDevice:
    """Controller for the LED strip attached to a serial port."""

    def __init__(self, port_path: str) -> None:
        self.port_path = port_path

    def __repr__(self) -> str:
        return f"LedDevice({self.port_path!r})"

    @staticmethod
    def fix_value(value: int) -> int:
        """Invert an intensity or speed in 1-5 into the device's scale."""
        if not 1 <= value <= 5:
            raise InvalidLedValueError(value)
        return 6 - value

    @staticmethod
    def checksum(packet: Sequence[int]) -> int:
        return sum(packet) & 0xFF

    @staticmethod
    def build_packet(theme: LedTheme | int, intensity: int, speed: int) -> bytes:
        """Build the 5-byte command packet, checksum last."""
        theme = LedTheme.from_byte(int(theme))
        base = bytes(
            (SIGNATURE_BYTE, theme, LedDevice.fix_value(intensity), LedDevice.fix_value(speed))
        )
        return base + bytes((LedDevice.checksum(base),))

    def _open_port(self) -> serial.Serial:
        try:
            return serial.Serial(
                self.port_path,
                baudrate=BAUD_RATE,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
            )
        except (serial.SerialException, OSError) as exc:
            if not os.path.exists(self.port_path):
                raise LedNotFoundError(self.port_path) from exc
            raise SerialError(str(exc)) from exc

    async def _send_packet(self, packet: bytes) -> None:
        port = await asyncio.to_thread(self._open_port)
        log.debug("Sending LED packet to %s: %s", self.port_path, packet.hex(" "))
        try:
            for i, byte in enumerate(packet):
                port.write(bytes((byte,)))
                port.flush()
                if i < len(packet) - 1:
                    await asyncio.sleep(BYTE_DELAY)
        except (serial.SerialException, OSError) as exc:
            raise SerialError(str(exc)) from exc
        finally:
            port.close()
        log.debug("LED packet sent successfully")

    async def set_theme(self, theme: LedTheme | int, intensity: int, speed: int) -> None:
        packet = self.build_packet(theme, intensity, speed)
        await self._send_packet(packet)
        log.info(
            "LED set to %s (intensity: %d, speed: %d)",
            LedTheme.from_byte(int(theme)),
            intensity,
            speed,
        )

    async def set_rainbow(self, intensity: int, speed: int) -> None:
        await self.set_theme(LedTheme.RAINBOW, intensity, speed)

    async def set_breathing(self, intensity: int, speed: int) -> None:
        await self.set_theme(LedTheme.BREATHING, intensity, speed)

    async def set_colors(self, intensity: int, speed: int) -> None:
        await self.set_theme(LedTheme.COLORS, intensity, speed)

    async def set_auto(self, intensity: int, speed: int) -> None:
        await self.set_theme(LedTheme.AUTO, intensity, speed)

    async def set_off(self) -> None:
        """Turn the LEDs off; the device expects raw values of 5 here."""
        base = bytes((SIGNATURE_BYTE, LedTheme.OFF, 0x05, 0x05))
        await self._send_packet(base + bytes((self.checksum(base),)))
        log.info("LED turned off")