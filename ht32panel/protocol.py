"""LCD wire protocol: packet layout and encoding.

Every packet is 4105 bytes: one HID report byte, an 8-byte header
starting with the 0x55 signature, and a 4096-byte payload.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

BUFFER_SIZE = 4105
HEADER_SIZE = 8
DATA_SIZE = 4096
REPORT_SIZE = 1
LCD_SIGNATURE = 0x55
CHUNK_COUNT = 27
FINAL_CHUNK_SIZE = 2304

_DATA_START = REPORT_SIZE + HEADER_SIZE


class Command(IntEnum):
    CONFIG = 0xA1
    REFRESH = 0xA2
    REDRAW = 0xA3


class SubCommand(IntEnum):
    ORIENTATION = 0xF1
    SET_TIME = 0xF2


class RedrawPhase(IntEnum):
    START = 0xF0
    CONTINUE = 0xF1
    END = 0xF2


def _new_packet(command: Command) -> bytearray:
    buffer = bytearray(BUFFER_SIZE)
    buffer[1] = LCD_SIGNATURE
    buffer[2] = command
    return buffer


def build_orientation_packet(portrait: bool) -> bytes:
    """Packet selecting landscape (0x01) or portrait (0x02)."""
    buffer = _new_packet(Command.CONFIG)
    buffer[3] = SubCommand.ORIENTATION
    buffer[4] = 0x02 if portrait else 0x01
    return bytes(buffer)


def build_heartbeat_packet(hours: int, minutes: int, seconds: int) -> bytes:
    """Set-time packet that also keeps the device awake."""
    buffer = _new_packet(Command.CONFIG)
    buffer[3] = SubCommand.SET_TIME
    buffer[4:7] = bytes((hours, minutes, seconds))
    return bytes(buffer)


def build_refresh_packet(
    x: int, y: int, width: int, height: int, pixel_data: Sequence[int]
) -> bytes:
    """Partial refresh of a rectangle; pixels that do not fit are dropped."""
    buffer = _new_packet(Command.REFRESH)
    buffer[3:5] = (x & 0xFFFF).to_bytes(2, "little")
    buffer[5:7] = (y & 0xFFFF).to_bytes(2, "little")
    buffer[7] = width
    buffer[8] = height
    for i, pixel in enumerate(pixel_data):
        offset = _DATA_START + i * 2
        if offset + 1 >= BUFFER_SIZE:
            break
        buffer[offset : offset + 2] = (pixel & 0xFFFF).to_bytes(2, "big")
    return bytes(buffer)


def build_redraw_chunk(
    chunk_index: int, pixel_data: Sequence[int], offset_in_image: int
) -> bytes:
    """One chunk of a full-screen redraw, starting at pixel ``offset_in_image``."""
    buffer = _new_packet(Command.REDRAW)
    last = chunk_index == CHUNK_COUNT - 1
    if chunk_index == 0:
        phase = RedrawPhase.START
    elif last:
        phase = RedrawPhase.END
    else:
        phase = RedrawPhase.CONTINUE
    buffer[3] = phase
    buffer[4] = (chunk_index + 1) & 0xFF

    byte_offset = offset_in_image * 2
    buffer[5] = 0
    buffer[6] = (byte_offset >> 8) & 0xFF
    buffer[7] = byte_offset & 0xFF

    chunk_size = FINAL_CHUNK_SIZE if last else DATA_SIZE
    buffer[8] = (chunk_size >> 8) & 0xFF
    buffer[9] = chunk_size & 0xFF

    pixels = pixel_data[offset_in_image : offset_in_image + chunk_size // 2]
    for i, pixel in enumerate(pixels):
        offset = _DATA_START + i * 2
        buffer[offset : offset + 2] = (pixel & 0xFFFF).to_bytes(2, "big")
    return bytes(buffer)