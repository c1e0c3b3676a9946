"""LCD device control over the Linux hidraw interface."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import BinaryIO

from .errors import HidError, LcdNotFoundError
from .framebuffer import Framebuffer
from .orientation import LCD_PID, LCD_VID, Orientation
from .protocol import (
    CHUNK_COUNT,
    DATA_SIZE,
    build_heartbeat_packet,
    build_orientation_packet,
    build_redraw_chunk,
    build_refresh_packet,
)

log = logging.getLogger(__name__)

_HIDRAW_CLASS = "/sys/class/hidraw"

# The device exposes several HID interfaces; display data goes to interface 1.
_LCD_INTERFACE = 1

# The device needs time to initialise after being opened.
_INIT_DELAY = 1.0


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text().strip()
    except OSError:
        return None


def _parse_hid_id(uevent: str) -> tuple[int, int] | None:
    for line in uevent.splitlines():
        key, _, value = line.partition("=")
        if key.strip() != "HID_ID":
            continue
        parts = value.strip().split(":")
        if len(parts) != 3:
            return None
        try:
            return int(parts[1], 16), int(parts[2], 16)
        except ValueError:
            return None
    return None


def find_hidraw_devices(
    vendor_id: int = LCD_VID,
    product_id: int = LCD_PID,
    sysfs_root: str | Path = _HIDRAW_CLASS,
) -> list[tuple[str, int]]:
    """List ``(device node, interface number)`` for hidraw devices matching VID:PID.

    The interface number is -1 when it cannot be determined.
    """
    root = Path(sysfs_root)
    try:
        entries = sorted(root.iterdir())
    except OSError:
        return []

    found: list[tuple[str, int]] = []
    for entry in entries:
        device_dir = entry / "device"
        uevent = _read_text(device_dir / "uevent")
        if uevent is None or _parse_hid_id(uevent) != (vendor_id, product_id):
            continue
        interface_text = _read_text(device_dir.resolve().parent / "bInterfaceNumber")
        try:
            interface = int(interface_text, 16) if interface_text else -1
        except ValueError:
            interface = -1
        found.append((f"/dev/{entry.name}", interface))
    return found


class LcdDevice:
    """Controller for the panel LCD, writing packets to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self._orientation = Orientation.LANDSCAPE

    @classmethod
    def open(cls) -> LcdDevice:
        """Find the LCD by VID:PID and open its display interface."""
        devices = find_hidraw_devices()
        if not devices:
            raise LcdNotFoundError()
        for path, interface in devices:
            log.debug("Found HID device: path=%s, interface=%d", path, interface)

        path, interface = next(
            (d for d in devices if d[1] == _LCD_INTERFACE), devices[0]
        )
        try:
            stream = open(path, "r+b", buffering=0)
        except OSError as exc:
            log.debug("Failed to open device: %s", exc)
            raise LcdNotFoundError() from exc

        log.info(
            "LCD device opened (VID:%04X PID:%04X, interface=%d)",
            LCD_VID,
            LCD_PID,
            interface,
        )
        log.debug("Waiting for device initialization (1s cooldown)...")
        time.sleep(_INIT_DELAY)
        return cls(stream)

    @classmethod
    def open_path(cls, path: str | Path) -> LcdDevice:
        """Open the LCD at a specific device node."""
        try:
            stream = open(path, "r+b", buffering=0)
        except OSError as exc:
            raise LcdNotFoundError() from exc
        log.info("LCD device opened at path: %s", path)
        return cls(stream)

    def _write(self, packet: bytes) -> None:
        try:
            written = self._stream.write(packet)
        except OSError as exc:
            raise HidError(str(exc)) from exc
        if written is not None and written != len(packet):
            raise HidError(f"short write: {written} of {len(packet)} bytes")

    def set_orientation(self, orientation: Orientation) -> None:
        packet = build_orientation_packet(orientation.is_portrait())
        with self._lock:
            self._write(packet)
            self._orientation = orientation
        log.debug("Set orientation to %s", orientation)

    def orientation(self) -> Orientation:
        return self._orientation

    def heartbeat_with_time(self, hours: int, minutes: int, seconds: int) -> None:
        packet = build_heartbeat_packet(hours, minutes, seconds)
        with self._lock:
            self._write(packet)
        log.debug("Heartbeat sent: %02d:%02d:%02d", hours, minutes, seconds)

    def redraw(self, framebuffer: Framebuffer) -> None:
        """Send the whole framebuffer to the display."""
        orientation = self._orientation
        data = list(framebuffer.data)
        if orientation.needs_rotation():
            Orientation.rotate_180(data, framebuffer.width, framebuffer.height)

        packets = [
            build_redraw_chunk(index, data, index * (DATA_SIZE // 2))
            for index in range(CHUNK_COUNT)
        ]
        with self._lock:
            for packet in packets:
                self._write(packet)
        log.debug("Full redraw completed (%d chunks)", CHUNK_COUNT)

    def refresh(self, x: int, y: int, width: int, height: int, pixels: list[int]) -> None:
        """Update a rectangular region of the display."""
        data = list(pixels)
        if self._orientation.needs_rotation():
            Orientation.rotate_180(data, width, height)
        packet = build_refresh_packet(x, y, width, height, data)
        with self._lock:
            self._write(packet)
        log.debug("Partial refresh at (%d, %d) %dx%d", x, y, width, height)

    def clear(self, color: int) -> None:
        """Fill the whole display with one RGB565 colour."""
        framebuffer = Framebuffer()
        framebuffer.clear(color)
        self.redraw(framebuffer)

    def heartbeat(self) -> None:
        """Keep the device alive, sending the current UTC time."""
        secs = int(time.time())
        self.heartbeat_with_time((secs // 3600) % 24, (secs // 60) % 60, secs % 60)

    def close(self) -> None:
        with self._lock:
            self._stream.close()

    def __enter__(self) -> LcdDevice:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()