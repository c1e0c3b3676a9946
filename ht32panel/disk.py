"""Disk I/O sensor backed by /proc/diskstats."""

from __future__ import annotations

import time
from collections import deque
from pathlib import Path

from .sensor import Sensor
from .sysdata import HISTORY_SIZE

_DISKSTATS_PATH = "/proc/diskstats"
_BLOCK_ROOT = "/sys/block"
_CANDIDATES = ("nvme0n1", "sda", "vda", "xvda", "mmcblk0")
_FALLBACK_DEVICE = "sda"
_SECTOR_SIZE = 512.0


def _parse_count(token: str) -> int | None:
    return int(token) if token.isascii() and token.isdigit() else None


class DiskSensor(Sensor):
    """Read and write rates of one block device, in bytes per second."""

    unit = "KB/s"
    min_value = 0.0
    max_value = 1_000_000.0

    def __init__(self, device: str, diskstats_path: str | Path = _DISKSTATS_PATH) -> None:
        self.name = f"disk_{device}"
        self.device = device
        self.diskstats_path = Path(diskstats_path)
        self.read_rate = 0.0
        self.write_rate = 0.0
        self.history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self.read_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self.write_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self._last_read_sectors = 0
        self._last_write_sectors = 0
        self._last_time: float | None = None

    def __repr__(self) -> str:
        return f"DiskSensor({self.device!r})"

    @classmethod
    def auto(cls) -> DiskSensor:
        """A sensor on the detected primary disk, or "sda"."""
        return cls(cls.detect_primary_disk() or _FALLBACK_DEVICE)

    @staticmethod
    def detect_primary_disk(block_root: str | Path = _BLOCK_ROOT) -> str | None:
        """The first of the usual primary disk names present under ``block_root``."""
        root = Path(block_root)
        return next((name for name in _CANDIDATES if (root / name).exists()), None)

    def _read_stats(self) -> tuple[int, int] | None:
        try:
            text = self.diskstats_path.read_text()
        except OSError:
            return None
        for line in text.splitlines():
            parts = line.split()
            if len(parts) >= 10 and parts[2] == self.device:
                read_sectors = _parse_count(parts[5])
                write_sectors = _parse_count(parts[9])
                if read_sectors is None or write_sectors is None:
                    return None
                return read_sectors, write_sectors
        return None

    def sample(self) -> float:
        """Update rates and history; return the combined rate in KB/s."""
        stats = self._read_stats()
        if stats is not None:
            read_sectors, write_sectors = stats
            now = time.monotonic()
            if self._last_time is not None:
                elapsed = now - self._last_time
                if elapsed > 0:
                    read_delta = max(0, read_sectors - self._last_read_sectors)
                    write_delta = max(0, write_sectors - self._last_write_sectors)
                    self.read_rate = read_delta * _SECTOR_SIZE / elapsed
                    self.write_rate = write_delta * _SECTOR_SIZE / elapsed
                    self.history.append(self.read_rate + self.write_rate)
                    self.read_history.append(self.read_rate)
                    self.write_history.append(self.write_rate)
            self._last_read_sectors = read_sectors
            self._last_write_sectors = write_sectors
            self._last_time = now
        return (self.read_rate + self.write_rate) / 1024.0