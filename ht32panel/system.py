"""Hostname, uptime and local time."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

_HOSTNAME_PATHS = ("/etc/hostname", "/proc/sys/kernel/hostname")


def format_uptime(seconds: int) -> str:
    """Format seconds as "Xd Yh Zm", dropping leading zero units."""
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


class SystemInfo:
    """Provides the hostname, uptime and local time."""

    def __init__(
        self,
        hostname_paths: Sequence[str | Path] = _HOSTNAME_PATHS,
        uptime_path: str | Path = "/proc/uptime",
    ) -> None:
        self.hostname_paths = tuple(Path(p) for p in hostname_paths)
        self.uptime_path = Path(uptime_path)

    def hostname(self) -> str:
        """The first readable hostname file, trimmed, or "unknown"."""
        for path in self.hostname_paths:
            try:
                return path.read_text().strip()
            except OSError:
                continue
        return "unknown"

    def time(self) -> str:
        hour, minute, *_ = self.time_components()
        return f"{hour:02d}:{minute:02d}"

    def time_components(self) -> tuple[int, int, int, int, int, int, int]:
        """(hour, minute, day, month, year, day_of_week, timestamp) in local time.

        Day of week counts from Sunday = 0.
        """
        now = datetime.now().astimezone()
        day_of_week = (now.weekday() + 1) % 7
        return (
            now.hour,
            now.minute,
            now.day,
            now.month,
            now.year,
            day_of_week,
            int(now.timestamp()),
        )

    def uptime(self) -> str:
        return format_uptime(self.uptime_seconds())

    def uptime_seconds(self) -> int:
        """Whole seconds since boot, or 0 if unavailable."""
        try:
            first = self.uptime_path.read_text().split()[0]
            value = float(first)
        except (OSError, IndexError, ValueError):
            return 0
        if not math.isfinite(value) or value < 0:
            return 0
        return int(value)