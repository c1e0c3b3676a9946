"""CPU usage sensor backed by /proc/stat."""

from __future__ import annotations

from pathlib import Path

from .sensor import Sensor


class CpuSensor(Sensor):
    """Overall CPU usage in percent, measured between successive samples."""

    name = "cpu_usage"
    unit = "%"
    min_value = 0.0
    max_value = 100.0

    def __init__(self, stat_path: str | Path = "/proc/stat") -> None:
        self.stat_path = Path(stat_path)
        self._last_idle = 0
        self._last_total = 0
        self._last_sample = 0.0

    def _read_stats(self) -> tuple[int, int] | None:
        try:
            lines = self.stat_path.read_text().splitlines()
        except OSError:
            return None
        if not lines:
            return None
        values = [
            int(token) for token in lines[0].split()[1:] if token.isascii() and token.isdigit()
        ]
        if len(values) < 4:
            return None
        return values[3], sum(values)

    def sample(self) -> float:
        stats = self._read_stats()
        if stats is not None:
            idle, total = stats
            if self._last_total > 0:
                idle_delta = max(0, idle - self._last_idle)
                total_delta = max(0, total - self._last_total)
                if total_delta > 0:
                    self._last_sample = 100.0 * (1.0 - idle_delta / total_delta)
            self._last_idle = idle
            self._last_total = total
        return self._last_sample