"""Memory usage sensor backed by /proc/meminfo."""

from __future__ import annotations

from pathlib import Path

from .sensor import Sensor


def _read_field(path: Path, key: str) -> int | None:
    try:
        text = path.read_text()
    except OSError:
        return None
    for line in text.splitlines():
        if line.startswith(key):
            parts = line.split()
            if len(parts) >= 2:
                token = parts[1]
                return int(token) if token.isascii() and token.isdigit() else None
    return None


class MemorySensor(Sensor):
    """Used memory in percent; the total is read once at construction."""

    name = "memory"
    unit = "%"
    min_value = 0.0
    max_value = 100.0

    def __init__(self, meminfo_path: str | Path = "/proc/meminfo") -> None:
        self.meminfo_path = Path(meminfo_path)
        self.total_kb = _read_field(self.meminfo_path, "MemTotal:") or 0

    def sample(self) -> float:
        available = _read_field(self.meminfo_path, "MemAvailable:")
        if available is not None and self.total_kb > 0:
            used = max(0, self.total_kb - available)
            return 100.0 * used / self.total_kb
        return 0.0