"""CPU temperature sensor backed by hwmon or thermal zones."""

from __future__ import annotations

import logging
from pathlib import Path

from .sensor import Sensor

log = logging.getLogger(__name__)

_CPU_HWMON_NAMES = frozenset({"coretemp", "k10temp", "zenpower", "cpu_thermal", "acpitz"})
_CPU_ZONE_KEYWORDS = ("cpu", "core", "x86")
_MAX_THERMAL_ZONES = 10


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text().strip()
    except OSError:
        return None


class TemperatureSensor(Sensor):
    """CPU temperature in degrees Celsius."""

    name = "cpu_temperature"
    unit = "°C"
    min_value = 0.0
    max_value = 120.0

    def __init__(self, temp_path: str | Path | None = None) -> None:
        """Read from ``temp_path`` (millidegrees), or detect a sensor if None."""
        self.temp_path = Path(temp_path) if temp_path is not None else self.detect_temp_path()
        if self.temp_path is not None:
            log.debug("Temperature sensor using: %s", self.temp_path)
        else:
            log.debug("No temperature sensor found")
        self._last_temp: float | None = None

    @staticmethod
    def detect_temp_path(sys_root: str | Path = "/sys") -> Path | None:
        """Find the best CPU temperature file, preferring hwmon over thermal zones."""
        class_dir = Path(sys_root) / "class"

        try:
            hwmons = sorted((class_dir / "hwmon").iterdir())
        except OSError:
            hwmons = []
        for hwmon in hwmons:
            if _read_text(hwmon / "name") in _CPU_HWMON_NAMES:
                candidate = hwmon / "temp1_input"
                if candidate.exists():
                    return candidate

        thermal = class_dir / "thermal"
        for i in range(_MAX_THERMAL_ZONES):
            zone = thermal / f"thermal_zone{i}"
            if not zone.exists():
                continue
            zone_type = _read_text(zone / "type")
            if zone_type is None:
                continue
            zone_type = zone_type.lower()
            if any(k in zone_type for k in _CPU_ZONE_KEYWORDS) or zone_type == "acpitz":
                candidate = zone / "temp"
                if candidate.exists():
                    return candidate

        zone0 = thermal / "thermal_zone0" / "temp"
        return zone0 if zone0.exists() else None

    def temperature(self) -> float | None:
        """The last sampled temperature, or None if unavailable."""
        return self._last_temp

    def _read_temp(self) -> float | None:
        if self.temp_path is None:
            return None
        text = _read_text(self.temp_path)
        if text is None:
            return None
        try:
            return float(text) / 1000.0
        except ValueError:
            return None

    def sample(self) -> float:
        self._last_temp = self._read_temp()
        return self._last_temp if self._last_temp is not None else 0.0