"""System data aggregated from all sensors, with display formatting."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

HISTORY_SIZE = 60

_MIN_GRAPH_SCALE = 1_000_000.0

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_ABBREV = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_WEEKDAY_ABBREV = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class IpDisplayPreference(Enum):
    """Which address of the monitored interface to display."""

    IPV6_GUA = "ipv6-gua"
    IPV6_LLA = "ipv6-lla"
    IPV6_ULA = "ipv6-ula"
    IPV4 = "ipv4"

    @classmethod
    def all(cls) -> list[IpDisplayPreference]:
        return list(cls)

    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, text: str) -> IpDisplayPreference:
        """Parse a preference name or alias, case-insensitively."""
        preference = _IP_ALIASES.get(text.lower())
        if preference is None:
            raise ValueError(f"Unknown IP display preference: {text}")
        return preference

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES = {
    IpDisplayPreference.IPV6_GUA: "IPv6 GUA",
    IpDisplayPreference.IPV6_LLA: "IPv6 LLA",
    IpDisplayPreference.IPV6_ULA: "IPv6 ULA",
    IpDisplayPreference.IPV4: "IPv4",
}

_IP_ALIASES = {
    **dict.fromkeys(("ipv6-gua", "ipv6_gua", "ipv6gua", "gua"), IpDisplayPreference.IPV6_GUA),
    **dict.fromkeys(("ipv6-lla", "ipv6_lla", "ipv6lla", "lla"), IpDisplayPreference.IPV6_LLA),
    **dict.fromkeys(("ipv6-ula", "ipv6_ula", "ipv6ula", "ula"), IpDisplayPreference.IPV6_ULA),
    **dict.fromkeys(("ipv4", "v4"), IpDisplayPreference.IPV4),
}


def _scaled(value: float, units: tuple[str, str, str, str]) -> str:
    giga, mega, kilo, base = units
    if value >= 1_000_000_000.0:
        return f"{value / 1_000_000_000.0:.1f}{giga}"
    if value >= 1_000_000.0:
        return f"{value / 1_000_000.0:.1f}{mega}"
    if value >= 1_000.0:
        return f"{value / 1_000.0:.1f}{kilo}"
    return f"{value:.0f}{base}"


@dataclass
class SystemData:
    """A snapshot of all sampled system metrics."""

    hostname: str = ""
    time: str = ""
    hour: int = 0
    minute: int = 0
    day: int = 0
    month: int = 0
    year: int = 0
    day_of_week: int = 0
    uptime: str = ""
    cpu_percent: float = 0.0
    cpu_temp: float | None = None
    ram_percent: float = 0.0
    disk_read_rate: float = 0.0
    disk_write_rate: float = 0.0
    disk_history: deque[float] = field(default_factory=deque)
    disk_read_history: deque[float] = field(default_factory=deque)
    disk_write_history: deque[float] = field(default_factory=deque)
    net_interface: str = ""
    net_rx_rate: float = 0.0
    net_tx_rate: float = 0.0
    net_history: deque[float] = field(default_factory=deque)
    net_rx_history: deque[float] = field(default_factory=deque)
    net_tx_history: deque[float] = field(default_factory=deque)
    display_ip: str | None = None

    def format_time(self, fmt: str) -> str:
        """Format the time as "digital-12h", "analogue" (empty) or 24-hour by default."""
        if fmt == "digital-12h":
            if self.hour == 0:
                hour_12, am_pm = 12, "AM"
            elif self.hour < 12:
                hour_12, am_pm = self.hour, "AM"
            elif self.hour == 12:
                hour_12, am_pm = 12, "PM"
            else:
                hour_12, am_pm = self.hour - 12, "PM"
            return f"{hour_12:2d}:{self.minute:02d} {am_pm}"
        if fmt == "analogue":
            return ""
        return f"{self.hour:02d}:{self.minute:02d}"

    def format_date(self, fmt: str) -> str | None:
        """Format the date; None for "hidden" or an unknown format."""
        month_idx = min(max(self.month - 1, 0), 11)
        weekday_idx = min(self.day_of_week, 6)
        if fmt == "iso":
            return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        if fmt == "us":
            return f"{self.month:02d}/{self.day:02d}/{self.year:04d}"
        if fmt == "eu":
            return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"
        if fmt == "short":
            return f"{_MONTH_ABBREV[month_idx]} {self.day}"
        if fmt == "long":
            return f"{_MONTH_NAMES[month_idx]} {self.day}, {self.year}"
        if fmt == "weekday":
            return f"{_WEEKDAY_ABBREV[weekday_idx]}, {_MONTH_ABBREV[month_idx]} {self.day}"
        return None

    @staticmethod
    def format_rate(bytes_per_sec: float) -> str:
        """Human-readable byte rate, e.g. "1.2 MB/s"."""
        return _scaled(bytes_per_sec, (" GB/s", " MB/s", " KB/s", " B/s"))

    @staticmethod
    def format_rate_compact(bytes_per_sec: float) -> str:
        """Compact byte rate, e.g. "1.2M"."""
        return _scaled(bytes_per_sec, ("G", "M", "K", "B"))

    @staticmethod
    def compute_graph_scale(history: Iterable[float]) -> float:
        """A "nice" graph ceiling (1x, 2x or 5x a power of ten), at least 1 MB/s."""
        max_val = max(0.0, max(history, default=0.0))
        if max_val <= _MIN_GRAPH_SCALE:
            return _MIN_GRAPH_SCALE

        magnitude = 10.0 ** math.floor(math.log10(max_val))
        normalized = max_val / magnitude
        if normalized <= 1.0:
            multiplier = 1.0
        elif normalized <= 2.0:
            multiplier = 2.0
        elif normalized <= 5.0:
            multiplier = 5.0
        else:
            multiplier = 10.0
        return max(magnitude * multiplier, _MIN_GRAPH_SCALE)