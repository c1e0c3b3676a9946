"""Network throughput sensor with per-interface address lookup."""

from __future__ import annotations

import ipaddress
import logging
import socket
import time
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import psutil

from .sensor import Sensor
from .sysdata import HISTORY_SIZE

log = logging.getLogger(__name__)

_NET_ROOT = "/sys/class/net"
_ROUTE_PATH = "/proc/net/route"
_FALLBACK_INTERFACE = "eth0"
_IP_CACHE_SECONDS = 30


@dataclass
class IpAddresses:
    """The first address of each kind found on an interface."""

    ipv4: str | None = None
    ipv6_gua: str | None = None
    ipv6_lla: str | None = None
    ipv6_ula: str | None = None


def classify_addresses(addresses: Iterable[str]) -> IpAddresses:
    """Sort address strings into IPv4, IPv6 link-local, unique-local and global.

    Only the first address of each kind is kept; unparseable strings and
    IPv6 addresses of other kinds are ignored. Zone suffixes ("%eth0") are
    dropped.
    """
    result = IpAddresses()
    for text in addresses:
        try:
            addr = ipaddress.ip_address(text.split("%", 1)[0])
        except ValueError:
            continue
        if addr.version == 4:
            if result.ipv4 is None:
                result.ipv4 = str(addr)
            continue

        first, second = addr.packed[0], addr.packed[1]
        if first == 0xFE and (second & 0xC0) == 0x80:
            if result.ipv6_lla is None:
                result.ipv6_lla = str(addr)
        elif first in (0xFC, 0xFD):
            if result.ipv6_ula is None:
                result.ipv6_ula = str(addr)
        elif (first & 0xE0) == 0x20:
            if result.ipv6_gua is None:
                result.ipv6_gua = str(addr)
    return result


def _interface_addresses(interface: str) -> IpAddresses:
    try:
        entries = psutil.net_if_addrs().get(interface, [])
    except OSError:
        return IpAddresses()
    return classify_addresses(
        entry.address
        for entry in entries
        if entry.family in (socket.AF_INET, socket.AF_INET6)
    )


def _is_virtual(name: str) -> bool:
    return name == "lo" or name.startswith(("veth", "docker"))


def _real_interfaces(net_root: Path) -> list[str]:
    try:
        entries = net_root.iterdir()
        names = sorted(entry.name for entry in entries)
    except OSError:
        return []
    return [
        name
        for name in names
        if not _is_virtual(name) and (net_root / name / "statistics" / "rx_bytes").exists()
    ]


def _read_counter(path: Path) -> int | None:
    try:
        text = path.read_text().strip()
    except OSError:
        return None
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


class NetworkSensor(Sensor):
    """Receive and transmit rates of one interface, in bytes per second."""

    unit = "KB/s"
    min_value = 0.0
    max_value = 1_000_000.0

    def __init__(self, interface: str, net_root: str | Path = _NET_ROOT) -> None:
        self.net_root = Path(net_root)
        self._reset(interface)

    def __repr__(self) -> str:
        return f"NetworkSensor({self.interface!r})"

    def _reset(self, interface: str) -> None:
        self.name = f"network_{interface}"
        self.interface = interface
        self.rx_rate = 0.0
        self.tx_rate = 0.0
        self.history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self.rx_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self.tx_history: deque[float] = deque(maxlen=HISTORY_SIZE)
        self._last_rx = 0
        self._last_tx = 0
        self._last_time: float | None = None
        self._addresses = IpAddresses()
        self._last_ip_check: float | None = None

    @classmethod
    def auto(cls) -> NetworkSensor:
        """A sensor on the default-route interface, or the first real one."""
        interface = cls.detect_interface() or _FALLBACK_INTERFACE
        log.info("Network sensor using interface: %s", interface)
        return cls(interface)

    def set_interface(self, interface: str) -> None:
        """Switch to another interface, discarding rates, history and addresses."""
        self._reset(interface)
        log.info("Network sensor switched to interface: %s", interface)

    def set_auto(self) -> None:
        """Switch to the auto-detected interface."""
        interface = (
            self.detect_interface(_ROUTE_PATH, self.net_root) or _FALLBACK_INTERFACE
        )
        self.set_interface(interface)

    @staticmethod
    def list_interfaces(net_root: str | Path = _NET_ROOT) -> list[str]:
        """Sorted names of real interfaces, skipping loopback, veth and docker."""
        return _real_interfaces(Path(net_root))

    @staticmethod
    def detect_interface(
        route_path: str | Path = _ROUTE_PATH, net_root: str | Path = _NET_ROOT
    ) -> str | None:
        """The default-route interface, else the first real interface, else None."""
        try:
            lines = Path(route_path).read_text().splitlines()[1:]
        except OSError:
            lines = []
        for line in lines:
            fields = line.split()
            if len(fields) >= 2 and fields[1] == "00000000":
                return fields[0]

        interfaces = _real_interfaces(Path(net_root))
        return interfaces[0] if interfaces else None

    def _read_stats(self) -> tuple[int, int] | None:
        stats = self.net_root / self.interface / "statistics"
        rx = _read_counter(stats / "rx_bytes")
        tx = _read_counter(stats / "tx_bytes")
        if rx is None or tx is None:
            return None
        return rx, tx

    def sample(self) -> float:
        """Update rates and history; return the combined rate in KB/s."""
        stats = self._read_stats()
        if stats is not None:
            rx, tx = stats
            now = time.monotonic()
            if self._last_time is not None:
                elapsed = now - self._last_time
                if elapsed > 0:
                    self.rx_rate = max(0, rx - self._last_rx) / elapsed
                    self.tx_rate = max(0, tx - self._last_tx) / elapsed
                    self.history.append(self.rx_rate + self.tx_rate)
                    self.rx_history.append(self.rx_rate)
                    self.tx_history.append(self.tx_rate)
            self._last_rx = rx
            self._last_tx = tx
            self._last_time = now
        return (self.rx_rate + self.tx_rate) / 1024.0

    def _refresh_ip_cache(self) -> None:
        now = time.monotonic()
        if self._last_ip_check is None or int(now - self._last_ip_check) > _IP_CACHE_SECONDS:
            self._addresses = _interface_addresses(self.interface)
            self._last_ip_check = now

    def ipv4_address(self) -> str | None:
        """The interface's IPv4 address (refreshed at most every 30 s)."""
        self._refresh_ip_cache()
        return self._addresses.ipv4

    def ipv6_gua(self) -> str | None:
        """The interface's IPv6 global unicast address."""
        self._refresh_ip_cache()
        return self._addresses.ipv6_gua

    def ipv6_lla(self) -> str | None:
        """The interface's IPv6 link-local address."""
        self._refresh_ip_cache()
        return self._addresses.ipv6_lla

    def ipv6_ula(self) -> str | None:
        """The interface's IPv6 unique local address."""
        self._refresh_ip_cache()
        return self._addresses.ipv6_ula