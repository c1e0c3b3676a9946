import math
from collections import deque
from datetime import date, datetime

import pytest

from ht32panel.sysdata import IpDisplayPreference, SystemData


@pytest.mark.parametrize("text", ["ipv6-gua", "IPV6_GUA", "ipv6gua", "gua"])
def test_parse_gua_aliases(text):
    assert IpDisplayPreference.parse(text) is IpDisplayPreference.IPV6_GUA


@pytest.mark.parametrize(
    "text, expected",
    [
        ("lla", IpDisplayPreference.IPV6_LLA),
        ("ipv6_ula", IpDisplayPreference.IPV6_ULA),
        ("v4", IpDisplayPreference.IPV4),
        ("IPv4", IpDisplayPreference.IPV4),
    ],
)
def test_parse_other_aliases(text, expected):
    assert IpDisplayPreference.parse(text) is expected


def test_parse_round_trip():
    for preference in IpDisplayPreference.all():
        assert IpDisplayPreference.parse(str(preference)) is preference


def test_parse_unknown_raises():
    with pytest.raises(ValueError, match="Unknown IP display preference"):
        IpDisplayPreference.parse("ipv5")


def test_all_order_and_names():
    assert IpDisplayPreference.all() == [
        IpDisplayPreference.IPV6_GUA,
        IpDisplayPreference.IPV6_LLA,
        IpDisplayPreference.IPV6_ULA,
        IpDisplayPreference.IPV4,
    ]
    assert str(IpDisplayPreference.IPV4) == "ipv4"
    assert IpDisplayPreference.IPV6_LLA.display_name() == "IPv6 LLA"


def test_default_histories_are_independent():
    a = SystemData()
    b = SystemData()
    a.disk_history.append(1.0)
    assert len(b.disk_history) == 0
    assert a.display_ip is None


def test_format_time_24h():
    data = SystemData(hour=9, minute=5)
    assert data.format_time("digital-24h") == "09:05"
    assert data.format_time("something-else") == data.format_time("digital-24h")


@pytest.mark.parametrize("hour", [0, 1, 11, 12, 13, 23])
def test_format_time_12h_round_trip(hour):
    data = SystemData(hour=hour, minute=7)
    parsed = datetime.strptime(data.format_time("digital-12h").strip(), "%I:%M %p")
    assert parsed.hour == hour
    assert parsed.minute == 7


def test_format_time_analogue_is_empty():
    assert SystemData(hour=3, minute=4).format_time("analogue") == ""


@pytest.fixture
def dated():
    return SystemData(day=9, month=3, year=2024, day_of_week=6)


@pytest.mark.parametrize(
    "fmt, pattern",
    [("iso", "%Y-%m-%d"), ("us", "%m/%d/%Y"), ("eu", "%d/%m/%Y"), ("long", "%B %d, %Y")],
)
def test_format_date_round_trip(dated, fmt, pattern):
    assert datetime.strptime(dated.format_date(fmt), pattern).date() == date(2024, 3, 9)


def test_format_date_short_and_weekday(dated):
    short = dated.format_date("short")
    parsed = datetime.strptime(short, "%b %d")
    assert (parsed.month, parsed.day) == (3, 9)
    assert dated.format_date("weekday") == f"Sat, {short}"


def test_format_date_hidden_and_unknown(dated):
    assert dated.format_date("hidden") is None
    assert dated.format_date("nope") is None


def test_format_date_clamps_indices():
    assert SystemData(month=0, day=1).format_date("short").startswith("Jan")
    assert SystemData(month=13, day=1).format_date("short").startswith("Dec")
    assert SystemData(month=1, day=1, day_of_week=9).format_date("weekday").startswith("Sat")


@pytest.mark.parametrize(
    "value, unit, scale",
    [(500.0, "B/s", 1.0), (1500.0, "KB/s", 1e3), (2.5e6, "MB/s", 1e6), (3e9, "GB/s", 1e9)],
)
def test_format_rate_units(value, unit, scale):
    number, got_unit = SystemData.format_rate(value).split()
    assert got_unit == unit
    assert abs(float(number) * scale - value) <= 0.05 * scale + 0.5


@pytest.mark.parametrize(
    "value, suffix, scale",
    [(42.0, "B", 1.0), (4200.0, "K", 1e3), (4.2e6, "M", 1e6), (4.2e9, "G", 1e9)],
)
def test_format_rate_compact_units(value, suffix, scale):
    text = SystemData.format_rate_compact(value)
    assert text.endswith(suffix)
    assert math.isclose(float(text[:-1]) * scale, value, rel_tol=0.02)


def test_format_rate_boundaries():
    assert SystemData.format_rate(999.0) == "999 B/s"
    assert SystemData.format_rate(1000.0).endswith(" KB/s")


def test_graph_scale_minimum():
    assert SystemData.compute_graph_scale(deque()) == 1_000_000.0
    assert SystemData.compute_graph_scale(deque([500_000.0])) == 1_000_000.0


def test_graph_scale_snaps_up():
    assert SystemData.compute_graph_scale(deque([2e6])) == 2e6
    assert SystemData.compute_graph_scale(deque([1e6, 2.5e6])) == 5e6


@pytest.mark.parametrize("value", [1.5e6, 3e6, 7e6, 1.2e7, 9.9e8, 4.4e9])
def test_graph_scale_is_nice_and_covers_max(value):
    scale = SystemData.compute_graph_scale(deque([0.0, value]))
    assert scale >= value
    leading = scale / 10 ** math.floor(math.log10(scale))
    assert any(math.isclose(leading, nice) for nice in (1.0, 2.0, 5.0))