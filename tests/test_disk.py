import itertools
from unittest import mock

import pytest

from ht32panel.disk import DiskSensor
from ht32panel.sysdata import HISTORY_SIZE


def write_stats(path, read_sectors, write_sectors, device="sda"):
    path.write_text(
        "   7       0 loop0 5 0 10 0 0 0 0 0 0 0 0\n"
        f"   8       0 {device} 100 0 {read_sectors} 0 50 0 {write_sectors} 0 0 0 0\n"
    )


def counting_clock():
    return (float(i) for i in itertools.count())


@pytest.fixture
def stats_file(tmp_path):
    path = tmp_path / "diskstats"
    write_stats(path, 2000, 4000)
    return path


def test_first_sample_has_no_rate(stats_file):
    sensor = DiskSensor("sda", stats_file)
    with mock.patch("time.monotonic", side_effect=counting_clock()):
        assert sensor.sample() == 0.0
    assert len(sensor.history) == 0


def test_sample_computes_rates(stats_file):
    sensor = DiskSensor("sda", stats_file)
    with mock.patch("time.monotonic", side_effect=[0.0, 1.0]):
        sensor.sample()
        write_stats(stats_file, 2010, 4020)
        result = sensor.sample()
    assert sensor.read_rate == 5120.0
    assert sensor.write_rate == 2 * sensor.read_rate
    assert result == pytest.approx((sensor.read_rate + sensor.write_rate) / 1024.0)
    assert list(sensor.history) == [sensor.read_rate + sensor.write_rate]
    assert list(sensor.read_history) == [sensor.read_rate]
    assert list(sensor.write_history) == [sensor.write_rate]


def test_rate_scales_with_elapsed_time(stats_file):
    fast = DiskSensor("sda", stats_file)
    slow = DiskSensor("sda", stats_file)
    with mock.patch("time.monotonic", side_effect=[0.0, 0.0, 1.0, 2.0]):
        fast.sample()
        slow.sample()
        write_stats(stats_file, 2100, 4100)
        fast.sample()
        slow.sample()
    assert fast.read_rate == pytest.approx(2 * slow.read_rate)


def test_counter_decrease_gives_zero_rate(stats_file):
    sensor = DiskSensor("sda", stats_file)
    with mock.patch("time.monotonic", side_effect=counting_clock()):
        sensor.sample()
        write_stats(stats_file, 1, 1)
        assert sensor.sample() == 0.0
    assert sensor.read_rate == 0.0
    assert sensor.write_rate == 0.0


def test_history_is_bounded(stats_file):
    sensor = DiskSensor("sda", stats_file)
    with mock.patch("time.monotonic", side_effect=counting_clock()):
        for step in range(HISTORY_SIZE + 5):
            write_stats(stats_file, step * 8, step * 16)
            sensor.sample()
    assert len(sensor.history) == HISTORY_SIZE
    assert len(sensor.read_history) == HISTORY_SIZE
    assert len(sensor.write_history) == HISTORY_SIZE


def test_unknown_device_is_ignored(stats_file):
    sensor = DiskSensor("nvme9n9", stats_file)
    assert sensor.sample() == 0.0
    assert len(sensor.history) == 0


def test_missing_stats_file(tmp_path):
    sensor = DiskSensor("sda", tmp_path / "absent")
    assert sensor.sample() == 0.0


def test_malformed_line_is_ignored(tmp_path):
    path = tmp_path / "diskstats"
    path.write_text("   8       0 sda 100 0 abc 0 50 0 4000 0 0 0 0\n")
    sensor = DiskSensor("sda", path)
    with mock.patch("time.monotonic", side_effect=counting_clock()):
        sensor.sample()
        assert sensor.sample() == 0.0
    assert len(sensor.history) == 0


@pytest.mark.parametrize(
    ("present", "expected"),
    [
        (["sda", "vda"], "sda"),
        (["sda", "nvme0n1"], "nvme0n1"),
        (["mmcblk0", "xvda"], "xvda"),
        (["loop0"], None),
        ([], None),
    ],
)
def test_detect_primary_disk(tmp_path, present, expected):
    for name in present:
        (tmp_path / name).mkdir()
    assert DiskSensor.detect_primary_disk(tmp_path) == expected


def test_sensor_metadata(stats_file):
    sensor = DiskSensor("nvme0n1", stats_file)
    assert sensor.name == "disk_nvme0n1"
    assert sensor.device == "nvme0n1"
    assert sensor.unit == "KB/s"
    assert sensor.max_value == 1_000_000.0