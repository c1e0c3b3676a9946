# ht32panel

A Linux library for the small front-panel display and LED strip found on
HT32-based mini PCs (AceMagic, Agni and similar whitelabelled machines), plus
sensors for the system metrics such a panel usually shows.

## What is inside

Hardware:

- `ht32panel.lcd.LcdDevice` – writes packets to the 320×170 RGB565 LCD
  through its Linux `hidraw` node. `LcdDevice.open()` finds the device by
  VID:PID `04D9:FD01` (preferring HID interface 1) and waits one second for it
  to initialise; `LcdDevice.open_path(path)` opens a given node. It offers
  `set_orientation`, `heartbeat` / `heartbeat_with_time`, `redraw` (a full
  frame in 27 chunks), `refresh` (a partial rectangle), `clear` and `close`,
  and works as a context manager. Upside-down orientations are rotated in
  software before sending.
- `ht32panel.lcd.find_hidraw_devices()` – lists `(device node, interface
  number)` pairs for matching devices under `/sys/class/hidraw`.
- `ht32panel.protocol` – the raw packet builders
  (`build_orientation_packet`, `build_heartbeat_packet`,
  `build_refresh_packet`, `build_redraw_chunk`) and the `Command`,
  `SubCommand` and `RedrawPhase` codes.
- `ht32panel.framebuffer.Framebuffer` – a row-major RGB565 buffer (320×170 by
  default) with `set_pixel`, `get_pixel`, `fill_rect`, `clear`, `resize`,
  `extract_region`, `rotate_180`, loading from RGB565, RGB8 or RGBA8 data, and
  `to_rgba8`. Helpers: `rgb888_to_rgb565`, `rgb565_to_rgb888`,
  `parse_hex_color`.
- `ht32panel.orientation.Orientation` – `LANDSCAPE`, `PORTRAIT`,
  `LANDSCAPE_UPSIDE_DOWN`, `PORTRAIT_UPSIDE_DOWN`, with `parse`,
  `dimensions`, `hardware_byte` and `needs_rotation`.
- `ht32panel.led.LedDevice` and `LedTheme` – the serial LED strip (10000
  baud): themes `RAINBOW`, `BREATHING`, `COLORS`, `OFF`, `AUTO`, intensity and
  speed 1–5. The sending methods (`set_theme`, `set_rainbow`,
  `set_breathing`, `set_colors`, `set_auto`, `set_off`) are coroutines.
- `ht32panel.errors` – `Ht32Error` and its subclasses, such as
  `LcdNotFoundError`, `LedNotFoundError`, `HidError`, `SerialError` and
  `InvalidLedValueError`.

Sensors (reading `/proc` and `/sys`; all subclass `ht32panel.sensor.Sensor`
and have a `sample()` method):

- `ht32panel.cpu.CpuSensor` – CPU usage in percent between samples.
- `ht32panel.memory.MemorySensor` – used memory in percent.
- `ht32panel.temperature.TemperatureSensor` – CPU temperature in °C, found
  through hwmon or thermal zones.
- `ht32panel.network.NetworkSensor` – receive/transmit rates and 60-sample
  histories for one interface, plus its IPv4 and IPv6 (global, link-local,
  unique-local) addresses; `NetworkSensor.auto()` picks the default-route
  interface.
- `ht32panel.disk.DiskSensor` – read/write rates and histories for one block
  device; `DiskSensor.auto()` picks the primary disk.
- `ht32panel.system.SystemInfo` – hostname, uptime and local time;
  `format_uptime` formats seconds as `"Xd Yh Zm"`.
- `ht32panel.sysdata.SystemData` – a snapshot of all metrics with
  `format_time`, `format_date`, `format_rate`, `format_rate_compact` and
  `compute_graph_scale`; `IpDisplayPreference` chooses which address to show.

## Install

```
pip install ht32panel
```

The LCD needs read/write access to its `hidraw` node and the LED strip to its
serial port (usually `/dev/ttyUSB0`); set up udev rules or group membership
accordingly.

## Example

```python
import asyncio

from ht32panel.framebuffer import Framebuffer, parse_hex_color
from ht32panel.lcd import LcdDevice
from ht32panel.led import LedDevice, LedTheme
from ht32panel.orientation import Orientation

with LcdDevice.open() as lcd:
    lcd.heartbeat()
    lcd.set_orientation(Orientation.LANDSCAPE)
    fb = Framebuffer()
    fb.clear(parse_hex_color("#000000"))
    fb.fill_rect(10, 10, 100, 50, parse_hex_color("#FF0000"))
    lcd.redraw(fb)

asyncio.run(LedDevice("/dev/ttyUSB0").set_theme(LedTheme.BREATHING, 3, 3))
```

Sampling the system:

```python
from ht32panel.cpu import CpuSensor
from ht32panel.sysdata import SystemData

cpu = CpuSensor()
cpu.sample()          # first call primes the counters
print(f"{cpu.sample():.1f}%")
print(SystemData.format_rate(1_500_000))   # "1.5 MB/s"
```

## What it does not do

This is a library only. It has no command-line program, no background service
that samples sensors and redraws the panel on a schedule, no web interface,
no display faces or themes that draw the metrics onto the screen, and no
storage of settings between runs. Putting these pieces together is left to
the program that uses it.

## Tests

```
pip install -e ".[test]"
pytest
```