# parapet

The display-independent core of a desktop status bar. It loads and checks a
TOML configuration, gathers system data for each widget, and schedules widget
refreshes. It draws nothing; a front end is expected to take the data and
render it.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Configuration

`ParapetConfig.default_path()` returns `$HOME/.config/parapet/config.toml`
(with `/root` standing in for an unset `HOME`). A configuration looks like:

```toml
[bar]
position = "top"
height = 28
theme = "dark"

[[widgets]]
type = "clock"
position = "center"
format = "%H:%M"

[[widgets]]
type = "cpu"
position = "right"
warn_threshold = 80.0
crit_threshold = 95.0
interval = 2000

[[widgets]]
type = "volume"
position = "right"
on_click = "pavucontrol"
```

The `[bar]` table and every key in it are optional: `position` defaults to
`"top"`, `height` to 30, `monitor` to `"primary"` (or a 0-based integer
index), `widget_spacing` to 4; `css` and `theme` are unset by default.

Each `[[widgets]]` entry needs `type` and `position` (`"left"`, `"center"` or
`"right"`). It may carry `interval`, `label`, `on_click`, `on_scroll_up`,
`on_scroll_down` and `extra_class`, plus the options of its type. The types
are `clock`, `cpu`, `memory`, `network`, `battery`, `disk`, `volume`,
`brightness`, `weather`, `media`, `workspaces`, `launcher` and `separator`.
An option that does not belong to the chosen type is rejected.

Loading a file or a string:

```python
from parapet.config import ParapetConfig

config = ParapetConfig.load(ParapetConfig.default_path())

config = ParapetConfig.from_toml(text)   # parses only
config.validate()                        # checks values
print(config.to_toml())
```

`load` parses and validates. It raises `ConfigNotFoundError`,
`ConfigIoError`, `ConfigParseError` or `ConfigValidationError`, all in
`parapet.errors` and all subclasses of `ConfigError`. Validation rejects a
zero bar height, a zero `interval`, CPU thresholds where warn is not below
crit (defaults 80 and 95), battery thresholds where crit is not below warn
(defaults 20 and 5), thresholds outside 0–100, latitude outside ±90,
longitude outside ±180 and a disk `mount` that is not absolute. It also
expands a leading `~` or `$HOME` in `css`, `theme` and `mount`; the same
expansion is available as `expand_path`.

`config_schema_json()` returns a JSON Schema of the configuration as a
pretty-printed string.

To notice edits to the file, use a `ConfigWatcher`. Modification, creation,
removal and renaming of the file all count as a change:

```python
from parapet.config import ConfigWatcher

with ConfigWatcher(path) as watcher:
    ...
    if watcher.has_changed():
        config = ParapetConfig.load(path)
```

`has_changed()` never blocks; it returns `True` once for any number of
changes since the previous `True`.

## Widgets and polling

Each widget has a `name` and an `update()` method that returns a frozen data
object from `parapet.widget` (`ClockData`, `CpuData`, `MemoryData`,
`NetworkData`, `BatteryData`, `DiskData`, `WorkspacesData`, `VolumeData`,
`BrightnessData`, `WeatherData`). A `Poller` refreshes each widget once its
own interval has passed:

```python
import time
from parapet.poll import Poller
from parapet.widgets.clock import ClockWidget
from parapet.widgets.cpu import CpuWidget

poller = Poller()
poller.register(ClockWidget("clock", "%H:%M:%S"), 1000)
poller.register(CpuWidget("cpu"), 2000)

for name, data in poller.poll(time.monotonic()):
    print(name, data)
```

Every widget is polled on the first call. A widget whose `update()` raises a
`ParapetError` is logged and left out of that poll's results, and is tried
again on the next poll.

The widgets live in `parapet.widgets`:

- `battery.BatteryWidget(name, sysfs_root=...)` – charge and status from
  `/sys/class/power_supply`; `charge_pct` is `None` without a battery.
- `brightness.BrightnessWidget(name, sysfs_root=...)` – backlight level from
  `/sys/class/backlight`; 0 without a backlight.
- `clock.ClockWidget(name, format)` – local time through `strftime`.
- `cpu.CpuWidget(name)` – total and per-core usage and a temperature reading;
  the first update reports zero usage.
- `disk.DiskWidget(name, mount)` – usage of one mount point (zeros if it is
  not mounted) and of every non-empty filesystem.
- `memory.MemoryWidget(name)` – RAM and swap; raises `SysInfoError` if total
  RAM reads as zero.
- `network.NetworkWidget(name, interface)` – bytes received and sent on an
  interface since the previous update; `"auto"` picks the first
  non-loopback one. The first update reports zeros.
- `volume.VolumeWidget(name)` – default sink volume and mute state, read with
  `pactl` and kept current by a background `pactl subscribe`; call `close()`
  to stop it. Without `pactl` it reports 0% and unmuted.
- `weather.WeatherWidget(name, latitude, longitude, unit)` – current
  conditions from the Open-Meteo forecast API; after a failure it returns the
  last result, or raises `HttpError` if there is none.
- `workspaces.WorkspacesWidget(name)` – always one workspace, index 0
  active, no names.

## What this package does not do

There is no bar window, no rendering and no command to start a bar. The
configuration accepts `media`, `launcher` and `separator` entries, but the
package has no widget that provides data for them, and the workspaces widget
only returns placeholder data rather than querying the window manager.