# barblocks

Building blocks for a status bar: the pieces that read system state, turn
it into placeholder values, and decide how a block should look and react
to clicks. Most modules offer pure parsing and decision functions plus a
few async helpers that run the relevant command-line tool.

## Modules

- `barblocks.errors` – `BarError` with an `ErrorKind` (`CONFIG`, `FORMAT`,
  `OTHER`). Once `in_block(name, id)` is called it reads as
  "Configuration error in sound: …" or "Error in sound: …"; a cause is
  appended as ". (Cause: …)". `require(value, message)` raises when the
  value is `None`.
- `barblocks.escape` – `pango_escape(text)` escapes `&`, `<`, `>` and `'`
  for pango markup; `pango_escape_segments(segments)` does the same for
  pre-split segments.
- `barblocks.click` – `MouseButton` (`MouseButton.parse` takes a name such
  as `"left"` or `"up"`, or an X11 button number), `ClickConfigEntry`,
  `ClickHandler` and `PostActions`. `ClickHandler.handle` runs the matching
  entry's command through `sh -c` (waiting for it when `sync` is set) and
  returns the entry's action and update flag.
- `barblocks.formatting` – `Fragment` and `Metadata`;
  `Fragment.formatted_text()` wraps the text in `<i>`/`<u>` tags.
- `barblocks.state` – `State` (idle, info, good, warning, critical).
- `barblocks.sound` – output-name mappings (`OutputMappings`, exact or
  regex with `$1`/`${name}` replacements), `map_active_port`,
  `clamp_step_width`, `volume_icon` and `sound_values`.
- `barblocks.alsa` – `AlsaDevice` controlling a mixer through `amixer`
  and waiting for changes with `alsactl monitor`; `parse_amixer_output`
  and `capped_volume`.
- `barblocks.speedtest` – `run_speedtest()` and `SpeedtestResult` from
  `speedtest-cli --json`.
- `barblocks.taskwarrior` – `count_tasks(filter)` via `task`,
  `TaskFilter`, `FilterCycle`, `format_kind` and `task_state` with
  warning/critical thresholds.
- `barblocks.tea_timer` – `TeaTimer` handling `increment`, `decrement`
  and `reset`; `poll()` reports when the timer has just run out and
  `values()` gives zero-padded hours, minutes and seconds.
- `barblocks.temperature` – `TemperatureScale`, `Thresholds`,
  `accept_reading` (readings outside −100…150 °C are rejected) and
  `summarize` (minimum, average, maximum).
- `barblocks.timezones` – `normalize_timezones` and `TimezoneCycle`.
- `barblocks.toggle` – `read_state` and `run_command` through `$SHELL`
  (or `sh`), and `toggle_icon`.
- `barblocks.uptime` – `read_uptime`, `parse_proc_uptime` and
  `format_uptime`, which shows the two largest units.
- `barblocks.vpn`, `barblocks.nordvpn`, `barblocks.mullvad` – `VpnStatus`
  with a country flag, `status_state`, and drivers that query and toggle
  the `nordvpn` and `mullvad` clients.
- `barblocks.watson` – `parse_state`, `activity_text`,
  `format_delta_past`, `format_delta_after` and `default_state_path`.
- `barblocks.xrandr` – `get_monitors`, `parse_monitors` and `Monitor`,
  whose brightness methods call `xrandr --brightness`.
- `barblocks.weather` and `barblocks.met_no` – `WeatherResult`,
  `convert_wind_direction`, `australian_apparent_temp`,
  `find_ip_location` (ipapi.co, cached for the given interval) and
  `MetNoService` for met.no forecasts.

## Installation

```
pip install barblocks
```

## Examples

```python
from barblocks.escape import pango_escape
from barblocks.uptime import format_uptime
from barblocks.weather import convert_wind_direction

pango_escape("&my 'text' <b>")   # "&amp;my &#39;text&#39; &lt;b&gt;"
format_uptime(90061)             # "1d 1h"
convert_wind_direction(45.0)     # "NE"
```

Click handling:

```python
from barblocks.click import ClickHandler, MouseButton

handler = ClickHandler.from_config([
    {"button": "right", "action": "toggle_mute", "update": True},
    {"button": 4, "action": "volume_up"},
])
entry = handler.find(MouseButton.RIGHT, None)
entry.action   # "toggle_mute"
```

Parsing command output:

```python
from barblocks.alsa import parse_amixer_output
from barblocks.nordvpn import parse_nordvpn_status

parse_amixer_output("  Front Left: Playback 42 [65%] [-12.00dB] [on]")  # (65, False)
parse_nordvpn_status("Status: Disconnected\n").icon()                   # "net_wired"
```

A met.no forecast:

```python
import asyncio
from barblocks.met_no import MetNoConfig, MetNoService

async def main():
    config = MetNoConfig.from_dict({"name": "metno", "coordinates": ["39.2362", "9.3317"]})
    service = await MetNoService.create(config)
    result = await service.get_weather()
    print(result.to_values())

asyncio.run(main())
```

## What it does not do

barblocks is a library, not a running status bar. It has no command to
start, does not read a bar configuration file, does not speak the i3bar
protocol, and has no format-string parser or renderer, icon sets or
themes: the functions return placeholder values and icon names for a
program that does those things. Sound support covers ALSA only; there is
no PulseAudio driver.

## Running the tests

```
pip install -e .[test]
pytest
```