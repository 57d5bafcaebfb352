from unittest import mock

import pytest

from barblocks.errors import BarError
from barblocks.xrandr import Monitor, parse_monitors

ACTIVE = "Monitors: 1\n 0: +*eDP-1 1920/344x1080/194+0+0  eDP-1\n"

VERBOSE = (
    "Screen 0: minimum 320 x 200, current 1920 x 1080, maximum 16384 x 16384\n"
    "eDP-1 connected 1920x1080+0+0 (0x4a) normal (normal left) 344mm x 194mm\n"
    "\tIdentifier: 0x42\n"
    "\tGamma:      1.0:1.0:1.0\n"
    "\tBrightness: 0.80\n"
    "\tClones:    \n"
    "HDMI-1 disconnected (normal left inverted right x axis y axis)\n"
)


def test_parse_single_monitor():
    monitors = parse_monitors(ACTIVE, VERBOSE)
    assert monitors == [Monitor("eDP-1", 80, "1920x1080")]


def test_parse_two_monitors():
    active = ACTIVE + " 1: +HDMI-1 2560/597x1440/336+1920+0  HDMI-1\n"
    verbose = (
        "eDP-1 connected 1920x1080+0+0 (0x4a)\n"
        "\tBrightness: 1.0\n"
        "HDMI-1 connected 2560x1440+1920+0 (0x50)\n"
        "\tBrightness: 0.5\n"
    )
    monitors = parse_monitors(active, verbose)
    assert [m.name for m in monitors] == ["eDP-1", "HDMI-1"]
    assert [m.brightness for m in monitors] == [100, 50]
    assert [m.resolution for m in monitors] == ["1920x1080", "2560x1440"]


def test_parse_without_brightness_line_is_empty():
    verbose = "eDP-1 connected 1920x1080+0+0 (0x4a)\n"
    assert parse_monitors(ACTIVE, verbose) == []


def test_parse_missing_resolution_raises():
    verbose = "eDP-1 connected\n\tBrightness: 1.0\n"
    with pytest.raises(BarError):
        parse_monitors(ACTIVE, verbose)


def test_parse_bad_brightness_raises():
    verbose = "eDP-1 connected 1920x1080+0+0\n\tBrightness: bright\n"
    with pytest.raises(BarError):
        parse_monitors(ACTIVE, verbose)


def test_invalid_monitor_name_raises():
    with pytest.raises(BarError):
        parse_monitors("bad(\n", VERBOSE)


def test_negative_brightness_saturates_to_zero():
    verbose = "eDP-1 connected 1920x1080+0+0\n\tBrightness: -0.5\n"
    assert parse_monitors(ACTIVE, verbose)[0].brightness == 0


@mock.patch("barblocks.xrandr.subprocess.Popen")
def test_set_brightness_runs_xrandr(popen):
    monitor = Monitor("eDP-1", 80, "1920x1080")
    monitor.set_brightness(50)
    assert monitor.brightness == 50
    command = popen.call_args.args[0][-1]
    assert command.startswith("xrandr --output eDP-1 --brightness")
    assert command.split()[-1] == "0.5"


@mock.patch("barblocks.xrandr.subprocess.Popen")
def test_full_brightness_has_no_fraction(popen):
    monitor = Monitor("eDP-1", 80, "1920x1080")
    monitor.set_brightness(100)
    assert monitor.brightness == 100
    assert popen.call_args.args[0][-1].split()[-1] == "1"


@mock.patch("barblocks.xrandr.subprocess.Popen")
def test_brightness_up_capped(popen):
    monitor = Monitor("eDP-1", 98, "1920x1080")
    monitor.brightness_up(5)
    assert monitor.brightness == 100
    assert popen.call_count == 1


@mock.patch("barblocks.xrandr.subprocess.Popen")
def test_brightness_down_floors_at_zero(popen):
    monitor = Monitor("eDP-1", 3, "1920x1080")
    monitor.brightness_down(5)
    assert monitor.brightness == 0


@mock.patch("barblocks.xrandr.subprocess.Popen", side_effect=OSError("missing"))
def test_set_brightness_ignores_spawn_failure(popen):
    monitor = Monitor("eDP-1", 40, "1920x1080")
    monitor.brightness_up(10)
    assert monitor.brightness == 50