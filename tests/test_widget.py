import copy
import dataclasses

import pytest

from parapet.widget import (
    BatteryData,
    BatteryStatus,
    ClockData,
    CpuData,
    DiskData,
    DiskEntry,
    MediaData,
    PlaybackStatus,
    TempUnit,
    WeatherData,
    Widget,
)


class MinimalWidget(Widget):
    name = "minimal"

    def update(self):
        return ClockData(display="00:00")


def test_battery_data_compares_by_status():
    charging = BatteryData(charge_pct=50.0, status=BatteryStatus.CHARGING)
    assert charging == BatteryData(charge_pct=50.0, status=BatteryStatus.CHARGING)
    assert charging != BatteryData(charge_pct=50.0, status=BatteryStatus.DISCHARGING)
    full = BatteryData(charge_pct=None, status=BatteryStatus.FULL)
    assert full != BatteryData(charge_pct=None, status=BatteryStatus.UNKNOWN)


def test_widget_data_clock_copy():
    original = ClockData(display="12:34")
    cloned = copy.copy(original)
    assert cloned == original
    assert cloned.display == "12:34"


def test_minimal_widget_update_returns_data():
    widget = MinimalWidget()
    assert widget.update() == ClockData(display="00:00")
    assert widget.name == "minimal"


def test_widget_is_abstract():
    with pytest.raises(TypeError):
        Widget()


def test_temp_unit_from_config_string():
    assert TempUnit("celsius") is TempUnit.CELSIUS
    assert TempUnit("fahrenheit") is TempUnit.FAHRENHEIT
    with pytest.raises(ValueError):
        TempUnit("kelvin")


def test_temp_unit_eq():
    assert TempUnit("celsius") == TempUnit.CELSIUS
    assert TempUnit("celsius") != TempUnit.FAHRENHEIT


def test_media_data_compares_by_playback_status():
    def media(status):
        return MediaData(
            title="t", artist="a", status=status, can_go_next=False, can_go_previous=False
        )

    assert media(PlaybackStatus.PLAYING) == media(PlaybackStatus.PLAYING)
    assert media(PlaybackStatus.PLAYING) != media(PlaybackStatus.PAUSED)
    assert media(PlaybackStatus.PAUSED) != media(PlaybackStatus.STOPPED)


def test_widget_data_weather_copy():
    original = WeatherData(
        temperature=12.3, weather_code=61, wind_speed=18.5, humidity=74, unit=TempUnit.CELSIUS
    )
    cloned = dataclasses.replace(original)
    assert abs(cloned.temperature - original.temperature) < 1e-9
    assert cloned.weather_code == 61
    assert cloned == original


def test_widget_data_media_copy():
    original = MediaData(
        title="Test Track",
        artist="Test Artist",
        status=PlaybackStatus.PLAYING,
        can_go_next=True,
        can_go_previous=False,
    )
    cloned = copy.copy(original)
    assert cloned.title == "Test Track"
    assert cloned.status is PlaybackStatus.PLAYING


def test_widget_data_is_immutable():
    data = BatteryData(charge_pct=50.0, status=BatteryStatus.FULL)
    with pytest.raises(dataclasses.FrozenInstanceError):
        data.charge_pct = 10.0
    assert data.charge_pct == 50.0


def test_cpu_data_fields():
    data = CpuData(usage_pct=42.0, per_core=(), temp_celsius=None)
    assert data.usage_pct == 42.0
    assert data.per_core == ()
    assert data.temp_celsius is None


def test_disk_data_holds_entries():
    entry = DiskEntry(mount="/", used_bytes=10, total_bytes=100)
    data = DiskData(mount="/", used_bytes=10, total_bytes=100, all_disks=(entry,))
    assert data.all_disks[0].mount == "/"
    assert data.all_disks[0].total_bytes == 100