"""The widget contract: the provider interface and the data it produces."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass

WIDGET_API_VERSION = "1.7.1"


class BatteryStatus(enum.Enum):
    """Battery charging state as reported by sysfs."""

    CHARGING = "charging"
    DISCHARGING = "discharging"
    FULL = "full"
    UNKNOWN = "unknown"


class TempUnit(enum.Enum):
    """Temperature unit for the weather widget."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


class PlaybackStatus(enum.Enum):
    """Media player playback state; STOPPED also means no player."""

    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"


@dataclass(frozen=True)
class DiskEntry:
    """Usage of one mounted filesystem."""

    mount: str
    used_bytes: int
    total_bytes: int


@dataclass(frozen=True)
class ClockData:
    display: str


@dataclass(frozen=True)
class CpuData:
    usage_pct: float
    per_core: tuple[float, ...]
    temp_celsius: float | None


@dataclass(frozen=True)
class MemoryData:
    used_bytes: int
    total_bytes: int
    swap_used: int
    swap_total: int


@dataclass(frozen=True)
class NetworkData:
    rx_bytes_per_sec: int
    tx_bytes_per_sec: int
    interface: str


@dataclass(frozen=True)
class BatteryData:
    charge_pct: float | None
    status: BatteryStatus


@dataclass(frozen=True)
class DiskData:
    mount: str
    used_bytes: int
    total_bytes: int
    all_disks: tuple[DiskEntry, ...]


@dataclass(frozen=True)
class WorkspacesData:
    count: int
    active: int
    names: tuple[str, ...]


@dataclass(frozen=True)
class VolumeData:
    volume_pct: float
    muted: bool


@dataclass(frozen=True)
class BrightnessData:
    brightness_pct: float


@dataclass(frozen=True)
class WeatherData:
    temperature: float
    weather_code: int
    wind_speed: float
    humidity: int
    unit: TempUnit


@dataclass(frozen=True)
class MediaData:
    title: str
    artist: str
    status: PlaybackStatus
    can_go_next: bool
    can_go_previous: bool


WidgetData = (
    ClockData
    | CpuData
    | MemoryData
    | NetworkData
    | BatteryData
    | DiskData
    | WorkspacesData
    | VolumeData
    | BrightnessData
    | WeatherData
    | MediaData
)


class Widget(ABC):
    """A data provider polled for fresh snapshots.

    ``name`` must be a stable, non-empty identifier. ``update`` raises a
    ``ParapetError`` only for unrecoverable failures.
    """

    name: str

    @abstractmethod
    def update(self) -> WidgetData:
        """Refresh state and return the latest data snapshot."""