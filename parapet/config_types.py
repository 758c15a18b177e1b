"""Typed configuration sections: the bar, widget entries and per-kind options."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

from .errors import ConfigParseError

Converter = Callable[[str, Any], Any]
_E = TypeVar("_E", bound=enum.Enum)


# ── Value converters ─────────────────────────────────────────────────────────


def _type_error(name: str, expected: str, value: Any) -> ConfigParseError:
    return ConfigParseError(
        f"invalid type for field `{name}`: expected {expected}, found {value!r}"
    )


def _string(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise _type_error(name, "a string", value)
    return value


def _boolean(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise _type_error(name, "a boolean", value)
    return value


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _type_error(name, "a number", value)
    return float(value)


def _integer_in(low: int, high: int, label: str) -> Converter:
    def convert(name: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _type_error(name, f"an integer ({label})", value)
        if not low <= value <= high:
            raise ConfigParseError(
                f"invalid value for field `{name}`: {value} is out of range for {label}"
            )
        return value

    return convert


_u32 = _integer_in(0, 2**32 - 1, "u32")
_u64 = _integer_in(0, 2**64 - 1, "u64")
_i32 = _integer_in(-(2**31), 2**31 - 1, "i32")


def _string_list(name: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _type_error(name, "a list of strings", value)
    return list(value)


def _enum_value(enum_cls: type[_E], name: str, value: Any) -> _E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(f"`{member.value}`" for member in enum_cls)
        raise ConfigParseError(
            f"invalid value for field `{name}`: {value!r}, expected one of {allowed}"
        ) from None


def _opt(convert: Converter) -> Any:
    return field(default=None, metadata={"convert": convert})


# ── Bar section ──────────────────────────────────────────────────────────────


class BarPosition(enum.Enum):
    """Screen edge the bar is anchored to."""

    TOP = "top"
    BOTTOM = "bottom"


class BarSection(enum.Enum):
    """Column of the bar a widget is placed in."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class MonitorTarget:
    """The monitor to show the bar on: the primary one, or a 0-based index."""

    index: int | None = None

    def __post_init__(self) -> None:
        if self.index is not None and self.index < 0:
            raise ValueError(f"monitor index must be non-negative, got {self.index}")

    @property
    def is_primary(self) -> bool:
        return self.index is None

    @classmethod
    def from_value(cls, value: Any) -> MonitorTarget:
        """Build from the config value: ``"primary"`` or a non-negative integer."""
        if isinstance(value, str):
            if value == "primary":
                return cls()
            raise ConfigParseError(f"unknown monitor target: {value}")
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise ConfigParseError(f"invalid monitor index: {value}")
            return cls(value)
        raise ConfigParseError(
            f'expected "primary" or an integer monitor index, found {value!r}'
        )

    def to_value(self) -> str | int:
        """Return the config value for this target."""
        return "primary" if self.index is None else self.index


@dataclass
class BarConfig:
    """Global bar window settings."""

    position: BarPosition = BarPosition.TOP
    height: int = 30
    monitor: MonitorTarget = field(default_factory=MonitorTarget)
    css: str | None = None
    theme: str | None = None
    widget_spacing: int = 4

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BarConfig:
        """Build from a ``[bar]`` table; absent keys take their defaults."""
        if not isinstance(data, Mapping):
            raise _type_error("bar", "a table", data)
        config = cls()
        if "position" in data:
            config.position = _enum_value(BarPosition, "position", data["position"])
        if "height" in data:
            config.height = _u32("height", data["height"])
        if "monitor" in data:
            config.monitor = MonitorTarget.from_value(data["monitor"])
        if "css" in data:
            config.css = _string("css", data["css"])
        if "theme" in data:
            config.theme = _string("theme", data["theme"])
        if "widget_spacing" in data:
            config.widget_spacing = _u32("widget_spacing", data["widget_spacing"])
        return config

    def to_dict(self) -> dict[str, Any]:
        """Return the ``[bar]`` table; unset optional fields are omitted."""
        result: dict[str, Any] = {
            "position": self.position.value,
            "height": self.height,
            "monitor": self.monitor.to_value(),
        }
        if self.css is not None:
            result["css"] = self.css
        if self.theme is not None:
            result["theme"] = self.theme
        result["widget_spacing"] = self.widget_spacing
        return result


# ── Per-kind widget options ──────────────────────────────────────────────────


@dataclass
class ClockConfig:
    format: str | None = _opt(_string)
    timezone: str | None = _opt(_string)


@dataclass
class CpuConfig:
    warn_threshold: float | None = _opt(_number)
    crit_threshold: float | None = _opt(_number)


@dataclass
class MemoryConfig:
    format: str | None = _opt(_string)
    show_swap: bool | None = _opt(_boolean)


@dataclass
class NetworkConfig:
    interface: str | None = _opt(_string)
    show_interface: bool | None = _opt(_boolean)


@dataclass
class BatteryConfig:
    warn_threshold: float | None = _opt(_number)
    crit_threshold: float | None = _opt(_number)
    show_icon: bool | None = _opt(_boolean)


@dataclass
class DiskConfig:
    mount: str | None = _opt(_string)
    format: str | None = _opt(_string)


@dataclass
class VolumeConfig:
    show_icon: bool | None = _opt(_boolean)


@dataclass
class BrightnessConfig:
    show_icon: bool | None = _opt(_boolean)


@dataclass
class WeatherConfig:
    latitude: float | None = _opt(_number)
    longitude: float | None = _opt(_number)
    units: str | None = _opt(_string)


@dataclass
class MediaConfig:
    """The media widget has no options of its own."""


@dataclass
class WorkspacesConfig:
    show_names: bool | None = _opt(_boolean)


@dataclass
class LauncherConfig:
    max_results: int | None = _opt(_u32)
    button_label: str | None = _opt(_string)
    popup_width: int | None = _opt(_i32)
    popup_min_height: int | None = _opt(_i32)
    pinned: list[str] = field(default_factory=list, metadata={"convert": _string_list})


@dataclass
class SeparatorConfig:
    format: str | None = _opt(_string)


WidgetKind = (
    ClockConfig
    | CpuConfig
    | MemoryConfig
    | NetworkConfig
    | BatteryConfig
    | DiskConfig
    | VolumeConfig
    | BrightnessConfig
    | WeatherConfig
    | MediaConfig
    | WorkspacesConfig
    | LauncherConfig
    | SeparatorConfig
)

_KIND_TYPES: dict[str, type] = {
    "clock": ClockConfig,
    "cpu": CpuConfig,
    "memory": MemoryConfig,
    "network": NetworkConfig,
    "battery": BatteryConfig,
    "disk": DiskConfig,
    "volume": VolumeConfig,
    "brightness": BrightnessConfig,
    "weather": WeatherConfig,
    "media": MediaConfig,
    "workspaces": WorkspacesConfig,
    "launcher": LauncherConfig,
    "separator": SeparatorConfig,
}
_KIND_NAMES: dict[type, str] = {cls: name for name, cls in _KIND_TYPES.items()}


def kind_from_dict(type_name: str, data: Mapping[str, Any]) -> WidgetKind:
    """Build the options of widget type ``type_name``, rejecting unknown keys."""
    kind_cls = _KIND_TYPES.get(type_name) if isinstance(type_name, str) else None
    if kind_cls is None:
        expected = ", ".join(f"`{name}`" for name in _KIND_TYPES)
        raise ConfigParseError(f"unknown variant `{type_name}`, expected one of {expected}")
    known = {f.name: f for f in fields(kind_cls)}
    for key in data:
        if key not in known:
            raise ConfigParseError(
                f"unknown field `{key}` for widget type `{type_name}`"
            )
    values = {
        key: known[key].metadata["convert"](key, value) for key, value in data.items()
    }
    return kind_cls(**values)


def kind_to_dict(kind: WidgetKind) -> dict[str, Any]:
    """Return the kind's options as a table; unset options are omitted."""
    result: dict[str, Any] = {}
    for f in fields(kind):
        value = getattr(kind, f.name)
        if value is None:
            continue
        result[f.name] = list(value) if isinstance(value, list) else value
    return result


def kind_type_name(kind: WidgetKind) -> str:
    """Return the ``type`` key that selects this kind of options."""
    try:
        return _KIND_NAMES[type(kind)]
    except KeyError:
        raise TypeError(f"not a widget kind: {kind!r}") from None


# ── Widget entry ─────────────────────────────────────────────────────────────

_COMMON_OPTIONAL: dict[str, Converter] = {
    "interval": _u64,
    "label": _string,
    "on_click": _string,
    "on_scroll_up": _string,
    "on_scroll_down": _string,
    "extra_class": _string,
}


@dataclass
class WidgetConfig:
    """One ``[[widgets]]`` entry: placement, shared options and kind options."""

    position: BarSection
    kind: WidgetKind
    interval: int | None = None
    label: str | None = None
    on_click: str | None = None
    on_scroll_up: str | None = None
    on_scroll_down: str | None = None
    extra_class: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WidgetConfig:
        """Build from a widget table; the ``type`` key selects the kind."""
        if not isinstance(data, Mapping):
            raise _type_error("widgets", "a table", data)
        rest = dict(data)
        if "type" not in rest:
            raise ConfigParseError("missing field `type`")
        type_name = rest.pop("type")
        if "position" not in rest:
            raise ConfigParseError("missing field `position`")
        position = _enum_value(BarSection, "position", rest.pop("position"))
        common = {
            key: convert(key, rest.pop(key))
            for key, convert in _COMMON_OPTIONAL.items()
            if key in rest
        }
        kind = kind_from_dict(type_name, rest)
        return cls(position=position, kind=kind, **common)

    def to_dict(self) -> dict[str, Any]:
        """Return the widget table, ``type`` key included."""
        result: dict[str, Any] = {
            "type": kind_type_name(self.kind),
            "position": self.position.value,
        }
        for key in _COMMON_OPTIONAL:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result.update(kind_to_dict(self.kind))
        return result