"""Top-level configuration: loading, validation, schema and file watching."""

from __future__ import annotations

import json
import os
import queue
import tomllib
from collections.abc import Mapping
from dataclasses import MISSING, dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .config_types import (
    BarConfig,
    BarPosition,
    BarSection,
    BatteryConfig,
    BrightnessConfig,
    ClockConfig,
    CpuConfig,
    DiskConfig,
    LauncherConfig,
    MediaConfig,
    MemoryConfig,
    NetworkConfig,
    SeparatorConfig,
    VolumeConfig,
    WeatherConfig,
    WidgetConfig,
    WorkspacesConfig,
)
from .errors import (
    ConfigIoError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)


def _num(value: float) -> str:
    """Render a threshold the way it appears in error messages."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def expand_path(path: str) -> str:
    """Expand a leading ``~`` or ``$HOME`` to the home directory.

    Other ``$VAR`` sequences are left untouched. An unset ``HOME`` expands
    to the empty string.
    """
    home = os.environ.get("HOME", "")
    if path.startswith("~/"):
        return home + path[1:]
    if path == "~":
        return home
    if path.startswith("$HOME/"):
        return home + path[5:]
    if path == "$HOME":
        return home
    return path


@dataclass
class ParapetConfig:
    """The whole configuration: bar settings and the ordered widget list."""

    bar: BarConfig = field(default_factory=BarConfig)
    widgets: list[WidgetConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParapetConfig:
        """Build from parsed TOML; absent sections take their defaults."""
        if not isinstance(data, Mapping):
            raise ConfigParseError(f"expected a table at top level, found {data!r}")
        bar = BarConfig.from_dict(data["bar"]) if "bar" in data else BarConfig()
        raw_widgets = data.get("widgets", [])
        if not isinstance(raw_widgets, list):
            raise ConfigParseError(
                f"invalid type for field `widgets`: expected an array of tables, "
                f"found {raw_widgets!r}"
            )
        widgets = [WidgetConfig.from_dict(entry) for entry in raw_widgets]
        return cls(bar=bar, widgets=widgets)

    @classmethod
    def from_toml(cls, text: str) -> ParapetConfig:
        """Parse TOML source without validating field values."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigParseError(str(exc)) from exc
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain tables."""
        return {
            "bar": self.bar.to_dict(),
            "widgets": [widget.to_dict() for widget in self.widgets],
        }

    def to_toml(self) -> str:
        """Serialise the configuration to TOML source."""
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> ParapetConfig:
        """Read, parse and validate the configuration file at ``path``."""
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigIoError(str(exc)) from exc
        config = cls.from_toml(source)
        config.validate()
        return config

    @staticmethod
    def default_path() -> Path:
        """Return ``$HOME/.config/parapet/config.toml`` (``/root`` if unset)."""
        home = os.environ.get("HOME", "/root")
        return Path(home) / ".config" / "parapet" / "config.toml"

    def validate(self) -> None:
        """Check every rule and expand home-relative paths in place.

        Raises ``ConfigValidationError`` for the first violated rule.
        """
        if self.bar.height == 0:
            raise ConfigValidationError("bar.height", "must be greater than 0")

        if self.bar.css is not None:
            self.bar.css = expand_path(self.bar.css)
        if self.bar.theme is not None:
            self.bar.theme = expand_path(self.bar.theme)

        for index, widget in enumerate(self.widgets):
            if widget.interval == 0:
                raise ConfigValidationError(f"widgets[{index}].interval", "must be > 0")

            kind = widget.kind
            if isinstance(kind, CpuConfig):
                _validate_cpu(kind, index)
            elif isinstance(kind, BatteryConfig):
                _validate_battery(kind, index)
            elif isinstance(kind, WeatherConfig):
                _validate_weather(kind, index)
            elif isinstance(kind, DiskConfig):
                if kind.mount is not None:
                    kind.mount = expand_path(kind.mount)
                    if not kind.mount.startswith("/"):
                        raise ConfigValidationError(
                            f"widgets[{index}].mount",
                            "must be an absolute path (starts with /)",
                        )


def _check_percent_range(values: dict[str, float | None], index: int) -> None:
    for name, value in values.items():
        if value is not None and not 0.0 <= value <= 100.0:
            raise ConfigValidationError(
                f"widgets[{index}].{name}", "must be in range 0.0 to 100.0"
            )


def _validate_cpu(cpu: CpuConfig, index: int) -> None:
    warn = 80.0 if cpu.warn_threshold is None else cpu.warn_threshold
    crit = 95.0 if cpu.crit_threshold is None else cpu.crit_threshold
    if warn >= crit:
        raise ConfigValidationError(
            f"widgets[{index}].warn_threshold",
            f"CPU warn_threshold ({_num(warn)}) must be less than "
            f"crit_threshold ({_num(crit)})",
        )
    _check_percent_range(
        {"warn_threshold": cpu.warn_threshold, "crit_threshold": cpu.crit_threshold},
        index,
    )


def _validate_battery(battery: BatteryConfig, index: int) -> None:
    warn = 20.0 if battery.warn_threshold is None else battery.warn_threshold
    crit = 5.0 if battery.crit_threshold is None else battery.crit_threshold
    if crit >= warn:
        raise ConfigValidationError(
            f"widgets[{index}].crit_threshold",
            f"battery crit_threshold ({_num(crit)}) must be less than "
            f"warn_threshold ({_num(warn)})",
        )
    _check_percent_range(
        {
            "warn_threshold": battery.warn_threshold,
            "crit_threshold": battery.crit_threshold,
        },
        index,
    )


def _validate_weather(weather: WeatherConfig, index: int) -> None:
    if weather.latitude is not None and not -90.0 <= weather.latitude <= 90.0:
        raise ConfigValidationError(
            f"widgets[{index}].latitude", "must be in range -90.0 to 90.0"
        )
    if weather.longitude is not None and not -180.0 <= weather.longitude <= 180.0:
        raise ConfigValidationError(
            f"widgets[{index}].longitude", "must be in range -180.0 to 180.0"
        )


# ── JSON schema ──────────────────────────────────────────────────────────────

_BASE_SCHEMAS: dict[str, dict[str, Any]] = {
    "str": {"type": "string"},
    "float": {"type": "number"},
    "bool": {"type": "boolean"},
    "int": {"type": "integer"},
    "list[str]": {"type": "array", "items": {"type": "string"}},
}

_KIND_SCHEMA_ORDER: tuple[tuple[str, type], ...] = (
    ("clock", ClockConfig),
    ("cpu", CpuConfig),
    ("memory", MemoryConfig),
    ("network", NetworkConfig),
    ("battery", BatteryConfig),
    ("disk", DiskConfig),
    ("volume", VolumeConfig),
    ("brightness", BrightnessConfig),
    ("weather", WeatherConfig),
    ("media", MediaConfig),
    ("workspaces", WorkspacesConfig),
    ("launcher", LauncherConfig),
    ("separator", SeparatorConfig),
)


def _annotation_schema(annotation: str) -> dict[str, Any]:
    optional = annotation.endswith(" | None")
    schema = dict(_BASE_SCHEMAS[annotation.removesuffix(" | None")])
    if optional:
        schema["type"] = [schema["type"], "null"]
        schema["default"] = None
    return schema


def _kind_schema(type_name: str, kind_cls: type) -> dict[str, Any]:
    properties: dict[str, Any] = {"type": {"type": "string", "enum": [type_name]}}
    for f in fields(kind_cls):
        schema = _annotation_schema(str(f.type))
        if f.default_factory is not MISSING:
            schema["default"] = f.default_factory()
        properties[f.name] = schema
    return {"type": "object", "required": ["type"], "properties": properties}


def _optional_string() -> dict[str, Any]:
    return {"default": None, "type": ["string", "null"]}


def _schema() -> dict[str, Any]:
    defaults = BarConfig()
    bar_definition = {
        "description": "Global bar window configuration.",
        "type": "object",
        "properties": {
            "position": {
                "default": defaults.position.value,
                "allOf": [{"$ref": "#/definitions/BarPosition"}],
            },
            "height": {
                "default": defaults.height,
                "type": "integer",
                "format": "uint32",
                "minimum": 0,
            },
            "monitor": {
                "default": defaults.monitor.to_value(),
                "allOf": [{"$ref": "#/definitions/MonitorTarget"}],
            },
            "css": _optional_string(),
            "theme": _optional_string(),
            "widget_spacing": {
                "default": defaults.widget_spacing,
                "type": "integer",
                "format": "uint32",
                "minimum": 0,
            },
        },
    }
    widget_definition = {
        "description": "Configuration for a single widget entry in [[widgets]].",
        "type": "object",
        "required": ["position"],
        "properties": {
            "position": {"$ref": "#/definitions/BarSection"},
            "interval": {
                "default": None,
                "type": ["integer", "null"],
                "format": "uint64",
                "minimum": 0,
            },
            "label": _optional_string(),
            "on_click": _optional_string(),
            "on_scroll_up": _optional_string(),
            "on_scroll_down": _optional_string(),
            "extra_class": _optional_string(),
        },
        "oneOf": [_kind_schema(name, cls) for name, cls in _KIND_SCHEMA_ORDER],
    }
    return {
        "title": "ParapetConfig",
        "description": "Top-level configuration.",
        "type": "object",
        "properties": {
            "bar": {
                "default": defaults.to_dict(),
                "allOf": [{"$ref": "#/definitions/BarConfig"}],
            },
            "widgets": {
                "default": [],
                "type": "array",
                "items": {"$ref": "#/definitions/WidgetConfig"},
            },
        },
        "definitions": {
            "BarConfig": bar_definition,
            "BarPosition": {
                "type": "string",
                "enum": [member.value for member in BarPosition],
            },
            "BarSection": {
                "type": "string",
                "enum": [member.value for member in BarSection],
            },
            "MonitorTarget": {
                "oneOf": [
                    {"type": "string", "enum": ["primary"]},
                    {"type": "integer"},
                ]
            },
            "WidgetConfig": widget_definition,
        },
    }


def config_schema_json() -> str:
    """Return the JSON Schema of the configuration as pretty-printed JSON."""
    return json.dumps(_schema(), indent=2)


# ── Config watcher ───────────────────────────────────────────────────────────

_RELEVANT_EVENTS = frozenset(
    {EVENT_TYPE_MODIFIED, EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, target: str, changes: queue.SimpleQueue[None]) -> None:
        super().__init__()
        self._target = target
        self._changes = changes

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _RELEVANT_EVENTS:
            return
        paths = [event.src_path, getattr(event, "dest_path", "")]
        if any(p and os.path.normpath(os.fsdecode(p)) == self._target for p in paths):
            self._changes.put(None)


class ConfigWatcher:
    """Watches one configuration file and reports whether it changed.

    Modifications, creation and removal of the file all count as changes.
    Use as a context manager, or call ``close`` to stop watching.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        target = Path(path).absolute()
        parent = os.path.realpath(target.parent)
        if not os.path.isdir(parent):
            raise ConfigIoError(f"cannot watch {target}: directory {parent} does not exist")
        self._target = os.path.normpath(os.path.join(parent, target.name))
        self._changes: queue.SimpleQueue[None] = queue.SimpleQueue()
        self._observer = Observer()
        try:
            self._observer.schedule(
                _ChangeHandler(self._target, self._changes), parent, recursive=False
            )
            self._observer.start()
        except OSError as exc:
            raise ConfigIoError(str(exc)) from exc

    def has_changed(self) -> bool:
        """Return True if any change arrived since the last True; never blocks."""
        changed = False
        while True:
            try:
                self._changes.get_nowait()
            except queue.Empty:
                return changed
            changed = True

    def close(self) -> None:
        """Stop watching; safe to call more than once."""
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join()

    def __enter__(self) -> ConfigWatcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()