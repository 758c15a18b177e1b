"""Exception hierarchy for the status bar core."""

from __future__ import annotations

from os import PathLike


class ParapetError(Exception):
    """Base class for every error raised by the package."""

    prefix = ""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}" if self.prefix else self.message


class SysInfoError(ParapetError):
    """System information could not be gathered."""

    prefix = "sysinfo error"


class BatteryError(ParapetError):
    """Reading battery state from sysfs failed."""

    prefix = "battery read error"

    def __init__(self, cause: OSError | str = "") -> None:
        super().__init__(str(cause))
        self.cause = cause if isinstance(cause, OSError) else None


class WidgetNotFoundError(ParapetError):
    """A requested widget is not in the active registry."""

    prefix = "widget not found"

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


class HttpError(ParapetError):
    """Fetching widget data over HTTP failed."""

    prefix = "http error"


class DBusError(ParapetError):
    """A D-Bus query for widget data failed."""

    prefix = "dbus error"


class ConfigError(ParapetError):
    """Base class for configuration failures."""


class ConfigNotFoundError(ConfigError):
    """The configuration file does not exist."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = path
        super().__init__(f"config file not found at {path}")


class ConfigParseError(ConfigError):
    """The configuration source is not valid TOML or has the wrong shape."""

    prefix = "config parse error"


class ConfigValidationError(ConfigError):
    """A configuration field failed a validation rule."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"config validation error in field '{field}': {reason}")


class ConfigIoError(ConfigError):
    """Reading the configuration file failed."""

    prefix = "io error reading config"