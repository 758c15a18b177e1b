"""Battery charge level and status read from sysfs."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import BatteryError
from ..widget import BatteryData, BatteryStatus, Widget

_log = logging.getLogger(__name__)

POWER_SUPPLY_PATH = "/sys/class/power_supply"

_STATUS_MAP = {
    "Charging": BatteryStatus.CHARGING,
    "Discharging": BatteryStatus.DISCHARGING,
    "Full": BatteryStatus.FULL,
    "Not charging": BatteryStatus.FULL,
}

_NO_BATTERY = BatteryData(charge_pct=None, status=BatteryStatus.FULL)


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _is_battery_supply(path: Path) -> bool:
    raw = _read_text(path / "type")
    return raw is not None and raw.strip() == "Battery"


def _read_capacity(path: Path) -> float | None:
    raw = _read_text(path / "capacity")
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    if not 0 <= value <= 2**32 - 1:
        return None
    return float(value)


def _read_status(path: Path) -> BatteryStatus:
    raw = _read_text(path / "status")
    if raw is None:
        return BatteryStatus.UNKNOWN
    return _STATUS_MAP.get(raw.strip(), BatteryStatus.UNKNOWN)


class BatteryWidget(Widget):
    """Reports battery charge and status; ``charge_pct`` is None without a battery."""

    def __init__(self, name: str, sysfs_root: str | os.PathLike[str] = POWER_SUPPLY_PATH) -> None:
        self.name = name
        self._sysfs_root = Path(sysfs_root)
        self._last: BatteryData | None = None

    def _read_battery(self) -> BatteryData:
        try:
            entries = sorted(self._sysfs_root.iterdir())
        except FileNotFoundError:
            return _NO_BATTERY
        except OSError as exc:
            raise BatteryError(exc) from exc
        for path in entries:
            if _is_battery_supply(path):
                return BatteryData(charge_pct=_read_capacity(path), status=_read_status(path))
        return _NO_BATTERY

    def update(self) -> BatteryData:
        """Read sysfs; on a read failure return the last good data or no-battery."""
        try:
            data = self._read_battery()
        except BatteryError as exc:
            _log.warning("battery %s read error; using last data: %s", self.name, exc)
            return self._last if self._last is not None else _NO_BATTERY
        self._last = data
        return data