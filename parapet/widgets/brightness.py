"""Screen backlight brightness read from sysfs."""

from __future__ import annotations

import os
from pathlib import Path

from ..widget import BrightnessData, Widget

BACKLIGHT_PATH = "/sys/class/backlight"


def _read_sysfs_u32(path: Path) -> int | None:
    try:
        value = int(path.read_text(encoding="utf-8").strip())
    except (OSError, UnicodeDecodeError, ValueError):
        return None
    return value if 0 <= value <= 2**32 - 1 else None


class BrightnessWidget(Widget):
    """Reports backlight brightness as a percentage; 0 without a backlight."""

    def __init__(self, name: str, sysfs_root: str | os.PathLike[str] = BACKLIGHT_PATH) -> None:
        self.name = name
        self._sysfs_root = Path(sysfs_root)
        self._last: BrightnessData | None = None

    def _read_brightness(self) -> float | None:
        try:
            entry = next(iter(sorted(self._sysfs_root.iterdir())), None)
        except OSError:
            return None
        if entry is None:
            return None
        current = _read_sysfs_u32(entry / "brightness")
        maximum = _read_sysfs_u32(entry / "max_brightness")
        if current is None or maximum is None or maximum == 0:
            return None
        return current / maximum * 100.0

    def update(self) -> BrightnessData:
        """Return the current level, or the last known one if it cannot be read."""
        pct = self._read_brightness()
        if pct is None:
            pct = self._last.brightness_pct if self._last is not None else 0.0
        data = BrightnessData(brightness_pct=pct)
        self._last = data
        return data