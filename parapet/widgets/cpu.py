"""CPU usage, per-core usage and package temperature."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import psutil

from ..widget import CpuData, Widget

_log = logging.getLogger(__name__)


def _busy_and_total(times: Any) -> tuple[float, float]:
    """Return ``(busy, total)`` seconds for one CPU times sample."""
    total = sum(times) - getattr(times, "guest", 0.0) - getattr(times, "guest_nice", 0.0)
    idle = times.idle + getattr(times, "iowait", 0.0)
    return total - idle, total


def _usage_between(before: Any, after: Any) -> float:
    """Percentage of time spent busy between two samples, clamped to 0..100."""
    busy_before, total_before = _busy_and_total(before)
    busy_after, total_after = _busy_and_total(after)
    elapsed = total_after - total_before
    if elapsed <= 0:
        return 0.0
    return min(100.0, max(0.0, (busy_after - busy_before) / elapsed * 100.0))


def _select_temperature(readings: Iterable[tuple[str, float]]) -> float | None:
    """Pick the CPU temperature from ``(label, celsius)`` sensor readings.

    A label containing "package" wins; otherwise the first label containing
    "core" or "cpu"; otherwise the first positive reading of any sensor.
    """
    readings = list(readings)
    lowered = [(label.lower(), temp) for label, temp in readings]
    for label, temp in lowered:
        if "package" in label:
            return temp
    for label, temp in lowered:
        if "core" in label or "cpu" in label:
            return temp
    return next((temp for _, temp in readings if temp > 0.0), None)


def _read_sensors() -> list[tuple[str, float]]:
    reader = getattr(psutil, "sensors_temperatures", None)
    if reader is None:
        return []
    try:
        groups = reader()
    except (OSError, RuntimeError):
        return []
    return [
        (f"{chip} {sensor.label}".strip(), float(sensor.current))
        for chip, sensors in groups.items()
        for sensor in sensors
    ]


def _sample() -> tuple[Any, Sequence[Any]]:
    return psutil.cpu_times(percpu=False), psutil.cpu_times(percpu=True)


class CpuWidget(Widget):
    """Reports aggregate and per-core CPU usage.

    The first update reports zero usage and no per-core values, since a usage
    figure needs two samples to compare.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._total, self._per_core = _sample()
        self._first_call = True

    def update(self) -> CpuData:
        """Sample CPU times and return usage since the previous update."""
        total, per_core = _sample()
        temp = _select_temperature(_read_sensors())
        previous_total, previous_per_core = self._total, self._per_core
        self._total, self._per_core = total, per_core
        if self._first_call:
            self._first_call = False
            _log.debug("cpu %s: first call, returning zero", self.name)
            return CpuData(usage_pct=0.0, per_core=(), temp_celsius=temp)
        return CpuData(
            usage_pct=_usage_between(previous_total, total),
            per_core=tuple(
                _usage_between(before, after)
                for before, after in zip(previous_per_core, per_core)
            ),
            temp_celsius=temp,
        )