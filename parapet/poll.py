"""Interval-based scheduler that drives widget updates."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from .errors import ParapetError
from .widget import Widget, WidgetData

_log = logging.getLogger(__name__)


@dataclass
class _Registration:
    widget: Widget
    interval_ms: int
    last_polled: float | None = None


class Poller:
    """Refreshes registered widgets once their interval has elapsed.

    Times are monotonic seconds, as returned by ``time.monotonic()``. Widgets
    whose update raises are logged and skipped; they are retried on the next
    poll because their last poll time is left unchanged.
    """

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []

    def register(self, widget: Widget, interval_ms: int) -> None:
        """Add ``widget``, polled on the first call and every ``interval_ms`` after."""
        self._registrations.append(_Registration(widget, interval_ms))

    def poll(self, now: float | None = None) -> list[tuple[str, WidgetData]]:
        """Update every due widget and return ``(name, data)`` for each success."""
        if now is None:
            now = time.monotonic()
        results: list[tuple[str, WidgetData]] = []
        for reg in self._registrations:
            if reg.last_polled is not None and now - reg.last_polled < reg.interval_ms / 1000:
                continue
            try:
                data = reg.widget.update()
            except ParapetError as exc:
                _log.warning("widget %s update failed; skipping: %s", reg.widget.name, exc)
                continue
            reg.last_polled = now
            results.append((reg.widget.name, data))
        return results