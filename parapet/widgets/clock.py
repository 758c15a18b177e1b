"""Current local date and time formatted with a strftime pattern."""

from __future__ import annotations

from datetime import datetime

from ..widget import ClockData, Widget


class ClockWidget(Widget):
    """Formats the current local time with ``format`` (e.g. ``"%H:%M"``)."""

    def __init__(self, name: str, format: str) -> None:
        self.name = name
        self.format = format

    def update(self) -> ClockData:
        """Return the current local time rendered with the format string."""
        return ClockData(display=datetime.now().astimezone().strftime(self.format))