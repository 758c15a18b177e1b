"""Received and transmitted bytes for one network interface."""

from __future__ import annotations

import logging
from typing import Any

import psutil

from ..widget import NetworkData, Widget

_log = logging.getLogger(__name__)

LOOPBACK = "lo"


def _counters() -> dict[str, Any]:
    return dict(psutil.net_io_counters(pernic=True))


class NetworkWidget(Widget):
    """Reports bytes moved on one interface since the previous update.

    ``interface="auto"`` picks the first non-loopback interface, falling back
    to loopback when there is none. The first update reports zeros.
    """

    def __init__(self, name: str, interface: str) -> None:
        self.name = name
        counters = _counters()
        if interface == "auto":
            found = next((iface for iface in counters if iface != LOOPBACK), None)
            if found is None:
                _log.warning("no non-loopback network interface found; falling back to lo")
                found = LOOPBACK
            interface = found
        self.interface = interface
        self._previous = counters.get(interface)
        self._first_call = True

    def update(self) -> NetworkData:
        """Return received and transmitted bytes since the previous update."""
        current = _counters().get(self.interface)
        previous, self._previous = self._previous, current
        if self._first_call:
            self._first_call = False
            _log.debug("network %s: first call, returning zero", self.name)
            return NetworkData(rx_bytes_per_sec=0, tx_bytes_per_sec=0, interface=self.interface)
        if current is None or previous is None:
            rx, tx = 0, 0
        else:
            rx = max(0, current.bytes_recv - previous.bytes_recv)
            tx = max(0, current.bytes_sent - previous.bytes_sent)
        return NetworkData(rx_bytes_per_sec=rx, tx_bytes_per_sec=tx, interface=self.interface)