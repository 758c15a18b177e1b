"""RAM and swap usage."""

from __future__ import annotations

import psutil

from ..errors import SysInfoError
from ..widget import MemoryData, Widget


class MemoryWidget(Widget):
    """Reports used and total RAM and swap in bytes."""

    def __init__(self, name: str) -> None:
        self.name = name

    def update(self) -> MemoryData:
        """Return current memory usage; raises SysInfoError if total RAM reads as zero."""
        memory = psutil.virtual_memory()
        if memory.total == 0:
            raise SysInfoError("total memory is zero")
        swap = psutil.swap_memory()
        return MemoryData(
            used_bytes=max(0, memory.total - memory.available),
            total_bytes=memory.total,
            swap_used=swap.used,
            swap_total=swap.total,
        )