"""Filesystem usage for one mount point plus a summary of all mounts."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import psutil

from ..widget import DiskData, DiskEntry, Widget

_log = logging.getLogger(__name__)


def _mounted_filesystems() -> Iterator[DiskEntry]:
    """Yield usage for every distinct mount point that can be queried."""
    seen: set[str] = set()
    for partition in psutil.disk_partitions(all=True):
        mount = partition.mountpoint
        if mount in seen:
            continue
        seen.add(mount)
        try:
            usage = psutil.disk_usage(mount)
        except OSError:
            continue
        yield DiskEntry(
            mount=mount,
            used_bytes=max(0, usage.total - usage.free),
            total_bytes=usage.total,
        )


class DiskWidget(Widget):
    """Reports usage of ``mount``; zeros if that mount point is not present."""

    def __init__(self, name: str, mount: str) -> None:
        self.name = name
        self.mount = mount

    def update(self) -> DiskData:
        """Return usage of the configured mount and of every non-empty filesystem."""
        entries = list(_mounted_filesystems())
        all_disks = tuple(entry for entry in entries if entry.total_bytes > 0)
        primary = next((entry for entry in entries if entry.mount == self.mount), None)
        if primary is None:
            _log.warning(
                "disk %s: mount point %s not found in disk list; returning zeros",
                self.name,
                self.mount,
            )
            used, total = 0, 0
        else:
            used, total = primary.used_bytes, primary.total_bytes
        return DiskData(
            mount=self.mount, used_bytes=used, total_bytes=total, all_disks=all_disks
        )