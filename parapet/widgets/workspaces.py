"""Placeholder workspace data; real workspace state comes from the display layer."""

from __future__ import annotations

from ..widget import Widget, WorkspacesData


class WorkspacesWidget(Widget):
    """Always reports a single active workspace with no names."""

    def __init__(self, name: str) -> None:
        self.name = name

    def update(self) -> WorkspacesData:
        """Return one workspace, index 0 active, no names."""
        return WorkspacesData(count=1, active=0, names=())