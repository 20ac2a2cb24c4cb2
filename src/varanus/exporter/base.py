"""Base interface for snapshot exporters."""

from __future__ import annotations

import abc


class BaseExporter(abc.ABC):
    """Abstract base for exporters that ship encoded snapshots."""

    @abc.abstractmethod
    def export(self, payload: bytes) -> None:
        """Ship one encoded snapshot. Must not raise on delivery failure."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Release resources."""
