"""Network throughput sampler."""

from __future__ import annotations

import logging

import psutil

from ..snapshot import Snapshot
from .base import BaseSampler

logger = logging.getLogger(__name__)


class NetworkSampler(BaseSampler):
    """Estimates download and upload rates for one interface.

    Each cycle reads the cumulative byte counters twice, one *window*
    apart, and stores the difference scaled to bytes per second. Cycles
    run back to back, so the window is the sampling cadence.
    """

    def __init__(self, snapshot: Snapshot, interface: str, window: float = 1.0) -> None:
        super().__init__(snapshot, interval=0)
        self._interface = interface
        self._window = window

    @property
    def name(self) -> str:
        return "network"

    @property
    def retry_delay(self) -> float:
        return self._window

    def _read_counters(self) -> tuple[int, int] | None:
        """Return cumulative (received, sent) bytes, or None if unavailable."""
        try:
            counters = psutil.net_io_counters(pernic=True)
        except (OSError, psutil.Error) as exc:
            logger.warning("Failed to read network counters: %s", exc)
            return None
        nio = counters.get(self._interface)
        if nio is None:
            logger.warning("Network interface %s not found", self._interface)
            return None
        return nio.bytes_recv, nio.bytes_sent

    def sample(self) -> None:
        first = self._read_counters()
        self._stop_event.wait(self._window)
        if first is None:
            return
        second = self._read_counters()
        if second is None:
            return

        down = second[0] - first[0]
        up = second[1] - first[1]
        if down < 0 or up < 0:
            logger.debug("Counters for %s went backwards, skipping cycle", self._interface)
            return

        if self._window > 0:
            down = round(down / self._window)
            up = round(up / self._window)
        self._snapshot.update(net_down_bps=int(down), net_up_bps=int(up))
