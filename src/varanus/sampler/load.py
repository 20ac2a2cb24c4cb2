"""Load average, uptime and process count sampler."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import psutil

from ..procfs import parse_loadavg, parse_uptime
from ..snapshot import Snapshot
from .base import BaseSampler

logger = logging.getLogger(__name__)


class LoadSampler(BaseSampler):
    """Samples process count, uptime and the kernel load averages.

    Each of the three values is read and committed independently of the
    others: one that fails keeps its previous snapshot value. *proc_root*
    only relocates the uptime and loadavg files; the process count always
    comes from ``psutil.pids()`` against the host process table.
    """

    def __init__(self, snapshot: Snapshot, interval: float = 1.0, proc_root: str | Path = "/proc") -> None:
        super().__init__(snapshot, interval)
        self._proc_root = Path(proc_root)

    @property
    def name(self) -> str:
        return "load"

    def _read(self, filename: str) -> str | None:
        try:
            return (self._proc_root / filename).read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to read %s: %s", self._proc_root / filename, exc)
            return None

    def sample(self) -> None:
        changes: dict[str, Any] = {}

        try:
            changes["process_count"] = len(psutil.pids())
        except (OSError, psutil.Error) as exc:
            logger.warning("Failed to count processes: %s", exc)

        raw = self._read("uptime")
        if raw is not None:
            uptime = parse_uptime(raw)
            if uptime is None:
                logger.warning("Unrecognised uptime record: %r", raw)
            else:
                changes["uptime_seconds"] = uptime

        raw = self._read("loadavg")
        if raw is not None:
            load = parse_loadavg(raw)
            if load is None:
                logger.warning("Unrecognised loadavg record: %r", raw)
            else:
                changes["load_averages"] = load

        if changes:
            self._snapshot.update(**changes)
