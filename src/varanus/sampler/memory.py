"""Memory and swap sampler."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..procfs import parse_meminfo
from ..snapshot import Snapshot
from .base import BaseSampler

logger = logging.getLogger(__name__)


class MemorySampler(BaseSampler):
    """Samples memory and swap totals from ``/proc/meminfo``.

    ``mem_free_kb`` is free plus buffers plus page cache, i.e. memory
    available to new allocations, not the kernel's raw ``MemFree``.
    """

    def __init__(self, snapshot: Snapshot, interval: float = 3.0, meminfo_path: str | Path = "/proc/meminfo") -> None:
        super().__init__(snapshot, interval)
        self._path = Path(meminfo_path)

    @property
    def name(self) -> str:
        return "memory"

    def sample(self) -> None:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to read %s: %s", self._path, exc)
            return

        info = parse_meminfo(text)
        changes: dict[str, Any] = {}

        if "MemTotal" in info:
            changes["mem_total_kb"] = info["MemTotal"]
        if "MemFree" in info:
            changes["mem_free_kb"] = info["MemFree"] + info.get("Buffers", 0) + info.get("Cached", 0)
        if "SwapTotal" in info:
            changes["swap_total_kb"] = info["SwapTotal"]
        if "SwapFree" in info:
            changes["swap_free_kb"] = info["SwapFree"]

        missing = {"MemTotal", "MemFree", "SwapTotal", "SwapFree"} - info.keys()
        if missing:
            logger.warning("meminfo is missing %s", ", ".join(sorted(missing)))
        if changes:
            self._snapshot.update(**changes)
