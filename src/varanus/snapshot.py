"""Shared telemetry snapshot written by samplers and read by the reporter."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any

# Memory and swap counters hold this until the first successful parse.
UNKNOWN = -1


@dataclass(slots=True, frozen=True)
class Disk:
    """Immutable usage record for one mounted volume."""

    total_kb: int
    free_kb: int
    mount_path: str
    filesystem_id: str


@dataclass(slots=True, frozen=True)
class SnapshotView:
    """Consistent, immutable copy of every snapshot field."""

    auth_key: str = ""
    hostname: str = ""
    uptime_seconds: int = 0
    process_count: int = 0
    load_averages: tuple[str, str, str, str] = ("0.00", "0.00", "0.00", "0/0")
    mem_total_kb: int = UNKNOWN
    mem_free_kb: int = UNKNOWN
    swap_total_kb: int = UNKNOWN
    swap_free_kb: int = UNKNOWN
    net_down_bps: int = 0
    net_up_bps: int = 0
    disks: tuple[Disk, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form, disks included."""
        data = dataclasses.asdict(self)
        data["load_averages"] = list(self.load_averages)
        data["disks"] = [dataclasses.asdict(d) for d in self.disks]
        return data


_FIELDS = frozenset(f.name for f in dataclasses.fields(SnapshotView))
_SEQUENCE_FIELDS = frozenset({"load_averages", "disks"})


class Snapshot:
    """The single live aggregate of the latest value of every metric.

    The current state is an immutable :class:`SnapshotView`. Writers swap
    in a new view under a lock, so each :meth:`update` call lands as a
    whole and :meth:`read` always returns one writer's complete cycle.
    """

    def __init__(self, **initial: Any) -> None:
        self._lock = threading.Lock()
        self._view = SnapshotView()
        if initial:
            self.update(**initial)

    def update(self, **fields: Any) -> None:
        """Replace the given fields in one critical section."""
        unknown = set(fields) - _FIELDS
        if unknown:
            raise AttributeError(f"Unknown snapshot field(s): {', '.join(sorted(unknown))}")
        for name in _SEQUENCE_FIELDS & set(fields):
            fields[name] = tuple(fields[name])
        with self._lock:
            self._view = dataclasses.replace(self._view, **fields)

    def read(self) -> SnapshotView:
        """Return the current consistent view."""
        with self._lock:
            return self._view

    def __getattr__(self, name: str) -> Any:
        if name in _FIELDS:
            return getattr(self.read(), name)
        raise AttributeError(name)
