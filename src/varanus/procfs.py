"""Parsers for the kernel text files and the ``df`` table the samplers read.

Every parser is tolerant: keys or rows it cannot understand are left out of
the result instead of raising, and callers decide what an absent value
means.
"""

from __future__ import annotations

import logging
import re

from .snapshot import Disk

logger = logging.getLogger(__name__)

_MEMINFO_LINE = re.compile(r"^(\w[\w()]*):\s*([0-9]+)")
_DF_ROW = re.compile(r"^(.+?)\s+([0-9]+)\s+[0-9]+\s+([0-9]+)\s+[0-9]+%\s+(.+)$")


def parse_meminfo(text: str) -> dict[str, int]:
    """Parse ``/proc/meminfo`` into ``{key: value_kb}``."""
    values: dict[str, int] = {}
    for line in text.splitlines():
        match = _MEMINFO_LINE.match(line.strip())
        if match:
            values[match.group(1)] = int(match.group(2))
    return values


def parse_uptime(text: str) -> int | None:
    """Return whole seconds since boot from ``/proc/uptime``, or None."""
    fields = text.split()
    if not fields:
        return None
    try:
        return int(float(fields[0]))
    except ValueError:
        return None


def parse_loadavg(text: str) -> tuple[str, str, str, str] | None:
    """Return the 1m, 5m, 15m loads and running/total tasks, or None.

    Values are kept as the kernel prints them.
    """
    fields = text.split()
    if len(fields) < 4:
        return None
    one, five, fifteen, tasks = fields[:4]
    try:
        float(one), float(five), float(fifteen)
    except ValueError:
        return None
    if "/" not in tasks:
        return None
    return one, five, fifteen, tasks


def parse_df_row(line: str) -> Disk | None:
    """Parse one data row of ``df --block-size=1000`` output."""
    match = _DF_ROW.match(line.strip())
    if match is None:
        return None
    filesystem, total, free, mount = match.groups()
    return Disk(
        total_kb=int(total),
        free_kb=int(free),
        mount_path=mount.strip(),
        filesystem_id=filesystem,
    )


def parse_df(text: str) -> list[Disk]:
    """Parse full ``df`` output, header included, into Disk records.

    Rows that do not match the expected column layout are dropped.
    """
    disks: list[Disk] = []
    lines = text.splitlines()
    for line in lines[1:]:
        if not line.strip():
            continue
        disk = parse_df_row(line)
        if disk is None:
            logger.debug("Skipping unrecognised df row: %r", line)
            continue
        disks.append(disk)
    return disks
