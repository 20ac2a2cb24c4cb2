"""Mounted volume usage sampler."""

from __future__ import annotations

import logging
import subprocess

from ..procfs import parse_df
from ..snapshot import Snapshot
from .base import BaseSampler

logger = logging.getLogger(__name__)

DF_COMMAND = ("df", "--block-size=1000")


class DiskSampler(BaseSampler):
    """Samples usage of every mounted filesystem by running ``df``.

    The parsed volumes replace the snapshot's ``disks`` tuple as a whole.
    When ``df`` fails or exceeds *timeout* the previous tuple stays.
    """

    def __init__(self, snapshot: Snapshot, interval: float = 60.0, timeout: float = 30.0) -> None:
        super().__init__(snapshot, interval)
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "disk"

    def sample(self) -> None:
        try:
            result = subprocess.run(
                DF_COMMAND,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=True,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %.0fs: %s", self._timeout, " ".join(DF_COMMAND))
            return
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.warning("Failed to run command: %s", " ".join(DF_COMMAND))
            logger.warning("%s", exc)
            return

        self._snapshot.update(disks=parse_df(result.stdout))
