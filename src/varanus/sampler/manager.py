"""Sampler manager that builds and runs every sampler."""

from __future__ import annotations

import logging

from ..config import AgentConfig
from ..snapshot import Snapshot
from .base import BaseSampler
from .disk import DiskSampler
from .identity import IdentitySampler
from .load import LoadSampler
from .memory import MemorySampler
from .network import NetworkSampler

logger = logging.getLogger(__name__)


class SamplerManager:
    """Owns the samplers that feed one shared :class:`Snapshot`.

    Every sampler runs on its own thread and clock; the manager only
    starts and stops them together.
    """

    def __init__(self, config: AgentConfig, snapshot: Snapshot) -> None:
        self._config = config
        self._snapshot = snapshot
        intervals = config.intervals
        self._samplers: list[BaseSampler] = [
            LoadSampler(snapshot, interval=intervals.load_seconds),
            MemorySampler(snapshot, interval=intervals.memory_seconds),
            NetworkSampler(snapshot, config.network_adapter, window=intervals.network_window_seconds),
            DiskSampler(snapshot, interval=intervals.disk_seconds, timeout=intervals.disk_timeout_seconds),
            IdentitySampler(snapshot, config.auth_key, interval=intervals.identity_seconds),
        ]

    @property
    def samplers(self) -> list[BaseSampler]:
        return list(self._samplers)

    def sample_once(self) -> None:
        """Run setup and one cycle of every sampler in the calling thread."""
        for sampler in self._samplers:
            try:
                sampler.setup()
                sampler.sample()
            except Exception:
                logger.exception("Sampler %s failed", sampler.name)

    def start(self) -> None:
        """Start every sampler thread."""
        for sampler in self._samplers:
            sampler.start()
        logger.info("Started %d samplers", len(self._samplers))

    def stop(self) -> None:
        """Stop every sampler thread."""
        for sampler in self._samplers:
            sampler.stop()
        logger.info("Samplers stopped")
