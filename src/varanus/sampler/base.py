"""Base interface for snapshot samplers."""

from __future__ import annotations

import abc
import logging
import threading

from ..snapshot import Snapshot

logger = logging.getLogger(__name__)


class BaseSampler(abc.ABC):
    """Abstract base class for samplers.

    A sampler owns one daemon thread that calls :meth:`sample` every
    :attr:`interval` seconds and commits what it reads into the shared
    :class:`~varanus.snapshot.Snapshot`.
    """

    def __init__(self, snapshot: Snapshot, interval: float) -> None:
        self._snapshot = snapshot
        self.interval = interval
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Sampler name used in thread names and log output."""

    @abc.abstractmethod
    def sample(self) -> None:
        """Run one sampling cycle and commit the result to the snapshot."""

    def setup(self) -> None:
        """One-time hook run on the sampler thread before the first cycle."""

    @property
    def retry_delay(self) -> float:
        """Pause after a cycle that raised; never shorter than one interval."""
        return self.interval

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        """Background thread loop."""
        self.setup()
        while not self._stop_event.is_set():
            delay = self.interval
            try:
                self.sample()
            except Exception:
                logger.exception("Sampler %s failed", self.name)
                delay = max(self.interval, self.retry_delay)
            self._stop_event.wait(delay)

    def start(self) -> None:
        """Start sampling in the background."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"sampler-{self.name}",
        )
        self._thread.start()
        logger.debug("Sampler %s started (interval=%.1fs)", self.name, self.interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop the sampler thread."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
