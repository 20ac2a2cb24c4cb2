"""Host identity sampler."""

from __future__ import annotations

import logging
import socket

from ..snapshot import Snapshot
from .base import BaseSampler

logger = logging.getLogger(__name__)


class IdentitySampler(BaseSampler):
    """Publishes the static auth key and keeps the hostname current."""

    def __init__(self, snapshot: Snapshot, auth_key: str, interval: float = 60.0) -> None:
        super().__init__(snapshot, interval)
        self._auth_key = auth_key

    @property
    def name(self) -> str:
        return "identity"

    def setup(self) -> None:
        self._snapshot.update(auth_key=self._auth_key)

    def sample(self) -> None:
        try:
            hostname = socket.gethostname()
        except OSError as exc:
            logger.warning("Failed to resolve hostname: %s", exc)
            return
        self._snapshot.update(hostname=hostname)
