"""Reporter that periodically ships the snapshot to the collector."""

from __future__ import annotations

import json
import logging
import threading
from typing import Callable

from .exporter.base import BaseExporter
from .exporter.udp import UdpExporter
from .snapshot import Snapshot, SnapshotView

logger = logging.getLogger(__name__)


def encode_snapshot(view: SnapshotView) -> bytes:
    """Serialize a snapshot view into the collector's JSON wire format."""
    record = {
        "AuthKey": view.auth_key,
        "Hostname": view.hostname,
        "Uptime": view.uptime_seconds,
        "Processes": view.process_count,
        "LoadAvg": list(view.load_averages),
        "MemTotal": view.mem_total_kb,
        "MemFree": view.mem_free_kb,
        "SwapTotal": view.swap_total_kb,
        "SwapFree": view.swap_free_kb,
        "NetDown": view.net_down_bps,
        "NetUp": view.net_up_bps,
        "Disks": [
            {
                "Total": d.total_kb,
                "Free": d.free_kb,
                "Mount": d.mount_path,
                "Filesystem": d.filesystem_id,
            }
            for d in view.disks
        ],
    }
    return json.dumps(record, separators=(",", ":")).encode("utf-8")


class Reporter:
    """Sends one encoded snapshot per interval after an initial warm-up.

    The exporter is built once, after the warm-up. If that fails the
    reporter logs a SEVERE line and its thread ends; samplers are not
    affected. Sending is fire-and-forget.
    """

    def __init__(
        self,
        snapshot: Snapshot,
        address: str,
        *,
        warmup: float = 5.0,
        interval: float = 1.0,
        exporter_factory: Callable[[str], BaseExporter] = UdpExporter,
    ) -> None:
        self._snapshot = snapshot
        self._address = address
        self._warmup = warmup
        self._interval = interval
        self._exporter_factory = exporter_factory
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self.reports_sent = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def report_once(self, exporter: BaseExporter) -> None:
        """Encode the current snapshot and hand it to *exporter*."""
        exporter.export(encode_snapshot(self._snapshot.read()))
        self.reports_sent += 1

    def _run(self) -> None:
        """Background thread loop."""
        if self._stop_event.wait(self._warmup):
            return
        try:
            exporter = self._exporter_factory(self._address)
        except (OSError, ValueError) as exc:
            logger.critical("Unable to open a socket to the configured collector %s: %s", self._address, exc)
            return

        try:
            while not self._stop_event.is_set():
                try:
                    self.report_once(exporter)
                except Exception:
                    logger.exception("Exporter failed")
                self._stop_event.wait(self._interval)
        finally:
            exporter.shutdown()

    def start(self) -> None:
        """Start reporting in the background."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="reporter")
        self._thread.start()
        logger.info("Reporter started (collector=%s, interval=%.1fs)", self._address, self._interval)

    def stop(self, timeout: float | None = 5.0) -> None:
        """Stop the reporter thread."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
