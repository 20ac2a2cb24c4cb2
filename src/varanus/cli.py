"""CLI interface for varanus."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading

from . import __version__
from .config import AgentConfig, ConfigError, load_config
from .logs import configure_logging
from .snapshot import Snapshot, SnapshotView

logger = logging.getLogger(__name__)


def _load_or_exit(path: str | None) -> AgentConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        logger.critical("%s", exc)
        sys.exit(1)


def _cmd_run(args: argparse.Namespace) -> None:
    """Run the agent until interrupted."""
    cfg = _load_or_exit(args.config)
    configure_logging(cfg.log_level)
    logger.info("varanus %s is starting", __version__)

    from .reporter import Reporter
    from .sampler.manager import SamplerManager

    snapshot = Snapshot()
    manager = SamplerManager(cfg, snapshot)
    reporter = Reporter(
        snapshot,
        cfg.collector_address,
        warmup=cfg.intervals.report_warmup_seconds,
        interval=cfg.intervals.report_seconds,
    )

    stop = threading.Event()

    def _handle_signal(_sig: int, _frame: object) -> None:
        stop.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    manager.start()
    reporter.start()
    try:
        while not stop.is_set():
            stop.wait(0.5)
    finally:
        reporter.stop()
        manager.stop()
    logger.info("varanus stopped")


def print_snapshot(view: SnapshotView) -> None:
    """Pretty-print a snapshot to the terminal using Rich."""
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"varanus snapshot ({view.hostname or 'unknown host'})", show_lines=False)
    table.add_column("Metric", style="cyan", width=16)
    table.add_column("Value", justify="right", width=32)

    table.add_row("Uptime", f"{view.uptime_seconds} s")
    table.add_row("Processes", str(view.process_count))
    table.add_row("Load average", " ".join(view.load_averages))
    table.add_row("Memory", f"{view.mem_free_kb} / {view.mem_total_kb} kB free")
    table.add_row("Swap", f"{view.swap_free_kb} / {view.swap_total_kb} kB free")
    table.add_row("Download", f"{view.net_down_bps} B/s")
    table.add_row("Upload", f"{view.net_up_bps} B/s")

    disks = Table(title="Disks", show_lines=False)
    disks.add_column("Filesystem", style="magenta")
    disks.add_column("Mount", style="green")
    disks.add_column("Total (kB)", justify="right")
    disks.add_column("Free (kB)", justify="right")
    for disk in view.disks:
        disks.add_row(disk.filesystem_id, disk.mount_path, str(disk.total_kb), str(disk.free_kb))

    console = Console()
    console.print(table)
    console.print(disks)


def _cmd_show(args: argparse.Namespace) -> None:
    """Sample every source once and print the result."""
    cfg = _load_or_exit(args.config)
    configure_logging(cfg.log_level)

    from .sampler.manager import SamplerManager

    snapshot = Snapshot()
    SamplerManager(cfg, snapshot).sample_once()
    print_snapshot(snapshot.read())


def _cmd_version(_args: argparse.Namespace) -> None:
    print(f"varanus {__version__}")


def main(argv: list[str] | None = None) -> None:
    """Entry point for the varanus CLI."""
    configure_logging()

    parser = argparse.ArgumentParser(
        prog="varanus",
        description="Sample host metrics and report them to a collector over UDP",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to varanus.yaml or config.json")
    sub = parser.add_subparsers(dest="command")

    run_p = sub.add_parser("run", help="Run the agent")
    run_p.set_defaults(func=_cmd_run)

    show_p = sub.add_parser("show", help="Sample once and print the snapshot")
    show_p.set_defaults(func=_cmd_show)

    ver_p = sub.add_parser("version", help="Print version")
    ver_p.set_defaults(func=_cmd_version)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
