"""Tests for the shared snapshot and its consistency under concurrency."""

import threading

import pytest

from varanus.snapshot import UNKNOWN, Disk, Snapshot


def test_initial_values():
    view = Snapshot().read()
    assert view.auth_key == ""
    assert view.process_count == 0
    assert view.load_averages == ("0.00", "0.00", "0.00", "0/0")
    assert view.mem_total_kb == UNKNOWN
    assert view.swap_free_kb == UNKNOWN
    assert view.disks == ()


def test_update_and_attribute_access():
    snapshot = Snapshot()
    snapshot.update(hostname="box", disks=[Disk(10, 5, "/", "/dev/sda1")])
    assert snapshot.hostname == "box"
    assert isinstance(snapshot.disks, tuple)
    assert snapshot.disks[0].mount_path == "/"


def test_unknown_field_rejected():
    snapshot = Snapshot()
    with pytest.raises(AttributeError):
        snapshot.update(cpu_temp=80)
    with pytest.raises(AttributeError):
        snapshot.cpu_temp


def test_read_is_immutable_copy():
    snapshot = Snapshot(uptime_seconds=1)
    view = snapshot.read()
    snapshot.update(uptime_seconds=2)
    assert view.uptime_seconds == 1
    assert snapshot.read().uptime_seconds == 2


def test_disk_is_frozen():
    disk = Disk(10, 5, "/", "/dev/sda1")
    with pytest.raises(AttributeError):
        disk.free_kb = 1


def test_to_dict():
    snapshot = Snapshot(auth_key="k", disks=[Disk(10, 5, "/", "/dev/sda1")])
    data = snapshot.read().to_dict()
    assert data["auth_key"] == "k"
    assert data["load_averages"] == ["0.00", "0.00", "0.00", "0/0"]
    assert data["disks"] == [{"total_kb": 10, "free_kb": 5, "mount_path": "/", "filesystem_id": "/dev/sda1"}]


def test_concurrent_writers_never_tear_reads():
    """Readers only ever see whole sampler cycles.

    Each writer stamps every field it owns with its own cycle number, so a
    consistent read has one cycle number per writer across those fields.
    """
    snapshot = Snapshot()
    stop = threading.Event()
    cycles = 2000
    errors: list[str] = []

    def load_writer():
        for n in range(1, cycles):
            snapshot.update(
                uptime_seconds=n,
                process_count=n,
                load_averages=(str(n), str(n), str(n), f"{n}/{n}"),
            )

    def memory_writer():
        for n in range(1, cycles):
            snapshot.update(mem_total_kb=n, mem_free_kb=n, swap_total_kb=n, swap_free_kb=n)

    def network_writer():
        for n in range(1, cycles):
            snapshot.update(net_down_bps=n, net_up_bps=n)

    def disk_writer():
        for n in range(1, cycles):
            snapshot.update(disks=[Disk(n, n, f"/m{i}", f"/dev/d{i}") for i in range(n % 7 + 1)])

    def identity_writer():
        for n in range(1, cycles):
            snapshot.update(hostname=f"host-{n}", auth_key=f"key-{n}")

    def reader():
        while not stop.is_set():
            v = snapshot.read()
            if not (v.uptime_seconds == v.process_count and v.load_averages[0] == str(v.uptime_seconds)
                    or v.uptime_seconds == 0):
                errors.append(f"torn load cycle: {v}")
            if len(set(v.load_averages[:3])) != 1:
                errors.append(f"torn load averages: {v.load_averages}")
            if not v.mem_total_kb == v.mem_free_kb == v.swap_total_kb == v.swap_free_kb:
                errors.append("torn memory cycle")
            if v.net_down_bps != v.net_up_bps:
                errors.append("torn network cycle")
            if v.disks:
                n = v.disks[0].total_kb
                if len(v.disks) != n % 7 + 1 or any(d.total_kb != n for d in v.disks):
                    errors.append(f"torn disks: {v.disks}")
            if v.hostname and v.hostname[5:] != v.auth_key[4:]:
                errors.append("torn identity cycle")

    writers = [
        threading.Thread(target=fn)
        for fn in (load_writer, memory_writer, network_writer, disk_writer, identity_writer)
    ]
    readers = [threading.Thread(target=reader) for _ in range(2)]
    for t in readers + writers:
        t.start()
    for t in writers:
        t.join()
    stop.set()
    for t in readers:
        t.join()

    assert errors == []
    final = snapshot.read()
    assert final.uptime_seconds == cycles - 1
    assert final.net_down_bps == cycles - 1
