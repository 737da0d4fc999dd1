"""Shared test fixtures."""

from __future__ import annotations

import socket
from collections import namedtuple
from collections.abc import Callable

import psutil
import pytest

from portdetective.actions.kill import KillAction
from portdetective.engine import QueryEngine
from portdetective.net.psutil_ import SocketEnumerator
from portdetective.proc.models import ProcessSnapshot
from portdetective.proc.resolver import ProcessResolver

# Mock psutil connection objects
MockAddr = namedtuple("MockAddr", ["ip", "port"])
MockConn = namedtuple(
    "MockConn", ["fd", "family", "type", "laddr", "raddr", "status", "pid"]
)


def make_tcp(
    pid: int | None = 500,
    port: int = 8080,
    status: str = psutil.CONN_LISTEN,
    ip: str = "0.0.0.0",
) -> MockConn:
    return MockConn(
        fd=3,
        family=socket.AF_INET,
        type=socket.SOCK_STREAM,
        laddr=MockAddr(ip, port),
        raddr=(),
        status=status,
        pid=pid,
    )


def make_udp(pid: int | None = 600, port: int = 5353, ip: str = "0.0.0.0") -> MockConn:
    return MockConn(
        fd=4,
        family=socket.AF_INET,
        type=socket.SOCK_DGRAM,
        laddr=MockAddr(ip, port),
        raddr=(),
        status=psutil.CONN_NONE,
        pid=pid,
    )


class FakeSocketTable:
    """Returns canned rows, or raises ``error`` if set."""

    def __init__(self, rows: list | None = None, error: Exception | None = None):
        self.rows = list(rows or [])
        self.error = error
        self.kinds: list[str] = []

    def connections(self, kind: str) -> list:
        self.kinds.append(kind)
        if self.error is not None:
            raise self.error
        return list(self.rows)


class FakeProcessTable:
    """In-memory process table; missing PIDs behave like exited processes."""

    def __init__(self, snapshots: dict[int, ProcessSnapshot] | None = None):
        self.snapshots = dict(snapshots or {})
        self.lookups: list[int] = []

    def lookup(self, pid: int) -> ProcessSnapshot | None:
        self.lookups.append(pid)
        return self.snapshots.get(pid)

    def name_of(self, pid: int) -> str | None:
        snap = self.snapshots.get(pid)
        return snap.name if snap else None


class FakeUserDirectory:
    def __init__(self, names: dict[int, str] | None = None):
        self.names = dict(names or {})

    def name_for(self, uid: int) -> str | None:
        return self.names.get(uid)


class SignalRecorder:
    """Stands in for os.kill and records what would have been sent."""

    def __init__(self, error: OSError | None = None):
        self.calls: list[tuple[int, int]] = []
        self.error = error

    def __call__(self, pid: int, sig: int) -> None:
        self.calls.append((pid, sig))
        if self.error is not None:
            raise self.error


@pytest.fixture
def nginx_snapshot() -> ProcessSnapshot:
    return ProcessSnapshot(
        pid=500,
        name="nginx",
        uid=0,
        cmdline=("nginx", "-g"),
        cwd="/var/www",
        ppid=1,
        create_time=1593561600.0,
    )


@pytest.fixture
def init_snapshot() -> ProcessSnapshot:
    return ProcessSnapshot(pid=1, name="systemd", uid=0, cmdline=("/sbin/init",))


@pytest.fixture
def users() -> FakeUserDirectory:
    return FakeUserDirectory({0: "root", 1000: "dev"})


@pytest.fixture
def process_table(
    nginx_snapshot: ProcessSnapshot, init_snapshot: ProcessSnapshot
) -> FakeProcessTable:
    return FakeProcessTable({500: nginx_snapshot, 1: init_snapshot})


@pytest.fixture
def signals() -> SignalRecorder:
    return SignalRecorder()


@pytest.fixture
def make_engine(
    process_table: FakeProcessTable,
    users: FakeUserDirectory,
    signals: SignalRecorder,
) -> Callable[..., QueryEngine]:
    """Build a QueryEngine over fake socket and process tables."""

    def _make(rows: list | None = None, error: Exception | None = None) -> QueryEngine:
        return QueryEngine(
            enumerator=SocketEnumerator(table=FakeSocketTable(rows, error)),
            resolver=ProcessResolver(table=process_table, users=users),
            killer=KillAction(send_signal=signals),
        )

    return _make
