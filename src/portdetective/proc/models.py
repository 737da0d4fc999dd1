"""Process data models — raw snapshots and enriched records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from portdetective.net.models import Protocol


@dataclass(frozen=True)
class ProcessSnapshot:
    """What one process-table lookup returned, before enrichment."""

    pid: int
    name: str
    uid: int | None = None
    cmdline: tuple[str, ...] = ()
    cwd: str | None = None
    ppid: int | None = None
    create_time: float = 0.0


@dataclass(frozen=True)
class ProcessRecord:
    """Point-in-time identity of a process found bound to a socket."""

    pid: int
    name: str
    user: str
    command: tuple[str, ...]
    protocol: Protocol
    cwd: str | None = None
    parent_pid: int | None = None
    parent_name: str | None = None
    started: datetime | None = None
