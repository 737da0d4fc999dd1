"""Resolve a PID into an enriched ProcessRecord."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from portdetective.errors import ProcessNotFound
from portdetective.net.models import Protocol
from portdetective.proc.base import ProcessTable, UserDirectory
from portdetective.proc.models import ProcessRecord
from portdetective.proc.psutil_ import PsutilProcessTable, PwdUserDirectory

logger = logging.getLogger(__name__)

UNKNOWN_USER = "unknown"


@dataclass
class ProcessResolver:
    """Builds ProcessRecords from fresh process-table lookups.

    Each ``resolve()`` performs one lookup for the PID itself plus, when the
    process has a parent, one best-effort lookup for the parent's name.
    Nothing is cached: the process table changes underneath us constantly.
    """

    table: ProcessTable = field(default_factory=PsutilProcessTable)
    users: UserDirectory = field(default_factory=PwdUserDirectory)

    def resolve(self, pid: int, protocol: Protocol) -> ProcessRecord:
        """Look up ``pid``; raise ProcessNotFound if it is no longer running."""
        snapshot = self.table.lookup(pid)
        if snapshot is None:
            raise ProcessNotFound(pid)

        parent_name = None
        if snapshot.ppid is not None:
            parent_name = self.table.name_of(snapshot.ppid)
            if parent_name is None:
                logger.debug("Parent %d of PID %d has exited", snapshot.ppid, pid)

        return ProcessRecord(
            pid=pid,
            name=snapshot.name,
            user=self._user_name(snapshot.uid),
            command=tuple(snapshot.cmdline),
            protocol=protocol,
            cwd=snapshot.cwd,
            parent_pid=snapshot.ppid,
            parent_name=parent_name,
            started=start_time(snapshot.create_time),
        )

    def _user_name(self, uid: int | None) -> str:
        if uid is None:
            return UNKNOWN_USER
        return self.users.name_for(uid) or UNKNOWN_USER


def start_time(timestamp: float) -> datetime | None:
    """Convert an epoch timestamp to local time; zero means unknown."""
    if not timestamp:
        return None
    try:
        return datetime.fromtimestamp(timestamp).astimezone()
    except (OverflowError, OSError, ValueError):
        return None
