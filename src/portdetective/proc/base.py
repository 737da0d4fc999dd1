"""Capability protocols for process-table and user-directory access."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from portdetective.proc.models import ProcessSnapshot


@runtime_checkable
class ProcessTable(Protocol):
    """Read access to the OS process table."""

    def lookup(self, pid: int) -> ProcessSnapshot | None:
        """Return a fresh snapshot of the PID, or None if it is not running."""
        ...

    def name_of(self, pid: int) -> str | None:
        """Return just the process name, or None if it is not running."""
        ...


@runtime_checkable
class UserDirectory(Protocol):
    """Maps numeric user ids to account names."""

    def name_for(self, uid: int) -> str | None:
        ...
