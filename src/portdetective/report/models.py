"""Report data models — the two shapes a query produces."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from portdetective.net.models import Protocol
from portdetective.proc.models import ProcessRecord


class PortStatus(enum.Enum):
    """Whether anything is bound to the port."""

    FREE = "free"
    IN_USE = "in_use"


@dataclass(frozen=True)
class PortReport:
    """Result of inspecting a single port. FREE iff ``processes`` is empty."""

    port: int
    protocol: Protocol
    status: PortStatus
    processes: tuple[ProcessRecord, ...] = ()

    @classmethod
    def free(cls, port: int, protocol: Protocol) -> PortReport:
        return cls(port=port, protocol=protocol, status=PortStatus.FREE)

    @classmethod
    def in_use(
        cls, port: int, protocol: Protocol, processes: tuple[ProcessRecord, ...]
    ) -> PortReport:
        return cls(
            port=port,
            protocol=protocol,
            status=PortStatus.IN_USE,
            processes=processes,
        )


@dataclass(frozen=True)
class PortEntry:
    """One row of a port listing; unique per (port, pid)."""

    port: int
    protocol: Protocol
    pid: int
    name: str
    user: str
    command: str
