"""Assemble correlator output into PortReport and PortEntry lists."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from portdetective.net.models import BoundSocket, Protocol
from portdetective.proc.models import ProcessRecord
from portdetective.report.models import PortEntry, PortReport


def flatten_command(name: str, command: Sequence[str]) -> str:
    """Space-join the argument list, or fall back to the process name."""
    if not command:
        return name
    return " ".join(command)


def build_port_report(
    port: int, protocol: Protocol, processes: Iterable[ProcessRecord]
) -> PortReport:
    procs = tuple(processes)
    if not procs:
        return PortReport.free(port, protocol)
    return PortReport.in_use(port, protocol, procs)


def build_port_listing(
    rows: Iterable[tuple[BoundSocket, ProcessRecord]],
) -> list[PortEntry]:
    """One entry per (socket, process) row, in the order given."""
    return [
        PortEntry(
            port=sock.port,
            protocol=sock.protocol,
            pid=sock.pid,
            name=proc.name,
            user=proc.user,
            command=flatten_command(proc.name, proc.command),
        )
        for sock, proc in rows
    ]
