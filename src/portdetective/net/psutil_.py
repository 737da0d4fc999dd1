"""Socket enumeration backed by psutil.net_connections()."""

from __future__ import annotations

import logging
import socket
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import psutil

from portdetective.errors import NetworkError
from portdetective.net.base import SocketTable
from portdetective.net.models import BoundSocket, Protocol, ProtocolFilter

logger = logging.getLogger(__name__)

# Socket type constants from psutil
_PROTO_MAP = {
    socket.SOCK_STREAM: Protocol.TCP,
    socket.SOCK_DGRAM: Protocol.UDP,
}


class PsutilSocketTable:
    """System-wide socket table.

    psutil reports a single owner per socket; when several processes share
    one (e.g. after fork), the first process holding it is the one returned.
    """

    def connections(self, kind: str) -> Iterable[Any]:
        return psutil.net_connections(kind=kind)


@dataclass
class SocketEnumerator:
    """Lists the sockets currently bound on the host, with owning PIDs."""

    table: SocketTable = field(default_factory=PsutilSocketTable)

    def enumerate(self, protocol_filter: ProtocolFilter) -> list[BoundSocket]:
        """Return all LISTEN-state TCP and bound UDP sockets for the filter."""
        try:
            rows = list(self.table.connections(protocol_filter.kind))
        except (psutil.Error, OSError) as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        sockets: list[BoundSocket] = []
        for row in rows:
            bound = _to_bound_socket(row)
            if bound is not None:
                sockets.append(bound)

        logger.debug(
            "Enumerated %d bound socket(s) out of %d row(s) (%s)",
            len(sockets),
            len(rows),
            protocol_filter.value,
        )
        return sockets

    def find_by_port(
        self, port: int, protocol_filter: ProtocolFilter
    ) -> list[BoundSocket]:
        """Return only the bound sockets on the given port."""
        return [s for s in self.enumerate(protocol_filter) if s.port == port]


def _to_bound_socket(row: Any) -> BoundSocket | None:
    """Map one psutil row to a BoundSocket, or None if it does not qualify."""
    try:
        protocol = _PROTO_MAP.get(row.type)
        pid = row.pid
        laddr = row.laddr
        status = row.status
    except AttributeError:
        return None

    if protocol is None or pid is None or not laddr:
        return None

    # UDP has no listen state; every bound UDP socket counts
    if protocol is Protocol.TCP and status != psutil.CONN_LISTEN:
        return None

    try:
        ip, port = laddr.ip, laddr.port
    except AttributeError:
        ip, port = laddr[0], laddr[1]

    return BoundSocket(pid=pid, port=port, protocol=protocol, local_addr=str(ip))
