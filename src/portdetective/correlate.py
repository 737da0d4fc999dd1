"""Join bound sockets to process records.

Discovery and resolution are two separate reads of a process table that
other programs keep changing. On the inspect and list paths a PID that has
vanished by the time it is resolved is simply left out. On the kill path it
is an error: the caller asked for that process specifically.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from portdetective.errors import ProcessNotFound
from portdetective.net.models import BoundSocket, Protocol
from portdetective.proc.models import ProcessRecord

logger = logging.getLogger(__name__)

ResolveFn = Callable[[int, Protocol], ProcessRecord]


class Correlator:
    """Deduplicates sockets and resolves their owners."""

    def __init__(self, resolve: ResolveFn) -> None:
        self._resolve = resolve

    def inspect(self, sockets: Iterable[BoundSocket], port: int) -> list[ProcessRecord]:
        """Resolve each distinct owner of ``port`` once, first-seen order."""
        processes: list[ProcessRecord] = []
        seen: set[int] = set()

        for sock in sockets:
            if sock.port != port or sock.pid in seen:
                continue
            # A PID that vanished is not retried for its other sockets
            seen.add(sock.pid)
            record = self._try_resolve(sock)
            if record is not None:
                processes.append(record)

        return processes

    def listing(
        self, sockets: Iterable[BoundSocket]
    ) -> list[tuple[BoundSocket, ProcessRecord]]:
        """Resolve owners per port, unique on (port, pid), sorted by port."""
        by_port: dict[int, list[BoundSocket]] = {}
        for sock in sockets:
            by_port.setdefault(sock.port, []).append(sock)

        rows: list[tuple[BoundSocket, ProcessRecord]] = []
        seen: set[tuple[int, int]] = set()

        for port, group in by_port.items():
            for sock in group:
                key = (port, sock.pid)
                if key in seen:
                    continue
                seen.add(key)
                record = self._try_resolve(sock)
                if record is not None:
                    rows.append((sock, record))

        # Stable: rows sharing a port keep discovery order
        rows.sort(key=lambda row: row[0].port)
        return rows

    def kill_target(
        self, sockets: Iterable[BoundSocket], port: int
    ) -> ProcessRecord | None:
        """Resolve the owner of the first socket on ``port``.

        Returns None if nothing is bound. Raises ProcessNotFound if the
        owner exits before it can be resolved.
        """
        for sock in sockets:
            if sock.port == port:
                return self._resolve(sock.pid, sock.protocol)
        return None

    def _try_resolve(self, sock: BoundSocket) -> ProcessRecord | None:
        try:
            return self._resolve(sock.pid, sock.protocol)
        except ProcessNotFound:
            logger.debug(
                "PID %d on port %d exited before it could be resolved",
                sock.pid,
                sock.port,
            )
            return None
