"""Query engine — runs one inspect, list or kill request end to end."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from portdetective.actions.kill import KillAction, Termination
from portdetective.correlate import Correlator
from portdetective.errors import (
    InvalidPort,
    KillFailed,
    NetworkError,
    PermissionDenied,
    PortDetectiveError,
    ProcessNotFound,
)
from portdetective.net.models import ProtocolFilter
from portdetective.net.psutil_ import SocketEnumerator
from portdetective.proc.models import ProcessRecord
from portdetective.proc.resolver import ProcessResolver
from portdetective.report.builder import build_port_listing, build_port_report
from portdetective.report.models import PortEntry, PortReport, PortStatus

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Query shape
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SinglePort:
    port: int

    def __post_init__(self) -> None:
        if not 1 <= self.port <= 65535:
            raise InvalidPort(self.port)


@dataclass(frozen=True)
class ListAll:
    pass


@dataclass(frozen=True)
class Inspect:
    pass


@dataclass(frozen=True)
class Kill:
    force: bool = False
    skip_confirmation: bool = False


@dataclass(frozen=True)
class Query:
    target: SinglePort | ListAll
    protocol_filter: ProtocolFilter = ProtocolFilter.BOTH
    action: Inspect | Kill = field(default_factory=Inspect)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PortInspected:
    report: PortReport


@dataclass(frozen=True)
class PortsListed:
    entries: list[PortEntry]


@dataclass(frozen=True)
class ProcessKilled:
    process: ProcessRecord
    termination: Termination


@dataclass(frozen=True)
class KillCancelled:
    """The caller declined; no signal was sent."""

    process: ProcessRecord


Outcome = PortInspected | PortsListed | ProcessKilled | KillCancelled

ConfirmFn = Callable[[ProcessRecord], bool]


class ResultKind(enum.Enum):
    """Classification of a finished query, used to pick an exit code."""

    SUCCESS = "success"
    IN_USE = "in_use"
    FREE = "free"
    CANCELLED = "cancelled"
    PERMISSION_DENIED = "permission_denied"
    PROCESS_NOT_FOUND = "process_not_found"
    KILL_FAILED = "kill_failed"
    NETWORK_ERROR = "network_error"
    INVALID_PORT = "invalid_port"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    ResultKind.SUCCESS: 0,
    ResultKind.FREE: 0,
    ResultKind.IN_USE: 1,
    ResultKind.NETWORK_ERROR: 1,
    ResultKind.KILL_FAILED: 1,
    ResultKind.INVALID_PORT: 1,
    ResultKind.PERMISSION_DENIED: 2,
    ResultKind.PROCESS_NOT_FOUND: 3,
    ResultKind.CANCELLED: 4,
}


def classify(outcome: Outcome) -> ResultKind:
    if isinstance(outcome, PortInspected):
        if outcome.report.status is PortStatus.FREE:
            return ResultKind.FREE
        return ResultKind.IN_USE
    if isinstance(outcome, KillCancelled):
        return ResultKind.CANCELLED
    return ResultKind.SUCCESS


def classify_error(error: PortDetectiveError) -> ResultKind:
    if isinstance(error, PermissionDenied):
        return ResultKind.PERMISSION_DENIED
    if isinstance(error, ProcessNotFound):
        return ResultKind.PROCESS_NOT_FOUND
    if isinstance(error, KillFailed):
        return ResultKind.KILL_FAILED
    if isinstance(error, NetworkError):
        return ResultKind.NETWORK_ERROR
    if isinstance(error, InvalidPort):
        return ResultKind.INVALID_PORT
    raise TypeError(f"Unclassified error: {error!r}")


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class QueryEngine:
    """Wires enumeration, correlation, reporting and termination together.

    Each collaborator can be replaced, which is how tests run without
    touching the real socket and process tables.
    """

    def __init__(
        self,
        enumerator: SocketEnumerator | None = None,
        resolver: ProcessResolver | None = None,
        killer: KillAction | None = None,
    ) -> None:
        self._enumerator = enumerator or SocketEnumerator()
        self._resolver = resolver or ProcessResolver()
        self._killer = killer or KillAction()
        self._correlator = Correlator(self._resolver.resolve)

    def execute(self, query: Query, confirm: ConfirmFn | None = None) -> Outcome:
        """Run ``query``. ``confirm`` is consulted before an unconfirmed kill."""
        if isinstance(query.action, Kill):
            if not isinstance(query.target, SinglePort):
                raise ValueError("Kill requires a single port target")
            return self.kill(
                query.target.port, query.protocol_filter, query.action, confirm
            )
        if isinstance(query.target, ListAll):
            return PortsListed(self.list_ports(query.protocol_filter))
        return PortInspected(self.inspect(query.target.port, query.protocol_filter))

    def inspect(self, port: int, protocol_filter: ProtocolFilter) -> PortReport:
        sockets = self._enumerator.find_by_port(port, protocol_filter)
        processes = self._correlator.inspect(sockets, port)
        return build_port_report(port, protocol_filter.protocol, processes)

    def list_ports(self, protocol_filter: ProtocolFilter) -> list[PortEntry]:
        sockets = self._enumerator.enumerate(protocol_filter)
        return build_port_listing(self._correlator.listing(sockets))

    def kill(
        self,
        port: int,
        protocol_filter: ProtocolFilter,
        action: Kill,
        confirm: ConfirmFn | None = None,
    ) -> Outcome:
        sockets = self._enumerator.find_by_port(port, protocol_filter)
        target = self._correlator.kill_target(sockets, port)
        if target is None:
            return PortInspected(PortReport.free(port, protocol_filter.protocol))

        if not action.skip_confirmation:
            if confirm is None or not confirm(target):
                logger.info("Kill of PID %d on port %d cancelled", target.pid, port)
                return KillCancelled(target)

        termination = self._killer.execute(target.pid, force=action.force)
        return ProcessKilled(process=target, termination=termination)
