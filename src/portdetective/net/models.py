"""Socket data models — protocols, filters and bound sockets."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Protocol(enum.Enum):
    """Transport protocol of a socket, or of a query spanning both."""

    TCP = "tcp"
    UDP = "udp"
    BOTH = "both"

    def __str__(self) -> str:
        if self is Protocol.BOTH:
            return "tcp/udp"
        return self.value


class ProtocolFilter(enum.Enum):
    """Which socket tables a query reads."""

    TCP_ONLY = "tcp"
    UDP_ONLY = "udp"
    BOTH = "both"

    @classmethod
    def from_flags(cls, tcp: bool, udp: bool) -> ProtocolFilter:
        if tcp and not udp:
            return cls.TCP_ONLY
        if udp and not tcp:
            return cls.UDP_ONLY
        return cls.BOTH

    @property
    def protocol(self) -> Protocol:
        """The protocol a report for this filter is labelled with."""
        return Protocol(self.value)

    @property
    def kind(self) -> str:
        """psutil ``net_connections`` kind; covers IPv4 and IPv6."""
        return {"tcp": "tcp", "udp": "udp", "both": "inet"}[self.value]


@dataclass(frozen=True)
class BoundSocket:
    """A TCP socket in LISTEN state or any bound UDP socket, with its owner."""

    pid: int
    port: int
    protocol: Protocol
    local_addr: str = ""
