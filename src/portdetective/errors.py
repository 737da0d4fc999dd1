"""Error taxonomy shared by enumeration, resolution and termination."""

from __future__ import annotations


class PortDetectiveError(Exception):
    """Base class for every failure the core reports."""


class InvalidPort(PortDetectiveError):
    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(f"Port {port} is not valid (must be 1-65535)")


class NetworkError(PortDetectiveError):
    """The OS socket table could not be read at all."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Could not enumerate network sockets: {reason}")


class ProcessNotFound(PortDetectiveError):
    """The PID was absent from the process table at lookup time."""

    def __init__(self, pid: int) -> None:
        self.pid = pid
        super().__init__(f"Process {pid} not found or no longer running")


class PermissionDenied(PortDetectiveError):
    """Signal delivery was refused for lack of privilege."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Permission denied: {message}")


class KillFailed(PortDetectiveError):
    def __init__(self, pid: int, reason: str) -> None:
        self.pid = pid
        self.reason = reason
        super().__init__(f"Kill failed for PID {pid}: {reason}")
