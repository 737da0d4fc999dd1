"""Kill action — signal the process that owns a port."""

from __future__ import annotations

import logging
import os
import signal
from collections.abc import Callable
from dataclasses import dataclass

from portdetective.errors import KillFailed, PermissionDenied

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Termination:
    """A signal that was successfully sent. Delivery is not verified."""

    pid: int
    signal: signal.Signals

    @property
    def forced(self) -> bool:
        return self.signal == signal.SIGKILL

    @property
    def signal_name(self) -> str:
        return self.signal.name


class KillAction:
    """Sends SIGTERM, or SIGKILL when forced, and classifies failures."""

    def __init__(self, send_signal: Callable[[int, int], None] = os.kill) -> None:
        self._send_signal = send_signal

    def execute(self, pid: int, force: bool = False) -> Termination:
        sig = signal.SIGKILL if force else signal.SIGTERM
        logger.info("Sending %s to process %d", sig.name, pid)

        try:
            self._send_signal(pid, sig)
        except PermissionError as exc:
            logger.debug("Permission denied killing process %d", pid)
            raise PermissionDenied(
                f"Cannot kill PID {pid}. Try running with elevated permissions."
            ) from exc
        except OSError as exc:
            raise KillFailed(pid, exc.strerror or str(exc)) from exc

        logger.debug("%s sent to process %d", sig.name, pid)
        return Termination(pid=pid, signal=sig)
