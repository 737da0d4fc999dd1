"""SocketTable protocol — read access to the kernel's socket tables."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SocketTable(Protocol):
    """Source of raw socket rows shaped like psutil's ``sconn`` tuples.

    Each row exposes ``type``, ``laddr`` (``ip``/``port``), ``status`` and
    ``pid``. Implementations raise ``psutil.Error`` or ``OSError`` when the
    table itself cannot be read.
    """

    def connections(self, kind: str) -> Iterable[Any]:
        """Return every socket row of the given psutil kind."""
        ...
