"""psutil/pwd-backed process table and user directory."""

from __future__ import annotations

import logging
import os
import pwd
from collections.abc import Callable
from typing import TypeVar

import psutil

from portdetective.proc.models import ProcessSnapshot

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class PsutilProcessTable:
    """Looks processes up one PID at a time through psutil.Process."""

    def lookup(self, pid: int) -> ProcessSnapshot | None:
        try:
            proc = psutil.Process(pid)
            with proc.oneshot():
                return ProcessSnapshot(
                    pid=pid,
                    name=_best_effort(pid, "name", proc.name, ""),
                    uid=_best_effort(pid, "uid", lambda: _real_uid(proc), None),
                    cmdline=tuple(_best_effort(pid, "cmdline", proc.cmdline, [])),
                    cwd=_best_effort(pid, "cwd", proc.cwd, None) or None,
                    ppid=_best_effort(pid, "ppid", proc.ppid, 0) or None,
                    create_time=_best_effort(pid, "create_time", proc.create_time, 0.0),
                )
        except (psutil.NoSuchProcess, ValueError):
            return None

    def name_of(self, pid: int) -> str | None:
        try:
            proc = psutil.Process(pid)
            try:
                return proc.name()
            except psutil.AccessDenied as exc:
                # The parent is alive; fall back to what the OS still shows
                if exc.name:
                    return exc.name
                logger.debug("PID %d: name unavailable, using cmdline", pid)
                cmdline = _best_effort(pid, "cmdline", proc.cmdline, [])
                return os.path.basename(cmdline[0]) if cmdline else None
        except (psutil.NoSuchProcess, ValueError):
            return None


class PwdUserDirectory:
    """Resolves uids against the system password database."""

    def name_for(self, uid: int) -> str | None:
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return None


def _real_uid(proc: psutil.Process) -> int | None:
    uids = getattr(proc, "uids", None)
    if uids is None:
        return None
    return uids().real


def _best_effort(pid: int, field: str, getter: Callable[[], _T], default: _T) -> _T:
    """Read one field, falling back when the OS withholds it.

    A process that has exited entirely still raises NoSuchProcess.
    """
    try:
        return getter()
    except (psutil.AccessDenied, psutil.ZombieProcess):
        logger.debug("PID %d: %s unavailable", pid, field)
        return default
