"""Plain-dict views of reports for JSON output."""

from __future__ import annotations

import json
from typing import Any

from portdetective.actions.kill import Termination
from portdetective.proc.models import ProcessRecord
from portdetective.report.models import PortEntry, PortReport


def process_to_dict(record: ProcessRecord) -> dict[str, Any]:
    """Serialize a ProcessRecord; absent optional fields are omitted."""
    data: dict[str, Any] = {
        "pid": record.pid,
        "name": record.name,
        "user": record.user,
        "command": list(record.command),
    }
    if record.cwd is not None:
        data["cwd"] = record.cwd
    if record.parent_pid is not None:
        data["parent_pid"] = record.parent_pid
    if record.parent_name is not None:
        data["parent_name"] = record.parent_name
    if record.started is not None:
        data["started"] = record.started.isoformat()
    data["protocol"] = record.protocol.value
    return data


def report_to_dict(report: PortReport) -> dict[str, Any]:
    return {
        "port": report.port,
        "protocol": report.protocol.value,
        "status": report.status.value,
        "processes": [process_to_dict(p) for p in report.processes],
    }


def entry_to_dict(entry: PortEntry) -> dict[str, Any]:
    return {
        "port": entry.port,
        "protocol": entry.protocol.value,
        "pid": entry.pid,
        "name": entry.name,
        "user": entry.user,
        "command": entry.command,
    }


def killed_to_json(record: ProcessRecord, termination: Termination) -> str:
    return json.dumps(
        {
            "status": "killed",
            "pid": termination.pid,
            "signal": termination.signal_name,
            "process": process_to_dict(record),
        },
        indent=2,
    )


def cancelled_to_json(record: ProcessRecord) -> str:
    return json.dumps(
        {"status": "cancelled", "pid": record.pid, "process": process_to_dict(record)},
        indent=2,
    )


def report_to_json(report: PortReport) -> str:
    return json.dumps(report_to_dict(report), indent=2)


def listing_to_json(entries: list[PortEntry]) -> str:
    return json.dumps([entry_to_dict(e) for e in entries], indent=2)
