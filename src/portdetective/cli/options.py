"""Options shared by every subcommand, and query execution helpers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from portdetective.cli import display
from portdetective.config import PortDetectiveConfig
from portdetective.engine import (
    ConfirmFn,
    Outcome,
    Query,
    QueryEngine,
    classify_error,
)
from portdetective.errors import PortDetectiveError
from portdetective.net.models import ProtocolFilter

PORT = click.IntRange(1, 65535)


def output_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Accept --json/--tcp/--udp after the subcommand as well as before it."""
    f = click.option("--udp", is_flag=True, help="Only show UDP sockets.")(f)
    f = click.option("--tcp", is_flag=True, help="Only show TCP sockets.")(f)
    f = click.option(
        "--json", "-j", "json_output", is_flag=True, help="Output as JSON."
    )(f)
    return f


def resolve_output(
    ctx: click.Context, json_output: bool, tcp: bool, udp: bool
) -> tuple[ProtocolFilter, bool]:
    """Merge subcommand flags with the group's flags and the config file."""
    obj = ctx.obj
    config: PortDetectiveConfig = obj["config"]
    tcp = tcp or obj.get("tcp", False)
    udp = udp or obj.get("udp", False)
    if tcp and udp:
        raise click.UsageError("--tcp and --udp cannot be used together.")

    if tcp or udp:
        protocol_filter = ProtocolFilter.from_flags(tcp, udp)
    else:
        protocol_filter = config.protocol_filter

    as_json = json_output or obj.get("json", False) or config.json_output
    return protocol_filter, as_json


def get_engine(ctx: click.Context) -> QueryEngine:
    engine = ctx.obj.get("engine")
    if engine is None:
        engine = QueryEngine()
        ctx.obj["engine"] = engine
    return engine


def run_query(
    ctx: click.Context, query: Query, confirm: ConfirmFn | None = None
) -> Outcome:
    """Execute the query; on a core error print it and exit with its code."""
    try:
        return get_engine(ctx).execute(query, confirm=confirm)
    except PortDetectiveError as exc:
        display.print_error(str(exc))
        ctx.exit(classify_error(exc).exit_code)
