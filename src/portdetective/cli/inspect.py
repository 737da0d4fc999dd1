"""CLI command: portdetective inspect <PORT> — who owns this port?"""

from __future__ import annotations

import click

from portdetective.cli import display
from portdetective.cli.options import PORT, output_options, resolve_output, run_query
from portdetective.engine import Query, SinglePort, classify
from portdetective.report.serialize import report_to_json


@click.command()
@click.argument("port", type=PORT)
@output_options
@click.pass_context
def inspect(
    ctx: click.Context, port: int, json_output: bool, tcp: bool, udp: bool
) -> None:
    """Inspect what's running on a specific port.

    Exits 0 when the port is free and 1 when it is in use.
    """
    protocol_filter, as_json = resolve_output(ctx, json_output, tcp, udp)
    outcome = run_query(ctx, Query(SinglePort(port), protocol_filter))

    if as_json:
        click.echo(report_to_json(outcome.report))
    else:
        display.print_report(outcome.report)

    ctx.exit(classify(outcome).exit_code)
