"""CLI command: portdetective list — every listening port."""

from __future__ import annotations

import click

from portdetective.cli import display
from portdetective.cli.options import output_options, resolve_output, run_query
from portdetective.engine import ListAll, Query
from portdetective.report.serialize import listing_to_json


@click.command(name="list")
@output_options
@click.pass_context
def list_ports(ctx: click.Context, json_output: bool, tcp: bool, udp: bool) -> None:
    """List all listening ports and the processes that own them."""
    protocol_filter, as_json = resolve_output(ctx, json_output, tcp, udp)
    outcome = run_query(ctx, Query(ListAll(), protocol_filter))

    if as_json:
        click.echo(listing_to_json(outcome.entries))
    else:
        display.print_port_list(outcome.entries)
