"""CLI command: portdetective kill <PORT> — stop the process on a port."""

from __future__ import annotations

import click

from portdetective.cli import display
from portdetective.cli.options import PORT, output_options, resolve_output, run_query
from portdetective.engine import (
    Kill,
    KillCancelled,
    PortInspected,
    ProcessKilled,
    Query,
    SinglePort,
    classify,
)
from portdetective.proc.models import ProcessRecord
from portdetective.report.serialize import (
    cancelled_to_json,
    killed_to_json,
    report_to_json,
)


@click.command()
@click.argument("port", type=PORT)
@click.option("--force", "-f", is_flag=True, help="Send SIGKILL instead of SIGTERM.")
@click.option(
    "--yes",
    "-y",
    "--no-prompt",
    "no_prompt",
    is_flag=True,
    help="Don't prompt for confirmation (for scripting).",
)
@output_options
@click.pass_context
def kill(
    ctx: click.Context,
    port: int,
    force: bool,
    no_prompt: bool,
    json_output: bool,
    tcp: bool,
    udp: bool,
) -> None:
    """Kill the process running on a specific port."""
    protocol_filter, as_json = resolve_output(ctx, json_output, tcp, udp)
    force = force or ctx.obj["config"].force_kill

    def confirm(process: ProcessRecord) -> bool:
        display.print_kill_prompt(process, port)
        return click.confirm(
            f"Are you sure you want to kill PID {process.pid}?",
            default=False,
            err=True,
        )

    query = Query(
        SinglePort(port),
        protocol_filter,
        Kill(force=force, skip_confirmation=no_prompt),
    )
    outcome = run_query(ctx, query, confirm=confirm)

    if isinstance(outcome, PortInspected):
        if as_json:
            click.echo(report_to_json(outcome.report))
        else:
            display.print_report(outcome.report)
    elif isinstance(outcome, KillCancelled):
        if as_json:
            click.echo(cancelled_to_json(outcome.process))
        else:
            display.print_kill_cancelled()
        display.print_error("Operation cancelled by user")
    elif isinstance(outcome, ProcessKilled):
        if as_json:
            click.echo(killed_to_json(outcome.process, outcome.termination))
        else:
            display.print_kill_success(outcome.termination)

    ctx.exit(classify(outcome).exit_code)
