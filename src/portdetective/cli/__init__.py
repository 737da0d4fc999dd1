"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from portdetective import __version__
from portdetective.config import PortDetectiveConfig


class _PortGroup(click.Group):
    """Treats a bare numeric argument as ``inspect PORT``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        for i, arg in enumerate(args):
            if arg.startswith("-"):
                continue
            if arg.isdigit():
                args = [*args[:i], "inspect", *args[i:]]
            break
        return super().parse_args(ctx, args)


@click.group(cls=_PortGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="portdetective")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON.")
@click.option("--tcp", is_flag=True, help="Only show TCP sockets.")
@click.option("--udp", is_flag=True, help="Only show UDP sockets.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(
    ctx: click.Context, json_output: bool, tcp: bool, udp: bool, verbose: bool
) -> None:
    """Port Detective — what's running on this port, and how do I stop it?

    Run `portdetective PORT` to inspect a port.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if tcp and udp:
        raise click.UsageError("--tcp and --udp cannot be used together.")

    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = PortDetectiveConfig.load()
        except ValueError as exc:
            raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj["json"] = json_output
    ctx.obj["tcp"] = tcp
    ctx.obj["udp"] = udp

    if ctx.invoked_subcommand is None:
        click.echo("Usage: portdetective <PORT>", err=True)
        click.echo("       portdetective list", err=True)
        click.echo("       portdetective kill <PORT>", err=True)
        click.echo("", err=True)
        click.echo("Run `portdetective --help` for more options.", err=True)
        ctx.exit(1)


def _register_commands() -> None:
    from portdetective.cli.inspect import inspect  # noqa: F811
    from portdetective.cli.kill import kill  # noqa: F811
    from portdetective.cli.list_ import list_ports  # noqa: F811

    main.add_command(inspect)
    main.add_command(inspect, name="i")
    main.add_command(kill)
    main.add_command(kill, name="k")
    main.add_command(list_ports)
    main.add_command(list_ports, name="l")
    main.add_command(list_ports, name="ls")


_register_commands()
