"""Human-readable rendering of reports and kill results with Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from portdetective.actions.kill import Termination
from portdetective.proc.models import ProcessRecord
from portdetective.report.builder import flatten_command
from portdetective.report.models import PortEntry, PortReport, PortStatus

console = Console()
err_console = Console(stderr=True)

_MAX_COMMAND_WIDTH = 50


def print_report(report: PortReport, out: Console | None = None) -> None:
    out = out or console
    if report.status is PortStatus.FREE:
        out.print(
            f"✅ Port [bold cyan]{report.port}[/bold cyan] is "
            "[bold green]free[/bold green] (no listening process found)"
        )
        return

    out.print(
        f"🔎 Port [bold cyan]{report.port}[/bold cyan] "
        f"([dim]{report.protocol}[/dim]) is [bold red]in use[/bold red]\n"
    )
    for process in report.processes:
        print_process_details(process, out)


def print_process_details(info: ProcessRecord, out: Console | None = None) -> None:
    out = out or console
    table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
    table.add_column(style="bold")
    table.add_column()

    table.add_row("Process:", f"[bold green]{escape(info.name)}[/bold green]")
    table.add_row("PID:", f"[yellow]{info.pid}[/yellow]")
    table.add_row("User:", f"[cyan]{escape(info.user)}[/cyan]")
    table.add_row("Command:", escape(flatten_command(info.name, info.command)))
    if info.cwd:
        table.add_row("CWD:", f"[dim]{escape(info.cwd)}[/dim]")
    if info.parent_pid is not None and info.parent_name is not None:
        table.add_row(
            "Parent:",
            f"[blue]{escape(info.parent_name)}[/blue] [dim](PID {info.parent_pid})[/dim]",
        )
    if info.started is not None:
        table.add_row(
            "Started:", f"[dim]{info.started.strftime('%Y-%m-%d %H:%M:%S')}[/dim]"
        )
    out.print(table)
    out.print()

    out.print("[bold underline]Suggested kill:[/bold underline]")
    out.print(f"  [dim]kill[/dim] [yellow]{info.pid}[/yellow]")
    out.print("  [dim italic]# or force if needed:[/dim italic]")
    out.print(f"  [dim]kill -9[/dim] [yellow]{info.pid}[/yellow]\n")


def print_port_list(entries: list[PortEntry], out: Console | None = None) -> None:
    out = out or console
    if not entries:
        out.print("✅ No listening ports found")
        return

    table = Table(show_lines=False, box=None, header_style="bold underline")
    table.add_column("PORT", style="cyan")
    table.add_column("PROTO", style="dim")
    table.add_column("PID", style="yellow")
    table.add_column("PROCESS", style="green")
    table.add_column("USER", style="blue")
    table.add_column("COMMAND", style="dim")

    for entry in entries:
        table.add_row(
            str(entry.port),
            str(entry.protocol),
            str(entry.pid),
            escape(entry.name),
            escape(entry.user),
            escape(_truncate(entry.command)),
        )

    out.print(table)
    out.print(f"\n📊 [bold]{len(entries)}[/bold] listening port(s) found")


def print_kill_prompt(info: ProcessRecord, port: int, out: Console | None = None) -> None:
    out = out or err_console
    out.print(
        f"🔎 Port [bold cyan]{port}[/bold cyan] ([dim]{info.protocol}[/dim]) "
        "is in use by:"
    )
    out.print(
        f"  [bold green]{escape(info.name)}[/bold green] "
        f"(PID [yellow]{info.pid}[/yellow])"
    )
    out.print(f"  Command: {escape(flatten_command(info.name, info.command))}")
    if info.cwd:
        out.print(f"  CWD:     [dim]{escape(info.cwd)}[/dim]")
    out.print()


def print_kill_success(termination: Termination, out: Console | None = None) -> None:
    out = out or console
    out.print(
        f"✅ Sent [yellow]{termination.signal_name}[/yellow] "
        f"to PID [bold]{termination.pid}[/bold]"
    )


def print_kill_cancelled(out: Console | None = None) -> None:
    out = out or console
    out.print("❌ Kill cancelled")


def print_error(message: str, out: Console | None = None) -> None:
    out = out or err_console
    out.print(f"[bold red]Error:[/bold red] {escape(message)}")


def _truncate(command: str) -> str:
    if len(command) > _MAX_COMMAND_WIDTH:
        return command[: _MAX_COMMAND_WIDTH - 3] + "..."
    return command
