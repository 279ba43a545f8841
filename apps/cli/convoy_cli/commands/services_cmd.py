"""Service management commands."""

import json
import signal
from contextlib import contextmanager
from typing import Optional

import typer
import yaml
from convoy.actions import ServiceActions
from convoy.config_manager import ConfigManager
from convoy.errors import LogNotFound, ServiceError
from convoy.models.actions import ActionResult
from convoy.orchestrator import Orchestrator
from convoy.runtime import Context
from convoy.services.session import SessionService
from convoy_logging import configure_from_config
from rich.console import Console
from rich.table import Table

console = Console()

ServiceArgument = typer.Argument(None, help="Service name (redis, proxy, worker); all when omitted")


def _get_service_actions() -> ServiceActions:
    """Get configured ServiceActions instance."""
    try:
        config = ConfigManager().config
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        console.print(f"[red]✗[/red] Failed to load configuration: {e}")
        raise typer.Exit(1)
    configure_from_config(config.logging)
    return ServiceActions(Orchestrator(config.services))


@contextmanager
def _cancel_on_interrupt(ctx: Context):
    """Cancel ``ctx`` on Ctrl-C for the duration of the block.

    The in-flight operation observes the cancellation at its next wait.
    """

    def handler(signum, frame):
        ctx.cancel()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _run(actions: ServiceActions, action, *args) -> ActionResult:
    """Run an action, cancelling its context on Ctrl-C."""
    with _cancel_on_interrupt(actions.ctx):
        result = action(*args)

    if actions.ctx.cancelled:
        console.print(f"[red]✗[/red] Interrupted: {result.message}")
        raise typer.Exit(130)
    return result


def _report(result: ActionResult):
    if result.success:
        console.print(f"[green]✓[/green] {result.message}")
    else:
        console.print(f"[red]✗[/red] {result.message}")
        raise typer.Exit(1)


def start(service: Optional[str] = ServiceArgument):
    """Start services in dependency order."""
    console.print(f"[yellow]Starting {service or 'all services'}...[/yellow]")
    actions = _get_service_actions()
    _report(_run(actions, actions.start, service))


def stop(service: Optional[str] = ServiceArgument):
    """Stop services in reverse dependency order."""
    console.print(f"[yellow]Stopping {service or 'all services'}...[/yellow]")
    actions = _get_service_actions()
    _report(_run(actions, actions.stop, service))


def restart(service: Optional[str] = ServiceArgument):
    """Restart services."""
    console.print(f"[yellow]Restarting {service or 'all services'}...[/yellow]")
    actions = _get_service_actions()
    _report(_run(actions, actions.restart, service))


def health():
    """Run health checks on every service."""
    actions = _get_service_actions()
    _report(_run(actions, actions.health))


def status(
    as_json: bool = typer.Option(False, "--json", help="Print status as JSON"),
):
    """Show the status of every service."""
    actions = _get_service_actions()
    statuses = actions.status()

    if as_json:
        typer.echo(json.dumps({name: s.to_dict() for name, s in statuses.items()}, indent=2))
        return

    table = Table(title="Service Status")
    table.add_column("Service", style="cyan")
    table.add_column("Running")
    table.add_column("Healthy")
    table.add_column("PID")
    table.add_column("Ports")
    table.add_column("Errors", style="red")

    for name, s in statuses.items():
        table.add_row(
            name,
            "[green]✓ Yes[/green]" if s.running else "[red]✗ No[/red]",
            "[green]✓ Yes[/green]" if s.healthy else "[red]✗ No[/red]",
            str(s.pid) if s.pid else "N/A",
            ", ".join(str(p) for p in s.ports),
            "; ".join(s.errors),
        )

    console.print(table)

    if not all(s.healthy for s in statuses.values()):
        raise typer.Exit(1)


def logs(
    service: str = typer.Argument(..., help="Service name (proxy, worker)"),
    follow: bool = typer.Option(False, "--follow", "-f", help="Follow log output"),
    lines: int = typer.Option(50, "-n", help="Number of lines to show"),
    path: bool = typer.Option(False, "--path", help="Print the log file location and exit"),
):
    """View service logs."""
    actions = _get_service_actions()

    if path:
        try:
            log_path = actions.log_path(service)
        except ServiceError as e:
            _report(ActionResult(success=False, message=str(e)))
            return
        if log_path is None:
            _report(actions.logs(service, lines))
            return
        typer.echo(str(log_path))
        return

    if not follow:
        result = actions.logs(service, lines)
        if not result.success:
            _report(result)
        for line in result.data["lines"]:
            typer.echo(line)
        return

    try:
        target = actions.orchestrator.get_service(service)
    except ServiceError as e:
        _report(ActionResult(success=False, message=str(e)))
        return

    if not isinstance(target, SessionService):
        _report(actions.logs(service, lines))
        return

    ctx = Context()
    try:
        for line in target.get_logs(lines):
            typer.echo(line)
        with _cancel_on_interrupt(ctx):
            for line in target.follow_logs(ctx):
                typer.echo(line)
    except LogNotFound as e:
        _report(ActionResult(success=False, message=str(e)))
