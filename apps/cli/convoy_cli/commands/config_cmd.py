"""Configuration commands."""

from pathlib import Path

import typer
import yaml
from convoy.config_manager import ConfigManager
from rich.console import Console

console = Console()


def config(
    output: Path = typer.Argument(..., help="File to write the effective configuration to"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write the effective configuration (file, .env and environment merged) as YAML."""
    if output.exists() and not force:
        console.print(f"[red]✗[/red] Refusing to overwrite {output} (use --force)")
        raise typer.Exit(1)

    try:
        manager = ConfigManager()
        manager.save_config(manager.config, output)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        console.print(f"[red]✗[/red] Failed to write configuration: {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Configuration written to {output}")
