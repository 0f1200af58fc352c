"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config

console = Console()


def init_command(
    username: str = typer.Option(..., "--username", "-u", help="dev.to author to sync"),
    config_path: Path = typer.Option(
        Path("devsync.yaml"),
        "--config",
        "-c",
        help="Where to write the configuration",
    ),
    output_dir: Path = typer.Option(
        Path("src/pages/posts"),
        "--output-dir",
        "-o",
        help="Directory the site generator reads posts from",
    ),
    create_output_dir: bool = typer.Option(
        True,
        "--create-output-dir/--no-create-output-dir",
        help="Create the output directory now",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a starter devsync configuration."""
    if config_path.exists() and not force:
        console.print(f"[red]Config already exists: {config_path} (use --force)[/red]")
        raise typer.Exit(1)

    try:
        config = ConfigModel(username=username, output_dir=str(output_dir))
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    # The sync itself never creates the output directory
    if create_output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)
        console.print(f"✅ Created output directory: {output_dir}")

    console.print(
        Panel(
            f"[green]devsync initialized[/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Author: {username}\n"
            f"Output: {output_dir}\n\n"
            f"Next: [bold]devsync run[/bold]",
            style="green",
        )
    )
