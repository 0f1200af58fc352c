"""List emitted posts."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Config, ConfigModel
from ..materialize import parse_front_matter

console = Console()


def list_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file. Default: $DEVSYNC_CONFIG or ./devsync.yaml",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory holding the markdown posts",
    ),
) -> None:
    """List the posts currently in the output directory."""
    if output_dir is not None:
        if not output_dir.is_dir():
            console.print(f"[red]Output directory not found: {output_dir}[/red]")
            raise typer.Exit(1)
        out_dir = output_dir
        file_prefix = ConfigModel.model_fields["file_prefix"].default
    else:
        try:
            config = Config(config_path)
            out_dir = config.output_path
            file_prefix = config.config.file_prefix
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)

    paths = sorted(out_dir.glob(f"{file_prefix}*.md"))
    if not paths:
        console.print("[yellow]No posts found.[/yellow]")
        return

    table = Table(title=f"Posts in {out_dir}")
    table.add_column("File", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Date", style="magenta")
    table.add_column("Read", style="green")
    table.add_column("Reactions", style="yellow")

    for path in paths:
        try:
            meta, _ = parse_front_matter(path.read_text(encoding="utf-8"))
        except ValueError as e:
            console.print(f"[yellow]Skipping {path.name}: {escape(str(e))}[/yellow]")
            continue
        reading_time = meta.get("readingTime")
        table.add_row(
            path.name,
            meta.get("title", ""),
            meta.get("readableDate", ""),
            f"{reading_time} min" if reading_time else "-",
            meta.get("reactionsCount", ""),
        )

    console.print(table)
