"""Run command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..errors import ListingFetchError
from ..pipeline import sync_articles

console = Console()


def run_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file. Default: $DEVSYNC_CONFIG or ./devsync.yaml",
    ),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        "-u",
        help="dev.to author to sync",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Existing directory for the markdown files",
    ),
    max_concurrent: Optional[int] = typer.Option(
        None,
        "--max-concurrent",
        help="Maximum concurrent article requests",
        min=1,
    ),
    prune: bool = typer.Option(
        False,
        "--prune/--no-prune",
        help="Delete emitted posts that are no longer published",
    ),
) -> None:
    """Fetch all published articles and write them as markdown posts."""
    try:
        config = Config(
            config_path,
            overrides={
                "username": username,
                "output_dir": str(output_dir) if output_dir else None,
                "max_concurrent": max_concurrent,
            },
        )

        result = sync_articles(config, prune=prune)

        if result.failed:
            console.print(
                f"[yellow]{len(result.failed)} article(s) could not be fetched[/yellow]"
            )

    except KeyboardInterrupt:
        console.print("\n[yellow]Sync interrupted by user[/yellow]")
        raise typer.Exit(1)
    except ListingFetchError as e:
        console.print(f"[red]Could not fetch article listing: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Sync failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)
