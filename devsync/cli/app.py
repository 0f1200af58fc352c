"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .posts import list_command
from .run import run_command

app = typer.Typer(
    name="devsync",
    help="Sync dev.to articles into markdown posts",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("run")(run_command)
app.command("list")(list_command)


if __name__ == "__main__":
    app()
