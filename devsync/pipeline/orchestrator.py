"""Pipeline orchestrator that runs one listing, fetch and materialize pass."""

import time
from typing import Dict, Optional, Union

import httpx
import pendulum
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..config import Config
from ..ingestion import ArticleFetcher, ListingFetcher, print_fetch_summary
from ..materialize import MarkdownWriter
from .models import SyncResult

console = Console()

Transport = Union[httpx.BaseTransport, httpx.AsyncBaseTransport]


class PipelineStage:
    """One step of a sync run, with its timing and article counts."""

    def __init__(self, name: str, description: str, summary_template: str):
        self.name = name
        self.description = description
        self.summary_template = summary_template
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.counts: Dict[str, int] = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, **counts: int):
        """Mark stage as completed and record its article counts."""
        self.end_time = time.time()
        self.success = True
        self.counts.update(counts)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def status(self) -> str:
        if self.success:
            return "ok"
        if self.start_time is None:
            return "skipped"
        return "failed"

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    def summary(self) -> str:
        """Counts rendered through the stage template, or the failure."""
        if self.success:
            return self.summary_template.format(**self.counts)
        return self.error or ""


class SyncOrchestrator:
    """Runs listing, detail fetch and materialization exactly once."""

    def __init__(
        self,
        config: Config,
        prune: bool = False,
        transport: Optional[Transport] = None,
    ):
        """Initialize sync orchestrator.

        ``transport`` is handed to both HTTP clients; it exists so callers can
        route requests somewhere other than the network.
        """
        self.config = config
        self.prune = prune
        self.transport = transport
        self.stages = [
            PipelineStage("listing", "Fetching article listing", "{listed} articles listed"),
            PipelineStage(
                "articles", "Fetching article details", "{successful} fetched, {failed} failed"
            ),
            PipelineStage(
                "materialize",
                "Writing markdown files",
                "{written} files written, {rejected} rejected, {pruned} pruned",
            ),
        ]
        self.total_start_time: Optional[float] = None

    def _print_summary(self, result: SyncResult):
        """Print pipeline execution summary."""
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Sync Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        status_styles = {"ok": "green", "skipped": "dim", "failed": "red"}
        for stage in self.stages:
            style = status_styles[stage.status]
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"
            table.add_row(
                stage.name.title(),
                f"[{style}]{stage.status}[/{style}]",
                duration,
                escape(stage.summary()),
            )

        console.print("\n")
        console.print(table)

        if all(s.success for s in self.stages):
            style = "green" if result.success else "yellow"
            console.print(Panel(
                f"Synced {len(result.written)} of {result.listed} articles for {result.username}\n"
                f"Duration: {total_duration:.1f} seconds\n"
                f"Output directory: {self.config.config.output_dir}",
                style=style,
            ))
        else:
            failed_stages = [s.name for s in self.stages if s.start_time and not s.success]
            console.print(Panel(
                f"[red]Sync failed![/red]\n\n"
                f"Failed stages: {', '.join(failed_stages)}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="red",
            ))

    def run(self) -> SyncResult:
        """
        Run the sync.

        Per-article fetch failures are reported in the result. A listing
        failure or a file write failure is raised after the summary prints.
        """
        settings = self.config.config
        output_dir = self.config.output_path
        self.total_start_time = time.time()

        result = SyncResult(
            started_at=pendulum.now().to_iso8601_string(),
            username=settings.username,
        )

        console.print(Panel.fit(
            f"devsync\nAuthor: {settings.username} • Output: {output_dir}",
            style="bold blue",
        ))

        try:
            self._execute_pipeline(result)
        finally:
            self._print_summary(result)

        return result

    def _execute_pipeline(self, result: SyncResult) -> None:
        """Execute the pipeline stages, filling ``result`` as they complete."""
        settings = self.config.config
        writer = MarkdownWriter(
            self.config.output_path,
            slug_prefix=settings.slug_prefix,
            file_prefix=settings.file_prefix,
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:

            # Stage 1: Fetch listing
            stage = self.stages[0]
            task = progress.add_task(stage.description, total=1)
            stage.start()

            try:
                listing_fetcher = ListingFetcher(
                    api_base_url=settings.api_base_url,
                    timeout=settings.timeout,
                    user_agent=settings.user_agent,
                    transport=self.transport,
                )
                summaries = listing_fetcher.fetch_listing(settings.username)
                result.listed = len(summaries)

                stage.complete(listed=len(summaries))
                progress.advance(task, 1)

            except Exception as e:
                stage.fail(str(e))
                raise

            # Stage 2: Fetch details
            stage = self.stages[1]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()

            try:
                article_fetcher = ArticleFetcher(
                    username=settings.username,
                    api_base_url=settings.api_base_url,
                    timeout=settings.timeout,
                    max_concurrent=settings.max_concurrent,
                    user_agent=settings.user_agent,
                    transport=self.transport,
                )
                details = article_fetcher.fetch_articles_sync(summaries)
                result.failed = [
                    summary.slug
                    for summary, detail in zip(summaries, details)
                    if detail is None
                ]

                stage.complete(
                    successful=len(details) - len(result.failed),
                    failed=len(result.failed),
                )
                progress.advance(task, 1)

            except Exception as e:
                stage.fail(str(e))
                raise

            # Stage 3: Write files
            stage = self.stages[2]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()

            try:
                result.written = writer.write_all(details)
                result.failed.extend(writer.rejected)
                if self.prune:
                    result.pruned = writer.prune(result.written)

                stage.complete(
                    written=len(result.written),
                    rejected=len(writer.rejected),
                    pruned=len(result.pruned),
                )
                progress.advance(task, 1)

            except Exception as e:
                stage.fail(str(e))
                raise

        if result.failed:
            print_fetch_summary(summaries, details)


def sync_articles(
    config: Config,
    prune: bool = False,
    transport: Optional[Transport] = None,
) -> SyncResult:
    """Fetch every published article and write it as a markdown post.

    This is the build hook: call it once before the site generator reads the
    output directory.
    """
    return SyncOrchestrator(config, prune=prune, transport=transport).run()
