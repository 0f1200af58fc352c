"""Article detail fetcher with bounded concurrent fan-out."""

import asyncio
from typing import List, Optional

import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..errors import ArticleFetchError
from .models import ArticleDetail, ArticleSummary

console = Console()


class ArticleFetcher:
    """Fetch full article records for a list of summaries."""

    def __init__(
        self,
        username: str,
        api_base_url: str = "https://dev.to/api",
        timeout: float = 30.0,
        max_concurrent: int = 5,
        user_agent: str = "devsync/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize article fetcher."""
        self.username = username
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self.user_agent = user_agent
        self.transport = transport

    def article_url(self, slug: str) -> str:
        return f"{self.api_base_url}/articles/{self.username}/{slug}"

    async def fetch_article(
        self, client: httpx.AsyncClient, summary: ArticleSummary
    ) -> ArticleDetail:
        """Fetch a single article, raising ArticleFetchError on any failure."""
        try:
            response = await client.get(self.article_url(summary.slug))
            response.raise_for_status()
            return ArticleDetail.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                reason = "Article not found (404)"
            elif status >= 500:
                reason = f"Server error ({status})"
            else:
                reason = f"HTTP {status}"
            raise ArticleFetchError(summary.slug, reason) from e
        except httpx.TimeoutException as e:
            raise ArticleFetchError(summary.slug, "Request timed out") from e
        except httpx.HTTPError as e:
            raise ArticleFetchError(summary.slug, f"Request failed: {e}") from e
        except ValidationError as e:
            raise ArticleFetchError(
                summary.slug, f"Unusable article payload ({e.error_count()} errors)"
            ) from e
        except ValueError as e:
            raise ArticleFetchError(summary.slug, f"Invalid JSON: {e}") from e
        except Exception as e:
            raise ArticleFetchError(summary.slug, f"Unexpected error: {e}") from e

    async def fetch_all_articles(
        self, summaries: List[ArticleSummary]
    ) -> List[Optional[ArticleDetail]]:
        """Fetch all articles concurrently.

        The result has one entry per summary, in input order; failed fetches
        are logged and left as None.
        """
        if not summaries:
            return []

        # Create semaphore for concurrency control
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            transport=self.transport,
        ) as client:

            async def fetch_with_semaphore(summary: ArticleSummary) -> Optional[ArticleDetail]:
                async with semaphore:
                    try:
                        return await self.fetch_article(client, summary)
                    except ArticleFetchError as e:
                        console.print(f"[yellow]Skipping {e.slug}: {escape(e.reason)}[/yellow]")
                        return None

            tasks = [fetch_with_semaphore(summary) for summary in summaries]
            results = await asyncio.gather(*tasks)

        return list(results)

    def fetch_articles_sync(
        self, summaries: List[ArticleSummary]
    ) -> List[Optional[ArticleDetail]]:
        """Synchronous wrapper for fetch_all_articles."""
        return asyncio.run(self.fetch_all_articles(summaries))


def print_fetch_summary(
    summaries: List[ArticleSummary], details: List[Optional[ArticleDetail]]
) -> None:
    """Print summary of article fetch results."""
    successful = sum(1 for d in details if d is not None)
    failed = len(details) - successful

    console.print("\n[bold]Article Fetch Summary:[/bold]")
    console.print(f"  Total articles: {len(details)}")
    console.print(f"  Successful: [green]{successful}[/green]")
    console.print(f"  Failed: [red]{failed}[/red]")

    if failed > 0:
        console.print("\n[bold red]Failed articles:[/bold red]")
        for summary, detail in zip(summaries, details):
            if detail is None:
                console.print(f"  - {summary.slug}")
