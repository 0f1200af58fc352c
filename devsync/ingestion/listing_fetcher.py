"""Fetch the list of an author's published articles."""

from typing import List, Optional

import httpx
from pydantic import ValidationError
from rich.console import Console

from ..errors import ListingFetchError
from .models import ArticleSummary

console = Console()


class ListingFetcher:
    """Fetch the latest-articles listing for one author."""

    def __init__(
        self,
        api_base_url: str = "https://dev.to/api",
        timeout: float = 30.0,
        user_agent: str = "devsync/1.0",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize listing fetcher."""
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def listing_url(self) -> str:
        return f"{self.api_base_url}/articles/latest"

    def fetch_listing(self, username: str) -> List[ArticleSummary]:
        """Fetch the ordered article summaries for ``username``.

        One request, no fallback: any failure raises ListingFetchError.
        """
        try:
            with httpx.Client(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                transport=self.transport,
            ) as client:
                response = client.get(self.listing_url(), params={"username": username})
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise ListingFetchError(
                f"Listing request for {username} failed: HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise ListingFetchError(f"Listing request for {username} timed out") from e
        except httpx.HTTPError as e:
            raise ListingFetchError(f"Listing request for {username} failed: {e}") from e
        except ValueError as e:
            raise ListingFetchError(f"Listing response is not valid JSON: {e}") from e

        if not isinstance(payload, list):
            raise ListingFetchError(
                f"Listing response must be a JSON array, got {type(payload).__name__}"
            )

        try:
            summaries = [ArticleSummary.model_validate(entry) for entry in payload]
        except ValidationError as e:
            raise ListingFetchError(f"Listing contains an unusable entry: {e}") from e

        console.print(f"[dim]Found {len(summaries)} articles for {username}[/dim]")
        return summaries
