"""Article listing and detail fetching."""

from .article_fetcher import ArticleFetcher, print_fetch_summary
from .listing_fetcher import ListingFetcher
from .models import ArticleDetail, ArticleSummary

__all__ = [
    "ListingFetcher",
    "ArticleFetcher",
    "ArticleSummary",
    "ArticleDetail",
    "print_fetch_summary",
]
