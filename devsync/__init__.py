"""Sync dev.to articles into markdown posts for a static site build."""

from .config import Config, ConfigModel
from .errors import ArticleFetchError, DevSyncError, ListingFetchError
from .pipeline import SyncResult, sync_articles

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ConfigModel",
    "DevSyncError",
    "ListingFetchError",
    "ArticleFetchError",
    "SyncResult",
    "sync_articles",
]
