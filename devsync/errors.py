"""Exceptions raised by devsync."""


class DevSyncError(Exception):
    """Base class for devsync errors."""


class ListingFetchError(DevSyncError):
    """The article listing could not be retrieved. Aborts the sync."""


class UnsafeSlugError(DevSyncError):
    """A slug would place the emitted file outside the output directory."""


class ArticleFetchError(DevSyncError):
    """A single article detail could not be retrieved."""

    def __init__(self, slug: str, reason: str) -> None:
        super().__init__(f"{slug}: {reason}")
        self.slug = slug
        self.reason = reason
