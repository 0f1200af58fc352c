"""Data models for ingestion.

Only the fields that end up in the emitted files are read from the API
payload; everything else is ignored.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ArticleSummary(BaseModel):
    """Listing entry for one published article."""

    model_config = ConfigDict(extra="ignore")

    slug: str = Field(..., description="Article slug")
    title: str = Field(..., description="Article title")


class ArticleDetail(BaseModel):
    """Full article as returned by the per-slug endpoint."""

    model_config = ConfigDict(extra="ignore")

    slug: str = Field(..., description="Article slug")
    title: str = Field(..., description="Article title")
    description: Optional[str] = Field(None, description="Short preview text")
    created_at: Optional[str] = Field(None, description="Creation timestamp, as sent by the API")
    readable_publish_date: Optional[str] = Field(None, description="Human readable publish date")
    reading_time_minutes: Optional[Union[int, float]] = Field(None, description="Estimated reading time")
    public_reactions_count: Optional[int] = Field(None, description="Public reactions")
    comments_count: Optional[int] = Field(None, description="Comment count")
    url: Optional[str] = Field(None, description="Canonical article URL")
    body_markdown: Optional[str] = Field("", description="Raw markdown body")
