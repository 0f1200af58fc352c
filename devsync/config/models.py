"""Configuration models."""

from pydantic import BaseModel, Field, field_validator


class ConfigModel(BaseModel):
    """Main configuration model."""

    username: str = Field(..., description="dev.to author whose articles are synced")
    api_base_url: str = Field("https://dev.to/api", description="Root of the dev.to API")
    output_dir: str = Field("src/pages/posts", description="Existing directory for emitted markdown")
    slug_prefix: str = Field("/blog/", description="Prefix of the slug front-matter value")
    file_prefix: str = Field("dev-to-", description="Prefix of emitted file names")
    max_concurrent: int = Field(5, description="Max concurrent detail requests", ge=1, le=50)
    timeout: float = Field(30.0, description="Per-request timeout in seconds", gt=0)
    user_agent: str = Field("devsync/1.0", description="User-Agent header for API requests")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Reject blank usernames."""
        v = v.strip()
        if not v:
            raise ValueError("username must not be empty")
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
