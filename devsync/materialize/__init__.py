"""Markdown materialization of fetched articles."""

from .frontmatter import (
    FRONT_MATTER_KEYS,
    build_front_matter,
    parse_front_matter,
    render_document,
    render_front_matter,
)
from .writer import MarkdownWriter

__all__ = [
    "FRONT_MATTER_KEYS",
    "MarkdownWriter",
    "build_front_matter",
    "parse_front_matter",
    "render_document",
    "render_front_matter",
]
