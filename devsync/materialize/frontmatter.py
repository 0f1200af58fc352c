"""Front-matter rendering and parsing for emitted posts."""

from typing import Any, Dict, List, Tuple

from ..ingestion.models import ArticleDetail

DELIMITER = "---"

FRONT_MATTER_KEYS: List[str] = [
    "slug",
    "date",
    "readableDate",
    "title",
    "preview",
    "readingTime",
    "reactionsCount",
    "commentsCount",
    "url",
]


def build_front_matter(detail: ArticleDetail, slug_prefix: str = "/blog/") -> Dict[str, Any]:
    """Map an article onto the front-matter keys, in emission order."""
    return {
        "slug": f"{slug_prefix}{detail.slug}",
        "date": detail.created_at,
        "readableDate": detail.readable_publish_date,
        "title": detail.title,
        "preview": detail.description,
        "readingTime": detail.reading_time_minutes,
        "reactionsCount": detail.public_reactions_count,
        "commentsCount": detail.comments_count,
        "url": detail.url,
    }


def format_value(value: Any) -> str:
    """Coerce a front-matter value to its quoted string form.

    Values are not escaped; None renders as an empty string and whole
    floats drop their fractional part.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = "" if value is None else str(value)
    return f'"{text}"'


def render_front_matter(detail: ArticleDetail, slug_prefix: str = "/blog/") -> str:
    meta = build_front_matter(detail, slug_prefix)
    return "\n".join(f"{key}: {format_value(value)}" for key, value in meta.items())


def render_document(detail: ArticleDetail, slug_prefix: str = "/blog/") -> str:
    """Render the complete markdown document for one article."""
    return (
        f"{DELIMITER}\n"
        f"{render_front_matter(detail, slug_prefix)}\n"
        f"{DELIMITER}\n"
        f"{detail.body_markdown or ''}"
    )


def parse_front_matter(text: str) -> Tuple[Dict[str, str], str]:
    """Split an emitted document into its front-matter mapping and body.

    Each line is read as ``key: "value"``; the value is everything between
    the first and the last double quote. Raises ValueError when the document
    does not open with a delimited front-matter block.
    """
    if not text.startswith(DELIMITER + "\n"):
        raise ValueError("Document does not start with a front-matter delimiter")

    lines = text[len(DELIMITER) + 1:].split("\n")
    meta: Dict[str, str] = {}
    for index, line in enumerate(lines):
        if line == DELIMITER:
            body = "\n".join(lines[index + 1:])
            return meta, body

        key, sep, raw = line.partition(":")
        raw = raw.strip()
        if not sep or len(raw) < 2 or not (raw.startswith('"') and raw.endswith('"')):
            raise ValueError(f"Malformed front-matter line: {line!r}")
        meta[key.strip()] = raw[1:-1]

    raise ValueError("Front-matter block is not closed")
