"""Write fetched articles to markdown files."""

from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console
from rich.markup import escape

from ..errors import UnsafeSlugError
from ..ingestion.models import ArticleDetail
from .frontmatter import render_document

console = Console()


class MarkdownWriter:
    """Emit one markdown file per article into an existing directory."""

    def __init__(
        self,
        out_dir: Path,
        slug_prefix: str = "/blog/",
        file_prefix: str = "dev-to-",
    ) -> None:
        self.out_dir = out_dir
        self.slug_prefix = slug_prefix
        self.file_prefix = file_prefix
        self.rejected: List[str] = []

    def path_for(self, slug: str) -> Path:
        """Output path for a slug; raises UnsafeSlugError if it leaves out_dir."""
        path = self.out_dir / f"{self.file_prefix}{slug}.md"
        if "\x00" in slug or path.resolve().parent != self.out_dir.resolve():
            raise UnsafeSlugError(f"Slug {slug!r} does not map to a file in {self.out_dir}")
        return path

    def write(self, detail: ArticleDetail) -> Path:
        """Create or truncate the file for ``detail``. Errors propagate."""
        path = self.path_for(detail.slug)
        content = render_document(detail, self.slug_prefix)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        return path

    def write_all(self, details: Iterable[Optional[ArticleDetail]]) -> List[Path]:
        """Write every present article, skipping failed (None) positions.

        Articles with an unsafe slug are logged and recorded in ``rejected``.
        """
        written = []
        self.rejected = []
        for detail in details:
            if detail is None:
                continue
            try:
                written.append(self.write(detail))
            except UnsafeSlugError as e:
                console.print(f"[yellow]Skipping {escape(detail.slug)}: {escape(str(e))}[/yellow]")
                self.rejected.append(detail.slug)
        return written

    def find_stale_files(self, written: Iterable[Path]) -> List[Path]:
        """Emitted files in the output directory not written by this run."""
        keep = {path.resolve() for path in written}
        return sorted(
            path
            for path in self.out_dir.glob(f"{self.file_prefix}*.md")
            if path.is_file() and path.resolve() not in keep
        )

    def prune(self, written: Iterable[Path]) -> List[Path]:
        """Delete stale emitted files and return their paths."""
        stale = self.find_stale_files(written)
        for path in stale:
            path.unlink()
            console.print(f"[dim]Removed stale post {path.name}[/dim]")
        return stale
