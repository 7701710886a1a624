"""Renderer for CLI output.

This module renders gather results as rich tables:
- A summary table with one row per bucket and its file count.
- Optionally, one table per non-empty bucket listing every relative path with
  its pattern captures (icon tag, launch logo scale/device).
"""

from rich.console import Console
from rich.table import Table

from appgather.models.core import Bucket, FileRecord, GatherResult

BUCKET_TITLES = {
    Bucket.APP_ICONS: "App icons",
    Bucket.CSS_FILES: "Stylesheets",
    Bucket.JS_FILES: "Scripts",
    Bucket.LAUNCH_IMAGES: "Launch images",
    Bucket.LAUNCH_LOGOS: "Launch logos",
    Bucket.IMAGE_ASSETS: "Image assets",
    Bucket.RESOURCES_TO_COPY: "Resources to copy",
}

BUCKET_STYLES = {
    Bucket.APP_ICONS: "magenta",
    Bucket.CSS_FILES: "blue",
    Bucket.JS_FILES: "yellow",
    Bucket.LAUNCH_IMAGES: "magenta",
    Bucket.LAUNCH_LOGOS: "magenta",
    Bucket.IMAGE_ASSETS: "green",
    Bucket.RESOURCES_TO_COPY: "cyan",
}


def _captures(record: FileRecord) -> str:
    parts = []
    if record.tag is not None:
        parts.append(f"tag={record.tag}")
    if record.scale is not None:
        parts.append(f"scale={record.scale}")
    if record.device is not None:
        parts.append(f"device={record.device}")
    return " ".join(parts)


def render_result(
    result: GatherResult,
    console: Console | None = None,
    *,
    show_files: bool = False,
) -> None:
    """Render a gather result as rich tables.

    Args:
        result: The result to render.
        console: Optional Console instance to use for rendering.
        show_files: Also list the files of every non-empty bucket.
    """
    console = console or Console()

    summary = Table(title="Gathered files")
    summary.add_column("Bucket", style="bold")
    summary.add_column("Files", justify="right")
    for bucket, count in result.counts().items():
        summary.add_row(BUCKET_TITLES[bucket], str(count), style=BUCKET_STYLES[bucket])
    console.print(summary)

    if show_files:
        for bucket, files in result.buckets():
            if not files:
                continue
            table = Table(title=BUCKET_TITLES[bucket])
            table.add_column("Path", style=BUCKET_STYLES[bucket])
            table.add_column("Source")
            table.add_column("Captures", style="yellow")
            for rel_path in sorted(files):
                record = files[rel_path]
                table.add_row(rel_path, str(record.source_path), _captures(record))
            console.print(table)

    console.print(
        f"Total: {result.total_files} | "
        f"Scripts referenced by markup: {len(result.scripts_referenced_by_markup)}"
    )
