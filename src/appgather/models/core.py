"""Core domain models for appgather.

This module defines the data structures produced by a source tree walk.
- FileRecord describes one classified file (names, paths, pattern captures).
- Bucket enumerates the packaging buckets a file can be assigned to.
- GatherResult aggregates classified files per bucket, keyed by relative path,
  and supports merging and the markup-referenced script reclassification pass.

Design:
- Relative paths always use "/" separators so that keys are stable across
  platforms and can be compared with script paths found in markup.
- Merge is last-write-wins on colliding relative paths. Results produced by
  independently rooted walks (e.g. overlays) are merged in caller order.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Self, Set, Tuple

from pydantic import BaseModel, Field, model_validator


class Bucket(str, Enum):
    """Packaging bucket a file is classified into.

    Values are the attribute names of the matching GatherResult mapping.
    """

    APP_ICONS = "app_icons"
    CSS_FILES = "css_files"
    JS_FILES = "js_files"
    LAUNCH_IMAGES = "launch_images"
    LAUNCH_LOGOS = "launch_logos"
    IMAGE_ASSETS = "image_assets"
    RESOURCES_TO_COPY = "resources_to_copy"


class FileRecord(BaseModel):
    """A single file discovered and classified during a walk."""

    name: str
    """Base filename without its trailing extension."""

    extension: Optional[str] = None
    """Lowercase extension, or None when the filename has none."""

    source_path: Path
    """Absolute path of the origin file."""

    dest_path: Path
    """Absolute path the file is intended to be packaged to."""

    tag: Optional[str] = None
    """Suffix captured by the app icon pattern (e.g. "-60@2x")."""

    scale: Optional[str] = None
    """Scale captured by the launch logo pattern ("2" or "3")."""

    device: Optional[str] = None
    """Device captured by the launch logo pattern ("iphone" or "ipad")."""

    @model_validator(mode="after")
    def validate_paths(self: Self) -> Self:
        """Ensure source and destination paths are absolute.

        Raises:
            ValueError: If either path is relative.
        """
        for path in (self.source_path, self.dest_path):
            if not path.is_absolute():
                raise ValueError(f"Path must be absolute: {path}")
        return self


class GatherResult(BaseModel):
    """Aggregate of a walk (or of one subtree of a walk).

    One mapping per bucket from relative path to FileRecord, plus the set of
    relative script paths referenced directly by markup files.
    """

    app_icons: Dict[str, FileRecord] = Field(default_factory=dict)
    css_files: Dict[str, FileRecord] = Field(default_factory=dict)
    js_files: Dict[str, FileRecord] = Field(default_factory=dict)
    launch_images: Dict[str, FileRecord] = Field(default_factory=dict)
    launch_logos: Dict[str, FileRecord] = Field(default_factory=dict)
    image_assets: Dict[str, FileRecord] = Field(default_factory=dict)
    resources_to_copy: Dict[str, FileRecord] = Field(default_factory=dict)

    scripts_referenced_by_markup: Set[str] = Field(default_factory=set)
    """Relative paths of scripts referenced by markup, whatever bucket holds them."""

    def bucket(self: Self, bucket: Bucket) -> Dict[str, FileRecord]:
        """Return the mapping backing *bucket*."""
        return getattr(self, bucket.value)

    def buckets(self: Self) -> Iterator[Tuple[Bucket, Dict[str, FileRecord]]]:
        """Iterate over (bucket, mapping) pairs in declaration order."""
        for bucket in Bucket:
            yield bucket, self.bucket(bucket)

    def add(self: Self, bucket: Bucket, rel_path: str, record: FileRecord) -> None:
        """Record *record* under *rel_path* in *bucket*."""
        self.bucket(bucket)[rel_path] = record

    def bucket_of(self: Self, rel_path: str) -> Optional[Bucket]:
        """Return the bucket currently holding *rel_path*, if any."""
        for bucket, files in self.buckets():
            if rel_path in files:
                return bucket
        return None

    def counts(self: Self) -> Dict[Bucket, int]:
        """Return the number of files per bucket."""
        return {bucket: len(files) for bucket, files in self.buckets()}

    @property
    def total_files(self: Self) -> int:
        """Total number of classified files across all buckets."""
        return sum(len(files) for _, files in self.buckets())

    def is_empty(self: Self) -> bool:
        """Return True when no file was classified and no script referenced."""
        return self.total_files == 0 and not self.scripts_referenced_by_markup

    @classmethod
    def merge(cls, results: Iterable["GatherResult"]) -> "GatherResult":
        """Merge *results* into a new GatherResult.

        Later results overwrite earlier ones when the same relative path
        appears in the same bucket. Referenced script sets are unioned.

        Args:
            results: Results to merge, in priority order (last wins).

        Returns:
            A new GatherResult; the inputs are left untouched.
        """
        merged = cls()
        for result in results:
            for bucket, files in result.buckets():
                if files:
                    merged.bucket(bucket).update(files)
            merged.scripts_referenced_by_markup |= result.scripts_referenced_by_markup
        return merged

    def reclassify_markup_referenced_scripts(self: Self) -> Self:
        """Move scripts referenced directly by markup out of the script pipeline.

        A script embedded by an HTML file must be copied verbatim rather than
        minified or transpiled, so every referenced path found in js_files is
        moved (record unchanged) to resources_to_copy. Referenced paths not in
        js_files are left where they are.

        Returns:
            This result, for chaining.
        """
        for rel_path in sorted(self.scripts_referenced_by_markup):
            record = self.js_files.pop(rel_path, None)
            if record is not None:
                self.resources_to_copy[rel_path] = record
        return self
