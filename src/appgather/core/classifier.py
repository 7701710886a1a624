"""File classifier for packaging buckets.

This module assigns every walked file to exactly one bucket.
- Rules are evaluated in order; the first rule returning a bucket wins.
- A rule returning None falls through to the next applicable rule, which is how
  an unmatched root-level PNG ends up in the shared PNG/JPG image rule and how
  HTML files end up copied after their script references are collected.
- Root-only rules (app icon, launch image) are skipped for files below the
  first level of the walked tree.
- Extensions are compared lowercased, so "App.JS" is a script and "Photo.JPG"
  an image; the launch and icon patterns still match the filename as is.

Rule order:
    script -> stylesheet -> app icon* -> launch image* -> launch logo ->
    image asset -> markup -> resource
    (* root level, PNG only)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional, Tuple

from appgather.markup.base import MarkupAnalyzer
from appgather.markup.html import HtmlScriptAnalyzer
from appgather.models.core import Bucket, FileRecord
from appgather.models.walk import WalkerOptions
from appgather.rules.patterns import (
    LAUNCH_IMAGE_PATTERN,
    LAUNCH_LOGO_PATTERN,
    app_icon_pattern,
    is_bundle_path,
    split_filename,
)


@dataclass
class FileContext:
    """Everything a rule may inspect or fill in for one file."""

    filename: str
    extension: Optional[str]
    rel_path: str
    is_root: bool
    record: FileRecord
    referenced_scripts: List[str] = field(default_factory=list)

    @property
    def rel_dir(self) -> str:
        """Relative directory of the file ("" at the root)."""
        return self.rel_path.rpartition("/")[0]


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one file."""

    bucket: Bucket
    rel_path: str
    record: FileRecord
    referenced_scripts: Tuple[str, ...] = ()


RuleAction = Callable[["Classifier", FileContext], Optional[Bucket]]


@dataclass(frozen=True)
class Rule:
    """One ordered classification rule.

    extensions=None makes the rule apply to every file, including files without
    an extension.
    """

    name: str
    extensions: Optional[FrozenSet[str]]
    action: RuleAction
    root_only: bool = False

    def applies_to(self, ctx: FileContext) -> bool:
        if self.root_only and not ctx.is_root:
            return False
        return self.extensions is None or ctx.extension in self.extensions


class Classifier:
    """Assign files to buckets using the ordered rule list."""

    def __init__(
        self, options: WalkerOptions, analyzer: Optional[MarkupAnalyzer] = None
    ) -> None:
        """Initialize the classifier.

        Args:
            options: Walker options (icon name, app thinning flag).
            analyzer: Markup analyzer for HTML files. Defaults to
                HtmlScriptAnalyzer.
        """
        self.options = options
        self.analyzer = analyzer if analyzer is not None else HtmlScriptAnalyzer()
        self.app_icon_regexp = app_icon_pattern(options.app_icon)

    def reads_file(self, filename: str) -> bool:
        """Return True when classifying *filename* performs blocking file I/O."""
        return split_filename(filename)[1] == "html"

    def classify(
        self,
        filename: str,
        source_path: Path,
        dest_path: Path,
        rel_path: str,
        is_root: bool,
    ) -> Classification:
        """Classify a single file.

        Args:
            filename: Bare filename, including extension.
            source_path: Absolute source path.
            dest_path: Absolute destination path.
            rel_path: Path relative to the walked root (or prefix), "/"-separated.
            is_root: Whether the file sits directly under the walked root.

        Returns:
            The chosen bucket, with the record and any referenced scripts.

        Raises:
            OSError: If the markup analyzer cannot read an HTML file.
        """
        name, extension = split_filename(filename)
        ctx = FileContext(
            filename=filename,
            extension=extension,
            rel_path=rel_path,
            is_root=is_root,
            record=FileRecord(
                name=name,
                extension=extension,
                source_path=source_path,
                dest_path=dest_path,
            ),
        )
        for rule in RULES:
            if not rule.applies_to(ctx):
                continue
            bucket = rule.action(self, ctx)
            if bucket is not None:
                return Classification(
                    bucket=bucket,
                    rel_path=rel_path,
                    record=ctx.record,
                    referenced_scripts=tuple(ctx.referenced_scripts),
                )
        # The resource rule matches everything, so this is unreachable.
        raise AssertionError(f"No classification rule matched {rel_path}")

    # ------------------------------------------------------------------
    # Rule actions
    # ------------------------------------------------------------------

    def _script(self, ctx: FileContext) -> Optional[Bucket]:
        return Bucket.JS_FILES

    def _stylesheet(self, ctx: FileContext) -> Optional[Bucket]:
        return Bucket.CSS_FILES

    def _app_icon(self, ctx: FileContext) -> Optional[Bucket]:
        if self.app_icon_regexp is None:
            return None
        m = self.app_icon_regexp.match(ctx.filename)
        if not m:
            return None
        ctx.record.tag = m.group("tag")
        return Bucket.APP_ICONS

    def _launch_image(self, ctx: FileContext) -> Optional[Bucket]:
        if LAUNCH_IMAGE_PATTERN.match(ctx.filename):
            return Bucket.LAUNCH_IMAGES
        return None

    def _launch_logo(self, ctx: FileContext) -> Optional[Bucket]:
        m = LAUNCH_LOGO_PATTERN.match(ctx.filename)
        if not m:
            return None
        ctx.record.scale = m.group("scale")
        ctx.record.device = m.group("device")
        return Bucket.LAUNCH_LOGOS

    def _image_asset(self, ctx: FileContext) -> Optional[Bucket]:
        # Images inside a .bundle are managed by the bundle itself.
        if self.options.use_app_thinning and not is_bundle_path(ctx.rel_path):
            return Bucket.IMAGE_ASSETS
        return Bucket.RESOURCES_TO_COPY

    def _markup(self, ctx: FileContext) -> Optional[Bucket]:
        ctx.referenced_scripts.extend(
            self.analyzer.analyze(ctx.record.source_path, ctx.rel_dir)
        )
        return None

    def _resource(self, ctx: FileContext) -> Optional[Bucket]:
        return Bucket.RESOURCES_TO_COPY


_IMAGES = frozenset({"png", "jpg"})

RULES: Tuple[Rule, ...] = (
    Rule("script", frozenset({"js"}), Classifier._script),
    Rule("stylesheet", frozenset({"css"}), Classifier._stylesheet),
    Rule("app-icon", frozenset({"png"}), Classifier._app_icon, root_only=True),
    Rule("launch-image", frozenset({"png"}), Classifier._launch_image, root_only=True),
    Rule("launch-logo", _IMAGES, Classifier._launch_logo),
    Rule("image-asset", _IMAGES, Classifier._image_asset),
    Rule("markup", frozenset({"html"}), Classifier._markup),
    Rule("resource", None, Classifier._resource),
)
"""Classification rules in evaluation order."""
