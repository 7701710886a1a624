"""Concurrent source tree walker.

This module walks an application source tree and classifies every file into
packaging buckets (see classifier.py for the rules).

Design:
- Every entry of a directory is processed as its own asyncio task; a directory
  finishes only after all of its entries (files and subdirectories) finish.
- Each recursive call builds its own GatherResult; children are merged into the
  parent once they complete, so no result is shared between concurrent tasks.
- Blocking filesystem calls (listing, stat, reading HTML) run in worker
  threads via asyncio.to_thread.
- Any OSError aborts the whole walk and propagates unchanged; pending sibling
  tasks are cancelled and awaited. A missing root is not an error and yields an
  empty result.
"""

import asyncio
import logging
import os
import re
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import (
    Any,
    Coroutine,
    List,
    NamedTuple,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

from appgather.core.classifier import Classification, Classifier
from appgather.markup.base import MarkupAnalyzer
from appgather.models.core import GatherResult
from appgather.models.walk import WalkerOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

IgnorePattern = Union[str, re.Pattern[str], None]


class _Entry(NamedTuple):
    name: str
    path: Path
    is_dir: bool
    is_symlink: bool


@dataclass(frozen=True)
class Source:
    """One tree to gather: where it lives, where it goes and how it is keyed."""

    root: Path
    dest: Path
    prefix: Optional[str] = None
    ignore: IgnorePattern = None


def _compile(pattern: IgnorePattern) -> Optional[re.Pattern[str]]:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern) if pattern else None


def _list_dir(path: Path) -> List[_Entry]:
    """List *path* sorted by name, recording entry types without following links."""
    with os.scandir(path) as it:
        entries = [
            _Entry(
                name=entry.name,
                path=Path(entry.path),
                is_dir=entry.is_dir(follow_symlinks=False),
                is_symlink=entry.is_symlink(),
            )
            for entry in it
        ]
    return sorted(entries, key=lambda e: e.name)


def relative_path(source: Path, root: Path, prefix: Optional[str] = None) -> str:
    """Return *source* relative to *root*, "/"-separated.

    Args:
        source: Absolute path of a file below *root*.
        root: The originally requested walk root.
        prefix: Optional replacement for the root itself.

    Example:
        >>> relative_path(Path("/app/Resources/images/a.png"), Path("/app/Resources"))
        'images/a.png'
        >>> relative_path(Path("/app/Resources/a.png"), Path("/app/Resources"), "iphone")
        'iphone/a.png'
    """
    rel = source.relative_to(root).as_posix()
    return f"{prefix}/{rel}" if prefix else rel


async def _run_all(aws: Sequence[Coroutine[Any, Any, T]]) -> List[T]:
    """Run *aws* as sibling tasks and return their results in order.

    The first failure cancels the remaining siblings, waits for them to finish
    and is then re-raised as is rather than wrapped in an ExceptionGroup.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(aw) for aw in aws]
    except BaseExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]


class Walker:
    """Walk a source tree and classify its files into packaging buckets."""

    def __init__(
        self,
        options: Optional[WalkerOptions] = None,
        analyzer: Optional[MarkupAnalyzer] = None,
    ) -> None:
        """Initialize the walker.

        Args:
            options: Icon name, app thinning flag and ignore patterns. Defaults
                to WalkerOptions() (no ignore patterns).
            analyzer: Markup analyzer used for HTML files. Defaults to
                HtmlScriptAnalyzer.
        """
        self.options = options or WalkerOptions()
        self.classifier = Classifier(self.options, analyzer)

    async def walk(
        self,
        root: Path,
        dest: Path,
        ignore: IgnorePattern = None,
        prefix: Optional[str] = None,
    ) -> GatherResult:
        """Walk *root* and classify every file below it.

        Args:
            root: Source directory to walk.
            dest: Destination directory mirrored by the records' dest_path.
            ignore: Pattern of entry names to skip among the direct children of
                *root*. It is not applied below the first level.
            prefix: Replaces the root in recorded relative paths.

        Returns:
            The merged result for the whole tree, or an empty result if *root*
            does not exist.

        Raises:
            OSError: On any filesystem failure while walking.
        """
        root = Path(root).absolute()
        dest = Path(dest).absolute()
        if not await asyncio.to_thread(root.exists):
            logger.debug("Source root %s does not exist, nothing to gather", root)
            return GatherResult()

        result = await self._walk_dir(
            root, dest, root, prefix, _compile(ignore), is_root=True
        )
        logger.debug("Gathered %d file(s) from %s", result.total_files, root)
        return result

    def walk_sync(
        self,
        root: Path,
        dest: Path,
        ignore: IgnorePattern = None,
        prefix: Optional[str] = None,
    ) -> GatherResult:
        """Run walk() to completion in a new event loop."""
        return asyncio.run(self.walk(root, dest, ignore, prefix))

    async def _walk_dir(
        self,
        src: Path,
        dest: Path,
        orig_root: Path,
        prefix: Optional[str],
        ignore: Optional[re.Pattern[str]],
        is_root: bool,
    ) -> GatherResult:
        entries = await asyncio.to_thread(_list_dir, src)
        outcomes = await _run_all(
            [
                self._visit_entry(entry, dest, orig_root, prefix, ignore, is_root)
                for entry in entries
            ]
        )

        own = GatherResult()
        children: List[GatherResult] = []
        for outcome in outcomes:
            if isinstance(outcome, GatherResult):
                children.append(outcome)
            elif isinstance(outcome, Classification):
                own.add(outcome.bucket, outcome.rel_path, outcome.record)
                own.scripts_referenced_by_markup.update(outcome.referenced_scripts)
        if not children:
            return own
        return GatherResult.merge([own, *children])

    async def _visit_entry(
        self,
        entry: _Entry,
        dest: Path,
        orig_root: Path,
        prefix: Optional[str],
        ignore: Optional[re.Pattern[str]],
        is_root: bool,
    ) -> Union[GatherResult, Classification, None]:
        if ignore is not None and ignore.search(entry.name):
            return None

        to = dest / entry.name
        is_dir = entry.is_dir
        if entry.is_symlink:
            # Follow the link to find out what it really points at.
            st = await asyncio.to_thread(os.stat, entry.path)
            is_dir = stat.S_ISDIR(st.st_mode)

        if is_dir:
            ignore_dirs = self.options.ignore_dirs
            if ignore_dirs is not None and ignore_dirs.search(entry.name):
                logger.debug("Pruning ignored directory %s", entry.path)
                return None
            return await self._walk_dir(
                entry.path, to, orig_root, prefix, None, is_root=False
            )

        return await self._visit_file(entry, to, orig_root, prefix, is_root)

    async def _visit_file(
        self,
        entry: _Entry,
        to: Path,
        orig_root: Path,
        prefix: Optional[str],
        is_root: bool,
    ) -> Optional[Classification]:
        ignore_files = self.options.ignore_files
        if ignore_files is not None and ignore_files.search(entry.name):
            logger.debug("Skipping ignored file %s", entry.path)
            return None

        rel_path = relative_path(entry.path, orig_root, prefix)
        args = (entry.name, entry.path, to, rel_path, is_root)
        if self.classifier.reads_file(entry.name):
            return await asyncio.to_thread(self.classifier.classify, *args)
        return self.classifier.classify(*args)


async def gather_sources(
    walker: Walker,
    sources: Sequence[Source],
    *,
    reclassify: bool = True,
) -> GatherResult:
    """Walk several independently rooted trees and merge them in order.

    Later sources win when two trees produce the same relative path, which lets
    a platform-specific tree overlay a shared one.

    Args:
        walker: Walker to use for every source.
        sources: Trees to gather, lowest priority first.
        reclassify: Move markup-referenced scripts out of js_files after
            merging.

    Returns:
        The merged (and optionally reclassified) result.
    """
    results = await _run_all(
        [walker.walk(s.root, s.dest, s.ignore, s.prefix) for s in sources]
    )
    merged = GatherResult.merge(results)
    if reclassify:
        merged.reclassify_markup_referenced_scripts()
    return merged
