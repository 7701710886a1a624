"""Shared fixtures for appgather tests."""

from pathlib import Path
from typing import Callable, Iterable

import pytest

from appgather.models.core import FileRecord

TreeFactory = Callable[[Iterable[str]], Path]


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Return a factory creating files (and their parents) below tmp_path/src.

    Paths ending in "/" create empty directories; file contents are empty unless
    the entry contains "=", e.g. "index.html=<script src='app.js'></script>".
    """
    root = tmp_path / "src"
    root.mkdir()

    def factory(entries: Iterable[str]) -> Path:
        for entry in entries:
            rel, _, content = entry.partition("=")
            path = root / rel
            if rel.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return factory


@pytest.fixture
def dest(tmp_path: Path) -> Path:
    """Destination directory (never created; walks only compute paths)."""
    return tmp_path / "build"


RecordFactory = Callable[..., FileRecord]


@pytest.fixture
def make_record() -> RecordFactory:
    """Return a factory building FileRecords with absolute paths.

    make_record("app") -> record for app.js; make_record("README", None) -> no extension.
    """

    def factory(name: str, ext: str | None = "js", base: str = "/src") -> FileRecord:
        filename = f"{name}.{ext}" if ext else name
        return FileRecord(
            name=name,
            extension=ext,
            source_path=Path(base).absolute() / filename,
            dest_path=Path("/build").absolute() / filename,
        )

    return factory
