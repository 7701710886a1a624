"""Tests for the core result models.

Covers FileRecord validation, GatherResult helpers, merge semantics
(union, last-write-wins, script set union) and the markup-referenced script
reclassification pass.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from appgather.models.core import Bucket, FileRecord, GatherResult


class TestFileRecord:
    """Tests for the FileRecord model."""

    def test_relative_source_path_rejected(self) -> None:
        """Records must carry absolute paths."""
        with pytest.raises(ValidationError):
            FileRecord(
                name="app",
                extension="js",
                source_path=Path("relative/app.js"),
                dest_path=Path("/build/app.js").absolute(),
            )

    def test_optional_captures_default_to_none(self, make_record) -> None:
        record = make_record("app")
        assert record.tag is None
        assert record.scale is None
        assert record.device is None


class TestGatherResult:
    """Tests for GatherResult helpers."""

    def test_new_result_is_empty(self) -> None:
        result = GatherResult()
        assert result.is_empty()
        assert result.total_files == 0
        assert all(count == 0 for count in result.counts().values())

    def test_scripts_alone_make_result_non_empty(self) -> None:
        result = GatherResult(scripts_referenced_by_markup={"app.js"})
        assert not result.is_empty()

    def test_bucket_accessor_matches_field(self, make_record) -> None:
        result = GatherResult()
        record = make_record("app")
        result.add(Bucket.JS_FILES, "app.js", record)
        assert result.bucket(Bucket.JS_FILES) is result.js_files
        assert result.js_files["app.js"] is record
        assert result.bucket_of("app.js") == Bucket.JS_FILES
        assert result.bucket_of("missing.js") is None

    def test_counts_and_total(self, make_record) -> None:
        result = GatherResult()
        result.add(Bucket.JS_FILES, "a.js", make_record("a"))
        result.add(Bucket.CSS_FILES, "a.css", make_record("a", "css"))
        result.add(Bucket.RESOURCES_TO_COPY, "README", make_record("README", None))
        counts = result.counts()
        assert counts[Bucket.JS_FILES] == 1
        assert counts[Bucket.CSS_FILES] == 1
        assert counts[Bucket.RESOURCES_TO_COPY] == 1
        assert counts[Bucket.APP_ICONS] == 0
        assert result.total_files == 3


class TestMerge:
    """Tests for GatherResult.merge."""

    def test_merge_of_nothing_is_empty(self) -> None:
        assert GatherResult.merge([]).is_empty()

    def test_disjoint_merge_is_commutative(self, make_record) -> None:
        left = GatherResult()
        left.add(Bucket.JS_FILES, "a.js", make_record("a"))
        left.scripts_referenced_by_markup.add("a.js")
        right = GatherResult()
        right.add(Bucket.CSS_FILES, "b.css", make_record("b", "css"))
        right.add(Bucket.JS_FILES, "lib/b.js", make_record("b"))

        assert GatherResult.merge([left, right]) == GatherResult.merge([right, left])

    def test_collision_takes_later_record(self, make_record) -> None:
        """Merging results sharing a path keeps the later argument's record."""
        first = GatherResult()
        first.add(Bucket.JS_FILES, "app.js", make_record("app", base="/shared"))
        second = GatherResult()
        second.add(Bucket.JS_FILES, "app.js", make_record("app", base="/overlay"))

        merged = GatherResult.merge([first, second])
        assert merged.js_files["app.js"].source_path == Path("/overlay/app.js").absolute()

        reversed_merge = GatherResult.merge([second, first])
        assert (
            reversed_merge.js_files["app.js"].source_path
            == Path("/shared/app.js").absolute()
        )

    def test_script_sets_are_unioned(self) -> None:
        first = GatherResult(scripts_referenced_by_markup={"a.js", "b.js"})
        second = GatherResult(scripts_referenced_by_markup={"b.js", "c.js"})
        merged = GatherResult.merge([first, second])
        assert merged.scripts_referenced_by_markup == {"a.js", "b.js", "c.js"}

    def test_inputs_are_not_mutated(self, make_record) -> None:
        first = GatherResult()
        first.add(Bucket.JS_FILES, "a.js", make_record("a"))
        second = GatherResult()
        second.add(Bucket.JS_FILES, "b.js", make_record("b"))

        GatherResult.merge([first, second])

        assert list(first.js_files) == ["a.js"]
        assert list(second.js_files) == ["b.js"]


class TestReclassifyMarkupReferencedScripts:
    """Tests for moving HTML-referenced scripts to resources_to_copy."""

    def test_referenced_script_moves_with_same_record(self, make_record) -> None:
        record = make_record("foo")
        result = GatherResult()
        result.add(Bucket.JS_FILES, "foo.js", record)
        result.add(Bucket.JS_FILES, "bar.js", make_record("bar"))
        result.scripts_referenced_by_markup.add("foo.js")

        returned = result.reclassify_markup_referenced_scripts()

        assert returned is result
        assert "foo.js" not in result.js_files
        assert result.resources_to_copy["foo.js"] is record
        assert "bar.js" in result.js_files

    def test_paths_outside_js_files_are_untouched(self, make_record) -> None:
        record = make_record("vendor", "txt")
        result = GatherResult()
        result.add(Bucket.RESOURCES_TO_COPY, "vendor.txt", record)
        result.scripts_referenced_by_markup.update({"vendor.txt", "never/gathered.js"})

        result.reclassify_markup_referenced_scripts()

        assert result.resources_to_copy == {"vendor.txt": record}
        assert result.js_files == {}
        assert result.bucket_of("never/gathered.js") is None

    def test_each_path_in_at_most_one_bucket(self, make_record) -> None:
        result = GatherResult()
        result.add(Bucket.JS_FILES, "foo.js", make_record("foo"))
        result.scripts_referenced_by_markup.add("foo.js")
        result.reclassify_markup_referenced_scripts()

        holders = [bucket for bucket, files in result.buckets() if "foo.js" in files]
        assert holders == [Bucket.RESOURCES_TO_COPY]
