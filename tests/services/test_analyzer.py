from __future__ import annotations

import pytest
from result import Err, Ok

from tests.factories import make_chunk
from tests.reporter_mock import MemoryReporter
from vantage.config.schema import BundleBudget
from vantage.models.bundle import Chunk
from vantage.models.enums import TreemapKind
from vantage.services.analyzer import BundleAnalyzer, compile_budget_pattern


@pytest.fixture
def chunks() -> list[Chunk]:
    return [
        make_chunk("main.js", size=100 * 1024, modules=["react", "lodash", "app"]),
        make_chunk("vendor.js", size=200 * 1024, modules=["react-dom", "react"]),
        make_chunk("utils.js", size=50 * 1024, modules=["helper"]),
    ]


@pytest.fixture
def reporter() -> MemoryReporter:
    return MemoryReporter()


@pytest.fixture
def analyzer(reporter: MemoryReporter) -> BundleAnalyzer:
    return BundleAnalyzer(reporter)


class TestAnalyzeChunks:
    def test_two_chunk_census(self, analyzer: BundleAnalyzer) -> None:
        analysis = analyzer.analyze_chunks(
            [
                make_chunk("main.js", size=100 * 1024, modules=["react", "lodash", "app"]),
                make_chunk("vendor.js", size=200 * 1024, modules=["react-dom", "react"]),
            ]
        )
        assert analysis.total_size == 307200
        assert analysis.chunk_count == 2
        assert analysis.total_modules == 4
        assert analysis.duplicate_modules == 1

    def test_totals(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        analysis = analyzer.analyze_chunks(chunks)
        assert analysis.total_size == 350 * 1024
        assert analysis.chunk_count == 3
        assert analysis.total_modules == 5
        assert len(analysis.modules) == 6

    def test_duplicate_flags_in_modules(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        analysis = analyzer.analyze_chunks(chunks)
        react = [m for m in analysis.modules if m.name == "react"]
        assert len(react) == 2
        assert all(m.is_duplicate for m in react)
        assert analysis.duplicate_modules == 1

    def test_dead_code_count(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        # react-dom (vendor.js) and helper (utils.js) are single, non-entry references.
        analysis = analyzer.analyze_chunks(chunks)
        assert analysis.dead_code_modules == 2

    def test_dead_code_flag_not_applied_to_modules(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        analysis = analyzer.analyze_chunks(chunks)
        assert not any(m.is_dead_code for m in analysis.modules)

    def test_largest_modules_use_recorded_sizes(self, analyzer: BundleAnalyzer) -> None:
        chunk = make_chunk("main.js", size=500, modules=["a", "b"], module_sizes={"a": 100, "b": 300})
        analysis = analyzer.analyze_chunks([chunk])
        assert [m.name for m in analysis.largest_modules] == ["b", "a"]

    def test_largest_modules_carry_duplicate_flags(self, analyzer: BundleAnalyzer) -> None:
        chunks = [
            make_chunk("main.js", size=500, modules=["react", "app"], module_sizes={"react": 300, "app": 100}),
            make_chunk("vendor.js", size=400, modules=["react"], module_sizes={"react": 200}),
        ]
        largest = analyzer.analyze_chunks(chunks).largest_modules
        assert [(m.name, m.path, m.is_duplicate) for m in largest] == [
            ("react", "main.js", True),
            ("react", "vendor.js", True),
            ("app", "main.js", False),
        ]

    def test_empty_input(self, analyzer: BundleAnalyzer) -> None:
        analysis = analyzer.analyze_chunks([])
        assert analysis.total_size == 0
        assert analysis.total_modules == 0
        assert analysis.largest_modules == []

    def test_idempotent(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        assert analyzer.analyze_chunks(chunks) == analyzer.analyze_chunks(chunks)


class TestCompareBundles:
    def test_modified_chunk(self, analyzer: BundleAnalyzer) -> None:
        diff = analyzer.compare_bundles([make_chunk("a", size=150)], [make_chunk("a", size=100)])
        assert len(diff.modified_chunks) == 1
        item = diff.modified_chunks[0]
        assert item.chunk.id == "a"
        assert (item.old_size, item.new_size, item.size_delta) == (100, 150, 50)
        assert diff.total_size_change == 50
        assert diff.added_chunks == []
        assert diff.removed_chunks == []

    def test_added_and_removed(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        current = [*chunks, make_chunk("new.js", size=10)]
        previous = [*chunks, make_chunk("old.js", size=10)]
        diff = analyzer.compare_bundles(current, previous)
        assert [c.id for c in diff.added_chunks] == ["new.js"]
        assert [c.id for c in diff.removed_chunks] == ["old.js"]
        assert diff.modified_chunks == []
        assert diff.total_size_change == 0

    def test_unchanged_size_with_other_changes_is_not_modified(self, analyzer: BundleAnalyzer) -> None:
        current = [make_chunk("a", size=10, name="renamed.js")]
        previous = [make_chunk("a", size=10)]
        diff = analyzer.compare_bundles(current, previous)
        assert diff.modified_chunks == []
        assert not diff.has_changes

    def test_order_preserved(self, analyzer: BundleAnalyzer) -> None:
        current = [make_chunk("z", 1), make_chunk("b", 5), make_chunk("a", 7)]
        previous = [make_chunk("y", 1), make_chunk("a", 6), make_chunk("x", 1), make_chunk("b", 4)]
        diff = analyzer.compare_bundles(current, previous)
        assert [c.id for c in diff.added_chunks] == ["z"]
        assert [c.id for c in diff.removed_chunks] == ["y", "x"]
        assert [m.chunk.id for m in diff.modified_chunks] == ["b", "a"]

    def test_symmetry(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        other = [chunks[0], make_chunk("extra.js", 3)]
        forward = analyzer.compare_bundles(chunks, other)
        backward = analyzer.compare_bundles(other, chunks)
        assert [c.id for c in forward.added_chunks] == [c.id for c in backward.removed_chunks]
        assert [c.id for c in forward.removed_chunks] == [c.id for c in backward.added_chunks]

    def test_total_is_raw_sum_difference(self, analyzer: BundleAnalyzer) -> None:
        current = [make_chunk("a", 100), make_chunk("b", 40)]
        previous = [make_chunk("a", 90), make_chunk("c", 70), make_chunk("d", 5)]
        diff = analyzer.compare_bundles(current, previous)
        assert diff.total_size_change == 140 - 165


class TestCheckBudget:
    def test_matching_chunks(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        results = analyzer.check_budget(
            chunks,
            [BundleBudget(path="main.js", max="150kb"), BundleBudget(path="vendor.js", max="100kb")],
        )
        assert len(results) == 2
        assert results[0].exceeds is False
        assert results[0].max_size == 150 * 1024
        assert results[1].exceeds is True
        assert results[1].current_size == 200 * 1024

    def test_pattern_sums_all_matches(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path=r"\.js$", max="1mb")])
        assert result.current_size == 350 * 1024
        assert result.exceeds is False

    def test_unanchored_search(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path="ndo", max="1kb")])
        assert result.current_size == 200 * 1024
        assert result.exceeds is True

    def test_no_match_never_exceeds(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path="nonexistent.js", max="0kb")])
        assert result.current_size == 0
        assert result.max_size == 0
        assert result.exceeds is False

    def test_equal_to_max_passes(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path="utils", max="50kb")])
        assert result.exceeds is False

    def test_invalid_regex_fails_open(
        self, analyzer: BundleAnalyzer, reporter: MemoryReporter, chunks: list[Chunk]
    ) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path="main[", max="1b")])
        assert result.exceeds is False
        assert result.current_size == 0
        assert result.max_size == 1
        assert len(reporter.errors) == 1

    def test_unparseable_max_degrades_to_zero(
        self, analyzer: BundleAnalyzer, reporter: MemoryReporter, chunks: list[Chunk]
    ) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path="main", max="lots")])
        assert result.max_size == 0
        assert result.exceeds is True
        assert len(reporter.warnings) == 1

    def test_overflowing_max_degrades_to_zero(
        self, analyzer: BundleAnalyzer, reporter: MemoryReporter, chunks: list[Chunk]
    ) -> None:
        [result] = analyzer.check_budget(chunks, [BundleBudget(path="main", max="9" * 320 + "gb")])
        assert result.max_size == 0
        assert result.current_size == 100 * 1024
        assert result.exceeds is True
        assert len(reporter.warnings) == 1

    def test_preserves_budget_order(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        budgets = [BundleBudget(path=p, max="1mb") for p in ("utils", "main", "vendor")]
        assert [r.path for r in analyzer.check_budget(chunks, budgets)] == ["utils", "main", "vendor"]


class TestCompileBudgetPattern:
    def test_ok(self) -> None:
        result = compile_budget_pattern(r"pages/.*\.js")
        assert isinstance(result, Ok)
        assert result.unwrap().search("pages/index.js")

    def test_err(self) -> None:
        result = compile_budget_pattern("(unclosed")
        assert isinstance(result, Err)
        assert "(unclosed" in result.unwrap_err()


class TestGenerateTreemapData:
    def test_structure(self, analyzer: BundleAnalyzer, chunks: list[Chunk]) -> None:
        tree = analyzer.generate_treemap_data(chunks)
        assert tree.name == "Bundle"
        assert tree.kind is TreemapKind.BUNDLE
        assert tree.value == 350 * 1024
        assert len(tree.children) == 3
        assert tree.children[0].name == "main.js"
        assert tree.children[0].value == 100 * 1024
        assert tree.children[0].children[0].kind is TreemapKind.FILE

    def test_to_dict(self, analyzer: BundleAnalyzer) -> None:
        payload = analyzer.generate_treemap_data([make_chunk("a.js", 10)]).to_dict()
        assert payload["type"] == "bundle"
        assert payload["children"][0]["children"] == [{"name": "a.js", "value": 0, "type": "file", "children": []}]
