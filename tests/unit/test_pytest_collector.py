"""Tests for TestFilter.pytest.collector."""
from __future__ import annotations

from pathlib import Path

from TestFilter.pytest.collector import (
    collect_selectable,
    collect_tests,
    selectable_from_item,
)
from TestFilter.shared.types import SelectableTest

SAMPLE_SUITE = (
    Path(__file__).resolve().parent.parent / "fixtures" / "sample_pytest_suite"
)


class TestCollectTests:
    def test_returns_items_from_sample_suite(self) -> None:
        items = collect_tests(SAMPLE_SUITE)
        assert len(items) > 0
        for item in items:
            assert hasattr(item, "nodeid")

    def test_collected_count_matches_expected(self) -> None:
        # test_api: 3, test_auth: 4, test_helpers: 1 + 3 parametrize -> 11
        assert len(collect_tests(SAMPLE_SUITE)) == 11


class TestSelectableFromItem:
    def _by_qualified_name(self) -> dict[str, list[SelectableTest]]:
        grouped: dict[str, list[SelectableTest]] = {}
        for item in collect_tests(SAMPLE_SUITE):
            test = selectable_from_item(item)
            grouped.setdefault(test.qualified_name, []).append(test)
        return grouped

    def test_module_is_the_suite(self) -> None:
        tests = collect_selectable(SAMPLE_SUITE)
        assert {t.suite for t in tests} == {"testapi", "testauth", "testhelpers"}

    def test_classes_become_path_elements(self) -> None:
        grouped = self._by_qualified_name()
        assert "testapi.TestUsers.testget" in grouped
        assert grouped["testapi.TestOrders.testlist"][0].tags == frozenset({"slow"})

    def test_markers_become_tags(self) -> None:
        grouped = self._by_qualified_name()
        assert grouped["testauth.testloginvalid"][0].tags == frozenset({"smoke"})
        assert grouped["testauth.testlogout"][0].tags == frozenset()

    def test_parametrize_variants_share_a_path(self) -> None:
        grouped = self._by_qualified_name()
        variants = grouped["testhelpers.testparseconfig"]
        assert len(variants) == 3
        assert all(v.tags == frozenset({"smoke"}) for v in variants)
        assert len({v.source for v in variants}) == 3
