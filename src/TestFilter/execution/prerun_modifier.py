from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from robot.api import SuiteVisitor

from TestFilter.parsing.suite_collector import to_selectable, top_level_suite_names
from TestFilter.pipeline.load import load_filters
from TestFilter.selection.filter import Filter
from TestFilter.selection.resolver import SuiteSelection, resolve_selection
from TestFilter.shared.types import selector_name

logger = logging.getLogger(__name__)


class FilterPreRunModifier(SuiteVisitor):
    """PreRunModifier that keeps only the tests selected by filters.

    Top-level suites are the root suite's children (or the root itself
    when it has none). A test's group path is the chain of suites below
    its top-level suite followed by the test name.

    Usage CLI::

        robot --prerunmodifier TestFilter.execution.prerun_modifier.FilterPreRunModifier:filters.txt tests/

    Usage programmatic:
        suite.visit(FilterPreRunModifier(filters=[parse_filter("-", "Login@smoke")]))
    """

    def __init__(
        self,
        *filter_files: str,
        filters: Sequence[Filter] | None = None,
        prune_empty_suites: bool = True,
    ) -> None:
        loaded = load_filters(filter_files=[Path(f) for f in filter_files])
        self._filters: list[Filter] = [*(filters or ()), *loaded]
        self._prune_empty_suites = prune_empty_suites
        self._selection: SuiteSelection | None = None
        self._chain: list[str] = []
        self._root_has_children = False
        self._stats = {"kept": 0, "removed": 0}

    def start_suite(self, suite) -> None:  # type: ignore[override]
        if not self._chain:
            self._root_has_children = bool(suite.suites)
            self._selection = resolve_selection(
                top_level_suite_names(suite), self._filters,
            )
            self._stats = {"kept": 0, "removed": 0}
        self._chain.append(selector_name(suite.name))

        original = len(suite.tests)
        suite.tests = [t for t in suite.tests if self._is_selected(t)]
        self._stats["kept"] += len(suite.tests)
        self._stats["removed"] += original - len(suite.tests)

    def end_suite(self, suite) -> None:  # type: ignore[override]
        self._chain.pop()
        if self._prune_empty_suites:
            suite.suites = [s for s in suite.suites if s.test_count > 0]
        if not self._chain:
            logger.info(
                "[TEST-FILTER] stage=modify event=complete kept=%d removed=%d",
                self._stats["kept"],
                self._stats["removed"],
            )

    def visit_test(self, test) -> None:  # type: ignore[override]
        pass  # tests are filtered in start_suite

    def _is_selected(self, test) -> bool:
        assert self._selection is not None
        selectable = to_selectable(self._chain, self._root_has_children, test)
        return self._selection.selects(
            selectable.suite, selectable.path, selectable.tags,
        )

    @property
    def selection(self) -> SuiteSelection | None:
        return self._selection

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)
