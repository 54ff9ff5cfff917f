from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from robot.api import TestSuite as RobotTestSuite

from TestFilter.shared.types import SelectableTest, selector_name


def top_level_suite_names(root: Any) -> list[str]:
    """Return the suite universe of a Robot Framework suite model.

    The direct children of the root suite are the suites filters refer to;
    a root without children (a single ``.robot`` file) is its own suite.
    """
    if root.suites:
        return list(dict.fromkeys(selector_name(s.name) for s in root.suites))
    return [selector_name(root.name)]


def locate(chain: Sequence[str], root_has_children: bool) -> tuple[str, tuple[str, ...]]:
    """Split a chain of suite names into (suite, group path below it)."""
    if root_has_children and len(chain) > 1:
        return chain[1], tuple(chain[2:])
    return chain[0], tuple(chain[1:])


def to_selectable(
    chain: Sequence[str],
    root_has_children: bool,
    test: Any,
) -> SelectableTest:
    """Describe a ``robot.running.TestCase`` in selector terms."""
    suite, groups = locate(chain, root_has_children)
    source = getattr(test, "source", None)
    return SelectableTest(
        suite=suite,
        path=(*groups, selector_name(test.name)),
        tags=frozenset(selector_name(str(tag)) for tag in test.tags),
        source=str(source) if source else "",
    )


class RobotApiAdapter:
    """ACL: Translates robot.api suite models into selectable tests."""

    def load_suite(self, *suite_paths: Path) -> Any:
        """Build a suite model from .robot files or directories."""
        return RobotTestSuite.from_file_system(*(str(p) for p in suite_paths))

    def suite_names(self, root: Any) -> list[str]:
        return top_level_suite_names(root)

    def collect_tests(self, root: Any) -> list[SelectableTest]:
        """Collect every test in the suite hierarchy, depth first."""
        root_has_children = bool(root.suites)
        tests: list[SelectableTest] = []
        self._collect(root, [], root_has_children, tests)
        return tests

    def _collect(
        self,
        suite: Any,
        chain: list[str],
        root_has_children: bool,
        tests: list[SelectableTest],
    ) -> None:
        chain = [*chain, selector_name(suite.name)]
        for test in suite.tests:
            tests.append(to_selectable(chain, root_has_children, test))
        for child in suite.suites:
            self._collect(child, chain, root_has_children, tests)
