"""Selector-based filtering of candidate tests."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from TestFilter.selection.resolver import SuiteSelection


class _SelectableLike:
    """Structural type hint for tests with a suite, group path and tags."""

    suite: str
    path: tuple[str, ...]
    tags: frozenset[str]


def filter_by_selection(
    tests: Sequence[_SelectableLike],
    selection: SuiteSelection,
) -> list[int]:
    """Return indices of tests that the resolved selection accepts."""
    return [
        i
        for i, test in enumerate(tests)
        if selection.selects(test.suite, test.path, test.tags)
    ]


def suite_names(tests: Sequence[_SelectableLike]) -> list[str]:
    """Return the distinct suite names of ``tests`` in first-seen order."""
    return list(dict.fromkeys(test.suite for test in tests))
